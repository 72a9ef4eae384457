"""TravelMap Backend - TeamMember SQLAlchemy Model (the `members` roster table)."""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class TeamMember(Base):
    __tablename__ = "members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    role: Mapped[str] = mapped_column(Text, nullable=False)
    # URL of the member's picture
    avatar: Mapped[str] = mapped_column(Text, nullable=False)
    # URL of the member's personal page
    page_link: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<TeamMember(id={self.id}, name='{self.name}', role='{self.role}')>"
