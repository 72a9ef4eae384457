"""
TravelMap Backend - TravelPoint SQLAlchemy Model
=================================================

What:  ORM model representing the `travelpoint` table in PostGIS.
How:   Inherits from the shared DeclarativeBase; the location is a GeoAlchemy2
       POINT geometry in WGS84 (SRID 4326). Alembic reads this for migrations.
Who:   Used by TravelPointService for CRUD and spatial queries.

Table Design:
    - gid: serial key assigned by the server, never updated
    - province / name / info: free text supplied by the client
    - owner: optional free text, used for per-owner listings
    - geom: POINT(lon lat); longitude and latitude are read back with ST_X / ST_Y
    - created_at: default ordering key for listings (newest first)
"""

from datetime import datetime
from typing import Optional

from geoalchemy2 import Geometry
from sqlalchemy import Index, Integer, Text, text
from sqlalchemy.dialects.postgresql import TIMESTAMP
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

SRID = 4326


class TravelPoint(Base):
    """
    A geotagged place.

    Lifecycle:
        Inserted by POST /addtravelpoints, replaced in place by
        PUT /updatetravelpoint, removed by DELETE /deletetravelpoint.
        No soft delete and no versioning.
    """

    __tablename__ = "travelpoint"

    gid: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    province: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    info: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("''"))
    owner: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    geom = mapped_column(
        Geometry(geometry_type="POINT", srid=SRID, spatial_index=True),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_travelpoint_created_at", created_at.desc()),
        Index("idx_travelpoint_owner", "owner"),
    )

    def __repr__(self) -> str:
        return f"<TravelPoint(gid={self.gid}, name='{self.name}', owner='{self.owner}')>"
