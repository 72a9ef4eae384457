"""
TravelMap Backend - TravelRoute SQLAlchemy Model
=================================================

What:  ORM model for the `travelroute` table: a straight segment between two
       labelled places, stored as a two-point LINESTRING in SRID 4326.

`start` and `end` are free-text labels, not foreign keys into `travelpoint`;
a route survives the deletion of the points it was drawn between.
"""

from geoalchemy2 import Geometry
from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.travel_point import SRID


class TravelRoute(Base):
    __tablename__ = "travelroute"

    gid: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    start: Mapped[str] = mapped_column(Text, nullable=False)
    # "end" is a reserved word in SQL; SQLAlchemy quotes it when emitting DDL/DML
    end: Mapped[str] = mapped_column("end", Text, nullable=False)
    geom = mapped_column(
        Geometry(geometry_type="LINESTRING", srid=SRID, spatial_index=True),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<TravelRoute(gid={self.gid}, start='{self.start}', end='{self.end}')>"
