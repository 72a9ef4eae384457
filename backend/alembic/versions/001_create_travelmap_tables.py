"""Create travelpoint, travelroute and members tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Enables PostGIS and creates the three TravelMap tables.
How:   Geometry columns use GeoAlchemy2 types in SRID 4326; spatial (GiST)
       indexes are created explicitly so the index names are stable.

Rollback: downgrade() drops the tables (all data lost). The postgis
extension is left installed, other schemas may depend on it.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from geoalchemy2 import Geometry

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SRID = 4326


def upgrade() -> None:
    op.execute("CREATE EXTENSION IF NOT EXISTS postgis")

    op.create_table(
        "travelpoint",
        sa.Column("gid", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("province", sa.Text(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("info", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("owner", sa.Text(), nullable=True),
        sa.Column(
            "geom",
            Geometry(geometry_type="POINT", srid=SRID, spatial_index=False),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("gid"),
    )
    op.create_index("idx_travelpoint_geom", "travelpoint", ["geom"], postgresql_using="gist")
    # Listings are always newest first
    op.create_index("idx_travelpoint_created_at", "travelpoint", [sa.text("created_at DESC")])
    op.create_index("idx_travelpoint_owner", "travelpoint", ["owner"])

    op.create_table(
        "travelroute",
        sa.Column("gid", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("start", sa.Text(), nullable=False),
        sa.Column("end", sa.Text(), nullable=False),
        sa.Column(
            "geom",
            Geometry(geometry_type="LINESTRING", srid=SRID, spatial_index=False),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("gid"),
    )
    op.create_index("idx_travelroute_geom", "travelroute", ["geom"], postgresql_using="gist")

    op.create_table(
        "members",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("role", sa.Text(), nullable=False),
        sa.Column("avatar", sa.Text(), nullable=False),
        sa.Column("page_link", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("members")
    op.drop_index("idx_travelroute_geom", table_name="travelroute")
    op.drop_table("travelroute")
    op.drop_index("idx_travelpoint_owner", table_name="travelpoint")
    op.drop_index("idx_travelpoint_created_at", table_name="travelpoint")
    op.drop_index("idx_travelpoint_geom", table_name="travelpoint")
    op.drop_table("travelpoint")
