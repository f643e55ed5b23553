# File: /alembic/versions/0001_initial_schema.py | Version: 1.0 | Title: Pages, columns, property values, views, query state
"""initial schema"""

from alembic import op
import sqlalchemy as sa

revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "page",
        sa.Column("id", sa.String(), primary_key=True, nullable=False),
        sa.Column("parent_id", sa.String(), sa.ForeignKey("page.id"), nullable=True),
        sa.Column("page_type", sa.String(length=20), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("icon", sa.String(length=64), nullable=True),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_page_parent_id", "page", ["parent_id"])

    op.create_table(
        "database_column",
        sa.Column("id", sa.String(), primary_key=True, nullable=False),
        sa.Column("database_id", sa.String(), sa.ForeignKey("page.id"), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("property_type", sa.String(length=20), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False),
        sa.Column("width", sa.Integer(), nullable=True),
        sa.Column("options", sa.JSON(), nullable=True),
    )
    op.create_index("ix_database_column_database_id", "database_column", ["database_id"])

    op.create_table(
        "property_value",
        sa.Column("id", sa.String(), primary_key=True, nullable=False),
        sa.Column("page_id", sa.String(), sa.ForeignKey("page.id"), nullable=False),
        sa.Column(
            "column_id", sa.String(), sa.ForeignKey("database_column.id"), nullable=False
        ),
        sa.Column("value", sa.Text(), nullable=True),
        sa.UniqueConstraint("page_id", "column_id", name="uq_property_value_page_column"),
    )
    op.create_index("ix_property_value_page_id", "property_value", ["page_id"])
    op.create_index("ix_property_value_column_id", "property_value", ["column_id"])

    op.create_table(
        "database_view",
        sa.Column("id", sa.String(), primary_key=True, nullable=False),
        sa.Column("database_id", sa.String(), sa.ForeignKey("page.id"), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("view_type", sa.String(length=20), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
    )
    op.create_index("ix_database_view_database_id", "database_view", ["database_id"])
    op.create_index(
        "ix_database_view_database_position", "database_view", ["database_id", "position"]
    )

    op.create_table(
        "database_query_state",
        sa.Column(
            "database_id", sa.String(), sa.ForeignKey("page.id"), primary_key=True, nullable=False
        ),
        sa.Column("filters_json", sa.JSON(), nullable=True),
        sa.Column("sorts_json", sa.JSON(), nullable=True),
        sa.Column("active_view_id", sa.String(), nullable=True),
    )


def downgrade():
    op.drop_table("database_query_state")
    op.drop_index("ix_database_view_database_position", table_name="database_view")
    op.drop_index("ix_database_view_database_id", table_name="database_view")
    op.drop_table("database_view")
    op.drop_index("ix_property_value_column_id", table_name="property_value")
    op.drop_index("ix_property_value_page_id", table_name="property_value")
    op.drop_table("property_value")
    op.drop_index("ix_database_column_database_id", table_name="database_column")
    op.drop_table("database_column")
    op.drop_index("ix_page_parent_id", table_name="page")
    op.drop_table("page")
