"""create_users_and_maintenance_requests

Revision ID: 3f1c9a7b2d40
Revises:
Create Date: 2026-10-18 10:12:07.413902

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3f1c9a7b2d40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "users",
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False
        ),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_table(
        "maintenance_requests",
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("property_address", sa.String(), nullable=True),
        sa.Column(
            "category",
            sa.Enum(
                "PLUMBING",
                "ELECTRICAL",
                "HVAC",
                "STRUCTURAL",
                "OTHER",
                name="category",
            ),
            nullable=True,
        ),
        sa.Column("diagnosis", sa.Text(), nullable=False),
        sa.Column(
            "urgency", sa.Enum("LOW", "MEDIUM", "HIGH", name="urgency"), nullable=False
        ),
        sa.Column("estimated_cost", sa.String(), nullable=True),
        sa.Column("contractor_type", sa.String(), nullable=True),
        sa.Column("next_steps", sa.Text(), nullable=True),
        sa.Column(
            "status",
            sa.Enum("ANALYZED", "IN_PROGRESS", "COMPLETED", name="requeststatus"),
            nullable=False,
        ),
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False
        ),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_maintenance_requests_user_created",
        "maintenance_requests",
        ["user_id", "created_at"],
        unique=False,
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(
        "ix_maintenance_requests_user_created", table_name="maintenance_requests"
    )
    op.drop_table("maintenance_requests")
    op.drop_table("users")
    sa.Enum(name="requeststatus").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="urgency").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="category").drop(op.get_bind(), checkfirst=True)
