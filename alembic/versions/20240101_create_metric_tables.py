"""create per-kind metric tables

Revision ID: 20240101_create_metric_tables
Revises:
Create Date: 2024-01-01
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = "20240101_create_metric_tables"
down_revision = None
branch_labels = None
depends_on = None

SLEEP_STAGES = ("awake", "light", "deep", "rem")


def _metric_table(name: str, value_type, *constraints) -> None:
    op.create_table(
        name,
        sa.Column("id", sa.String(25), primary_key=True),
        sa.Column("user_id", sa.Text(), nullable=False),
        sa.Column("provider", sa.String(40), nullable=False, server_default="manual"),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("value", value_type, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        *constraints,
    )
    op.create_index(f"ix_{name}_id", name, ["id"])
    op.create_index(f"ix_{name}_user_id", name, ["user_id"])
    op.create_index(f"ix_{name}_user_time", name, ["user_id", "timestamp"])


def upgrade() -> None:
    sleep_stage_value = postgresql.ENUM(*SLEEP_STAGES, name="sleep_stage_value", create_type=False)
    sleep_stage_value.create(op.get_bind(), checkfirst=True)

    _metric_table(
        "heart_rate",
        sa.Integer(),
        sa.CheckConstraint("value BETWEEN 0 AND 65535", name="ck_heart_rate_value_range"),
    )
    _metric_table("weight", sa.Float(precision=53))
    _metric_table("hydration", sa.Float(precision=53))
    _metric_table("vo2_max", sa.Float(precision=53))
    _metric_table("sleep_duration", sa.Integer())
    _metric_table("sleep_stage", sleep_stage_value)


def downgrade() -> None:
    for name in ("sleep_stage", "sleep_duration", "vo2_max", "hydration", "weight", "heart_rate"):
        op.drop_index(f"ix_{name}_user_time", table_name=name)
        op.drop_index(f"ix_{name}_user_id", table_name=name)
        op.drop_index(f"ix_{name}_id", table_name=name)
        op.drop_table(name)
    postgresql.ENUM(name="sleep_stage_value").drop(op.get_bind(), checkfirst=True)
