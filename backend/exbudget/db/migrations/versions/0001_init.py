"""init

Revision ID: 0001_init
Revises: 
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None

def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
    ]

def upgrade():
    op.create_table(
        "exercise",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=256), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("default_duty_days", sa.Integer(), nullable=False, server_default="14"),
        sa.Column("total_budget", sa.Float(), nullable=False, server_default="0"),
        *_timestamps(),
    )

    op.create_table(
        "travel_config",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("exercise_id", sa.Integer(), sa.ForeignKey("exercise.id", ondelete="CASCADE"), nullable=False),
        sa.Column("airfare_per_person", sa.Float(), nullable=False, server_default="400"),
        sa.Column("rental_car_daily_rate", sa.Float(), nullable=False, server_default="50"),
        sa.Column("rental_car_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("rental_car_days", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )
    op.create_index("ix_travel_config_exercise_id", "travel_config", ["exercise_id"], unique=True)

    op.create_table(
        "unit_budget",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("exercise_id", sa.Integer(), sa.ForeignKey("exercise.id", ondelete="CASCADE"), nullable=False),
        sa.Column("unit_code", sa.String(length=32), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("exercise_id", "unit_code", name="uq_unit_budget_exercise_code"),
    )
    op.create_index("ix_unit_budget_exercise_id", "unit_budget", ["exercise_id"])
    op.create_index("ix_unit_budget_unit_code", "unit_budget", ["unit_code"])

    op.create_table(
        "personnel_group",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("unit_budget_id", sa.Integer(), sa.ForeignKey("unit_budget.id", ondelete="CASCADE"), nullable=False),
        sa.Column("role", sa.String(length=16), nullable=False),
        sa.Column("funding_type", sa.String(length=8), nullable=False),
        sa.Column("pax_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("duty_days", sa.Integer(), nullable=True),
        sa.Column("location", sa.String(length=64), nullable=True),
        sa.Column("is_long_tour", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("is_local", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("airfare_per_person", sa.Float(), nullable=True),
        sa.Column("rental_car_count", sa.Integer(), nullable=True),
        sa.Column("rental_car_daily", sa.Float(), nullable=True),
        sa.Column("rental_car_days", sa.Integer(), nullable=True),
        sa.Column("avg_cpd_override", sa.Float(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_personnel_group_unit_budget_id", "personnel_group", ["unit_budget_id"])

    op.create_table(
        "personnel_entry",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("personnel_group_id", sa.Integer(), sa.ForeignKey("personnel_group.id", ondelete="CASCADE"), nullable=False),
        sa.Column("rank_code", sa.String(length=16), nullable=True),
        sa.Column("count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("duty_days", sa.Integer(), nullable=True),
        sa.Column("location", sa.String(length=64), nullable=True),
        sa.Column("is_local", sa.Boolean(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_personnel_entry_personnel_group_id", "personnel_entry", ["personnel_group_id"])

    op.create_table(
        "execution_cost_line",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("unit_budget_id", sa.Integer(), sa.ForeignKey("unit_budget.id", ondelete="CASCADE"), nullable=False),
        sa.Column("funding_type", sa.String(length=8), nullable=False),
        sa.Column("category", sa.String(length=64), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False, server_default="0"),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("overall_equipment_cost", sa.Float(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_execution_cost_line_unit_budget_id", "execution_cost_line", ["unit_budget_id"])

    op.create_table(
        "om_cost_line",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("exercise_id", sa.Integer(), sa.ForeignKey("exercise.id", ondelete="CASCADE"), nullable=False),
        sa.Column("category", sa.String(length=32), nullable=False),
        sa.Column("label", sa.String(length=256), nullable=False, server_default=""),
        sa.Column("amount", sa.Float(), nullable=False, server_default="0"),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_om_cost_line_exercise_id", "om_cost_line", ["exercise_id"])
    op.create_index("ix_om_cost_line_category", "om_cost_line", ["category"])

    op.create_table(
        "rank_cpd_rate",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("rank_code", sa.String(length=16), nullable=False),
        sa.Column("cost_per_day", sa.Float(), nullable=False, server_default="0"),
        sa.Column("effective_date", sa.Date(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_rank_cpd_rate_rank_code", "rank_cpd_rate", ["rank_code"], unique=True)

    op.create_table(
        "per_diem_rate",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("location", sa.String(length=64), nullable=False),
        sa.Column("lodging_rate", sa.Float(), nullable=False, server_default="0"),
        sa.Column("mie_rate", sa.Float(), nullable=False, server_default="0"),
        sa.Column("effective_date", sa.Date(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_per_diem_rate_location", "per_diem_rate", ["location"], unique=True)

    op.create_table(
        "app_config",
        sa.Column("key", sa.String(length=64), primary_key=True),
        sa.Column("value", sa.String(length=256), nullable=False),
    )

def downgrade():
    op.drop_table("app_config")
    op.drop_table("per_diem_rate")
    op.drop_table("rank_cpd_rate")
    op.drop_table("om_cost_line")
    op.drop_table("execution_cost_line")
    op.drop_table("personnel_entry")
    op.drop_table("personnel_group")
    op.drop_table("unit_budget")
    op.drop_table("travel_config")
    op.drop_table("exercise")
