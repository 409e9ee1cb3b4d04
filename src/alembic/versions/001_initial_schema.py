"""Initial schema: users, projects, intake_submissions

Revision ID: 001
Revises:
Create Date: 2025-08-18 19:45:43.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
import sqlmodel

from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("full_name", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column("email_address", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column("phone_number", sqlmodel.sql.sqltypes.AutoString(length=20), nullable=True),
        sa.Column("company_name", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email_address", "users", ["email_address"], unique=True)

    op.create_table(
        "projects",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "status",
            sqlmodel.sql.sqltypes.AutoString(length=50),
            nullable=False,
            server_default="planning",
        ),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("buyer_category", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column("financing_plan", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column(
            "interested_in_preferred_lender",
            sa.Boolean(),
            nullable=False,
            server_default=sa.false(),
        ),
        sa.Column("land_status", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column("lot_address", sa.Text(), nullable=True),
        sa.Column(
            "needs_help_finding_land", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.Column("preferred_area_description", sa.Text(), nullable=True),
        sa.Column("build_budget", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column(
            "construction_timeline", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True
        ),
        sa.Column("clickup_task_id", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column("clickup_list_id", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_projects_user_id", "projects", ["user_id"], unique=False)

    # email_address is deliberately not unique: one person may submit several intakes
    op.create_table(
        "intake_submissions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("full_name", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column("email_address", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column("phone_number", sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column("company_name", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column("buyer_category", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column("financing_plan", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column(
            "interested_in_preferred_lender", sa.Boolean(), nullable=True, server_default=sa.false()
        ),
        sa.Column("land_status", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column("lot_address", sa.Text(), nullable=True),
        sa.Column("needs_help_finding_land", sa.Boolean(), nullable=True),
        sa.Column("preferred_area_description", sa.Text(), nullable=True),
        sa.Column("build_budget", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column(
            "construction_timeline", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False
        ),
        sa.Column("project_description", sa.Text(), nullable=True),
        sa.Column(
            "status",
            sqlmodel.sql.sqltypes.AutoString(length=50),
            nullable=False,
            server_default="new",
        ),
        sa.Column("admin_notes", sa.Text(), nullable=True),
        sa.Column(
            "referral_source",
            sqlmodel.sql.sqltypes.AutoString(length=100),
            nullable=False,
            server_default="Ritz-Craft",
        ),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("project_id", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_intake_submissions_email_address", "intake_submissions", ["email_address"]
    )
    op.create_index("ix_intake_submissions_status", "intake_submissions", ["status"])
    op.create_index("ix_intake_submissions_created_at", "intake_submissions", ["created_at"])


def downgrade() -> None:
    op.drop_table("intake_submissions")
    op.drop_table("projects")
    op.drop_index("ix_users_email_address", table_name="users")
    op.drop_table("users")
