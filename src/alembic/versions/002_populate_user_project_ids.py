"""Backfill users and projects from existing submissions and link them

Revision ID: 002
Revises: 001
Create Date: 2025-08-18 20:10:05.000000

"""

from collections.abc import Sequence

from alembic import op

revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    # One user per distinct (lower-cased) email, named after its earliest submission
    op.execute(
        """
        INSERT INTO users (full_name, email_address)
        SELECT DISTINCT ON (lower(email_address)) full_name, lower(email_address)
        FROM intake_submissions
        ORDER BY lower(email_address), created_at, id
        ON CONFLICT (email_address) DO NOTHING
        """
    )

    # One project per distinct non-empty project description
    op.execute(
        """
        INSERT INTO projects (name, description)
        SELECT DISTINCT left(project_description, 255), project_description
        FROM intake_submissions
        WHERE project_description IS NOT NULL AND project_description <> ''
        """
    )

    op.execute(
        """
        UPDATE intake_submissions s
        SET user_id = u.id
        FROM users u
        WHERE s.user_id IS NULL AND lower(s.email_address) = u.email_address
        """
    )
    op.execute(
        """
        UPDATE intake_submissions s
        SET project_id = p.id
        FROM projects p
        WHERE s.project_id IS NULL AND s.project_description = p.description
        """
    )


def downgrade() -> None:
    # Backfilled users and projects cannot be told apart from later ones; only unlink
    op.execute("UPDATE intake_submissions SET user_id = NULL, project_id = NULL")
