"""initial_schema

Create the foundational schema for Cluster:
- Users (mirrored from the identity provider)
- Projects and their investor memberships
- Invitations (email-addressed, single-use, expiring)
- Stages, tasks and task comments

Revision ID: 3c41d0e7a2b9
Revises:
Create Date: 2026-10-19 09:12:44.201733

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c41d0e7a2b9"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    ]


def _uuid_pk() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        server_default=sa.text("uuid_generate_v4()"),
        nullable=False,
    )


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE user_role AS ENUM
                ('investor', 'project_owner', 'super_admin', 'team_member');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE project_status AS ENUM
                ('planning', 'active', 'completed', 'on_hold', 'cancelled');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE invitation_status AS ENUM
                ('pending', 'accepted', 'expired', 'cancelled');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        _uuid_pk(),
        sa.Column("external_id", sa.String(255), nullable=False),
        sa.Column(
            "role",
            postgresql.ENUM(
                "investor",
                "project_owner",
                "super_admin",
                "team_member",
                name="user_role",
                create_type=False,
            ),
            nullable=False,
            server_default="project_owner",
        ),
        sa.Column("email", sa.String(254), nullable=True),
        sa.Column("display_name", sa.String(255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("external_id", name="uq_users_external_id"),
    )
    op.create_index("idx_users_email", "users", ["email"])

    # ========================================================================
    # PROJECTS table
    # ========================================================================
    op.create_table(
        "projects",
        _uuid_pk(),
        sa.Column("name", sa.String(25), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("owner_id", sa.UUID(), nullable=False),
        sa.Column(
            "status",
            postgresql.ENUM(
                "planning",
                "active",
                "completed",
                "on_hold",
                "cancelled",
                name="project_status",
                create_type=False,
            ),
            nullable=False,
            server_default="planning",
        ),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "end_date IS NULL OR start_date IS NULL OR end_date >= start_date",
            name="ck_projects_date_range",
        ),
    )
    op.create_index("idx_projects_owner_id", "projects", ["owner_id"])

    # ========================================================================
    # PROJECT_INVESTORS table (investor set)
    # ========================================================================
    op.create_table(
        "project_investors",
        sa.Column("project_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("project_id", "user_id", name="pk_project_investors"),
    )
    op.create_index(
        "idx_project_investors_user_id", "project_investors", ["user_id"]
    )

    # ========================================================================
    # INVITATIONS table
    # ========================================================================
    op.create_table(
        "invitations",
        _uuid_pk(),
        sa.Column("token", sa.String(128), nullable=False),
        sa.Column("project_id", sa.UUID(), nullable=False),
        sa.Column("inviter_id", sa.UUID(), nullable=False),
        sa.Column("invitee_email", sa.String(254), nullable=False),
        sa.Column(
            "status",
            postgresql.ENUM(
                "pending",
                "accepted",
                "expired",
                "cancelled",
                name="invitation_status",
                create_type=False,
            ),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("accepted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("accepted_by_user_id", sa.UUID(), nullable=True),
        sa.Column("message", sa.String(500), nullable=True),
        sa.Column(
            "email_send_failed", sa.Boolean(), nullable=False, server_default="false"
        ),
        sa.Column("last_email_error", sa.Text(), nullable=True),
        sa.Column("last_email_error_at", sa.TIMESTAMP(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("token", name="uq_invitations_token"),
    )
    op.create_index("idx_invitations_project_id", "invitations", ["project_id"])

    # Sweep scans pending rows by expiry
    op.execute("""
        CREATE INDEX idx_invitations_pending_expires_at
        ON invitations(expires_at)
        WHERE status = 'pending'
    """)

    # At most one pending invitation per (project, email)
    op.execute("""
        CREATE UNIQUE INDEX idx_invitations_unique_pending_email
        ON invitations(project_id, invitee_email)
        WHERE status = 'pending'
    """)

    # ========================================================================
    # STAGES table
    # ========================================================================
    op.create_table(
        "stages",
        _uuid_pk(),
        sa.Column("project_id", sa.UUID(), nullable=False),
        sa.Column("owner_id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(10), nullable=False),
        sa.Column("description", sa.String(25), nullable=True),
        sa.Column("is_done", sa.Boolean(), nullable=False, server_default="false"),
        *_timestamps(),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_stages_project_id", "stages", ["project_id"])

    # ========================================================================
    # TASKS table
    # ========================================================================
    op.create_table(
        "tasks",
        _uuid_pk(),
        sa.Column("stage_id", sa.UUID(), nullable=False),
        sa.Column("owner_id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("is_done", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_edited", sa.Boolean(), nullable=False, server_default="false"),
        *_timestamps(),
        sa.ForeignKeyConstraint(["stage_id"], ["stages.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_tasks_stage_id", "tasks", ["stage_id"])

    # ========================================================================
    # COMMENTS table
    # ========================================================================
    op.create_table(
        "comments",
        _uuid_pk(),
        sa.Column("task_id", sa.UUID(), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("author_name", sa.String(255), nullable=False),
        sa.Column("text", sa.String(250), nullable=False),
        sa.Column("is_edited", sa.Boolean(), nullable=False, server_default="false"),
        *_timestamps(),
        sa.ForeignKeyConstraint(["task_id"], ["tasks.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_comments_task_id", "comments", ["task_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("comments")
    op.drop_table("tasks")
    op.drop_table("stages")
    op.execute("DROP INDEX IF EXISTS idx_invitations_unique_pending_email")
    op.execute("DROP INDEX IF EXISTS idx_invitations_pending_expires_at")
    op.drop_table("invitations")
    op.drop_table("project_investors")
    op.drop_table("projects")
    op.drop_table("users")
    op.execute("DROP TYPE IF EXISTS invitation_status")
    op.execute("DROP TYPE IF EXISTS project_status")
    op.execute("DROP TYPE IF EXISTS user_role")
