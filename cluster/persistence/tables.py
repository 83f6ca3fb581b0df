"""SQLAlchemy table definitions for Cluster.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    ForeignKey,
    Index,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (mirrored from the identity provider)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("external_id", String(255), nullable=False, unique=True),
    Column(
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
    Column("email", String(254), nullable=True),  # Lowercased primary email
    Column("display_name", String(255), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_users_email", users_table.c.email)

# ============================================================================
# PROJECTS TABLE
# ============================================================================
projects_table = Table(
    "projects",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(25), nullable=False),
    Column("description", Text, nullable=True),
    Column("owner_id", UUID, ForeignKey("users.id"), nullable=False),
    Column(
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
    Column("start_date", Date, nullable=True),
    Column("end_date", Date, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_projects_owner_id", projects_table.c.owner_id)

# ============================================================================
# PROJECT INVESTORS TABLE (investor set, one row per membership)
# ============================================================================
project_investors_table = Table(
    "project_investors",
    metadata,
    Column(
        "project_id",
        UUID,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("project_id", "user_id", name="pk_project_investors"),
)

Index("idx_project_investors_user_id", project_investors_table.c.user_id)

# ============================================================================
# INVITATIONS TABLE
# ============================================================================
invitations_table = Table(
    "invitations",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("token", String(128), nullable=False, unique=True),  # Hex, 64+ chars
    Column("project_id", UUID, ForeignKey("projects.id"), nullable=False),
    Column("inviter_id", UUID, nullable=False),
    Column("invitee_email", String(254), nullable=False),
    Column(
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
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column("accepted_at", TIMESTAMP(timezone=True), nullable=True),
    Column("accepted_by_user_id", UUID, nullable=True),
    Column("message", String(500), nullable=True),
    Column("email_send_failed", Boolean, nullable=False, server_default="false"),
    Column("last_email_error", Text, nullable=True),
    Column("last_email_error_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_invitations_project_id", invitations_table.c.project_id)

# Sweep scans pending rows by expiry
Index(
    "idx_invitations_pending_expires_at",
    invitations_table.c.expires_at,
    postgresql_where=invitations_table.c.status == "pending",
)

# Only one pending invitation per (project, email)
Index(
    "idx_invitations_unique_pending_email",
    invitations_table.c.project_id,
    invitations_table.c.invitee_email,
    unique=True,
    postgresql_where=invitations_table.c.status == "pending",
)

# ============================================================================
# STAGES TABLE
# ============================================================================
stages_table = Table(
    "stages",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("project_id", UUID, ForeignKey("projects.id"), nullable=False),
    Column("owner_id", UUID, nullable=False),
    Column("name", String(10), nullable=False),
    Column("description", String(25), nullable=True),
    Column("is_done", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_stages_project_id", stages_table.c.project_id)

# ============================================================================
# TASKS TABLE
# ============================================================================
tasks_table = Table(
    "tasks",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("stage_id", UUID, ForeignKey("stages.id"), nullable=False),
    Column("owner_id", UUID, nullable=False),
    Column("name", String(100), nullable=False),
    Column("is_done", Boolean, nullable=False, server_default="false"),
    Column("is_edited", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_tasks_stage_id", tasks_table.c.stage_id)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("task_id", UUID, ForeignKey("tasks.id"), nullable=False),
    Column("author_id", UUID, nullable=False),
    Column("author_name", String(255), nullable=False),  # Denormalized from users
    Column("text", String(250), nullable=False),
    Column("is_edited", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_comments_task_id", comments_table.c.task_id)
