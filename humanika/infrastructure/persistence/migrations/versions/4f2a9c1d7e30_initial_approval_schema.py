"""Initial schema: users, approvable entities, approval records, activity log

Revision ID: 4f2a9c1d7e30
Revises:
Create Date: 2026-10-19 09:12:41.508311

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "4f2a9c1d7e30"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_STATUS_CHECK = (
    "status IN ('DRAFT', 'PENDING', 'APPROVED', 'REJECTED', 'ARCHIVED', "
    "'PUBLISH', 'PRIVATE')"
)

# (table, kind-specific columns)
_APPROVABLE_TABLES: list[tuple[str, list[sa.Column]]] = [
    (
        "work_program",
        [
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("description", sa.Text(), nullable=True),
            sa.Column("schedule", sa.String(), nullable=True),
        ],
    ),
    (
        "event",
        [
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("description", sa.Text(), nullable=True),
            sa.Column("start_date", sa.DateTime(timezone=True), nullable=True),
            sa.Column("end_date", sa.DateTime(timezone=True), nullable=True),
        ],
    ),
    (
        "finance",
        [
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("amount", sa.Numeric(14, 2), nullable=False),
            sa.Column("transaction_date", sa.Date(), nullable=True),
        ],
    ),
    (
        "document",
        [
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("file_url", sa.String(), nullable=True),
        ],
    ),
    (
        "letter",
        [
            sa.Column("subject", sa.String(), nullable=False),
            sa.Column("letter_number", sa.String(), nullable=True),
            sa.Column("content", sa.Text(), nullable=True),
        ],
    ),
    (
        "article",
        [
            sa.Column("title", sa.String(), nullable=False),
            sa.Column("slug", sa.String(), nullable=True, unique=True),
            sa.Column("content", sa.Text(), nullable=True),
        ],
    ),
]


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Create initial schema."""
    op.create_table(
        "app_user",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("hashed_password", sa.String(), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False),
        sa.Column(
            "is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False
        ),
        *_timestamps(),
        sa.CheckConstraint(
            "role IN ('DPO', 'BPH', 'PENGURUS', 'ANGGOTA')", name="ck_app_user_role"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_app_user_email"), "app_user", ["email"], unique=True)

    for table, columns in _APPROVABLE_TABLES:
        op.create_table(
            table,
            sa.Column("id", sa.String(), nullable=False),
            *columns,
            sa.Column("owner_id", sa.String(), nullable=True),
            sa.Column(
                "status",
                sa.String(length=20),
                server_default="DRAFT",
                nullable=False,
            ),
            *_timestamps(),
            sa.CheckConstraint(_STATUS_CHECK, name=f"ck_{table}_status"),
            sa.ForeignKeyConstraint(["owner_id"], ["app_user.id"], ondelete="SET NULL"),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(op.f(f"ix_{table}_owner_id"), table, ["owner_id"], unique=False)
        op.create_index(op.f(f"ix_{table}_status"), table, ["status"], unique=False)
    op.create_index(
        op.f("ix_letter_letter_number"), "letter", ["letter_number"], unique=False
    )

    op.create_table(
        "approval_record",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("entity_type", sa.String(length=20), nullable=False),
        sa.Column("entity_id", sa.String(), nullable=False),
        sa.Column("submitter_id", sa.String(), nullable=True),
        sa.Column("reviewer_id", sa.String(), nullable=True),
        sa.Column(
            "decision",
            sa.String(length=20),
            server_default="PENDING",
            nullable=False,
        ),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("resolved_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "decision IN ('PENDING', 'APPROVED', 'REJECTED', 'REVISION', 'CANCELLED')",
            name="ck_approval_record_decision",
        ),
        sa.CheckConstraint(
            "entity_type IN ('WORK_PROGRAM', 'EVENT', 'FINANCE', 'DOCUMENT', "
            "'LETTER', 'ARTICLE')",
            name="ck_approval_record_entity_type",
        ),
        sa.CheckConstraint(
            "decision NOT IN ('REJECTED', 'REVISION') OR length(trim(note)) > 0",
            name="ck_approval_record_note_required",
        ),
        sa.ForeignKeyConstraint(
            ["submitter_id"], ["app_user.id"], ondelete="SET NULL"
        ),
        sa.ForeignKeyConstraint(["reviewer_id"], ["app_user.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_approval_record_entity",
        "approval_record",
        ["entity_type", "entity_id", "created_at"],
        unique=False,
    )
    op.create_index(
        "uq_approval_record_one_pending",
        "approval_record",
        ["entity_type", "entity_id"],
        unique=True,
        postgresql_where=sa.text("decision = 'PENDING'"),
    )
    op.create_index(
        op.f("ix_approval_record_decision"), "approval_record", ["decision"], unique=False
    )
    op.create_index(
        op.f("ix_approval_record_submitter_id"),
        "approval_record",
        ["submitter_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_approval_record_reviewer_id"),
        "approval_record",
        ["reviewer_id"],
        unique=False,
    )

    op.create_table(
        "activity_log",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=True),
        sa.Column("activity_type", sa.String(length=20), nullable=False),
        sa.Column("entity_type", sa.String(), nullable=False),
        sa.Column("entity_id", sa.String(), nullable=True),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("metadata", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("ip_address", sa.String(), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
        sa.Column("request_id", sa.String(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_activity_log_user_id"), "activity_log", ["user_id"], unique=False
    )
    op.create_index(
        op.f("ix_activity_log_activity_type"),
        "activity_log",
        ["activity_type"],
        unique=False,
    )
    op.create_index(
        "ix_activity_log_entity", "activity_log", ["entity_type", "entity_id"], unique=False
    )
    op.create_index(
        "ix_activity_log_created_at", "activity_log", ["created_at"], unique=False
    )


def downgrade() -> None:
    """Drop initial schema."""
    op.drop_table("activity_log")
    op.drop_index("uq_approval_record_one_pending", table_name="approval_record")
    op.drop_table("approval_record")
    for table, _ in reversed(_APPROVABLE_TABLES):
        op.drop_table(table)
    op.drop_table("app_user")
