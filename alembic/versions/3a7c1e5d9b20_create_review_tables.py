"""create review tables: projects, deliverables, versions, annotations, timeline comments, approvals

Revision ID: 3a7c1e5d9b20
Revises:
Create Date: 2026-10-12 11:20:41.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3a7c1e5d9b20'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "projects",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("client_id", sa.Uuid(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    )
    op.create_index("ix_projects_client_id", "projects", ["client_id"])

    op.create_table(
        "deliverables",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("project_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(32), nullable=False, server_default="DRAFT"),
        sa.Column("version", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("file_url", sa.Text(), nullable=True),
        sa.Column("thumbnail_url", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], name="fk_deliverables_project", ondelete="CASCADE"),
        sa.CheckConstraint(
            "status IN ('DRAFT', 'IN_REVIEW', 'APPROVED', 'REJECTED')",
            name="ck_deliverables_status",
        ),
        sa.CheckConstraint("version >= 0", name="ck_deliverables_version_non_negative"),
    )
    op.create_index("ix_deliverables_project_id", "deliverables", ["project_id"])

    op.create_table(
        "deliverable_versions",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("deliverable_id", sa.Uuid(), nullable=False),
        sa.Column("version_number", sa.Integer(), nullable=False),
        sa.Column("file_url", sa.Text(), nullable=False),
        sa.Column("thumbnail_url", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_by", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(
            ["deliverable_id"], ["deliverables.id"], name="fk_versions_deliverable", ondelete="CASCADE"
        ),
        # one number per deliverable: concurrent uploads cannot both win
        sa.UniqueConstraint("deliverable_id", "version_number", name="uq_deliverable_versions_number"),
    )
    op.create_index("ix_deliverable_versions_deliverable_id", "deliverable_versions", ["deliverable_id"])

    op.create_table(
        "annotations",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("deliverable_id", sa.Uuid(), nullable=False),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column("color", sa.String(16), nullable=False),
        sa.Column("coordinates", sa.JSON(), nullable=False),
        sa.Column("timestamp", sa.Float(), nullable=False),
        sa.Column("comment", sa.Text(), nullable=False, server_default=""),
        sa.Column("author_id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(
            ["deliverable_id"], ["deliverables.id"], name="fk_annotations_deliverable", ondelete="CASCADE"
        ),
    )
    op.create_index("ix_annotations_deliverable_timestamp", "annotations", ["deliverable_id", "timestamp"])

    op.create_table(
        "timeline_comments",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("deliverable_id", sa.Uuid(), nullable=False),
        sa.Column("parent_id", sa.Uuid(), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("timestamp", sa.Float(), nullable=False),
        sa.Column("author_id", sa.Uuid(), nullable=False),
        sa.Column("author_type", sa.String(16), nullable=False, server_default="USER"),
        sa.Column("resolved", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(
            ["deliverable_id"], ["deliverables.id"], name="fk_timeline_comments_deliverable", ondelete="CASCADE"
        ),
        # no ON DELETE: replies are deleted explicitly before their parent
        sa.ForeignKeyConstraint(["parent_id"], ["timeline_comments.id"], name="fk_timeline_comments_parent"),
        sa.CheckConstraint("author_type IN ('USER', 'CLIENT')", name="ck_timeline_comments_author_type"),
    )
    op.create_index(
        "ix_timeline_comments_deliverable_timestamp", "timeline_comments", ["deliverable_id", "timestamp"]
    )
    op.create_index("ix_timeline_comments_parent", "timeline_comments", ["parent_id"])

    op.create_table(
        "approvals",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("deliverable_id", sa.Uuid(), nullable=False),
        sa.Column("version_id", sa.Uuid(), nullable=True),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("notes", sa.Text(), nullable=False, server_default=""),
        sa.Column("approver_id", sa.Uuid(), nullable=False),
        sa.Column("approver_type", sa.String(16), nullable=False, server_default="USER"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(
            ["deliverable_id"], ["deliverables.id"], name="fk_approvals_deliverable", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["version_id"], ["deliverable_versions.id"], name="fk_approvals_version", ondelete="SET NULL"
        ),
        sa.CheckConstraint("status IN ('APPROVED', 'CHANGES_REQUESTED')", name="ck_approvals_status"),
        sa.CheckConstraint("approver_type IN ('USER', 'CLIENT')", name="ck_approvals_approver_type"),
    )
    op.create_index("ix_approvals_deliverable_time", "approvals", ["deliverable_id", "created_at"])


def downgrade() -> None:
    op.drop_index("ix_approvals_deliverable_time", table_name="approvals")
    op.drop_table("approvals")

    op.drop_index("ix_timeline_comments_parent", table_name="timeline_comments")
    op.drop_index("ix_timeline_comments_deliverable_timestamp", table_name="timeline_comments")
    op.drop_table("timeline_comments")

    op.drop_index("ix_annotations_deliverable_timestamp", table_name="annotations")
    op.drop_table("annotations")

    op.drop_index("ix_deliverable_versions_deliverable_id", table_name="deliverable_versions")
    op.drop_table("deliverable_versions")

    op.drop_index("ix_deliverables_project_id", table_name="deliverables")
    op.drop_table("deliverables")

    op.drop_index("ix_projects_client_id", table_name="projects")
    op.drop_table("projects")
