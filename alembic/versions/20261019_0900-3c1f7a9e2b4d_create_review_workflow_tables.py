"""Create review workflow tables

Revision ID: 3c1f7a9e2b4d
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "3c1f7a9e2b4d"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "resources",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("category", sa.String(length=50), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=True),
        sa.Column("summary", sa.Text(), nullable=True),
        sa.Column("subjects", postgresql.ARRAY(sa.String()), nullable=True),
        sa.Column("grade_levels", postgresql.ARRAY(sa.String()), nullable=True),
        sa.Column("drive_link", sa.String(length=500), nullable=True),
        sa.Column("status", sa.String(length=30), nullable=False),
        sa.Column("published_url", sa.String(length=500), nullable=True),
        sa.Column("contributor_id", sa.UUID(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_resources")),
        sa.UniqueConstraint("slug", name=op.f("uq_resources_slug")),
    )
    op.create_index(op.f("ix_resources_id"), "resources", ["id"], unique=False)
    op.create_index(op.f("ix_resources_contributor_id"), "resources", ["contributor_id"], unique=False)
    op.create_index("idx_resource_status", "resources", ["status"], unique=False)
    op.create_index("idx_resource_category", "resources", ["category"], unique=False)

    op.create_table(
        "resource_reviews",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("resource_id", sa.UUID(), nullable=False),
        sa.Column("reviewer_id", sa.UUID(), nullable=False),
        sa.Column("reviewer_role_id", sa.UUID(), nullable=True),
        sa.Column("decision", sa.String(length=20), nullable=False),
        sa.Column("comment_summary", sa.Text(), nullable=True),
        sa.Column("reviewed_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(
            ["resource_id"],
            ["resources.id"],
            name=op.f("fk_resource_reviews_resource_id_resources"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_resource_reviews")),
    )
    op.create_index(op.f("ix_resource_reviews_id"), "resource_reviews", ["id"], unique=False)
    op.create_index(
        op.f("ix_resource_reviews_resource_id"), "resource_reviews", ["resource_id"], unique=False
    )
    op.create_index(
        "idx_review_resource_reviewed", "resource_reviews", ["resource_id", "reviewed_at"], unique=False
    )

    op.create_table(
        "resource_status_history",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("resource_id", sa.UUID(), nullable=False),
        sa.Column("old_status", sa.String(length=30), nullable=False),
        sa.Column("new_status", sa.String(length=30), nullable=False),
        sa.Column("changed_by", sa.UUID(), nullable=True),
        sa.Column("changed_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(
            ["resource_id"],
            ["resources.id"],
            name=op.f("fk_resource_status_history_resource_id_resources"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_resource_status_history")),
    )
    op.create_index(
        op.f("ix_resource_status_history_id"), "resource_status_history", ["id"], unique=False
    )
    op.create_index(
        op.f("ix_resource_status_history_resource_id"),
        "resource_status_history",
        ["resource_id"],
        unique=False,
    )
    op.create_index(
        "idx_status_history_resource_changed",
        "resource_status_history",
        ["resource_id", "changed_at"],
        unique=False,
    )

    op.create_table(
        "video_metadata",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("resource_id", sa.UUID(), nullable=False),
        sa.Column("youtube_title", sa.String(length=100), nullable=False),
        sa.Column("youtube_description", sa.Text(), nullable=False),
        sa.Column("tags", postgresql.ARRAY(sa.String()), nullable=True),
        sa.Column("privacy_status", sa.String(length=20), nullable=False),
        sa.Column("made_for_kids", sa.Boolean(), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["resource_id"],
            ["resources.id"],
            name=op.f("fk_video_metadata_resource_id_resources"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_video_metadata")),
    )
    op.create_index(op.f("ix_video_metadata_id"), "video_metadata", ["id"], unique=False)
    op.create_index(
        op.f("ix_video_metadata_resource_id"), "video_metadata", ["resource_id"], unique=True
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_video_metadata_resource_id"), table_name="video_metadata")
    op.drop_index(op.f("ix_video_metadata_id"), table_name="video_metadata")
    op.drop_table("video_metadata")

    op.drop_index("idx_status_history_resource_changed", table_name="resource_status_history")
    op.drop_index(
        op.f("ix_resource_status_history_resource_id"), table_name="resource_status_history"
    )
    op.drop_index(op.f("ix_resource_status_history_id"), table_name="resource_status_history")
    op.drop_table("resource_status_history")

    op.drop_index("idx_review_resource_reviewed", table_name="resource_reviews")
    op.drop_index(op.f("ix_resource_reviews_resource_id"), table_name="resource_reviews")
    op.drop_index(op.f("ix_resource_reviews_id"), table_name="resource_reviews")
    op.drop_table("resource_reviews")

    op.drop_index("idx_resource_category", table_name="resources")
    op.drop_index("idx_resource_status", table_name="resources")
    op.drop_index(op.f("ix_resources_contributor_id"), table_name="resources")
    op.drop_index(op.f("ix_resources_id"), table_name="resources")
    op.drop_table("resources")
