from __future__ import annotations
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None

def upgrade() -> None:
    op.create_table(
        "participants",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("roll_number", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("year", sa.String(length=3), nullable=False),
        sa.Column("github_username", sa.String(length=64), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
    )
    op.create_index("ix_participants_roll_number", "participants", ["roll_number"], unique=True)
    op.create_index("ix_participants_email", "participants", ["email"], unique=True)

    op.create_table(
        "scores",
        sa.Column("roll_number", sa.String(length=64), sa.ForeignKey("participants.roll_number", ondelete="CASCADE"), primary_key=True, nullable=False),
        sa.Column("quiz_score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("pr_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        sa.CheckConstraint("quiz_score >= 0", name="ck_scores_quiz_score_non_negative"),
        sa.CheckConstraint("pr_count >= 0", name="ck_scores_pr_count_non_negative"),
    )

    op.create_table(
        "contest_state",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("publish_leaderboard", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
    )

def downgrade() -> None:
    op.drop_table("contest_state")
    op.drop_table("scores")
    op.drop_index("ix_participants_email", table_name="participants")
    op.drop_index("ix_participants_roll_number", table_name="participants")
    op.drop_table("participants")
