from __future__ import annotations
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Integer, DateTime, ForeignKey, CheckConstraint, func
from leaderboard_api.db import Base

class ScoreRecord(Base):
    """
    Mutable contest metrics for one participant.
    Exactly one row per participant: opened at signup, removed with the participant.
    """
    __tablename__ = "scores"

    roll_number: Mapped[str] = mapped_column(
        String(64), ForeignKey("participants.roll_number", ondelete="CASCADE"), primary_key=True
    )
    quiz_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    pr_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    __table_args__ = (
        CheckConstraint("quiz_score >= 0", name="ck_scores_quiz_score_non_negative"),
        CheckConstraint("pr_count >= 0", name="ck_scores_pr_count_non_negative"),
    )
