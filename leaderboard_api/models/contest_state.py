from __future__ import annotations
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, Boolean, DateTime, func
from leaderboard_api.db import Base

CONTEST_STATE_ID = 1

class ContestState(Base):
    __tablename__ = "contest_state"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=CONTEST_STATE_ID)  # single row
    publish_leaderboard: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
