from __future__ import annotations
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from leaderboard_api.errors import NotFound
from leaderboard_api.models.score import ScoreRecord


class ScoreLedger:
    """Quiz score and PR count per roll number."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def open(self, roll_number: str) -> ScoreRecord:
        record = ScoreRecord(roll_number=roll_number, quiz_score=0, pr_count=0)
        self.session.add(record)
        await self.session.flush()
        return record

    async def get(self, roll_number: str, *, for_update: bool = False) -> ScoreRecord | None:
        if for_update:
            return await self.session.get(ScoreRecord, roll_number, with_for_update=True, populate_existing=True)
        return await self.session.get(ScoreRecord, roll_number)

    async def set(self, roll_number: str, *, quiz_score: int | None = None, pr_count: int | None = None) -> ScoreRecord:
        record = await self.get(roll_number, for_update=True)
        if record is None:
            # rows are opened only at signup
            raise NotFound()
        if quiz_score is not None:
            record.quiz_score = quiz_score
        if pr_count is not None:
            record.pr_count = pr_count
        await self.session.flush()
        return record

    async def delete(self, roll_number: str) -> None:
        record = await self.get(roll_number)
        if record is not None:
            await self.session.delete(record)
            await self.session.flush()

    async def list_all(self) -> list[ScoreRecord]:
        return list((await self.session.execute(
            select(ScoreRecord).order_by(ScoreRecord.roll_number.asc())
        )).scalars().all())
