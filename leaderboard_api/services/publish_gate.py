from __future__ import annotations
from sqlalchemy.ext.asyncio import AsyncSession

from leaderboard_api.config import settings
from leaderboard_api.models.contest_state import ContestState, CONTEST_STATE_ID


class PublishGate:
    """Global flag deciding whether non-admins may see the leaderboard. Always read from the store."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def is_published(self) -> bool:
        state = await self.session.get(ContestState, CONTEST_STATE_ID, populate_existing=True)
        if state is None:
            return settings.publish_leaderboard_default
        return bool(state.publish_leaderboard)

    async def set_published(self, flag: bool) -> bool:
        state = await self.session.get(ContestState, CONTEST_STATE_ID)
        if state is None:
            state = ContestState(id=CONTEST_STATE_ID, publish_leaderboard=flag)
            self.session.add(state)
        else:
            state.publish_leaderboard = flag
        await self.session.flush()
        return bool(state.publish_leaderboard)
