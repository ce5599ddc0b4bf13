from __future__ import annotations
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from leaderboard_api.auth_deps import optional_credential
from leaderboard_api.db import get_session
from leaderboard_api.schemas.auth import Credential
from leaderboard_api.schemas.leaderboard import PublicLeaderboard
from leaderboard_api.services.contest import public_leaderboard

router = APIRouter(tags=["leaderboard"])

@router.get("/leaderboard", response_model=PublicLeaderboard, response_model_exclude_none=True)
async def get_leaderboard(
    credential: Credential | None = Depends(optional_credential),
    session: AsyncSession = Depends(get_session),
):
    return await public_leaderboard(session, credential)
