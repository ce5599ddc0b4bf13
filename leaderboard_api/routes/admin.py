from __future__ import annotations
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from leaderboard_api.auth_deps import admin_payload, require_admin
from leaderboard_api.db import get_session
from leaderboard_api.schemas.admin import (
    AdminOverview, PublishRequest, PublishResponse, ScoreUpdateRequest, ScoreUpdateResponse, DeleteResponse,
)
from leaderboard_api.services.contest import admin_overview, set_publish_state, update_scores, delete_participant

# Role check runs as a router dependency, ahead of any store access; bodies come through admin_payload
router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])

@router.get("/overview", response_model=AdminOverview)
async def overview(year: str | None = Query(None), session: AsyncSession = Depends(get_session)):
    return await admin_overview(session, year=year)

@router.post("/publish-leaderboard", response_model=PublishResponse)
async def publish_leaderboard(
    payload: PublishRequest = Depends(admin_payload(PublishRequest)), session: AsyncSession = Depends(get_session)):
    flag = await set_publish_state(session, payload.publish)
    return PublishResponse(publish_leaderboard=flag)

@router.put("/participant/{roll_number}", response_model=ScoreUpdateResponse)
async def update_participant(
    roll_number: str,
    payload: ScoreUpdateRequest = Depends(admin_payload(ScoreUpdateRequest)),
    session: AsyncSession = Depends(get_session)):
    record = await update_scores(session, roll_number, **payload.model_dump(exclude_unset=True))
    return ScoreUpdateResponse(roll_number=record.roll_number, quiz_score=record.quiz_score, pr_count=record.pr_count)

@router.delete("/participant/{roll_number}", response_model=DeleteResponse)
async def remove_participant(roll_number: str, session: AsyncSession = Depends(get_session)):
    roll = await delete_participant(session, roll_number)
    return DeleteResponse(deleted=True, roll_number=roll)
