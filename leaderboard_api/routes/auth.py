from __future__ import annotations
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from leaderboard_api.auth_deps import require_student
from leaderboard_api.db import get_session
from leaderboard_api.schemas.auth import Credential, SignupRequest, SignupResponse, LoginRequest, LoginResponse
from leaderboard_api.schemas.leaderboard import ParticipantProfile
from leaderboard_api.services.contest import register, authenticate, participant_profile

router = APIRouter(tags=["auth"])

@router.post("/signup", status_code=201, response_model=SignupResponse)
async def signup(payload: SignupRequest, session: AsyncSession = Depends(get_session)):
    participant = await register(
        session,
        name=payload.name,
        email=payload.email,
        github_username=payload.github_username,
        year=payload.year,
        password=payload.password,
    )
    return SignupResponse(message="Account created successfully.", roll_number=participant.roll_number)

@router.post("/login", response_model=LoginResponse)
async def login(payload: LoginRequest, session: AsyncSession = Depends(get_session)):
    return await authenticate(session, payload.identifier, payload.password)

@router.get("/me", response_model=ParticipantProfile)
async def me(credential: Credential = Depends(require_student), session: AsyncSession = Depends(get_session)):
    return await participant_profile(session, credential.subject)
