from __future__ import annotations
import math
import secrets
from typing import Any

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from leaderboard_api.config import settings
from leaderboard_api.db import unit_of_work
from leaderboard_api.errors import DuplicateIdentity, InvalidCredentials, NotFound, ValidationError
from leaderboard_api.models.participant import Participant, YEARS
from leaderboard_api.models.score import ScoreRecord
from leaderboard_api.schemas.admin import AdminOverview, StudentPublic
from leaderboard_api.schemas.auth import Credential, LoginResponse
from leaderboard_api.schemas.leaderboard import (
    ParticipantProfile, PrLeaderboardEntry, PublicLeaderboard, QuizLeaderboardEntry,
)
from leaderboard_api.security import dummy_verify, hash_password, issue_credential, verify_password
from leaderboard_api.services.identity_store import IdentityStore, derive_roll_number
from leaderboard_api.services.publish_gate import PublishGate
from leaderboard_api.services.ranking import compute_pr_leaderboard, compute_quiz_leaderboard, pr_status
from leaderboard_api.services.score_ledger import ScoreLedger

log = structlog.get_logger()

UNSET: Any = object()
MAX_METRIC = 2**31 - 1

# ---------- writes ----------

def _blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


async def register(
    session: AsyncSession,
    *,
    name: str | None,
    email: str | None,
    github_username: str | None,
    year: str | None,
    password: str | None,
) -> Participant:
    """Create a participant and its zeroed score record in one transaction."""
    if any(_blank(v) for v in (name, email, github_username, year)) or not password:
        raise ValidationError("Name, email, GitHub username, year, and password are required.")
    year = year.strip()
    if year not in YEARS:
        raise ValidationError(f"Year must be one of {', '.join(YEARS)}.")
    roll_number = derive_roll_number(email)
    github = github_username.strip().removeprefix("@")
    if not github:
        raise ValidationError("GitHub username is required.")

    participant = Participant(
        roll_number=roll_number,
        name=name.strip(),
        email=email.strip().lower(),
        year=year,
        github_username=github,
        password_hash=hash_password(password),
    )
    identities, ledger = IdentityStore(session), ScoreLedger(session)
    try:
        async with unit_of_work(session):
            await identities.create(participant)
            await ledger.open(roll_number)
    except IntegrityError:
        # lost a race with a concurrent signup for the same email/roll number
        raise DuplicateIdentity()
    log.info("participant_registered", roll_number=roll_number, year=year)
    return participant


async def authenticate(session: AsyncSession, identifier: str | None, password: str | None) -> LoginResponse:
    """Exchange a roll number or email plus password for a signed credential."""
    ident = (identifier or "").strip()
    if not ident or not password:
        raise ValidationError("Email/roll number and password are required.")

    if ident == settings.admin_roll_number and secrets.compare_digest(
        password.encode(), settings.admin_password.encode()
    ):
        log.info("login_succeeded", roll_number=ident, role="admin")
        return LoginResponse(
            token=issue_credential(ident, "admin"),
            role="admin",
            name=settings.admin_name,
            roll_number=ident,
        )

    participant = await IdentityStore(session).find_by_identifier(ident)
    if participant is None:
        dummy_verify()
        log.info("login_failed")
        raise InvalidCredentials()
    if not verify_password(password, participant.password_hash):
        log.info("login_failed")
        raise InvalidCredentials()

    log.info("login_succeeded", roll_number=participant.roll_number, role="student")
    return LoginResponse(
        token=issue_credential(participant.roll_number, "student"),
        role="student",
        name=participant.name,
        roll_number=participant.roll_number,
        github_username=participant.github_username,
    )


def _metric(field: str, value: Any) -> int:
    """Finite, non-negative number truncated to an int. Numeric strings are accepted."""
    error = ValidationError(f"{field} must be a non-negative number.")
    if value is None or isinstance(value, bool):
        raise error
    if isinstance(value, int):
        number = value
    else:
        try:
            as_float = float(value)
        except (TypeError, ValueError):
            raise error
        if not math.isfinite(as_float):
            raise error
        number = math.floor(as_float)
    if number < 0:
        raise error
    if number > MAX_METRIC:
        raise ValidationError(f"{field} is too large.")
    return number


async def update_scores(
    session: AsyncSession,
    roll_number: str,
    *,
    quiz_score: Any = UNSET,
    pr_count: Any = UNSET,
) -> ScoreRecord:
    # Validate every supplied field before touching the store
    quiz = _metric("quizScore", quiz_score) if quiz_score is not UNSET else None
    prs = _metric("prCount", pr_count) if pr_count is not UNSET else None

    roll = roll_number.strip().lower()
    if not roll:
        raise ValidationError("Roll number is required.")
    identities, ledger = IdentityStore(session), ScoreLedger(session)
    try:
        async with unit_of_work(session):
            # row locks hold off a concurrent delete until this update commits
            participant = await identities.get(roll, for_update=True)
            if participant is None:
                raise NotFound()
            record = await ledger.set(participant.roll_number, quiz_score=quiz, pr_count=prs)
    except StaleDataError:
        # the row vanished between read and write
        raise NotFound()
    log.info("scores_updated", roll_number=record.roll_number, quiz_score=record.quiz_score, pr_count=record.pr_count)
    return record


async def delete_participant(session: AsyncSession, roll_number: str) -> str:
    roll = roll_number.strip().lower()
    if not roll:
        raise ValidationError("Roll number is required.")
    identities, ledger = IdentityStore(session), ScoreLedger(session)
    async with unit_of_work(session):
        participant = await identities.get(roll, for_update=True)
        if participant is None:
            raise NotFound()
        # score row first: it references the participant
        await ledger.delete(participant.roll_number)
        await identities.delete(participant.roll_number)
    log.info("participant_deleted", roll_number=roll)
    return roll


async def set_publish_state(session: AsyncSession, publish: bool) -> bool:
    async with unit_of_work(session):
        flag = await PublishGate(session).set_published(bool(publish))
    log.info("publish_state_changed", publish_leaderboard=flag)
    return flag

# ---------- reads ----------

async def leaderboards(session: AsyncSession) -> tuple[list[QuizLeaderboardEntry], list[PrLeaderboardEntry]]:
    participants = await IdentityStore(session).list_all()
    scores = await ScoreLedger(session).list_all()
    return compute_quiz_leaderboard(participants, scores), compute_pr_leaderboard(participants, scores)


async def public_leaderboard(session: AsyncSession, credential: Credential | None = None) -> PublicLeaderboard:
    """Leaderboards when published; otherwise only the flag, unless an admin is previewing."""
    published = await PublishGate(session).is_published()
    is_admin = credential is not None and credential.role == "admin"
    if not published and not is_admin:
        return PublicLeaderboard(published=False)
    quiz, prs = await leaderboards(session)
    return PublicLeaderboard(
        published=published,
        preview=True if not published else None,
        quiz_leaderboard=quiz,
        pr_leaderboard=prs,
    )


async def admin_overview(session: AsyncSession, year: str | None = None) -> AdminOverview:
    identities = IdentityStore(session)
    participants = await identities.list_all()
    scores = await ScoreLedger(session).list_all()
    by_roll = {s.roll_number: s for s in scores}

    students = []
    for p in participants:
        if year and p.year != year:
            continue
        s = by_roll.get(p.roll_number)
        students.append(StudentPublic(
            id=p.id,
            name=p.name,
            roll_number=p.roll_number,
            email=p.email,
            year=p.year,
            github_username=p.github_username,
            quiz_score=s.quiz_score if s else 0,
            pr_count=s.pr_count if s else 0,
        ))

    return AdminOverview(
        total_registrations=len(participants),
        publish_leaderboard=await PublishGate(session).is_published(),
        students=students,
        quiz_leaderboard=compute_quiz_leaderboard(participants, scores),
        pr_leaderboard=compute_pr_leaderboard(participants, scores),
    )


async def participant_profile(session: AsyncSession, roll_number: str) -> ParticipantProfile:
    participant = await IdentityStore(session).get(roll_number)
    if participant is None:
        raise NotFound()
    record = await ScoreLedger(session).get(participant.roll_number)
    quiz_score = record.quiz_score if record else 0
    pr_count = record.pr_count if record else 0
    status, qualified = pr_status(pr_count)

    quiz, prs = await leaderboards(session)
    quiz_rank = next((e.rank for e in quiz if e.roll_number == participant.roll_number), None)
    pr_rank = next((e.rank for e in prs if e.roll_number == participant.roll_number), None)
    return ParticipantProfile(
        roll_number=participant.roll_number,
        name=participant.name,
        email=participant.email,
        year=participant.year,
        github_username=participant.github_username,
        quiz_score=quiz_score,
        pr_count=pr_count,
        status=status,
        qualified=qualified,
        quiz_rank=quiz_rank,
        pr_rank=pr_rank,
    )
