from __future__ import annotations
import re
from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from leaderboard_api.config import settings
from leaderboard_api.errors import DuplicateIdentity, InvalidIdentity, NotFound
from leaderboard_api.models.participant import Participant

ROLL_NUMBER_RE = re.compile(r"^[A-Za-z0-9_.+-]+$")


def derive_roll_number(email: str, domain: str | None = None) -> str:
    """Roll number = local part of a university email address."""
    suffix = "@" + (domain or settings.university_email_domain).lower()
    email_norm = email.strip().lower()
    if not email_norm.endswith(suffix):
        raise InvalidIdentity(f"Please use your university email address ({suffix}).")
    roll = email_norm[: -len(suffix)]
    if not roll or not ROLL_NUMBER_RE.match(roll):
        raise InvalidIdentity()
    return roll


class IdentityStore:
    """Participant records keyed by roll number. Writes are flushed, never committed here."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, participant: Participant) -> Participant:
        clash = await self.session.scalar(
            select(Participant.id).where(
                or_(
                    func.lower(Participant.roll_number) == participant.roll_number.lower(),
                    func.lower(Participant.email) == participant.email.lower(),
                )
            )
        )
        if clash is not None:
            raise DuplicateIdentity()
        self.session.add(participant)
        await self.session.flush()
        return participant

    async def get(self, roll_number: str, *, for_update: bool = False) -> Participant | None:
        stmt = select(Participant).where(func.lower(Participant.roll_number) == roll_number.strip().lower())
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        return await self.session.scalar(stmt)

    async def find_by_identifier(self, identifier: str) -> Participant | None:
        ident = identifier.strip().lower()
        if not ident:
            return None
        return await self.session.scalar(
            select(Participant).where(
                or_(func.lower(Participant.roll_number) == ident, func.lower(Participant.email) == ident)
            )
        )

    async def delete(self, roll_number: str) -> None:
        participant = await self.get(roll_number)
        if participant is None:
            raise NotFound()
        await self.session.delete(participant)
        await self.session.flush()

    async def list_all(self) -> list[Participant]:
        return list((await self.session.execute(
            select(Participant).order_by(Participant.id.asc())
        )).scalars().all())

    async def count(self) -> int:
        return int(await self.session.scalar(select(func.count()).select_from(Participant)) or 0)
