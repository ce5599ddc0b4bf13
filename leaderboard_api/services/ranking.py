from __future__ import annotations
from typing import Iterable, Protocol, Sequence

from leaderboard_api.schemas.leaderboard import QuizLeaderboardEntry, PrLeaderboardEntry

PR_QUALIFICATION_THRESHOLD = 5


class Identity(Protocol):
    roll_number: str
    name: str
    github_username: str


class Scores(Protocol):
    roll_number: str
    quiz_score: int
    pr_count: int


def pr_status(pr_count: int) -> tuple[str, bool]:
    return f"{pr_count}/{PR_QUALIFICATION_THRESHOLD} PRs Completed", pr_count >= PR_QUALIFICATION_THRESHOLD


def _joined(identities: Iterable[Identity], scores: Iterable[Scores]) -> list[tuple[Identity, Scores]]:
    by_roll = {p.roll_number: p for p in identities}
    # Score rows without a participant are orphans and never ranked
    return [(by_roll[s.roll_number], s) for s in scores if s.roll_number in by_roll]


def _ranked(rows: list[tuple[Identity, Scores]], metric: str) -> list[tuple[int, Identity, Scores]]:
    # Highest first; equal values fall back to roll number so the order never depends on input order
    ordered = sorted(rows, key=lambda row: (-int(getattr(row[1], metric)), row[0].roll_number))
    return [(i, p, s) for i, (p, s) in enumerate(ordered, start=1)]


def compute_quiz_leaderboard(identities: Sequence[Identity], scores: Sequence[Scores]) -> list[QuizLeaderboardEntry]:
    return [
        QuizLeaderboardEntry(
            rank=rank,
            name=p.name,
            roll_number=p.roll_number,
            github_username=p.github_username,
            score=int(s.quiz_score),
        )
        for rank, p, s in _ranked(_joined(identities, scores), "quiz_score")
    ]


def compute_pr_leaderboard(identities: Sequence[Identity], scores: Sequence[Scores]) -> list[PrLeaderboardEntry]:
    entries = []
    for rank, p, s in _ranked(_joined(identities, scores), "pr_count"):
        status, qualified = pr_status(int(s.pr_count))
        entries.append(PrLeaderboardEntry(
            rank=rank,
            name=p.name,
            roll_number=p.roll_number,
            github_username=p.github_username,
            pr_count=int(s.pr_count),
            status=status,
            qualified=qualified,
        ))
    return entries
