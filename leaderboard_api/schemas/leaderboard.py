from __future__ import annotations
from leaderboard_api.schemas.base import CamelModel

class QuizLeaderboardEntry(CamelModel):
    rank: int
    name: str
    roll_number: str
    github_username: str
    score: int

class PrLeaderboardEntry(CamelModel):
    rank: int
    name: str
    roll_number: str
    github_username: str
    pr_count: int
    status: str
    qualified: bool

class PublicLeaderboard(CamelModel):
    published: bool
    preview: bool | None = None
    quiz_leaderboard: list[QuizLeaderboardEntry] | None = None
    pr_leaderboard: list[PrLeaderboardEntry] | None = None

class ParticipantProfile(CamelModel):
    roll_number: str
    name: str
    email: str
    year: str
    github_username: str
    quiz_score: int
    pr_count: int
    status: str
    qualified: bool
    quiz_rank: int | None = None
    pr_rank: int | None = None
