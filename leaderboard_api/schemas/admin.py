from __future__ import annotations
from typing import Any
from leaderboard_api.schemas.base import CamelModel
from leaderboard_api.schemas.leaderboard import QuizLeaderboardEntry, PrLeaderboardEntry

class StudentPublic(CamelModel):
    id: int
    name: str
    roll_number: str
    email: str
    year: str
    github_username: str
    quiz_score: int
    pr_count: int

class AdminOverview(CamelModel):
    total_registrations: int
    publish_leaderboard: bool
    students: list[StudentPublic]
    quiz_leaderboard: list[QuizLeaderboardEntry]
    pr_leaderboard: list[PrLeaderboardEntry]

class PublishRequest(CamelModel):
    publish: bool

class PublishResponse(CamelModel):
    publish_leaderboard: bool

class ScoreUpdateRequest(CamelModel):
    # Raw values; range and finiteness are checked by the service
    quiz_score: Any = None
    pr_count: Any = None

class ScoreUpdateResponse(CamelModel):
    roll_number: str
    quiz_score: int
    pr_count: int

class DeleteResponse(CamelModel):
    deleted: bool
    roll_number: str
