from __future__ import annotations
from typing import Literal
from pydantic import AliasChoices, BaseModel, Field
from leaderboard_api.schemas.base import CamelModel

Role = Literal["student", "admin"]

class Credential(BaseModel):
    role: Role
    subject: str

class SignupRequest(CamelModel):
    # Presence is checked by the service so every missing field gets the same message
    name: str | None = None
    email: str | None = None
    github_username: str | None = None
    year: str | None = None
    password: str | None = None

class SignupResponse(CamelModel):
    message: str
    roll_number: str

class LoginRequest(CamelModel):
    identifier: str | None = Field(default=None, validation_alias=AliasChoices("identifier", "email", "rollNumber"))
    password: str | None = Field(default=None, validation_alias=AliasChoices("password", "pass"))

class LoginResponse(CamelModel):
    token: str
    role: Role
    name: str
    roll_number: str
    github_username: str | None = None
