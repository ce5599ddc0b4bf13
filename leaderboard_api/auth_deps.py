from __future__ import annotations
from typing import TypeVar
from fastapi import Depends, Header, Request
from pydantic import BaseModel, ValidationError as PydanticValidationError
from leaderboard_api.errors import ContestError, Forbidden, MissingCredential, ValidationError, describe_invalid
from leaderboard_api.schemas.auth import Credential, Role
from leaderboard_api.security import validate_credential

M = TypeVar("M", bound=BaseModel)

async def get_credential(x_auth_token: str | None = Header(None)) -> Credential:
    if not x_auth_token:
        raise MissingCredential()
    return validate_credential(x_auth_token)

async def optional_credential(x_auth_token: str | None = Header(None)) -> Credential | None:
    """Caller identity on public routes; a bad or absent token just means anonymous."""
    if not x_auth_token:
        return None
    try:
        return validate_credential(x_auth_token)
    except ContestError:
        return None

def require_role(role: Role):
    async def dependency(credential: Credential = Depends(get_credential)) -> Credential:
        if credential.role != role:
            raise Forbidden("Admin access required." if role == "admin" else "Student access required.")
        return credential
    return dependency

require_admin = require_role("admin")
require_student = require_role("student")

def admin_payload(model: type[M]):
    """Request body for admin routes, read only once the caller is known to be an admin.

    FastAPI parses declared body parameters before any dependency runs, so
    admin routes take their body through this dependency instead.
    """
    async def dependency(request: Request, _: Credential = Depends(require_admin)) -> M:
        try:
            raw = await request.json()
        except ValueError:
            raise ValidationError("Invalid request body.")
        try:
            return model.model_validate(raw)
        except PydanticValidationError as exc:
            raise ValidationError(describe_invalid(exc.errors()))
    return dependency
