from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Any
import jwt
from passlib.context import CryptContext
from leaderboard_api.config import settings
from leaderboard_api.errors import InvalidCredential, MalformedCredential
from leaderboard_api.schemas.auth import Credential

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.bcrypt_rounds)

JWT_SECRET = settings.jwt_secret
JWT_ALG = "HS256"
ROLES = ("student", "admin")

def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)

def dummy_verify() -> None:
    # Same cost as a real check, so an unknown identifier is not faster to reject
    pwd_context.dummy_verify()

def issue_credential(subject: str, role: str, ttl_min: int | None = None) -> str:
    if role not in ROLES:
        raise ValueError(f"unknown role: {role}")
    now = datetime.now(timezone.utc)
    ttl = settings.access_ttl_min if ttl_min is None else ttl_min
    payload = {
        "sub": subject,
        "role": role,
        "type": "access",
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=ttl)).timestamp()),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALG)

def decode_token(token: str) -> dict[str, Any]:
    return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALG], options={"require": ["exp", "sub"]})

def validate_credential(token: str) -> Credential:
    """Decode and verify a bearer token into the caller's role and subject.

    An undecodable token is malformed; a decodable one that fails the
    signature, expiry or claim checks is invalid.
    """
    try:
        data = decode_token(token)
    except (jwt.ExpiredSignatureError, jwt.InvalidSignatureError):
        raise InvalidCredential()
    except jwt.DecodeError:
        raise MalformedCredential()
    except jwt.InvalidTokenError:
        raise InvalidCredential()
    if data.get("type") != "access":
        raise InvalidCredential("Wrong token type.")
    role, subject = data.get("role"), data.get("sub")
    if role not in ROLES or not isinstance(subject, str) or not subject:
        raise InvalidCredential()
    return Credential(role=role, subject=subject)
