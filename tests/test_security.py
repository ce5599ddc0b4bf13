import json
import jwt
import pytest
from jwt.utils import base64url_decode, base64url_encode

from leaderboard_api.errors import InvalidCredential, MalformedCredential
from leaderboard_api.security import (
    JWT_ALG, JWT_SECRET, hash_password, issue_credential, validate_credential, verify_password,
)


@pytest.mark.parametrize("role", ["student", "admin"])
def test_credential_carries_role_and_subject(role):
    cred = validate_credential(issue_credential("2021cs001", role))
    assert cred.role == role
    assert cred.subject == "2021cs001"


def test_unknown_role_is_not_issued():
    with pytest.raises(ValueError):
        issue_credential("2021cs001", "superuser")


def test_forged_payload_fails_signature_check():
    header, payload, signature = issue_credential("2021cs001", "student").split(".")
    claims = json.loads(base64url_decode(payload))
    claims["role"] = "admin"
    forged_payload = base64url_encode(json.dumps(claims).encode()).decode()
    with pytest.raises(InvalidCredential):
        validate_credential(f"{header}.{forged_payload}.{signature}")


def test_token_from_another_secret_is_invalid():
    token = jwt.encode({"sub": "x", "role": "admin", "type": "access", "exp": 9999999999}, "another-secret-0123456789abcdef0123", algorithm=JWT_ALG)
    with pytest.raises(InvalidCredential):
        validate_credential(token)


def test_expired_token_is_invalid():
    with pytest.raises(InvalidCredential):
        validate_credential(issue_credential("2021cs001", "student", ttl_min=-5))


@pytest.mark.parametrize("token", ["not-a-token", "a.b", "abc.def.ghi"])
def test_undecodable_token_is_malformed(token):
    with pytest.raises(MalformedCredential):
        validate_credential(token)


@pytest.mark.parametrize("claims", [
    {"sub": "x", "role": "root", "type": "access", "exp": 9999999999},
    {"sub": "x", "role": "admin", "type": "refresh", "exp": 9999999999},
    {"sub": "x", "role": "admin", "type": "access"},
])
def test_signed_token_with_bad_claims_is_invalid(claims):
    token = jwt.encode(claims, JWT_SECRET, algorithm=JWT_ALG)
    with pytest.raises(InvalidCredential):
        validate_credential(token)


def test_password_hash_round_trip():
    hashed = hash_password("supersecret")
    assert hashed != "supersecret"
    assert verify_password("supersecret", hashed)
    assert not verify_password("supersecret!", hashed)
