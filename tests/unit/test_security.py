"""Unit tests for password digests, tokens and role guards."""

import hashlib
import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from backend.condo.auth.security import (
    decode_token,
    hash_password,
    issue_token,
    require_owner_or_admin,
    require_role,
    verify_password,
)
from backend.condo.config import Settings
from backend.condo.db.context import RequestContext
from backend.condo.errors import Forbidden, InvalidToken
from backend.condo.models.common import Role

SETTINGS = Settings(jwt_secret="unit-secret", password_salt="salt")


def test_password_digest_matches_salted_sha256() -> None:
    digest = hash_password("admin123", SETTINGS)
    assert digest == hashlib.sha256(b"admin123salt").hexdigest()
    assert verify_password("admin123", digest, SETTINGS)
    assert not verify_password("admin124", digest, SETTINGS)


def test_token_round_trip_claims() -> None:
    user_id = uuid.uuid4()
    token = issue_token(user_id, "101", Role.resident, SETTINGS)

    payload = jwt.decode(token, "unit-secret", algorithms=["HS256"])
    assert payload["userId"] == str(user_id)
    assert payload["apartment"] == "101"
    assert payload["role"] == "resident"
    assert payload["exp"] - payload["iat"] == 24 * 3600

    ctx = decode_token(token, SETTINGS)
    assert ctx == RequestContext(user_id=user_id, apartment="101", role=Role.resident)


def test_expired_token_rejected() -> None:
    issued = datetime.now(timezone.utc) - timedelta(hours=25)
    token = issue_token(uuid.uuid4(), "101", Role.resident, SETTINGS, now=issued)

    with pytest.raises(InvalidToken, match="expired"):
        decode_token(token, SETTINGS)


def test_foreign_signature_rejected() -> None:
    token = issue_token(uuid.uuid4(), "101", Role.admin, Settings(jwt_secret="other"))

    with pytest.raises(InvalidToken):
        decode_token(token, SETTINGS)


def test_incomplete_claims_rejected() -> None:
    token = jwt.encode({"apartment": "101"}, "unit-secret", algorithm="HS256")

    with pytest.raises(InvalidToken):
        decode_token(token, SETTINGS)


def test_require_role() -> None:
    admin = RequestContext(user_id=uuid.uuid4(), apartment="ADM", role=Role.admin)
    doorman = RequestContext(user_id=uuid.uuid4(), apartment="POR", role=Role.doorman)

    assert require_role(admin, [Role.admin]) is admin
    with pytest.raises(Forbidden):
        require_role(doorman, [Role.admin])
    with pytest.raises(Forbidden):
        require_role(None, [Role.admin, Role.doorman])


def test_require_owner_or_admin() -> None:
    owner_id = uuid.uuid4()
    owner = RequestContext(user_id=owner_id, apartment="101", role=Role.resident)
    stranger = RequestContext(user_id=uuid.uuid4(), apartment="202", role=Role.resident)
    admin = RequestContext(user_id=uuid.uuid4(), apartment="ADM", role=Role.admin)

    require_owner_or_admin(owner, owner_id)
    require_owner_or_admin(admin, owner_id)
    with pytest.raises(Forbidden):
        require_owner_or_admin(stranger, owner_id)
