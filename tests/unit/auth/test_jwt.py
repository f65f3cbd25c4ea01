from __future__ import annotations

import base64
import json
from datetime import datetime, timedelta, timezone

import pytest

from fleet.auth.identity import Identity
from fleet.auth.jwt import TokenService, TokenSettings, decode_jwt, encode_jwt
from fleet.core.exceptions import AuthenticationError
from fleet.models.enums import UserRole

SECRET = "unit-test-secret-0123456789abcdef"
ISSUED_AT = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def _service(**overrides) -> TokenService:
    values = {"secret": SECRET, "issuer": "fleet-api", "audience": "fleet-api-clients", "ttl": timedelta(hours=1)}
    values.update(overrides)
    return TokenService(TokenSettings(**values))


def _segment(payload: dict) -> str:
    return base64.urlsafe_b64encode(json.dumps(payload).encode("utf-8")).decode("ascii").rstrip("=")


def test_issued_token_has_three_segments_and_claims():
    service = _service()
    issued = service.issue(Identity(subject="admin", name="admin", role=UserRole.ADMIN), now=ISSUED_AT)

    assert issued.token.count(".") == 2
    assert issued.token_type == "Bearer"
    assert issued.expires_in == 3600
    assert issued.expires_at == ISSUED_AT + timedelta(hours=1)

    verified = service.verify(issued.token, now=ISSUED_AT + timedelta(minutes=5))
    assert verified.subject == "admin"
    assert verified.name == "admin"
    assert verified.role is UserRole.ADMIN
    assert verified.token_id == issued.token_id
    assert verified.claims["iss"] == "fleet-api"
    assert verified.claims["aud"] == "fleet-api-clients"


def test_each_token_gets_a_fresh_id():
    service = _service()
    identity = Identity(subject="user", name="user", role=UserRole.CLIENT)
    assert service.issue(identity, now=ISSUED_AT).token_id != service.issue(identity, now=ISSUED_AT).token_id


def test_token_expires_with_zero_skew():
    service = _service()
    token = service.issue(Identity(subject="user", name="user", role=UserRole.CLIENT), now=ISSUED_AT).token

    service.verify(token, now=ISSUED_AT + timedelta(minutes=59, seconds=59))
    with pytest.raises(AuthenticationError, match="expired"):
        service.verify(token, now=ISSUED_AT + timedelta(hours=1))
    with pytest.raises(AuthenticationError, match="expired"):
        service.verify(token, now=ISSUED_AT + timedelta(hours=1, seconds=1))


def test_token_not_yet_valid():
    service = _service()
    token = service.issue(Identity(subject="user", name="user", role=UserRole.CLIENT), now=ISSUED_AT).token
    with pytest.raises(AuthenticationError, match="not yet valid"):
        service.verify(token, now=ISSUED_AT - timedelta(minutes=1))


@pytest.mark.parametrize(
    "overrides, match",
    [
        ({"secret": "another-secret-0123456789abcdefgh"}, "signature"),
        ({"issuer": "someone-else"}, "issuer"),
        ({"audience": "other-clients"}, "audience"),
    ],
)
def test_verification_rejects_mismatched_settings(overrides, match):
    token = _service().issue(Identity(subject="admin", name="admin", role=UserRole.ADMIN), now=ISSUED_AT).token
    with pytest.raises(AuthenticationError, match=match):
        _service(**overrides).verify(token, now=ISSUED_AT)


def test_tampered_payload_is_rejected():
    token = _service().issue(Identity(subject="user", name="user", role=UserRole.CLIENT), now=ISSUED_AT).token
    header, _, signature = token.split(".")
    forged = _segment({"sub": "user", "role": "ADMIN", "exp": 9999999999})
    with pytest.raises(AuthenticationError, match="signature"):
        decode_jwt(f"{header}.{forged}.{signature}", secret=SECRET, now=ISSUED_AT)


def test_unsigned_algorithm_is_rejected():
    token = f"{_segment({'alg': 'none', 'typ': 'JWT'})}.{_segment({'sub': 'admin'})}."
    with pytest.raises(AuthenticationError, match="algorithm"):
        decode_jwt(token, secret=SECRET)


@pytest.mark.parametrize("token", ["", "abc", "a.b", "a.b.c.d", "!!!.???.###"])
def test_malformed_tokens_are_rejected(token):
    with pytest.raises(AuthenticationError):
        decode_jwt(token, secret=SECRET)


def test_missing_role_claim_is_rejected():
    token = encode_jwt(
        {"sub": "admin", "jti": "t-1", "iss": "fleet-api", "aud": "fleet-api-clients"},
        secret=SECRET,
        ttl=timedelta(hours=1),
        now=ISSUED_AT,
    )
    with pytest.raises(AuthenticationError, match="claims"):
        _service().verify(token, now=ISSUED_AT)


def test_empty_secret_cannot_sign():
    with pytest.raises(AuthenticationError):
        encode_jwt({"sub": "admin"}, secret="", ttl=timedelta(minutes=1))


def test_non_ascii_signature_is_rejected():
    token = _service().issue(Identity(subject="admin", name="admin", role=UserRole.ADMIN), now=ISSUED_AT).token
    header, payload, _ = token.split(".")
    with pytest.raises(AuthenticationError, match="signature"):
        decode_jwt(f"{header}.{payload}.éé", secret=SECRET, now=ISSUED_AT)
