"""JWT token utilities using HS256 signing."""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from fleet.auth.identity import Identity
from fleet.core.config import Config
from fleet.core.exceptions import AuthenticationError
from fleet.models.enums import UserRole

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
TOKEN_TYPE = "Bearer"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _b64url_decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(f"{data}{padding}".encode("ascii"))


def _sign(message: str, secret: str) -> str:
    digest = hmac.new(secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha256).digest()
    return _b64url_encode(digest)


def _json_dumps(payload: dict[str, Any]) -> str:
    return json.dumps(payload, separators=(",", ":"), sort_keys=True)


def _decode_segment(segment: str, what: str) -> dict[str, Any]:
    try:
        decoded = json.loads(_b64url_decode(segment).decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError, ValueError) as exc:
        raise AuthenticationError(f"Invalid token {what}.") from exc
    if not isinstance(decoded, dict):
        raise AuthenticationError(f"Invalid token {what}.")
    return decoded


def encode_jwt(payload: dict[str, Any], secret: str, ttl: timedelta, now: datetime | None = None) -> str:
    """Encode a signed JWT using HS256."""
    if not secret:
        raise AuthenticationError("JWT secret must be configured.")

    issued_at = now or _utcnow()
    body = dict(payload)
    body.setdefault("iat", int(issued_at.timestamp()))
    body.setdefault("nbf", int(issued_at.timestamp()))
    body.setdefault("exp", int((issued_at + ttl).timestamp()))
    body.setdefault("jti", str(uuid.uuid4()))
    header = {"alg": ALGORITHM, "typ": "JWT"}

    header_segment = _b64url_encode(_json_dumps(header).encode("utf-8"))
    payload_segment = _b64url_encode(_json_dumps(body).encode("utf-8"))
    signing_input = f"{header_segment}.{payload_segment}"
    signature = _sign(signing_input, secret=secret)
    return f"{signing_input}.{signature}"


def decode_jwt(
    token: str,
    secret: str,
    issuer: str | None = None,
    audience: str | None = None,
    now: datetime | None = None,
    verify_exp: bool = True,
) -> dict[str, Any]:
    """Decode and validate a signed JWT token.

    Signature, issuer, audience and lifetime are all checked with zero clock
    skew: a token is rejected from the second its ``exp`` is reached.
    """
    if not secret:
        raise AuthenticationError("JWT secret must be configured.")
    try:
        header_segment, payload_segment, signature_segment = token.split(".")
    except (AttributeError, ValueError) as exc:
        raise AuthenticationError("Invalid token format.") from exc

    header = _decode_segment(header_segment, "header")
    if header.get("alg") != ALGORITHM:
        raise AuthenticationError("Unsupported token algorithm.")

    signing_input = f"{header_segment}.{payload_segment}"
    expected_signature = _sign(signing_input, secret=secret)
    provided_signature = signature_segment.encode("utf-8", "surrogateescape")
    if not hmac.compare_digest(expected_signature.encode("ascii"), provided_signature):
        raise AuthenticationError("Invalid token signature.")

    payload = _decode_segment(payload_segment, "payload")

    if issuer is not None and payload.get("iss") != issuer:
        raise AuthenticationError("Invalid token issuer.")
    if audience is not None and payload.get("aud") != audience:
        raise AuthenticationError("Invalid token audience.")

    if verify_exp:
        current = int((now or _utcnow()).timestamp())
        try:
            exp = int(payload["exp"])
            not_before = int(payload.get("nbf", payload.get("iat", current)))
        except (KeyError, TypeError, ValueError) as exc:
            raise AuthenticationError("Token is missing a valid exp claim.") from exc
        if current >= exp:
            raise AuthenticationError("Token has expired.")
        if current < not_before:
            raise AuthenticationError("Token is not yet valid.")
    return payload


@dataclass(frozen=True)
class TokenSettings:
    secret: str
    issuer: str
    audience: str
    ttl: timedelta

    @classmethod
    def from_config(cls, config: Config) -> "TokenSettings":
        return cls(
            secret=config.JWT_SECRET,
            issuer=config.JWT_ISSUER,
            audience=config.JWT_AUDIENCE,
            ttl=timedelta(minutes=config.JWT_ACCESS_TTL_MINUTES),
        )


@dataclass(frozen=True)
class IssuedToken:
    token: str
    token_id: str
    expires_at: datetime
    expires_in: int
    token_type: str = TOKEN_TYPE


@dataclass(frozen=True)
class VerifiedClaims:
    subject: str
    name: str
    role: UserRole
    token_id: str
    expires_at: datetime
    claims: dict[str, Any]


class TokenService:
    """Issue and verify access tokens against one immutable set of settings."""

    def __init__(self, settings: TokenSettings, clock: Callable[[], datetime] = _utcnow) -> None:
        self.settings = settings
        self._clock = clock

    def issue(self, identity: Identity, now: datetime | None = None) -> IssuedToken:
        issued_at = now or self._clock()
        token_id = str(uuid.uuid4())
        payload = {
            "sub": identity.subject,
            "name": identity.name,
            "role": identity.role.value,
            "jti": token_id,
            "iss": self.settings.issuer,
            "aud": self.settings.audience,
        }
        token = encode_jwt(payload=payload, secret=self.settings.secret, ttl=self.settings.ttl, now=issued_at)
        expires_at = datetime.fromtimestamp(int((issued_at + self.settings.ttl).timestamp()), tz=timezone.utc)
        logger.info(
            "auth.token.issued",
            extra={"event": "auth.token.issued", "subject": identity.subject, "token_id": token_id},
        )
        return IssuedToken(
            token=token,
            token_id=token_id,
            expires_at=expires_at,
            expires_in=int(self.settings.ttl.total_seconds()),
        )

    def verify(self, token: str, now: datetime | None = None) -> VerifiedClaims:
        claims = decode_jwt(
            token,
            secret=self.settings.secret,
            issuer=self.settings.issuer,
            audience=self.settings.audience,
            now=now or self._clock(),
        )
        try:
            return VerifiedClaims(
                subject=str(claims["sub"]),
                name=str(claims.get("name", claims["sub"])),
                role=UserRole(claims["role"]),
                token_id=str(claims["jti"]),
                expires_at=datetime.fromtimestamp(int(claims["exp"]), tz=timezone.utc),
                claims=claims,
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise AuthenticationError("Invalid auth claims.") from exc
