"""Caller identity and the moderator predicate.

Tokens are issued elsewhere (admin login is not part of this service). Here
we only verify a bearer token and answer one question: may this caller
moderate?
"""

import os
from dataclasses import dataclass

from fastapi import Header
from jose import JWTError, jwt
from protean.exceptions import ConfigurationError

from shared.errors import AuthenticationError

MODERATOR_ROLES = frozenset({"admin", "superadmin"})


@dataclass(frozen=True)
class CallerContext:
    """Who is making the request. Anonymous callers have neither field set."""

    subject: str | None = None
    role: str | None = None

    @property
    def is_anonymous(self) -> bool:
        return self.subject is None


ANONYMOUS = CallerContext()


# Only these environments may fall back to the built-in signing secret
_DEV_ENVIRONMENTS = frozenset({"development", "test"})
_DEV_SECRET = "robotech-dev-secret"


def _environment() -> str:
    return (os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def _jwt_secret() -> str:
    secret = os.getenv("JWT_SECRET")
    if secret:
        return secret
    if _environment() in _DEV_ENVIRONMENTS:
        return _DEV_SECRET
    raise ConfigurationError(f"JWT_SECRET must be set in the `{_environment()}` environment")


def _jwt_algorithm() -> str:
    return os.getenv("JWT_ALGORITHM", "HS256")


def caller_from_token(token: str) -> CallerContext:
    """Verify a bearer token and build the caller it describes."""
    try:
        payload = jwt.decode(token, _jwt_secret(), algorithms=[_jwt_algorithm()])
    except JWTError as exc:
        raise AuthenticationError({"token": ["Invalid or expired token"]}) from exc

    subject = payload.get("sub")
    if not subject:
        raise AuthenticationError({"token": ["Token does not identify a caller"]})

    return CallerContext(subject=str(subject), role=payload.get("role"))


def is_moderator(caller: CallerContext) -> bool:
    return caller.role in MODERATOR_ROLES


async def current_caller(authorization: str = Header(default="")) -> CallerContext:
    """FastAPI dependency resolving the ``Authorization`` header.

    A missing header means an anonymous caller; a malformed or unverifiable
    one is an authentication failure.
    """
    if not authorization:
        return ANONYMOUS

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise AuthenticationError({"token": ["Authorization header must use the Bearer scheme"]})

    return caller_from_token(token.strip())
