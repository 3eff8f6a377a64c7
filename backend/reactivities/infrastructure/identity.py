"""Identity Tokens — bearer JWT issue/verify for the current principal.

Invariants:
    - decode_principal never returns a partial Principal: any token problem is a
      ForbiddenError (expired, bad signature, wrong audience, missing sub,
      malformed claims)
    - sub fits the users.id column (USER_ID_MAX_LENGTH)
    - Token claims: sub (user id), name (display name), roles (list of strings)

Design Decisions:
    - PyJWT HS256 with a shared secret; credential storage lives elsewhere
    - create_access_token exists for local tooling and tests, not for login
"""

import logging
from datetime import datetime, timedelta, timezone

import jwt as pyjwt

from reactivities.config import Settings
from reactivities.core.domain_types import USER_ID_MAX_LENGTH, Principal, UserId
from reactivities.core.errors import ForbiddenError

logger = logging.getLogger(__name__)


def create_access_token(
    principal: Principal, settings: Settings, now: datetime | None = None,
) -> str:
    issued = now or datetime.now(timezone.utc)
    payload = {
        "sub": principal.id,
        "name": principal.display_name,
        "roles": sorted(principal.roles),
        "aud": settings.jwt_audience,
        "iat": issued,
        "exp": issued + timedelta(minutes=settings.jwt_expiry_minutes),
    }
    return pyjwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_principal(token: str, settings: Settings) -> Principal:
    """Verify a bearer token and build the Principal it names."""
    try:
        payload = pyjwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            options={"require": ["exp", "sub"]},
        )
    except pyjwt.ExpiredSignatureError:
        raise ForbiddenError("token expired")
    except pyjwt.InvalidTokenError as e:
        logger.info(f"Rejected bearer token: {e}")
        raise ForbiddenError("invalid token")

    subject = str(payload["sub"])
    if not subject or len(subject) > USER_ID_MAX_LENGTH:
        raise ForbiddenError("invalid subject claim")

    roles = payload.get("roles") or []
    if isinstance(roles, str):
        roles = [roles]
    if not isinstance(roles, (list, tuple)) or not all(isinstance(r, str) for r in roles):
        raise ForbiddenError("invalid roles claim")

    name = payload.get("name") or ""
    if not isinstance(name, str):
        raise ForbiddenError("invalid name claim")

    return Principal(
        id=UserId(subject),
        display_name=name,
        roles=frozenset(roles),
    )
