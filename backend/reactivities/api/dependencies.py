"""API Dependencies — current principal and per-request operation boundary.

Invariants:
    - get_current_principal is the identity collaborator: every activity route
      depends on it, so there are no anonymous activity endpoints
    - Missing or invalid bearer token -> ForbiddenError (translated by the
      registered error handlers into the Forbidden envelope)
    - get_boundary builds a fresh boundary per request around that request's
      DB session; nothing is cached across requests
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from reactivities.config import Settings, get_settings
from reactivities.core.domain_types import Principal
from reactivities.core.errors import ForbiddenError
from reactivities.infrastructure.database import get_db
from reactivities.infrastructure.identity import decode_principal
from reactivities.services.composition import build_boundary
from reactivities.services.error_translator import OperationBoundary

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> Principal:
    if credentials is None:
        raise ForbiddenError("missing bearer token")
    return decode_principal(credentials.credentials, settings)


async def get_boundary(db: AsyncSession = Depends(get_db)) -> OperationBoundary:
    return build_boundary(db)
