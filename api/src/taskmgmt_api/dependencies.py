"""FastAPI dependencies: collaborators from app state and the caller's identity.

`current_user_id` is the single place the caller's identity is derived. Routes
receive it as a plain int and pass it into every Task Store call.
"""

from __future__ import annotations

import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from taskmgmt_auth.jwt import validate_token
from taskmgmt_auth.service import AuthService
from taskmgmt_data_access.tasks import TaskStore

from taskmgmt_api.errors import unauthorized

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_task_store(request: Request) -> TaskStore:
    return request.app.state.task_store


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


async def current_user_id(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> int:
    """Validate the bearer token and return its subject.

    Missing, malformed, expired and forged tokens all produce the same 401.
    """
    if credentials is None:
        raise unauthorized()

    result = validate_token(credentials.credentials, request.app.state.settings)
    if not result.success:
        logger.info(f"Rejected bearer token: {result.error}")
        raise unauthorized()
    return result.user.user_id
