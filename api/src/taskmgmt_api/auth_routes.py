"""POST /auth/register and POST /auth/login."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from taskmgmt_auth.service import AuthService
from taskmgmt_shared.models import ErrorKind

from taskmgmt_api.dependencies import get_auth_service
from taskmgmt_api.errors import http_error
from taskmgmt_api.schemas import CredentialsBody, MessageResponse, TokenResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=MessageResponse)
async def register(body: CredentialsBody, auth: AuthService = Depends(get_auth_service)):
    result = await auth.register(body.email, body.password)
    if result.success:
        return MessageResponse(message=result.message)
    if result.error in (ErrorKind.DUPLICATE_EMAIL, ErrorKind.WEAK_PASSWORD):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": result.message, "errors": result.errors},
        )
    raise http_error(result)


@router.post("/login", response_model=TokenResponse)
async def login(body: CredentialsBody, auth: AuthService = Depends(get_auth_service)):
    result = await auth.login(body.email, body.password)
    if not result.success:
        raise http_error(result)
    return TokenResponse(token=result.token)
