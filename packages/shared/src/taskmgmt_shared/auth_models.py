"""Auth domain models: shared between the token service, credential store and API."""

from datetime import datetime

from pydantic import BaseModel

from taskmgmt_shared.models import PlatformResult


class AuthUser(BaseModel):
    """Decoded bearer token claims."""

    user_id: int
    email: str
    exp: int


class IssuedToken(BaseModel):
    """A freshly signed bearer token."""

    token: str
    expires_at: datetime


class ValidateTokenResult(PlatformResult):
    """Result of validate_token."""

    user: AuthUser | None = None


class CreateUserResult(PlatformResult):
    """Result of create_user."""

    user_id: int | None = None
    errors: list[str] = []


class VerifyCredentialsResult(PlatformResult):
    """Result of verify_password."""

    user_id: int | None = None
    email: str = ""


class RegisterResult(PlatformResult):
    """Result of register. No token is issued at registration."""

    user_id: int | None = None
    errors: list[str] = []


class LoginResult(PlatformResult):
    """Result of login."""

    token: str = ""
    expires_at: datetime | None = None
