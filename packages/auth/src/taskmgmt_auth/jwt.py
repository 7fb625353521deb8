"""Bearer token issuance and verification.

Tokens are HS256 JWTs signed with the configured secret and carrying `sub`
(user id), `email`, `iss`, `aud`, `iat` and `exp`. They are not recorded
anywhere. Expiry is the only lifetime bound, there is no revocation list.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt as pyjwt
from taskmgmt_shared.auth_models import AuthUser, IssuedToken, ValidateTokenResult
from taskmgmt_shared.models import ErrorKind
from taskmgmt_shared.settings import ServiceSettings

REQUIRED_CLAIMS = ["exp", "iat", "sub", "iss", "aud"]


def issue_token(
    user_id: int,
    email: str,
    settings: ServiceSettings,
    now: datetime | None = None,
) -> IssuedToken:
    """Sign a token for `user_id` valid for settings.token_ttl_seconds."""
    issued_at = now or datetime.now(UTC)
    expires_at = issued_at + timedelta(seconds=settings.token_ttl_seconds)
    payload = {
        "sub": str(user_id),
        "email": email,
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    token = pyjwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return IssuedToken(token=token, expires_at=expires_at)


def verify_token(token: str, settings: ServiceSettings) -> AuthUser:
    """Decode and validate a bearer token.

    Args:
        token: The raw JWT string from the Authorization header.
        settings: Supplies the secret, algorithm, issuer and audience.

    Returns:
        AuthUser with user_id, email, and expiry.

    Raises:
        pyjwt.ExpiredSignatureError: Token has expired.
        pyjwt.InvalidSignatureError: Signature doesn't match the secret.
        pyjwt.InvalidIssuerError / pyjwt.InvalidAudienceError: Wrong iss/aud.
        pyjwt.MissingRequiredClaimError: A required claim is absent.
        pyjwt.DecodeError: Malformed token.
        ValueError: Subject is not an integer user id.
    """
    payload = pyjwt.decode(
        token,
        settings.jwt_secret,
        algorithms=[settings.jwt_algorithm],
        audience=settings.jwt_audience,
        issuer=settings.jwt_issuer,
        options={"require": REQUIRED_CLAIMS},
    )

    return AuthUser(
        user_id=int(payload["sub"]),
        email=payload.get("email", ""),
        exp=payload["exp"],
    )


def validate_token(token: str, settings: ServiceSettings) -> ValidateTokenResult:
    """Result-returning wrapper around verify_token.

    Expired tokens yield TOKEN_EXPIRED; every other defect yields TOKEN_INVALID.
    """
    try:
        user = verify_token(token, settings)
    except pyjwt.ExpiredSignatureError:
        return ValidateTokenResult.failure(ErrorKind.TOKEN_EXPIRED, "Token has expired")
    except (pyjwt.InvalidTokenError, ValueError):
        return ValidateTokenResult.failure(ErrorKind.TOKEN_INVALID, "Token is invalid")
    return ValidateTokenResult(success=True, message="Token is valid", user=user)
