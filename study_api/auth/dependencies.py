"""FastAPI dependencies for authentication."""

from typing import Annotated
from fastapi import Depends, HTTPException, Header, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel

from .config import get_auth_settings
from .token_validator import validate_token, TokenValidationError


bearer_scheme = HTTPBearer(
    scheme_name="Bearer",
    description="Supabase access token",
    auto_error=False,  # Missing tokens are reported by get_current_user
)


class CurrentUser(BaseModel):
    """
    The authenticated user extracted from the token.

    Attributes:
        user_id: The unique identifier (sub claim) from the token.
        email: The user's email address if available.
        role: The database role granted to the token (usually "authenticated").
    """

    user_id: str
    email: str | None = None
    role: str | None = None

    @classmethod
    def from_token_claims(cls, claims: dict) -> "CurrentUser":
        return cls(
            user_id=claims.get("sub", ""),
            email=claims.get("email"),
            role=claims.get("role"),
        )


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    x_user_id: str | None = Header(None, description="User ID header (dev fallback)"),
) -> CurrentUser:
    """
    Validate the Bearer token and return the current user.

    With AUTH_ENABLED=false the X-User-Id header is trusted instead (local dev).

    Raises:
        HTTPException: 401 if the token is missing or invalid.
    """
    settings = get_auth_settings()

    if not settings.enabled:
        if x_user_id:
            return CurrentUser(user_id=x_user_id, role="authenticated")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication disabled but no X-User-Id header provided",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authentication token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        claims = validate_token(credentials.credentials)
    except TokenValidationError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = CurrentUser.from_token_claims(claims)
    if not user.user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has no subject",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
