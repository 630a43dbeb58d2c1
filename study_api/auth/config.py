"""Authentication configuration for Supabase-issued access tokens."""

import os
from functools import lru_cache
from pydantic import BaseModel


class AuthSettings(BaseModel):
    """Authentication settings loaded from environment variables."""

    supabase_url: str = ""  # Project URL, e.g. https://<ref>.supabase.co
    jwt_secret: str = ""  # Shared secret for HS256-signed tokens
    audience: str = "authenticated"
    enabled: bool = True  # Set to False to disable auth (local dev)

    @property
    def issuer(self) -> str | None:
        """Expected token issuer, or None when the project URL is unknown."""
        if not self.supabase_url:
            return None
        return f"{self.supabase_url.rstrip('/')}/auth/v1"

    @property
    def jwks_uri(self) -> str | None:
        """JWKS endpoint publishing the project's asymmetric signing keys."""
        if not self.issuer:
            return None
        return f"{self.issuer}/.well-known/jwks.json"

    def is_configured(self) -> bool:
        """Tokens can be verified with a shared secret or through JWKS."""
        return bool(self.jwt_secret or self.supabase_url)


@lru_cache()
def get_auth_settings() -> AuthSettings:
    """Get cached authentication settings from environment variables."""
    enabled_str = os.getenv("AUTH_ENABLED", "true").lower()
    enabled = enabled_str not in ("false", "0", "no", "off")

    return AuthSettings(
        supabase_url=os.getenv("SUPABASE_URL", ""),
        jwt_secret=os.getenv("SUPABASE_JWT_SECRET", ""),
        audience=os.getenv("AUTH_AUDIENCE", "authenticated"),
        enabled=enabled,
    )
