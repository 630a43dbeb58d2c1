"""JWT validator for Supabase access tokens."""

from typing import Any
import jwt
from jwt import PyJWKClient, PyJWKClientError
from cachetools import TTLCache

from .config import get_auth_settings


SYMMETRIC_ALGORITHMS = ["HS256"]
ASYMMETRIC_ALGORITHMS = ["RS256", "ES256"]


class TokenValidationError(Exception):
    """Raised when token validation fails."""

    def __init__(self, message: str, status_code: int = 401):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class JWKSClient:
    """
    JWKS client for a project's asymmetric signing keys.

    Resolved keys are cached by key id for an hour, so key rotation is picked
    up without a restart.
    """

    def __init__(self, jwks_uri: str, cache_ttl: int = 3600):
        self.jwks_uri = jwks_uri
        self._keys_cache: TTLCache[str, Any] = TTLCache(maxsize=10, ttl=cache_ttl)
        self._jwk_client: PyJWKClient | None = None

    def _get_client(self) -> PyJWKClient:
        if self._jwk_client is None:
            self._jwk_client = PyJWKClient(self.jwks_uri, cache_jwk_set=True, lifespan=3600)
        return self._jwk_client

    def get_signing_key(self, token: str) -> Any:
        """
        Get the signing key for a token from the JWKS.

        Raises:
            TokenValidationError: If the key cannot be found.
        """
        try:
            kid = jwt.get_unverified_header(token).get("kid", "")
        except jwt.exceptions.DecodeError as e:
            raise TokenValidationError(f"Invalid token format: {str(e)}")

        if kid in self._keys_cache:
            return self._keys_cache[kid]

        try:
            signing_key = self._get_client().get_signing_key_from_jwt(token)
        except PyJWKClientError as e:
            raise TokenValidationError(f"Failed to get signing key: {str(e)}")
        except jwt.exceptions.DecodeError as e:
            raise TokenValidationError(f"Invalid token format: {str(e)}")

        self._keys_cache[kid] = signing_key.key
        return signing_key.key


# Global JWKS client instance (initialized lazily)
_jwks_client: JWKSClient | None = None


def get_jwks_client() -> JWKSClient:
    """Get the global JWKS client instance."""
    global _jwks_client
    if _jwks_client is None:
        settings = get_auth_settings()
        if not settings.jwks_uri:
            raise TokenValidationError(
                "Asymmetric tokens require SUPABASE_URL to locate signing keys.",
                status_code=500,
            )
        _jwks_client = JWKSClient(settings.jwks_uri)
    return _jwks_client


def _resolve_key(token: str, settings) -> tuple[Any, list[str]]:
    try:
        alg = jwt.get_unverified_header(token).get("alg", "")
    except jwt.exceptions.DecodeError as e:
        raise TokenValidationError(f"Invalid token format: {str(e)}")

    if alg in SYMMETRIC_ALGORITHMS:
        if not settings.jwt_secret:
            raise TokenValidationError("HS256 tokens are not accepted: no shared secret configured")
        return settings.jwt_secret, SYMMETRIC_ALGORITHMS
    if alg in ASYMMETRIC_ALGORITHMS:
        return get_jwks_client().get_signing_key(token), ASYMMETRIC_ALGORITHMS
    raise TokenValidationError(f"Unsupported token algorithm: {alg or 'none'}")


def validate_token(token: str) -> dict[str, Any]:
    """
    Validate an access token.

    HS256 tokens are checked against the shared JWT secret; RS256/ES256 tokens
    against the project's JWKS. Expiry, audience and (when SUPABASE_URL is set)
    issuer are verified.

    Returns:
        The decoded token claims if valid.

    Raises:
        TokenValidationError: If the token is invalid.
    """
    settings = get_auth_settings()

    if not settings.is_configured():
        raise TokenValidationError(
            "Authentication not configured. Set SUPABASE_JWT_SECRET or SUPABASE_URL.",
            status_code=500,
        )

    key, algorithms = _resolve_key(token, settings)

    try:
        return jwt.decode(
            token,
            key,
            algorithms=algorithms,
            audience=settings.audience,
            issuer=settings.issuer,
            options={
                "require": ["exp", "iat", "aud", "sub"],
                "verify_iss": settings.issuer is not None,
            },
        )
    except jwt.ExpiredSignatureError:
        raise TokenValidationError("Token has expired")
    except jwt.InvalidAudienceError:
        raise TokenValidationError("Invalid token audience")
    except jwt.InvalidIssuerError:
        raise TokenValidationError("Invalid token issuer")
    except jwt.InvalidTokenError as e:
        raise TokenValidationError(f"Invalid token: {str(e)}")


def clear_jwks_cache() -> None:
    """Clear the JWKS client. Useful for testing or when keys are rotated."""
    global _jwks_client
    _jwks_client = None
