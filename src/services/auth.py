"""Credentials checks available to the outer surface: an API key and an admin JWT."""

import hmac
from typing import Any, Optional

from jose import JWTError
from jose import jwt as jose_jwt

from src.core.config import Settings, get_settings
from src.core.exceptions import AuthenticationError
from src.core.logging_setup import get_logger

logger = get_logger(__name__)


class Authenticator:
    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()

    def verify_api_key(self, api_key: Optional[str]) -> None:
        """Constant-time comparison against the configured key. No key configured: nothing is accepted."""
        expected = self.settings.api_key
        if not api_key or not expected or not hmac.compare_digest(api_key, expected):
            logger.warning("api_key_rejected")
            raise AuthenticationError("Invalid API key")

    def verify_jwt(self, token: Optional[str]) -> dict[str, Any]:
        """
        Validate signature and expiry of the token. If an admin e-mail is configured,
        the token's email claim must match it. Returns the claims.
        """
        if not token:
            raise AuthenticationError("Missing JWT token")
        if not self.settings.jwt_secret:
            raise AuthenticationError("JWT validation is not configured")

        try:
            claims = jose_jwt.decode(
                token,
                self.settings.jwt_secret,
                algorithms=[self.settings.jwt_algorithm],
                options={"verify_exp": True},
            )
        except JWTError as exc:
            logger.warning("jwt_rejected", error=str(exc))
            raise AuthenticationError("Invalid JWT token") from exc

        admin_email = self.settings.admin_email
        if admin_email and claims.get("email") != admin_email:
            logger.warning("jwt_email_rejected", email=claims.get("email"))
            raise AuthenticationError("Invalid JWT email address")
        return claims
