"""JWT authentication provider implementation.

Tokens are issued by the identity service and signed with a shared secret.
Expected payload:
    {
        "sub": "user-uuid",
        "email": "user@example.com",
        "user_metadata": { "name": "Jane", "avatar_url": "https://..." },
        "exp": 1234567890
    }
"""

import logging
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from core.config import settings
from infrastructure.auth.provider import TokenUser

logger = logging.getLogger(__name__)


class JWTAuthProvider:
    """JWT-based authentication provider."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate a JWT token and extract user info.

        Args:
            token: The JWT to validate

        Returns:
            TokenUser if valid, None if invalid, expired or missing claims
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_aud": False},
            )
        except JWTError:
            return None

        user_id = payload.get("sub")
        email = payload.get("email")

        if not user_id or not email:
            return None

        try:
            subject = UUID(user_id)
        except ValueError:
            logger.warning("Rejected token with non-UUID subject")
            return None

        user_metadata = payload.get("user_metadata") or {}
        display_name = (
            user_metadata.get("name")
            or user_metadata.get("display_name")
            or payload.get("name")
        )

        return TokenUser(
            id=subject,
            email=email,
            display_name=display_name,
            avatar_url=user_metadata.get("avatar_url"),
        )

    def create_token(self, user: TokenUser) -> str:
        """
        Create a JWT token for a user (used for tests and local tooling).

        Args:
            user: The user to create a token for

        Returns:
            The generated JWT string
        """
        expire = datetime.utcnow() + timedelta(minutes=self._expire_minutes)

        payload: dict = {
            "sub": str(user.id),
            "email": user.email,
            "exp": expire,
            "user_metadata": {
                "name": user.display_name,
                "avatar_url": user.avatar_url,
            },
        }

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
