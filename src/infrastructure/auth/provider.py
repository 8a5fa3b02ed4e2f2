"""Identity extracted from bearer tokens."""

from dataclasses import dataclass
from typing import Optional, Protocol
from uuid import UUID


@dataclass(frozen=True)
class TokenUser:
    """Claims of a verified token: subject id, email and optional profile hints.

    ``display_name`` and ``avatar_url`` only seed the local User record on the
    first authenticated request; later changes in the token are not synced.
    """

    id: UUID
    email: str
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None


class TokenVerifier(Protocol):
    """Anything that turns a bearer token into a ``TokenUser``."""

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """Return the token's user, or None if it is invalid or expired."""
        ...
