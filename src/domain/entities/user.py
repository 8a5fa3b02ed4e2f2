"""User domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass
class User:
    """Local identity record, provisioned from the auth token claims."""

    id: UUID
    email: str
    name: str
    avatar: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
