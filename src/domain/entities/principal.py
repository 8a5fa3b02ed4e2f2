"""Authenticated principal and the ownership check."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID


@dataclass(frozen=True, slots=True)
class Principal:
    """The authenticated identity making a request (id only)."""

    id: UUID


class Owned(Protocol):
    """Anything that records the user who created it."""

    user_id: UUID


def is_owner(principal: Principal, resource: Owned) -> bool:
    """Check whether the principal owns (authored) the resource."""
    return resource.user_id == principal.id
