"""Identifier parsing helpers."""

from uuid import UUID


def parse_uuid(value: str | UUID) -> UUID | None:
    """Parse a path or body identifier, returning None when it is malformed."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(value)
    except (TypeError, ValueError):
        return None
