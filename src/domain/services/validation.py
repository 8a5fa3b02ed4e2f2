"""Required-field checks shared by the aggregate services."""

from typing import Any

from core.exceptions import ValidationFailedError


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def require_fields(fields: dict[str, Any]) -> None:
    """Raise ValidationFailedError listing every blank field, in the given order.

    Keys are the public field names (``from`` rather than ``from_date``) so the
    error list matches what the client sent.
    """
    errors = [
        {"field": name, "message": f"{name} is required"}
        for name, value in fields.items()
        if _is_blank(value)
    ]
    if errors:
        raise ValidationFailedError(errors)
