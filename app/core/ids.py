"""Identifier helpers."""
import re
import uuid

from app.core.exceptions import BadRequestError

_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


def new_id() -> str:
    """Generate a new opaque record id."""
    return uuid.uuid4().hex


def parse_id(value: str, label: str = "id") -> str:
    """Validate an id taken from a path or body, raising BadRequestError if malformed."""
    if not value or not _ID_PATTERN.match(value.lower()):
        raise BadRequestError(f"Invalid {label} format")
    return value.lower()
