"""
Input coercion shared by the service functions.

Values arrive straight from decoded JSON, so anything may turn up where a
string or an id is expected. Wrong types raise ValidationError.
"""
from .exceptions import ValidationError


def clean_text(value, label):
    """Return ``value`` stripped; None counts as empty."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{label} must be a string.")
    return value.strip()


def raw_text(value, label):
    """Like clean_text, but keeps surrounding whitespace (passwords, tokens)."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{label} must be a string.")
    return value


def clean_id(value, label):
    """Return ``value`` as an int id, or None when it is missing."""
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{label} must be an integer.")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{label} must be an integer.")
