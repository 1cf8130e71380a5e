"""Parameter checks run by every client operation before a request is built.

Each check either returns the (normalized) value or raises ValidationError.
"""
from datetime import datetime, timezone
from typing import Any, Iterable, Optional, Union

from dateutil import parser as dateutil_parser

from .exceptions import ValidationError

STATUS_MAXLENGTH = 140


def validate_non_negative_integer(name: str, value: Any, maximum: Optional[int] = None) -> int:
    """Check that value is an integer >= 0 (and <= maximum when given)"""
    # bool is an int subclass but never a meaningful id/page/count
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValidationError(name, value, "must be a positive integer (or zero).")
    if maximum is not None and value > maximum:
        raise ValidationError(name, value, f"must be <= {maximum}.")
    return value


def validate_date_string(name: str, value: Union[str, datetime]) -> datetime:
    """Parse value into a timezone-aware datetime.

    Args:
        name: Parameter name used in the error message
        value: A datetime, or any date string python-dateutil understands

    Returns:
        The parsed datetime converted to UTC; naive values are taken to be UTC
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = dateutil_parser.parse(value)
        except (ValueError, OverflowError) as e:
            raise ValidationError(name, value, "must be a valid date string.") from e
    else:
        raise ValidationError(name, value, "must be a valid date string.")

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError) as e:
        # e.g. 0001-01-01 with a positive offset falls before year 1 in UTC
        raise ValidationError(name, value, "must be a valid date string.") from e


def validate_option(name: str, value: Any, options: Iterable[str]) -> str:
    """Case-insensitive membership check; returns the lower-cased option"""
    allowed = list(options)
    normalized = value.lower() if isinstance(value, str) else value
    if normalized not in allowed:
        raise ValidationError(
            name, value, "valid options include: " + ', '.join(allowed)
        )
    return normalized


def validate_max_length(name: str, value: Any, maximum: int = STATUS_MAXLENGTH) -> str:
    """Check a text parameter against its character limit"""
    if not isinstance(value, str):
        raise ValidationError(name, value, "must be a string.")
    if len(value) > maximum:
        raise ValidationError(name, value, f"may not exceed {maximum} characters!")
    return value


def validate_required_string(name: str, value: Any) -> str:
    """Identifiers (screen names, user ids, locations) must be non-empty strings"""
    if isinstance(value, bool):
        raise ValidationError(name, value, "must be a non-empty string.")
    if isinstance(value, int):
        # numeric user ids are accepted and sent as text
        value = str(value)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(name, value, "must be a non-empty string.")
    return value
