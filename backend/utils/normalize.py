"""
Input Normalization Utilities
=============================

Single source of truth for coercing loosely-typed external inputs
(environment variables, CLI options, spreadsheet cells).

Two families live here:

- Strict coercion (``to_int``, ``to_list``): raise ``ValidationError`` on
  bad input. Used at configuration and CLI boundaries.
- Lenient text helpers (``is_blank``, ``collapse_whitespace``, ``slugify``):
  never raise. Used by the ingestion engine, which must tolerate anything a
  broker types into a cell.

Usage:
    from utils.normalize import to_int, slugify, ValidationError

    try:
        limit = to_int(os.getenv("INGEST_PREVIEW_ROWS"), default=50)
    except ValidationError as e:
        ...

    slugify("Godrej Properties")  # 'godrej_properties'
"""

import re
from typing import Optional

_WHITESPACE = re.compile(r"\s+")


class ValidationError(ValueError):
    """Raised when input cannot be normalized to expected type."""

    def __init__(self, message: str, field: str = None, received_value=None):
        super().__init__(message)
        self.field = field
        self.received_value = received_value


def to_int(
    value: Optional[str],
    *,
    default: Optional[int] = None,
    minimum: Optional[int] = None,
    field: str = None
) -> Optional[int]:
    """
    Convert string to int, with explicit None handling.

    Args:
        value: Input string (typically from os.getenv())
        default: Value to return if input is None or empty
        minimum: Smallest accepted value (inclusive)
        field: Field name for error messages

    Returns:
        Parsed integer or default

    Raises:
        ValidationError: If value cannot be converted to int or is below minimum
    """
    if value is None or str(value).strip() == "":
        return default
    try:
        result = int(str(value).strip())
    except (ValueError, TypeError):
        raise ValidationError(
            f"Expected int, got {type(value).__name__}: {value!r}",
            field=field,
            received_value=value
        )
    if minimum is not None and result < minimum:
        raise ValidationError(
            f"Expected int >= {minimum}, got {result}",
            field=field,
            received_value=value
        )
    return result


def to_list(
    value: Optional[str],
    *,
    separator: str = ",",
    item_type: type = str,
    field: str = None
) -> list:
    """
    Convert separator-delimited string to list.

    Args:
        value: Input string (e.g., "0,2,5")
        separator: Separator character
        item_type: Type to convert each item to (str, int, float)
        field: Field name for error messages

    Returns:
        List of parsed items (empty for None/empty input)

    Raises:
        ValidationError: If any item cannot be converted
    """
    if value is None or value == "":
        return []

    items = [item.strip() for item in value.split(separator) if item.strip()]

    if item_type == str:
        return items

    try:
        return [item_type(item) for item in items]
    except (ValueError, TypeError):
        raise ValidationError(
            f"Expected list of {item_type.__name__}, got invalid item in: {value!r}",
            field=field,
            received_value=value
        )


# ============================================================================
# LENIENT TEXT HELPERS (never raise)
# ============================================================================

def is_blank(value) -> bool:
    """True for None and whitespace-only strings."""
    return value is None or str(value).strip() == ""


def collapse_whitespace(value: Optional[str]) -> str:
    """Trim and collapse internal whitespace runs to a single space."""
    if value is None:
        return ""
    return _WHITESPACE.sub(" ", str(value)).strip()


def slugify(value: Optional[str]) -> str:
    """
    Lower-case and join whitespace-separated words with underscores.

    Punctuation is preserved so that identifiers stay traceable to the
    broker's original text:

        >>> slugify("Lodha  Group")
        'lodha_group'
        >>> slugify("2 BHK (Premium)")
        '2_bhk_(premium)'
    """
    return _WHITESPACE.sub("_", collapse_whitespace(value).lower())
