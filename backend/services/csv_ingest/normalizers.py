"""
Field Normalizers

Pure functions that turn free-text broker cells into structured values.

Every normalizer is total: on input it cannot understand it returns an
empty/zero/default result and never raises. The aggregator relies on this,
so a badly typed price never costs the reviewer the whole row.

PRICE CONVENTIONS:
    Prices are normalized to lakhs (1 lakh = 100,000 rupees).
    - "90L", "90 lakh", "90 lac"  -> 90
    - "1.12cr", "1.12 crore"      -> 112
    - "1.1Crs"                    -> 110
    - "90" (bare number)          -> 90 (lakh assumed)
    - "1.10 to 1.16 cr"           -> 110..116 (the trailing unit applies to
                                     the whole range)
    - "90sqft", "80K"             -> unparsed (unknown unit)
"""
import logging
import re
from typing import List, Optional, Tuple
from urllib.parse import urlparse

from constants import (
    ALL_AMENITIES,
    CRORE_IN_LAKHS,
    STATUS_AVAILABLE,
    STATUS_KEYWORDS,
    UNIT_CRORE,
    UNIT_LAKH,
)
from services.csv_ingest.models import ContactInfo, PriceRange
from utils.normalize import is_blank

logger = logging.getLogger(__name__)

# A number is read whole or not at all: "90sqft" and "80K" carry no price unit
_PRICE_PATTERN = re.compile(
    r"(?<!\d)(?<!\d\.)(\d+(?:\.\d+)?)(?!\.?\d)\s*(crores?|crs?|lakhs?|lacs?|lac|l)?(?![a-z])",
    flags=re.IGNORECASE,
)
# Text allowed between two numbers for them to form one range ("90 - 95L")
_RANGE_CONNECTOR = re.compile(r"^\s*(?:-|–|—|to)\s*$", flags=re.IGNORECASE)
_TO_WORD = re.compile(r"\bto\b", flags=re.IGNORECASE)

_NUMBER_PATTERN = re.compile(r"\d+(?:\.\d+)?")
_LEADING_INT = re.compile(r"^\s*(\d[\d,]*)")

_PHONE_RUN = re.compile(r"[0-9+\-()\s]{7,}")
_NAME_SEPARATORS = re.compile(r"(?:^|\s)[-,:|/]+(?=\s|$)")
_WHITESPACE = re.compile(r"\s+")

_IMAGE_SEPARATORS = re.compile(r"[,|;]")


# =============================================================================
# Price
# =============================================================================

def _unit_for(token: Optional[str]) -> Optional[str]:
    if not token:
        return None
    return UNIT_CRORE if token.lower().startswith('cr') else UNIT_LAKH


def _extract_price_numbers(text: str) -> List[Tuple[float, str]]:
    """
    (value, unit) pairs found in text. Unit-less numbers adopt the unit of
    the next number when the two are joined by a range connector, and fall
    back to lakh otherwise.
    """
    matches = list(_PRICE_PATTERN.finditer(text))
    units = [_unit_for(m.group(2)) for m in matches]

    # Right-to-left so "1.10 - 1.12 - 1.16 cr" carries cr across the chain
    for i in range(len(matches) - 2, -1, -1):
        if units[i] is None and units[i + 1] is not None:
            gap = text[matches[i].end():matches[i + 1].start()]
            if _RANGE_CONNECTOR.match(gap):
                units[i] = units[i + 1]

    result = []
    for match, unit in zip(matches, units):
        value = float(match.group(1))
        if value > 0:
            result.append((value, unit or UNIT_LAKH))
    return result


def to_lakhs(value: float, unit: str) -> float:
    if unit == UNIT_CRORE:
        return round(value * CRORE_IN_LAKHS, 6)
    return value


def parse_price_range(text: Optional[str]) -> PriceRange:
    """
    Parse a free-text price into a PriceRange in lakhs.

    Examples:
        >>> parse_price_range("90L")
        PriceRange(min=90.0, max=90.0, original_format='90L', is_range=False)
        >>> parse_price_range("1.10 to 1.16 cr").min
        110.0
    """
    original = text or ''
    try:
        numbers = _extract_price_numbers(original)
    except (TypeError, ValueError) as e:
        logger.debug(f"Unparseable price {original!r}: {e}")
        numbers = []

    if not numbers:
        return PriceRange(min=0.0, max=0.0, original_format=original, is_range=False)

    lakhs = [to_lakhs(value, unit) for value, unit in numbers]
    return PriceRange(
        min=min(lakhs),
        max=max(lakhs),
        original_format=original,
        is_range=len(lakhs) > 1 or bool(_TO_WORD.search(original)),
    )


# =============================================================================
# Areas / counts
# =============================================================================

def parse_carpet_areas(text: Optional[str]) -> List[float]:
    """
    Every positive number in a comma-separated area cell, de-duplicated and
    sorted ascending. "863, 887" -> [863, 887]; "1100-1200" -> [1100, 1200].
    """
    if not text:
        return []

    areas = set()
    for segment in text.split(','):
        for number in _NUMBER_PATTERN.findall(segment):
            area = float(number)
            if area > 0:
                areas.add(area)
    return sorted(areas)


def parse_total_units(text: Optional[str]) -> int:
    """Leading integer of a unit-count cell ("1,200 units" -> 1200), else 0."""
    if not text:
        return 0
    match = _LEADING_INT.match(text)
    if not match:
        return 0
    digits = match.group(1).replace(',', '')
    return int(digits) if digits else 0


# =============================================================================
# Contact
# =============================================================================

def parse_contact(text: Optional[str]) -> ContactInfo:
    """
    Split a combined "name + phone" cell.

    The phone is the longest run of digits, '+', '-', '(', ')' and spaces
    (at least 7 characters, containing a digit). What remains, minus
    dangling separators, is the name.

        >>> parse_contact("Rahul Sharma - 98765 43210")
        ContactInfo(name='Rahul Sharma', phone='98765 43210', raw='Rahul Sharma - 98765 43210')
    """
    raw = text or ''
    if is_blank(raw):
        return ContactInfo(name='', phone=None, raw=raw)

    runs = [m for m in _PHONE_RUN.finditer(raw) if any(c.isdigit() for c in m.group(0))]
    if not runs:
        return ContactInfo(name=raw.strip(), phone=None, raw=raw)

    best = max(runs, key=lambda m: len(m.group(0).strip()))
    phone = best.group(0).strip().strip('-').strip()
    remainder = raw[:best.start()] + ' ' + raw[best.end():]
    name = _NAME_SEPARATORS.sub(' ', remainder)
    name = _WHITESPACE.sub(' ', name).strip(' -,:|/')
    return ContactInfo(name=name, phone=phone or None, raw=raw)


# =============================================================================
# Lists
# =============================================================================

def parse_amenities(text: Optional[str]) -> List[str]:
    if is_blank(text):
        return []
    if text.strip().lower() == ALL_AMENITIES.lower():
        return [ALL_AMENITIES]
    return [item.strip() for item in text.split(',') if item.strip()]


def _is_web_url(token: str) -> bool:
    lowered = token.lower()
    if not (lowered.startswith('http://') or lowered.startswith('https://')):
        return False
    try:
        return bool(urlparse(token).netloc)
    except ValueError:
        return False


def parse_image_urls(text: Optional[str]) -> List[str]:
    """http(s) URLs from a ',', '|' or ';' separated cell, in original order."""
    if not text:
        return []
    tokens = (token.strip() for token in _IMAGE_SEPARATORS.split(text))
    return [token for token in tokens if _is_web_url(token)]


# =============================================================================
# Status
# =============================================================================

def infer_status(details: Optional[str]) -> str:
    """Availability status from the free-text details column."""
    if not details:
        return STATUS_AVAILABLE
    lowered = details.lower()
    for keyword, status in STATUS_KEYWORDS:
        if keyword in lowered:
            return status
    return STATUS_AVAILABLE
