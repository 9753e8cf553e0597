"""
Header Resolver

Maps arbitrary broker column headers onto canonical field names.

A header and every alias are normalized the same way (lower-cased, with
whitespace, underscores, hyphens, slashes, dots and parentheses removed)
and compared for exact equality. Fields are tried in CANONICAL_FIELDS
order; the first match wins. Headers that match nothing are kept in the
result, lower-cased and trimmed, so reviewers can see what was ignored.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from constants import CANONICAL_FIELDS, HEADER_ALIASES, HEADER_STRIP_CHARS
from services.csv_ingest.line_splitter import split_line

logger = logging.getLogger(__name__)

_STRIP_TABLE = str.maketrans('', '', HEADER_STRIP_CHARS)


def normalize_header(header: str) -> str:
    """
    Collapse a header to its comparison key.

        >>> normalize_header(' Flats/Floor ')
        'flatsfloor'
        >>> normalize_header('Carpet Area (Sq.Ft)')
        'carpetareasqft'
    """
    # split/join also drops non-breaking and other unicode spaces
    return ''.join(header.lower().translate(_STRIP_TABLE).split())


def _build_alias_index() -> Dict[str, str]:
    index = {}
    for canonical in CANONICAL_FIELDS:
        for alias in HEADER_ALIASES[canonical]:
            # setdefault keeps the earliest field for an alias shared by two fields
            index.setdefault(normalize_header(alias), canonical)
    return index


_ALIAS_INDEX = _build_alias_index()


def resolve_field(header: str) -> Optional[str]:
    """Canonical field for one raw header, or None when unmapped."""
    return _ALIAS_INDEX.get(normalize_header(header))


@dataclass(frozen=True)
class HeaderMap:
    """Column position -> canonical field, plus the headers that matched nothing."""

    columns: Dict[int, str] = field(default_factory=dict)
    unmapped: Dict[int, str] = field(default_factory=dict)

    @property
    def unmapped_headers(self) -> List[str]:
        return [self.unmapped[i] for i in sorted(self.unmapped)]

    def has_field(self, canonical: str) -> bool:
        return canonical in self.columns.values()


def resolve_headers(header_line: str, delimiter: str) -> HeaderMap:
    """Build the position -> canonical field mapping for a header line."""
    columns = {}
    unmapped = {}

    for position, raw in enumerate(split_line(header_line, delimiter)):
        canonical = resolve_field(raw)
        if canonical is None:
            unmapped[position] = raw.strip().lower()
        else:
            columns[position] = canonical

    if unmapped:
        logger.debug(f"Unmapped headers ignored: {sorted(unmapped.values())}")
    return HeaderMap(columns=columns, unmapped=unmapped)
