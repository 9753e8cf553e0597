"""
Row Parser

Applies a HeaderMap to the tokens of one line and produces a RawRow: every
canonical field is present, missing cells default to "", values are
trimmed. Short rows, long rows and stray columns never raise; problems
surface later as empty fields that fail the validity filter.
"""
from typing import List

from constants import CANONICAL_FIELDS
from services.csv_ingest.header_resolver import HeaderMap
from services.csv_ingest.models import RawRow


def empty_row() -> RawRow:
    return {name: '' for name in CANONICAL_FIELDS}


def parse_row(tokens: List[str], header_map: HeaderMap) -> RawRow:
    """
    Build a RawRow from split tokens.

    When two columns resolve to the same canonical field (e.g. both "Area"
    and "Carpet"), the left-most non-empty value is kept.
    """
    row = empty_row()
    for position, canonical in header_map.columns.items():
        if position >= len(tokens):
            continue
        value = tokens[position].strip()
        if value and not row[canonical]:
            row[canonical] = value
    return row
