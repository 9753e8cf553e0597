"""
CSV Pre-Clean Pass

Rewrites a broker file into an explicit form before review: blank, note
and unit-less rows are dropped, continuation rows get their inherited
project values written in, and header spacing is normalized. Every drop is
reported as an issue and every rewrite as a change, so the reviewer can see
exactly what the automatic fixes did.

The cleaned text parses to the same configurations as the original:

    parse(clean_csv_text(text).cleaned_text).configurations
        == parse(text).configurations     (ignoring error rows)
"""
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from constants import (
    FIELD_BUILDER,
    FIELD_PROJECT_NAME,
    FIELD_SPECIFICATION,
    INHERITED_FIELDS,
    SKIP_MISSING_REQUIRED,
    SKIP_NO_SPECIFICATION,
    SKIP_NOTE_ROW,
    SKIP_ORPHAN_CONTINUATION,
)
from services.csv_ingest.continuation import ProjectAnchor, resolve_row
from services.csv_ingest.header_resolver import HeaderMap, resolve_headers
from services.csv_ingest.line_splitter import is_blank_line, split_line
from services.csv_ingest.parser import split_header
from services.csv_ingest.row_parser import parse_row

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
_PRICE_RANGE_WORD = re.compile(r"\s+to\s+", flags=re.IGNORECASE)
_TOWER_STATUS = re.compile(r"(\d+)\s*(Soldout|Launched|Future)", flags=re.IGNORECASE)

_SKIP_MESSAGES = {
    SKIP_NO_SPECIFICATION: "No specification - skipped",
    SKIP_ORPHAN_CONTINUATION: "Continuation row with no project above it - skipped",
    SKIP_MISSING_REQUIRED: "Missing builder, project name or location - skipped",
}


@dataclass
class CleanedCsv:
    cleaned_text: str
    original_rows: int
    cleaned_rows: int
    issues: List[str] = field(default_factory=list)
    changes: List[str] = field(default_factory=list)

    @property
    def has_findings(self) -> bool:
        return bool(self.issues or self.changes)


def quote_cell(value: str, delimiter: str) -> str:
    """Quote a cell when it holds the delimiter, a quote or a line break."""
    if any(ch in value for ch in (delimiter, '"', '\n', '\r')):
        return '"' + value.replace('"', '""') + '"'
    return value


def join_cells(cells: List[str], delimiter: str) -> str:
    return delimiter.join(quote_cell(cell, delimiter) for cell in cells)


def _clean_header(header_line: str, delimiter: str) -> Tuple[str, bool]:
    cells = split_line(header_line, delimiter)
    cleaned = [_WHITESPACE.sub(' ', cell).strip() for cell in cells]
    return join_cells(cleaned, delimiter), cleaned != cells


def _first_positions(header_map: HeaderMap) -> Dict[str, int]:
    positions = {}
    for position, canonical in header_map.columns.items():
        positions.setdefault(canonical, position)
    return positions


def _write_inherited(
    tokens: List[str],
    resolved: Dict[str, str],
    positions: Dict[str, int],
    width: int
) -> List[str]:
    cells = list(tokens) + [''] * max(0, width - len(tokens))
    for canonical in (FIELD_BUILDER, FIELD_PROJECT_NAME) + INHERITED_FIELDS:
        position = positions.get(canonical)
        if position is not None and not cells[position].strip():
            cells[position] = resolved[canonical]
    return cells


def clean_csv_text(text: str) -> CleanedCsv:
    """
    Run the pre-clean pass over a whole file.

    Raises:
        IngestionError: If the text has no header line
    """
    lines, delimiter = split_header(text)
    header_map = resolve_headers(lines[0], delimiter)
    positions = _first_positions(header_map)
    width = len(split_line(lines[0], delimiter))

    issues = []
    changes = []

    header, header_changed = _clean_header(lines[0], delimiter)
    if header_changed:
        changes.append("Normalized column header spacing")
    cleaned_lines = [header]

    anchors: Dict[Tuple[str, str], ProjectAnchor] = {}
    anchor: Optional[ProjectAnchor] = None

    for index in range(1, len(lines)):
        line = lines[index]
        row_number = index + 1

        if is_blank_line(line, delimiter):
            issues.append(f"Row {row_number}: Empty row - skipped")
            continue

        tokens = split_line(line, delimiter)
        row = parse_row(tokens, header_map)
        decision = resolve_row(row, anchor)

        if not decision.is_valid:
            if decision.skip_reason == SKIP_NOTE_ROW:
                issues.append(f'Row {row_number}: Note row "{row[FIELD_SPECIFICATION]}" - skipped')
            else:
                issues.append(f"Row {row_number}: {_SKIP_MESSAGES[decision.skip_reason]}")
            continue

        resolved = decision.row
        key = (resolved[FIELD_BUILDER], resolved[FIELD_PROJECT_NAME])
        anchor = anchors.setdefault(key, ProjectAnchor.from_row(resolved))

        if decision.inherited:
            cleaned_lines.append(join_cells(_write_inherited(tokens, resolved, positions, width), delimiter))
            changes.append(f"Row {row_number}: Inherited project info from previous row")
        else:
            cleaned_lines.append(line)

    logger.info(f"Pre-clean: {len(issues)} issues, {len(changes)} changes")
    return CleanedCsv(
        cleaned_text='\n'.join(cleaned_lines),
        original_rows=len(lines),
        cleaned_rows=len(cleaned_lines) - 1,
        issues=issues,
        changes=changes,
    )


# =============================================================================
# Cell-level normalizers used by the review screen
# =============================================================================

def normalize_price_text(price: Optional[str]) -> str:
    """
    Compact a price cell for display.

        >>> normalize_price_text("1.10 to 1.16 cr")
        '1.10-1.16cr'
        >>> normalize_price_text("79 to 84 L")
        '79-84L'
    """
    if not price:
        return ''
    price = _PRICE_RANGE_WORD.sub('-', price)
    return _WHITESPACE.sub('', price)


def normalize_tower(tower: Optional[str]) -> str:
    """
    Expand a tower count with a glued status word.

        >>> normalize_tower("18 Soldout")
        '18 Tower (Soldout)'
    """
    if not tower:
        return ''
    return _TOWER_STATUS.sub(r'\1 Tower (\2)', tower)
