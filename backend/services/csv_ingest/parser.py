"""
Broker CSV Parser - single entry point of the ingestion engine

Converts the raw text of a broker spreadsheet into Projects, Unit
Configurations and a diagnostics report. Performs no I/O: callers read the
file and persist the result.

Pipeline (one synchronous pass, data flows forward only):

    header line ─► detect_delimiter ─► resolve_headers
    each line   ─► split_line ─► parse_row ─► resolve_row ─► EntityAggregator
                                          └── exceptions ─► DiagnosticsCollector

Usage:
    from services.csv_ingest import parse

    result = parse(text)
    for error in result.errors:
        print(error)
    print(result.stats.configurations_created)
"""
import logging
from typing import List, Optional, Tuple

from constants import SKIP_BLANK
from services.csv_ingest.aggregator import EntityAggregator
from services.csv_ingest.continuation import ProjectAnchor, resolve_row
from services.csv_ingest.diagnostics import DiagnosticsCollector
from services.csv_ingest.errors import IngestionError
from services.csv_ingest.header_resolver import resolve_headers
from services.csv_ingest.line_splitter import (
    detect_delimiter,
    is_blank_line,
    split_line,
    split_lines,
)
from services.csv_ingest.models import ParsedResult
from services.csv_ingest.row_parser import parse_row

logger = logging.getLogger(__name__)

_BOM = '\ufeff'


def prepare_text(text: Optional[str]) -> str:
    """Drop a leading BOM and surrounding line breaks."""
    if text is None:
        return ''
    return text.lstrip(_BOM).strip('\r\n')


def split_header(text: Optional[str]) -> Tuple[List[str], str]:
    """
    Prepared lines of a file and the delimiter detected from its header.

    Raises:
        IngestionError: If the text is empty or the header line is blank
    """
    text = prepare_text(text)
    if not text.strip():
        raise IngestionError("CSV text is empty: a header line is required")

    lines = split_lines(text)
    delimiter = detect_delimiter(lines[0])
    if is_blank_line(lines[0], delimiter):
        raise IngestionError("CSV header line is blank", received_value=lines[0])
    return lines, delimiter


def parse(text: str) -> ParsedResult:
    """
    Parse broker CSV/TSV text.

    Args:
        text: Whole file contents; the first line is the header row

    Returns:
        ParsedResult with projects, configurations, row errors and stats

    Raises:
        IngestionError: If the text has no header line
    """
    lines, delimiter = split_header(text)
    header_map = resolve_headers(lines[0], delimiter)

    aggregator = EntityAggregator()
    diagnostics = DiagnosticsCollector()
    anchor: Optional[ProjectAnchor] = None

    for index in range(1, len(lines)):
        line = lines[index]
        row_number = index + 1

        if is_blank_line(line, delimiter):
            diagnostics.record_skip(row_number, SKIP_BLANK)
            continue

        try:
            row = parse_row(split_line(line, delimiter), header_map)
            decision = resolve_row(row, anchor)
            if not decision.is_valid:
                diagnostics.record_skip(row_number, decision.skip_reason)
                continue

            project, _ = aggregator.add(decision.row)
            anchor = aggregator.anchor_for(project)
        except Exception as e:
            diagnostics.record_error(row_number, line, e)

    projects = aggregator.projects
    configurations = aggregator.configurations
    stats = diagnostics.build_stats(
        total_rows=len(lines) - 1,
        projects_created=len(projects),
        configurations_created=len(configurations),
    )

    logger.info(
        f"Parsed {stats.total_rows} rows: {stats.projects_created} projects, "
        f"{stats.configurations_created} configurations, "
        f"{stats.rows_skipped} skipped, {stats.error_count} errors"
    )

    return ParsedResult(
        projects=projects,
        configurations=configurations,
        errors=list(diagnostics.errors),
        stats=stats,
        unmapped_headers=header_map.unmapped_headers,
    )
