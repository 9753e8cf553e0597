"""
Diagnostics Collector

Per-run bookkeeping for a parse: row errors, skip counts and the summary
statistics handed to the reviewer.

Source reconciliation (every data line is accounted for exactly once):

    total_rows = configurations + rows_skipped + errors
"""
import logging
from collections import Counter
from typing import List, Tuple

from constants import GENERAL_ERROR_FIELD, SKIP_REASONS
from services.csv_ingest.models import ParseError, ParseStats

logger = logging.getLogger(__name__)


class DiagnosticsCollector:
    """Accumulates ParseErrors and skip counters for one parse run."""

    def __init__(self):
        self.errors: List[ParseError] = []
        self.skips: Counter = Counter()

    def record_error(
        self,
        row_number: int,
        value: str,
        error: Exception,
        field: str = GENERAL_ERROR_FIELD
    ) -> ParseError:
        """Convert an exception raised while processing a row into a ParseError."""
        reason = str(error) or type(error).__name__
        parse_error = ParseError(
            row_number=row_number,
            field=field,
            value=value,
            reason=reason,
        )
        self.errors.append(parse_error)
        logger.warning(f"Row {row_number}: {reason}")
        return parse_error

    def record_skip(self, row_number: int, reason: str):
        """Count a row dropped by the validity filter (not an error)."""
        self.skips[reason] += 1
        logger.debug(f"Row {row_number}: skipped ({reason})")

    @property
    def rows_skipped(self) -> int:
        return sum(self.skips.values())

    def build_stats(
        self,
        total_rows: int,
        projects_created: int,
        configurations_created: int
    ) -> ParseStats:
        return ParseStats(
            total_rows=total_rows,
            projects_created=projects_created,
            configurations_created=configurations_created,
            error_count=len(self.errors),
            rows_skipped=self.rows_skipped,
            skip_reasons={reason: self.skips[reason] for reason in SKIP_REASONS if self.skips[reason]},
        )


def reconciliation_check(stats: ParseStats) -> Tuple[bool, int, str]:
    """
    Check that every data row was loaded, skipped or rejected.

    Returns:
        (is_ok, unaccounted, message)
    """
    accounted = stats.configurations_created + stats.rows_skipped + stats.error_count
    unaccounted = stats.total_rows - accounted
    if unaccounted == 0:
        return (True, 0, "OK: all rows accounted for")
    return (False, unaccounted, f"MISMATCH: {unaccounted} rows unaccounted")


def summarize(stats: ParseStats) -> str:
    """Human-readable summary of a parse run."""
    lines = [
        f"Rows: {stats.total_rows}",
        f"Projects: {stats.projects_created}",
        f"Configurations: {stats.configurations_created}",
        f"Skipped: {stats.rows_skipped}",
        f"Errors: {stats.error_count}",
    ]
    if stats.skip_reasons:
        breakdown = ', '.join(f"{reason}={count}" for reason, count in stats.skip_reasons.items())
        lines.append(f"Skip reasons: {breakdown}")
    return '\n'.join(lines)
