"""
Continuation & Validity Filter

Broker sheets group several unit types under one project visually: the
builder and project name appear on the first row only, and the rows below
leave them blank. This module reconstructs that grouping.

Rules, applied in order to each parsed row:

    1. blank line (only delimiters/whitespace)      -> skip (blank)
    2. empty specification                          -> skip (no_specification)
    3. specification "(...)" (a note, not a unit)   -> skip (note_row)
    4. builder AND project name empty               -> continuation:
         inherit builder, project name, and, where empty, sales person,
         location, land parcel, launch date from the anchor;
         no anchor yet                              -> skip (orphan_continuation)
    5. builder, project name or location still empty -> skip (missing_required)
    6. otherwise                                    -> valid

The anchor is the ProjectAnchor of the most recent valid row. It is passed
in and returned explicitly (see ``resolve_row``) so the contiguity
precondition is visible: a continuation row attaches to whatever project
the previous valid row belonged to.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from constants import (
    FIELD_BUILDER,
    FIELD_LAND_PARCEL,
    FIELD_LAUNCH_DATE,
    FIELD_LOCATION,
    FIELD_PROJECT_NAME,
    FIELD_SALES_PERSON,
    FIELD_SPECIFICATION,
    INHERITED_FIELDS,
    REQUIRED_PROJECT_FIELDS,
    SKIP_MISSING_REQUIRED,
    SKIP_NO_SPECIFICATION,
    SKIP_NOTE_ROW,
    SKIP_ORPHAN_CONTINUATION,
)
from services.csv_ingest.models import RawRow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProjectAnchor:
    """Identifying values a continuation row may inherit."""

    builder: str
    project_name: str
    sales_person: str = ""
    location: str = ""
    land_parcel: str = ""
    launch_date: str = ""

    @classmethod
    def from_row(cls, row: RawRow) -> 'ProjectAnchor':
        return cls(
            builder=row[FIELD_BUILDER],
            project_name=row[FIELD_PROJECT_NAME],
            sales_person=row[FIELD_SALES_PERSON],
            location=row[FIELD_LOCATION],
            land_parcel=row[FIELD_LAND_PARCEL],
            launch_date=row[FIELD_LAUNCH_DATE],
        )

    def value_for(self, canonical: str) -> str:
        return {
            FIELD_SALES_PERSON: self.sales_person,
            FIELD_LOCATION: self.location,
            FIELD_LAND_PARCEL: self.land_parcel,
            FIELD_LAUNCH_DATE: self.launch_date,
        }[canonical]


@dataclass(frozen=True)
class RowDecision:
    """Outcome of filtering one row. ``row`` is set only when valid."""

    row: Optional[RawRow] = None
    skip_reason: Optional[str] = None
    inherited: bool = False

    @property
    def is_valid(self) -> bool:
        return self.row is not None


def is_note(specification: str) -> bool:
    """A parenthesized specification is a free-text annotation."""
    return specification.startswith('(') and specification.endswith(')')


def is_continuation(row: RawRow) -> bool:
    return not row[FIELD_BUILDER] and not row[FIELD_PROJECT_NAME]


def inherit_from(row: RawRow, anchor: ProjectAnchor) -> RawRow:
    """Copy of row with the anchor's identity and any missing shared fields."""
    resolved = dict(row)
    resolved[FIELD_BUILDER] = anchor.builder
    resolved[FIELD_PROJECT_NAME] = anchor.project_name
    for canonical in INHERITED_FIELDS:
        if not resolved[canonical]:
            resolved[canonical] = anchor.value_for(canonical)
    return resolved


def resolve_row(row: RawRow, anchor: Optional[ProjectAnchor]) -> RowDecision:
    """
    Apply rules 2-6 to a parsed row (blank lines are dropped before parsing).

    Args:
        row: RawRow straight from the row parser
        anchor: Anchor of the last valid row, or None at the start of a file

    Returns:
        RowDecision with the resolved row when valid, else the skip reason
    """
    specification = row[FIELD_SPECIFICATION]
    if not specification:
        return RowDecision(skip_reason=SKIP_NO_SPECIFICATION)
    if is_note(specification):
        return RowDecision(skip_reason=SKIP_NOTE_ROW)

    inherited = False
    if is_continuation(row):
        if anchor is None:
            return RowDecision(skip_reason=SKIP_ORPHAN_CONTINUATION)
        row = inherit_from(row, anchor)
        inherited = True

    if any(not row[name] for name in REQUIRED_PROJECT_FIELDS):
        return RowDecision(skip_reason=SKIP_MISSING_REQUIRED)

    return RowDecision(row=row, inherited=inherited)
