"""
Ingestion Data Models

Entities produced by one parse run. All are plain dataclasses; the
persistence collaborator consumes them through ``to_dict()``, which emits
the camelCase shape stored by the listing database.

    Project 1 ── * UnitConfiguration      (linked by project_id)

Entities are frozen: a Project is never mutated after the first row that
references it, and a UnitConfiguration is built once per valid row.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from constants import STATUS_AVAILABLE, FURNITURE_UNFURNISHED

# Canonical field name -> trimmed cell value, one per input line
RawRow = Dict[str, str]


@dataclass(frozen=True)
class PriceRange:
    """Price normalized to lakhs. Both bounds are 0 when nothing parsed."""

    min: float = 0.0
    max: float = 0.0
    original_format: str = ""
    is_range: bool = False

    @property
    def is_empty(self) -> bool:
        return self.min == 0 and self.max == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'min': self.min,
            'max': self.max,
            'originalFormat': self.original_format,
            'isRange': self.is_range,
        }


@dataclass(frozen=True)
class ContactInfo:
    name: str = ""
    phone: Optional[str] = None
    raw: str = ""


@dataclass(frozen=True)
class Project:
    """A real-estate development from one builder."""

    project_id: str
    project_name: str
    builder: str
    location: str
    land_parcel: str = ""
    tower_count: str = ""
    launch_date: str = ""
    expected_possession: str = ""
    sales_person_name: str = ""
    sales_person_phone: str = ""
    details: str = ""

    @property
    def key(self) -> tuple:
        """Identity within a run: verbatim (builder, project name)."""
        return (self.builder, self.project_name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'projectId': self.project_id,
            'projectName': self.project_name,
            'builder': self.builder,
            'location': self.location,
            'landParcel': self.land_parcel,
            'towerCount': self.tower_count,
            'launchDate': self.launch_date,
            'expectedPossession': self.expected_possession,
            'salesPersonName': self.sales_person_name,
            'salesPersonPhone': self.sales_person_phone,
            'details': self.details,
        }


@dataclass(frozen=True)
class UnitConfiguration:
    """One marketable unit type (e.g. a BHK type in a tower) of a Project."""

    config_id: str
    project_id: str
    specification: str
    price_range: PriceRange
    carpet_areas: List[float] = field(default_factory=list)
    tower: str = ""
    floor: str = ""
    flats_per_floor: str = ""
    construction: str = ""
    parking: str = ""
    possession: str = ""
    details: str = ""
    total_units: int = 0
    amenities: List[str] = field(default_factory=list)
    image_urls: List[str] = field(default_factory=list)
    status: str = STATUS_AVAILABLE
    furniture_type: str = FURNITURE_UNFURNISHED
    raw_csv_row: RawRow = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'configId': self.config_id,
            'projectId': self.project_id,
            'specification': self.specification,
            'tower': self.tower,
            'floor': self.floor,
            'flatsPerFloor': self.flats_per_floor,
            'construction': self.construction,
            'parking': self.parking,
            'possession': self.possession,
            'details': self.details,
            'carpetAreas': list(self.carpet_areas),
            'priceRange': self.price_range.to_dict(),
            'totalUnits': self.total_units,
            'amenities': list(self.amenities),
            'imageUrls': list(self.image_urls),
            'status': self.status,
            'furnitureType': self.furniture_type,
            'rawCsvRow': dict(self.raw_csv_row),
        }


@dataclass(frozen=True)
class ParseError:
    """A row that raised during processing. Never halts the run."""

    row_number: int
    field: str
    value: str
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'rowNumber': self.row_number,
            'field': self.field,
            'value': self.value,
            'reason': self.reason,
        }

    def __str__(self) -> str:
        return f"Row {self.row_number} [{self.field}]: {self.reason}"


@dataclass(frozen=True)
class ParseStats:
    total_rows: int = 0
    projects_created: int = 0
    configurations_created: int = 0
    error_count: int = 0
    rows_skipped: int = 0
    skip_reasons: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'totalRows': self.total_rows,
            'projectsCreated': self.projects_created,
            'configurationsCreated': self.configurations_created,
            'errorCount': self.error_count,
            'rowsSkipped': self.rows_skipped,
            'skipReasons': dict(self.skip_reasons),
        }


@dataclass(frozen=True)
class ParsedResult:
    """The sole output of ``parse(text)``."""

    projects: List[Project]
    configurations: List[UnitConfiguration]
    errors: List[ParseError]
    stats: ParseStats
    unmapped_headers: List[str] = field(default_factory=list)

    def project_for(self, configuration: UnitConfiguration) -> Optional[Project]:
        """Owning project of a configuration, or None if not in this result."""
        for project in self.projects:
            if project.project_id == configuration.project_id:
                return project
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'projects': [p.to_dict() for p in self.projects],
            'configurations': [c.to_dict() for c in self.configurations],
            'errors': [e.to_dict() for e in self.errors],
            'stats': self.stats.to_dict(),
            'unmappedHeaders': list(self.unmapped_headers),
        }
