"""
Entity Aggregator

Turns valid rows into Projects and UnitConfigurations.

Project identity is the verbatim (builder, project name) pair: no case or
whitespace folding beyond the trimming the row parser already did, so
"ABC Corp" and "abc corp" become two projects. Their slug ids would
collide, so the later one is suffixed ("proj_abc_corp_x_2"). The first row
seen for a key defines the Project; later rows only add configurations.

Every valid row yields exactly one UnitConfiguration. Configuration ids
(project id + specification + tower) may collide within a run; duplicates
are kept and left for the persistence layer to reconcile.
"""
import logging
from typing import Dict, List, Optional, Tuple

from constants import (
    DEFAULT_TOWER_SLUG,
    FIELD_AMENITIES,
    FIELD_BUILDER,
    FIELD_CARPET,
    FIELD_CONSTRUCTION,
    FIELD_DETAILS,
    FIELD_FLATS,
    FIELD_FLOOR,
    FIELD_IMAGE_URL,
    FIELD_LAND_PARCEL,
    FIELD_LAUNCH_DATE,
    FIELD_LOCATION,
    FIELD_PARKING,
    FIELD_POSSESSION,
    FIELD_PRICE,
    FIELD_PROJECT_NAME,
    FIELD_SALES_PERSON,
    FIELD_SPECIFICATION,
    FIELD_TOTAL_UNITS,
    FIELD_TOWER,
    PROJECT_ID_PREFIX,
)
from services.csv_ingest import normalizers
from services.csv_ingest.continuation import ProjectAnchor
from services.csv_ingest.models import Project, RawRow, UnitConfiguration
from utils.normalize import slugify

logger = logging.getLogger(__name__)


def make_project_id(builder: str, project_name: str) -> str:
    """
    >>> make_project_id("Lodha Group", "Palava City")
    'proj_lodha_group_palava_city'
    """
    return f"{PROJECT_ID_PREFIX}_{slugify(builder)}_{slugify(project_name)}"


def make_config_id(project_id: str, specification: str, tower: str = "") -> str:
    tower_slug = slugify(tower) or DEFAULT_TOWER_SLUG
    return f"{project_id}_{slugify(specification)}_{tower_slug}"


def build_project(row: RawRow, project_id: Optional[str] = None) -> Project:
    contact = normalizers.parse_contact(row[FIELD_SALES_PERSON])
    return Project(
        project_id=project_id or make_project_id(row[FIELD_BUILDER], row[FIELD_PROJECT_NAME]),
        project_name=row[FIELD_PROJECT_NAME],
        builder=row[FIELD_BUILDER],
        location=row[FIELD_LOCATION],
        land_parcel=row[FIELD_LAND_PARCEL],
        tower_count=row[FIELD_TOWER],
        launch_date=row[FIELD_LAUNCH_DATE],
        expected_possession=row[FIELD_POSSESSION],
        sales_person_name=contact.name,
        sales_person_phone=contact.phone or '',
        details=row[FIELD_DETAILS],
    )


def build_configuration(row: RawRow, project_id: str) -> UnitConfiguration:
    return UnitConfiguration(
        config_id=make_config_id(project_id, row[FIELD_SPECIFICATION], row[FIELD_TOWER]),
        project_id=project_id,
        specification=row[FIELD_SPECIFICATION],
        price_range=normalizers.parse_price_range(row[FIELD_PRICE]),
        carpet_areas=normalizers.parse_carpet_areas(row[FIELD_CARPET]),
        tower=row[FIELD_TOWER],
        floor=row[FIELD_FLOOR],
        flats_per_floor=row[FIELD_FLATS],
        construction=row[FIELD_CONSTRUCTION],
        parking=row[FIELD_PARKING],
        possession=row[FIELD_POSSESSION],
        details=row[FIELD_DETAILS],
        total_units=normalizers.parse_total_units(row[FIELD_TOTAL_UNITS]),
        amenities=normalizers.parse_amenities(row[FIELD_AMENITIES]),
        image_urls=normalizers.parse_image_urls(row[FIELD_IMAGE_URL]),
        status=normalizers.infer_status(row[FIELD_DETAILS]),
        raw_csv_row=dict(row),
    )


class EntityAggregator:
    """
    Accumulates the entities of a single parse run.

    Not shared between runs: ``parse`` creates a fresh aggregator per call.
    """

    def __init__(self):
        self._projects: Dict[Tuple[str, str], Project] = {}
        self._anchors: Dict[Tuple[str, str], ProjectAnchor] = {}
        self._configurations: List[UnitConfiguration] = []

    def _unique_project_id(self, row: RawRow) -> str:
        """Slug id of a new key, suffixed _2, _3... when another key already slugs to it."""
        base = make_project_id(row[FIELD_BUILDER], row[FIELD_PROJECT_NAME])
        taken = {project.project_id for project in self._projects.values()}
        project_id = base
        suffix = 2
        while project_id in taken:
            project_id = f"{base}_{suffix}"
            suffix += 1
        return project_id

    def add(self, row: RawRow) -> Tuple[Project, UnitConfiguration]:
        """Register a valid row; returns its project and the new configuration."""
        key = (row[FIELD_BUILDER], row[FIELD_PROJECT_NAME])
        project = self._projects.get(key)
        is_new = project is None
        if is_new:
            project = build_project(row, self._unique_project_id(row))

        # Nothing is registered until both entities built, so a failing row leaves no trace
        configuration = build_configuration(row, project.project_id)
        if is_new:
            self._projects[key] = project
            self._anchors[key] = ProjectAnchor.from_row(row)
            logger.debug(f"New project {project.project_id}")
        self._configurations.append(configuration)
        return project, configuration

    def anchor_for(self, project: Project) -> ProjectAnchor:
        """Inheritance anchor (first-seen row values) of a registered project."""
        return self._anchors[project.key]

    @property
    def projects(self) -> List[Project]:
        return list(self._projects.values())

    @property
    def configurations(self) -> List[UnitConfiguration]:
        return list(self._configurations)
