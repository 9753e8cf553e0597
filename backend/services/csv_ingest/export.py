"""
Import Selection & Export

Helpers for the review step between parsing and storage:

- select_for_import: keep only the configurations a reviewer ticked, plus
  the projects they reference
- map_to_property_records: flatten project + configuration pairs into the
  PropertyRecord payload the listing store accepts
- format_price / format_carpet: preview strings ("₹90L - ₹95L", "863-887 sqft")
- configurations_frame: the preview table as a pandas DataFrame
"""
import logging
from typing import Dict, Iterable, List, Sequence, Tuple

import pandas as pd

from constants import LAKH_IN_RUPEES
from schemas.property_record import PropertyRecord
from services.csv_ingest.errors import IngestionError
from services.csv_ingest.models import ParsedResult, PriceRange, Project, UnitConfiguration

logger = logging.getLogger(__name__)

PREVIEW_COLUMNS = [
    'project', 'builder', 'specification', 'tower', 'price',
    'carpet_area', 'units', 'location', 'status',
]


def _format_number(value: float) -> str:
    return f"{value:g}"


def format_price(price_range: PriceRange) -> str:
    """
    Display string for a price in lakhs.

        ₹90L             single value
        ₹90L - ₹95L      range
        <original text>  when nothing could be parsed
        -                when the cell was empty
    """
    if price_range.is_empty:
        return price_range.original_format or '-'
    low = _format_number(price_range.min)
    high = _format_number(price_range.max)
    if price_range.min == price_range.max:
        return f"₹{low}L"
    return f"₹{low}L - ₹{high}L"


def format_carpet(carpet_areas: Sequence[float]) -> str:
    if not carpet_areas:
        return '-'
    low = _format_number(min(carpet_areas))
    high = _format_number(max(carpet_areas))
    if low == high:
        return f"{low} sqft"
    return f"{low}-{high} sqft"


def select_for_import(
    result: ParsedResult,
    indices: Iterable[int]
) -> Tuple[List[Project], List[UnitConfiguration]]:
    """
    Subset a ParsedResult to the chosen configuration indices.

    Projects keep first-reference order and appear once each.

    Raises:
        IngestionError: If an index is outside the configuration list
    """
    configurations = []
    projects: Dict[str, Project] = {}
    total = len(result.configurations)

    for index in indices:
        if index < 0 or index >= total:
            raise IngestionError(
                f"Selection index {index} out of range (0-{total - 1})",
                field='selection',
                received_value=index,
            )
        configuration = result.configurations[index]
        configurations.append(configuration)
        project = result.project_for(configuration)
        if project is not None and project.project_id not in projects:
            projects[project.project_id] = project

    logger.info(f"Selected {len(configurations)} configurations from {len(projects)} projects")
    return list(projects.values()), configurations


def map_to_property_records(
    projects: Sequence[Project],
    configurations: Sequence[UnitConfiguration]
) -> List[PropertyRecord]:
    """One PropertyRecord per configuration, priced at its lower bound."""
    by_id = {project.project_id: project for project in projects}
    records = []

    for configuration in configurations:
        project = by_id.get(configuration.project_id)
        project_name = project.project_name if project else 'Property'
        records.append(PropertyRecord(
            title=f"{project_name} - {configuration.specification}",
            location=project.location if project else 'Unknown',
            bhk=configuration.specification or 'N/A',
            price=round(configuration.price_range.min * LAKH_IN_RUPEES),
            builder=project.builder if project else None,
            project_name=project.project_name if project else None,
            specification=configuration.specification,
            tower=configuration.tower,
            carpet_area=format_carpet(configuration.carpet_areas) if configuration.carpet_areas else None,
            units=configuration.total_units,
            possession=configuration.possession,
            amenities=list(configuration.amenities),
            sales_person=project.sales_person_name if project else None,
            images=list(configuration.image_urls),
        ))
    return records


def configurations_frame(result: ParsedResult) -> pd.DataFrame:
    """Preview table with one row per configuration."""
    rows = []
    for configuration in result.configurations:
        project = result.project_for(configuration)
        rows.append({
            'project': project.project_name if project else '',
            'builder': project.builder if project else '',
            'specification': configuration.specification,
            'tower': configuration.tower or '-',
            'price': format_price(configuration.price_range),
            'carpet_area': format_carpet(configuration.carpet_areas),
            'units': configuration.total_units,
            'location': project.location if project else '',
            'status': configuration.status,
        })
    return pd.DataFrame(rows, columns=PREVIEW_COLUMNS)
