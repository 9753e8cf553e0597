"""
Broker CSV Ingestion Package

Turns broker spreadsheets (CSV/TSV text) into Projects and Unit
Configurations:
- parse: the single entry point (text -> ParsedResult)
- normalizers: price, area, contact, amenity, image and status parsing
- clean_csv_text: pre-clean pass reporting what the automatic fixes did
- select_for_import / map_to_property_records: review-to-storage helpers
"""

from .errors import IngestionError
from .models import (
    ContactInfo,
    ParsedResult,
    ParseError,
    ParseStats,
    PriceRange,
    Project,
    RawRow,
    UnitConfiguration,
)
from .parser import parse
from .normalizers import (
    infer_status,
    parse_amenities,
    parse_carpet_areas,
    parse_contact,
    parse_image_urls,
    parse_price_range,
    parse_total_units,
)
from .cleaner import CleanedCsv, clean_csv_text, normalize_price_text, normalize_tower
from .diagnostics import reconciliation_check, summarize
from .export import (
    configurations_frame,
    format_carpet,
    format_price,
    map_to_property_records,
    select_for_import,
)

__all__ = [
    'IngestionError',
    'ContactInfo',
    'ParsedResult',
    'ParseError',
    'ParseStats',
    'PriceRange',
    'Project',
    'RawRow',
    'UnitConfiguration',
    'parse',
    'infer_status',
    'parse_amenities',
    'parse_carpet_areas',
    'parse_contact',
    'parse_image_urls',
    'parse_price_range',
    'parse_total_units',
    'CleanedCsv',
    'clean_csv_text',
    'normalize_price_text',
    'normalize_tower',
    'reconciliation_check',
    'summarize',
    'configurations_frame',
    'format_carpet',
    'format_price',
    'map_to_property_records',
    'select_for_import',
]
