"""
Centralized Constants - SINGLE SOURCE OF TRUTH

Canonical CSV field names, header aliases, unit multipliers and status
labels used by the broker CSV ingestion engine.

DO NOT duplicate these definitions in other files.

Reference: Indian numbering
- 1 lakh  = 100,000
- 1 crore = 100 lakh = 10,000,000
"""
from types import MappingProxyType

# =============================================================================
# CANONICAL FIELDS
# =============================================================================

FIELD_SR_NO = 'srNo'
FIELD_BUILDER = 'builder'
FIELD_SALES_PERSON = 'salesPerson'
FIELD_PROJECT_NAME = 'projectName'
FIELD_LAND_PARCEL = 'landParcel'
FIELD_TOWER = 'tower'
FIELD_CONSTRUCTION = 'construction'
FIELD_AMENITIES = 'amenities'
FIELD_LOCATION = 'location'
FIELD_POSSESSION = 'possession'
FIELD_LAUNCH_DATE = 'launchDate'
FIELD_SPECIFICATION = 'specification'
FIELD_CARPET = 'carpet'
FIELD_PRICE = 'price'
FIELD_FLOOR = 'floor'
FIELD_FLATS = 'flats'
FIELD_TOTAL_UNITS = 'totalUnits'
FIELD_PARKING = 'parking'
FIELD_DETAILS = 'details'
FIELD_IMAGE_URL = 'imageUrl'

# Declaration order is the header-matching priority (first match wins)
CANONICAL_FIELDS = (
    FIELD_SR_NO,
    FIELD_BUILDER,
    FIELD_SALES_PERSON,
    FIELD_PROJECT_NAME,
    FIELD_LAND_PARCEL,
    FIELD_TOWER,
    FIELD_CONSTRUCTION,
    FIELD_AMENITIES,
    FIELD_LOCATION,
    FIELD_POSSESSION,
    FIELD_LAUNCH_DATE,
    FIELD_SPECIFICATION,
    FIELD_CARPET,
    FIELD_PRICE,
    FIELD_FLOOR,
    FIELD_FLATS,
    FIELD_TOTAL_UNITS,
    FIELD_PARKING,
    FIELD_DETAILS,
    FIELD_IMAGE_URL,
)

# Fields a continuation row inherits from its anchor when its own value is empty
INHERITED_FIELDS = (
    FIELD_SALES_PERSON,
    FIELD_LOCATION,
    FIELD_LAND_PARCEL,
    FIELD_LAUNCH_DATE,
)

REQUIRED_PROJECT_FIELDS = (FIELD_BUILDER, FIELD_PROJECT_NAME, FIELD_LOCATION)


# =============================================================================
# HEADER ALIASES
# =============================================================================
#
# Aliases are compared after header normalization (lower-case, whitespace,
# underscores, hyphens, slashes, dots and parentheses removed), so
# "Flat/Floor", "flats per floor" and "FLATS_PER_FLOOR" collapse together.

HEADER_ALIASES = MappingProxyType({
    FIELD_SR_NO: ('sr no', 'sr nos', 'sr. no.', 'sno', 's no', 'serial no', 'serial number'),
    FIELD_BUILDER: ('builder', 'builder name', 'developer', 'developer name'),
    FIELD_SALES_PERSON: (
        'sales person', 'sales personnel', 'salesperson', 'sales',
        'sales contact', 'contact person', 'contact',
    ),
    FIELD_PROJECT_NAME: ('project name', 'projectname', 'project'),
    FIELD_LAND_PARCEL: ('land parcel', 'land', 'land area', 'parcel'),
    FIELD_TOWER: ('tower', 'towers', 'block', 'wing'),
    FIELD_CONSTRUCTION: ('construction', 'construction type', 'technology'),
    FIELD_AMENITIES: ('amenities', 'amenity'),
    FIELD_LOCATION: ('location', 'locality', 'area name', 'address'),
    FIELD_POSSESSION: ('possession', 'possession date', 'possession status'),
    FIELD_LAUNCH_DATE: ('launch date', 'launch', 'launched'),
    FIELD_SPECIFICATION: (
        'specification', 'spec', 'bhk', 'bhk type', 'configuration',
        'unit type', 'type',
    ),
    FIELD_CARPET: ('carpet', 'carpet area', 'carpet area (sqft)', 'carpet (sq ft)', 'area'),
    FIELD_PRICE: ('price', 'cost', 'price range', 'all in price', 'price (lakhs)'),
    FIELD_FLOOR: ('floor', 'floors', 'floor count'),
    FIELD_FLATS: ('flat/floor', 'flats/floor', 'flat per floor', 'flats per floor'),
    FIELD_TOTAL_UNITS: ('total units', 'total unit', 'units', 'no of units', 'inventory'),
    FIELD_PARKING: ('parking',),
    FIELD_DETAILS: ('details', 'remarks', 'description', 'notes', 'comments'),
    FIELD_IMAGE_URL: ('image url', 'image urls', 'image', 'images', 'photos'),
})

# Characters removed from a header before alias comparison
HEADER_STRIP_CHARS = ' \t_-/.()'


# =============================================================================
# DELIMITERS
# =============================================================================

# Detection priority on the header line
DELIMITER_PRIORITY = ('\t', ';', ',')
DEFAULT_DELIMITER = ','


# =============================================================================
# PRICE UNITS (normalized to lakhs)
# =============================================================================

LAKH_IN_RUPEES = 100_000
CRORE_IN_LAKHS = 100

UNIT_LAKH = 'lakh'
UNIT_CRORE = 'crore'


# =============================================================================
# CONFIGURATION STATUS
# =============================================================================

STATUS_AVAILABLE = 'available'
STATUS_SOLD_OUT = 'sold-out'
STATUS_LAUNCHING_SOON = 'launching-soon'
STATUS_FUTURE_PHASE = 'future-phase'

# Substring -> status, checked in order against lower-cased details
STATUS_KEYWORDS = (
    ('sold out', STATUS_SOLD_OUT),
    ('soldout', STATUS_SOLD_OUT),
    ('launching', STATUS_LAUNCHING_SOON),
    ('future', STATUS_FUTURE_PHASE),
)

FURNITURE_UNFURNISHED = 'unfurnished'


# =============================================================================
# AMENITIES / IDS
# =============================================================================

ALL_AMENITIES = 'All Amenities'

PROJECT_ID_PREFIX = 'proj'
DEFAULT_TOWER_SLUG = 'default'

# ParseError.field for failures not attributable to a single column
GENERAL_ERROR_FIELD = 'general'


# =============================================================================
# SKIP REASONS (validity filter)
# =============================================================================

SKIP_BLANK = 'blank'
SKIP_NO_SPECIFICATION = 'no_specification'
SKIP_NOTE_ROW = 'note_row'
SKIP_ORPHAN_CONTINUATION = 'orphan_continuation'
SKIP_MISSING_REQUIRED = 'missing_required'

SKIP_REASONS = (
    SKIP_BLANK,
    SKIP_NO_SPECIFICATION,
    SKIP_NOTE_ROW,
    SKIP_ORPHAN_CONTINUATION,
    SKIP_MISSING_REQUIRED,
)
