"""
Root pytest configuration for backend tests.

Provides:
- backend/ on sys.path so imports like `from services.csv_ingest import parse` work
- Shared broker sheet fixtures
"""

import sys
from pathlib import Path

# Add backend directory to Python path
backend_dir = Path(__file__).parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

import pytest


BROKER_HEADER = (
    "Sr No,Builder,Sales Person,Project name,Land Parcel,Tower,Floor,"
    "Specification,Carpet,Price,Flat/Floor,Total Units,Possession,Parking,"
    "Construction,Amenities,Location,Launch Date,Floor Rise,Details"
)

BROKER_SHEET = "\n".join([
    BROKER_HEADER,
    '1,Lodha Group,Rahul Sharma - 98765 43210,Palava City,55 Acre,Tower 1,B+G+20,'
    '2BHK,"863, 887",90L-95L,4,120,Dec 2026,Single,Mivan,All Amenities,Dombivli,2024,,',
    ',,,,,Tower 1,B+G+20,3BHK,1100,1.10 to 1.16 cr,4,80,Dec 2026,2=1,Mivan,"Gym, Pool",,,,Launching soon',
    ',,,,,,,(Aura heights / Iris Riverside),,,,,,,,,,,,',
    ',,,,,,,,,,,,,,,,,,,',
    '2,Godrej Properties,"Priya, +91 99887 76655",Godrej Woods,3.5 Acre,5,G+30,'
    '2BHK,750,1.2cr,6,300,2027,Single,RCC,,Thane,Feb 2025,,Sold out',
])


@pytest.fixture
def broker_sheet():
    """A realistic comma-separated broker sheet with continuation and note rows."""
    return BROKER_SHEET


@pytest.fixture
def broker_header():
    return BROKER_HEADER
