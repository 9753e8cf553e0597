"""
Property Record Contract - payload handed to the listing store

One PropertyRecord per imported UnitConfiguration, flattened with the
fields of its Project. Output fields are camelCase (projectName,
carpetArea, salesPerson); snake_case names are accepted on input.

Key features:
- frozen=True: Immutable once built
- str_strip_whitespace=True: Cell whitespace never leaks into storage
- price is whole rupees, never negative
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

PROPERTY_TYPE_APARTMENT = 'apartment'
PROPERTY_CATEGORY_RESIDENTIAL = 'residential'
PROPERTY_PURPOSE_SELL = 'sell'


class PropertyRecord(BaseModel):
    """Flat listing record built from a project + configuration pair."""

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        populate_by_name=True,
        extra='ignore',
    )

    title: str
    location: str
    bhk: str
    price: int = Field(default=0, description="Lower bound in rupees")
    type: str = PROPERTY_TYPE_APARTMENT
    category: str = PROPERTY_CATEGORY_RESIDENTIAL
    purpose: str = PROPERTY_PURPOSE_SELL
    builder: Optional[str] = None
    project_name: Optional[str] = Field(default=None, alias='projectName')
    specification: Optional[str] = None
    tower: Optional[str] = None
    carpet_area: Optional[str] = Field(default=None, alias='carpetArea')
    units: int = 0
    possession: Optional[str] = None
    amenities: List[str] = Field(default_factory=list)
    sales_person: Optional[str] = Field(default=None, alias='salesPerson')
    images: List[str] = Field(default_factory=list)

    @field_validator('price', 'units')
    @classmethod
    def non_negative(cls, v):
        if v < 0:
            raise ValueError("must be >= 0")
        return v

    @field_validator('builder', 'tower', 'possession', 'sales_person', mode='before')
    @classmethod
    def blank_to_none(cls, v):
        """Empty cells are stored as null, not as empty strings."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)
