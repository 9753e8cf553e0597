# Storage contract package
from .property_record import (
    PropertyRecord,
    PROPERTY_TYPE_APARTMENT,
    PROPERTY_CATEGORY_RESIDENTIAL,
    PROPERTY_PURPOSE_SELL,
)

__all__ = [
    'PropertyRecord',
    'PROPERTY_TYPE_APARTMENT',
    'PROPERTY_CATEGORY_RESIDENTIAL',
    'PROPERTY_PURPOSE_SELL',
]
