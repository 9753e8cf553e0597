"""
Utility modules for the backend.
"""
from .normalize import (
    ValidationError,
    to_int,
    to_list,
    is_blank,
    collapse_whitespace,
    slugify,
)

__all__ = [
    'ValidationError',
    'to_int',
    'to_list',
    'is_blank',
    'collapse_whitespace',
    'slugify',
]
