"""Registry — the in-memory store of property records.

The registry provides:
- Upload: hash an image and store the property under a caller-supplied id
- Lookup: fetch one record by id
- Listing: enumerate (id, category, digest) for every record
- Deletion: remove a record by id
"""

from propreg.registry.memory_registry import PropertyRegistry
from propreg.registry.models import (
    CategoryKind,
    PropertyCategory,
    PropertyRecord,
    PropertySummary,
)

__all__ = [
    "CategoryKind",
    "PropertyCategory",
    "PropertyRecord",
    "PropertyRegistry",
    "PropertySummary",
]
