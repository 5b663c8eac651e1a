"""In-memory property registry.

A single process-wide map from property id to ``PropertyRecord``, guarded by
one reader/writer lock. Nothing is persisted; the registry lives exactly as
long as the object that owns it. Construct one instance at startup and hand
it to every caller that needs it.
"""

from __future__ import annotations

import copy
import logging
from typing import Optional

from propreg.errors import EmptyImageError, InvalidPropertyIdError
from propreg.registry.locking import ReadWriteLock
from propreg.registry.models import PropertyCategory, PropertyRecord, PropertySummary
from propreg.utils.hashing import digest

logger = logging.getLogger(__name__)


def _check_id(property_id) -> None:
    if not isinstance(property_id, str):
        raise InvalidPropertyIdError(
            f"Property id must be a string, got {type(property_id).__name__}"
        )


class PropertyRegistry:
    """Thread-safe in-memory registry of property records."""

    def __init__(self) -> None:
        self._properties: dict[str, PropertyRecord] = {}
        self._lock = ReadWriteLock()

    def upload(
        self,
        property_id: str,
        category: PropertyCategory,
        image_bytes: bytes,
        description: str,
        owner: str,
    ) -> str:
        """Hash the image and store the property under ``property_id``.

        An existing record with the same id is replaced without warning.
        Returns the image digest. Raises ``EmptyImageError`` for an empty
        payload and ``InvalidPropertyIdError`` for a non-string id; in both
        cases the registry is left untouched.
        """
        _check_id(property_id)
        if not image_bytes:
            raise EmptyImageError("Image data is empty.")

        image_digest = digest(image_bytes)
        record = PropertyRecord(
            id=property_id,
            category=category,
            image_digest=image_digest,
            description=description,
            owner=owner,
        )

        with self._lock.write():
            replaced = property_id in self._properties
            self._properties[property_id] = record

        if replaced:
            logger.info("Overwrote property %s (digest %s)", property_id, image_digest)
        else:
            logger.debug("Stored property %s (digest %s)", property_id, image_digest)
        return image_digest

    def get(self, property_id: str) -> Optional[PropertyRecord]:
        """Return a copy of the record for ``property_id``, or None."""
        with self._lock.read():
            record = self._properties.get(property_id)
        return copy.copy(record) if record is not None else None

    def list(self) -> list[PropertySummary]:
        """Snapshot of (id, category display, digest) for every record."""
        with self._lock.read():
            return [
                PropertySummary(pid, record.category.display, record.image_digest)
                for pid, record in self._properties.items()
            ]

    def delete(self, property_id: str) -> bool:
        """Remove ``property_id``. Returns False when it was not present."""
        _check_id(property_id)
        with self._lock.write():
            removed = self._properties.pop(property_id, None) is not None
        logger.debug("Delete property %s: %s", property_id, "removed" if removed else "absent")
        return removed

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._properties)

    def __contains__(self, property_id: object) -> bool:
        with self._lock.read():
            return property_id in self._properties
