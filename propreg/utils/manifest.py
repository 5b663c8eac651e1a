"""Seed manifests — load a batch of properties from a YAML file.

Manifest layout::

    properties:
      - id: p1
        category: RealEstate
        image: images/lake-house.jpg
        description: lake house
        owner: alice
      - id: p2
        category: {kind: Other, label: Boat}
        image: images/boat.png
        owner: bob

Image paths are resolved relative to the manifest file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

from propreg.errors import InvalidCategoryError, ManifestError
from propreg.registry.memory_registry import PropertyRegistry
from propreg.registry.models import PropertyCategory

logger = logging.getLogger(__name__)

REQUIRED_ENTRY_FIELDS = ("id", "category", "image")


@dataclass
class SeedEntry:
    """One property to upload, with its image still on disk."""

    id: str
    category: PropertyCategory
    image_path: Path
    description: str = ""
    owner: str = ""


def _parse_category(raw) -> PropertyCategory:
    if isinstance(raw, str):
        return PropertyCategory.parse(raw)
    if isinstance(raw, dict):
        return PropertyCategory.parse(raw.get("kind", ""), raw.get("label"))
    raise InvalidCategoryError(f"Unsupported category value: {raw!r}")


def load_manifest(manifest_path: str | Path) -> list[SeedEntry]:
    """Parse and validate a manifest.

    Every problem is collected before raising, so a single ``ManifestError``
    reports all of them.
    """
    path = Path(manifest_path)
    if not path.exists():
        raise ManifestError(str(path), [f"File not found: {path}"])

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ManifestError(str(path), [f"Invalid YAML: {e}"])

    if not isinstance(data, dict) or not isinstance(data.get("properties"), list):
        raise ManifestError(str(path), ["Missing top-level 'properties' list"])

    issues: list[str] = []
    entries: list[SeedEntry] = []
    for i, item in enumerate(data["properties"]):
        where = f"properties[{i}]"
        if not isinstance(item, dict):
            issues.append(f"{where} is not a mapping")
            continue

        missing = [name for name in REQUIRED_ENTRY_FIELDS if not item.get(name)]
        if missing:
            issues.append(f"{where} missing required field(s): {', '.join(missing)}")
            continue

        try:
            category = _parse_category(item["category"])
        except InvalidCategoryError as e:
            issues.append(f"{where}: {e}")
            continue

        image_path = (path.parent / str(item["image"])).resolve()
        if not image_path.is_file():
            issues.append(f"{where}: image not found: {image_path}")
            continue

        entries.append(
            SeedEntry(
                id=str(item["id"]),
                category=category,
                image_path=image_path,
                description=str(item.get("description", "")),
                owner=str(item.get("owner", "")),
            )
        )

    if issues:
        raise ManifestError(str(path), issues)
    return entries


def seed_registry(registry: PropertyRegistry, entries: list[SeedEntry]) -> dict[str, str]:
    """Upload every entry. Returns id -> digest in manifest order."""
    digests: dict[str, str] = {}
    for entry in entries:
        digests[entry.id] = registry.upload(
            entry.id,
            entry.category,
            entry.image_path.read_bytes(),
            entry.description,
            entry.owner,
        )
    logger.info("Seeded %d properties", len(digests))
    return digests
