"""Registry data models — categories, property records, and listings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional

from propreg.errors import InvalidCategoryError


class CategoryKind(str, Enum):
    """Category tags. ``Other`` is the only one that carries a label."""

    RealEstate = "RealEstate"
    Car = "Car"
    Art = "Art"
    Other = "Other"


@dataclass(frozen=True)
class PropertyCategory:
    """Tagged category value: a fixed kind, or ``Other`` plus a free-form label."""

    kind: CategoryKind
    label: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.kind, str) and not isinstance(self.kind, CategoryKind):
            try:
                object.__setattr__(self, "kind", CategoryKind(self.kind))
            except ValueError:
                raise InvalidCategoryError(f"Unknown category kind '{self.kind}'") from None
        if not isinstance(self.kind, CategoryKind):
            raise InvalidCategoryError(f"Unknown category kind {self.kind!r}")
        if self.label is not None and not isinstance(self.label, str):
            raise InvalidCategoryError(f"Category label must be a string, got {self.label!r}")
        if self.kind is CategoryKind.Other:
            if self.label is None:
                raise InvalidCategoryError("Category 'Other' requires a label")
        elif self.label is not None:
            raise InvalidCategoryError(
                f"Category '{self.kind.value}' does not take a label"
            )

    @classmethod
    def real_estate(cls) -> PropertyCategory:
        return cls(CategoryKind.RealEstate)

    @classmethod
    def car(cls) -> PropertyCategory:
        return cls(CategoryKind.Car)

    @classmethod
    def art(cls) -> PropertyCategory:
        return cls(CategoryKind.Art)

    @classmethod
    def other(cls, label: str) -> PropertyCategory:
        return cls(CategoryKind.Other, label)

    @classmethod
    def parse(cls, kind: str, label: Optional[str] = None) -> PropertyCategory:
        """Build a category from its wire form (tag name plus optional label)."""
        return cls(kind, label)

    @property
    def display(self) -> str:
        """Human-readable rendering, e.g. ``Car`` or ``Other("Boat")``."""
        if self.kind is CategoryKind.Other:
            escaped = self.label.replace("\\", "\\\\").replace('"', '\\"')
            return f'Other("{escaped}")'
        return self.kind.value

    def __str__(self) -> str:
        return self.display


@dataclass(frozen=True)
class PropertyRecord:
    """A single registered property and the digest of its image."""

    id: str
    category: PropertyCategory
    image_digest: str
    description: str = ""
    owner: str = ""


class PropertySummary(NamedTuple):
    """One row of a registry listing."""

    id: str
    category: str
    image_digest: str
