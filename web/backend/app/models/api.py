"""Pydantic models for API request/response serialization.

These models mirror the propreg dataclasses and provide proper JSON
serialization for the FastAPI endpoints.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from propreg.registry.models import CategoryKind, PropertyCategory, PropertyRecord


# ---------------------------------------------------------------------------
# Property models
# ---------------------------------------------------------------------------


class CategoryModel(BaseModel):
    """Mirrors propreg.registry.models.PropertyCategory.

    ``label`` is set only for the ``Other`` kind.
    """

    kind: CategoryKind
    label: Optional[str] = None

    @classmethod
    def from_category(cls, category: PropertyCategory) -> CategoryModel:
        return cls(kind=category.kind, label=category.label)


class PropertyResponse(BaseModel):
    """Mirrors propreg.registry.models.PropertyRecord."""

    id: str
    category: CategoryModel
    image_digest: str
    description: str = ""
    owner: str = ""

    @classmethod
    def from_record(cls, record: PropertyRecord) -> PropertyResponse:
        return cls(
            id=record.id,
            category=CategoryModel.from_category(record.category),
            image_digest=record.image_digest,
            description=record.description,
            owner=record.owner,
        )


class PropertySummaryResponse(BaseModel):
    """Mirrors propreg.registry.models.PropertySummary."""

    id: str
    category: str
    image_digest: str


class UploadResponse(BaseModel):
    id: str
    image_digest: str


class DeleteResponse(BaseModel):
    id: str
    deleted: bool


# ---------------------------------------------------------------------------
# Meta models
# ---------------------------------------------------------------------------


class HealthResponse(BaseModel):
    status: str = "healthy"
    properties: int = 0
