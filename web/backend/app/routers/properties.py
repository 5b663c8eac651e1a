"""Properties router -- upload, list, fetch, and delete property records."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile, status

from propreg.errors import LockFailure, ValidationFailure
from propreg.registry.memory_registry import PropertyRegistry
from propreg.registry.models import CategoryKind, PropertyCategory
from web.backend.app.dependencies import get_registry
from web.backend.app.models.api import (
    DeleteResponse,
    PropertyResponse,
    PropertySummaryResponse,
    UploadResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/properties", tags=["properties"])


def _lock_unavailable(exc: LockFailure) -> HTTPException:
    logger.error("Registry unavailable: %s", exc)
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
    )


@router.post(
    "",
    response_model=UploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a property",
)
async def upload_property(
    request: Request,
    category: CategoryKind = Form(..., description="Category tag"),
    id: Optional[str] = Form(None, description="Caller-supplied property id"),
    label: Optional[str] = Form(None, description="Label for the Other category"),
    description: str = Form(""),
    owner: str = Form(""),
    image: UploadFile = File(...),
    registry: PropertyRegistry = Depends(get_registry),
):
    """Hash the uploaded image and store the property under ``id``.

    An existing property with the same id is replaced. Only the image digest
    is kept; the image itself is discarded. Empty ``id`` and ``label`` values
    are kept as empty strings.
    """
    # FastAPI folds "" into "missing" for Form fields; read id/label raw.
    form = await request.form()
    property_id = form.get("id")
    if not isinstance(property_id, str):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Form field 'id' is required",
        )
    raw_label = form.get("label")
    label = raw_label if isinstance(raw_label, str) else None
    if label == "" and category is not CategoryKind.Other:
        label = None

    image_bytes = await image.read()
    try:
        cat = PropertyCategory.parse(category, label)
        digest = registry.upload(property_id, cat, image_bytes, description, owner)
    except ValidationFailure as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    except LockFailure as exc:
        raise _lock_unavailable(exc)
    return UploadResponse(id=property_id, image_digest=digest)


@router.get(
    "",
    response_model=list[PropertySummaryResponse],
    summary="List all properties",
)
async def get_properties(registry: PropertyRegistry = Depends(get_registry)):
    """List (id, category, digest) for every property, in no particular order."""
    try:
        rows = registry.list()
    except LockFailure as exc:
        raise _lock_unavailable(exc)
    return [
        PropertySummaryResponse(id=pid, category=cat, image_digest=digest)
        for pid, cat, digest in rows
    ]


@router.get(
    "/{property_id:path}",
    response_model=PropertyResponse,
    summary="Get a property",
)
async def get_property_by_id(
    property_id: str, registry: PropertyRegistry = Depends(get_registry)
):
    """Retrieve one property by id."""
    try:
        record = registry.get(property_id)
    except LockFailure as exc:
        raise _lock_unavailable(exc)
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Property '{property_id}' not found",
        )
    return PropertyResponse.from_record(record)


@router.delete(
    "/{property_id:path}",
    response_model=DeleteResponse,
    summary="Delete a property",
)
async def delete_property(
    property_id: str, registry: PropertyRegistry = Depends(get_registry)
):
    """Remove a property. ``deleted`` is false when the id was not registered."""
    try:
        deleted = registry.delete(property_id)
    except LockFailure as exc:
        raise _lock_unavailable(exc)
    return DeleteResponse(id=property_id, deleted=deleted)
