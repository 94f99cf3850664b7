"""Inventory, selection and scan review endpoints."""

from __future__ import annotations

import base64
import binascii
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from freshfocus.api.schemas import (
    ManualIngredient,
    ScanItemEdit,
    ScanRequest,
    SelectionRequest,
    UseRequest,
    scan_draft_to_dict,
    scan_state_to_dict,
)
from freshfocus.domain.expiry import DEFAULT_DAYS_LEFT, ExpiryRisk, expiry_date_for
from freshfocus.services.capture import StaticFrameSource
from freshfocus.services.inventory import ingredient_to_dict

if TYPE_CHECKING:
    from freshfocus.containers import AppContainer
    from freshfocus.services.fridge import FridgeController

router = APIRouter(tags=["inventory"])


def _fridge(request: Request) -> FridgeController:
    container: AppContainer = request.app.state.container
    return container.fridge


@router.get("/ingredients")
async def list_ingredients(
    request: Request, risk: ExpiryRisk | None = None
) -> dict[str, object]:
    """Return ingredients that still have quantity left."""
    items = _fridge(request).store.filter_by_risk(risk)
    return {"ingredients": [ingredient_to_dict(item) for item in items]}


@router.post("/ingredients", status_code=status.HTTP_201_CREATED)
async def add_ingredient(
    payload: ManualIngredient, request: Request
) -> dict[str, object]:
    """Add a hand-entered ingredient."""
    expiry_date = payload.expiry_date or expiry_date_for(DEFAULT_DAYS_LEFT)
    created = _fridge(request).manual_add(
        name=payload.name,
        quantity=payload.quantity,
        unit=payload.unit,
        expiry_date=expiry_date,
    )
    if created is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Ingredient name is required.",
        )
    return ingredient_to_dict(created)


@router.post("/ingredients/{ingredient_id}/use")
async def use_ingredient(
    ingredient_id: str, payload: UseRequest, request: Request
) -> dict[str, object]:
    """Record that some of an ingredient was used."""
    updated = _fridge(request).use(ingredient_id, payload.amount)
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return ingredient_to_dict(updated)


@router.post("/ingredients/{ingredient_id}/decrease")
async def decrease_ingredient(
    ingredient_id: str, request: Request
) -> dict[str, object]:
    """Use a single unit of an ingredient."""
    updated = _fridge(request).decrease(ingredient_id)
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return ingredient_to_dict(updated)


@router.delete("/ingredients/{ingredient_id}")
async def delete_ingredient(ingredient_id: str, request: Request) -> dict[str, bool]:
    """Remove an ingredient; deleting an unknown id is not an error."""
    return {"deleted": _fridge(request).delete(ingredient_id)}


@router.put("/selection/{ingredient_id}")
async def select_ingredient(
    ingredient_id: str, payload: SelectionRequest, request: Request
) -> dict[str, object]:
    """Include or exclude an ingredient from the next recipe request."""
    selected = _fridge(request).select(ingredient_id, payload.included)
    return {"selected": [ingredient_to_dict(item) for item in selected]}


@router.get("/selection")
async def list_selection(request: Request) -> dict[str, object]:
    fridge = _fridge(request)
    selected = fridge.selection.selected(fridge.store)
    return {"selected": [ingredient_to_dict(item) for item in selected]}


@router.post("/scan")
async def scan_fridge(payload: ScanRequest, request: Request) -> dict[str, object]:
    """Analyze a fridge photo and stage the detected items for review."""
    frame = _decode_frame(payload.image_base64)
    fridge = _fridge(request)
    scanned = await fridge.scan_from(StaticFrameSource(frame))
    return {"scanned": scanned, **scan_state_to_dict(fridge.scan_intake)}


@router.get("/scan")
async def scan_state(request: Request) -> dict[str, object]:
    return scan_state_to_dict(_fridge(request).scan_intake)


@router.patch("/scan/items/{index}")
async def edit_scan_item(
    index: int, payload: ScanItemEdit, request: Request
) -> dict[str, object]:
    """Edit one staged row before saving."""
    draft = _fridge(request).scan_intake.edit_item(
        index,
        name=payload.name,
        quantity=payload.quantity,
        unit=payload.unit,
        expiry_date=payload.expiry_date,
    )
    if draft is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return scan_draft_to_dict(draft)


@router.post("/scan/save")
async def save_scan(request: Request) -> dict[str, object]:
    """Merge the reviewed items into the inventory."""
    created = _fridge(request).save_scan()
    return {"added": [ingredient_to_dict(item) for item in created]}


@router.post("/scan/cancel")
async def cancel_scan(request: Request) -> dict[str, bool]:
    return {"cancelled": _fridge(request).cancel_scan()}


def _decode_frame(raw: str) -> bytes:
    """Decode a base64 frame, accepting a data URL prefix."""
    _, _, encoded = raw.rpartition(",")
    try:
        return base64.b64decode(encoded, validate=True)
    except binascii.Error as exc:
        raise HTTPException(
            status_code=422,
            detail="image_base64 is not valid base64.",
        ) from exc
