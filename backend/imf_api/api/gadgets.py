"""
Gadgets API
Endpoints for listing, creating and retiring gadgets.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from imf_api.database import get_db
from imf_api.models.gadget import GadgetStatus
from imf_api.schemas.common import ErrorResponse
from imf_api.schemas.gadget import (
    DecommissionResponse,
    GadgetCreate,
    GadgetResponse,
    GadgetUpdate,
    GadgetWithProbability,
    SelfDestructResponse,
)
from imf_api.services import gadget_service

router = APIRouter()

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Gadget not found"}}


@router.get("", response_model=List[GadgetWithProbability])
async def list_gadgets(
    status: Optional[GadgetStatus] = Query(None, description="Filter gadgets by their status"),
    db: AsyncSession = Depends(get_db),
):
    """
    Retrieve all gadgets, each with a "mission success probability".
    The probability is drawn fresh for every gadget on every call.
    """
    return await gadget_service.list_gadgets(db, status)


@router.post("", response_model=GadgetResponse, status_code=status.HTTP_201_CREATED)
async def create_gadget(payload: GadgetCreate, db: AsyncSession = Depends(get_db)):
    """Create a new gadget with a generated codename."""
    return await gadget_service.create_gadget(db, payload.name, payload.status)


@router.patch("/{gadget_id}", response_model=GadgetResponse, responses=NOT_FOUND)
async def update_gadget(gadget_id: str, payload: GadgetUpdate, db: AsyncSession = Depends(get_db)):
    """Update gadget name and/or status. No transition rules are applied here."""
    return await gadget_service.update_gadget(db, gadget_id, payload.model_dump(exclude_unset=True))


@router.delete("/{gadget_id}", response_model=DecommissionResponse, responses=NOT_FOUND)
async def decommission_gadget(gadget_id: str, db: AsyncSession = Depends(get_db)):
    """Soft-delete a gadget by marking it Decommissioned."""
    gadget = await gadget_service.decommission_gadget(db, gadget_id)
    return DecommissionResponse(
        message="Gadget decommissioned.",
        gadget=GadgetResponse.model_validate(gadget),
    )


@router.post("/{gadget_id}/self-destruct", response_model=SelfDestructResponse, responses=NOT_FOUND)
async def self_destruct_gadget(gadget_id: str, db: AsyncSession = Depends(get_db)):
    """Trigger the self-destruct sequence for a gadget."""
    gadget, confirmation_code = await gadget_service.self_destruct_gadget(db, gadget_id)
    return SelfDestructResponse(
        message=f"Self-destruct sequence initiated for gadget {gadget.name}.",
        confirmation_code=confirmation_code,
    )
