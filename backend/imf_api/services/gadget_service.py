"""
Gadget Service
Codename generation and the gadget lifecycle operations.

Lifecycle:
    creation        -> Available, unless the caller names a starting status
    decommission    -> Decommissioned, stamps decommissioned_at on every call
    self-destruct   -> Destroyed, returns a one-off confirmation code
    update          -> freeform, no transition checks

Neither dedicated transition has a precondition on the prior status, and no
dedicated operation leads back out of Destroyed or Decommissioned.
"""

import logging
import random
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from imf_api.exceptions import NotFoundError
from imf_api.models.gadget import Gadget, GadgetStatus
from imf_api.store import RecordStore

logger = logging.getLogger(__name__)

COVER_NAMES = (
    "The Nightingale",
    "The Kraken",
    "The Falcon",
    "The Shadow",
)

GADGET_NOT_FOUND = "Gadget not found."


def _short_code() -> str:
    """First segment of a fresh UUID4, upper-cased: 8 hex characters."""
    return str(uuid.uuid4()).split("-")[0].upper()


def generate_codename() -> str:
    """
    Pick a cover name and append a random suffix, e.g. "The Kraken-  1F3A9C0B".

    Uniqueness is not checked against the store. With 4 cover names and
    32 bits of suffix, collisions are possible but rare.
    """
    return f"{random.choice(COVER_NAMES)}-  {_short_code()}"


def get_random_success_probability() -> str:
    return f"{random.randint(0, 100)}%"


async def list_gadgets(db: AsyncSession, status: Optional[GadgetStatus] = None) -> List[Dict[str, Any]]:
    """
    Return every gadget (optionally filtered by exact status), each annotated
    with a freshly drawn mission success probability.
    """
    where = {"status": status} if status else {}
    gadgets = await RecordStore(db, Gadget).find_many(**where)

    return [
        {
            "id": gadget.id,
            "name": gadget.name,
            "codename": gadget.codename,
            "status": gadget.status,
            "decommissioned_at": gadget.decommissioned_at,
            "mission_success_probability": get_random_success_probability(),
        }
        for gadget in gadgets
    ]


async def create_gadget(db: AsyncSession, name: str, status: Optional[GadgetStatus] = None) -> Gadget:
    gadget = await RecordStore(db, Gadget).create(
        name=name,
        codename=generate_codename(),
        status=status or GadgetStatus.AVAILABLE,
    )
    logger.info("Created gadget %s (%s) as %s", gadget.id, gadget.codename, gadget.status.value)
    return gadget


async def _get_or_404(gadgets: RecordStore, gadget_id: str) -> Gadget:
    gadget = await gadgets.find_unique(id=gadget_id)
    if gadget is None:
        raise NotFoundError(GADGET_NOT_FOUND)
    return gadget


async def _update_or_404(gadgets: RecordStore, gadget_id: str, **changes: Any) -> Gadget:
    # The record can vanish between the find and the write; report it the same way
    updated = await gadgets.update(gadget_id, **changes)
    if updated is None:
        raise NotFoundError(GADGET_NOT_FOUND)
    return updated


async def update_gadget(db: AsyncSession, gadget_id: str, changes: Dict[str, Any]) -> Gadget:
    """Apply name and/or status changes as given."""
    gadgets = RecordStore(db, Gadget)
    await _get_or_404(gadgets, gadget_id)
    return await _update_or_404(gadgets, gadget_id, **changes)


async def decommission_gadget(db: AsyncSession, gadget_id: str) -> Gadget:
    """Soft-delete. Re-running it overwrites decommissioned_at with the current time."""
    gadgets = RecordStore(db, Gadget)
    await _get_or_404(gadgets, gadget_id)
    gadget = await _update_or_404(
        gadgets,
        gadget_id,
        status=GadgetStatus.DECOMMISSIONED,
        decommissioned_at=datetime.now(timezone.utc),
    )
    logger.info("Decommissioned gadget %s", gadget.id)
    return gadget


async def self_destruct_gadget(db: AsyncSession, gadget_id: str) -> Tuple[Gadget, str]:
    """
    Mark the gadget Destroyed.

    The confirmation code is for display only. It is not stored and cannot
    be checked later.
    """
    gadgets = RecordStore(db, Gadget)
    await _get_or_404(gadgets, gadget_id)
    confirmation_code = _short_code()
    gadget = await _update_or_404(gadgets, gadget_id, status=GadgetStatus.DESTROYED)
    logger.info("Self-destruct triggered for gadget %s", gadget.id)
    return gadget, confirmation_code
