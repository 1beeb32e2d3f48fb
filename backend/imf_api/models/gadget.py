"""
Gadget Model
Stores field equipment and its lifecycle status.
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Column, String, DateTime, Enum, Index

from imf_api.database import Base


class GadgetStatus(str, enum.Enum):
    """Lifecycle status of a gadget."""
    AVAILABLE = "Available"
    DEPLOYED = "Deployed"
    DESTROYED = "Destroyed"
    DECOMMISSIONED = "Decommissioned"


class Gadget(Base):
    """
    Gadget model.
    Gadgets are never physically deleted; removal is a status transition.
    """
    __tablename__ = "gadgets"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    name = Column(String(255), nullable=False)
    codename = Column(String(255), nullable=False)

    # Stored by value so the wire and database spellings match
    status = Column(
        Enum(GadgetStatus, name="gadget_status", values_callable=lambda e: [m.value for m in e]),
        default=GadgetStatus.AVAILABLE,
        nullable=False,
    )

    # Set on every decommission, never cleared
    decommissioned_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index("ix_gadgets_status", "status"),
    )

    def __repr__(self):
        return f"<Gadget(id={self.id}, codename='{self.codename}', status={self.status})>"
