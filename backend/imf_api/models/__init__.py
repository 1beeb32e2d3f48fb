"""
IMF Gadget API Database Models
Exports all models for use throughout the application.
"""

from imf_api.models.gadget import Gadget, GadgetStatus
from imf_api.models.user import User

__all__ = [
    "Gadget",
    "GadgetStatus",
    "User",
]
