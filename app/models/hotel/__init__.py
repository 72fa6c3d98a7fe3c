"""
Hotel catalog and per-date room inventory models.
"""

from app.models.hotel.hotel import Hotel
from app.models.hotel.inventory import InventoryDay

__all__ = [
    "Hotel",
    "InventoryDay",
]
