"""
Inventory services: the room ledger and its administrative wrapper.
"""

from app.services.inventory.locks import HotelLockRegistry, hotel_locks
from app.services.inventory.inventory_ledger import InventoryLedger
from app.services.inventory.inventory_service import InventoryService

__all__ = [
    "HotelLockRegistry",
    "hotel_locks",
    "InventoryLedger",
    "InventoryService",
]
