"""
Hotel and inventory repositories.
"""

from app.repositories.hotel.hotel_repository import HotelRepository
from app.repositories.hotel.inventory_repository import InventoryRepository

__all__ = ["HotelRepository", "InventoryRepository"]
