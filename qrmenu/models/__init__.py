"""Database models"""

from qrmenu.models.user import User, Role
from qrmenu.models.restaurant import Restaurant, Location
from qrmenu.models.menu import Menu, LocationMenu, Category, Item
from qrmenu.models.qr_code import QRCode
from qrmenu.models.invitation import Invitation
from qrmenu.models.audit import AuditLog

__all__ = [
    "User",
    "Role",
    "Restaurant",
    "Location",
    "Menu",
    "LocationMenu",
    "Category",
    "Item",
    "QRCode",
    "Invitation",
    "AuditLog",
]
