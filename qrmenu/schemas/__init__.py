"""Pydantic schemas for request/response validation"""

from qrmenu.schemas.auth import (
    Token,
    TokenPayload,
    RefreshRequest,
    RegisterRequest,
    UserResponse,
)
from qrmenu.schemas.restaurant import (
    RestaurantCreate,
    RestaurantUpdate,
    RestaurantStatusUpdate,
    RestaurantResponse,
    AdminRestaurantResponse,
    LocationCreate,
    LocationUpdate,
    LocationResponse,
)
from qrmenu.schemas.menu import (
    MenuCreate,
    MenuUpdate,
    MenuResponse,
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    ItemCreate,
    ItemUpdate,
    ItemResponse,
    LocationMenuAssign,
    LocationMenuStatusUpdate,
    LocationMenuResponse,
)
from qrmenu.schemas.qr_code import (
    QRCodeCreate,
    QRCodeUpdate,
    QRCodeResponse,
    QRImageResponse,
)
from qrmenu.schemas.invitation import (
    RestaurantInviteRequest,
    StaffInviteRequest,
    InvitationResponse,
    InvitationCreated,
)
from qrmenu.schemas.public import (
    PublicLocationPage,
    PublicMenuPage,
)

__all__ = [
    "Token",
    "TokenPayload",
    "RefreshRequest",
    "RegisterRequest",
    "UserResponse",
    "RestaurantCreate",
    "RestaurantUpdate",
    "RestaurantStatusUpdate",
    "RestaurantResponse",
    "AdminRestaurantResponse",
    "LocationCreate",
    "LocationUpdate",
    "LocationResponse",
    "MenuCreate",
    "MenuUpdate",
    "MenuResponse",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "ItemCreate",
    "ItemUpdate",
    "ItemResponse",
    "LocationMenuAssign",
    "LocationMenuStatusUpdate",
    "LocationMenuResponse",
    "QRCodeCreate",
    "QRCodeUpdate",
    "QRCodeResponse",
    "QRImageResponse",
    "RestaurantInviteRequest",
    "StaffInviteRequest",
    "InvitationResponse",
    "InvitationCreated",
    "PublicLocationPage",
    "PublicMenuPage",
]
