"""Role capabilities and the access predicate every handler goes through"""

from dataclasses import dataclass
from typing import Optional
import enum

from qrmenu.models.restaurant import Restaurant
from qrmenu.models.user import Role, User


class Capability(str, enum.Enum):
    PLATFORM_READ = "platform:read"
    PLATFORM_MANAGE = "platform:manage"
    TENANT_READ = "tenant:read"
    TENANT_WRITE = "tenant:write"
    INVITE_OWNER = "invite:owner"
    INVITE_STAFF = "invite:staff"


ROLE_CAPABILITIES = {
    Role.SUPER_ADMIN: frozenset(Capability),
    Role.SUPER_ADMIN_STAFF: frozenset({
        Capability.PLATFORM_READ,
        Capability.TENANT_READ,
    }),
    Role.OWNER: frozenset({
        Capability.TENANT_READ,
        Capability.TENANT_WRITE,
        Capability.INVITE_STAFF,
    }),
    Role.OWNER_STAFF: frozenset({
        Capability.TENANT_READ,
        Capability.TENANT_WRITE,
    }),
}

# Roles whose tenant capabilities apply to every restaurant
PLATFORM_ROLES = frozenset({Role.SUPER_ADMIN, Role.SUPER_ADMIN_STAFF})


@dataclass(frozen=True)
class AccessDecision:
    allowed: bool
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.allowed


ALLOWED = AccessDecision(allowed=True)


def denied(reason: str) -> AccessDecision:
    return AccessDecision(allowed=False, reason=reason)


def has_capability(user: User, capability: Capability) -> bool:
    return capability in ROLE_CAPABILITIES.get(user.role, frozenset())


def owns_restaurant(user: User, restaurant: Restaurant) -> bool:
    """Whether the restaurant falls inside the user's tenant scope"""
    role = user.role
    if role in PLATFORM_ROLES:
        return True
    if role == Role.OWNER:
        return restaurant.owner_id == user.id
    if role == Role.OWNER_STAFF:
        return user.restaurant_id is not None and restaurant.id == user.restaurant_id
    return False


def check_access(
    user: User,
    capability: Capability,
    restaurant: Optional[Restaurant] = None,
) -> AccessDecision:
    """Decide whether ``user`` may exercise ``capability`` (on ``restaurant``)"""
    if not user.is_active:
        return denied("User account is disabled")

    if not has_capability(user, capability):
        return denied("Insufficient permissions")

    if restaurant is not None and not owns_restaurant(user, restaurant):
        return denied("Access denied to this restaurant")

    return ALLOWED
