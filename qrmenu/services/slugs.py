"""Slug derivation for restaurants, locations and menus"""

import re
import unicodedata

from qrmenu.exceptions import ValidationError

_DISALLOWED = re.compile(r"[^a-z0-9\s_-]")
_SEPARATORS = re.compile(r"[\s_-]+")


def slugify(value: str) -> str:
    """Lower-case, hyphenated, ASCII-only slug ("Jade Garden" -> "jade-garden")"""
    value = unicodedata.normalize("NFKD", value or "").encode("ascii", "ignore").decode("ascii")
    value = _DISALLOWED.sub("", value.lower())
    return _SEPARATORS.sub("-", value).strip("-")


def require_slug(name: str) -> str:
    """Slugify a display name, rejecting names that leave nothing URL-safe"""
    slug = slugify(name)
    if not slug:
        raise ValidationError("Name must contain at least one letter or digit")
    return slug
