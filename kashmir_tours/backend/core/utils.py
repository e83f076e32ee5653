"""
Core Utilities.

Shared utility functions used across the backend.
All modules should import utilities from this module.
"""

import re
import secrets
import unicodedata
from datetime import date, datetime, timezone

_SLUG_STRIP = re.compile(r"[^a-z0-9]+")


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    All datetime values in the application should be timezone-naive
    and assumed to be UTC. This ensures consistent behavior across
    the codebase and simplifies database storage.

    Returns:
        Current UTC time with tzinfo stripped
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def utc_today() -> date:
    """Return the current UTC calendar date."""
    return utc_now().date()


def slugify(value: str) -> str:
    """
    Build a URL slug from a display name.

    Accents are folded to ASCII, everything that is not a letter or digit
    collapses to a single hyphen.

        >>> slugify("Gulmarg & Sonamarg: 5 Days")
        'gulmarg-sonamarg-5-days'
    """
    normalized = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    slug = _SLUG_STRIP.sub("-", normalized.lower()).strip("-")
    if not slug:
        raise ValueError(f"Cannot build a slug from {value!r}")
    return slug


def generate_booking_reference(prefix: str) -> str:
    """Return a booking reference such as ``EKT-9F2C41AB``."""
    return f"{prefix}-{secrets.token_hex(4).upper()}"
