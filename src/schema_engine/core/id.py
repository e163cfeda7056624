"""ID Generation.

ULID-based identifiers for engine-generated values. Prefixes keep logs
readable (``tok_*`` for cancellation tokens).
"""

from typing import NewType
from ulid import ULID

TokenID = NewType("TokenID", str)
"""Cancellation token identifier"""


class Prefix:
    """ID prefix constants."""

    TOKEN = "tok"


def generate_prefixed(prefix: str) -> str:
    """Generate a ULID with a type prefix."""
    return f"{prefix}_{ULID()}"


def new_token_id() -> TokenID:
    """Generate new cancellation token ID."""
    return TokenID(generate_prefixed(Prefix.TOKEN))
