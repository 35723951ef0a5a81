"""
Estados do slot do token de autorização.
"""

from enum import Enum


class TokenSlotState(str, Enum):
    """absent -> valid (fetch) -> rejected (Unauthorized) -> absent (delete)."""

    ABSENT = "absent"
    VALID = "valid"
    REJECTED = "rejected"
