from __future__ import annotations

from enum import Enum


class Diagnostic(str, Enum):
    """Non-fatal conditions reported alongside an empty result."""

    TARGET_NOT_FOUND = "target_not_found"
    NO_SIMILAR_USERS = "no_similar_users"
