"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId wraps the store-assigned integer key — never use bare int in domain logic
    - LoginName is the unique handle of a user

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
"""

from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
LoginName = NewType("LoginName", str)


# ─── Resource Names ──────────────────────────────────────────────

USER_RESOURCE = "User"
