"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, PostId, TagId wrap integer primary keys — never use bare int in service signatures
    - Ids and offsets never exceed MAX_SQL_INT (signed 64-bit), the widest
      integer every supported driver accepts
    - PageWindow is always normalized (offset >= 0, 1 <= limit <= max)
    - Follow direction encoded as an Enum — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - PageWindow is a frozen dataclass: hashable, safe to share between planner calls
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
PostId = NewType("PostId", int)
TagId = NewType("TagId", int)

MAX_SQL_INT = 2**63 - 1


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class PageWindow:
    """The [offset, offset + limit) slice of an ordered result set."""
    offset: int
    limit: int


# ─── Enums ───────────────────────────────────────────────────────

class FollowDirection(str, Enum):
    """Which side of a follow edge a listing walks."""
    FOLLOWING = "following"   # edges where the subject is the follower
    FOLLOWERS = "followers"   # edges where the subject is the followee
