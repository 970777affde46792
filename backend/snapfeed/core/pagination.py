"""Pagination Policy — single point of offset/limit interpretation.

Invariants:
    - Never raises: out-of-range values are clamped, garbage is treated as missing
    - Missing values default to (0, default_limit)
    - Result always satisfies 0 <= offset <= MAX_SQL_INT and 1 <= limit <= max_limit

Design Decisions:
    - Pure function over raw query-string values: the API dependency passes strings
      through untouched so FastAPI never rejects a malformed offset with a 400
"""

from snapfeed.core.domain_types import MAX_SQL_INT, PageWindow

DEFAULT_LIMIT = 20
MAX_LIMIT = 100


def _to_int(raw: str | int | None) -> int | None:
    if raw is None:
        return None
    if isinstance(raw, int):
        return raw
    try:
        return int(raw.strip())
    except ValueError:
        return None


def normalize_window(
    raw_offset: str | int | None,
    raw_limit: str | int | None,
    default_limit: int = DEFAULT_LIMIT,
    max_limit: int = MAX_LIMIT,
) -> PageWindow:
    """Clamp raw request values into a valid PageWindow."""
    offset = _to_int(raw_offset)
    limit = _to_int(raw_limit)

    if offset is None or offset < 0:
        offset = 0
    offset = min(offset, MAX_SQL_INT)
    if limit is None:
        limit = default_limit
    limit = max(1, min(limit, max_limit))
    return PageWindow(offset=offset, limit=limit)
