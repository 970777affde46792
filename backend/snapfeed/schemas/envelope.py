"""Response Envelopes — the {success, result} wrapper every endpoint returns.

Invariants:
    - Success responses always carry success=true and a result
    - Paginated responses echo the normalized offset/limit actually applied
    - Error envelopes are produced by SnapfeedError.to_response(), not here
"""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    success: bool = True
    result: T


class PageEnvelope(Envelope[T], Generic[T]):
    offset: int
    limit: int
