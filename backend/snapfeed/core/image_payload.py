"""Image Payload — decodes the base64 data URI a client sends with a new post.

Invariants:
    - Only `data:image/<subtype>;base64,<payload>` is accepted
    - Missing, empty, or undecodable payloads raise ImagePayloadError (fatal, 500)
    - Embedded whitespace/newlines in the payload are ignored (MIME-style wrapping)
"""

import base64
import binascii
import re
from dataclasses import dataclass

from snapfeed.core.errors import ImagePayloadError

_DATA_URI = re.compile(
    r"^data:(?P<content_type>image/[A-Za-z0-9.+-]+);base64,(?P<payload>.*)$",
    re.DOTALL,
)


@dataclass(frozen=True)
class DecodedImage:
    content_type: str
    data: bytes


def decode_image(data_uri: str | None) -> DecodedImage:
    """Decode a base64 image data URI. Pure, no IO."""
    if not data_uri:
        raise ImagePayloadError("Post image is required")

    match = _DATA_URI.match(data_uri.strip())
    if not match:
        raise ImagePayloadError("Post image must be a base64 image data URI")

    payload = "".join(match.group("payload").split())
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        raise ImagePayloadError("Post image payload is not valid base64")
    if not data:
        raise ImagePayloadError("Post image payload is empty")

    return DecodedImage(content_type=match.group("content_type"), data=data)
