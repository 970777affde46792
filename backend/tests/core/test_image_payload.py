"""Image Payload — verifies data URI decoding and its failure modes."""

import base64

import pytest

from snapfeed.core.errors import ImagePayloadError
from snapfeed.core.image_payload import decode_image

RAW = b"\xff\xd8\xff\xe0fake-jpeg"
ENCODED = base64.b64encode(RAW).decode()


def test_decodes_content_type_and_bytes():
    decoded = decode_image(f"data:image/jpeg;base64,{ENCODED}")
    assert decoded.content_type == "image/jpeg"
    assert decoded.data == RAW


def test_line_wrapped_payload_is_accepted():
    wrapped = "\n".join(ENCODED[i:i + 4] for i in range(0, len(ENCODED), 4))
    assert decode_image(f"data:image/png;base64,{wrapped}").data == RAW


@pytest.mark.parametrize("missing", [None, ""])
def test_missing_image_raises(missing):
    with pytest.raises(ImagePayloadError, match="required"):
        decode_image(missing)


def test_non_data_uri_raises():
    with pytest.raises(ImagePayloadError):
        decode_image(ENCODED)


def test_non_image_content_type_raises():
    with pytest.raises(ImagePayloadError):
        decode_image(f"data:text/plain;base64,{ENCODED}")


def test_invalid_base64_raises():
    with pytest.raises(ImagePayloadError, match="base64"):
        decode_image("data:image/png;base64,@@not-base64@@")


def test_empty_payload_raises():
    with pytest.raises(ImagePayloadError):
        decode_image("data:image/png;base64,")


def test_error_is_fatal_500():
    with pytest.raises(ImagePayloadError) as exc_info:
        decode_image(None)
    assert exc_info.value.http_status == 500
    assert exc_info.value.code == "IMAGE_PAYLOAD_INVALID"
