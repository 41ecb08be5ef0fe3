import base64
import re
from typing import Literal, Union

from pydantic import BaseModel, Field

DEFAULT_IMAGE_MIME_TYPE = "image/png"
BASE64_MARKER = "base64,"

_DATA_URL_PATTERN = re.compile(r"^data:(.+);base64,(.+)$", re.DOTALL)


class ImagePart(BaseModel):
    """Inline image sent next to the instruction text."""
    kind: Literal["image"] = "image"
    mime_type: str = Field(default=DEFAULT_IMAGE_MIME_TYPE, description="MIME type of the image")
    data: str = Field(..., description="Base64 payload without the data URL prefix")

    def to_bytes(self) -> bytes:
        # Line-wrapped payloads are accepted, anything outside the alphabet is not
        payload = "".join(self.data.split())
        return base64.b64decode(payload, validate=True)


class TextPart(BaseModel):
    kind: Literal["text"] = "text"
    text: str


RequestPart = Union[ImagePart, TextPart]


def parse_image_input(value: str) -> ImagePart:
    """Split a data URL (or a bare base64 string) into MIME type and payload.

    ``data:image/jpeg;base64,AAAA`` yields ``image/jpeg`` and ``AAAA``. When the
    strict form does not match but the ``base64,`` marker is present, the text
    after the first marker is used as payload with the default MIME type. Anything
    else is treated as a bare payload.
    """
    if BASE64_MARKER not in value:
        return ImagePart(data=value)

    match = _DATA_URL_PATTERN.match(value)
    if match:
        return ImagePart(mime_type=match.group(1), data=match.group(2))
    return ImagePart(data=value.split(BASE64_MARKER, 1)[1])


def to_data_url(payload: bytes, mime_type: str) -> str:
    encoded = base64.b64encode(payload).decode("ascii")
    return f"data:{mime_type};{BASE64_MARKER}{encoded}"
