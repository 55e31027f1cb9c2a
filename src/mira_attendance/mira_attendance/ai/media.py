"""Inline media handling for multimodal prompts."""

from __future__ import annotations

import base64
import binascii
import io
import re
from dataclasses import dataclass
from typing import Any, Callable, Mapping

import requests
from PIL import Image, UnidentifiedImageError

from ..core.exceptions import ValidationError

_DATA_URL_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)(?:;[\w=-]+)*;base64,(?P<data>.*)$", re.DOTALL)

FETCH_TIMEOUT_SECONDS = 10


@dataclass(frozen=True)
class InlineMedia:
    mime_type: str
    data: bytes

    def as_part(self) -> dict:
        return {"mime_type": self.mime_type, "data": self.data}


def _b64decode(value: str) -> bytes:
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("Media payload is not valid base64")


def parse_data_url(data_url: str) -> InlineMedia:
    match = _DATA_URL_RE.match((data_url or "").strip())
    if not match:
        raise ValidationError("Expected a base64 data URL")
    return InlineMedia(mime_type=match.group("mime"), data=_b64decode(match.group("data")))


def media_from_payload(payload: Mapping[str, Any]) -> InlineMedia:
    """Accept {"data": <base64>, "mimeType": ...} or a data URL under "dataUrl"."""

    if payload.get("dataUrl"):
        return parse_data_url(payload["dataUrl"])
    data = payload.get("data")
    mime_type = payload.get("mimeType") or payload.get("mime_type")
    if not data or not mime_type:
        raise ValidationError("Media data and mimeType are required")
    return InlineMedia(mime_type=str(mime_type), data=_b64decode(str(data)))


def to_jpeg(media: InlineMedia, *, quality: int = 90) -> InlineMedia:
    try:
        with Image.open(io.BytesIO(media.data)) as img:
            out = io.BytesIO()
            img.convert("RGB").save(out, format="JPEG", quality=quality)
    except (UnidentifiedImageError, OSError):
        raise ValidationError("Image could not be decoded")
    return InlineMedia(mime_type="image/jpeg", data=out.getvalue())


def load_image(source: str, *, fetch: Callable[..., Any] = requests.get) -> InlineMedia:
    """Load an image from a data URL or an http(s) URL and normalize it to JPEG."""

    if not isinstance(source, str):
        raise ValidationError("Unsupported image source")
    source = source.strip()
    if source.startswith("data:"):
        return to_jpeg(parse_data_url(source))

    if not source.startswith(("http://", "https://")):
        raise ValidationError("Unsupported image source")

    try:
        resp = fetch(source, timeout=FETCH_TIMEOUT_SECONDS)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise ValidationError(f"Could not load image from {source}: {e}")

    content_type = resp.headers.get("Content-Type", "image/jpeg").split(";")[0]
    return to_jpeg(InlineMedia(mime_type=content_type, data=resp.content))
