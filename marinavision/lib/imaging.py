from __future__ import annotations
import base64
import io
import os
from dataclasses import dataclass
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

from marinavision.config import config
from marinavision.logger import get_logger

log = get_logger(__name__)

SUPPORTED_MIME_TYPES = {"image/png", "image/jpeg", "image/webp", "image/heic"}

_EXT_MIME = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".webp": "image/webp",
    ".heic": "image/heic",
}

# width/height sent to text-to-image providers, long edge 1536
_ASPECT_DIMENSIONS = {
    "1:1": (1024, 1024),
    "4:3": (1536, 1152),
    "3:2": (1536, 1024),
    "16:9": (1536, 864),
}


@dataclass(frozen=True)
class UploadedImage:
    filename: str
    content_type: Optional[str]
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


def sniff_mime(data: bytes) -> str:
    # PNG
    if data.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    # JPEG
    if data.startswith(b"\xff\xd8"):
        return "image/jpeg"
    # WEBP: RIFF....WEBP
    if len(data) >= 12 and data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    # HEIC/HEIF: ....ftypheic / ftypmif1 ...
    if len(data) >= 12 and data[4:8] == b"ftyp" and data[8:12] in {b"heic", b"heix", b"hevc", b"mif1", b"msf1"}:
        return "image/heic"
    return ""  # unknown


def resolve_mime(upload: UploadedImage) -> str:
    """
    Decide the MIME type of an upload. Bytes win over the browser-declared
    content type, which wins over the file extension.
    """
    sniffed = sniff_mime(upload.data)
    if sniffed:
        return sniffed
    declared = (upload.content_type or "").split(";", 1)[0].strip().lower()
    if declared in SUPPORTED_MIME_TYPES:
        return declared
    _, ext = os.path.splitext(upload.filename or "")
    return _EXT_MIME.get(ext.lower(), "")


def ensure_supported_image(upload: UploadedImage) -> str:
    """Return the MIME type of `upload`, or raise ValueError if it cannot be sent on."""
    if not upload.data:
        raise ValueError(f"{upload.filename or 'upload'} is empty.")

    limit = int(config.max_upload_mb * 1024 * 1024)
    if upload.size > limit:
        raise ValueError(
            f"{upload.filename or 'upload'} is {format_bytes(upload.size)}; "
            f"the limit is {config.max_upload_mb:g} MB."
        )

    mime = resolve_mime(upload)
    if mime not in SUPPORTED_MIME_TYPES:
        raise ValueError(f"{upload.filename or 'upload'} is not a JPG, PNG, WEBP or HEIC image.")
    return mime


def probe_dimensions(data: bytes) -> Optional[Tuple[int, int]]:
    """Pixel size of a raster upload, None when Pillow cannot read it (e.g. HEIC)."""
    try:
        with Image.open(io.BytesIO(data)) as im:
            return im.size
    except (UnidentifiedImageError, OSError):
        return None


def file_to_base64(upload: UploadedImage) -> str:
    return base64.b64encode(upload.data).decode("ascii")


def to_data_url(b64: str, mime: str) -> str:
    return f"data:{mime};base64,{b64}"


def dimensions_for_aspect(aspect_ratio: str) -> Tuple[int, int]:
    return _ASPECT_DIMENSIONS.get(aspect_ratio, _ASPECT_DIMENSIONS["3:2"])


def format_bytes(num: int) -> str:
    if num < 1024:
        return f"{num} B"
    if num < 1024 * 1024:
        return f"{num / 1024:.1f} KB"
    return f"{num / (1024 * 1024):.1f} MB"
