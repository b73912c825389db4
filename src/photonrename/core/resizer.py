"""Image downsizing for photonrename.

Pure byte-to-byte transform used by the executor when resizing is enabled.
Images are only ever made smaller; the output format follows the source MIME
type (PNG stays PNG, WEBP stays WEBP, everything else becomes JPEG).
Vector images (SVG) are never decoded; they pass through unchanged.
"""

import io
import logging
import math
import mimetypes
from typing import Tuple

from PIL import Image, UnidentifiedImageError

from photonrename.core.errors import DecodeError, EncodeError

logger = logging.getLogger(__name__)

_MIME_OVERRIDES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
    ".gif": "image/gif",
    ".bmp": "image/bmp",
    ".tiff": "image/tiff",
    ".svg": "image/svg+xml",
}

# Source MIME type -> (Pillow format, quality applies)
_OUTPUT_FORMATS = {
    "image/png": ("PNG", False),
    "image/webp": ("WEBP", True),
}
_DEFAULT_OUTPUT = ("JPEG", True)

_VECTOR_TYPES = frozenset({"image/svg+xml"})

_DECODE_ERRORS = (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError)


def mime_type_for(extension: str) -> str:
    """Return the MIME type for a file extension such as '.png'."""
    ext = extension.lower()
    if ext in _MIME_OVERRIDES:
        return _MIME_OVERRIDES[ext]
    guessed, _ = mimetypes.guess_type(f"file{ext}")
    return guessed or "application/octet-stream"


def is_raster(mime_type: str) -> bool:
    """Whether images of *mime_type* are pixel data Pillow can downsample."""
    return mime_type not in _VECTOR_TYPES


def should_resize(source_width: int, target_width: int) -> bool:
    """True iff the source is wider than the target (never upscale)."""
    return source_width > target_width


def target_size(source_width: int, source_height: int, target_width: int) -> Tuple[int, int]:
    """Scale to *target_width* keeping the aspect ratio (height rounded half up)."""
    height = math.floor(target_width * source_height / source_width + 0.5)
    return target_width, max(1, height)


def probe_size(data: bytes) -> Tuple[int, int]:
    """Read the pixel size of an encoded image without decoding its pixels.

    Raises:
        DecodeError: If *data* is not a recognizable image.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            return img.size
    except _DECODE_ERRORS as e:
        raise DecodeError(f"Failed to load image: {e}") from e


def _filterable(img: Image.Image) -> Image.Image:
    # Pillow resamples palette and bilevel images with NEAREST whatever filter
    # is asked for, so expand them first.
    if img.mode == "P":
        return img.convert("RGBA" if "transparency" in img.info else "RGB")
    if img.mode == "1":
        return img.convert("L")
    return img


def _flatten_for_jpeg(img: Image.Image) -> Image.Image:
    if img.mode in ("RGBA", "LA", "P"):
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.split()[-1])
        return background
    if img.mode != "RGB":
        return img.convert("RGB")
    return img


def resize(data: bytes, source_mime_type: str, target_width: int, quality: int) -> bytes:
    """Downsample an encoded image to *target_width* pixels wide.

    Args:
        data: Encoded source image.
        source_mime_type: MIME type of the source; selects the output format.
        target_width: Width of the output in pixels.
        quality: 1-100, applied to lossy output formats (JPEG, WEBP).

    Returns:
        The encoded, resized image.

    Raises:
        DecodeError: If *data* cannot be decoded as an image.
        EncodeError: If the output format cannot be produced.
    """
    try:
        with Image.open(io.BytesIO(data)) as src:
            src.load()
            width, height = src.size
            resized = _filterable(src).resize(
                target_size(width, height, target_width), Image.Resampling.LANCZOS
            )
    except _DECODE_ERRORS as e:
        raise DecodeError(f"Failed to load image: {e}") from e

    fmt, lossy = _OUTPUT_FORMATS.get(source_mime_type, _DEFAULT_OUTPUT)
    save_kwargs = {"quality": quality} if lossy else {}
    if fmt == "JPEG":
        resized = _flatten_for_jpeg(resized)

    buf = io.BytesIO()
    try:
        resized.save(buf, format=fmt, **save_kwargs)
    except (OSError, KeyError, ValueError) as e:
        raise EncodeError(f"Failed to encode {fmt}: {e}") from e
    logger.debug(
        "Resized %dx%d -> %dx%d as %s", width, height, resized.width, resized.height, fmt
    )
    return buf.getvalue()
