"""Resampling, badge composition and PNG encoding on top of Pillow."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Tuple, Union

from PIL import Image, ImageChops, ImageDraw

from .catalogs import layout_for
from .errors import ImageAllocationError, ImageEncodeError
from .models import OutputProfile

# macOS app icons use 824x824 inside 1024x1024 (about 80.5%)
CANVAS_SIZE = 1024
INSET_SIZE = 824
CORNER_RATIO = 0.18

RESAMPLE_FILTERS = {
    "lanczos": Image.Resampling.LANCZOS,
    "bicubic": Image.Resampling.BICUBIC,
    "bilinear": Image.Resampling.BILINEAR,
}
DEFAULT_FILTER = "lanczos"


def resolve_filter(name: str) -> Image.Resampling:
    try:
        return RESAMPLE_FILTERS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown resample filter: {name!r}") from None


def corner_radius(inset: int = INSET_SIZE) -> float:
    return inset * CORNER_RATIO


def inset_origin(canvas: int = CANVAS_SIZE, inset: int = INSET_SIZE) -> int:
    return (canvas - inset) // 2


def _checked_size(size: Tuple[int, int]) -> Tuple[int, int]:
    try:
        width, height = size
    except (TypeError, ValueError):
        raise ImageAllocationError(f"Invalid bitmap size: {size!r}") from None
    for v in (width, height):
        if isinstance(v, bool) or not isinstance(v, int) or v <= 0:
            raise ImageAllocationError(f"Invalid bitmap size: {size!r}")
    return width, height


def resample(image: Image.Image, size: Tuple[int, int], resample_filter: str = DEFAULT_FILTER) -> Image.Image:
    """Return a new RGBA bitmap of exactly ``size`` with ``image`` stretched to fill it.

    Aspect ratio is not preserved; sources are expected to be square already.
    """
    width, height = _checked_size(size)
    src = image if image.mode == "RGBA" else image.convert("RGBA")
    try:
        return src.resize((width, height), resample=resolve_filter(resample_filter))
    except (ValueError, MemoryError) as e:
        raise ImageAllocationError(f"Cannot allocate {width}x{height} bitmap: {e}") from e


def rounded_mask(inset: int = INSET_SIZE) -> Image.Image:
    mask = Image.new("L", (inset, inset), 0)
    draw = ImageDraw.Draw(mask)
    draw.rounded_rectangle((0, 0, inset - 1, inset - 1), radius=corner_radius(inset), fill=255)
    return mask


def compose(source: Image.Image, apply_badge: bool, resample_filter: str = DEFAULT_FILTER) -> Image.Image:
    """Place ``source`` on the rounded-rect badge, or return it untouched."""
    if not apply_badge:
        return source

    try:
        canvas = Image.new("RGBA", (CANVAS_SIZE, CANVAS_SIZE), (0, 0, 0, 0))
    except (ValueError, MemoryError) as e:
        raise ImageAllocationError(f"Cannot allocate badge canvas: {e}") from e

    art = resample(source, (INSET_SIZE, INSET_SIZE), resample_filter)
    # Keep the artwork's own transparency inside the clip
    art.putalpha(ImageChops.multiply(art.getchannel("A"), rounded_mask(INSET_SIZE)))

    origin = inset_origin()
    canvas.paste(art, (origin, origin))
    return canvas


def preview(source: Image.Image, profile: OutputProfile, apply_badge: bool,
            resample_filter: str = DEFAULT_FILTER) -> Image.Image:
    """The image a caller should display for a finished run."""
    return compose(source, apply_badge and layout_for(profile).allows_badge, resample_filter)


def encode_png(image: Image.Image) -> bytes:
    buf = io.BytesIO()
    try:
        image.save(buf, format="PNG")
    except (OSError, ValueError) as e:
        raise ImageEncodeError(f"Failed to encode PNG: {e}") from e
    return buf.getvalue()


def decode_png(data: bytes) -> Image.Image:
    img = Image.open(io.BytesIO(data))
    img.load()
    return img


def load_source(path: Union[str, Path]) -> Image.Image:
    """Decode an image file into the RGBA bitmap the pipeline works on."""
    with Image.open(path) as img:
        img.load()
        return img.convert("RGBA")
