"""Minimal writer for the Windows ICO container with PNG payloads."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .errors import ImageEncodeError

HEADER = struct.Struct("<HHH")  # reserved, type, count
ENTRY = struct.Struct("<BBBBHHII")  # w, h, colors, reserved, planes, bpp, length, offset
ICON_TYPE = 1
MAX_SIZE = 256


@dataclass(frozen=True)
class IcoEntry:
    width: int
    height: int
    planes: int
    bit_count: int
    length: int
    offset: int


def _dimension_byte(size: int) -> int:
    if size <= 0 or size > MAX_SIZE:
        raise ImageEncodeError(f"ICO images must be 1..{MAX_SIZE} px, got {size}")
    return 0 if size == MAX_SIZE else size


def build_ico(images: Sequence[Tuple[int, bytes]]) -> bytes:
    """Pack ``(size, png_bytes)`` pairs into one ICO file, in the given order."""
    if not images:
        raise ImageEncodeError("ICO needs at least one image")

    header = HEADER.pack(0, ICON_TYPE, len(images))
    entries = []
    offset = HEADER.size + ENTRY.size * len(images)
    for size, png in images:
        dim = _dimension_byte(size)
        entries.append(ENTRY.pack(dim, dim, 0, 0, 1, 32, len(png), offset))
        offset += len(png)

    return header + b"".join(entries) + b"".join(png for _, png in images)


def read_ico_directory(data: bytes) -> List[IcoEntry]:
    reserved, kind, count = HEADER.unpack_from(data, 0)
    if reserved != 0 or kind != ICON_TYPE:
        raise ValueError("Not an ICO file")
    out: List[IcoEntry] = []
    for i in range(count):
        w, h, _, _, planes, bpp, length, offset = ENTRY.unpack_from(data, HEADER.size + i * ENTRY.size)
        out.append(IcoEntry(w or MAX_SIZE, h or MAX_SIZE, planes, bpp, length, offset))
    return out
