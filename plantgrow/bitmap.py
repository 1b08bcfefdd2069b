"""Reading and writing uncompressed 24-bit Windows bitmap files."""

from __future__ import annotations

import struct
from os import PathLike
from pathlib import Path
from typing import Union

_FILE_HEADER = struct.Struct("<2sIHHI")
_INFO_HEADER = struct.Struct("<IiiHHIIiiII")
_HEADER_SIZE = _FILE_HEADER.size + _INFO_HEADER.size

BI_RGB = 0
_PELS_PER_METER = int(100 / 2.54 * 72)

PathType = Union[str, PathLike]


class BitmapError(Exception):
    """Raised when a bitmap cannot be read or written."""


def _row_stride(width: int) -> int:
    """Bytes per stored scanline, padded to a multiple of four."""
    return (width * 3 + 3) // 4 * 4


def _swap_red_blue(row: bytearray) -> bytearray:
    row[0::3], row[2::3] = row[2::3], row[0::3]
    return row


def read_bmp(path: PathType) -> tuple[int, int, bytes]:
    """Read a 24-bit bitmap.

    Returns ``(width, height, data)`` where ``data`` holds packed RGB
    triples, one scanline after another in the order stored in the file.
    """
    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        raise BitmapError(f"cannot open {path}") from exc

    if len(raw) < _HEADER_SIZE:
        raise BitmapError("file too short for a bitmap header")

    magic, _size, _reserved1, _reserved2, offset = _FILE_HEADER.unpack_from(raw, 0)
    info = _INFO_HEADER.unpack_from(raw, _FILE_HEADER.size)
    if magic != b"BM":
        raise BitmapError("not a bitmap file")

    _bi_size, width, height, _planes, bit_count = info[:5]
    if bit_count != 24:
        raise BitmapError(f"unsupported bit depth {bit_count}")
    if width <= 0 or height <= 0:
        raise BitmapError(f"invalid dimensions {width}x{height}")

    stride = _row_stride(width)
    total = stride * height
    pixels = raw[offset:offset + total]
    if len(pixels) < total:
        raise BitmapError("pixel data is truncated")

    out = bytearray()
    for start in range(0, total, stride):
        out += _swap_red_blue(bytearray(pixels[start:start + width * 3]))
    return width, height, bytes(out)


def write_bmp(path: PathType, width: int, height: int, data) -> None:
    """Write packed RGB ``data`` of the given size as a 24-bit bitmap."""
    if width <= 0 or height <= 0:
        raise BitmapError(f"invalid dimensions {width}x{height}")
    pixels = bytes(data)
    row_bytes = width * 3
    if len(pixels) < row_bytes * height:
        raise BitmapError("not enough pixel data for the given size")

    stride = _row_stride(width)
    padding = bytes(stride - row_bytes)
    image_size = stride * height

    file_header = _FILE_HEADER.pack(
        b"BM", _HEADER_SIZE + image_size, 0, 0, _HEADER_SIZE
    )
    info_header = _INFO_HEADER.pack(
        _INFO_HEADER.size,
        width,
        height,
        1,
        24,
        BI_RGB,
        0,
        _PELS_PER_METER,
        _PELS_PER_METER,
        0,
        0,
    )

    try:
        with open(path, "wb") as out:
            out.write(file_header)
            out.write(info_header)
            for start in range(0, row_bytes * height, row_bytes):
                row = _swap_red_blue(bytearray(pixels[start:start + row_bytes]))
                out.write(row)
                out.write(padding)
    except OSError as exc:
        raise BitmapError(f"cannot write {path}") from exc