# wren/texture/metadata.py
from __future__ import annotations

import math
import re
from typing import List, Tuple

from wren.errors import OutOfBoundsError, TruncatedDataError
from wren.settings import ALIGNMENT
from wren.texture.cursor import ByteCursor
from wren.texture.types import ContainerInfo, KeyValue

_WHITESPACE = re.compile(r"\s+")


def split_key_value(entry: memoryview) -> KeyValue:
    """
    Split an entry at its first NUL. The key keeps the NUL, the value is
    everything after it.
    """
    raw = bytes(entry)
    end = raw.find(b"\x00")
    if end < 0:
        return KeyValue(raw.decode("utf-8", errors="replace"), entry[0:0])

    key = raw[: end + 1].decode("utf-8", errors="replace")
    return KeyValue(key, entry[end + 1 :])


def parse_key_values(
    cursor: ByteCursor, byte_length: int, little_endian: bool
) -> Tuple[KeyValue, ...]:
    """
    Parse key/value entries until their lengths add up to ``byte_length``.

    Each entry is a uint32 size, the entry bytes, then zero padding up to
    the entry's 4-byte boundary. Only the entry bytes count towards
    ``byte_length``; size fields and padding do not.
    """
    entries: List[KeyValue] = []
    consumed = 0
    while consumed < byte_length:
        try:
            size = cursor.read_uint32(little_endian)
            entry_start = cursor.offset
            entries.append(split_key_value(cursor.read_bytes(size)))
        except OutOfBoundsError as exc:
            raise TruncatedDataError(
                f"Key/value entry {len(entries)} runs past end of data "
                f"({consumed} of {byte_length} bytes read)",
                section="key_value_data",
                offset=exc.offset,
                size=exc.size,
                length=exc.length,
            ) from exc
        consumed += size
        cursor.skip_while_zero(limit=cursor.padding_to(ALIGNMENT, origin=entry_start))

    return tuple(entries)


def parse_spherical_harmonics(info: ContainerInfo) -> List[float]:
    """
    Coefficients stored under the first key matching ``sh``, as a flat list.
    Tokens that do not parse as floats, and NaNs, are dropped.
    """
    entry = info.find_key_value("sh")
    if entry is None:
        return []

    coefficients: List[float] = []
    for token in _WHITESPACE.split(entry.text()):
        try:
            value = float(token)
        except ValueError:
            continue
        if not math.isnan(value):
            coefficients.append(value)
    return coefficients
