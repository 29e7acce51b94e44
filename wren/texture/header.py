# wren/texture/header.py
from __future__ import annotations

from typing import Dict

from wren.log import get_logger
from wren.settings import IDENTIFIER_SIZE
from wren.texture.cursor import ByteCursor
from wren.texture.types import HEADER_FIELDS, ContainerHeader

logger = get_logger(__name__)

LITTLE_ENDIAN_MARKER = b"\x01\x02\x03\x04"
BIG_ENDIAN_MARKER = b"\x04\x03\x02\x01"

# "Unspecified" means one for these counts.
_NORMALIZED_COUNTS = (
    "pixel_depth",
    "number_of_array_elements",
    "number_of_faces",
    "number_of_mipmap_levels",
)


def parse_header(
    cursor: ByteCursor, identifier_size: int = IDENTIFIER_SIZE
) -> ContainerHeader:
    """
    Read the identifier, the endianness marker and the twelve uint32 header
    fields. Leaves the cursor right after the header.
    """
    identifier = bytes(cursor.read_bytes(identifier_size)).decode("latin-1")

    marker = bytes(cursor.read_bytes(4))
    little_endian = marker == LITTLE_ENDIAN_MARKER
    if not little_endian and marker != BIG_ENDIAN_MARKER:
        logger.debug(
            "Unrecognised endianness marker %s, reading as big-endian",
            marker.hex(" "),
        )

    fields: Dict[str, int] = {}
    for name in HEADER_FIELDS:
        fields[name] = cursor.read_uint32(little_endian)

    for name in _NORMALIZED_COUNTS:
        fields[name] = fields[name] or 1

    return ContainerHeader(
        identifier=identifier, little_endian=little_endian, **fields
    )
