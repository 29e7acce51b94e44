# wren/texture/formats.py
"""GL enums used by texture containers and the texel size tables built on them."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from wren.errors import UnsupportedFormatError
from wren.texture.types import ContainerHeader

# -- Component types --
GL_BYTE = 0x1400
GL_UNSIGNED_BYTE = 0x1401
GL_SHORT = 0x1402
GL_UNSIGNED_SHORT = 0x1403
GL_INT = 0x1404
GL_UNSIGNED_INT = 0x1405
GL_FLOAT = 0x1406
GL_HALF_FLOAT = 0x140B

# -- Packed types (one value holds the whole texel) --
GL_UNSIGNED_SHORT_5_6_5 = 0x8363
GL_UNSIGNED_SHORT_4_4_4_4 = 0x8033
GL_UNSIGNED_SHORT_5_5_5_1 = 0x8034
GL_UNSIGNED_INT_2_10_10_10_REV = 0x8368
GL_UNSIGNED_INT_10F_11F_11F_REV = 0x8C3B
GL_UNSIGNED_INT_5_9_9_9_REV = 0x8C3E
GL_UNSIGNED_INT_24_8 = 0x84FA

# -- Pixel formats --
GL_DEPTH_COMPONENT = 0x1902
GL_RED = 0x1903
GL_ALPHA = 0x1906
GL_RGB = 0x1907
GL_RGBA = 0x1908
GL_LUMINANCE = 0x1909
GL_LUMINANCE_ALPHA = 0x190A
GL_BGR = 0x80E0
GL_BGRA = 0x80E1
GL_RG = 0x8227
GL_RG_INTEGER = 0x8228
GL_RED_INTEGER = 0x8D94
GL_RGB_INTEGER = 0x8D98
GL_RGBA_INTEGER = 0x8D99
GL_DEPTH_STENCIL = 0x84F9

# -- Internal formats with special upload handling --
GL_R11F_G11F_B10F = 0x8C3A

TYPE_SIZE: Dict[int, int] = {
    GL_BYTE: 1,
    GL_UNSIGNED_BYTE: 1,
    GL_SHORT: 2,
    GL_UNSIGNED_SHORT: 2,
    GL_HALF_FLOAT: 2,
    GL_INT: 4,
    GL_UNSIGNED_INT: 4,
    GL_FLOAT: 4,
}

PACKED_TYPE_SIZE: Dict[int, int] = {
    GL_UNSIGNED_SHORT_5_6_5: 2,
    GL_UNSIGNED_SHORT_4_4_4_4: 2,
    GL_UNSIGNED_SHORT_5_5_5_1: 2,
    GL_UNSIGNED_INT_2_10_10_10_REV: 4,
    GL_UNSIGNED_INT_10F_11F_11F_REV: 4,
    GL_UNSIGNED_INT_5_9_9_9_REV: 4,
    GL_UNSIGNED_INT_24_8: 4,
}

FORMAT_SIZE: Dict[int, int] = {
    GL_RED: 1,
    GL_RG: 2,
    GL_RGB: 3,
    GL_RGBA: 4,
    GL_RED_INTEGER: 1,
    GL_RG_INTEGER: 2,
    GL_RGB_INTEGER: 3,
    GL_RGBA_INTEGER: 4,
    GL_ALPHA: 1,
    GL_LUMINANCE: 1,
    GL_LUMINANCE_ALPHA: 2,
    GL_BGR: 3,
    GL_BGRA: 4,
    GL_DEPTH_COMPONENT: 1,
    GL_DEPTH_STENCIL: 1,
}


def bytes_per_component(gl_type: int, gl_type_size: int = 0) -> Optional[int]:
    size = TYPE_SIZE.get(gl_type)
    if size is None and gl_type not in PACKED_TYPE_SIZE and gl_type_size:
        # Unknown enum, trust the header's own glTypeSize.
        size = gl_type_size
    return size


def texel_size(gl_type: int, gl_format: int, gl_type_size: int = 0) -> int:
    """
    Bytes per texel.

    Packed types already describe the full texel, so the component count of
    the format is ignored for them.
    """
    packed = PACKED_TYPE_SIZE.get(gl_type)
    if packed is not None:
        return packed

    components = FORMAT_SIZE.get(gl_format)
    per_component = bytes_per_component(gl_type, gl_type_size)
    if components is None or per_component is None:
        raise UnsupportedFormatError(
            f"Cannot derive texel size for glType=0x{gl_type:04X} "
            f"glFormat=0x{gl_format:04X} (compressed or unknown format)"
        )
    return components * per_component


def padded_row_length(width: int, texel: int) -> int:
    row_length = width * texel
    return row_length + (3 - (row_length + 3) % 4)


def face_byte_length(width: int, height: int, depth: int, texel: int) -> int:
    return depth * height * padded_row_length(width, texel)


def resolve_upload_format(header: ContainerHeader) -> Tuple[int, int, int]:
    """
    (internalFormat, format, type) triple to hand to a texImage call.

    R11F_G11F_B10F data is uploaded as packed RGB regardless of what the
    container declares.
    """
    if header.gl_internal_format == GL_R11F_G11F_B10F:
        return (
            header.gl_internal_format,
            GL_RGB,
            GL_UNSIGNED_INT_10F_11F_11F_REV,
        )
    return header.gl_internal_format, header.gl_format, header.gl_type
