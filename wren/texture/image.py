# wren/texture/image.py
from __future__ import annotations

from typing import Dict

from PIL import Image

from wren.errors import UnsupportedFormatError
from wren.texture.formats import (
    FORMAT_SIZE,
    GL_ALPHA,
    GL_LUMINANCE,
    GL_LUMINANCE_ALPHA,
    GL_RED,
    GL_RG,
    GL_RGB,
    GL_RGBA,
    GL_UNSIGNED_BYTE,
    padded_row_length,
)
from wren.texture.types import ContainerInfo

_PIL_MODES: Dict[int, str] = {
    GL_RED: "L",
    GL_ALPHA: "L",
    GL_LUMINANCE: "L",
    GL_RG: "LA",
    GL_LUMINANCE_ALPHA: "LA",
    GL_RGB: "RGB",
    GL_RGBA: "RGBA",
}


def face_to_image(
    info: ContainerInfo,
    level: int = 0,
    element: int = 0,
    face: int = 0,
    z: int = 0,
) -> Image.Image:
    """
    Copy one depth slice of a decoded face into a Pillow image, dropping the
    row padding. Only 8-bit unsigned formats are supported.
    """
    mode = _PIL_MODES.get(info.gl_format)
    if info.gl_type != GL_UNSIGNED_BYTE or mode is None:
        raise UnsupportedFormatError(
            f"No image conversion for glType=0x{info.gl_type:04X} "
            f"glFormat=0x{info.gl_format:04X}"
        )

    mip = info.mipmaps[level]
    if not 0 <= z < mip.depth:
        raise IndexError(f"depth slice {z} out of range for level {level}")

    stride = padded_row_length(mip.width, FORMAT_SIZE[info.gl_format])
    slice_size = stride * mip.height
    data = info.face(level, element, face)[z * slice_size : (z + 1) * slice_size]

    return Image.frombytes(
        mode, (mip.width, mip.height), bytes(data), "raw", mode, stride, 1
    )
