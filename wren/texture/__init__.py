# wren/texture/__init__.py
from wren.texture.cursor import ByteCursor
from wren.texture.decoder import KtxReader, read_ktx
from wren.texture.formats import resolve_upload_format, texel_size
from wren.texture.header import parse_header
from wren.texture.image import face_to_image
from wren.texture.metadata import parse_key_values, parse_spherical_harmonics
from wren.texture.mipmaps import level_dimensions, parse_mipmaps
from wren.texture.types import (
    ArrayElement,
    ContainerHeader,
    ContainerInfo,
    KeyValue,
    MipmapLevel,
)

__all__ = [
    "ByteCursor",
    "KtxReader",
    "read_ktx",
    "parse_header",
    "parse_key_values",
    "parse_mipmaps",
    "parse_spherical_harmonics",
    "level_dimensions",
    "texel_size",
    "resolve_upload_format",
    "face_to_image",
    "ArrayElement",
    "ContainerHeader",
    "ContainerInfo",
    "KeyValue",
    "MipmapLevel",
]
