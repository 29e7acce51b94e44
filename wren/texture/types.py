# wren/texture/types.py
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import NamedTuple, Optional, Pattern, Tuple, Union

HEADER_FIELDS: Tuple[str, ...] = (
    "gl_type",
    "gl_type_size",
    "gl_format",
    "gl_internal_format",
    "gl_base_internal_format",
    "pixel_width",
    "pixel_height",
    "pixel_depth",
    "number_of_array_elements",
    "number_of_faces",
    "number_of_mipmap_levels",
    "bytes_of_key_value_data",
)


class KeyValue(NamedTuple):
    """One metadata entry. ``key`` keeps its terminating NUL."""

    key: str
    value: memoryview

    @property
    def name(self) -> str:
        return self.key.rstrip("\x00")

    def text(self, encoding: str = "utf-8") -> str:
        return bytes(self.value).decode(encoding, errors="replace").rstrip("\x00")


@dataclass(frozen=True, slots=True)
class ArrayElement:
    """Faces of one array element: 1 for plain textures, 6 for cubemaps."""

    faces: Tuple[memoryview, ...]


@dataclass(frozen=True, slots=True)
class MipmapLevel:
    level: int
    image_size: int  # as declared in the file, pre-padding
    width: int
    height: int
    depth: int
    elements: Tuple[ArrayElement, ...]


@dataclass(frozen=True, slots=True)
class ContainerHeader:
    """Fixed-layout header, fields in on-disk order."""

    identifier: str
    little_endian: bool
    gl_type: int
    gl_type_size: int
    gl_format: int
    gl_internal_format: int
    gl_base_internal_format: int
    pixel_width: int
    pixel_height: int
    pixel_depth: int
    number_of_array_elements: int
    number_of_faces: int
    number_of_mipmap_levels: int
    bytes_of_key_value_data: int

    @property
    def is_cubemap(self) -> bool:
        return self.number_of_faces == 6


@dataclass(frozen=True, slots=True)
class ContainerInfo(ContainerHeader):
    """Fully decoded container. Face slices alias the input buffer."""

    key_value_data: Tuple[KeyValue, ...] = ()
    mipmaps: Tuple[MipmapLevel, ...] = ()

    def find_key_value(
        self, pattern: Union[str, Pattern[str]]
    ) -> Optional[KeyValue]:
        """First entry (in declaration order) whose key matches ``pattern``."""
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        for entry in self.key_value_data:
            if regex.search(entry.key):
                return entry
        return None

    def face(self, level: int, element: int = 0, face: int = 0) -> memoryview:
        return self.mipmaps[level].elements[element].faces[face]
