# wren/texture/mipmaps.py
from __future__ import annotations

from typing import List, Tuple

from wren.errors import OutOfBoundsError, TruncatedDataError
from wren.settings import ALIGNMENT, PaddingMode
from wren.texture.cursor import ByteCursor
from wren.texture.formats import face_byte_length, texel_size
from wren.texture.types import ArrayElement, ContainerHeader, MipmapLevel


def level_dimensions(header: ContainerHeader, level: int) -> Tuple[int, int, int]:
    """(width, height, depth) of mip ``level``: halved per level, floored at 1."""
    return (
        max(1, header.pixel_width >> level),
        max(1, header.pixel_height >> level),
        max(1, header.pixel_depth >> level),
    )


def skip_padding(
    cursor: ByteCursor,
    mode: PaddingMode,
    origin: int,
    alignment: int = ALIGNMENT,
) -> int:
    """Skip zero padding after a section that started at ``origin``."""
    if mode is PaddingMode.SCAN:
        return cursor.skip_while_zero()
    return cursor.skip_while_zero(limit=cursor.padding_to(alignment, origin))


def parse_mipmaps(
    cursor: ByteCursor,
    header: ContainerHeader,
    padding: PaddingMode = PaddingMode.SCAN,
    alignment: int = ALIGNMENT,
) -> Tuple[MipmapLevel, ...]:
    """
    Slice every face of every array element of every mip level.

    ``imageSize`` is read but not trusted: slice lengths come from the level
    geometry and texel size.

    With ``PaddingMode.SCAN`` every zero byte after a face or level is taken
    as padding, including leading zeros of the next face or of the next
    level's ``imageSize``. ``PaddingMode.ALIGNED`` stops at the 4-byte
    boundary of the section instead.
    """
    texel = texel_size(header.gl_type, header.gl_format, header.gl_type_size)
    width = header.pixel_width
    height = header.pixel_height
    depth = header.pixel_depth

    levels: List[MipmapLevel] = []
    for level in range(header.number_of_mipmap_levels):
        section = f"mip level {level}"
        try:
            image_size = cursor.read_uint32(header.little_endian)
            level_start = cursor.offset
            size = face_byte_length(width, height, depth, texel)

            elements: List[ArrayElement] = []
            for _ in range(header.number_of_array_elements):
                faces: List[memoryview] = []
                for _ in range(header.number_of_faces):
                    face_start = cursor.offset
                    faces.append(cursor.read_bytes(size))
                    skip_padding(cursor, padding, face_start, alignment)  # cube padding
                elements.append(ArrayElement(faces=tuple(faces)))
        except OutOfBoundsError as exc:
            raise TruncatedDataError(
                f"Container data ends inside {section}: {exc}",
                section=section,
                offset=exc.offset,
                size=exc.size,
                length=exc.length,
            ) from exc

        levels.append(
            MipmapLevel(
                level=level,
                image_size=image_size,
                width=width,
                height=height,
                depth=depth,
                elements=tuple(elements),
            )
        )

        skip_padding(cursor, padding, level_start, alignment)  # mip padding
        width = max(1, width >> 1)
        height = max(1, height >> 1)
        depth = max(1, depth >> 1)

    return tuple(levels)
