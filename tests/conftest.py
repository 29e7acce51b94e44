import struct
from typing import Callable, Optional, Sequence, Tuple

import pytest

from wren.mesh import FLOAT, Mesh, VertexAttribute
from wren.texture.formats import (
    GL_RGBA,
    GL_UNSIGNED_BYTE,
    face_byte_length,
    texel_size,
)

GL_RGBA8 = 0x8058

# 12 byte KTX 11 magic, padded out to the 15 byte identifier field.
IDENTIFIER = b"\xabKTX 11\xbb\r\n\x1a\n\xff\xff\xff"
LE_MARKER = b"\x01\x02\x03\x04"
BE_MARKER = b"\x04\x03\x02\x01"

Vec3 = Tuple[float, float, float]
Vec2 = Tuple[float, float]


def pack_key_values(
    entries: Sequence[Tuple[str, bytes]], little_endian: bool = True
) -> bytes:
    """Key/value block: size, key NUL value, zero padding to 4 bytes."""
    e = "<" if little_endian else ">"
    out = bytearray()
    for key, value in entries:
        entry = key.encode("utf-8") + b"\x00" + value
        out += struct.pack(e + "I", len(entry))
        out += entry
        out += bytes(3 - (len(entry) + 3) % 4)
    return bytes(out)


def key_value_length(entries: Sequence[Tuple[str, bytes]]) -> int:
    """bytesOfKeyValueData for ``entries``: entry bytes only, no sizes or padding."""
    return sum(len(key.encode("utf-8")) + 1 + len(value) for key, value in entries)


def default_fill(level: int, element: int, face: int) -> int:
    """Distinct nonzero byte per face."""
    return 1 + (level * 64 + element * 8 + face) % 250


def build_container(
    width: int = 4,
    height: int = 4,
    depth: int = 0,
    array_elements: int = 0,
    faces: int = 1,
    levels: int = 1,
    gl_type: int = GL_UNSIGNED_BYTE,
    gl_type_size: int = 1,
    gl_format: int = GL_RGBA,
    gl_internal_format: int = GL_RGBA8,
    key_values: Sequence[Tuple[str, bytes]] = (),
    little_endian: bool = True,
    marker: Optional[bytes] = None,
    identifier: bytes = IDENTIFIER,
    fill: Callable[[int, int, int], int] = default_fill,
    face_padding: bytes = b"",
    level_padding: bytes = b"",
) -> bytes:
    e = "<" if little_endian else ">"
    if marker is None:
        marker = LE_MARKER if little_endian else BE_MARKER

    kv = pack_key_values(key_values, little_endian)
    out = bytearray(identifier)
    out += marker
    out += struct.pack(
        e + "12I",
        gl_type,
        gl_type_size,
        gl_format,
        gl_internal_format,
        gl_format,
        width,
        height,
        depth,
        array_elements,
        faces,
        levels,
        key_value_length(key_values),
    )
    out += kv

    texel = texel_size(gl_type, gl_format, gl_type_size)
    w, h, d = width, height, max(depth, 1)
    n_elements = max(array_elements, 1)
    n_faces = max(faces, 1)
    for level in range(max(levels, 1)):
        size = face_byte_length(w, h, d, texel)
        out += struct.pack(e + "I", size * n_faces)
        for element in range(n_elements):
            for face in range(n_faces):
                out += bytes([fill(level, element, face)]) * size
                out += face_padding
        out += level_padding
        w, h, d = max(1, w >> 1), max(1, h >> 1), max(1, d >> 1)

    return bytes(out)


STRIDE = struct.calcsize("<3f3f2f")

INTERLEAVED_FORMAT = [
    VertexAttribute("position", slot=0, size=3, type=FLOAT, offset=0, stride=STRIDE),
    VertexAttribute("normal", slot=1, size=3, type=FLOAT, offset=12, stride=STRIDE),
    VertexAttribute("uv", slot=2, size=2, type=FLOAT, offset=24, stride=STRIDE),
]


def build_mesh(
    vertices: Sequence[Tuple[Vec3, Vec3, Vec2]], indices: Sequence[int]
) -> Mesh:
    """Interleaved position/normal/uv mesh, the layout the OBJ loader emits."""
    data = b"".join(
        struct.pack("<3f 3f 2f", *p, *n, *uv) for p, n, uv in vertices
    )
    return Mesh(list(INTERLEAVED_FORMAT), data, list(indices))


UP = (0.0, 0.0, 1.0)

# Unit right triangle in the XY plane with matching UVs.
TRIANGLE = [
    ((0.0, 0.0, 0.0), UP, (0.0, 0.0)),
    ((1.0, 0.0, 0.0), UP, (1.0, 0.0)),
    ((0.0, 1.0, 0.0), UP, (0.0, 1.0)),
]

# Unit quad as two triangles sharing vertices 0 and 2.
QUAD = TRIANGLE[:2] + [
    ((1.0, 1.0, 0.0), UP, (1.0, 1.0)),
    ((0.0, 1.0, 0.0), UP, (0.0, 1.0)),
]
QUAD_INDICES = [0, 1, 2, 0, 2, 3]


@pytest.fixture
def triangle_mesh() -> Mesh:
    return build_mesh(TRIANGLE, [0, 1, 2])


@pytest.fixture
def quad_mesh() -> Mesh:
    return build_mesh(QUAD, QUAD_INDICES)


@pytest.fixture
def rgba_container() -> bytes:
    """4x4 RGBA8, 3 mip levels, one metadata entry."""
    return build_container(
        width=4,
        height=4,
        levels=3,
        key_values=[("KTXorientation", b"S=r,T=d\x00")],
    )
