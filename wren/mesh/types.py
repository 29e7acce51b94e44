# wren/mesh/types.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

import numpy as np

from wren.texture.formats import GL_FLOAT

FLOAT = GL_FLOAT
COMPONENT_SIZE = 4  # every attribute component is a float32

BufferLike = Union[bytes, bytearray, memoryview]


@dataclass(frozen=True, slots=True)
class VertexAttribute:
    """Where one attribute lives inside a mesh's vertex buffer."""

    semantics: str  # e.g. "position", "normal", "uv"
    slot: int  # shader attribute location
    size: int  # component count
    type: int = FLOAT
    offset: int = 0  # bytes from the start of vertex_data
    stride: int = 0  # bytes between consecutive vertices

    @property
    def byte_size(self) -> int:
        return self.size * COMPONENT_SIZE


def _as_index_array(indices: Union[Sequence[int], BufferLike, np.ndarray]) -> np.ndarray:
    if isinstance(indices, (bytes, bytearray, memoryview)):
        return np.frombuffer(indices, dtype="<u2").astype(np.uint16)
    return np.asarray(indices, dtype=np.uint16)


@dataclass(eq=False)
class Mesh:
    """
    Interleaved vertex buffer plus a uint16 triangle-list index buffer.

    ``index_data`` may be given as a sequence of ints or as raw
    little-endian uint16 bytes; it is stored as a numpy array.
    """

    vertex_format: List[VertexAttribute]
    vertex_data: BufferLike
    index_data: np.ndarray = field(
        default_factory=lambda: np.zeros(0, dtype=np.uint16)
    )

    def __post_init__(self) -> None:
        self.vertex_format = list(self.vertex_format)
        self.index_data = _as_index_array(self.index_data)

    @property
    def triangle_count(self) -> int:
        return len(self.index_data) // 3

    def find_attribute(self, semantics: str) -> Optional[VertexAttribute]:
        """
        Attribute declared under ``semantics``. When a name is declared more
        than once the last declaration wins, as it does for vertex streams.
        """
        for attribute in reversed(self.vertex_format):
            if attribute.semantics == semantics:
                return attribute
        return None


def concat_buffers(a: BufferLike, b: BufferLike) -> bytes:
    """Bytes of ``a`` followed by the bytes of ``b``."""
    return bytes(a) + bytes(b)
