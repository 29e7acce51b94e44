# wren/mesh/streams.py
"""
Lazy views of a mesh as attributes, vertices and triangles.

Every stream here is restartable: each ``iter()`` starts again from the
first index. Streams are not meant to be shared mid-iteration.
"""

from __future__ import annotations

import struct
from itertools import islice, zip_longest
from typing import (
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    NamedTuple,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from wren.errors import AttributeStreamMismatchError, OutOfBoundsError
from wren.mesh.types import Mesh, VertexAttribute

AttributeValue = Union[float, Tuple[float, ...]]

_END = object()


class StreamVertexAttribute(NamedTuple):
    index: int
    value: AttributeValue


class VertexAttributeStream:
    """One value per index-buffer entry. Shared vertices repeat."""

    def __init__(self, mesh: Mesh, attribute: VertexAttribute) -> None:
        self.mesh = mesh
        self.attribute = attribute
        self._struct = struct.Struct(f"<{attribute.size}f")

    def __len__(self) -> int:
        return len(self.mesh.index_data)

    def read(self, data: memoryview, index: int) -> AttributeValue:
        start = self.attribute.offset + self.attribute.stride * index
        end = start + self.attribute.byte_size
        if start < 0 or end > len(data):
            raise OutOfBoundsError(
                f"Attribute '{self.attribute.semantics}' of vertex {index} "
                f"at bytes {start}..{end} is outside a {len(data)} byte buffer",
                offset=start,
                size=self.attribute.byte_size,
                length=len(data),
            )
        values = self._struct.unpack_from(data, start)
        return values[0] if self.attribute.size == 1 else values

    def __iter__(self) -> Iterator[StreamVertexAttribute]:
        data = memoryview(self.mesh.vertex_data).cast("B")
        for index in self.mesh.index_data.tolist():
            yield StreamVertexAttribute(index, self.read(data, index))


class StreamVertex(Mapping[str, AttributeValue]):
    """A vertex as ``semantics -> value``, with a fixed key set."""

    __slots__ = ("index", "_values")

    def __init__(
        self,
        index: int,
        values: Dict[str, AttributeValue],
        schema: Optional[Sequence[str]] = None,
    ) -> None:
        if schema is not None and set(values) != set(schema):
            raise ValueError(
                f"Vertex fields {sorted(values)} do not match "
                f"vertex format {sorted(schema)}"
            )
        self.index = index
        self._values = values

    def __getitem__(self, semantics: str) -> AttributeValue:
        return self._values[semantics]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self._values.items())
        return f"StreamVertex(index={self.index}, {fields})"


class VertexStream:
    """
    Zips one attribute stream per declared attribute into full vertices.

    ``semantics`` restricts the traversal to the named attributes.
    """

    def __init__(
        self, mesh: Mesh, semantics: Optional[Iterable[str]] = None
    ) -> None:
        wanted = None if semantics is None else set(semantics)
        self.streams: List[VertexAttributeStream] = [
            VertexAttributeStream(mesh, a)
            for a in mesh.vertex_format
            if wanted is None or a.semantics in wanted
        ]
        self.schema = self._schema_of(self.streams)

    @classmethod
    def from_streams(
        cls, streams: Sequence[VertexAttributeStream]
    ) -> VertexStream:
        stream = cls.__new__(cls)
        stream.streams = list(streams)
        stream.schema = cls._schema_of(stream.streams)
        return stream

    @staticmethod
    def _schema_of(streams: Sequence[VertexAttributeStream]) -> Tuple[str, ...]:
        return tuple(dict.fromkeys(s.attribute.semantics for s in streams))

    def __iter__(self) -> Iterator[StreamVertex]:
        names = [s.attribute.semantics for s in self.streams]
        iterators = [iter(s) for s in self.streams]

        for records in zip_longest(*iterators, fillvalue=_END):
            if any(r is _END for r in records):
                raise AttributeStreamMismatchError(
                    "Attribute streams ended at different lengths: "
                    + ", ".join(
                        name for name, r in zip(names, records) if r is _END
                    )
                    + " ran out first"
                )

            values: Dict[str, AttributeValue] = {}
            for name, record in zip(names, records):
                values[name] = record.value
            yield StreamVertex(records[0].index, values, self.schema)


StreamTriangle = Tuple[StreamVertex, StreamVertex, StreamVertex]


class TriangleStream:
    """Consecutive vertex triples. A trailing partial triangle is dropped."""

    def __init__(
        self, mesh: Mesh, semantics: Optional[Iterable[str]] = None
    ) -> None:
        self.vertices = VertexStream(mesh, semantics)

    def __iter__(self) -> Iterator[StreamTriangle]:
        vertices = iter(self.vertices)
        while True:
            triangle = tuple(islice(vertices, 3))
            if len(triangle) < 3:
                return
            yield triangle  # type: ignore[misc]
