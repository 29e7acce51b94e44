# wren/mesh/__init__.py
from wren.mesh.streams import (
    StreamVertex,
    StreamVertexAttribute,
    TriangleStream,
    VertexAttributeStream,
    VertexStream,
)
from wren.mesh.tangents import (
    TangentSample,
    calculate_tangents,
    compute_tangent_samples,
)
from wren.mesh.types import FLOAT, Mesh, VertexAttribute, concat_buffers

__all__ = [
    "Mesh",
    "VertexAttribute",
    "FLOAT",
    "concat_buffers",
    "VertexAttributeStream",
    "VertexStream",
    "TriangleStream",
    "StreamVertex",
    "StreamVertexAttribute",
    "TangentSample",
    "calculate_tangents",
    "compute_tangent_samples",
]
