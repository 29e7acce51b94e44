# wren/__init__.py
from wren.errors import (
    AttributeStreamMismatchError,
    MissingAttributeError,
    OutOfBoundsError,
    TruncatedDataError,
    UnsupportedFormatError,
    WrenError,
)
from wren.log import configure_logging, get_logger
from wren.mesh import (
    Mesh,
    TriangleStream,
    VertexAttribute,
    VertexAttributeStream,
    VertexStream,
    calculate_tangents,
    compute_tangent_samples,
)
from wren.settings import DecoderSettings, PaddingMode, TangentSettings
from wren.texture import (
    ArrayElement,
    ContainerHeader,
    ContainerInfo,
    KeyValue,
    MipmapLevel,
    parse_spherical_harmonics,
    read_ktx,
)

__all__ = [
    "read_ktx",
    "parse_spherical_harmonics",
    "ContainerHeader",
    "ContainerInfo",
    "MipmapLevel",
    "ArrayElement",
    "KeyValue",
    "DecoderSettings",
    "TangentSettings",
    "PaddingMode",
    "Mesh",
    "VertexAttribute",
    "VertexAttributeStream",
    "VertexStream",
    "TriangleStream",
    "calculate_tangents",
    "compute_tangent_samples",
    "WrenError",
    "OutOfBoundsError",
    "TruncatedDataError",
    "UnsupportedFormatError",
    "MissingAttributeError",
    "AttributeStreamMismatchError",
    "configure_logging",
    "get_logger",
]
