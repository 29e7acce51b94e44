# wren/mesh/tangents.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Set, Tuple

import numpy as np

from wren.errors import MissingAttributeError
from wren.log import get_logger
from wren.mesh.streams import TriangleStream
from wren.mesh.types import FLOAT, Mesh, VertexAttribute, concat_buffers
from wren.settings import TangentSettings

logger = get_logger(__name__)

# semantics -> component count
REQUIRED_ATTRIBUTES = (("position", 3), ("uv", 2), ("normal", 3))
TANGENT_SEMANTICS = "tangent"
TANGENT_COMPONENTS = 4

Vec3 = Tuple[float, float, float]


@dataclass(frozen=True, slots=True)
class TangentSample:
    """Tangent basis of one vertex. Handedness is NaN for degenerate UVs."""

    index: int
    tangent: Vec3
    bitangent: Vec3
    handedness: float

    def packed(self) -> Tuple[float, float, float, float]:
        return (*self.tangent, self.handedness)


def _normalize(v: np.ndarray) -> np.ndarray:
    # Zero vectors stay zero. Any NaN makes every component NaN. With an inf
    # component and no NaN, inf components become NaN and finite ones 0.
    length_sq = float(np.dot(v, v))
    scale = 1.0 / math.sqrt(length_sq) if length_sq > 0 else length_sq
    return v * scale


def _vec(value) -> np.ndarray:
    return np.asarray(value, dtype=np.float64)


def check_tangent_inputs(mesh: Mesh) -> None:
    for semantics, size in REQUIRED_ATTRIBUTES:
        attribute = mesh.find_attribute(semantics)
        if attribute is None:
            raise MissingAttributeError(
                semantics,
                f'Failed to calculate tangents: "{semantics}" attribute is required',
            )
        if attribute.size != size:
            raise MissingAttributeError(
                semantics,
                f'Failed to calculate tangents: "{semantics}" must have '
                f"{size} components, not {attribute.size}",
            )


def compute_tangent_samples(mesh: Mesh) -> List[TangentSample]:
    """
    One sample per distinct vertex index, in first-seen order.

    The first triangle that references a vertex defines its basis; later
    triangles sharing the index are ignored for it.
    """
    check_tangent_inputs(mesh)

    samples: List[TangentSample] = []
    processed: Set[int] = set()
    triangles = TriangleStream(
        mesh, semantics=[name for name, _ in REQUIRED_ATTRIBUTES]
    )

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        for tri in triangles:
            positions = [_vec(v["position"]) for v in tri]
            uvs = [_vec(v["uv"]) for v in tri]

            for j in range(3):
                index = tri[j].index
                if index in processed:
                    continue

                edge1 = positions[(j + 1) % 3] - positions[j]
                edge2 = positions[(j + 2) % 3] - positions[j]
                duv1 = uvs[(j + 1) % 3] - uvs[j]
                duv2 = uvs[(j + 2) % 3] - uvs[j]

                inv_det = np.float64(1.0) / (duv1[0] * duv2[1] - duv1[1] * duv2[0])

                t = _normalize((edge1 * duv2[1] - edge2 * duv1[1]) * inv_det)
                b = _normalize((edge2 * duv1[0] - edge1 * duv2[0]) * inv_det)
                h = float(np.sign(np.dot(np.cross(t, b), _vec(tri[j]["normal"]))))

                samples.append(
                    TangentSample(
                        index=index,
                        tangent=tuple(float(c) for c in t),  # type: ignore[arg-type]
                        bitangent=tuple(float(c) for c in b),  # type: ignore[arg-type]
                        handedness=h,
                    )
                )
                processed.add(index)

    return samples


def calculate_tangents(
    mesh: Mesh, slot: Optional[int] = None, settings: Optional[TangentSettings] = None
) -> Mesh:
    """
    Append a ``"tangent"`` attribute (xyz + handedness) to ``mesh``.

    The data is a new tightly packed block at the end of ``vertex_data``,
    one entry per distinct vertex index in first-seen order. The mesh is
    mutated in place and returned. Calling this twice appends two blocks.
    """
    settings = settings or TangentSettings()
    if slot is None:
        slot = settings.slot

    samples = compute_tangent_samples(mesh)
    block = np.asarray(
        [s.packed() for s in samples], dtype="<f4"
    ).reshape(-1, TANGENT_COMPONENTS)

    attribute = VertexAttribute(
        semantics=TANGENT_SEMANTICS,
        slot=slot,
        size=TANGENT_COMPONENTS,
        type=FLOAT,
        offset=memoryview(mesh.vertex_data).nbytes,
        stride=block.itemsize * TANGENT_COMPONENTS,
    )
    mesh.vertex_format.append(attribute)
    mesh.vertex_data = concat_buffers(mesh.vertex_data, block.tobytes())

    logger.debug(
        "Generated %d tangent(s) for %d triangle(s) at byte offset %d",
        len(samples),
        mesh.triangle_count,
        attribute.offset,
    )
    return mesh
