"""
Triangle view of ramp geometry for external viewers.

Triangles are yielded lazily so a viewer can stream them into its own
buffers.  Every lateral quad between two steps becomes two triangles; start
and end caps are fan-triangulated unless the ramp loops.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

import numpy as np

from surf_ramp_toolkit.src.conversion.vector_math import Vec3, transform_vertex
from .geometry_generator import RampGeometry, SweptSolid

Triangle = Tuple[Vec3, Vec3, Vec3]


def iter_triangles(geometry: RampGeometry) -> Iterator[Triangle]:
    for solid in geometry.solids:
        yield from _lateral_triangles(solid)
        if not geometry.is_loop:
            yield from _cap_triangles(solid.steps[0], flip=True)
            yield from _cap_triangles(solid.steps[-1], flip=False)


def triangle_count(geometry: RampGeometry) -> int:
    total = 0
    for solid in geometry.solids:
        points = solid.point_count
        total += len(solid.segments) * points * 2
        if not geometry.is_loop:
            total += 2 * (points - 2)
    return total


def _lateral_triangles(solid: SweptSolid) -> Iterator[Triangle]:
    n = solid.point_count
    for current, following in zip(solid.steps, solid.steps[1:]):
        for j in range(n):
            k = (j + 1) % n
            yield (current[j], current[k], following[j])
            yield (current[k], following[k], following[j])


def _cap_triangles(step, flip: bool) -> Iterator[Triangle]:
    for j in range(1, len(step) - 1):
        if flip:
            yield (step[0], step[j + 1], step[j])
        else:
            yield (step[0], step[j], step[j + 1])


@dataclass(frozen=True, eq=False)
class VisualizationData:
    """Read-only triangle source for one ramp.

    ``faces`` returns a fresh lazy iterator on every access; ``transform``
    places the triangles in world space when the ramp belongs to a chain.
    """
    geometry: RampGeometry
    transform: Optional[np.ndarray] = None

    @property
    def faces(self) -> Iterator[Triangle]:
        if self.transform is None:
            return iter_triangles(self.geometry)
        return self._transformed_faces()

    def _transformed_faces(self) -> Iterator[Triangle]:
        m = self.transform
        for a, b, c in iter_triangles(self.geometry):
            yield (transform_vertex(a, m), transform_vertex(b, m), transform_vertex(c, m))

    @property
    def face_count(self) -> int:
        return triangle_count(self.geometry)

    def __iter__(self) -> Iterator[Triangle]:
        return self.faces
