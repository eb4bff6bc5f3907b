"""
Vector and rigid-transform math for ramp geometry.

Points and directions are plain ``(x, y, z)`` float tuples.  Rigid transforms
are 4x4 numpy arrays in column-vector convention (``M @ [x, y, z, 1]``):
the rotation block holds the frame axes as columns and the last column holds
the translation.
"""

from __future__ import annotations
import math
from typing import Sequence, Tuple

import numpy as np

Vec3 = Tuple[float, float, float]
Vec2 = Tuple[float, float]

UP: Vec3 = (0.0, 0.0, 1.0)
FORWARD: Vec3 = (1.0, 0.0, 0.0)


def sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def dot(a: Vec3, b: Vec3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def length(v: Vec3) -> float:
    return math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])


def normalize(v: Vec3, fallback: Vec3 = UP) -> Vec3:
    """Unit vector along ``v``, or ``fallback`` when ``v`` has zero length."""
    ln = length(v)
    if ln > 0:
        return (v[0] / ln, v[1] / ln, v[2] / ln)
    return fallback


def midpoint(a: Vec3, b: Vec3) -> Vec3:
    return ((a[0] + b[0]) / 2, (a[1] + b[1]) / 2, (a[2] + b[2]) / 2)


def average(points: Sequence[Vec3]) -> Vec3:
    """Centroid of a point list (origin for an empty list)."""
    if not points:
        return (0.0, 0.0, 0.0)
    sx = sy = sz = 0.0
    for p in points:
        sx += p[0]
        sy += p[1]
        sz += p[2]
    n = len(points)
    return (sx / n, sy / n, sz / n)


def rotate_around_axis(point: Vec3, axis: Vec3, center: Vec3, angle: float) -> Vec3:
    """Rotate ``point`` about the line through ``center`` along ``axis``.

    Rodrigues' formula: the offset from ``center`` is split into components
    parallel and perpendicular to ``axis`` and recombined with cos/sin of
    ``angle``.  Positive angles turn clockwise when looking down ``axis``
    (the cross term is ``offset x axis``); the ramp spin table relies on this
    handedness.  ``axis`` must be unit length.
    """
    rx = point[0] - center[0]
    ry = point[1] - center[1]
    rz = point[2] - center[2]
    ax, ay, az = axis

    c = math.cos(angle)
    s = math.sin(angle)
    d = rx * ax + ry * ay + rz * az

    cx = ry * az - rz * ay
    cy = rz * ax - rx * az
    cz = rx * ay - ry * ax

    return (
        rx * c + cx * s + ax * d * (1 - c) + center[0],
        ry * c + cy * s + ay * d * (1 - c) + center[1],
        rz * c + cz * s + az * d * (1 - c) + center[2],
    )


def get_normal_2d(p1: Vec3, p2: Vec3) -> Vec2:
    """Normal ``(ny, nz)`` of the YZ-plane edge p1 -> p2.

    The edge direction rotated by 90 degrees: ``(-dz, dy) / |edge|``.
    Returns ``(0, 0)`` for a zero-length edge.
    """
    dy = p2[1] - p1[1]
    dz = p2[2] - p1[2]
    ln = math.sqrt(dy * dy + dz * dz)
    if ln == 0:
        return (0.0, 0.0)
    return (-dz / ln, dy / ln)


def calculate_face_normal(vertices: Sequence[Vec3]) -> Vec3:
    if len(vertices) < 3:
        return UP
    e1 = sub(vertices[1], vertices[0])
    e2 = sub(vertices[2], vertices[0])
    return normalize(cross(e1, e2))


# ---------------------------------------------------------------
# Rigid transforms
# ---------------------------------------------------------------

def create_identity_matrix() -> np.ndarray:
    return np.identity(4, dtype=float)


def create_basis_matrix(position: Vec3, forward: Vec3, up: Vec3) -> np.ndarray:
    """Frame matrix whose columns are forward, side (up x forward), up, position."""
    side = cross(up, forward)
    m = np.identity(4, dtype=float)
    m[:3, 0] = forward
    m[:3, 1] = side
    m[:3, 2] = up
    m[:3, 3] = position
    return m


def invert_transform_matrix(matrix: np.ndarray) -> np.ndarray:
    """Inverse of a rigid transform.

    Only valid for an orthonormal rotation block: the rotation is transposed
    and the translation recomputed.  No general inversion is attempted.
    """
    rot_t = matrix[:3, :3].T
    inv = np.identity(4, dtype=float)
    inv[:3, :3] = rot_t
    inv[:3, 3] = -(rot_t @ matrix[:3, 3])
    return inv


def multiply_matrices(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Compose transforms: the result applies ``b`` first, then ``a``."""
    return a @ b


def transform_vertex(vertex: Vec3, matrix: np.ndarray) -> Vec3:
    x, y, z = vertex
    m = matrix
    return (
        float(m[0, 0] * x + m[0, 1] * y + m[0, 2] * z + m[0, 3]),
        float(m[1, 0] * x + m[1, 1] * y + m[1, 2] * z + m[1, 3]),
        float(m[2, 0] * x + m[2, 1] * y + m[2, 2] * z + m[2, 3]),
    )


def transform_vector(vector: Vec3, matrix: np.ndarray) -> Vec3:
    x, y, z = vector
    m = matrix
    return (
        float(m[0, 0] * x + m[0, 1] * y + m[0, 2] * z),
        float(m[1, 0] * x + m[1, 1] * y + m[1, 2] * z),
        float(m[2, 0] * x + m[2, 1] * y + m[2, 2] * z),
    )
