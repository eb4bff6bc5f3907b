"""
Texture-axis math for swept ramp faces.

Lateral faces of a sweep get axes that follow the sweep: U runs along the
sweep direction and V runs down the cross-section, so a texture reads
continuously around a curve.  Cap faces use a plain dominant-axis projection.

Shift values are wrapped into ``[0, TEXTURE_SIZE)`` to keep the emitted
numbers bounded.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from .number_format import format_fixed, format_number
from .vector_math import Vec3, cross, dot, length, midpoint, normalize, sub

TEXTURE_SIZE = 1024.0
AXIS_DECIMALS = 4


@dataclass(frozen=True)
class TextureAxis:
    """One VMF texture axis: ``[x y z shift] scale``.

    ``decimals`` selects fixed-point text for the direction and shift;
    ``None`` prints them as plain numbers (used for projected cap axes).
    """
    direction: Vec3
    shift: float
    scale: float
    decimals: Optional[int] = AXIS_DECIMALS

    def format(self) -> str:
        def fmt(n: float) -> str:
            if self.decimals is None:
                return format_number(n)
            return format_fixed(n, self.decimals)

        x, y, z = self.direction
        return f"[{fmt(x)} {fmt(y)} {fmt(z)} {fmt(self.shift)}] {format_number(self.scale)}"

    def __str__(self) -> str:
        return self.format()


@dataclass(frozen=True)
class FaceUV:
    """Texture axes for a lateral face plus its length along U."""
    uaxis: TextureAxis
    vaxis: TextureAxis
    u_length: float


def calculate_face_uv(v1: Vec3, v2: Vec3, v3: Vec3, v4: Vec3,
                      uv_scale: float, texture_offset: float = 0.0) -> FaceUV:
    """Compute U/V axes for the quad ``v1 v2 v3 v4``.

    ``v1 -> v2`` is the edge on the start step and ``v4 -> v3`` the matching
    edge on the end step.  ``texture_offset`` is the running U offset for this
    edge index along the solid; callers advance it by
    ``u_length / uv_scale`` after each face.
    """
    mid_start = midpoint(v1, v2)
    mid_end = midpoint(v4, v3)
    span = sub(mid_end, mid_start)

    u_axis = normalize(span, (1.0, 0.0, 0.0))
    face_normal = _plane_normal(v4, v3, v2)
    v_axis = _v_axis(face_normal, u_axis, v1, v2, v3, v4)

    shift_u = wrap_texture_coord(texture_offset - _safe_ratio(dot(mid_start, u_axis), uv_scale))
    shift_v = wrap_texture_coord(0 - _safe_ratio(dot(v1, v_axis), uv_scale))

    return FaceUV(
        uaxis=TextureAxis(u_axis, shift_u, uv_scale),
        vaxis=TextureAxis(v_axis, shift_v, uv_scale),
        u_length=length(span),
    )


def calculate_projected_uv(p1: Vec3, p2: Vec3, p3: Vec3,
                           uv_scale: float = 0.25) -> Tuple[TextureAxis, TextureAxis]:
    """World-aligned axes for the plane through three points.

    Picks the projection by the dominant normal component: floors map to XY,
    X-facing walls to YZ, everything else to XZ.
    """
    e1 = sub(p2, p1)
    e2 = sub(p3, p1)
    n = cross(e1, e2)
    ln = length(n)

    if ln > 0:
        anx, any_, anz = abs(n[0] / ln), abs(n[1] / ln), abs(n[2] / ln)
        if anz >= anx and anz >= any_:
            return (TextureAxis((1, 0, 0), 0, uv_scale, None),
                    TextureAxis((0, -1, 0), 0, uv_scale, None))
        if anx >= any_ and anx >= anz:
            return (TextureAxis((0, 1, 0), 0, uv_scale, None),
                    TextureAxis((0, 0, -1), 0, uv_scale, None))
    return (TextureAxis((1, 0, 0), 0, uv_scale, None),
            TextureAxis((0, 0, -1), 0, uv_scale, None))


def wrap_texture_coord(value: float) -> float:
    """Wrap into ``[0, TEXTURE_SIZE)`` using truncated remainder."""
    return math.fmod(math.fmod(value, TEXTURE_SIZE) + TEXTURE_SIZE, TEXTURE_SIZE)


def _safe_ratio(value: float, divisor: float) -> float:
    # a zero uv_scale leaves the texture unshifted instead of raising
    if divisor == 0:
        return 0.0
    return value / divisor


def _plane_normal(a: Vec3, b: Vec3, c: Vec3) -> Vec3:
    return normalize(cross(sub(b, a), sub(c, a)))


def _v_axis(normal: Vec3, u_axis: Vec3, v1: Vec3, v2: Vec3, v3: Vec3, v4: Vec3) -> Vec3:
    v_axis = normalize(cross(normal, u_axis), (0.0, 1.0, 0.0))
    # span across the cross-section, from the v1/v4 edge to the v2/v3 edge
    edge_dir = (
        (v2[0] + v3[0]) - (v1[0] + v4[0]),
        (v2[1] + v3[1]) - (v1[1] + v4[1]),
        (v2[2] + v3[2]) - (v1[2] + v4[2]),
    )
    if dot(edge_dir, v_axis) < 0:
        return (-v_axis[0], -v_axis[1], -v_axis[2])
    return v_axis
