"""
Cross-section profiles for surf ramps.

A profile is a polygon in the local YZ plane (X = 0) that the geometry
generator sweeps along the ramp path.  Wedge ramps use one triangle; Thin
ramps use one quad per slope.  Every step of a swept solid shares its
profile's point count.
"""

from __future__ import annotations
import math
from typing import List, Tuple

from surf_ramp_toolkit.src.conversion.vector_math import Vec3, get_normal_2d
from .parameters import RampParameters, RampStyle, SurfSide

Profile = Tuple[Vec3, ...]

WEDGE_POINT_COUNT = 3
THIN_POINT_COUNT = 4


def generate_profiles(params: RampParameters) -> List[Profile]:
    """Return the profile(s) for ``params``: one, or two for Thin/Both."""
    total_width = params.width * 2 if params.surf is SurfSide.BOTH else params.width
    top_z = params.height
    bottom_z = 0
    left_y = -total_width / 2
    right_y = total_width / 2

    # Left/Right surf is anchored so the square corner sits at Y = 0
    y_offset = 0
    if params.surf is SurfSide.LEFT:
        y_offset = -left_y
    elif params.surf is SurfSide.RIGHT:
        y_offset = -right_y

    if params.style is RampStyle.WEDGE:
        return [_wedge_profile(params.surf, top_z, bottom_z, left_y, right_y, y_offset)]
    return _thin_profiles(params, top_z, bottom_z, left_y, right_y, y_offset, total_width)


def _wedge_profile(surf: SurfSide, top_z, bottom_z, left_y, right_y, y_offset) -> Profile:
    if surf is SurfSide.BOTH:
        return (
            (0, 0, top_z),
            (0, right_y, bottom_z),
            (0, left_y, bottom_z),
        )
    if surf is SurfSide.LEFT:
        # slope descends to the right
        return (
            (0, left_y + y_offset, top_z),
            (0, right_y + y_offset, bottom_z),
            (0, left_y + y_offset, bottom_z),
        )
    return (
        (0, right_y + y_offset, top_z),
        (0, right_y + y_offset, bottom_z),
        (0, left_y + y_offset, bottom_z),
    )


def _thin_profiles(params: RampParameters, top_z, bottom_z, left_y, right_y,
                   y_offset, total_width) -> List[Profile]:
    thickness = params.thickness

    if params.surf is SurfSide.BOTH:
        return _thin_both_profiles(top_z, bottom_z, left_y, right_y, thickness,
                                   total_width, params.height)

    if params.surf is SurfSide.LEFT:
        start = (0, left_y + y_offset, top_z)
        end = (0, right_y + y_offset, bottom_z)
    else:
        start = (0, left_y + y_offset, bottom_z)
        end = (0, right_y + y_offset, top_z)
    return [thicken_segment(start, end, thickness)]


def _thin_both_profiles(top_z, bottom_z, left_y, right_y, thickness,
                        total_width, height) -> List[Profile]:
    peak = (0, 0, top_z)
    left_base = (0, left_y, bottom_z)
    right_base = (0, right_y, bottom_z)

    # the spine drops far enough that the wall is `thickness` across the slope
    half_width = total_width / 2
    slope_length = math.sqrt(half_width * half_width + height * height)
    vertical_offset = (thickness * slope_length) / half_width if half_width > 0 else thickness
    inner_peak = (0, 0, top_z - vertical_offset)

    lny, lnz = get_normal_2d(left_base, peak)
    left_base_inner = (0, left_base[1] - lny * thickness, left_base[2] - lnz * thickness)

    rny, rnz = get_normal_2d(peak, right_base)
    right_base_inner = (0, right_base[1] - rny * thickness, right_base[2] - rnz * thickness)

    return [
        (left_base, peak, inner_peak, left_base_inner),
        (peak, right_base, right_base_inner, inner_peak),
    ]


def thicken_segment(start: Vec3, end: Vec3, thickness: float) -> Profile:
    """Quad made of the edge start -> end and its copy moved ``thickness``
    against the edge normal (into the ramp)."""
    ny, nz = get_normal_2d(start, end)
    oy = ny * thickness
    oz = nz * thickness
    return (
        start,
        end,
        (end[0], end[1] - oy, end[2] - oz),
        (start[0], start[1] - oy, start[2] - oz),
    )
