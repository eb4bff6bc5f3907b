"""
Sweep geometry for surf ramps.

Profiles are swept along a straight line or a circular arc to produce visual
solids: ordered steps (one rotated copy of the profile each) and the brush
segments between adjacent steps.  Parallel clip solids are derived from
slightly offset profiles; they block player movement without rendering.

Anchoring: every ramp starts at its local origin and travels toward -X.  A
straight ramp occupies ``[-size, 0]`` on X, and curved sweeps leave the origin
in the same direction, so all solids share one face winding.

All functions are pure.  Out-of-range numbers produce degenerate geometry,
never exceptions.
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field
from typing import List, Tuple

from surf_ramp_toolkit.src.conversion.vector_math import (
    Vec3, average, rotate_around_axis, transform_vertex,
)
from .parameters import RampDirection, RampParameters, RampStyle, SurfSide
from .profile_generator import Profile, generate_profiles

logger = logging.getLogger(__name__)

# Clip volume tuning.  These values are empirical; changing them alters every
# generated clip brush.
CLIP_OFFSET = 1.0             # outward nudge of the surf edge (units)
OVERLAP_TARGET_UNITS = 4.0    # arc length of overlap between clip segments
OVERLAP_MIN_RADIUS = 64.0     # radius floor used for the overlap angle
OVERLAP_STEP_FRACTION = 0.45  # cap on overlap as a fraction of the step angle


@dataclass(frozen=True)
class SpinConfig:
    """Rotation that sweeps a profile: axis, pivot and signed total angle."""
    axis: Vec3
    center: Vec3
    angle: float


@dataclass(frozen=True)
class BrushSegment:
    """Two consecutive steps forming one convex slab."""
    start: Profile
    end: Profile

    def transformed(self, matrix) -> "BrushSegment":
        return BrushSegment(
            start=tuple(transform_vertex(v, matrix) for v in self.start),
            end=tuple(transform_vertex(v, matrix) for v in self.end),
        )


@dataclass(frozen=True)
class SweptSolid:
    """One continuous swept brush."""
    steps: Tuple[Profile, ...]
    segments: Tuple[BrushSegment, ...]

    @property
    def point_count(self) -> int:
        return len(self.steps[0])

    def transformed(self, matrix) -> "SweptSolid":
        return SweptSolid(
            steps=tuple(tuple(transform_vertex(v, matrix) for v in step) for step in self.steps),
            segments=tuple(seg.transformed(matrix) for seg in self.segments),
        )


@dataclass(frozen=True)
class ClipSolid:
    """Player-clip volume paired with a visual solid.

    ``is_profile_inward`` marks profiles on the inside of a turn (and every
    vertical sweep); their segments overlap to avoid collision seams.
    """
    segments: Tuple[BrushSegment, ...]
    is_profile_inward: bool

    def transformed(self, matrix) -> "ClipSolid":
        return ClipSolid(
            segments=tuple(seg.transformed(matrix) for seg in self.segments),
            is_profile_inward=self.is_profile_inward,
        )


@dataclass(frozen=True)
class RampGeometry:
    solids: Tuple[SweptSolid, ...]
    clip_solids: Tuple[ClipSolid, ...]
    segment_count: int
    is_loop: bool
    style: RampStyle
    surf: SurfSide
    direction: RampDirection
    thickness: float
    angle: float
    is_straight: bool = False
    profiles: Tuple[Profile, ...] = field(default=(), repr=False)


def generate_geometry(params: RampParameters) -> RampGeometry:
    """Sweep the ramp's profiles into visual and clip solids."""
    profiles = generate_profiles(params)

    if params.is_straight:
        solids = tuple(_straight_solid(p, params.size) for p in profiles)
        clip_solids = _straight_clip_solids(params, profiles)
        segment_count = 1
        is_loop = False
    else:
        segment_count = _segment_count(params)
        spin = get_spin_configuration(params.ramp, math.radians(params.angle),
                                      params.size, params.height)
        solids = tuple(_curved_solid(p, spin, segment_count) for p in profiles)
        clip_solids = _curved_clip_solids(params, profiles, spin, segment_count, solids)
        is_loop = params.is_loop

    logger.debug(
        "Ramp '%s': %s/%s/%s, %d solid(s), %d clip solid(s), %d segment(s)",
        params.ramp_name, params.style, params.surf, params.ramp,
        len(solids), len(clip_solids), segment_count,
    )

    return RampGeometry(
        solids=solids,
        clip_solids=clip_solids,
        segment_count=segment_count,
        is_loop=is_loop,
        style=params.style,
        surf=params.surf,
        direction=params.ramp,
        thickness=params.thickness,
        angle=0 if params.is_straight else params.angle,
        is_straight=params.is_straight,
        profiles=tuple(profiles),
    )


def get_spin_configuration(direction: RampDirection, angle_rad: float,
                           size: float, height: float) -> SpinConfig:
    """Axis, pivot and signed angle for a curved ramp direction.

    Raises:
        ValueError: For ``Straight``, which has no spin.
    """
    if direction is RampDirection.RIGHT:
        return SpinConfig((0.0, 0.0, 1.0), (0, size, 0), angle_rad)
    if direction is RampDirection.LEFT:
        return SpinConfig((0.0, 0.0, 1.0), (0, -size, 0), -angle_rad)
    if direction in (RampDirection.DOWN, RampDirection.ARC):
        return SpinConfig((0.0, -1.0, 0.0), (0, 0, -size), -angle_rad)
    if direction in (RampDirection.UP, RampDirection.DIP):
        return SpinConfig((0.0, -1.0, 0.0), (0, 0, size + height), angle_rad)
    raise ValueError(f"Ramp direction '{direction}' has no spin configuration")


def _segment_count(params: RampParameters) -> int:
    count = int(params.smoothness)
    if count < 1:
        logger.warning("Ramp '%s': smoothness %r clamped to 1",
                       params.ramp_name, params.smoothness)
        return 1
    return count


# ---------------------------------------------------------------
# Visual solids
# ---------------------------------------------------------------

def _straight_solid(profile: Profile, size: float) -> SweptSolid:
    start = tuple(tuple(v) for v in profile)
    end = tuple((v[0] - size, v[1], v[2]) for v in profile)
    return SweptSolid(steps=(start, end), segments=(BrushSegment(start, end),))


def _curved_solid(profile: Profile, spin: SpinConfig, segment_count: int) -> SweptSolid:
    steps = []
    for step in range(segment_count + 1):
        current = spin.angle * (step / segment_count)
        steps.append(tuple(rotate_around_axis(v, spin.axis, spin.center, current)
                           for v in profile))
    segments = tuple(BrushSegment(steps[i], steps[i + 1]) for i in range(segment_count))
    return SweptSolid(steps=tuple(steps), segments=segments)


# ---------------------------------------------------------------
# Clip solids
# ---------------------------------------------------------------

def build_clip_profiles(params: RampParameters, profiles: List[Profile]) -> List[Profile]:
    """Offset the surf edge(s) of each profile outward by ``CLIP_OFFSET``.

    Wedge/Both splits into a left and a right triangle, each offset on its
    outer slope only.  On horizontal turns the base vertex keeps its Z so the
    clip does not dip below the ramp floor.
    """
    keep_z = params.ramp.is_horizontal

    if params.style is RampStyle.WEDGE:
        profile = profiles[0]
        if params.surf is SurfSide.BOTH:
            peak, bottom_right, bottom_left = profile
            bottom_center = (0, 0, 0)
            bl, pk = _offset_edge(bottom_left, peak, keep_z, False)
            left = (pk, bottom_center, bl)
            pk, br = _offset_edge(peak, bottom_right, False, keep_z)
            right = (pk, br, bottom_center)
            return [left, right]
        if params.surf is SurfSide.LEFT:
            p0, p1 = _offset_edge(profile[0], profile[1], False, keep_z)
            return [(p0, p1, profile[2])]
        p2, p0 = _offset_edge(profile[2], profile[0], keep_z, False)
        return [(p0, profile[1], p2)]

    clip_profiles = []
    for profile in profiles:
        p0, p1 = _offset_edge(profile[0], profile[1], False, keep_z)
        clip_profiles.append((p0, p1) + tuple(profile[2:]))
    return clip_profiles


def _offset_edge(p1: Vec3, p2: Vec3, keep_p1_z: bool, keep_p2_z: bool) -> Tuple[Vec3, Vec3]:
    dy = p2[1] - p1[1]
    dz = p2[2] - p1[2]
    ln = math.sqrt(dy * dy + dz * dz)
    if ln == 0:
        return p1, p2

    oy = -dz / ln * CLIP_OFFSET
    oz = dy / ln * CLIP_OFFSET
    new_p1 = (p1[0], p1[1] + oy, p1[2] if keep_p1_z else p1[2] + oz)
    new_p2 = (p2[0], p2[1] + oy, p2[2] if keep_p2_z else p2[2] + oz)
    return new_p1, new_p2


def is_profile_inward(profile: Profile, direction: RampDirection, surf: SurfSide) -> bool:
    """Whether a clip profile sits on the inside of the sweep.

    Vertical sweeps are always inward.  Horizontal turns are inward on the
    side opposite the turn direction.  Straight ramps are never inward.
    """
    if direction.is_vertical:
        return True
    if direction.is_horizontal:
        if surf is SurfSide.BOTH:
            avg_y = sum(v[1] for v in profile) / len(profile)
            is_left_side = avg_y < 0
            if direction is RampDirection.RIGHT:
                return not is_left_side
            return is_left_side
        return direction.value != surf.value
    return False


def calculate_overlap_angle(size: float, step_angle: float, is_loop: bool) -> float:
    """Overlap (radians) added between consecutive inward clip segments."""
    step_cap = abs(step_angle) * OVERLAP_STEP_FRACTION
    if is_loop:
        return step_cap
    radius_based = OVERLAP_TARGET_UNITS / max(size, OVERLAP_MIN_RADIUS)
    return min(radius_based, step_cap)


def _straight_clip_solids(params: RampParameters, profiles: List[Profile]) -> Tuple[ClipSolid, ...]:
    clip_solids = []
    for profile in build_clip_profiles(params, profiles):
        solid = _straight_solid(profile, params.size)
        clip_solids.append(ClipSolid(
            segments=solid.segments,
            is_profile_inward=is_profile_inward(profile, params.ramp, params.surf),
        ))
    return tuple(clip_solids)


def _curved_clip_solids(params: RampParameters, profiles: List[Profile], spin: SpinConfig,
                        segment_count: int, solids: Tuple[SweptSolid, ...]) -> Tuple[ClipSolid, ...]:
    step_angle = spin.angle / segment_count
    is_loop = params.is_loop
    overlap = calculate_overlap_angle(params.size, step_angle, is_loop)

    clip_solids = []
    for profile in build_clip_profiles(params, profiles):
        inward = is_profile_inward(profile, params.ramp, params.surf)
        segments = _clip_segments(profile, spin, step_angle, segment_count, overlap, inward, is_loop)
        clip_solids.append(ClipSolid(segments=segments, is_profile_inward=inward))

    if params.ramp in (RampDirection.ARC, RampDirection.DIP):
        clip_solids = _apply_arc_dip_correction(clip_solids, solids, params, segment_count)

    return tuple(clip_solids)


def _clip_segments(profile: Profile, spin: SpinConfig, step_angle: float, segment_count: int,
                   overlap: float, inward: bool, is_loop: bool) -> Tuple[BrushSegment, ...]:
    direction = math.copysign(1.0, step_angle) if step_angle else 1.0
    signed_overlap = overlap * direction

    segments = []
    for i in range(segment_count):
        angle_start = i * step_angle
        angle_end = (i + 1) * step_angle

        if inward:
            if i != 0 or is_loop:
                angle_start -= signed_overlap
            if i != segment_count - 1 or is_loop:
                angle_end += signed_overlap

        start = tuple(rotate_around_axis(v, spin.axis, spin.center, angle_start) for v in profile)
        end = tuple(rotate_around_axis(v, spin.axis, spin.center, angle_end) for v in profile)
        segments.append(BrushSegment(start, end))
    return tuple(segments)


def _apply_arc_dip_correction(clip_solids: List[ClipSolid], solids: Tuple[SweptSolid, ...],
                              params: RampParameters, segment_count: int) -> List[ClipSolid]:
    """Rotate Arc/Dip clip geometry by half the sweep about the middle step.

    Empirical correction: vertical-sweep clips otherwise face the wrong way
    at the midpoint.  Arc turns by +angle/2, Dip by -angle/2, about the Y axis
    through the centroid of the middle visual step.
    """
    half_angle = math.radians(params.angle) / 2
    rotation = half_angle if params.ramp is RampDirection.ARC else -half_angle
    pivot = average(solids[0].steps[segment_count // 2])

    def _rotate(profile: Profile) -> Profile:
        return tuple(rotate_around_axis(v, (0.0, 1.0, 0.0), pivot, rotation) for v in profile)

    return [
        ClipSolid(
            segments=tuple(BrushSegment(_rotate(s.start), _rotate(s.end)) for s in clip.segments),
            is_profile_inward=clip.is_profile_inward,
        )
        for clip in clip_solids
    ]
