import logging
import math

import pytest

from surf_ramp_toolkit.src.conversion.vector_math import average, rotate_around_axis
from surf_ramp_toolkit.src.generators.ramps.geometry_generator import (
    CLIP_OFFSET, build_clip_profiles, calculate_overlap_angle, generate_geometry,
    get_spin_configuration, is_profile_inward,
)
from surf_ramp_toolkit.src.generators.ramps.parameters import RampDirection, RampParameters, SurfSide
from surf_ramp_toolkit.src.generators.ramps.profile_generator import generate_profiles


@pytest.mark.parametrize("smoothness", [1, 3, 16, 64])
def test_curved_segment_count(smoothness):
    geometry = generate_geometry(RampParameters(smoothness=smoothness))
    assert geometry.segment_count == smoothness
    for solid in geometry.solids:
        assert len(solid.segments) == smoothness
        assert len(solid.steps) == smoothness + 1
    for clip in geometry.clip_solids:
        assert len(clip.segments) == smoothness


def test_straight_ramp_has_one_segment(straight_params):
    geometry = generate_geometry(straight_params)
    assert geometry.is_straight
    assert geometry.segment_count == 1
    assert not geometry.is_loop
    (solid,) = geometry.solids
    assert len(solid.segments) == 1
    assert len(solid.steps) == 2
    assert all(len(clip.segments) == 1 for clip in geometry.clip_solids)


def test_straight_ramp_extends_along_negative_x(straight_params):
    (solid,) = generate_geometry(straight_params).solids
    start, end = solid.steps
    assert all(p[0] == 0 for p in start)
    assert all(p[0] == -4096 for p in end)
    assert [p[1:] for p in start] == [p[1:] for p in end]


@pytest.mark.parametrize("style,surf", [
    ("Wedge", "Both"), ("Wedge", "Left"), ("Thin", "Both"), ("Thin", "Right"),
])
def test_every_step_keeps_profile_point_count(style, surf):
    params = RampParameters(style=style, surf=surf, ramp="Up", smoothness=5)
    geometry = generate_geometry(params)
    for solid, profile in zip(geometry.solids, generate_profiles(params)):
        assert all(len(step) == len(profile) for step in solid.steps)
        for segment in solid.segments:
            assert len(segment.start) == len(segment.end) == len(profile)


def test_first_step_is_profile_and_sweep_turns(right_both_params):
    geometry = generate_geometry(right_both_params)
    (profile,) = generate_profiles(right_both_params)
    (solid,) = geometry.solids
    for got, want in zip(solid.steps[0], profile):
        assert got == pytest.approx(want, abs=1e-9)
    # the peak swings about (0, 1024, 0) and ends a quarter turn later
    assert solid.steps[-1][0] == pytest.approx((-1024, 1024, 320), abs=1e-9)


def test_segments_join_steps(right_both_params):
    (solid,) = generate_geometry(right_both_params).solids
    for i, segment in enumerate(solid.segments):
        assert segment.start == solid.steps[i]
        assert segment.end == solid.steps[i + 1]


def test_loop_flag(loop_params):
    geometry = generate_geometry(loop_params)
    assert geometry.is_loop
    assert geometry.segment_count == 48


def test_geometry_metadata(right_both_params):
    geometry = generate_geometry(right_both_params)
    assert geometry.direction is RampDirection.RIGHT
    assert geometry.surf is SurfSide.BOTH
    assert geometry.angle == 90
    assert not geometry.is_straight


def test_generation_is_deterministic(right_both_params):
    assert generate_geometry(right_both_params) == generate_geometry(right_both_params)


def test_smoothness_below_one_is_clamped(caplog):
    with caplog.at_level(logging.WARNING):
        geometry = generate_geometry(RampParameters(smoothness=0))
    assert geometry.segment_count == 1
    assert "clamped" in caplog.text


@pytest.mark.parametrize("direction,axis,center,sign", [
    ("Right", (0, 0, 1), (0, 1024, 0), 1),
    ("Left", (0, 0, 1), (0, -1024, 0), -1),
    ("Down", (0, -1, 0), (0, 0, -1024), -1),
    ("Arc", (0, -1, 0), (0, 0, -1024), -1),
    ("Up", (0, -1, 0), (0, 0, 1024 + 320), 1),
    ("Dip", (0, -1, 0), (0, 0, 1024 + 320), 1),
])
def test_spin_configuration_table(direction, axis, center, sign):
    spin = get_spin_configuration(RampDirection.parse(direction), 1.0, 1024, 320)
    assert spin.axis == axis
    assert spin.center == center
    assert spin.angle == sign * 1.0


def test_straight_has_no_spin():
    with pytest.raises(ValueError):
        get_spin_configuration(RampDirection.STRAIGHT, 1.0, 1024, 320)


def test_wedge_both_clip_profiles_split_into_halves():
    params = RampParameters()
    left, right = build_clip_profiles(params, generate_profiles(params))
    assert len(left) == len(right) == 3
    assert left[1] == (0, 0, 0)
    assert right[2] == (0, 0, 0)
    # left slope nudged outward, base keeps its height on a horizontal turn
    assert left[2][2] == 0
    assert left[2][1] < -256
    assert right[1][1] > 256
    assert math.dist(left[0], (0, 0, 320)) == pytest.approx(CLIP_OFFSET)


def test_vertical_clip_base_moves_with_offset():
    params = RampParameters(ramp="Up")
    left, _ = build_clip_profiles(params, generate_profiles(params))
    assert math.dist(left[2], (0, -256, 0)) == pytest.approx(CLIP_OFFSET)


def test_inwardness_of_horizontal_both():
    params = RampParameters(ramp="Right")
    left, right = build_clip_profiles(params, generate_profiles(params))
    assert not is_profile_inward(left, RampDirection.RIGHT, SurfSide.BOTH)
    assert is_profile_inward(right, RampDirection.RIGHT, SurfSide.BOTH)
    assert is_profile_inward(left, RampDirection.LEFT, SurfSide.BOTH)
    assert not is_profile_inward(right, RampDirection.LEFT, SurfSide.BOTH)


def test_inwardness_of_single_side_and_other_directions():
    profile = ((0, 0, 320), (0, 0, 0), (0, -256, 0))
    assert not is_profile_inward(profile, RampDirection.RIGHT, SurfSide.RIGHT)
    assert is_profile_inward(profile, RampDirection.RIGHT, SurfSide.LEFT)
    assert is_profile_inward(profile, RampDirection.DIP, SurfSide.RIGHT)
    assert not is_profile_inward(profile, RampDirection.STRAIGHT, SurfSide.BOTH)


def test_clip_solids_carry_inwardness(right_both_params):
    geometry = generate_geometry(right_both_params)
    assert [c.is_profile_inward for c in geometry.clip_solids] == [False, True]
    vertical = generate_geometry(right_both_params.with_overrides(ramp="Down"))
    assert all(c.is_profile_inward for c in vertical.clip_solids)


def test_overlap_angle():
    step = math.radians(90) / 16
    assert calculate_overlap_angle(1024, step, False) == pytest.approx(4 / 1024)
    assert calculate_overlap_angle(16, step, False) == pytest.approx(min(4 / 64, 0.45 * step))
    assert calculate_overlap_angle(1024, step, True) == pytest.approx(0.45 * step)
    assert calculate_overlap_angle(1024, -step, False) == pytest.approx(4 / 1024)


def test_inward_clip_segments_overlap_and_outward_ones_abut(right_both_params):
    outward, inward = generate_geometry(right_both_params).clip_solids
    assert outward.segments[0].end == outward.segments[1].start
    assert inward.segments[0].end != inward.segments[1].start


def test_inward_clip_keeps_outer_ends_unextended(right_both_params):
    geometry = generate_geometry(right_both_params)
    _, inward = geometry.clip_solids
    profile = build_clip_profiles(right_both_params, generate_profiles(right_both_params))[1]
    for got, want in zip(inward.segments[0].start, profile):
        assert got == pytest.approx(want, abs=1e-9)


def test_arc_moves_clips_but_not_visual_solids():
    down = generate_geometry(RampParameters(ramp="Down"))
    arc = generate_geometry(RampParameters(ramp="Arc"))
    assert arc.solids == down.solids
    assert arc.clip_solids != down.clip_solids
    assert len(arc.clip_solids) == len(down.clip_solids)


@pytest.mark.parametrize("corrected, base, sign", [
    ("Arc", "Down", 1),
    ("Dip", "Up", -1),
])
def test_arc_dip_clips_rotate_half_sweep_about_middle_step(corrected, base, sign):
    plain = generate_geometry(RampParameters(ramp=base))
    turned = generate_geometry(RampParameters(ramp=corrected))
    pivot = average(plain.solids[0].steps[plain.segment_count // 2])
    rotation = sign * math.radians(90) / 2

    for plain_clip, turned_clip in zip(plain.clip_solids, turned.clip_solids):
        assert turned_clip.is_profile_inward == plain_clip.is_profile_inward
        for plain_seg, turned_seg in zip(plain_clip.segments, turned_clip.segments):
            for plain_step, turned_step in ((plain_seg.start, turned_seg.start),
                                            (plain_seg.end, turned_seg.end)):
                for v, got in zip(plain_step, turned_step):
                    want = rotate_around_axis(v, (0.0, 1.0, 0.0), pivot, rotation)
                    assert got == pytest.approx(want, abs=1e-9)
