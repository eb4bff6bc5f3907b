import dataclasses

import pytest

from surf_ramp_toolkit.src.generators.ramps.parameters import (
    ConnectionMode, RampDirection, RampParameters, RampStyle, SurfSide,
)


def test_defaults():
    p = RampParameters()
    assert p.ramp_name == "ramp"
    assert p.material_name == "default"
    assert p.style is RampStyle.WEDGE
    assert p.surf is SurfSide.BOTH
    assert p.ramp is RampDirection.RIGHT
    assert (p.width, p.height, p.thickness) == (256, 320, 32)
    assert (p.smoothness, p.angle, p.size, p.uv_scale) == (16, 90, 1024, 0.25)
    assert p.visual_entity == "func_brush"


def test_enum_parse_is_case_insensitive():
    assert RampStyle.parse("thin") is RampStyle.THIN
    assert RampDirection.parse(" ARC ") is RampDirection.ARC
    assert ConnectionMode.parse("Start") is ConnectionMode.START
    assert SurfSide.parse(SurfSide.LEFT) is SurfSide.LEFT


def test_enum_parse_lists_choices_on_error():
    with pytest.raises(ValueError, match="Available"):
        RampDirection.parse("Sideways")


def test_string_fields_are_parsed_on_construction():
    p = RampParameters(style="Thin", surf="left", ramp="Dip")
    assert p.style is RampStyle.THIN
    assert p.surf is SurfSide.LEFT
    assert p.ramp is RampDirection.DIP


def test_parameters_are_frozen():
    p = RampParameters()
    with pytest.raises(dataclasses.FrozenInstanceError):
        p.angle = 45


def test_from_dict_accepts_camel_case_and_ignores_unknown_keys():
    p = RampParameters.from_dict({
        "rampName": "r",
        "materialName": "dev/dev_measuregeneric01",
        "styleEnum": "Thin",
        "surfEnum": "Right",
        "rampEnum": "Left",
        "uvScale": 0.5,
        "visualEntity": "func_detail",
        "somethingElse": 1,
    })
    assert p.ramp_name == "r"
    assert p.material_name == "dev/dev_measuregeneric01"
    assert p.style is RampStyle.THIN
    assert p.surf is SurfSide.RIGHT
    assert p.ramp is RampDirection.LEFT
    assert p.uv_scale == 0.5
    assert p.visual_entity == "func_detail"


def test_from_dict_rejects_unknown_enum_value():
    with pytest.raises(ValueError):
        RampParameters.from_dict({"rampEnum": "Sideways"})


def test_to_dict_round_trip():
    p = RampParameters(ramp="Up", angle=45, smoothness=8)
    data = p.to_dict()
    assert data["ramp"] == "Up"
    assert RampParameters.from_dict(data) == p


def test_with_overrides_returns_copy():
    p = RampParameters()
    q = p.with_overrides(rampEnum="Left", angle=30)
    assert q.ramp is RampDirection.LEFT
    assert q.angle == 30
    assert p.ramp is RampDirection.RIGHT
    assert p.angle == 90


@pytest.mark.parametrize("kwargs,straight", [
    ({"angle": 0}, True),
    ({"ramp": "Straight", "angle": 90}, True),
    ({"angle": 90}, False),
])
def test_is_straight(kwargs, straight):
    assert RampParameters(**kwargs).is_straight is straight


@pytest.mark.parametrize("angle,loop", [(360, True), (-360, True), (720, True), (359, False), (90, False)])
def test_is_loop(angle, loop):
    assert RampParameters(angle=angle).is_loop is loop


def test_direction_families():
    assert RampDirection.LEFT.is_horizontal
    assert not RampDirection.LEFT.is_vertical
    assert all(d.is_vertical for d in (RampDirection.UP, RampDirection.DOWN,
                                       RampDirection.ARC, RampDirection.DIP))
    assert not RampDirection.STRAIGHT.is_horizontal
    assert not RampDirection.STRAIGHT.is_vertical


def test_parameter_schema_covers_every_field():
    schema = RampParameters.get_parameter_schema()
    assert set(schema) == {f.name for f in dataclasses.fields(RampParameters)}
    assert schema["ramp"]["choices"] == ["Right", "Left", "Up", "Down", "Arc", "Dip", "Straight"]
    assert schema["style"]["default"] == "Wedge"
    assert schema["smoothness"]["min"] == 1
