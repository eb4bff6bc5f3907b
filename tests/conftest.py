import pytest

from surf_ramp_toolkit.src.generators.ramps.parameters import RampParameters

DEV_MATERIAL = "dev/dev_measuregeneric01"


@pytest.fixture
def right_both_params():
    """The reference 90 degree right turn, Wedge cross-section, both sides surfable."""
    return RampParameters(
        ramp_name="single_right_both",
        material_name=DEV_MATERIAL,
        style="Wedge",
        surf="Both",
        ramp="Right",
        width=256,
        height=320,
        smoothness=16,
        angle=90,
        size=1024,
        uv_scale=0.25,
    )


@pytest.fixture
def straight_params(right_both_params):
    return right_both_params.with_overrides(ramp_name="straight", angle=0, size=4096)


@pytest.fixture
def loop_params(right_both_params):
    return right_both_params.with_overrides(ramp_name="loop", angle=360, smoothness=48)
