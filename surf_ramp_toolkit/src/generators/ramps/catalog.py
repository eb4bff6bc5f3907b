"""
Ramp preset catalog: named ramp and chain scenarios.

Presets cover single Wedge/Thin ramps in every direction, sweep angle and
smoothness variations, straight ramps, loops and multi-ramp chains.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .connected_ramps import ConnectedRamps
from .parameters import ConnectionMode, RampParameters
from .surf_ramp import SurfRampGenerator

DEV_MATERIAL = "dev/dev_measuregeneric01"


@dataclass(frozen=True)
class RampPreset:
    """
    A named ramp scenario.

    A preset with ``ramp_configs`` is a chain: ``params`` are then the shared
    parameters and each config overrides ``ramp``/``angle``/``size`` (and
    optionally ``smoothness``).  Without configs it is a single ramp.
    """
    name: str
    description: str
    category: str  # "Single", "Thin", "Smoothness", "Angle", "Dimensions", "Chain"
    params: RampParameters = field(default_factory=RampParameters)
    ramp_configs: Tuple[Mapping[str, Any], ...] = ()
    connection_mode: ConnectionMode = ConnectionMode.END

    @property
    def is_chain(self) -> bool:
        return bool(self.ramp_configs)

    def generate_connected_ramps(self) -> ConnectedRamps:
        return SurfRampGenerator.generate_connected_ramps(
            self.params, self.ramp_configs, self.connection_mode
        )

    def build_vmf(self):
        """VmfWriter holding the preset's document."""
        if self.is_chain:
            return SurfRampGenerator.generate_connected_vmf(self.generate_connected_ramps())
        return SurfRampGenerator(self.params).generate_vmf()


class RampPresetCatalog:
    """Registry mapping names to ramp presets."""

    def __init__(self):
        self._presets: Dict[str, RampPreset] = {}

    def register(self, preset: RampPreset):
        self._presets[preset.name] = preset

    def get_preset(self, name: str) -> Optional[RampPreset]:
        return self._presets.get(name)

    def list_presets(self, category: Optional[str] = None) -> List[str]:
        """
        List all preset names, optionally filtered by category.

        Args:
            category: Optional category filter (case-insensitive)

        Returns:
            Sorted list of preset names
        """
        if category is None:
            return sorted(self._presets.keys())
        return sorted(
            name for name, preset in self._presets.items()
            if preset.category.lower() == category.lower()
        )

    def list_categories(self) -> List[str]:
        return sorted({p.category for p in self._presets.values()})

    def __len__(self) -> int:
        return len(self._presets)


def _ramp(name: str, **overrides: Any) -> RampParameters:
    return RampParameters(ramp_name=name, material_name=DEV_MATERIAL).with_overrides(**overrides)


def _turn(ramp: str, angle: float, size: float = 1024, **extra: Any) -> Dict[str, Any]:
    config: Dict[str, Any] = {"ramp": ramp, "angle": angle, "size": size}
    config.update(extra)
    return config


BUILTIN_PRESETS = [
    # Single wedge ramps
    RampPreset("single_right_both", "Right turn, surfable on both sides", "Single",
               _ramp("single_right_both")),
    RampPreset("single_left_both", "Left turn, surfable on both sides", "Single",
               _ramp("single_left_both", ramp="Left")),
    RampPreset("single_right_right_surf", "Right turn, right slope only", "Single",
               _ramp("single_right_right_surf", surf="Right")),
    RampPreset("single_right_left_surf", "Right turn, left slope only", "Single",
               _ramp("single_right_left_surf", surf="Left")),
    RampPreset("single_up", "Upward vertical sweep", "Single",
               _ramp("single_up", ramp="Up")),
    RampPreset("single_down", "Downward vertical sweep", "Single",
               _ramp("single_down", ramp="Down")),
    RampPreset("single_dip", "Dip: valley-shaped vertical sweep", "Single",
               _ramp("single_dip", ramp="Dip")),
    RampPreset("single_arc", "Arc: crest-shaped vertical sweep", "Single",
               _ramp("single_arc", ramp="Arc")),

    # Thin style
    RampPreset("single_right_thin", "Thin shell right turn", "Thin",
               _ramp("single_right_thin", style="Thin", thickness=32)),
    RampPreset("single_right_thin_thick", "Thin shell with a 64 unit wall", "Thin",
               _ramp("single_right_thin_thick", style="Thin", thickness=64)),
    RampPreset("single_right_thin_right_surf", "Thin shell, right slope only", "Thin",
               _ramp("single_right_thin_right_surf", style="Thin", thickness=32, surf="Right")),

    # Smoothness
    RampPreset("smoothness_low", "Three segment turn", "Smoothness",
               _ramp("smoothness_low", smoothness=3)),
    RampPreset("smoothness_medium", "Eight segment turn", "Smoothness",
               _ramp("smoothness_medium", smoothness=8)),
    RampPreset("smoothness_high", "32 segment turn", "Smoothness",
               _ramp("smoothness_high", smoothness=32)),
    RampPreset("smoothness_very_high", "64 segment turn", "Smoothness",
               _ramp("smoothness_very_high", smoothness=64)),

    # Sweep angle
    RampPreset("angle_45", "45 degree turn", "Angle",
               _ramp("angle_45", angle=45)),
    RampPreset("angle_180", "Half circle", "Angle",
               _ramp("angle_180", angle=180, smoothness=24)),
    RampPreset("angle_270", "Three-quarter circle", "Angle",
               _ramp("angle_270", angle=270, smoothness=32)),
    RampPreset("angle_360_loop", "Full loop without caps", "Angle",
               _ramp("angle_360_loop", angle=360, smoothness=48)),
    RampPreset("angle_0_straight", "Zero angle builds a straight ramp", "Angle",
               _ramp("angle_0_straight", angle=0)),

    # Dimensions
    RampPreset("size_small", "512 unit turn radius", "Dimensions",
               _ramp("size_small", size=512)),
    RampPreset("size_large", "2048 unit turn radius", "Dimensions",
               _ramp("size_large", size=2048)),
    RampPreset("wide_short", "Wide, low cross-section", "Dimensions",
               _ramp("wide_short", width=512, height=128)),
    RampPreset("narrow_tall", "Narrow, steep cross-section", "Dimensions",
               _ramp("narrow_tall", width=128, height=512)),
    RampPreset("very_long_straight", "4096 unit straight ramp", "Dimensions",
               _ramp("very_long_straight", angle=0, size=4096)),
    RampPreset("tight_radius", "256 unit turn radius", "Dimensions",
               _ramp("tight_radius", size=256, smoothness=24)),

    # Chains
    RampPreset("two_right_turns", "Two right turns joined end to start", "Chain",
               _ramp("two_right_turns"),
               (_turn("Right", 90), _turn("Right", 90))),
    RampPreset("three_turns", "Three right turns", "Chain",
               _ramp("three_turns"),
               (_turn("Right", 90), _turn("Right", 90), _turn("Right", 90))),
    RampPreset("zigzag", "Right then left", "Chain",
               _ramp("zigzag"),
               (_turn("Right", 45), _turn("Left", 45))),
    RampPreset("mixed_directions", "Horizontal turns around a vertical rise", "Chain",
               _ramp("mixed_directions"),
               (_turn("Right", 90), _turn("Up", 45), _turn("Right", 90))),
    RampPreset("spiral", "Four right turns closing a square", "Chain",
               _ramp("spiral", smoothness=12),
               (_turn("Right", 90), _turn("Right", 90), _turn("Right", 90), _turn("Right", 90))),
    RampPreset("complex_path", "Mixed directions with per-ramp smoothness", "Chain",
               _ramp("complex_path"),
               (_turn("Right", 90, smoothness=8), _turn("Down", 45, smoothness=16),
                _turn("Left", 90, smoothness=12), _turn("Up", 45, smoothness=20))),
    RampPreset("thin_multiple", "Two thin right turns", "Chain",
               _ramp("thin_multiple", style="Thin", thickness=32),
               (_turn("Right", 90), _turn("Right", 90))),
    RampPreset("single_surf_multiple", "Two right turns, right slope only", "Chain",
               _ramp("single_surf_multiple", surf="Right"),
               (_turn("Right", 90), _turn("Right", 90))),
    RampPreset("arc_dip_combo", "Arc followed by a dip", "Chain",
               _ramp("arc_dip_combo"),
               (_turn("Arc", 90), _turn("Dip", 90))),
    RampPreset("straight_into_turn", "Straight run feeding a right turn", "Chain",
               _ramp("straight_into_turn"),
               (_turn("Straight", 0, 2048), _turn("Right", 90))),
    RampPreset("two_right_turns_from_start", "Two right turns grown from the start", "Chain",
               _ramp("two_right_turns_from_start"),
               (_turn("Right", 90), _turn("Right", 90)),
               ConnectionMode.START),
]


# Global singleton
RAMP_PRESET_CATALOG = RampPresetCatalog()

for _preset in BUILTIN_PRESETS:
    RAMP_PRESET_CATALOG.register(_preset)
