"""
Ramp parameters and the closed enums that drive ramp generation.

Parameters are frozen once built; per-ramp variations in a chain are made
with ``with_overrides``.  ``from_dict`` accepts both the snake_case field
names and the camelCase keys used by saved ramp configurations
(``styleEnum``, ``rampEnum``, ``uvScale`` ...).
"""

from __future__ import annotations
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Dict, Mapping


class _ChoiceEnum(Enum):
    """Enum whose members parse from their display names, case-insensitively."""

    @classmethod
    def parse(cls, value: Any):
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == text:
                return member
        raise ValueError(
            f"Unknown {cls.__name__} '{value}'. Available: {[m.value for m in cls]}"
        )

    @classmethod
    def choices(cls):
        return [m.value for m in cls]

    def __str__(self) -> str:
        return self.value


class RampStyle(_ChoiceEnum):
    """Cross-section shape."""
    WEDGE = "Wedge"
    THIN = "Thin"


class SurfSide(_ChoiceEnum):
    """Which side(s) of the cross-section carry the playable slope."""
    BOTH = "Both"
    LEFT = "Left"
    RIGHT = "Right"


class RampDirection(_ChoiceEnum):
    """Sweep direction and shape."""
    RIGHT = "Right"
    LEFT = "Left"
    UP = "Up"
    DOWN = "Down"
    ARC = "Arc"
    DIP = "Dip"
    STRAIGHT = "Straight"

    @property
    def is_horizontal(self) -> bool:
        return self in (RampDirection.LEFT, RampDirection.RIGHT)

    @property
    def is_vertical(self) -> bool:
        return self in (RampDirection.UP, RampDirection.DOWN,
                        RampDirection.ARC, RampDirection.DIP)


class ConnectionMode(_ChoiceEnum):
    """How a chain grows: from each ramp's end, or from its start."""
    END = "end"
    START = "start"


# camelCase keys from saved configurations -> dataclass field names
_KEY_ALIASES = {
    "rampName": "ramp_name",
    "materialName": "material_name",
    "styleEnum": "style",
    "surfEnum": "surf",
    "rampEnum": "ramp",
    "uvScale": "uv_scale",
    "visualEntity": "visual_entity",
}

_ENUM_FIELDS = {
    "style": RampStyle,
    "surf": SurfSide,
    "ramp": RampDirection,
}


@dataclass(frozen=True)
class RampParameters:
    """Configuration for one ramp.

    Dimensions are world units; ``angle`` is in degrees (0 = straight).
    """
    ramp_name: str = "ramp"
    material_name: str = "default"
    style: RampStyle = RampStyle.WEDGE
    thickness: float = 32
    surf: SurfSide = SurfSide.BOTH
    ramp: RampDirection = RampDirection.RIGHT
    width: float = 256
    height: float = 320
    smoothness: int = 16
    angle: float = 90
    size: float = 1024
    uv_scale: float = 0.25
    visual_entity: str = "func_brush"

    def __post_init__(self):
        for name, enum_cls in _ENUM_FIELDS.items():
            object.__setattr__(self, name, enum_cls.parse(getattr(self, name)))

    @property
    def is_straight(self) -> bool:
        return self.angle == 0 or self.ramp is RampDirection.STRAIGHT

    @property
    def is_loop(self) -> bool:
        return abs(self.angle) >= 360

    def with_overrides(self, **overrides: Any) -> "RampParameters":
        return replace(self, **_normalize_keys(overrides))

    def to_dict(self) -> Dict[str, Any]:
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            data[f.name] = value.value if isinstance(value, Enum) else value
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RampParameters":
        """Build parameters from a mapping, ignoring unknown keys.

        Raises:
            ValueError: If an enum field holds an unknown choice.
        """
        return cls(**_normalize_keys(data))

    @classmethod
    def get_parameter_schema(cls) -> Dict[str, Dict[str, Any]]:
        return {
            "ramp_name": {
                "type": "str", "default": "ramp", "label": "Ramp Name",
                "description": "Base name; chained ramps are suffixed _1, _2, ..."
            },
            "material_name": {
                "type": "str", "default": "default", "label": "Material",
                "description": "Material applied to visible faces and exposed caps"
            },
            "style": {
                "type": "choice", "default": "Wedge", "choices": RampStyle.choices(),
                "label": "Style",
                "description": "Solid wedge or thin shell cross-section"
            },
            "thickness": {
                "type": "float", "default": 32, "min": 1, "max": 512, "label": "Thickness",
                "description": "Wall thickness of Thin ramps, measured across the slope"
            },
            "surf": {
                "type": "choice", "default": "Both", "choices": SurfSide.choices(),
                "label": "Surf Side",
                "description": "Which side(s) of the ramp are surfable"
            },
            "ramp": {
                "type": "choice", "default": "Right", "choices": RampDirection.choices(),
                "label": "Direction",
                "description": "Turn direction or vertical sweep of the ramp"
            },
            "width": {
                "type": "float", "default": 256, "min": 16, "max": 4096, "label": "Width",
                "description": "Horizontal width of one slope"
            },
            "height": {
                "type": "float", "default": 320, "min": 16, "max": 4096, "label": "Height",
                "description": "Height of the cross-section peak"
            },
            "smoothness": {
                "type": "int", "default": 16, "min": 1, "max": 256, "label": "Smoothness",
                "description": "Number of brush segments in a curved sweep"
            },
            "angle": {
                "type": "float", "default": 90, "min": -360, "max": 360, "label": "Angle",
                "description": "Sweep angle in degrees; 0 builds a straight ramp"
            },
            "size": {
                "type": "float", "default": 1024, "min": 1, "max": 32768, "label": "Size",
                "description": "Turn radius, or length of a straight ramp"
            },
            "uv_scale": {
                "type": "float", "default": 0.25, "min": 0.01, "max": 16, "label": "UV Scale",
                "description": "Texture scale written to every face"
            },
            "visual_entity": {
                "type": "str", "default": "func_brush", "label": "Visual Entity",
                "description": "Brush entity that wraps the visible brushes"
            },
        }


def _normalize_keys(data: Mapping[str, Any]) -> Dict[str, Any]:
    known = {f.name for f in fields(RampParameters)}
    result: Dict[str, Any] = {}
    for key, value in data.items():
        name = _KEY_ALIASES.get(key, key)
        if name in known:
            result[name] = value
    return result
