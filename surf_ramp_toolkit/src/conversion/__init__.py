"""
Geometry to map-file conversion package.

Vector math, JavaScript-compatible number text, texture-axis math and the
VMF document writer.  ``ramp_export`` turns ramp geometry into documents and
is imported directly to keep this package free of generator imports.
"""

from .number_format import format_fixed, format_number, format_point
from .uv_math import FaceUV, TextureAxis, calculate_face_uv, calculate_projected_uv
from .vmf_writer import (
    NODRAW_MATERIAL,
    PLAYER_CLIP_MATERIAL,
    IdCounter,
    SideSpec,
    VmfWriter,
    format_plane,
)

__all__ = [
    'format_fixed',
    'format_number',
    'format_point',
    'FaceUV',
    'TextureAxis',
    'calculate_face_uv',
    'calculate_projected_uv',
    'NODRAW_MATERIAL',
    'PLAYER_CLIP_MATERIAL',
    'IdCounter',
    'SideSpec',
    'VmfWriter',
    'format_plane',
]
