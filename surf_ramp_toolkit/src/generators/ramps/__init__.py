"""
Surf ramp generation: profiles, swept geometry, clip volumes and chains.
"""

from .parameters import ConnectionMode, RampDirection, RampParameters, RampStyle, SurfSide
from .profile_generator import generate_profiles
from .geometry_generator import (
    BrushSegment,
    ClipSolid,
    RampGeometry,
    SpinConfig,
    SweptSolid,
    generate_geometry,
    get_spin_configuration,
)
from .connection import ConnectionFrame, calculate_connection_transform, get_connection_frame
from .connected_ramps import (
    CapMaterials,
    ConnectedRamps,
    RampPlacement,
    collect_clip_groups,
    fix_clip_connections,
    generate_connected_ramps,
)
from .visualization import VisualizationData, iter_triangles
from .surf_ramp import SurfRampGenerator
from .catalog import RAMP_PRESET_CATALOG, RampPreset, RampPresetCatalog

__all__ = [
    'ConnectionMode',
    'RampDirection',
    'RampParameters',
    'RampStyle',
    'SurfSide',
    'generate_profiles',
    'BrushSegment',
    'ClipSolid',
    'RampGeometry',
    'SpinConfig',
    'SweptSolid',
    'generate_geometry',
    'get_spin_configuration',
    'ConnectionFrame',
    'calculate_connection_transform',
    'get_connection_frame',
    'CapMaterials',
    'ConnectedRamps',
    'RampPlacement',
    'collect_clip_groups',
    'fix_clip_connections',
    'generate_connected_ramps',
    'VisualizationData',
    'iter_triangles',
    'SurfRampGenerator',
    'RAMP_PRESET_CATALOG',
    'RampPreset',
    'RampPresetCatalog',
]
