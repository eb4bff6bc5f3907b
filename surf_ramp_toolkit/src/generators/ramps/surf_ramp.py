"""
SurfRampGenerator: one entry point for profiles, geometry, visualization,
connection frames and VMF output of a ramp or a chain of ramps.
"""

from __future__ import annotations
from typing import Any, List, Mapping, Optional, Sequence, Union

from .connected_ramps import CapMaterials, ConnectedRamps, generate_connected_ramps
from .connection import ConnectionFrame, get_connection_frame
from .geometry_generator import RampGeometry, generate_geometry
from .parameters import ConnectionMode, RampParameters
from .profile_generator import Profile, generate_profiles
from .visualization import VisualizationData


class SurfRampGenerator:
    """
    Generator for a single surf ramp.

    Usage:
        gen = SurfRampGenerator(ramp="Left", angle=45, material_name="dev/dev_measuregeneric01")
        text = gen.generate_vmf().generate()
    """

    def __init__(self, params: Optional[Union[RampParameters, Mapping[str, Any]]] = None,
                 **overrides: Any):
        if params is None:
            params = RampParameters()
        elif not isinstance(params, RampParameters):
            params = RampParameters.from_dict(params)
        if overrides:
            params = params.with_overrides(**overrides)
        self.params = params

    def generate_profiles(self) -> List[Profile]:
        return generate_profiles(self.params)

    def generate_geometry(self) -> RampGeometry:
        return generate_geometry(self.params)

    def get_visualization_data(self) -> VisualizationData:
        return VisualizationData(self.generate_geometry())

    def get_connection_frame(self, is_start: bool) -> ConnectionFrame:
        return get_connection_frame(self.params, is_start)

    def generate_vmf(self, cap_materials: Optional[CapMaterials] = None):
        """Build the VMF document for this ramp.

        Returns:
            VmfWriter holding the document; call ``generate()`` for the text.
        """
        from surf_ramp_toolkit.src.conversion.ramp_export import build_single_ramp_vmf
        return build_single_ramp_vmf(self.params, self.generate_geometry(), cap_materials)

    @staticmethod
    def generate_connected_ramps(shared_params: Union[RampParameters, Mapping[str, Any]],
                                 ramp_configs: Sequence[Mapping[str, Any]],
                                 connection_mode=ConnectionMode.END) -> ConnectedRamps:
        return generate_connected_ramps(shared_params, ramp_configs, connection_mode)

    @staticmethod
    def generate_connected_vmf(connected: ConnectedRamps):
        """VmfWriter for a chain, or ``None`` for an empty chain."""
        from surf_ramp_toolkit.src.conversion.ramp_export import build_connected_vmf
        return build_connected_vmf(connected)
