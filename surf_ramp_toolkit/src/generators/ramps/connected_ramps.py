"""
Multi-ramp chains.

Each ramp in a chain is the shared parameters with a few per-ramp overrides
(direction, angle, size and optionally smoothness).  Ramps are placed by
chaining connection transforms from the identity, and their caps are marked
connected (interior junction) or exposed (chain extremity).

Clip volumes need reconciling where two ramps meet with opposite clip
inwardness; see ``fix_clip_connections``.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Union

import numpy as np

from surf_ramp_toolkit.src.conversion.vector_math import create_identity_matrix
from surf_ramp_toolkit.src.conversion.vmf_writer import NODRAW_MATERIAL
from .connection import calculate_connection_transform
from .geometry_generator import BrushSegment, ClipSolid, RampGeometry, SweptSolid, generate_geometry
from .parameters import ConnectionMode, RampParameters
from .profile_generator import Profile
from .visualization import Triangle, VisualizationData

logger = logging.getLogger(__name__)

# per-ramp keys a chain config may override
_CHAIN_OVERRIDE_KEYS = {
    "ramp": "ramp",
    "rampEnum": "ramp",
    "angle": "angle",
    "size": "size",
    "smoothness": "smoothness",
}


class RampAxis(Enum):
    """Sweep family of a ramp, used to decide whether a junction can be fixed."""
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    STRAIGHT = "straight"

    @classmethod
    def of(cls, params: RampParameters) -> "RampAxis":
        if params.is_straight:
            return cls.STRAIGHT
        if params.ramp.is_horizontal:
            return cls.HORIZONTAL
        return cls.VERTICAL


@dataclass(frozen=True)
class CapMaterials:
    start: str
    end: str


@dataclass(frozen=True, eq=False)
class RampPlacement:
    """One ramp of a chain: its parameters, local geometry and world transform."""
    params: RampParameters
    geometry: RampGeometry
    transform: np.ndarray
    start_connected: bool = False
    end_connected: bool = False

    @property
    def cap_materials(self) -> CapMaterials:
        material = self.params.material_name
        return CapMaterials(
            start=NODRAW_MATERIAL if self.start_connected else material,
            end=NODRAW_MATERIAL if self.end_connected else material,
        )

    @property
    def axis(self) -> RampAxis:
        return RampAxis.of(self.params)

    def world_solids(self) -> List[SweptSolid]:
        return [solid.transformed(self.transform) for solid in self.geometry.solids]

    def world_clip_solids(self) -> List[ClipSolid]:
        return [clip.transformed(self.transform) for clip in self.geometry.clip_solids]

    def visualization(self) -> VisualizationData:
        return VisualizationData(self.geometry, self.transform)


@dataclass(eq=False)
class ConnectedRamps:
    """A generated chain.  Empty when built from no ramp configs."""
    ramps: List[RampPlacement] = field(default_factory=list)
    shared_params: Optional[RampParameters] = None
    connection_mode: ConnectionMode = ConnectionMode.END

    def __len__(self) -> int:
        return len(self.ramps)

    def __iter__(self) -> Iterator[RampPlacement]:
        return iter(self.ramps)

    @property
    def transforms(self) -> List[np.ndarray]:
        return [ramp.transform for ramp in self.ramps]

    def iter_faces(self) -> Iterator[Triangle]:
        """World-space visualization triangles of every ramp, in chain order."""
        for ramp in self.ramps:
            yield from ramp.visualization().faces

    def combined_solids(self) -> List[SweptSolid]:
        solids: List[SweptSolid] = []
        for ramp in self.ramps:
            solids.extend(ramp.world_solids())
        return solids


def generate_connected_ramps(shared_params: Union[RampParameters, Mapping[str, Any]],
                             ramp_configs: Sequence[Mapping[str, Any]],
                             connection_mode=ConnectionMode.END) -> ConnectedRamps:
    """Build and place every ramp of a chain.

    Args:
        shared_params: Parameters common to all ramps (or a mapping of them).
        ramp_configs: Per-ramp overrides of ``ramp``, ``angle``, ``size`` and
            optionally ``smoothness`` (camelCase ``rampEnum`` accepted).
        connection_mode: ``end`` or ``start``.

    Returns:
        ConnectedRamps; empty when ``ramp_configs`` is empty.

    Raises:
        ValueError: If ``connection_mode`` or a ramp direction is unknown.
    """
    mode = ConnectionMode.parse(connection_mode)
    if not isinstance(shared_params, RampParameters):
        shared_params = RampParameters.from_dict(shared_params)

    if not ramp_configs:
        return ConnectedRamps(shared_params=shared_params, connection_mode=mode)

    params_list = [
        _ramp_params(shared_params, config, index)
        for index, config in enumerate(ramp_configs)
    ]

    transforms = [create_identity_matrix()]
    for i in range(1, len(params_list)):
        transforms.append(calculate_connection_transform(
            params_list[i - 1], params_list[i], transforms[i - 1], mode
        ))

    ramps = []
    count = len(params_list)
    for i, (params, transform) in enumerate(zip(params_list, transforms)):
        start_connected, end_connected = _cap_state(i, count, mode)
        ramps.append(RampPlacement(
            params=params,
            geometry=generate_geometry(params),
            transform=transform,
            start_connected=start_connected,
            end_connected=end_connected,
        ))

    logger.info("Generated chain of %d ramp(s) in '%s' mode", count, mode)
    return ConnectedRamps(ramps=ramps, shared_params=shared_params, connection_mode=mode)


def _ramp_params(shared: RampParameters, config: Mapping[str, Any], index: int) -> RampParameters:
    overrides: Dict[str, Any] = {}
    for key, value in config.items():
        name = _CHAIN_OVERRIDE_KEYS.get(key)
        if name is None or value is None:
            continue
        overrides[name] = value
    overrides["ramp_name"] = f"{shared.ramp_name}_{index + 1}"
    return shared.with_overrides(**overrides)


def _cap_state(index: int, count: int, mode: ConnectionMode):
    has_prev = index > 0
    has_next = index < count - 1
    if mode is ConnectionMode.START:
        # ramp i hangs off the start of ramp i-1
        return has_next, has_prev
    return has_prev, has_next


# ---------------------------------------------------------------
# Clip junctions
# ---------------------------------------------------------------

@dataclass(frozen=True)
class ClipSegmentRecord:
    """One world-space clip segment with the chain metadata junction fixing needs."""
    start: Profile
    end: Profile
    ramp_index: int
    segment_index: int
    is_profile_inward: bool
    axis: RampAxis

    @property
    def segment(self) -> BrushSegment:
        return BrushSegment(self.start, self.end)


@dataclass
class ClipGroup:
    """All segments of one clip profile across the chain, in chain order."""
    segments: List[ClipSegmentRecord] = field(default_factory=list)

    def ramp_indices(self) -> List[int]:
        seen: List[int] = []
        for record in self.segments:
            if record.ramp_index not in seen:
                seen.append(record.ramp_index)
        return seen


def collect_clip_groups(connected: ConnectedRamps) -> List[ClipGroup]:
    """Gather world-space clip segments, one group per clip profile index."""
    groups: List[ClipGroup] = []
    for ramp_index, ramp in enumerate(connected.ramps):
        axis = ramp.axis
        for clip_index, clip in enumerate(ramp.world_clip_solids()):
            if clip_index >= len(groups):
                groups.append(ClipGroup())
            for segment_index, segment in enumerate(clip.segments):
                groups[clip_index].segments.append(ClipSegmentRecord(
                    start=segment.start,
                    end=segment.end,
                    ramp_index=ramp_index,
                    segment_index=segment_index,
                    is_profile_inward=clip.is_profile_inward,
                    axis=axis,
                ))
    return groups


def fix_clip_connections(clip_groups: Sequence[ClipGroup],
                         connection_mode=ConnectionMode.END) -> List[ClipGroup]:
    """Close the clip seam at junctions whose inwardness flips.

    Inward clip segments overlap their neighbours while outward ones do not,
    so at a flip the two ramps either overlap or leave a crack.  The boundary
    segment of the previous ramp is dropped and the current ramp's boundary
    segment is stretched to cover it.  Junctions are left alone when the ramp
    axes are incompatible (horizontal next to vertical) or when either ramp
    has a single clip segment.

    Returns new groups; the input records are not modified.
    """
    mode = ConnectionMode.parse(connection_mode)
    return [_fix_group(group, mode) for group in clip_groups]


def _fix_group(group: ClipGroup, mode: ConnectionMode) -> ClipGroup:
    order = group.ramp_indices()
    per_ramp: Dict[int, List[ClipSegmentRecord]] = {index: [] for index in order}
    for record in group.segments:
        per_ramp[record.ramp_index].append(record)

    for prev_index, curr_index in zip(order, order[1:]):
        prev = per_ramp[prev_index]
        curr = per_ramp[curr_index]
        if len(prev) < 2 or len(curr) < 2:
            continue

        if mode is ConnectionMode.END:
            prev_edge, curr_edge = prev[-1], curr[0]
        else:
            prev_edge, curr_edge = prev[0], curr[-1]

        if prev_edge.is_profile_inward == curr_edge.is_profile_inward:
            continue
        if not _axes_compatible(prev_edge.axis, curr_edge.axis):
            logger.debug("Clip junction %d->%d skipped: %s next to %s",
                         prev_index, curr_index, prev_edge.axis.value, curr_edge.axis.value)
            continue

        if mode is ConnectionMode.END:
            new_start = prev[-1].start if prev_edge.is_profile_inward else prev[-2].end
            curr[0] = replace(curr[0], start=new_start)
            prev.pop()
        else:
            new_end = prev[0].end if prev_edge.is_profile_inward else prev[1].start
            curr[-1] = replace(curr[-1], end=new_end)
            prev.pop(0)

    segments: List[ClipSegmentRecord] = []
    for index in order:
        segments.extend(per_ramp[index])
    return ClipGroup(segments=segments)


def _axes_compatible(a: RampAxis, b: RampAxis) -> bool:
    if a is RampAxis.STRAIGHT or b is RampAxis.STRAIGHT:
        return True
    return a is b
