"""
Ramp geometry to VMF documents.

Both paths share one layout:

- visual brushes, wrapped in a single brush entity (``func_brush`` by
  default, made non-solid with ``solidity 1``)
- clip brushes in the world, one group per clip volume

Every brush is one swept segment: one lateral side per profile edge plus a
start and an end cap.  Lateral faces get sweep-following texture axes whose U
shift runs on across the segments of a solid; caps get projected axes.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from surf_ramp_toolkit.src.generators.ramps.connected_ramps import (
    CapMaterials, ConnectedRamps, collect_clip_groups, fix_clip_connections,
)
from surf_ramp_toolkit.src.generators.ramps.geometry_generator import RampGeometry
from surf_ramp_toolkit.src.generators.ramps.parameters import RampParameters
from surf_ramp_toolkit.src.generators.ramps.profile_generator import Profile
from .uv_math import calculate_face_uv, calculate_projected_uv
from .vmf_writer import (
    CLIP_BRUSH_COLOR, NODRAW_MATERIAL, PLAYER_CLIP_MATERIAL, VISUAL_BRUSH_COLOR,
    SideSpec, VmfWriter,
)

logger = logging.getLogger(__name__)

FUNC_BRUSH = "func_brush"


@dataclass(frozen=True)
class _BrushJob:
    """One segment waiting to be written, with its cap materials resolved."""
    start: Profile
    end: Profile
    start_material: str = NODRAW_MATERIAL
    end_material: str = NODRAW_MATERIAL


def build_single_ramp_vmf(params: RampParameters, geometry: RampGeometry,
                          cap_materials: Optional[CapMaterials] = None) -> VmfWriter:
    """Document for one ramp.

    ``cap_materials`` overrides the exposed start/end cap materials, which
    default to the ramp material.
    """
    caps = _resolve_caps(params, cap_materials)

    visual_groups = [
        _solid_jobs(solid.segments, caps, geometry.is_loop)
        for solid in geometry.solids
    ]
    clip_groups = [
        [_BrushJob(seg.start, seg.end) for seg in clip.segments]
        for clip in geometry.clip_solids
    ]

    writer = VmfWriter()
    _write_document(writer, params, visual_groups, clip_groups)
    logger.info("Built VMF for ramp '%s': %d visual brush(es), %d clip brush(es)",
                params.ramp_name, sum(len(g) for g in visual_groups),
                sum(len(g) for g in clip_groups))
    return writer


def build_connected_vmf(connected: ConnectedRamps) -> Optional[VmfWriter]:
    """Document for a whole chain, or ``None`` when the chain is empty.

    Visual brushes are grouped by profile index across the chain so texture
    shifts run on from one ramp into the next.  Clip segments are reconciled
    at the junctions before writing.
    """
    if not connected.ramps:
        return None

    visual_groups: List[List[_BrushJob]] = []
    for ramp in connected.ramps:
        caps = ramp.cap_materials
        for index, solid in enumerate(ramp.world_solids()):
            if index >= len(visual_groups):
                visual_groups.append([])
            visual_groups[index].extend(_solid_jobs(solid.segments, caps, ramp.geometry.is_loop))

    clip_groups = [
        [_BrushJob(record.start, record.end) for record in group.segments]
        for group in fix_clip_connections(collect_clip_groups(connected), connected.connection_mode)
    ]

    params = connected.shared_params or connected.ramps[0].params
    writer = VmfWriter()
    _write_document(writer, params, visual_groups, clip_groups)
    logger.info("Built VMF for chain '%s': %d ramp(s), %d visual brush(es), %d clip brush(es)",
                params.ramp_name, len(connected.ramps),
                sum(len(g) for g in visual_groups), sum(len(g) for g in clip_groups))
    return writer


def _resolve_caps(params: RampParameters, cap_materials: Optional[CapMaterials]) -> CapMaterials:
    if cap_materials is None:
        return CapMaterials(params.material_name, params.material_name)
    return CapMaterials(
        start=cap_materials.start or params.material_name,
        end=cap_materials.end or params.material_name,
    )


def _solid_jobs(segments, caps: CapMaterials, is_loop: bool) -> List[_BrushJob]:
    jobs = []
    last = len(segments) - 1
    for index, segment in enumerate(segments):
        start_material = caps.start if index == 0 and not is_loop else NODRAW_MATERIAL
        end_material = caps.end if index == last and not is_loop else NODRAW_MATERIAL
        jobs.append(_BrushJob(segment.start, segment.end, start_material, end_material))
    return jobs


def _write_document(writer: VmfWriter, params: RampParameters,
                    visual_groups: Sequence[Sequence[_BrushJob]],
                    clip_groups: Sequence[Sequence[_BrushJob]]) -> None:
    visual_solids = []
    for jobs in visual_groups:
        if not jobs:
            continue
        offsets = [0.0] * len(jobs[0].start)
        for job in jobs:
            sides = _lateral_sides(job, params.material_name, params.uv_scale, offsets)
            sides.extend(_cap_sides(job, params.uv_scale))
            visual_solids.append(writer.create_solid(sides, VISUAL_BRUSH_COLOR))

    if visual_solids:
        properties = {"solidity": "1"} if params.visual_entity == FUNC_BRUSH else {}
        writer.add_entity(params.visual_entity, visual_solids, properties)

    if not any(clip_groups):
        return

    for jobs in clip_groups:
        if not jobs:
            continue
        group_id = writer.next_id()
        offsets = [0.0] * len(jobs[0].start)
        for job in jobs:
            sides = _lateral_sides(job, PLAYER_CLIP_MATERIAL, params.uv_scale, offsets)
            sides.extend(_cap_sides(job, params.uv_scale, PLAYER_CLIP_MATERIAL))
            writer.add_world_solid(writer.create_solid(sides, CLIP_BRUSH_COLOR, group_id))
        writer.add_group(group_id)


def _lateral_sides(job: _BrushJob, material: str, uv_scale: float,
                   offsets: List[float]) -> List[SideSpec]:
    """One side per profile edge; advances ``offsets`` in place."""
    start, end = job.start, job.end
    n = len(start)
    sides = []
    for j in range(n):
        k = (j + 1) % n
        v1, v2, v3, v4 = start[j], start[k], end[k], end[j]

        uv = calculate_face_uv(v1, v2, v3, v4, uv_scale, offsets[j])
        if uv_scale:
            offsets[j] += uv.u_length / uv_scale

        sides.append(SideSpec(
            plane=(v2, v1, v4),
            material=material,
            uaxis=uv.uaxis,
            vaxis=uv.vaxis,
            vertices=(v4, v3, v2, v1),
        ))
    return sides


def _cap_sides(job: _BrushJob, uv_scale: float,
               material: Optional[str] = None) -> List[SideSpec]:
    start, end = job.start, job.end

    su, sv = calculate_projected_uv(start[0], start[1], start[2], uv_scale)
    eu, ev = calculate_projected_uv(end[0], end[2], end[1], uv_scale)
    return [
        SideSpec(
            plane=(start[0], start[1], start[2]),
            material=material or job.start_material,
            uaxis=su, vaxis=sv,
            vertices=tuple(start),
        ),
        SideSpec(
            plane=(end[0], end[2], end[1]),
            material=material or job.end_material,
            uaxis=eu, vaxis=ev,
            vertices=tuple(reversed(end)),
        ),
    ]


__all__ = [
    "build_single_ramp_vmf",
    "build_connected_vmf",
]
