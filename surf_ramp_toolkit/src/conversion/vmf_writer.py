"""
Valve Map Format (VMF) writer.

Holds the document model (world, solids, sides, groups, entities) and renders
it to the nested ``key { "k" "v" }`` text Hammer loads.  Section order and
indentation are fixed: versioninfo, visgroups, viewsettings, world (solids
then groups), entities, cameras, cordons.

Coordinate System (Source engine):
- X: Forward/Back
- Y: Left/Right
- Z: Up/Down
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .number_format import format_number, format_point
from .uv_math import TextureAxis
from .vector_math import Vec3

NODRAW_MATERIAL = "TOOLS/TOOLSNODRAW"
PLAYER_CLIP_MATERIAL = "tools/toolsplayerclip"

VISUAL_BRUSH_COLOR = "220 220 220"
CLIP_BRUSH_COLOR = "220 30 220"
GROUP_COLOR = "192 192 0"

WORLD_ID = 1
FIRST_OBJECT_ID = 2

VERSION_INFO = {
    "editorversion": "400",
    "editorbuild": "8400",
    "mapversion": "1",
    "formatversion": "100",
    "prefab": "0",
}

VIEW_SETTINGS = {
    "bSnapToGrid": "1",
    "bShowGrid": "1",
    "bShowLogicalGrid": "0",
    "nGridSpacing": "64",
    "bShow3DGrid": "0",
}

WORLD_PROPERTIES = {
    "mapversion": "1",
    "classname": "worldspawn",
    "skyname": "sky_day01_01",
    "maxpropscreenwidth": "-1",
    "detailvbsp": "detail.vbsp",
    "detailmaterial": "detail/detailsprites",
}


class IdCounter:
    """Monotonic ID source shared by every solid, side, entity and group.

    One counter per document; ID 1 is reserved for the world block.
    """

    def __init__(self, start: int = FIRST_OBJECT_ID):
        self._next = start

    def next_id(self) -> int:
        value = self._next
        self._next += 1
        return value

    @property
    def peek(self) -> int:
        return self._next


def format_plane(p1: Vec3, p2: Vec3, p3: Vec3) -> str:
    """``(x y z) (x y z) (x y z)`` with no rounding applied."""
    return f"({format_point(p1)}) ({format_point(p2)}) ({format_point(p3)})"


@dataclass
class Side:
    """
    One brush face.

    The plane is given by three points; ``vertices`` is the explicit vertex
    loop written to the ``vertices_plus`` block.
    """
    id: int
    plane: Tuple[Vec3, Vec3, Vec3]
    material: str
    uaxis: TextureAxis
    vaxis: TextureAxis
    vertices: List[Vec3] = field(default_factory=list)
    rotation: str = "0"
    lightmapscale: str = "16"
    smoothing_groups: str = "0"


@dataclass
class EditorInfo:
    color: str = VISUAL_BRUSH_COLOR
    visgroupshown: str = "1"
    visgroupautoshown: str = "1"
    groupid: Optional[int] = None


@dataclass
class Solid:
    """A convex brush: its sides plus the editor metadata block."""
    id: int
    sides: List[Side] = field(default_factory=list)
    editor: EditorInfo = field(default_factory=EditorInfo)


@dataclass
class Group:
    id: int
    color: str = GROUP_COLOR


@dataclass
class Entity:
    """
    A brush entity.

    ``properties`` are written after the entity's solids, matching the key
    order of existing ramp files.
    """
    id: int
    classname: str
    solids: List[Solid] = field(default_factory=list)
    properties: Dict[str, str] = field(default_factory=dict)


@dataclass
class World:
    id: int = WORLD_ID
    solids: List[Solid] = field(default_factory=list)
    groups: List[Group] = field(default_factory=list)


@dataclass(frozen=True)
class SideSpec:
    """Face data before IDs are assigned."""
    plane: Tuple[Vec3, Vec3, Vec3]
    material: str
    uaxis: TextureAxis
    vaxis: TextureAxis
    vertices: Sequence[Vec3] = ()


class VmfWriter:
    """
    Builds one VMF document and renders it as text.

    Each writer owns its own ID counter, so independent documents never share
    IDs.  Not safe for concurrent mutation; use one writer per document.
    """

    def __init__(self):
        self.ids = IdCounter()
        self.world = World()
        self.entities: List[Entity] = []

    def next_id(self) -> int:
        return self.ids.next_id()

    def create_solid(self, sides: Sequence[SideSpec], color: str = VISUAL_BRUSH_COLOR,
                     group_id: Optional[int] = None) -> Solid:
        """Create a solid, assigning its ID before the IDs of its sides."""
        solid = Solid(id=self.next_id(), editor=EditorInfo(color=color, groupid=group_id))
        for spec in sides:
            solid.sides.append(Side(
                id=self.next_id(),
                plane=spec.plane,
                material=spec.material,
                uaxis=spec.uaxis,
                vaxis=spec.vaxis,
                vertices=list(spec.vertices),
            ))
        return solid

    def add_world_solid(self, solid: Solid) -> None:
        self.world.solids.append(solid)

    def add_group(self, group_id: int) -> None:
        if not any(g.id == group_id for g in self.world.groups):
            self.world.groups.append(Group(id=group_id))

    def add_entity(self, classname: str, solids: List[Solid],
                   properties: Optional[Dict[str, str]] = None) -> Entity:
        entity = Entity(
            id=self.next_id(),
            classname=classname,
            solids=solids,
            properties=dict(properties or {}),
        )
        self.entities.append(entity)
        return entity

    def all_ids(self) -> List[int]:
        """Every ID in the document except the world's, in emission order."""
        ids: List[int] = []

        def _solid_ids(solid: Solid) -> None:
            ids.append(solid.id)
            ids.extend(side.id for side in solid.sides)

        for solid in self.world.solids:
            _solid_ids(solid)
        ids.extend(g.id for g in self.world.groups)
        for entity in self.entities:
            ids.append(entity.id)
            for solid in entity.solids:
                _solid_ids(solid)
        return ids

    # ---------------------------------------------------------------
    # Text output
    # ---------------------------------------------------------------

    def generate(self) -> str:
        lines: List[str] = []

        lines.append("versioninfo\n{\n")
        for key, value in VERSION_INFO.items():
            lines.append(f'\t"{key}" "{value}"\n')
        lines.append("}\n\n")

        lines.append("visgroups\n{\n}\n\n")

        lines.append("viewsettings\n{\n")
        for key, value in VIEW_SETTINGS.items():
            lines.append(f'\t"{key}" "{value}"\n')
        lines.append("}\n\n")

        lines.append("world\n{\n")
        lines.append(f'\t"id" "{self.world.id}"\n')
        for key, value in WORLD_PROPERTIES.items():
            lines.append(f'\t"{key}" "{value}"\n')
        for solid in self.world.solids:
            self._write_solid(solid, lines, with_group=True)
        for group in self.world.groups:
            self._write_group(group, lines)
        lines.append("}\n\n")

        for entity in self.entities:
            self._write_entity(entity, lines)

        lines.append("cameras\n{\n")
        lines.append('\t"activecamera" "-1"\n')
        lines.append("}\n")

        lines.append("cordons\n{\n")
        lines.append('\t"mins" "(-10240 -10240 -10240)"\n')
        lines.append('\t"maxs" "(10240 10240 10240)"\n')
        lines.append('\t"active" "0"\n')
        lines.append("}\n")

        return "".join(lines)

    def _write_entity(self, entity: Entity, lines: List[str]) -> None:
        lines.append("entity\n{\n")
        lines.append(f'\t"id" "{entity.id}"\n')
        lines.append(f'\t"classname" "{entity.classname}"\n')
        for solid in entity.solids:
            self._write_solid(solid, lines, with_group=False)
        for key, value in entity.properties.items():
            if key in ("id", "classname"):
                continue
            lines.append(f'\t"{key}" "{value}"\n')
        lines.append("}\n")

    def _write_solid(self, solid: Solid, lines: List[str], with_group: bool) -> None:
        lines.append("\tsolid\n\t{\n")
        lines.append(f'\t\t"id" "{solid.id}"\n')
        for side in solid.sides:
            self._write_side(side, lines)

        editor = solid.editor
        lines.append("\t\teditor\n\t\t{\n")
        lines.append(f'\t\t\t"color" "{editor.color}"\n')
        lines.append(f'\t\t\t"visgroupshown" "{editor.visgroupshown}"\n')
        lines.append(f'\t\t\t"visgroupautoshown" "{editor.visgroupautoshown}"\n')
        # entity brushes never carry a group
        if with_group and editor.groupid is not None:
            lines.append(f'\t\t\t"groupid" "{editor.groupid}"\n')
        lines.append("\t\t}\n")
        lines.append("\t}\n")

    def _write_side(self, side: Side, lines: List[str]) -> None:
        lines.append("\t\tside\n\t\t{\n")
        lines.append(f'\t\t\t"id" "{side.id}"\n')
        lines.append(f'\t\t\t"plane" "{format_plane(*side.plane)}"\n')
        if side.vertices:
            lines.append("\t\t\tvertices_plus\n\t\t\t{\n")
            for v in side.vertices:
                lines.append(f'\t\t\t\t"v" "{format_point(v)}"\n')
            lines.append("\t\t\t}\n")
        lines.append(f'\t\t\t"material" "{side.material}"\n')
        lines.append(f'\t\t\t"uaxis" "{side.uaxis.format()}"\n')
        lines.append(f'\t\t\t"vaxis" "{side.vaxis.format()}"\n')
        lines.append(f'\t\t\t"rotation" "{side.rotation}"\n')
        lines.append(f'\t\t\t"lightmapscale" "{side.lightmapscale}"\n')
        lines.append(f'\t\t\t"smoothing_groups" "{side.smoothing_groups}"\n')
        lines.append("\t\t}\n")

    def _write_group(self, group: Group, lines: List[str]) -> None:
        lines.append("\tgroup\n\t{\n")
        lines.append(f'\t\t"id" "{group.id}"\n')
        lines.append("\t\teditor\n\t\t{\n")
        lines.append(f'\t\t\t"color" "{group.color}"\n')
        lines.append('\t\t\t"visgroupshown" "1"\n')
        lines.append('\t\t\t"visgroupautoshown" "1"\n')
        lines.append("\t\t}\n")
        lines.append("\t}\n")


__all__ = [
    "IdCounter",
    "VmfWriter",
    "Side",
    "SideSpec",
    "Solid",
    "Entity",
    "Group",
    "World",
    "EditorInfo",
    "format_plane",
    "format_number",
    "NODRAW_MATERIAL",
    "PLAYER_CLIP_MATERIAL",
]
