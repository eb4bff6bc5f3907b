from surf_ramp_toolkit.src.conversion.vector_math import create_basis_matrix
from surf_ramp_toolkit.src.generators.ramps.geometry_generator import generate_geometry
from surf_ramp_toolkit.src.generators.ramps.parameters import RampParameters
from surf_ramp_toolkit.src.generators.ramps.visualization import (
    VisualizationData, iter_triangles, triangle_count,
)


def test_triangle_count_with_caps(right_both_params):
    geometry = generate_geometry(right_both_params)
    faces = list(iter_triangles(geometry))
    assert len(faces) == 16 * 3 * 2 + 2 * (3 - 2)
    assert triangle_count(geometry) == len(faces)


def test_loop_has_no_cap_triangles(loop_params):
    geometry = generate_geometry(loop_params)
    assert len(list(iter_triangles(geometry))) == 48 * 3 * 2


def test_thin_both_counts_every_solid():
    geometry = generate_geometry(RampParameters(style="Thin"))
    assert len(list(iter_triangles(geometry))) == 2 * 16 * 4 * 2 + 2 * 2 * (4 - 2)


def test_straight_ramp_triangles(straight_params):
    geometry = generate_geometry(straight_params)
    assert len(list(iter_triangles(geometry))) == 1 * 3 * 2 + 2


def test_faces_are_lazy_and_repeatable(right_both_params):
    data = VisualizationData(generate_geometry(right_both_params))
    faces = data.faces
    assert iter(faces) is faces
    assert list(data.faces) == list(data)
    assert data.face_count == 98


def test_quad_and_cap_ordering(right_both_params):
    geometry = generate_geometry(right_both_params)
    (solid,) = geometry.solids
    faces = list(iter_triangles(geometry))
    cur, nxt = solid.steps[0], solid.steps[1]
    assert faces[0] == (cur[0], cur[1], nxt[0])
    assert faces[1] == (cur[1], nxt[1], nxt[0])
    start = solid.steps[0]
    end = solid.steps[-1]
    # flipped start cap, then end cap
    assert faces[-2] == (start[0], start[2], start[1])
    assert faces[-1] == (end[0], end[1], end[2])


def test_transformed_faces(right_both_params):
    geometry = generate_geometry(right_both_params)
    shift = create_basis_matrix((100, 0, 0), (1, 0, 0), (0, 0, 1))
    local = list(VisualizationData(geometry).faces)
    moved = list(VisualizationData(geometry, shift).faces)
    assert len(local) == len(moved)
    assert moved[0][0][0] == local[0][0][0] + 100
