"""
Connection frames and the rigid transforms that chain ramps together.

A frame is the position and orientation of a ramp's start or end attachment
point in the ramp's local space.  Chaining maps the current ramp's free frame
onto the previous ramp's frame in world space.
"""

from __future__ import annotations
import math
from dataclasses import dataclass

import numpy as np

from surf_ramp_toolkit.src.conversion.vector_math import (
    FORWARD, UP, Vec3, create_basis_matrix, invert_transform_matrix,
    multiply_matrices, normalize, rotate_around_axis, transform_vector, transform_vertex,
)
from .geometry_generator import get_spin_configuration
from .parameters import ConnectionMode, RampParameters

ORIGIN: Vec3 = (0.0, 0.0, 0.0)


@dataclass(frozen=True)
class ConnectionFrame:
    position: Vec3
    forward: Vec3
    up: Vec3

    def transformed(self, matrix: np.ndarray) -> "ConnectionFrame":
        return ConnectionFrame(
            position=transform_vertex(self.position, matrix),
            forward=transform_vector(self.forward, matrix),
            up=transform_vector(self.up, matrix),
        )

    def basis_matrix(self) -> np.ndarray:
        return create_basis_matrix(self.position, self.forward, self.up)


def get_connection_frame(params: RampParameters, is_start: bool) -> ConnectionFrame:
    """Local attachment frame at the start or end of a ramp.

    Derived from parameters alone.  The start frame is the canonical origin;
    a straight ramp ends ``size`` units down -X, and a curved ramp ends where
    the spin carries the origin.
    """
    if is_start:
        return ConnectionFrame(ORIGIN, FORWARD, UP)

    if params.is_straight:
        return ConnectionFrame((-params.size, 0.0, 0.0), FORWARD, UP)

    spin = get_spin_configuration(params.ramp, math.radians(params.angle),
                                  params.size, params.height)
    position = rotate_around_axis(ORIGIN, spin.axis, spin.center, spin.angle)
    forward = rotate_around_axis(FORWARD, spin.axis, ORIGIN, spin.angle)
    up = rotate_around_axis(UP, spin.axis, ORIGIN, spin.angle)
    return ConnectionFrame(position, normalize(forward), normalize(up))


def calculate_connection_transform(prev_params: RampParameters, curr_params: RampParameters,
                                   prev_transform: np.ndarray,
                                   connection_mode=ConnectionMode.END) -> np.ndarray:
    """World transform that attaches the current ramp to the previous one.

    In ``end`` mode the current ramp's start frame lands on the previous
    ramp's end frame; ``start`` mode attaches the current ramp's end to the
    previous ramp's start.
    """
    mode = ConnectionMode.parse(connection_mode)
    attach_to_prev_start = mode is ConnectionMode.START

    target = get_connection_frame(prev_params, attach_to_prev_start).transformed(prev_transform)
    source = get_connection_frame(curr_params, not attach_to_prev_start)

    return multiply_matrices(target.basis_matrix(),
                             invert_transform_matrix(source.basis_matrix()))
