"""
propcov.attitude — Attitude Reference Frames
=============================================

Attitude models turn a spacecraft state (relative to the central body) into
the rotation matrix from the frame that state is expressed in to the
spacecraft's reference frame.

Nadir-Pointing Frame
--------------------
Built from position ``r`` and velocity ``v``::

    ẑ = −r̂              (nadir, toward the body centre)
    x̂ = −(ẑ × v)̂        (= (r × v)̂, orbit normal / cross-track)
    ŷ = ẑ × x̂           (≈ along-track, completes RHS)

The returned matrix has rows ``x̂, ŷ, ẑ`` expressed in the source frame, so
``v_nadir = R @ v_source``.  The procedure is the same whether the state is
inertial or body-fixed; only the meaning of the source frame changes.

A zero position or a velocity parallel to the position leaves the frame
undefined and raises :class:`~propcov.exceptions.InvalidStateError`.
"""

import copy
import logging
from enum import Enum
from typing import Protocol, runtime_checkable

import numpy as np
from numpy.typing import NDArray

from .exceptions import InvalidStateError
from .utils import NORMALIZE_TOL, POSITION_TOL, PARALLEL_TOL, normalize, split_state

logger = logging.getLogger(__name__)


class SourceFrame(Enum):
    """Frame in which the input state vector is expressed."""
    INERTIAL = "inertial"
    BODY_FIXED = "body_fixed"


@runtime_checkable
class AttitudeModel(Protocol):
    """Anything that can produce a source → reference rotation matrix."""

    def compute_reference_frame(self, state: NDArray,
                                source_frame: SourceFrame) -> NDArray:
        ...


def _invalid(msg: str) -> None:
    logger.debug("nadir frame rejected: %s", msg)
    raise InvalidStateError(msg)


def nadir_frame_matrix(state: NDArray) -> NDArray:
    """Build the source → nadir-pointing rotation matrix.

    Parameters
    ----------
    state : (6,) array — [x, y, z, vx, vy, vz] relative to the central body

    Returns
    -------
    R : (3,3) ndarray — rows are x̂, ŷ, ẑ of the nadir frame in the source
        frame; orthonormal with det(R) = +1

    Raises
    ------
    InvalidStateError
        Non-finite components, zero position, or velocity parallel to
        position (including zero velocity).
    """
    r, v = split_state(state)
    if not (np.all(np.isfinite(r)) and np.all(np.isfinite(v))):
        _invalid("State vector contains non-finite components.")

    r_mag = np.linalg.norm(r)
    if r_mag < POSITION_TOL:
        _invalid("Position is at the central-body centre; nadir direction is undefined.")

    z_hat = normalize(-r)
    zxv = np.cross(z_hat, v)
    if np.linalg.norm(zxv) <= max(PARALLEL_TOL * np.linalg.norm(v), NORMALIZE_TOL):
        _invalid("Velocity is parallel to position (or zero); orbit normal is undefined.")

    x_hat = -normalize(zxv)
    y_hat = np.cross(z_hat, x_hat)

    return np.array([x_hat, y_hat, z_hat])      # rows = nadir axes in source frame


class NadirPointingAttitude:
    """Nadir-pointing attitude model.

    Stateless: every call rebuilds the frame from the state it is given.
    """

    def inertial_to_reference(self, state: NDArray) -> NDArray:
        """Inertial → nadir matrix from a state expressed in the inertial frame."""
        return nadir_frame_matrix(state)

    def body_fixed_to_reference(self, state: NDArray) -> NDArray:
        """Body-fixed → nadir matrix from a state expressed in the body-fixed frame."""
        return nadir_frame_matrix(state)

    def reference_to_inertial(self, state: NDArray) -> NDArray:
        return self.inertial_to_reference(state).T

    def reference_to_body_fixed(self, state: NDArray) -> NDArray:
        return self.body_fixed_to_reference(state).T

    def compute_reference_frame(self, state: NDArray,
                                source_frame: SourceFrame) -> NDArray:
        """Dispatch on `source_frame` (a :class:`SourceFrame` or its value)."""
        frame = SourceFrame(source_frame)
        if frame is SourceFrame.INERTIAL:
            return self.inertial_to_reference(state)
        return self.body_fixed_to_reference(state)

    def clone(self) -> "NadirPointingAttitude":
        return copy.deepcopy(self)

    def __repr__(self):
        return "NadirPointingAttitude()"
