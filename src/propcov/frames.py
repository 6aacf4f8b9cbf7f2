"""
propcov.frames — Applying Nadir Frames
=======================================

Vector and state transforms built on :func:`propcov.attitude.nadir_frame_matrix`.
The same helpers serve inertial and body-fixed sources: the reference state
and the vectors must simply be expressed in the same frame::

    inertial    →  nadir     (reference state in inertial)
    body-fixed  →  nadir     (reference state in body-fixed)
"""

import numpy as np
from numpy.typing import NDArray

from .attitude import nadir_frame_matrix


# ════════════════════════════════════════════════════════════════════════════
#  Internal Helpers
# ════════════════════════════════════════════════════════════════════════════

def _apply_dcm(R: NDArray, vec: NDArray) -> NDArray:
    """Apply 3×3 DCM to a single (3,) or batch (N,3) of vectors."""
    vec = np.asarray(vec, dtype=np.float64)
    if vec.ndim == 1:
        return R @ vec
    return (R @ vec.T).T


def _build_6x6(R: NDArray) -> NDArray:
    """Expand a 3×3 DCM to block-diagonal 6×6 for full-state transforms."""
    M = np.zeros((6, 6), dtype=np.float64)
    M[:3, :3] = R
    M[3:, 3:] = R
    return M


# ════════════════════════════════════════════════════════════════════════════
#  Source Frame ↔ Nadir
# ════════════════════════════════════════════════════════════════════════════

def inertial_to_nadir(vec: NDArray, state_inertial: NDArray) -> NDArray:
    """Express inertial vector(s) in the nadir frame of `state_inertial`.

    Parameters
    ----------
    vec : (3,) or (N,3) — vector(s) in the inertial frame
    state_inertial : (6,) — spacecraft state in the inertial frame

    Returns
    -------
    vec_nadir : same shape — vector(s) in the nadir frame
    """
    return _apply_dcm(nadir_frame_matrix(state_inertial), vec)


def nadir_to_inertial(vec: NDArray, state_inertial: NDArray) -> NDArray:
    """Express nadir-frame vector(s) in the inertial frame."""
    return _apply_dcm(nadir_frame_matrix(state_inertial).T, vec)


def body_fixed_to_nadir(vec: NDArray, state_body_fixed: NDArray) -> NDArray:
    """Express body-fixed vector(s) in the nadir frame of `state_body_fixed`."""
    return _apply_dcm(nadir_frame_matrix(state_body_fixed), vec)


def nadir_to_body_fixed(vec: NDArray, state_body_fixed: NDArray) -> NDArray:
    """Express nadir-frame vector(s) in the body-fixed frame."""
    return _apply_dcm(nadir_frame_matrix(state_body_fixed).T, vec)


def state_to_nadir(state: NDArray, reference_state: NDArray) -> NDArray:
    """Rotate a 6-element [r; v] state into the nadir frame of `reference_state`.

    Both states must be expressed in the same source frame.  This is a pure
    rotation: the nadir frame's own angular rate is not removed.
    """
    R = nadir_frame_matrix(reference_state)
    return _build_6x6(R) @ np.asarray(state, dtype=np.float64)
