"""
propcov.utils — Constants and Vector Helpers
=============================================

Physical constants, numeric tolerances and the small set of vector
primitives the orbit-state and attitude modules rely on.  All functions are
pure NumPy.

Units follow the orbit-state convention: kilometres, seconds, radians.
"""

import numpy as np
from numpy.typing import NDArray

# ── Physical Constants ──────────────────────────────────────────────────────
MU_EARTH_KM = 3.986004415e5     # Earth gravitational parameter  [km³/s²]
R_EARTH_KM = 6378.1363          # Earth equatorial radius          [km]

DEG_PER_RAD = 180.0 / np.pi
RAD_PER_DEG = np.pi / 180.0

# Nominal orbit used when an OrbitState is built without a state  [km, km/s]
DEFAULT_CARTESIAN_STATE = (7100.0, 0.0, 2000.0, 0.0, 7.4, 1.0)

# ── Numeric Tolerances ──────────────────────────────────────────────────────
NORMALIZE_TOL = 1e-15           # smallest norm normalize() accepts
POSITION_TOL = 1e-10            # |r| below this is "at the body centre"  [km]
PARALLEL_TOL = 1e-10            # |r̂ × v| / |v| below this is "v ∥ r"
ECC_TOL = 1e-11                 # e below this is treated as circular
INC_TOL = 1e-11                 # i [rad] within this of 0 or π is equatorial
PARABOLIC_TOL = 1e-7            # |1 − e| below this is parabolic

# ── Vector Helpers ──────────────────────────────────────────────────────────

def normalize(v: NDArray) -> NDArray:
    """Return unit vector.  Works on single vectors or (N,3) arrays."""
    v = np.asarray(v, dtype=np.float64)
    if v.ndim == 1:
        mag = np.linalg.norm(v)
        if not mag > NORMALIZE_TOL:
            raise ValueError("Cannot normalize a near-zero vector.")
        return v / mag
    elif v.ndim == 2:
        mag = np.linalg.norm(v, axis=1, keepdims=True)
        if not np.all(mag > NORMALIZE_TOL):
            raise ValueError("Cannot normalize a near-zero vector.")
        return v / mag
    else:
        raise ValueError(f"Expected 1-D or 2-D array, got {v.ndim}-D.")


def as_state_vector(state: NDArray) -> NDArray:
    """Return `state` as a fresh float64 (6,) array [x, y, z, vx, vy, vz]."""
    s = np.array(state, dtype=np.float64).reshape(-1)
    if s.shape != (6,):
        raise ValueError(f"Expected a 6-element state vector, got shape {np.shape(state)}.")
    return s


def split_state(state: NDArray) -> tuple[NDArray, NDArray]:
    """Split a 6-element state into (position, velocity) copies."""
    s = as_state_vector(state)
    return s[:3].copy(), s[3:].copy()


def wrap_to_360(angle_deg: float) -> float:
    """Wrap an angle in degrees into [0, 360)."""
    wrapped = angle_deg % 360.0
    # -1e-17 % 360.0 rounds to exactly 360.0
    return 0.0 if wrapped >= 360.0 else wrapped
