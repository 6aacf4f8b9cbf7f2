"""
propcov — Orbital State & Nadir Attitude Frames
================================================

A pure-NumPy library for the orbit and attitude bookkeeping of a coverage
engine: a dual-representation orbital state (Keplerian ↔ Cartesian) and the
nadir-pointing reference frame derived from a spacecraft state.

Frames
------

**Inertial (e.g. J2000)**
  - Non-rotating, centred on the central body.

**Body-fixed (e.g. Earth-fixed)**
  - Rotates with the central body; states in it are supplied by the caller.

**Nadir-pointing (LVLH-style)**
  - Z: toward the central-body centre (−r̂)
  - X: −(ẑ × v)̂ = (r × v)̂, orbit normal (cross-track)
  - Y: ẑ × x̂, completes RHS (≈ along-track for near-circular orbits)

Units: km, km/s, radians at every public interface except
:mod:`propcov.conversion`, whose angular elements are in degrees.
"""

from .exceptions import (
    PropcovError,
    InvalidStateError,
    InvalidOrbitError,
    InvariantViolationError,
)

from .orbit_state import (
    OrbitState,
    KeplerianElements,
    StateTolerance,
    EXACT,
)

from .attitude import (
    AttitudeModel,
    NadirPointingAttitude,
    SourceFrame,
    nadir_frame_matrix,
)

from .frames import (
    inertial_to_nadir, nadir_to_inertial,
    body_fixed_to_nadir, nadir_to_body_fixed,
    state_to_nadir,
)

from .conversion import (
    keplerian_to_cartesian,
    cartesian_to_keplerian,
)

from .utils import (
    normalize,
    MU_EARTH_KM,
    R_EARTH_KM,
    DEG_PER_RAD,
    RAD_PER_DEG,
    DEFAULT_CARTESIAN_STATE,
)

__version__ = "1.0.0"
__all__ = [
    # ── Constants ──
    "MU_EARTH_KM", "R_EARTH_KM",
    "DEG_PER_RAD", "RAD_PER_DEG", "DEFAULT_CARTESIAN_STATE",
    # ── Errors ──
    "PropcovError", "InvalidStateError", "InvalidOrbitError",
    "InvariantViolationError",
    # ── Orbital state ──
    "OrbitState", "KeplerianElements", "StateTolerance", "EXACT",
    # ── Attitude ──
    "AttitudeModel", "NadirPointingAttitude", "SourceFrame",
    "nadir_frame_matrix",
    # ── Frame application ──
    "inertial_to_nadir", "nadir_to_inertial",
    "body_fixed_to_nadir", "nadir_to_body_fixed",
    "state_to_nadir",
    # ── Element conversion (degrees) ──
    "keplerian_to_cartesian", "cartesian_to_keplerian",
    # ── Utilities ──
    "normalize",
]
