"""
propcov.conversion — Two-Body Element Conversion
=================================================

Classical Keplerian elements ↔ Cartesian state for closed (elliptic) two-body
orbits.  Angular elements are in **degrees** at this boundary; the semi-major
axis and the state share the length unit of ``mu``.

Element vector order::

    (a, e, i, Ω, ω, ν)    semi-major axis, eccentricity, inclination,
                          RAAN, argument of periapsis, true anomaly

Degenerate orbits
-----------------
Where an angle is undefined the conversion reports a conventional value
instead of noise:

  - **circular** (e < ``ECC_TOL``): ω = 0, ν is the argument of latitude
    (measured from the ascending node);
  - **equatorial** (i within ``INC_TOL`` of 0° or 180°): Ω = 0, ω is the
    longitude of periapsis (measured from +X);
  - **circular equatorial**: Ω = ω = 0, ν is the true longitude.

Unbound, rectilinear or otherwise unrepresentable states raise
:class:`~propcov.exceptions.InvalidOrbitError`.
"""

import logging

import numpy as np
from numpy.typing import NDArray

from .exceptions import InvalidOrbitError
from .utils import (
    DEG_PER_RAD, RAD_PER_DEG,
    ECC_TOL, INC_TOL, PARABOLIC_TOL, POSITION_TOL,
    as_state_vector, wrap_to_360,
)

logger = logging.getLogger(__name__)


def _fail(msg: str) -> None:
    logger.debug("element conversion rejected: %s", msg)
    raise InvalidOrbitError(msg)


def _check_mu(mu: float) -> None:
    if not np.isfinite(mu) or mu <= 0.0:
        _fail(f"Gravitational parameter must be positive and finite, got {mu!r}.")


def perifocal_to_inertial_matrix(i: float, raan: float, argp: float) -> NDArray:
    """PQW → inertial rotation for angles in [rad].

    Returns
    -------
    R : (3,3) ndarray — columns are the P, Q, W axes in the inertial frame
    """
    cos_raan, sin_raan = np.cos(raan), np.sin(raan)
    cos_argp, sin_argp = np.cos(argp), np.sin(argp)
    cos_i, sin_i = np.cos(i), np.sin(i)

    return np.array([
        [cos_raan * cos_argp - sin_raan * sin_argp * cos_i,
         -cos_raan * sin_argp - sin_raan * cos_argp * cos_i,
         sin_raan * sin_i],
        [sin_raan * cos_argp + cos_raan * sin_argp * cos_i,
         -sin_raan * sin_argp + cos_raan * cos_argp * cos_i,
         -cos_raan * sin_i],
        [sin_argp * sin_i,
         cos_argp * sin_i,
         cos_i],
    ])


# ════════════════════════════════════════════════════════════════════════════
#  Keplerian → Cartesian
# ════════════════════════════════════════════════════════════════════════════

def keplerian_to_cartesian(
    mu: float, a: float, e: float,
    i_deg: float, raan_deg: float, argp_deg: float, nu_deg: float,
) -> NDArray:
    """Convert classical Keplerian elements to a Cartesian state.

    Parameters
    ----------
    mu : float — gravitational parameter [L³/T²]
    a : float — semi-major axis [L], must be positive
    e : float — eccentricity, 0 ≤ e < 1
    i_deg, raan_deg, argp_deg, nu_deg : float — angles [deg]

    Returns
    -------
    state : (6,) ndarray — [x, y, z, vx, vy, vz] in [L] and [L/T]

    Raises
    ------
    InvalidOrbitError
        Non-positive ``mu`` or ``a``, eccentricity outside [0, 1),
        or non-finite elements.
    """
    _check_mu(mu)
    elements = np.array([a, e, i_deg, raan_deg, argp_deg, nu_deg], dtype=np.float64)
    if not np.all(np.isfinite(elements)):
        _fail(f"Keplerian elements must be finite, got {elements.tolist()}.")
    if a <= 0.0:
        _fail(f"Semi-major axis must be positive for a closed orbit, got {a!r}.")
    if e < 0.0:
        _fail(f"Eccentricity must be non-negative, got {e!r}.")
    if e >= 1.0:
        _fail(f"Only elliptic orbits (e < 1) are supported, got e = {e!r}.")

    i = i_deg * RAD_PER_DEG
    raan = raan_deg * RAD_PER_DEG
    argp = argp_deg * RAD_PER_DEG
    nu = nu_deg * RAD_PER_DEG

    p = a * (1.0 - e**2)               # semi-latus rectum
    r_mag = p / (1.0 + e * np.cos(nu))

    r_pqw = r_mag * np.array([np.cos(nu), np.sin(nu), 0.0])
    v_pqw = np.sqrt(mu / p) * np.array([-np.sin(nu), e + np.cos(nu), 0.0])

    R = perifocal_to_inertial_matrix(i, raan, argp)
    return np.concatenate([R @ r_pqw, R @ v_pqw])


# ════════════════════════════════════════════════════════════════════════════
#  Cartesian → Keplerian
# ════════════════════════════════════════════════════════════════════════════

def cartesian_to_keplerian(mu: float, state: NDArray) -> NDArray:
    """Convert a Cartesian state to classical Keplerian elements.

    Parameters
    ----------
    mu : float — gravitational parameter [L³/T²]
    state : (6,) array — [x, y, z, vx, vy, vz]

    Returns
    -------
    kepl : (6,) ndarray — (a, e, i, Ω, ω, ν); angles [deg] in [0, 360)

    Raises
    ------
    InvalidOrbitError
        Zero position, rectilinear motion (zero angular momentum),
        non-negative orbital energy (parabolic / hyperbolic), or NaN input.
    """
    _check_mu(mu)
    s = as_state_vector(state)
    if not np.all(np.isfinite(s)):
        _fail(f"Cartesian state must be finite, got {s.tolist()}.")

    r, v = s[:3], s[3:]
    r_mag = np.linalg.norm(r)
    v_mag = np.linalg.norm(v)
    if r_mag < POSITION_TOL:
        _fail("Position vector is zero; orbit is undefined at the body centre.")

    h = np.cross(r, v)
    h_mag = np.linalg.norm(h)
    if h_mag <= PARABOLIC_TOL * r_mag * v_mag or h_mag == 0.0:
        _fail("Angular momentum is zero; rectilinear motion has no Keplerian elements.")

    energy = v_mag**2 / 2.0 - mu / r_mag
    if energy >= 0.0:
        _fail(f"Orbit is not bound (specific energy {energy:.6g} ≥ 0).")

    e_vec = ((v_mag**2 - mu / r_mag) * r - np.dot(r, v) * v) / mu
    e = np.linalg.norm(e_vec)
    if abs(1.0 - e) < PARABOLIC_TOL:
        _fail(f"Orbit is parabolic (e = {e:.9f}).")

    a = -mu / (2.0 * energy)
    inc = np.arccos(np.clip(h[2] / h_mag, -1.0, 1.0))

    n = np.cross([0.0, 0.0, 1.0], h)   # node vector
    n_mag = np.linalg.norm(n)

    circular = e < ECC_TOL
    equatorial = inc < INC_TOL or inc > np.pi - INC_TOL
    # Retrograde equatorial orbits measure longitudes in the opposite sense
    sense = 1.0 if inc < np.pi / 2.0 else -1.0

    if equatorial:
        raan = 0.0
    else:
        raan = np.arccos(np.clip(n[0] / n_mag, -1.0, 1.0))
        if n[1] < 0.0:
            raan = 2.0 * np.pi - raan

    if circular:
        argp = 0.0
        if equatorial:
            nu = np.arctan2(sense * r[1], r[0])
        else:
            nu = np.arccos(np.clip(np.dot(n, r) / (n_mag * r_mag), -1.0, 1.0))
            if r[2] < 0.0:
                nu = 2.0 * np.pi - nu
    else:
        if equatorial:
            argp = np.arctan2(sense * e_vec[1], e_vec[0])
        else:
            argp = np.arccos(np.clip(np.dot(n, e_vec) / (n_mag * e), -1.0, 1.0))
            if e_vec[2] < 0.0:
                argp = 2.0 * np.pi - argp
        nu = np.arccos(np.clip(np.dot(e_vec, r) / (e * r_mag), -1.0, 1.0))
        if np.dot(r, v) < 0.0:
            nu = 2.0 * np.pi - nu

    return np.array([
        a, e,
        wrap_to_360(inc * DEG_PER_RAD),
        wrap_to_360(raan * DEG_PER_RAD),
        wrap_to_360(argp * DEG_PER_RAD),
        wrap_to_360(nu * DEG_PER_RAD),
    ])
