"""
propcov.orbit_state — Dual-Representation Orbital State
========================================================

``OrbitState`` holds one spacecraft state relative to a central body and
exposes it as either a Cartesian 6-vector or classical Keplerian elements.

The Cartesian state is the only thing stored.  Keplerian elements are
recomputed from it on every read using the *current* gravitational
parameter, so they can never go stale.  Changing ``mu`` does not rescale the
stored state: set ``mu`` first when the two must agree.

Angles are radians at this interface.  The element conversion underneath
(:mod:`propcov.conversion`) works in degrees; the radians ↔ degrees step
happens here and nowhere else.
"""

import copy
import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from .conversion import keplerian_to_cartesian, cartesian_to_keplerian
from .exceptions import InvariantViolationError
from .utils import (
    MU_EARTH_KM, DEFAULT_CARTESIAN_STATE,
    DEG_PER_RAD, RAD_PER_DEG,
    as_state_vector,
)

logger = logging.getLogger(__name__)


# ════════════════════════════════════════════════════════════════════════════
#  Value Types
# ════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class KeplerianElements:
    """Classical orbital elements, angles in radians.

    Parameters
    ----------
    a : float — semi-major axis [km, or the length unit of mu]
    e : float — eccentricity
    i : float — inclination [rad]
    raan : float — right ascension of the ascending node [rad]
    argp : float — argument of periapsis [rad]
    nu : float — true anomaly [rad]
    """
    a: float
    e: float
    i: float
    raan: float
    argp: float
    nu: float

    def as_vector(self) -> NDArray:
        """Elements packed as (a, e, i, Ω, ω, ν)."""
        return np.array([self.a, self.e, self.i, self.raan, self.argp, self.nu],
                        dtype=np.float64)

    @classmethod
    def from_vector(cls, kepl) -> "KeplerianElements":
        k = np.asarray(kepl, dtype=np.float64).reshape(-1)
        if k.shape != (6,):
            raise ValueError(f"Expected 6 Keplerian elements, got shape {np.shape(kepl)}.")
        return cls(*(float(x) for x in k))


@dataclass(frozen=True)
class StateTolerance:
    """Comparison policy for :meth:`OrbitState.equals`.

    Two states match when every Cartesian component satisfies
    ``|a - b| <= atol + rtol * max(|a|, |b|)``, which is symmetric in the
    two states.  The default (both zero) is exact component-wise equality.
    """
    rtol: float = 0.0
    atol: float = 0.0

    def __post_init__(self):
        tols = np.array([self.rtol, self.atol], dtype=np.float64)
        if not (np.all(np.isfinite(tols)) and np.all(tols >= 0.0)):
            raise ValueError(
                f"Tolerances must be finite and non-negative, got rtol={self.rtol}, atol={self.atol}."
            )

    def match(self, a: NDArray, b: NDArray) -> bool:
        if self.rtol == 0.0 and self.atol == 0.0:
            return bool(np.array_equal(a, b))
        scale = np.maximum(np.abs(a), np.abs(b))
        return bool(np.all(np.abs(a - b) <= self.atol + self.rtol * scale))


EXACT = StateTolerance()


def _check_mu(mu: float) -> float:
    mu = float(mu)
    if not np.isfinite(mu) or mu <= 0.0:
        logger.debug("rejected gravitational parameter %r", mu)
        raise InvariantViolationError(
            f"Gravitational parameter must be positive and finite, got {mu!r}."
        )
    return mu


# ════════════════════════════════════════════════════════════════════════════
#  OrbitState
# ════════════════════════════════════════════════════════════════════════════

class OrbitState:
    """Spacecraft orbital state stored as Cartesian position and velocity.

    Parameters
    ----------
    cartesian_state : (6,) array or None — [x, y, z, vx, vy, vz];
        ``None`` gives the nominal orbit ``DEFAULT_CARTESIAN_STATE``
    mu : float — gravitational parameter, same length/time units as the state
        (default Earth, km³/s²)

    Not safe for concurrent mutation; guard shared instances externally.
    """

    __hash__ = None  # mutable

    def __init__(self, cartesian_state: NDArray | None = None,
                 mu: float = MU_EARTH_KM):
        self._mu = _check_mu(mu)
        if cartesian_state is None:
            cartesian_state = DEFAULT_CARTESIAN_STATE
        self._state = as_state_vector(cartesian_state)

    @classmethod
    def from_keplerian(cls, a: float, e: float, i: float,
                       raan: float, argp: float, nu: float,
                       mu: float = MU_EARTH_KM) -> "OrbitState":
        """Build a state from Keplerian elements (angles in rad)."""
        orbit = cls(mu=mu)
        orbit.set_keplerian(a, e, i, raan, argp, nu)
        return orbit

    @classmethod
    def from_cartesian(cls, cart: NDArray, mu: float = MU_EARTH_KM) -> "OrbitState":
        return cls(cartesian_state=cart, mu=mu)

    # ── setters ─────────────────────────────────────────────────────────────

    def set_keplerian(self, a: float, e: float, i: float,
                      raan: float, argp: float, nu: float) -> None:
        """Set the state from Keplerian elements.

        Parameters
        ----------
        a : float — semi-major axis, units consistent with mu
        e : float — eccentricity (0 ≤ e < 1)
        i, raan, argp, nu : float — inclination, RAAN, argument of
            periapsis and true anomaly [rad]

        Raises
        ------
        InvalidOrbitError
            Elements do not describe a closed orbit.
        """
        self._state = keplerian_to_cartesian(
            self._mu, a, e,
            i * DEG_PER_RAD, raan * DEG_PER_RAD,
            argp * DEG_PER_RAD, nu * DEG_PER_RAD,
        )
        logger.debug("state set from Keplerian elements a=%g e=%g", a, e)

    def set_keplerian_vector(self, kepl) -> None:
        """Set the state from a packed (a, e, i, Ω, ω, ν) vector, angles in rad.

        ``kepl`` may also be a :class:`KeplerianElements`.
        """
        if not isinstance(kepl, KeplerianElements):
            kepl = KeplerianElements.from_vector(kepl)
        self.set_keplerian(kepl.a, kepl.e, kepl.i, kepl.raan, kepl.argp, kepl.nu)

    def set_cartesian(self, cart: NDArray) -> None:
        """Store a Cartesian state verbatim (units consistent with mu)."""
        self._state = as_state_vector(cart)
        logger.debug("state set from Cartesian vector")

    def set_gravitational_parameter(self, mu: float) -> None:
        """Replace mu.  The stored Cartesian state is left untouched."""
        self._mu = _check_mu(mu)
        logger.debug("gravitational parameter set to %g", self._mu)

    # ── getters ─────────────────────────────────────────────────────────────

    @property
    def gravitational_parameter(self) -> float:
        return self._mu

    @property
    def position(self) -> NDArray:
        return self._state[:3].copy()

    @property
    def velocity(self) -> NDArray:
        return self._state[3:].copy()

    def get_cartesian(self) -> NDArray:
        """Cartesian state [x, y, z, vx, vy, vz] (a copy)."""
        return self._state.copy()

    def get_keplerian(self) -> NDArray:
        """Keplerian elements (a, e, i, Ω, ω, ν), angles in [rad].

        Derived from the current Cartesian state and current mu on every call.

        Raises
        ------
        InvalidOrbitError
            The stored state is unbound, rectilinear or at the body centre.
        """
        kepl = cartesian_to_keplerian(self._mu, self._state)
        kepl[2:] *= RAD_PER_DEG
        return kepl

    def keplerian_elements(self) -> KeplerianElements:
        """Same as :meth:`get_keplerian`, as a :class:`KeplerianElements`."""
        return KeplerianElements.from_vector(self.get_keplerian())

    # ── comparison / copying ───────────────────────────────────────────────

    def equals(self, other: "OrbitState", tolerance: StateTolerance = EXACT) -> bool:
        """Compare Cartesian states under `tolerance` (exact by default).

        The gravitational parameter is not part of the comparison.
        """
        if not isinstance(other, OrbitState):
            return False
        return tolerance.match(self._state, other._state)

    def __eq__(self, other):
        if not isinstance(other, OrbitState):
            return NotImplemented
        return self.equals(other)

    def clone(self) -> "OrbitState":
        """Independent deep copy."""
        return copy.deepcopy(self)

    def __copy__(self):
        # copies never share the state array
        return self.clone()

    def __repr__(self):
        state = np.array2string(self._state, precision=6, separator=", ")
        return f"OrbitState(cartesian_state={state}, mu={self._mu!r})"
