"""
propcov.exceptions — Error Taxonomy
====================================

Every error raised by the library derives from ``PropcovError``, which is a
``ValueError`` so that existing ``except ValueError`` handlers keep working.
"""


class PropcovError(ValueError):
    """Base class for computation failures raised by propcov."""


class InvalidStateError(PropcovError):
    """A state vector cannot define a nadir frame.

    Raised for a zero-length position, a velocity parallel to the position
    (purely radial motion, including zero velocity), or non-finite components.
    """


class InvalidOrbitError(PropcovError):
    """A Keplerian ↔ Cartesian conversion was asked of a degenerate orbit.

    Covers unbound (parabolic / hyperbolic) orbits, rectilinear motion,
    zero position, non-positive semi-major axis and non-finite elements.
    """


class InvariantViolationError(PropcovError):
    """A value breaks a class invariant (e.g. non-positive mu)."""
