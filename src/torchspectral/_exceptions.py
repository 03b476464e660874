"""Exception hierarchy for spectral quantities."""


class SpectralError(Exception):
    """Base class for errors raised by spectral operations."""

    pass


class RangeError(SpectralError, ValueError):
    """Requested number of collocation points is outside the supported range.

    Raised before any computation takes place, so the cache is left
    untouched.
    """

    pass


class UnsupportedCombinationError(SpectralError):
    """A (basis, quadrature) pair has no registered implementation."""

    pass


class SpectralWarning(UserWarning):
    """Warning for numerical issues (e.g., an ill-conditioned Vandermonde matrix)."""

    pass
