"""Basis and quadrature tags."""

import enum


class Basis(str, enum.Enum):
    """Polynomial family used to represent functions spectrally."""

    LEGENDRE = "Legendre"

    def __str__(self) -> str:
        return self.value


class Quadrature(str, enum.Enum):
    """Placement rule for the collocation points.

    ``GAUSS`` excludes the endpoints of the reference interval,
    ``GAUSS_LOBATTO`` includes both of them.
    """

    GAUSS = "Gauss"
    GAUSS_LOBATTO = "GaussLobatto"

    def __str__(self) -> str:
        return self.value


# Shared upper bound on the number of collocation points. Caches can be
# constructed with a different bound.
MAXIMUM_NUMBER_OF_POINTS = 12
