"""Strategy objects for the supported (basis, quadrature) combinations."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Union

from torch import Tensor

from torchspectral._basis import Basis, Quadrature
from torchspectral._exceptions import UnsupportedCombinationError
from torchspectral.polynomial._legendre import (
    legendre_polynomial_p_normalization_square,
    legendre_polynomial_p_values,
    legendre_polynomial_p_vandermonde,
)
from torchspectral.quadrature._nodes import (
    gauss_legendre_nodes_weights,
    gauss_lobatto_legendre_nodes_weights,
)


class SpectralVariant(ABC):
    """Capabilities of one (basis, quadrature) combination.

    Attributes
    ----------
    basis : Basis
        Polynomial family.
    quadrature : Quadrature
        Collocation point placement.
    minimum_number_of_points : int
        Fewest collocation points the quadrature rule admits.
    analytic_inverse : bool
        Whether the grid-to-spectral matrix has a closed form from the
        orthogonality of the basis under this quadrature.
    """

    basis: Basis
    quadrature: Quadrature
    minimum_number_of_points: int = 1
    analytic_inverse: bool = False

    @abstractmethod
    def collocation_points_and_weights(self, n: int) -> Tuple[Tensor, Tensor]:
        """Return the ``n`` collocation points and their quadrature weights."""
        ...

    @abstractmethod
    def basis_function_values(self, k: int, x: Tensor) -> Tensor:
        """Evaluate the zero-indexed basis function ``k`` at ``x``."""
        ...

    @abstractmethod
    def basis_function_normalization_square(self, k: int) -> float:
        """Definite integral of the square of basis function ``k``."""
        ...

    @abstractmethod
    def vandermonde(self, x: Tensor, n: int) -> Tensor:
        """Basis functions 0, ..., n - 1 at ``x``, one per column."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.basis}, {self.quadrature})"


class _Legendre(SpectralVariant):
    basis = Basis.LEGENDRE

    def basis_function_values(self, k: int, x: Tensor) -> Tensor:
        return legendre_polynomial_p_values(k, x)

    def basis_function_normalization_square(self, k: int) -> float:
        return legendre_polynomial_p_normalization_square(k)

    def vandermonde(self, x: Tensor, n: int) -> Tensor:
        return legendre_polynomial_p_vandermonde(x, n - 1)


class LegendreGauss(_Legendre):
    """Legendre basis on the roots of P_n (endpoints excluded)."""

    quadrature = Quadrature.GAUSS
    minimum_number_of_points = 1
    analytic_inverse = True

    def collocation_points_and_weights(self, n: int) -> Tuple[Tensor, Tensor]:
        return gauss_legendre_nodes_weights(n)


class LegendreGaussLobatto(_Legendre):
    """Legendre basis on the roots of (1 - x^2) P'_{n-1} (endpoints included)."""

    quadrature = Quadrature.GAUSS_LOBATTO
    minimum_number_of_points = 2

    def collocation_points_and_weights(self, n: int) -> Tuple[Tensor, Tensor]:
        return gauss_lobatto_legendre_nodes_weights(n)


_VARIANTS: Dict[Tuple[Basis, Quadrature], SpectralVariant] = {}


def register_variant(variant: SpectralVariant) -> SpectralVariant:
    """Add ``variant`` to the lookup table, replacing any previous entry."""
    _VARIANTS[(variant.basis, variant.quadrature)] = variant
    return variant


def get_variant(
    basis: Union[Basis, str],
    quadrature: Union[Quadrature, str],
) -> SpectralVariant:
    """Look up the strategy for a (basis, quadrature) pair.

    Parameters
    ----------
    basis : Basis or str
        Basis tag, e.g. ``Basis.LEGENDRE`` or ``"Legendre"``.
    quadrature : Quadrature or str
        Quadrature tag, e.g. ``Quadrature.GAUSS`` or ``"Gauss"``.

    Returns
    -------
    SpectralVariant
        The registered strategy.

    Raises
    ------
    UnsupportedCombinationError
        If either tag is unknown or the pair has no registered strategy.
    """
    try:
        key = (Basis(basis), Quadrature(quadrature))
    except ValueError:
        raise UnsupportedCombinationError(
            f"Unknown basis/quadrature tags: ({basis!r}, {quadrature!r})"
        ) from None

    try:
        return _VARIANTS[key]
    except KeyError:
        raise UnsupportedCombinationError(
            f"Missing implementation for basis {key[0]} "
            f"with quadrature {key[1]}"
        ) from None


def variant_for_basis(basis: Union[Basis, str]) -> SpectralVariant:
    """Any registered strategy of ``basis``, for quadrature-independent capabilities."""
    try:
        tag = Basis(basis)
    except ValueError:
        raise UnsupportedCombinationError(
            f"Unknown basis tag: {basis!r}"
        ) from None

    for variant in _VARIANTS.values():
        if variant.basis is tag:
            return variant

    raise UnsupportedCombinationError(f"Missing implementation for basis {tag}")


def registered_variants() -> Tuple[SpectralVariant, ...]:
    """All registered strategies, in registration order."""
    return tuple(_VARIANTS.values())


register_variant(LegendreGauss())
register_variant(LegendreGaussLobatto())
