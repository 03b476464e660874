"""torchspectral: cached spectral-discretization quantities in PyTorch.

Given a basis, a quadrature and a number of collocation points, computes
the collocation points, quadrature weights, differentiation matrix,
transforms between grid values and spectral coefficients, a linear
filter and interpolation matrices. Quantities are computed once per
:class:`SpectralCache` and shared afterwards.

Tags:
    Basis, Quadrature, GeneratorKind, MAXIMUM_NUMBER_OF_POINTS

Spectral quantities:
    collocation_points, quadrature_weights, barycentric_weights,
    differentiation_matrix, spectral_to_grid_points_matrix,
    grid_points_to_spectral_matrix, linear_filter_matrix,
    interpolation_matrix, basis_function_value,
    basis_function_normalization_square

Caching and dispatch:
    SpectralCache, default_cache, Mesh, mesh, SpectralVariant,
    LegendreGauss, LegendreGaussLobatto, get_variant, register_variant

Exceptions:
    SpectralError, RangeError, UnsupportedCombinationError, SpectralWarning
"""

from torchspectral import polynomial, quadrature
from torchspectral._basis import MAXIMUM_NUMBER_OF_POINTS, Basis, Quadrature
from torchspectral._cache import SpectralCache, default_cache
from torchspectral._exceptions import (
    RangeError,
    SpectralError,
    SpectralWarning,
    UnsupportedCombinationError,
)
from torchspectral._generators import GeneratorKind
from torchspectral._interpolation import equal_within_roundoff
from torchspectral._mesh import Mesh, mesh
from torchspectral._spectral import (
    barycentric_weights,
    basis_function_normalization_square,
    basis_function_value,
    collocation_points,
    differentiation_matrix,
    grid_points_to_spectral_matrix,
    interpolation_matrix,
    linear_filter_matrix,
    quadrature_weights,
    spectral_to_grid_points_matrix,
)
from torchspectral._variant import (
    LegendreGauss,
    LegendreGaussLobatto,
    SpectralVariant,
    get_variant,
    register_variant,
    registered_variants,
)

__all__ = [
    # Tags
    "Basis",
    "GeneratorKind",
    "MAXIMUM_NUMBER_OF_POINTS",
    "Quadrature",
    # Spectral quantities
    "barycentric_weights",
    "basis_function_normalization_square",
    "basis_function_value",
    "collocation_points",
    "differentiation_matrix",
    "grid_points_to_spectral_matrix",
    "interpolation_matrix",
    "linear_filter_matrix",
    "quadrature_weights",
    "spectral_to_grid_points_matrix",
    "equal_within_roundoff",
    # Caching and dispatch
    "Mesh",
    "SpectralCache",
    "default_cache",
    "mesh",
    "LegendreGauss",
    "LegendreGaussLobatto",
    "SpectralVariant",
    "get_variant",
    "register_variant",
    "registered_variants",
    # Subpackages
    "polynomial",
    "quadrature",
    # Exceptions
    "RangeError",
    "SpectralError",
    "SpectralWarning",
    "UnsupportedCombinationError",
]

__version__ = "0.1.0"
