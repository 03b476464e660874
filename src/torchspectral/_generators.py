"""Generators for cached spectral quantities.

Every generator has the signature ``generator(cache, variant, n)`` and
requests its prerequisites through ``cache`` so they are shared with
direct callers.
"""

import enum
import math
import warnings
from typing import TYPE_CHECKING, Callable, Dict

import torch
from torch import Tensor

from torchspectral._exceptions import SpectralWarning
from torchspectral._variant import SpectralVariant

if TYPE_CHECKING:
    from torchspectral._cache import SpectralCache


class GeneratorKind(enum.Enum):
    """Kinds of quantities held by a :class:`SpectralCache`."""

    COLLOCATION_POINTS_AND_WEIGHTS = "collocation_points_and_weights"
    BARYCENTRIC_WEIGHTS = "barycentric_weights"
    DIFFERENTIATION_MATRIX = "differentiation_matrix"
    SPECTRAL_TO_GRID_POINTS_MATRIX = "spectral_to_grid_points_matrix"
    GRID_POINTS_TO_SPECTRAL_MATRIX = "grid_points_to_spectral_matrix"
    LINEAR_FILTER_MATRIX = "linear_filter_matrix"


def _request(
    cache: "SpectralCache",
    variant: SpectralVariant,
    kind: GeneratorKind,
    n: int,
):
    return cache.get(variant.basis, variant.quadrature, kind, n)


def _collocation_points(cache, variant, n: int) -> Tensor:
    return _request(
        cache, variant, GeneratorKind.COLLOCATION_POINTS_AND_WEIGHTS, n
    )[0]


def compute_barycentric_weights(x: Tensor) -> Tensor:
    """Barycentric weights for a set of distinct points.

    w_j = 1 / prod_{k != j} (x_j - x_k), accumulated one new point at a
    time (Kopriva, Implementing Spectral Methods for PDEs, Alg. 30).
    Valid for any distinct points.
    """
    n = x.shape[0]
    w = torch.ones_like(x)
    for j in range(1, n):
        w[:j] *= x[:j] - x[j]
        w[j] *= torch.prod(x[j] - x[:j])
    return 1.0 / w


def compute_differentiation_matrix(x: Tensor, w: Tensor) -> Tensor:
    """Differentiation matrix from points and barycentric weights.

    D_ij = w_j / (w_i * (x_i - x_j)) for i != j and
    D_ii = -sum_{j != i} D_ij, so constants differentiate to zero.
    """
    X = x.unsqueeze(1) - x.unsqueeze(0)
    X.fill_diagonal_(1.0)

    D = (w.unsqueeze(0) / w.unsqueeze(1)) / X
    D.fill_diagonal_(0.0)
    D.diagonal().copy_(-D.sum(dim=1))

    return D


def _collocation_points_and_weights_generator(cache, variant, n):
    return variant.collocation_points_and_weights(n)


def _barycentric_weights_generator(cache, variant, n):
    return compute_barycentric_weights(_collocation_points(cache, variant, n))


def _differentiation_matrix_generator(cache, variant, n):
    x = _collocation_points(cache, variant, n)
    w = _request(cache, variant, GeneratorKind.BARYCENTRIC_WEIGHTS, n)
    return compute_differentiation_matrix(x, w)


def _spectral_to_grid_points_matrix_generator(cache, variant, n):
    return variant.vandermonde(_collocation_points(cache, variant, n), n)


def numerical_grid_points_to_spectral_matrix(vandermonde: Tensor) -> Tensor:
    """Invert the Vandermonde matrix with a dense solve."""
    eps = torch.finfo(vandermonde.dtype).eps
    condition_number = torch.linalg.cond(vandermonde).item()
    if not condition_number < 1.0 / math.sqrt(eps):
        warnings.warn(
            f"Vandermonde matrix of size {vandermonde.shape[0]} is "
            f"ill-conditioned (condition number {condition_number:.3e})",
            SpectralWarning,
        )

    return torch.linalg.inv(vandermonde)


def analytic_grid_points_to_spectral_matrix(
    vandermonde: Tensor,
    weights: Tensor,
    normalization_square: Tensor,
) -> Tensor:
    r"""Invert the Vandermonde matrix by orthogonality of the basis.

    .. math::

        \mathcal{V}^{-1}_{ij} = \mathcal{V}_{ji} \frac{w_j}{\gamma_i}

    Exact when the quadrature integrates products of any two basis
    functions of degree < n exactly (Gauss quadrature).
    """
    return (
        vandermonde.transpose(0, 1)
        * weights.unsqueeze(0)
        / normalization_square.unsqueeze(1)
    )


def _grid_points_to_spectral_matrix_generator(cache, variant, n):
    vandermonde = _request(
        cache, variant, GeneratorKind.SPECTRAL_TO_GRID_POINTS_MATRIX, n
    )
    if not variant.analytic_inverse:
        return numerical_grid_points_to_spectral_matrix(vandermonde)

    weights = _request(
        cache, variant, GeneratorKind.COLLOCATION_POINTS_AND_WEIGHTS, n
    )[1]
    normalization_square = torch.tensor(
        [variant.basis_function_normalization_square(k) for k in range(n)],
        dtype=vandermonde.dtype,
        device=vandermonde.device,
    )
    return analytic_grid_points_to_spectral_matrix(
        vandermonde, weights, normalization_square
    )


def _linear_filter_matrix_generator(cache, variant, n):
    # V[:, :2] @ V^{-1}[:2, :] keeps only the constant and linear modes
    num_modes = min(2, n)
    vandermonde = _request(
        cache, variant, GeneratorKind.SPECTRAL_TO_GRID_POINTS_MATRIX, n
    )
    inverse = _request(
        cache, variant, GeneratorKind.GRID_POINTS_TO_SPECTRAL_MATRIX, n
    )
    return vandermonde[:, :num_modes] @ inverse[:num_modes, :]


GENERATORS: Dict[GeneratorKind, Callable] = {
    GeneratorKind.COLLOCATION_POINTS_AND_WEIGHTS: _collocation_points_and_weights_generator,
    GeneratorKind.BARYCENTRIC_WEIGHTS: _barycentric_weights_generator,
    GeneratorKind.DIFFERENTIATION_MATRIX: _differentiation_matrix_generator,
    GeneratorKind.SPECTRAL_TO_GRID_POINTS_MATRIX: _spectral_to_grid_points_matrix_generator,
    GeneratorKind.GRID_POINTS_TO_SPECTRAL_MATRIX: _grid_points_to_spectral_matrix_generator,
    GeneratorKind.LINEAR_FILTER_MATRIX: _linear_filter_matrix_generator,
}
