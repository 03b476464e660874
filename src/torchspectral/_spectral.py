"""Spectral quantities for a basis, quadrature and number of points.

Every function accepts either ``(basis, quadrature, num_points)`` or a
:class:`Mesh`, whose basis, quadrature and extent along ``dimension`` are
used instead. Quantities are served from ``cache`` (the process default
cache when omitted); the returned tensors are shared and must not be
modified in place.
"""

from typing import Optional, Sequence, Union, overload

from torch import Tensor

from torchspectral._basis import Basis, Quadrature
from torchspectral._cache import SpectralCache, default_cache
from torchspectral._generators import GeneratorKind
from torchspectral._interpolation import compute_interpolation_matrix
from torchspectral._mesh import Mesh
from torchspectral._mesh_dispatch import resolve_arguments
from torchspectral._variant import variant_for_basis

BasisOrMesh = Union[Basis, str, Mesh]


def _cached(
    kind: GeneratorKind,
    basis_or_mesh: BasisOrMesh,
    quadrature,
    num_points,
    dimension: int,
    cache: Optional[SpectralCache],
):
    variant, n = resolve_arguments(
        basis_or_mesh, quadrature, num_points, dimension
    )
    if cache is None:
        cache = default_cache()
    return cache.get(variant.basis, variant.quadrature, kind, n)


@overload
def collocation_points(
    basis: Union[Basis, str],
    quadrature: Union[Quadrature, str],
    num_points: int,
    *,
    cache: Optional[SpectralCache] = None,
) -> Tensor:
    """Signature 1: explicit basis, quadrature and number of points."""
    ...


@overload
def collocation_points(
    mesh: Mesh,
    *,
    dimension: int = 0,
    cache: Optional[SpectralCache] = None,
) -> Tensor:
    """Signature 2: mesh descriptor."""
    ...


def collocation_points(
    basis_or_mesh: BasisOrMesh,
    quadrature: Optional[Union[Quadrature, str]] = None,
    num_points: Optional[int] = None,
    *,
    dimension: int = 0,
    cache: Optional[SpectralCache] = None,
) -> Tensor:
    """Collocation points on [-1, 1], shape (num_points,), ascending.

    Returns
    -------
    Tensor
        Cache entry shared with every other caller. Do not modify it in
        place; ``clone()`` it first.

    Examples
    --------
    >>> collocation_points(Basis.LEGENDRE, Quadrature.GAUSS_LOBATTO, 4)
    tensor([-1.0000, -0.4472,  0.4472,  1.0000], dtype=torch.float64)
    """
    return _cached(
        GeneratorKind.COLLOCATION_POINTS_AND_WEIGHTS,
        basis_or_mesh,
        quadrature,
        num_points,
        dimension,
        cache,
    )[0]


@overload
def quadrature_weights(
    basis: Union[Basis, str],
    quadrature: Union[Quadrature, str],
    num_points: int,
    *,
    cache: Optional[SpectralCache] = None,
) -> Tensor:
    """Signature 1: explicit basis, quadrature and number of points."""
    ...


@overload
def quadrature_weights(
    mesh: Mesh,
    *,
    dimension: int = 0,
    cache: Optional[SpectralCache] = None,
) -> Tensor:
    """Signature 2: mesh descriptor."""
    ...


def quadrature_weights(
    basis_or_mesh: BasisOrMesh,
    quadrature: Optional[Union[Quadrature, str]] = None,
    num_points: Optional[int] = None,
    *,
    dimension: int = 0,
    cache: Optional[SpectralCache] = None,
) -> Tensor:
    """Quadrature weights of the collocation points, shape (num_points,).

    The weights are positive and sum to 2, the length of [-1, 1].

    Returns
    -------
    Tensor
        Cache entry shared with every other caller. Do not modify it in
        place; ``clone()`` it first.
    """
    return _cached(
        GeneratorKind.COLLOCATION_POINTS_AND_WEIGHTS,
        basis_or_mesh,
        quadrature,
        num_points,
        dimension,
        cache,
    )[1]


@overload
def barycentric_weights(
    basis: Union[Basis, str],
    quadrature: Union[Quadrature, str],
    num_points: int,
    *,
    cache: Optional[SpectralCache] = None,
) -> Tensor:
    """Signature 1: explicit basis, quadrature and number of points."""
    ...


@overload
def barycentric_weights(
    mesh: Mesh,
    *,
    dimension: int = 0,
    cache: Optional[SpectralCache] = None,
) -> Tensor:
    """Signature 2: mesh descriptor."""
    ...


def barycentric_weights(
    basis_or_mesh: BasisOrMesh,
    quadrature: Optional[Union[Quadrature, str]] = None,
    num_points: Optional[int] = None,
    *,
    dimension: int = 0,
    cache: Optional[SpectralCache] = None,
) -> Tensor:
    """Barycentric weights of the collocation points, shape (num_points,).

    Returns
    -------
    Tensor
        Cache entry shared with every other caller. Do not modify it in
        place; ``clone()`` it first.
    """
    return _cached(
        GeneratorKind.BARYCENTRIC_WEIGHTS,
        basis_or_mesh,
        quadrature,
        num_points,
        dimension,
        cache,
    )


@overload
def differentiation_matrix(
    basis: Union[Basis, str],
    quadrature: Union[Quadrature, str],
    num_points: int,
    *,
    cache: Optional[SpectralCache] = None,
) -> Tensor:
    """Signature 1: explicit basis, quadrature and number of points."""
    ...


@overload
def differentiation_matrix(
    mesh: Mesh,
    *,
    dimension: int = 0,
    cache: Optional[SpectralCache] = None,
) -> Tensor:
    """Signature 2: mesh descriptor."""
    ...


def differentiation_matrix(
    basis_or_mesh: BasisOrMesh,
    quadrature: Optional[Union[Quadrature, str]] = None,
    num_points: Optional[int] = None,
    *,
    dimension: int = 0,
    cache: Optional[SpectralCache] = None,
) -> Tensor:
    """Spectral differentiation matrix D, shape (num_points, num_points).

    ``D @ f`` is the derivative of the interpolating polynomial of ``f``
    evaluated at the collocation points. Rows sum to zero.

    Returns
    -------
    Tensor
        Cache entry shared with every other caller. Do not modify it in
        place; ``clone()`` it first.

    Examples
    --------
    >>> x = collocation_points("Legendre", "GaussLobatto", 4)
    >>> D = differentiation_matrix("Legendre", "GaussLobatto", 4)
    >>> torch.allclose(D @ x**3, 3 * x**2)
    True
    """
    return _cached(
        GeneratorKind.DIFFERENTIATION_MATRIX,
        basis_or_mesh,
        quadrature,
        num_points,
        dimension,
        cache,
    )


@overload
def spectral_to_grid_points_matrix(
    basis: Union[Basis, str],
    quadrature: Union[Quadrature, str],
    num_points: int,
    *,
    cache: Optional[SpectralCache] = None,
) -> Tensor:
    """Signature 1: explicit basis, quadrature and number of points."""
    ...


@overload
def spectral_to_grid_points_matrix(
    mesh: Mesh,
    *,
    dimension: int = 0,
    cache: Optional[SpectralCache] = None,
) -> Tensor:
    """Signature 2: mesh descriptor."""
    ...


def spectral_to_grid_points_matrix(
    basis_or_mesh: BasisOrMesh,
    quadrature: Optional[Union[Quadrature, str]] = None,
    num_points: Optional[int] = None,
    *,
    dimension: int = 0,
    cache: Optional[SpectralCache] = None,
) -> Tensor:
    """Vandermonde matrix V[i, j] = Phi_j(x_i), shape (num_points, num_points).

    Maps spectral coefficients to values at the collocation points.

    Returns
    -------
    Tensor
        Cache entry shared with every other caller. Do not modify it in
        place; ``clone()`` it first.
    """
    return _cached(
        GeneratorKind.SPECTRAL_TO_GRID_POINTS_MATRIX,
        basis_or_mesh,
        quadrature,
        num_points,
        dimension,
        cache,
    )


@overload
def grid_points_to_spectral_matrix(
    basis: Union[Basis, str],
    quadrature: Union[Quadrature, str],
    num_points: int,
    *,
    cache: Optional[SpectralCache] = None,
) -> Tensor:
    """Signature 1: explicit basis, quadrature and number of points."""
    ...


@overload
def grid_points_to_spectral_matrix(
    mesh: Mesh,
    *,
    dimension: int = 0,
    cache: Optional[SpectralCache] = None,
) -> Tensor:
    """Signature 2: mesh descriptor."""
    ...


def grid_points_to_spectral_matrix(
    basis_or_mesh: BasisOrMesh,
    quadrature: Optional[Union[Quadrature, str]] = None,
    num_points: Optional[int] = None,
    *,
    dimension: int = 0,
    cache: Optional[SpectralCache] = None,
) -> Tensor:
    r"""Inverse of the Vandermonde matrix, shape (num_points, num_points).

    Maps values at the collocation points to spectral coefficients.

    Notes
    -----
    For Gauss quadrature the inverse is computed analytically,
    :math:`\mathcal{V}^{-1}_{ij} = \mathcal{V}_{ji} w_j / \gamma_i`, where
    :math:`\gamma_i` is the normalization square of basis function ``i``.
    Other quadratures invert the Vandermonde matrix numerically.

    Returns
    -------
    Tensor
        Cache entry shared with every other caller. Do not modify it in
        place; ``clone()`` it first.
    """
    return _cached(
        GeneratorKind.GRID_POINTS_TO_SPECTRAL_MATRIX,
        basis_or_mesh,
        quadrature,
        num_points,
        dimension,
        cache,
    )


@overload
def linear_filter_matrix(
    basis: Union[Basis, str],
    quadrature: Union[Quadrature, str],
    num_points: int,
    *,
    cache: Optional[SpectralCache] = None,
) -> Tensor:
    """Signature 1: explicit basis, quadrature and number of points."""
    ...


@overload
def linear_filter_matrix(
    mesh: Mesh,
    *,
    dimension: int = 0,
    cache: Optional[SpectralCache] = None,
) -> Tensor:
    """Signature 2: mesh descriptor."""
    ...


def linear_filter_matrix(
    basis_or_mesh: BasisOrMesh,
    quadrature: Optional[Union[Quadrature, str]] = None,
    num_points: Optional[int] = None,
    *,
    dimension: int = 0,
    cache: Optional[SpectralCache] = None,
) -> Tensor:
    r"""Projector onto the constant and linear modes, shape (num_points, num_points).

    Computes :math:`\mathcal{V} \cdot \mathrm{diag}(1, 1, 0, \ldots) \cdot
    \mathcal{V}^{-1}`, the product of the first two columns of the
    Vandermonde matrix with the first two rows of its inverse. The
    matrix is idempotent.

    Returns
    -------
    Tensor
        Cache entry shared with every other caller. Do not modify it in
        place; ``clone()`` it first.
    """
    return _cached(
        GeneratorKind.LINEAR_FILTER_MATRIX,
        basis_or_mesh,
        quadrature,
        num_points,
        dimension,
        cache,
    )


@overload
def interpolation_matrix(
    basis: Union[Basis, str],
    quadrature: Union[Quadrature, str],
    num_points: int,
    target_points: Union[Sequence[float], Tensor],
    *,
    cache: Optional[SpectralCache] = None,
) -> Tensor:
    """Signature 1: explicit basis, quadrature and number of points."""
    ...


@overload
def interpolation_matrix(
    mesh: Mesh,
    target_points: Union[Sequence[float], Tensor],
    *,
    dimension: int = 0,
    cache: Optional[SpectralCache] = None,
) -> Tensor:
    """Signature 2: mesh descriptor."""
    ...


def interpolation_matrix(
    basis_or_mesh: BasisOrMesh,
    *args,
    dimension: int = 0,
    cache: Optional[SpectralCache] = None,
) -> Tensor:
    """Matrix interpolating grid values to ``target_points``.

    Parameters
    ----------
    basis_or_mesh : Basis, str or Mesh
        Basis tag, followed by ``quadrature``, ``num_points`` and
        ``target_points``; or a mesh, followed by ``target_points``.
    dimension : int
        Mesh dimension whose extent is used.
    cache : SpectralCache, optional
        Cache holding the collocation points and barycentric weights.

    Returns
    -------
    Tensor
        Shape (len(target_points), num_points). Not cached, since it
        depends on the targets.

    Raises
    ------
    RangeError
        If the number of points is outside the supported range.

    Examples
    --------
    >>> x = collocation_points("Legendre", "Gauss", 5)
    >>> I = interpolation_matrix("Legendre", "Gauss", 5, [0.25, 0.5])
    >>> I @ x**2
    tensor([0.0625, 0.2500], dtype=torch.float64)
    """
    if isinstance(basis_or_mesh, Mesh):
        if len(args) != 1:
            raise TypeError("expected mesh and target_points")
        (target_points,) = args
        quadrature = num_points = None
    else:
        if len(args) != 3:
            raise TypeError(
                "expected basis, quadrature, num_points and target_points"
            )
        quadrature, num_points, target_points = args

    variant, n = resolve_arguments(
        basis_or_mesh, quadrature, num_points, dimension
    )
    if cache is None:
        cache = default_cache()
    n = cache.check_number_of_points(variant, n)

    x = cache.get(
        variant.basis,
        variant.quadrature,
        GeneratorKind.COLLOCATION_POINTS_AND_WEIGHTS,
        n,
    )[0]
    w = cache.get(
        variant.basis, variant.quadrature, GeneratorKind.BARYCENTRIC_WEIGHTS, n
    )
    return compute_interpolation_matrix(x, w, target_points)


def basis_function_value(
    basis: Union[Basis, str],
    k: int,
    x: Union[float, Tensor],
) -> Tensor:
    """Value of the zero-indexed basis function ``k`` of ``basis`` at ``x``."""
    return variant_for_basis(basis).basis_function_values(k, x)


def basis_function_normalization_square(
    basis: Union[Basis, str],
    k: int,
) -> float:
    """Integral over [-1, 1] of the square of basis function ``k``."""
    return variant_for_basis(basis).basis_function_normalization_square(k)

