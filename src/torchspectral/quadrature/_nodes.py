"""Node and weight computation for Legendre quadrature rules."""

from typing import Optional, Tuple

import torch
from torch import Tensor

from torchspectral.polynomial._legendre import legendre_polynomial_p_values


def gauss_legendre_nodes_weights(
    n: int,
    dtype: torch.dtype = torch.float64,
    device: Optional[torch.device] = None,
) -> Tuple[Tensor, Tensor]:
    """
    Compute Legendre-Gauss nodes and weights on [-1, 1].

    Uses the Golub-Welsch algorithm (eigenvalues of symmetric tridiagonal matrix).

    Parameters
    ----------
    n : int
        Number of quadrature points.
    dtype : torch.dtype
        Data type for output tensors.
    device : torch.device, optional
        Device for output tensors.

    Returns
    -------
    nodes : Tensor
        Quadrature nodes, shape (n,), sorted ascending. The endpoints
        -1 and 1 are never nodes.
    weights : Tensor
        Quadrature weights, shape (n,), summing to 2.

    Raises
    ------
    ValueError
        If n < 1.

    Notes
    -----
    Legendre-Gauss quadrature is exact for polynomials of degree <= 2n-1.

    The algorithm constructs the symmetric tridiagonal Jacobi matrix for
    Legendre polynomials and computes its eigenvalues (nodes) and
    eigenvectors (used to compute weights).

    References
    ----------
    Golub, G. H., & Welsch, J. H. (1969). Calculation of Gauss quadrature rules.
    Mathematics of Computation, 23(106), 221-230.
    """
    if n < 1:
        raise ValueError(f"n must be at least 1, got {n}")

    if n == 1:
        return (
            torch.tensor([0.0], dtype=dtype, device=device),
            torch.tensor([2.0], dtype=dtype, device=device),
        )

    # For Legendre: diagonal = 0, off-diagonal[k] = k / sqrt(4k^2 - 1)
    k = torch.arange(1, n, dtype=dtype, device=device)
    off_diag = k / torch.sqrt(4 * k**2 - 1)

    T = torch.diag(off_diag, diagonal=1) + torch.diag(off_diag, diagonal=-1)

    # Eigenvalues are nodes, first components of eigenvectors give weights
    eigenvalues, eigenvectors = torch.linalg.eigh(T)

    nodes = eigenvalues
    weights = 2 * eigenvectors[0, :] ** 2

    sorted_idx = torch.argsort(nodes)
    nodes = nodes[sorted_idx]
    weights = weights[sorted_idx]

    # The rule is symmetric about the origin
    nodes = (nodes - nodes.flip(0)) / 2
    weights = (weights + weights.flip(0)) / 2

    return nodes, weights


def gauss_lobatto_legendre_nodes_weights(
    n: int,
    dtype: torch.dtype = torch.float64,
    device: Optional[torch.device] = None,
) -> Tuple[Tensor, Tensor]:
    r"""
    Compute Legendre-Gauss-Lobatto nodes and weights on [-1, 1].

    Parameters
    ----------
    n : int
        Number of quadrature points, including both endpoints.
    dtype : torch.dtype
        Data type for output tensors.
    device : torch.device, optional
        Device for output tensors.

    Returns
    -------
    nodes : Tensor
        Quadrature nodes, shape (n,), sorted ascending from -1 to 1.
    weights : Tensor
        Quadrature weights, shape (n,), summing to 2.

    Raises
    ------
    ValueError
        If n < 2.

    Notes
    -----
    Legendre-Gauss-Lobatto quadrature is exact for polynomials of degree
    <= 2n-3.

    The interior nodes are the roots of :math:`P'_{n-1}`, which coincide
    with the Gauss-Jacobi nodes for :math:`\alpha = \beta = 1`. They are
    computed with the Golub-Welsch algorithm on the Jacobi matrix

    - diagonal = 0
    - off-diagonal[k] = sqrt(k (k + 2) / ((2k + 1) (2k + 3)))

    and the weights follow from

    .. math::

        w_i = \frac{2}{n (n - 1) P_{n-1}(x_i)^2}

    Examples
    --------
    >>> nodes, weights = gauss_lobatto_legendre_nodes_weights(4)
    >>> # nodes = [-1, -1/sqrt(5), 1/sqrt(5), 1], weights = [1/6, 5/6, 5/6, 1/6]
    """
    if n < 2:
        raise ValueError(f"n must be at least 2, got {n}")

    num_interior = n - 2

    if num_interior == 0:
        interior = torch.empty(0, dtype=dtype, device=device)
    elif num_interior == 1:
        interior = torch.zeros(1, dtype=dtype, device=device)
    else:
        k = torch.arange(1, num_interior, dtype=dtype, device=device)
        off_diag = torch.sqrt(k * (k + 2) / ((2 * k + 1) * (2 * k + 3)))

        T = torch.diag(off_diag, diagonal=1) + torch.diag(
            off_diag, diagonal=-1
        )

        interior = torch.sort(torch.linalg.eigvalsh(T)).values
        interior = (interior - interior.flip(0)) / 2

    one = torch.ones(1, dtype=dtype, device=device)
    nodes = torch.cat([-one, interior, one])

    degree = n - 1
    p = legendre_polynomial_p_values(degree, nodes)
    weights = 2 / (n * (n - 1) * p**2)

    return nodes, weights
