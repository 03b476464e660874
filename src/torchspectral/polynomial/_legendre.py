"""Legendre polynomial evaluation for spectral bases."""

from typing import Iterator, Union

import torch
from torch import Tensor


def _check_degree(degree: int) -> None:
    if degree < 0:
        raise ValueError(f"degree must be non-negative, got {degree}")


def _as_tensor(x: Union[float, Tensor]) -> Tensor:
    if isinstance(x, Tensor):
        return x
    return torch.tensor(x, dtype=torch.float64)


def _legendre_recurrence(x: Tensor, degree: int) -> Iterator[Tensor]:
    # Yields P_0(x), ..., P_degree(x) from
    # (k+1) P_{k+1} = (2k+1) x P_k - k P_{k-1}
    p_previous = torch.ones_like(x)
    yield p_previous
    if degree == 0:
        return

    p = x.clone()
    yield p
    for k in range(1, degree):
        p_previous, p = p, ((2 * k + 1) * x * p - k * p_previous) / (k + 1)
        yield p


def legendre_polynomial_p_values(
    degree: int,
    x: Union[float, Tensor],
) -> Tensor:
    """Evaluate the Legendre polynomial P_degree at x.

    Parameters
    ----------
    degree : int
        Polynomial degree (zero-indexed basis function number).
    x : float or Tensor
        Evaluation points.

    Returns
    -------
    Tensor
        P_degree(x), same shape as x.

    Raises
    ------
    ValueError
        If degree < 0.
    """
    _check_degree(degree)

    for p in _legendre_recurrence(_as_tensor(x), degree):
        pass

    return p


def legendre_polynomial_p_normalization_square(degree: int) -> float:
    """Integral of P_degree(x)^2 over [-1, 1], i.e. 2 / (2*degree + 1)."""
    _check_degree(degree)

    return 2.0 / (2 * degree + 1)


def legendre_polynomial_p_vandermonde(
    x: Union[float, Tensor],
    degree: int,
) -> Tensor:
    """Matrix of P_0, ..., P_degree evaluated at ``x``.

    Column ``j`` holds P_j at every point, so for the collocation points
    and ``degree = n - 1`` this maps Legendre coefficients to grid values.

    Returns
    -------
    Tensor
        Shape ``x.shape + (degree + 1,)``.

    Examples
    --------
    >>> x = torch.tensor([0.0, 0.5, 1.0], dtype=torch.float64)
    >>> legendre_polynomial_p_vandermonde(x, 2)
    tensor([[ 1.0000,  0.0000, -0.5000],
            [ 1.0000,  0.5000, -0.1250],
            [ 1.0000,  1.0000,  1.0000]], dtype=torch.float64)
    """
    _check_degree(degree)

    return torch.stack(list(_legendre_recurrence(_as_tensor(x), degree)), dim=-1)
