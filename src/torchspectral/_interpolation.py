"""Barycentric interpolation to arbitrary target points."""

from typing import Optional, Sequence, Union

import torch
from torch import Tensor


def equal_within_roundoff(
    a: Union[float, Tensor],
    b: Union[float, Tensor],
    eps: Optional[float] = None,
    scale: float = 1.0,
) -> Tensor:
    """Elementwise |a - b| <= eps * max(|a|, |b|, scale).

    Parameters
    ----------
    a, b : float or Tensor
        Values to compare. Broadcast against each other.
    eps : float, optional
        Relative tolerance. Defaults to 100 times float64 machine epsilon.
    scale : float
        Lower bound on the magnitude used to scale ``eps``, so values near
        zero are compared absolutely.

    Returns
    -------
    Tensor
        Boolean tensor of the broadcast shape.
    """
    if eps is None:
        eps = 100.0 * torch.finfo(torch.float64).eps

    a = torch.as_tensor(a, dtype=torch.float64)
    b = torch.as_tensor(b, dtype=torch.float64)

    magnitude = torch.clamp(torch.maximum(a.abs(), b.abs()), min=scale)
    return (a - b).abs() <= eps * magnitude


def compute_interpolation_matrix(
    x: Tensor,
    barycentric_weights: Tensor,
    target_points: Union[Sequence[float], Tensor],
) -> Tensor:
    r"""Matrix interpolating values at ``x`` onto ``target_points``.

    Parameters
    ----------
    x : Tensor
        Source collocation points, shape (n,).
    barycentric_weights : Tensor
        Barycentric weights of ``x``, shape (n,).
    target_points : sequence of float or Tensor
        Target abscissas, shape (m,). Any order, repeats allowed.

    Returns
    -------
    Tensor
        Interpolation matrix, shape (m, n).

    Notes
    -----
    Rows use the barycentric formula of the second kind (Kopriva,
    Implementing Spectral Methods for PDEs, Alg. 32):

    .. math::

        I_{kj} = \frac{w_j / (t_k - x_j)}{\sum_l w_l / (t_k - x_l)}

    A target that equals a source point within roundoff gets the one-hot
    row of that point instead.
    """
    targets = torch.as_tensor(target_points, dtype=x.dtype, device=x.device)
    targets = targets.reshape(-1)

    diff = targets.unsqueeze(1) - x.unsqueeze(0)

    matches = equal_within_roundoff(targets.unsqueeze(1), x.unsqueeze(0))
    row_has_match = matches.any(dim=1, keepdim=True)

    safe_diff = torch.where(row_has_match, torch.ones_like(diff), diff)
    interp = barycentric_weights.unsqueeze(0) / safe_diff
    interp = interp / interp.sum(dim=1, keepdim=True)

    return torch.where(row_has_match, matches.to(x.dtype), interp)
