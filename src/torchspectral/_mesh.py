"""Mesh tensorclass describing the spectral discretization of an element."""

from __future__ import annotations

from typing import Sequence, Union

import torch
from tensordict import tensorclass
from torch import Tensor

from torchspectral._basis import Basis, Quadrature


@tensorclass
class Mesh:
    """Number of points, basis and quadrature of a spectral element.

    Only the fields below are read by spectral operations; the geometry
    of the element lives elsewhere.

    Attributes
    ----------
    extents : Tensor
        Number of collocation points per dimension, shape (dim,), int64.
    basis : Basis
        Basis used in every dimension.
    quadrature : Quadrature
        Quadrature used in every dimension.
    """

    extents: Tensor
    basis: Basis
    quadrature: Quadrature

    @property
    def dim(self) -> int:
        """Number of dimensions."""
        return self.extents.shape[-1]

    def extent(self, dimension: int = 0) -> int:
        """Number of collocation points along ``dimension``."""
        if not 0 <= dimension < self.dim:
            raise IndexError(
                f"dimension must be in [0, {self.dim}), got {dimension}"
            )
        return int(self.extents[dimension])

    @property
    def number_of_grid_points(self) -> int:
        """Total number of grid points of the tensor-product grid."""
        return int(torch.prod(self.extents))


def mesh(
    extents: Union[int, Sequence[int], Tensor],
    basis: Union[Basis, str],
    quadrature: Union[Quadrature, str],
) -> Mesh:
    """Create a :class:`Mesh`.

    Parameters
    ----------
    extents : int, sequence of int, or Tensor
        Number of collocation points per dimension. An int gives a 1D mesh.
    basis : Basis or str
        Basis tag, e.g. ``"Legendre"``.
    quadrature : Quadrature or str
        Quadrature tag, e.g. ``"GaussLobatto"``.

    Returns
    -------
    Mesh
        The mesh descriptor. Tags are stored as given; they are validated
        when a spectral quantity is requested.

    Examples
    --------
    >>> m = mesh(4, Basis.LEGENDRE, Quadrature.GAUSS_LOBATTO)
    >>> m.extent(0)
    4
    """
    if isinstance(extents, int):
        extents = [extents]
    extents = torch.as_tensor(extents, dtype=torch.int64).reshape(-1)

    return Mesh(
        extents=extents,
        basis=basis,
        quadrature=quadrature,
        batch_size=[],
    )
