"""
Collocation nodes and quadrature weights on the reference interval [-1, 1].

Node/weight computation:
    gauss_legendre_nodes_weights, gauss_lobatto_legendre_nodes_weights
"""

from torchspectral.quadrature._nodes import (
    gauss_legendre_nodes_weights,
    gauss_lobatto_legendre_nodes_weights,
)

__all__ = [
    "gauss_legendre_nodes_weights",
    "gauss_lobatto_legendre_nodes_weights",
]
