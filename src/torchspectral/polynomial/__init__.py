"""Basis-function evaluation for spectral bases.

Legendre
--------
legendre_polynomial_p_values
    Value of P_k at arbitrary points.
legendre_polynomial_p_normalization_square
    Integral of P_k^2 over [-1, 1].
legendre_polynomial_p_vandermonde
    Matrix of P_0, ..., P_k at arbitrary points.
"""

from torchspectral.polynomial._legendre import (
    legendre_polynomial_p_normalization_square,
    legendre_polynomial_p_values,
    legendre_polynomial_p_vandermonde,
)

__all__ = [
    "legendre_polynomial_p_normalization_square",
    "legendre_polynomial_p_values",
    "legendre_polynomial_p_vandermonde",
]
