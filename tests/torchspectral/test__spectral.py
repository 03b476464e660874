"""Tests for spectral quantities over every supported basis, quadrature and size."""

import math

import pytest
import torch

from torchspectral import (
    MAXIMUM_NUMBER_OF_POINTS,
    Basis,
    Quadrature,
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
from torchspectral._generators import numerical_grid_points_to_spectral_matrix

LGL = (Basis.LEGENDRE, Quadrature.GAUSS_LOBATTO)
LG = (Basis.LEGENDRE, Quadrature.GAUSS)

ALL_CASES = [
    pytest.param(basis, quadrature, n, id=f"{basis}-{quadrature}-{n}")
    for basis, quadrature, minimum in [
        (Basis.LEGENDRE, Quadrature.GAUSS, 1),
        (Basis.LEGENDRE, Quadrature.GAUSS_LOBATTO, 2),
    ]
    for n in range(minimum, MAXIMUM_NUMBER_OF_POINTS + 1)
]


class TestCollocationPointsAndWeights:
    """Tests for collocation points and quadrature weights."""

    @pytest.mark.parametrize("basis,quadrature,n", ALL_CASES)
    def test_shape_and_dtype(self, cache, basis, quadrature, n):
        x = collocation_points(basis, quadrature, n, cache=cache)
        w = quadrature_weights(basis, quadrature, n, cache=cache)
        assert x.shape == (n,)
        assert w.shape == (n,)
        assert x.dtype == torch.float64
        assert w.dtype == torch.float64

    @pytest.mark.parametrize("basis,quadrature,n", ALL_CASES)
    def test_strictly_increasing(self, cache, basis, quadrature, n):
        x = collocation_points(basis, quadrature, n, cache=cache)
        assert torch.all(x[1:] > x[:-1])
        assert torch.all(x.abs() <= 1.0)

    @pytest.mark.parametrize("basis,quadrature,n", ALL_CASES)
    def test_weights_positive_and_sum_to_two(self, cache, basis, quadrature, n):
        w = quadrature_weights(basis, quadrature, n, cache=cache)
        assert torch.all(w > 0)
        torch.testing.assert_close(
            w.sum(),
            torch.tensor(2.0, dtype=torch.float64),
            atol=1e-13,
            rtol=1e-13,
        )

    @pytest.mark.parametrize("n", range(2, MAXIMUM_NUMBER_OF_POINTS + 1))
    def test_gauss_lobatto_includes_endpoints(self, cache, n):
        x = collocation_points(*LGL, n, cache=cache)
        assert x[0].item() == -1.0
        assert x[-1].item() == 1.0

    @pytest.mark.parametrize("n", range(1, MAXIMUM_NUMBER_OF_POINTS + 1))
    def test_gauss_excludes_endpoints(self, cache, n):
        x = collocation_points(*LG, n, cache=cache)
        assert torch.all(x.abs() < 1.0)

    def test_gauss_lobatto_four_points(self, cache):
        """Four Gauss-Lobatto points are -1, -1/sqrt(5), 1/sqrt(5), 1."""
        x = collocation_points(*LGL, 4, cache=cache)
        w = quadrature_weights(*LGL, 4, cache=cache)
        s = 1 / math.sqrt(5)
        torch.testing.assert_close(
            x, torch.tensor([-1.0, -s, s, 1.0], dtype=torch.float64)
        )
        torch.testing.assert_close(
            w,
            torch.tensor([1 / 6, 5 / 6, 5 / 6, 1 / 6], dtype=torch.float64),
        )

    def test_single_gauss_point(self, cache):
        x = collocation_points(*LG, 1, cache=cache)
        w = quadrature_weights(*LG, 1, cache=cache)
        torch.testing.assert_close(x, torch.tensor([0.0], dtype=torch.float64))
        torch.testing.assert_close(w, torch.tensor([2.0], dtype=torch.float64))

    def test_string_tags(self, cache):
        """Runtime string tags select the same quantities as enum tags."""
        x = collocation_points("Legendre", "GaussLobatto", 5, cache=cache)
        assert x is collocation_points(*LGL, 5, cache=cache)


class TestDifferentiationMatrix:
    """Tests for the spectral differentiation matrix."""

    @pytest.mark.parametrize("basis,quadrature,n", ALL_CASES)
    def test_row_sum_zero(self, cache, basis, quadrature, n):
        D = differentiation_matrix(basis, quadrature, n, cache=cache)
        assert D.shape == (n, n)
        torch.testing.assert_close(
            D.sum(dim=1),
            torch.zeros(n, dtype=torch.float64),
            atol=1e-12,
            rtol=0.0,
        )

    @pytest.mark.parametrize("basis,quadrature,n", ALL_CASES)
    def test_constant_function(self, cache, basis, quadrature, n):
        D = differentiation_matrix(basis, quadrature, n, cache=cache)
        f = torch.full((n,), 3.0, dtype=torch.float64)
        torch.testing.assert_close(
            D @ f, torch.zeros(n, dtype=torch.float64), atol=1e-12, rtol=0.0
        )

    @pytest.mark.parametrize("basis,quadrature,n", ALL_CASES)
    def test_polynomial_exact(self, cache, basis, quadrature, n):
        """Derivatives of x^k are exact for k < n."""
        D = differentiation_matrix(basis, quadrature, n, cache=cache)
        x = collocation_points(basis, quadrature, n, cache=cache)
        for k in range(1, n):
            torch.testing.assert_close(
                D @ x**k, k * x ** (k - 1), atol=1e-10, rtol=1e-10
            )

    def test_cubic_on_four_gauss_lobatto_points(self, cache):
        D = differentiation_matrix(*LGL, 4, cache=cache)
        x = collocation_points(*LGL, 4, cache=cache)
        assert torch.max(torch.abs(D @ x**3 - 3 * x**2)) < 1e-12

    def test_sin_function(self, cache):
        n = MAXIMUM_NUMBER_OF_POINTS
        D = differentiation_matrix(*LGL, n, cache=cache)
        x = collocation_points(*LGL, n, cache=cache)
        torch.testing.assert_close(
            D @ torch.sin(x), torch.cos(x), atol=1e-7, rtol=1e-7
        )


class TestTransformMatrices:
    """Tests for the Vandermonde matrix and its inverse."""

    @pytest.mark.parametrize("basis,quadrature,n", ALL_CASES)
    def test_vandermonde_entries(self, cache, basis, quadrature, n):
        V = spectral_to_grid_points_matrix(basis, quadrature, n, cache=cache)
        x = collocation_points(basis, quadrature, n, cache=cache)
        for j in range(n):
            torch.testing.assert_close(
                V[:, j], basis_function_value(basis, j, x)
            )

    @pytest.mark.parametrize("basis,quadrature,n", ALL_CASES)
    def test_inverse(self, cache, basis, quadrature, n):
        V = spectral_to_grid_points_matrix(basis, quadrature, n, cache=cache)
        V_inv = grid_points_to_spectral_matrix(
            basis, quadrature, n, cache=cache
        )
        identity = torch.eye(n, dtype=torch.float64)
        torch.testing.assert_close(V_inv @ V, identity, atol=1e-12, rtol=0.0)
        torch.testing.assert_close(V @ V_inv, identity, atol=1e-12, rtol=0.0)

    @pytest.mark.parametrize("n", range(1, MAXIMUM_NUMBER_OF_POINTS + 1))
    def test_analytic_matches_numerical_inverse(self, cache, n):
        """Gauss quadrature uses the closed form, which must agree with a dense inverse."""
        V = spectral_to_grid_points_matrix(*LG, n, cache=cache)
        analytic = grid_points_to_spectral_matrix(*LG, n, cache=cache)
        numerical = numerical_grid_points_to_spectral_matrix(V)
        torch.testing.assert_close(analytic, numerical, atol=1e-12, rtol=0.0)

    @pytest.mark.parametrize("n", range(2, MAXIMUM_NUMBER_OF_POINTS + 1))
    def test_spectral_coefficients_of_polynomial(self, cache, n):
        """P_k sampled on the grid transforms to the unit coefficient vector e_k."""
        x = collocation_points(*LGL, n, cache=cache)
        V_inv = grid_points_to_spectral_matrix(*LGL, n, cache=cache)
        for k in range(n):
            expected = torch.zeros(n, dtype=torch.float64)
            expected[k] = 1.0
            torch.testing.assert_close(
                V_inv @ basis_function_value(Basis.LEGENDRE, k, x),
                expected,
                atol=1e-12,
                rtol=0.0,
            )

    def test_normalization_square(self):
        for k in range(6):
            assert basis_function_normalization_square(
                Basis.LEGENDRE, k
            ) == pytest.approx(2 / (2 * k + 1))


class TestLinearFilterMatrix:
    """Tests for the projector onto the constant and linear modes."""

    @pytest.mark.parametrize("basis,quadrature,n", ALL_CASES)
    def test_idempotent(self, cache, basis, quadrature, n):
        F = linear_filter_matrix(basis, quadrature, n, cache=cache)
        torch.testing.assert_close(F @ F, F, atol=1e-12, rtol=0.0)

    @pytest.mark.parametrize("basis,quadrature,n", ALL_CASES)
    def test_preserves_linear_functions(self, cache, basis, quadrature, n):
        F = linear_filter_matrix(basis, quadrature, n, cache=cache)
        x = collocation_points(basis, quadrature, n, cache=cache)
        f = 2.0 - 0.5 * x if n > 1 else torch.full_like(x, 2.0)
        torch.testing.assert_close(F @ f, f, atol=1e-12, rtol=0.0)

    @pytest.mark.parametrize("n", range(3, MAXIMUM_NUMBER_OF_POINTS + 1))
    def test_removes_higher_modes(self, cache, n):
        F = linear_filter_matrix(*LGL, n, cache=cache)
        x = collocation_points(*LGL, n, cache=cache)
        f = basis_function_value(Basis.LEGENDRE, 2, x)
        torch.testing.assert_close(
            F @ f, torch.zeros(n, dtype=torch.float64), atol=1e-12, rtol=0.0
        )

    @pytest.mark.parametrize("n", range(2, MAXIMUM_NUMBER_OF_POINTS + 1))
    def test_rank_two(self, cache, n):
        F = linear_filter_matrix(*LG, n, cache=cache)
        assert torch.linalg.matrix_rank(F).item() == 2


class TestInterpolationMatrix:
    """Tests for interpolation to arbitrary target points."""

    @pytest.mark.parametrize("basis,quadrature,n", ALL_CASES)
    def test_identity_on_collocation_points(
        self, cache, basis, quadrature, n
    ):
        x = collocation_points(basis, quadrature, n, cache=cache)
        interp = interpolation_matrix(basis, quadrature, n, x, cache=cache)
        torch.testing.assert_close(
            interp, torch.eye(n, dtype=torch.float64), atol=0.0, rtol=0.0
        )

    @pytest.mark.parametrize("basis,quadrature,n", ALL_CASES)
    def test_polynomial_exact(self, cache, basis, quadrature, n):
        """Polynomials of degree < n are reproduced at arbitrary targets."""
        generator = torch.Generator().manual_seed(n)
        targets = 2 * torch.rand(7, generator=generator, dtype=torch.float64) - 1
        x = collocation_points(basis, quadrature, n, cache=cache)
        interp = interpolation_matrix(
            basis, quadrature, n, targets, cache=cache
        )
        assert interp.shape == (7, n)

        coefficients = torch.linspace(1.0, -1.0, n, dtype=torch.float64)

        def f(t):
            return sum(c * t**k for k, c in enumerate(coefficients))

        torch.testing.assert_close(
            interp @ f(x), f(targets), atol=1e-11, rtol=1e-11
        )

    def test_rows_sum_to_one(self, cache):
        targets = torch.linspace(-1.5, 1.5, 13, dtype=torch.float64)
        interp = interpolation_matrix(*LG, 6, targets, cache=cache)
        torch.testing.assert_close(
            interp.sum(dim=1),
            torch.ones(13, dtype=torch.float64),
            atol=1e-12,
            rtol=0.0,
        )

    def test_target_on_collocation_point_gives_one_hot_row(self, cache):
        x = collocation_points(*LGL, 5, cache=cache)
        targets = [0.3, x[2].item(), -1.0, 0.3]
        interp = interpolation_matrix(*LGL, 5, targets, cache=cache)

        expected_row = torch.zeros(5, dtype=torch.float64)
        expected_row[2] = 1.0
        torch.testing.assert_close(interp[1], expected_row)

        expected_row = torch.zeros(5, dtype=torch.float64)
        expected_row[0] = 1.0
        torch.testing.assert_close(interp[2], expected_row)

        # Repeated targets give identical rows
        torch.testing.assert_close(interp[0], interp[3])

    def test_target_within_roundoff_of_collocation_point(self, cache):
        x = collocation_points(*LG, 4, cache=cache)
        target = x[1].item() * (1 + 1e-15)
        interp = interpolation_matrix(*LG, 4, [target], cache=cache)
        expected = torch.zeros(1, 4, dtype=torch.float64)
        expected[0, 1] = 1.0
        torch.testing.assert_close(interp, expected)

    def test_python_list_targets(self, cache):
        interp = interpolation_matrix(*LG, 5, [0.25, 0.5], cache=cache)
        x = collocation_points(*LG, 5, cache=cache)
        torch.testing.assert_close(
            interp @ x**2,
            torch.tensor([0.0625, 0.25], dtype=torch.float64),
        )

    def test_no_targets(self, cache):
        interp = interpolation_matrix(*LG, 3, [], cache=cache)
        assert interp.shape == (0, 3)

    def test_wrong_number_of_arguments(self, cache):
        with pytest.raises(TypeError):
            interpolation_matrix(*LG, 3, cache=cache)


class TestReferenceImplementations:
    """Comparisons against NumPy and SciPy."""

    @pytest.mark.parametrize("n", range(1, MAXIMUM_NUMBER_OF_POINTS + 1))
    def test_gauss_matches_scipy(self, cache, n):
        special = pytest.importorskip("scipy.special")
        nodes, weights = special.roots_legendre(n)
        torch.testing.assert_close(
            collocation_points(*LG, n, cache=cache),
            torch.from_numpy(nodes),
            atol=1e-13,
            rtol=0.0,
        )
        torch.testing.assert_close(
            quadrature_weights(*LG, n, cache=cache),
            torch.from_numpy(weights),
            atol=1e-13,
            rtol=0.0,
        )

    @pytest.mark.parametrize("n", range(3, MAXIMUM_NUMBER_OF_POINTS + 1))
    def test_gauss_lobatto_interior_are_derivative_roots(self, cache, n):
        legendre = pytest.importorskip("numpy.polynomial.legendre")
        coefficients = [0.0] * (n - 1) + [1.0]
        roots = legendre.legroots(legendre.legder(coefficients))
        torch.testing.assert_close(
            collocation_points(*LGL, n, cache=cache)[1:-1],
            torch.from_numpy(roots),
            atol=1e-12,
            rtol=0.0,
        )

    @pytest.mark.parametrize("n", range(2, MAXIMUM_NUMBER_OF_POINTS + 1))
    def test_vandermonde_matches_numpy(self, cache, n):
        legendre = pytest.importorskip("numpy.polynomial.legendre")
        x = collocation_points(*LGL, n, cache=cache)
        expected = legendre.legvander(x.numpy(), n - 1)
        torch.testing.assert_close(
            spectral_to_grid_points_matrix(*LGL, n, cache=cache),
            torch.from_numpy(expected),
            atol=1e-13,
            rtol=0.0,
        )
