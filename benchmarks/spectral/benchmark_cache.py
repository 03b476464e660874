"""Benchmark cold vs warm access to cached spectral quantities.

The first request for a quantity runs the generator chain; later requests
should be dictionary lookups regardless of the number of points.
"""

import time

from torchspectral import (
    MAXIMUM_NUMBER_OF_POINTS,
    Basis,
    Quadrature,
    SpectralCache,
    differentiation_matrix,
    grid_points_to_spectral_matrix,
    linear_filter_matrix,
)

OPERATIONS = {
    "differentiation_matrix": differentiation_matrix,
    "grid_points_to_spectral_matrix": grid_points_to_spectral_matrix,
    "linear_filter_matrix": linear_filter_matrix,
}


def benchmark_access(
    operation,
    quadrature: Quadrature,
    n: int,
    n_iterations: int = 1000,
) -> tuple:
    """Time the first and the average subsequent access.

    Parameters
    ----------
    operation : callable
        Spectral quantity to request.
    quadrature : Quadrature
        Quadrature rule.
    n : int
        Number of collocation points.
    n_iterations : int
        Number of warm accesses to average over.

    Returns
    -------
    tuple
        (cold time, mean warm time) in microseconds.
    """
    cache = SpectralCache()

    start = time.perf_counter()
    operation(Basis.LEGENDRE, quadrature, n, cache=cache)
    cold = (time.perf_counter() - start) * 1e6

    start = time.perf_counter()
    for _ in range(n_iterations):
        operation(Basis.LEGENDRE, quadrature, n, cache=cache)
    warm = (time.perf_counter() - start) * 1e6 / n_iterations

    return cold, warm


def main():
    print("Spectral cache access (microseconds)")
    print("=" * 72)
    print(f"{'Operation':<32} {'Quadrature':<14} {'N':>3} {'Cold':>10} {'Warm':>8}")
    print("-" * 72)

    for name, operation in OPERATIONS.items():
        for quadrature in Quadrature:
            for n in (2, 6, MAXIMUM_NUMBER_OF_POINTS):
                cold, warm = benchmark_access(operation, quadrature, n)
                print(
                    f"{name:<32} {str(quadrature):<14} {n:>3} "
                    f"{cold:>10.1f} {warm:>8.2f}"
                )


if __name__ == "__main__":
    main()
