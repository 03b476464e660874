"""Compute-once cache of spectral quantities."""

import operator
import threading
from collections import Counter
from typing import Dict, Hashable, Iterable, Optional, Tuple, Union

from torchspectral._basis import MAXIMUM_NUMBER_OF_POINTS, Basis, Quadrature
from torchspectral._exceptions import RangeError
from torchspectral._generators import GENERATORS, GeneratorKind
from torchspectral._variant import SpectralVariant, get_variant

CacheKey = Tuple[Basis, Quadrature, GeneratorKind, int]


class SpectralCache:
    """Lazily computed, never evicted spectral quantities.

    Each entry is keyed by ``(basis, quadrature, kind, n)`` and computed
    the first time it is requested. Later requests return the same object.
    Entries must be treated as read-only.

    Parameters
    ----------
    maximum_number_of_points : int
        Largest number of collocation points served. Requests above it
        raise :class:`RangeError`.

    Attributes
    ----------
    computations : Counter
        Number of generator invocations per key. Every key is computed at
        most once.

    Notes
    -----
    Safe to share between threads. An entry is computed under a lock that
    belongs to its key only, so generators that request prerequisites
    from the same cache never wait on their own lock. Reading an existing
    entry takes no lock.

    Examples
    --------
    >>> cache = SpectralCache()
    >>> D = cache.get(Basis.LEGENDRE, Quadrature.GAUSS_LOBATTO,
    ...               GeneratorKind.DIFFERENTIATION_MATRIX, 4)
    >>> D is cache.get(Basis.LEGENDRE, Quadrature.GAUSS_LOBATTO,
    ...                GeneratorKind.DIFFERENTIATION_MATRIX, 4)
    True
    """

    def __init__(self, maximum_number_of_points: int = MAXIMUM_NUMBER_OF_POINTS):
        if maximum_number_of_points < 1:
            raise ValueError(
                f"maximum_number_of_points must be at least 1, "
                f"got {maximum_number_of_points}"
            )
        self.maximum_number_of_points = maximum_number_of_points
        self.computations: Counter = Counter()
        self._entries: Dict[CacheKey, object] = {}
        self._locks: Dict[CacheKey, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def __repr__(self) -> str:
        return (
            f"SpectralCache(maximum_number_of_points="
            f"{self.maximum_number_of_points}, entries={len(self)})"
        )

    def number_of_points_range(
        self,
        basis: Union[Basis, str],
        quadrature: Union[Quadrature, str],
    ) -> range:
        """Supported numbers of collocation points for a (basis, quadrature) pair."""
        variant = get_variant(basis, quadrature)
        return range(
            variant.minimum_number_of_points,
            self.maximum_number_of_points + 1,
        )

    def check_number_of_points(self, variant: SpectralVariant, n: int) -> int:
        """Return ``n`` as an int, or raise unless it is supported for ``variant``.

        Raises
        ------
        TypeError
            If ``n`` is not an integer.
        RangeError
            If ``n`` is outside the supported range.
        """
        try:
            n = operator.index(n)
        except TypeError:
            raise TypeError(
                f"number of collocation points must be an integer, "
                f"got {n!r}"
            ) from None

        if n < variant.minimum_number_of_points:
            raise RangeError(
                f"Tried to work with less than the minimum number of "
                f"collocation points for this quadrature: {variant.basis} "
                f"{variant.quadrature} requires at least "
                f"{variant.minimum_number_of_points}, got {n}"
            )
        if n > self.maximum_number_of_points:
            raise RangeError(
                f"Exceeded maximum number of collocation points: "
                f"{self.maximum_number_of_points}, got {n}"
            )

        return n

    def get(
        self,
        basis: Union[Basis, str],
        quadrature: Union[Quadrature, str],
        kind: GeneratorKind,
        n: int,
    ):
        """Return the quantity ``kind`` for ``n`` points, computing it once.

        Parameters
        ----------
        basis : Basis or str
            Basis tag.
        quadrature : Quadrature or str
            Quadrature tag.
        kind : GeneratorKind
            Which quantity to return.
        n : int
            Number of collocation points.

        Raises
        ------
        UnsupportedCombinationError
            If the (basis, quadrature) pair is not registered.
        TypeError
            If ``n`` is not an integer.
        RangeError
            If ``n`` is outside the supported range. Checked before any
            lookup or computation.
        """
        variant = get_variant(basis, quadrature)
        n = self.check_number_of_points(variant, n)

        key = (variant.basis, variant.quadrature, GeneratorKind(kind), n)
        try:
            return self._entries[key]
        except KeyError:
            pass

        with self._lock_for(key):
            # Another thread may have finished while we waited
            if key in self._entries:
                return self._entries[key]

            value = GENERATORS[key[2]](self, variant, n)
            self.computations[key] += 1
            self._entries[key] = value

        return value

    def precompute(
        self,
        basis: Union[Basis, str],
        quadrature: Union[Quadrature, str],
        kinds: Optional[Iterable[GeneratorKind]] = None,
    ) -> None:
        """Populate every supported number of points for ``kinds`` (default: all)."""
        if kinds is None:
            kinds = list(GeneratorKind)
        else:
            kinds = list(kinds)

        for n in self.number_of_points_range(basis, quadrature):
            for kind in kinds:
                self.get(basis, quadrature, kind, n)

    def _lock_for(self, key: CacheKey) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock


_default_cache: Optional[SpectralCache] = None
_default_cache_guard = threading.Lock()


def default_cache() -> SpectralCache:
    """Process-wide cache used when no ``cache`` argument is given."""
    global _default_cache
    if _default_cache is None:
        with _default_cache_guard:
            if _default_cache is None:
                _default_cache = SpectralCache()
    return _default_cache
