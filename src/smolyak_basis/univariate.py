"""Univariate families of nested basis functions and grid points.

A univariate family organizes its basis functions and grid points in nested
sets: set index ``i`` (1-based) introduces ``set_length(i)`` new functions and
the same number of new points. All functions and points up to a given set
index are laid out contiguously, so that each set index owns a disjoint
``range`` of rows and columns of a single evaluation matrix.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod

import numpy as np
import numpy.typing as npt

from ._basis_1D import _tabulate_Chebyshev_basis_1D_impl


def _validate_set_index(set_index: int) -> None:
    """Raise a ValueError if set_index is not an integer >= 1."""
    if not isinstance(set_index, int | np.integer) or set_index < 1:
        raise ValueError(f"set index must be an integer >= 1, got {set_index}")


class UnivariateFamily(ABC):
    """Capability interface of a nested univariate basis family.

    Subclasses provide the number of new functions per set index, the grid
    points and the evaluation of the basis functions. Set ranges are derived
    from the set lengths.
    """

    @abstractmethod
    def set_length(self, set_index: int) -> int:
        """Number of new basis functions (and grid points) introduced at set_index.

        Args:
            set_index (int): Set index, starting at 1.

        Returns:
            int: Number of new functions and points.

        Raises:
            ValueError: If set_index is lower than 1.
        """

    @abstractmethod
    def all_gridpoints(self, capacity: int) -> npt.NDArray[np.float64]:
        """All grid points for set indices 1, ..., capacity.

        Args:
            capacity (int): Largest set index. Must be at least 1.

        Returns:
            npt.NDArray[np.float64]: 1D array of length ``set_range(capacity).stop``,
            the points of each set index concatenated in set index order.

        Raises:
            ValueError: If capacity is lower than 1.
        """

    @abstractmethod
    def evaluate(
        self,
        n_funcs: int,
        pts: npt.ArrayLike,
        out: npt.NDArray[np.float64] | None = None,
    ) -> npt.NDArray[np.float64]:
        """Evaluate the first n_funcs basis functions at the given points.

        Args:
            n_funcs (int): Number of basis functions. Must be positive.
            pts (npt.ArrayLike): Evaluation points (scalar or array).
            out (npt.NDArray[np.float64] | None): Optional output array.
                Defaults to None.

        Returns:
            npt.NDArray[np.float64]: Array of shape ``(*pts.shape, n_funcs)``
            (``(n_funcs,)`` for a scalar point). Rows are points, columns functions.
        """

    def set_range(self, set_index: int) -> range:
        """0-based range of the functions and points owned by set_index.

        Ranges of consecutive set indices are disjoint and contiguous.

        Args:
            set_index (int): Set index, starting at 1.

        Returns:
            range: Offsets into the shared evaluation matrix and grid point array.

        Raises:
            ValueError: If set_index is lower than 1.
        """
        _validate_set_index(set_index)
        start = sum(self.set_length(i) for i in range(1, set_index))
        return range(start, start + self.set_length(set_index))


class Chebyshev(UnivariateFamily):
    """Chebyshev polynomials on nested Chebyshev extrema (Clenshaw-Curtis) grids.

    Set index 1 holds the midpoint, set index 2 the two endpoints, and each
    set index ``i >= 3`` the ``2**(i-2)`` extrema of ``T_{2**(i-1)}`` not present
    in the previous sets. The basis functions are ``T_0, T_1, ...`` in degree
    order, so that the functions up to set index ``i`` span the polynomials of
    degree lower than ``2**(i-1) + 1``.

    Args:
        domain (tuple[float, float]): Interval ``(a, b)`` mapped affinely onto the
            reference interval [-1, 1]. Defaults to (-1.0, 1.0).

    Raises:
        ValueError: If the domain is not an interval with a < b.

    Example:
        >>> Chebyshev().all_gridpoints(3)
        array([ 0.        , -1.        ,  1.        ,  0.70710678, -0.70710678])
    """

    def __init__(self, domain: tuple[float, float] = (-1.0, 1.0)) -> None:
        a, b = (float(v) for v in domain)
        if not a < b:
            raise ValueError("Require a < b")
        self._domain = (a, b)

    @property
    def domain(self) -> tuple[float, float]:
        """Get the interval the family is defined on."""
        return self._domain

    def __repr__(self) -> str:
        return f"Chebyshev(domain={self._domain})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Chebyshev):
            return NotImplemented
        return self._domain == other._domain

    def __hash__(self) -> int:
        return hash((Chebyshev, self._domain))

    def set_length(self, set_index: int) -> int:
        """Number of new functions at set_index: 1, 2, then ``2**(set_index-2)``."""
        _validate_set_index(set_index)
        if set_index == 1:
            return 1
        if set_index == 2:  # noqa: PLR2004
            return 2
        return 2 ** (int(set_index) - 2)

    def set_range(self, set_index: int) -> range:
        """0-based range of set_index, from the closed form of the cumulative size."""
        _validate_set_index(set_index)
        # m(i) = 2^(i-1) + 1 functions up to set index i, m(1) = 1
        stop = 1 if set_index == 1 else 2 ** (int(set_index) - 1) + 1
        return range(stop - self.set_length(set_index), stop)

    def _set_gridpoints(self, set_index: int) -> npt.NDArray[np.float64]:
        """New reference points in [-1, 1] introduced at set_index."""
        if set_index == 1:
            return np.array([0.0])
        if set_index == 2:  # noqa: PLR2004
            return np.array([-1.0, 1.0])
        j = np.arange(1, self.set_length(set_index) + 1)
        return np.cos(math.pi * (2 * j - 1) / 2 ** (set_index - 1))

    def _to_reference(self, pts: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
        a, b = self._domain
        return (2.0 * pts - (a + b)) / (b - a)

    def _from_reference(self, pts: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
        a, b = self._domain
        return 0.5 * (a + b) + 0.5 * (b - a) * pts

    def all_gridpoints(self, capacity: int) -> npt.NDArray[np.float64]:
        """Nested Chebyshev extrema up to capacity, mapped onto the domain."""
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        ref = np.concatenate([self._set_gridpoints(i) for i in range(1, capacity + 1)])
        return self._from_reference(ref)

    def evaluate(
        self,
        n_funcs: int,
        pts: npt.ArrayLike,
        out: npt.NDArray[np.float64] | None = None,
    ) -> npt.NDArray[np.float64]:
        """Evaluate ``T_0, ..., T_{n_funcs-1}`` at points given in the domain."""
        t = self._to_reference(np.asarray(pts, dtype=np.float64))
        return _tabulate_Chebyshev_basis_1D_impl(n_funcs, t, out)


__all__ = ["Chebyshev", "UnivariateFamily"]
