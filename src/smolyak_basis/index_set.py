"""Capped multi-index sets and combinatorial counting of their contributions.

A multi-index ``(i_1, ..., i_N)`` of 1-based set indices is admissible for a
cap ``c`` and a shape ``(s_1, ..., s_N)`` when ``1 <= i_k <= s_k`` for every
dimension and ``i_1 + ... + i_N <= c``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

import numpy as np
import numpy.typing as npt


def _capped_indices(cap: int, shape: tuple[int, ...]) -> Iterator[tuple[int, ...]]:
    """Yield admissible multi-indices with the first dimension varying fastest."""
    *head, last = shape
    n_head = len(head)
    for i_last in range(1, min(last, cap - n_head) + 1):
        if n_head == 0:
            yield (i_last,)
        else:
            for rest in _capped_indices(cap - i_last, tuple(head)):
                yield (*rest, i_last)


class CappedCartesianIndices:
    """Admissible multi-indices under a cap, in a deterministic order.

    The enumeration follows the column-major (Fortran) order of the full
    Cartesian lattice ``[1, s_1] x ... x [1, s_N]``, i.e. the first dimension
    varies fastest, skipping the multi-indices whose sum exceeds the cap.
    Iterating twice yields the same sequence.

    Args:
        cap (int): Upper bound for the sum of the set indices. Must be at least
            the number of dimensions.
        shape (Iterable[int]): Largest set index allowed per dimension.

    Raises:
        ValueError: If shape is empty, any entry is lower than 1, or cap is lower
            than the number of dimensions.

    Example:
        >>> list(CappedCartesianIndices(4, (3, 3)))
        [(1, 1), (2, 1), (3, 1), (1, 2), (2, 2), (1, 3)]
    """

    def __init__(self, cap: int, shape: Iterable[int]) -> None:
        self._shape: tuple[int, ...] = tuple(int(s) for s in shape)
        self._cap = int(cap)
        self._validate()
        self._indices: tuple[tuple[int, ...], ...] = tuple(_capped_indices(self._cap, self._shape))

    def _validate(self) -> None:
        if len(self._shape) < 1:
            raise ValueError("shape must have at least 1 dimension")
        if any(s < 1 for s in self._shape):
            raise ValueError("All shape entries must be at least 1")
        if self._cap < len(self._shape):
            raise ValueError(f"cap must be at least {len(self._shape)}, got {self._cap}")

    @property
    def cap(self) -> int:
        """Get the cap on the sum of the set indices."""
        return self._cap

    @property
    def shape(self) -> tuple[int, ...]:
        """Get the largest set index allowed per dimension."""
        return self._shape

    @property
    def dim(self) -> int:
        """Get the number of dimensions."""
        return len(self._shape)

    def __iter__(self) -> Iterator[tuple[int, ...]]:
        return iter(self._indices)

    def __len__(self) -> int:
        return len(self._indices)

    def __repr__(self) -> str:
        return f"CappedCartesianIndices(cap={self._cap}, shape={self._shape})"

    def largest_indices(self) -> tuple[int, ...]:
        """Largest set index appearing in each dimension of the enumeration.

        Returns:
            tuple[int, ...]: One entry per dimension.
        """
        return tuple(max(column) for column in zip(*self._indices, strict=True))


class Counts:
    """Integer weights indexed by the sum of set indices.

    Entry ``s`` holds the number of basis functions contributed by the
    (partial) multi-indices whose set indices add up to ``s``. Sum 0 is
    never used by a non-empty multi-index and always holds zero.

    Args:
        weights (npt.ArrayLike): Weights for the sums 0, 1, 2, ...
    """

    def __init__(self, weights: npt.ArrayLike) -> None:
        self._weights: npt.NDArray[np.int64] = np.array(weights, dtype=np.int64).ravel()
        if self._weights.size == 0:
            raise ValueError("weights must have at least one element")
        if np.any(self._weights < 0):
            raise ValueError("weights must be non-negative")

    @classmethod
    def from_set_lengths(cls, lengths: Sequence[int]) -> Counts:
        """Build the counts of a single dimension.

        Args:
            lengths (Sequence[int]): ``lengths[i - 1]`` is the number of new
                functions introduced by set index ``i``.

        Returns:
            Counts: Weights with ``lengths[i - 1]`` at sum ``i``.
        """
        return cls(np.concatenate(([0], np.asarray(lengths, dtype=np.int64))))

    @property
    def weights(self) -> npt.NDArray[np.int64]:
        """Get the weights for the sums 0, 1, 2, ..."""
        return self._weights

    @property
    def max_sum(self) -> int:
        """Get the largest sum with a stored weight."""
        return self._weights.size - 1

    def total(self) -> int:
        """Sum of all the weights."""
        return int(self._weights.sum())

    def __repr__(self) -> str:
        return f"Counts({self._weights.tolist()})"


def count_combinations(cap: int, c1: Counts, c2: Counts) -> Counts:
    """Combine the counts of two groups of dimensions.

    A multi-index of the combined group is a pair of multi-indices of each
    group: sums add and contributions multiply, so the combined weights are
    the discrete convolution of the inputs. Sums above the cap are dropped.

    Args:
        cap (int): Upper bound for the sum of the set indices.
        c1 (Counts): Counts of the first group of dimensions.
        c2 (Counts): Counts of the second group of dimensions.

    Returns:
        Counts: Counts of the combined group.

    Raises:
        ValueError: If cap is negative.

    Example:
        >>> c = Counts.from_set_lengths([1, 2, 2])
        >>> count_combinations(4, c, c)
        Counts([0, 0, 1, 4, 8])
    """
    if cap < 0:
        raise ValueError("cap must be non-negative")
    combined = np.convolve(c1.weights, c2.weights)[: cap + 1]
    return Counts(combined)


__all__ = ["CappedCartesianIndices", "Counts", "count_combinations"]
