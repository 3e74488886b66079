"""Smolyak sparse tensor-product bases.

A :class:`HomogeneousBasis` combines the same univariate family in every
dimension. The tensor blocks taking part in the basis are selected by the
multi-indices of :class:`~smolyak_basis.index_set.CappedCartesianIndices`
with cap ``dim + level``.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from ._smolyak_impl import (
    _basis_matrix_and_coordinates_impl,
    _collocation_coefficients_impl,
    _degrees_of_freedom_impl,
    _interpolate_impl,
    _interpolated_basis_impl,
)
from .univariate import UnivariateFamily


@dataclass(frozen=True)
class HomogeneousBasis:
    """Smolyak basis using the same univariate family in every dimension.

    Attributes:
        univariate (UnivariateFamily): The univariate family, e.g. ``Chebyshev()``.
        shape (tuple[int, ...]): Largest set index allowed in each dimension.
        level (int): Level (``>= 0``) of the Smolyak approximation.

    Raises:
        TypeError: If univariate is not a UnivariateFamily.
        ValueError: If shape is empty or has entries lower than 1, or if level is negative.

    Example:
        >>> basis = HomogeneousBasis(Chebyshev(), (5, 5), 2)
        >>> basis.cap
        4
        >>> degrees_of_freedom(basis)
        13
    """

    univariate: UnivariateFamily
    shape: tuple[int, ...]
    level: int

    def __post_init__(self) -> None:
        if not isinstance(self.univariate, UnivariateFamily):
            raise TypeError("univariate must be a UnivariateFamily")
        shape = tuple(self.shape)
        if len(shape) < 1:
            raise ValueError("shape must have at least 1 dimension")
        if not all(isinstance(s, int | np.integer) and s >= 1 for s in shape):
            raise ValueError("All shape entries must be integers >= 1")
        if not isinstance(self.level, int | np.integer) or self.level < 0:
            raise ValueError("level must be a non-negative integer")
        object.__setattr__(self, "shape", tuple(int(s) for s in shape))
        object.__setattr__(self, "level", int(self.level))

    @property
    def dim(self) -> int:
        """Get the number of dimensions."""
        return len(self.shape)

    @property
    def cap(self) -> int:
        """Get the cap on the sum of the set indices, ``dim + level``."""
        return self.dim + self.level


def degrees_of_freedom(basis: HomogeneousBasis) -> int:
    """Number of basis functions (and coordinates) of the basis.

    Each admissible multi-index contributes the product of the number of new
    univariate functions of its set indices.

    Args:
        basis (HomogeneousBasis): Basis descriptor.

    Returns:
        int: Degrees of freedom ``d``.
    """
    return _degrees_of_freedom_impl(basis)


def basis_matrix_and_coordinates(
    basis: HomogeneousBasis,
) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """Dense basis matrix and the coordinates it is evaluated at.

    Args:
        basis (HomogeneousBasis): Basis descriptor.

    Returns:
        tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]: ``(A, x)``, where
        ``A`` has shape (d, d) and ``x`` has shape (d, dim), with ``A[p, q]`` the
        q-th basis function evaluated at ``x[p]``. ``solve(A, f(x))`` gives the
        coefficients interpolating ``f`` at ``x``.
    """
    return _basis_matrix_and_coordinates_impl(basis)


def interpolated_basis(
    basis: HomogeneousBasis,
    point: npt.ArrayLike,
    out: npt.NDArray[np.float64] | None = None,
) -> npt.NDArray[np.float64]:
    """Values of all the basis functions at a point.

    The result ``a`` satisfies ``a @ c == interpolate(basis, c, point)`` for any
    coefficients ``c``. This is useful when repeatedly interpolating at the
    same point.

    Args:
        basis (HomogeneousBasis): Basis descriptor.
        point (npt.ArrayLike): Point of shape (dim,), or points of shape (n_pts, dim).
        out (npt.NDArray[np.float64] | None): Optional float64 output array of shape
            (d,), or (n_pts, d) for several points, overwritten with the result.
            Defaults to None.

    Returns:
        npt.NDArray[np.float64]: Basis values of shape (d,) or (n_pts, d).
        If `out` was provided, returns the same array.

    Raises:
        ValueError: If the number of coordinates is not ``basis.dim``, or if `out`
            has incorrect shape or dtype.
    """
    return _interpolated_basis_impl(basis, point, out)


def interpolate(
    basis: HomogeneousBasis,
    coefficients: npt.ArrayLike,
    point: npt.ArrayLike,
) -> float | complex | npt.NDArray[np.float64 | np.complex128]:
    """Interpolate the basis with the given coefficients at a point.

    Args:
        basis (HomogeneousBasis): Basis descriptor.
        coefficients (npt.ArrayLike): Coefficients, of length ``degrees_of_freedom(basis)``.
        point (npt.ArrayLike): Point of shape (dim,), or points of shape (n_pts, dim).

    Returns:
        float | complex | npt.NDArray[np.float64 | np.complex128]: Interpolated value,
        or array of shape (n_pts,). Complex coefficients give complex values.

    Raises:
        ValueError: If the number of coordinates is not ``basis.dim``, or if the
            number of coefficients is not the degrees of freedom.
    """
    return _interpolate_impl(basis, coefficients, point)


def collocation_coefficients(
    basis: HomogeneousBasis, values: npt.ArrayLike
) -> npt.NDArray[np.float64 | np.complex128]:
    """Coefficients interpolating function values given at the basis coordinates.

    Args:
        basis (HomogeneousBasis): Basis descriptor.
        values (npt.ArrayLike): Values ``f(x[p])`` at the coordinates ``x`` returned
            by :func:`basis_matrix_and_coordinates`.

    Returns:
        npt.NDArray[np.float64 | np.complex128]: Coefficients ``c`` with
        ``interpolate(basis, c, x[p])`` equal to ``values[p]``, complex if the
        values are.

    Raises:
        ValueError: If the number of values is not the degrees of freedom.
    """
    return _collocation_coefficients_impl(basis, values)


__all__ = [
    "HomogeneousBasis",
    "basis_matrix_and_coordinates",
    "collocation_coefficients",
    "degrees_of_freedom",
    "interpolate",
    "interpolated_basis",
]
