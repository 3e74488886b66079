"""Implementations of the Smolyak basis operations.

The same enumeration of admissible multi-indices drives both the dense
assembly of the basis matrix and the point-wise evaluation, so that the
column ordering of the matrix and the ordering of the basis vectors agree.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, NamedTuple, cast

import numpy as np
import numpy.typing as npt
import scipy.linalg

from ._basis_utils import _normalize_points_multidim, _validate_out_array
from .index_set import CappedCartesianIndices, Counts, count_combinations

if TYPE_CHECKING:
    from .smolyak import HomogeneousBasis

logger = logging.getLogger(__name__)


def _as_slice(r: range) -> slice:
    return slice(r.start, r.stop)


def _degrees_of_freedom_impl(basis: HomogeneousBasis) -> int:
    """Number of basis functions of the sparse basis.

    Args:
        basis (HomogeneousBasis): Basis descriptor.

    Returns:
        int: Degrees of freedom.
    """
    univariate, cap = basis.univariate, basis.cap
    counts_per_dim = (
        Counts.from_set_lengths([univariate.set_length(i) for i in range(1, min(s, cap) + 1)])
        for s in basis.shape
    )
    counts = functools.reduce(lambda c1, c2: count_combinations(cap, c1, c2), counts_per_dim)
    return counts.total()


def _basis_block(
    A0: npt.NDArray[np.float64],
    R: dict[int, range],
    i: tuple[int, ...],
    j: tuple[int, ...],
) -> npt.NDArray[np.float64]:
    """Compute ``A0[R[i_N], R[j_N]] ⊗ ... ⊗ A0[R[i_1], R[j_1]]``.

    Args:
        A0 (npt.NDArray[np.float64]): Univariate evaluation matrix for all points
            (rows) and basis functions (columns).
        R (dict[int, range]): Range of each set index.
        i (tuple[int, ...]): Multi-index selecting the points.
        j (tuple[int, ...]): Multi-index selecting the basis functions.

    Returns:
        npt.NDArray[np.float64]: The block, with the first dimension varying fastest
        along both rows and columns.
    """
    sub_blocks = (A0[_as_slice(R[ik]), _as_slice(R[jk])] for ik, jk in zip(i, j, strict=True))
    return functools.reduce(lambda acc, sub: np.kron(sub, acc), sub_blocks)


def _coordinate_block(
    x0: npt.NDArray[np.float64],
    R: dict[int, range],
    i: tuple[int, ...],
) -> npt.NDArray[np.float64]:
    """Compute all combinations of ``x0[R[i_1]], x0[R[i_2]], ...``.

    Args:
        x0 (npt.NDArray[np.float64]): Univariate grid points.
        R (dict[int, range]): Range of each set index.
        i (tuple[int, ...]): Multi-index selecting the points.

    Returns:
        npt.NDArray[np.float64]: Array of shape (n_pts, dim), with the first
        dimension varying fastest (column major).
    """
    grids = [x0[_as_slice(R[ik])] for ik in i]
    tp_coords = np.meshgrid(*grids, indexing="ij")
    return np.stack([c.ravel(order="F") for c in tp_coords], axis=-1)


def _basis_matrix_and_coordinates_impl(
    basis: HomogeneousBasis,
) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """Assemble the dense basis matrix and the matching coordinates.

    Args:
        basis (HomogeneousBasis): Basis descriptor.

    Returns:
        tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]: The (d, d) matrix
        ``A`` with ``A[p, q]`` the q-th basis function at the p-th coordinate, and
        the (d, dim) coordinates.
    """
    univariate = basis.univariate
    indices = CappedCartesianIndices(basis.cap, basis.shape)
    K = max(indices.largest_indices())

    # univariate building blocks
    R = {k: univariate.set_range(k) for k in range(1, K + 1)}
    x0 = univariate.all_gridpoints(K)
    A0 = univariate.evaluate(R[K].stop, x0)

    logger.debug(
        "Assembling Smolyak basis matrix: %d multi-indices, largest set index %d",
        len(indices),
        K,
    )

    # TODO: pre-allocate A and write each block at its offset instead of stacking.
    A = np.hstack([np.vstack([_basis_block(A0, R, i, j) for i in indices]) for j in indices])
    x = np.vstack([_coordinate_block(x0, R, i) for i in indices])

    logger.debug("Assembled basis matrix of shape %s", A.shape)
    return A, x


class _InterpolationData(NamedTuple):
    """Building blocks for evaluating a basis at given points."""

    indices: CappedCartesianIndices
    ranges: dict[int, range]
    values_per_dim: tuple[npt.NDArray[np.float64], ...]


def _interpolation_helper(
    basis: HomogeneousBasis, pts: npt.NDArray[np.float64]
) -> _InterpolationData:
    """Evaluate, per dimension, the univariate functions needed at the points.

    Only the functions up to the largest set index used in each dimension are
    evaluated.

    Args:
        basis (HomogeneousBasis): Basis descriptor.
        pts (npt.NDArray[np.float64]): Points of shape (n_pts, dim).

    Returns:
        _InterpolationData: Multi-indices, set ranges, and per dimension
        arrays of shape (n_pts, n_funcs_k).
    """
    univariate = basis.univariate
    indices = CappedCartesianIndices(basis.cap, basis.shape)
    Ks = indices.largest_indices()
    R = {k: univariate.set_range(k) for k in range(1, max(Ks) + 1)}
    values_per_dim = tuple(
        univariate.evaluate(R[K].stop, pts[:, direction]) for direction, K in enumerate(Ks)
    )
    return _InterpolationData(indices, R, values_per_dim)


def _combine_1D_values(
    vals_per_dim: list[npt.NDArray[np.float64]],
) -> npt.NDArray[np.float64]:
    """Tensor-product combination of per-dimension values at the same points.

    Args:
        vals_per_dim (list[npt.NDArray[np.float64]]): Arrays of shape (n_pts, n_k).

    Returns:
        npt.NDArray[np.float64]: Array of shape (n_pts, n_1 * ... * n_N), products
        of one function per dimension, the first dimension varying fastest.
    """
    current = vals_per_dim[0]
    n_pts = current.shape[0]
    for vals_1D in vals_per_dim[1:]:
        current = np.einsum("pi,pj->pji", current, vals_1D).reshape(n_pts, -1)
    return current


def _iter_blocks(data: _InterpolationData) -> Iterator[npt.NDArray[np.float64]]:
    """Yield, per multi-index, the basis values at the points."""
    R = data.ranges
    for i in data.indices:
        yield _combine_1D_values(
            [vals[:, _as_slice(R[ik])] for vals, ik in zip(data.values_per_dim, i, strict=True)]
        )


def _interpolated_basis_impl(
    basis: HomogeneousBasis,
    point: npt.ArrayLike,
    out: npt.NDArray[np.float64] | None = None,
) -> npt.NDArray[np.float64]:
    """Basis function values at one or several points.

    Args:
        basis (HomogeneousBasis): Basis descriptor.
        point (npt.ArrayLike): Point of shape (dim,) or points of shape (n_pts, dim).
        out (npt.NDArray[np.float64] | None): Optional output array of shape (d,)
            or (n_pts, d). Defaults to None.

    Returns:
        npt.NDArray[np.float64]: Basis values, in the column order of the basis matrix.

    Raises:
        ValueError: If the points have the wrong number of coordinates, or if `out`
            has incorrect shape or dtype.
    """
    pts, single = _normalize_points_multidim(point, basis.dim)
    d = _degrees_of_freedom_impl(basis)
    expected_shape = (d,) if single else (pts.shape[0], d)

    if out is None:
        out = np.empty(expected_shape, dtype=np.float64)
    else:
        _validate_out_array(out, expected_shape, np.float64)

    out_2D = out[np.newaxis, :] if single else out
    p = 0
    for block in _iter_blocks(_interpolation_helper(basis, pts)):
        out_2D[:, p : p + block.shape[1]] = block
        p += block.shape[1]

    return out


def _promote_to_float(values: npt.ArrayLike) -> npt.NDArray[np.float64 | np.complex128]:
    """Convert to a float array, keeping complex values complex."""
    arr = np.asarray(values)
    return arr.astype(np.result_type(arr.dtype, np.float64), copy=False)


def _interpolate_impl(
    basis: HomogeneousBasis,
    coefficients: npt.ArrayLike,
    point: npt.ArrayLike,
) -> float | complex | npt.NDArray[np.float64 | np.complex128]:
    """Evaluate the linear combination of the basis functions at points.

    The result has the type of the coefficients promoted to float, so
    complex coefficients give complex values.

    Args:
        basis (HomogeneousBasis): Basis descriptor.
        coefficients (npt.ArrayLike): Coefficients, of length d.
        point (npt.ArrayLike): Point of shape (dim,) or points of shape (n_pts, dim).

    Returns:
        float | complex | npt.NDArray[np.float64 | np.complex128]: The value at the
        point, or an array of shape (n_pts,) for several points.

    Raises:
        ValueError: If the points have the wrong number of coordinates, or if the
            number of coefficients is not the degrees of freedom.
    """
    pts, single = _normalize_points_multidim(point, basis.dim)
    c = _promote_to_float(coefficients)
    d = _degrees_of_freedom_impl(basis)
    if c.shape != (d,):
        raise ValueError(f"coefficients must have shape ({d},), got {c.shape}")

    v = np.zeros(pts.shape[0], dtype=c.dtype)
    p = 0
    for block in _iter_blocks(_interpolation_helper(basis, pts)):
        v += block @ c[p : p + block.shape[1]]
        p += block.shape[1]

    if not single:
        return v
    return complex(v[0]) if np.iscomplexobj(v) else float(v[0].real)


def _collocation_coefficients_impl(
    basis: HomogeneousBasis, values: npt.ArrayLike
) -> npt.NDArray[np.float64 | np.complex128]:
    """Solve ``A c = values`` for the coefficients.

    ``A`` is real, so complex values are solved for their real and imaginary
    parts with the same factorization.

    Args:
        basis (HomogeneousBasis): Basis descriptor.
        values (npt.ArrayLike): Function values at the coordinates of the basis.

    Returns:
        npt.NDArray[np.float64 | np.complex128]: Coefficients, of length d,
        complex if the values are.

    Raises:
        ValueError: If the number of values is not the degrees of freedom.
    """
    A, _ = _basis_matrix_and_coordinates_impl(basis)
    y = _promote_to_float(values)
    if y.shape != (A.shape[0],):
        raise ValueError(f"values must have shape ({A.shape[0]},), got {y.shape}")
    lu_piv = scipy.linalg.lu_factor(A)
    if np.iscomplexobj(y):
        parts = scipy.linalg.lu_solve(lu_piv, np.stack([y.real, y.imag], axis=-1))
        c = parts[:, 0] + 1j * parts[:, 1]
    else:
        c = scipy.linalg.lu_solve(lu_piv, y)
    return cast(npt.NDArray[np.float64 | np.complex128], c)


__all__ = [
    "_basis_matrix_and_coordinates_impl",
    "_collocation_coefficients_impl",
    "_degrees_of_freedom_impl",
    "_interpolate_impl",
    "_interpolated_basis_impl",
]
