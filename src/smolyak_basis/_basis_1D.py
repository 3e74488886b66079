"""Univariate basis function evaluation implementations.

This module wraps the Numba kernels with input normalization and output
array management.
"""

from __future__ import annotations

from typing import cast

import numpy as np
import numpy.typing as npt

from ._basis_core import _tabulate_Chebyshev_basis_1D_core
from ._basis_utils import (
    _compute_final_output_shape_1D,
    _normalize_points_1D,
    _validate_out_array,
)


def _tabulate_Chebyshev_basis_1D_impl(
    n_funcs: int,
    t: npt.ArrayLike,
    out: npt.NDArray[np.float32 | np.float64] | None = None,
) -> npt.NDArray[np.float32 | np.float64]:
    """Evaluate the first n_funcs Chebyshev polynomials of the first kind.

    Points are expected in the reference interval [-1, 1], although the
    polynomials are computed for any real value. Handles input normalization,
    output allocation/validation, and the call to the Numba kernel.

    Args:
        n_funcs (int): Number of polynomials T_0, ..., T_{n_funcs-1}. Must be positive.
        t (npt.ArrayLike): Evaluation points. Can be a scalar, list, or numpy array.
            Types different from float32 or float64 are automatically converted to float64.
        out (npt.NDArray[np.float32 | np.float64] | None): Optional output array
            where the result will be stored. If None, a new array is allocated.
            Must have the correct shape and dtype if provided. Defaults to None.

    Returns:
        npt.NDArray[np.float32 | np.float64]: Tabulated polynomials, with the same shape
        as the input points and the last dimension equal to n_funcs.
        If `out` was provided, returns the same array.

    Raises:
        ValueError: If n_funcs is not positive, or if `out` is provided and has incorrect
            shape or dtype.

    Example:
        >>> _tabulate_Chebyshev_basis_1D_impl(3, [-1.0, 0.0, 0.5])
        array([[ 1. , -1. ,  1. ],
               [ 1. ,  0. , -1. ],
               [ 1. ,  0.5, -0.5]])
    """
    if n_funcs < 1:
        raise ValueError("number of functions must be positive")

    # Get input shape before normalization (handle scalars and lists)
    if isinstance(t, np.ndarray):
        input_shape = t.shape
    elif isinstance(t, list | tuple):
        input_shape = np.array(t).shape
    else:  # scalar
        input_shape = ()

    t = _normalize_points_1D(t)
    num_pts = t.shape[0]

    expected_normalized_shape = (num_pts, n_funcs)
    expected_final_shape = _compute_final_output_shape_1D(input_shape, n_funcs)

    if out is None:
        out = np.empty(expected_final_shape, dtype=t.dtype)
    else:
        _validate_out_array(out, expected_final_shape, cast(npt.DTypeLike, t.dtype))

    _tabulate_Chebyshev_basis_1D_core(
        np.int32(n_funcs), np.ascontiguousarray(t), out.reshape(expected_normalized_shape)
    )

    return out


__all__ = ["_tabulate_Chebyshev_basis_1D_impl"]
