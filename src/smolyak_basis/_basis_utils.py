"""Utility functions for normalizing inputs and validating output buffers."""

import numpy as np
from numpy import typing as npt


def _normalize_points_1D(pts: npt.ArrayLike) -> npt.NDArray[np.float32 | np.float64]:
    """Normalize points to a 1D float array for univariate evaluation.

    Scalars become arrays with a single element and multi-dimensional arrays
    are flattened. Types different from float32 or float64 are converted to float64.

    Returns:
        A 1D numpy array with floating point dtype (np.float32 or np.float64).
    """
    if not isinstance(pts, np.ndarray):
        pts = np.array(pts)

    if pts.dtype not in (np.float32, np.float64):
        pts = pts.astype(np.float64)

    if pts.ndim == 0:
        pts = pts.reshape(1)
    elif pts.ndim > 1:
        pts = pts.ravel()

    return pts


def _compute_final_output_shape_1D(input_shape: tuple[int, ...], n_funcs: int) -> tuple[int, ...]:
    """Compute the output shape of a univariate tabulation.

    Args:
        input_shape (tuple[int, ...]): The shape of the input points (before normalization).
        n_funcs (int): The number of tabulated basis functions.

    Returns:
        tuple[int, ...]: ``(n_funcs,)`` for scalar input, ``(*input_shape, n_funcs)`` otherwise.
    """
    return (*input_shape, n_funcs)


def _normalize_points_multidim(
    pts: npt.ArrayLike, dim: int
) -> tuple[npt.NDArray[np.float64], bool]:
    """Normalize multivariate points to a 2D float64 array of shape (n_pts, dim).

    Args:
        pts (npt.ArrayLike): A single point of shape (dim,) or a collection of
            points of shape (n_pts, dim).
        dim (int): Expected number of coordinates per point.

    Returns:
        tuple[npt.NDArray[np.float64], bool]: The normalized points and a flag
        telling whether a single point was given.

    Raises:
        ValueError: If the points are not 1D or 2D, or if the number of
            coordinates does not match ``dim``.
    """
    arr = np.asarray(pts, dtype=np.float64)
    if arr.ndim not in (1, 2):
        raise ValueError("point must be a 1D array or a 2D array of points")

    single = arr.ndim == 1
    if single:
        arr = arr.reshape(1, -1)

    if arr.shape[1] != dim:
        raise ValueError(f"point must have {dim} coordinates, got {arr.shape[1]}")

    return arr, single


def _validate_out_array(
    out: npt.NDArray[np.float64],
    expected_shape: tuple[int, ...],
    expected_dtype: npt.DTypeLike,
) -> None:
    """Validate that the output array has the correct shape and dtype.

    This function follows NumPy's style for output array validation.

    Args:
        out (npt.NDArray[np.float64]): The output array to validate.
        expected_shape (tuple[int, ...]): The expected shape of the output array.
        expected_dtype (npt.DTypeLike): The expected dtype.

    Raises:
        ValueError: If the array shape or dtype does not match expectations,
            or if the array is read-only.
    """
    if out.shape != expected_shape:
        raise ValueError(f"Output array has shape {out.shape}, but expected shape {expected_shape}")
    if out.dtype != expected_dtype:
        raise ValueError(f"Output array has dtype {out.dtype}, but expected dtype {expected_dtype}")
    if not out.flags.writeable:
        raise ValueError("Output array is not writeable")
