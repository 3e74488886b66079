"""Core Numba-compiled implementations for univariate basis functions.

This module provides the low-level, Numba-accelerated kernel tabulating
Chebyshev polynomials of the first kind.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

import numba as nb
import numpy as np
import numpy.typing as npt

F = TypeVar("F", bound=Callable[..., Any])

if TYPE_CHECKING:
    # During type-checking, make the decorator a no-op that preserves types.
    def nb_jit(*args: object, **kwargs: object) -> Callable[[F], F]:
        def decorator(func: F) -> F:
            return func

        return decorator
else:
    # At runtime, use the real Numba decorator.
    nb_jit = nb.jit  # type: ignore[attr-defined]


@nb_jit(
    nopython=True,
    cache=True,
    parallel=False,
)
def _tabulate_Chebyshev_basis_1D_core(
    n_funcs: np.int32,
    t: npt.NDArray[np.float32 | np.float64],
    out: npt.NDArray[np.float32 | np.float64],
) -> None:
    """Evaluate the first n_funcs Chebyshev polynomials of the first kind at points t.

    Writes T_0(t_j), ..., T_{n_funcs-1}(t_j) into out[j, :], using the
    three-term recurrence:
    - T_0(t) = 1
    - T_1(t) = t
    - T_i(t) = 2 t T_{i-1}(t) - T_{i-2}(t)

    Args:
        n_funcs (np.int32): Number of polynomials to tabulate. Must be positive.
        t (npt.NDArray[np.float32 | np.float64]): 1D array of evaluation points,
            already mapped to the reference interval [-1, 1].
        out (npt.NDArray[np.float32 | np.float64]): Output array of shape
            (len(t), n_funcs) and dtype matching t (no validation performed inside
            this numba-compiled function).
    """
    num_pts = t.shape[0]

    for j in range(num_pts):
        out[j, 0] = 1.0

    if n_funcs == 1:
        return

    for j in range(num_pts):
        out[j, 1] = t[j]

    for i in range(2, n_funcs):
        for j in range(num_pts):
            out[j, i] = 2.0 * t[j] * out[j, i - 1] - out[j, i - 2]


def _warmup_numba_functions() -> None:
    """Precompile numba functions with float64 signatures for faster first call."""
    t_dummy = np.array([-1.0, 0.0, 1.0], dtype=np.float64)
    out_dummy = np.empty((3, 3), dtype=np.float64)

    _tabulate_Chebyshev_basis_1D_core(np.int32(3), t_dummy, out_dummy)


# Precompile numba functions on module import (skip during type checking)
if not TYPE_CHECKING:
    _warmup_numba_functions()
