"""Pytest configuration and shared fixtures.

Makes `src` importable without installing the package.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path

import numpy as np
import numpy.typing as npt
import pytest


def _ensure_src_on_sys_path() -> None:
    """Prepend the repository `src` directory to `sys.path` if missing."""
    repo_root: Path = Path(__file__).resolve().parents[1]
    src_path: Path = repo_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


_ensure_src_on_sys_path()

from smolyak_basis import Chebyshev  # noqa: E402


@pytest.fixture
def chebyshev() -> Chebyshev:
    """Chebyshev family on the reference interval [-1, 1]."""
    return Chebyshev()


@pytest.fixture
def smooth_function() -> Callable[[npt.NDArray[np.float64]], npt.NDArray[np.float64]]:
    """A smooth function of points of shape (n_pts, dim)."""

    def f(x: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
        x = np.atleast_2d(x)
        return np.exp(0.3 * x.sum(axis=1)) * np.cos(x[:, 0])

    return f
