"""Smoke tests for package metadata.

Validates public attributes exposed via the package API.
"""

from __future__ import annotations

import importlib
import logging
from typing import Final

import smolyak_basis


def test_package_all_exports() -> None:
    """Ensure exactly the expected symbols are exported."""
    expected_metadata: Final[set[str]] = {"__version__", "__license__"}
    expected_public_api: Final[set[str]] = {
        # Univariate families
        "UnivariateFamily",
        "Chebyshev",
        # Index sets
        "CappedCartesianIndices",
        "Counts",
        "count_combinations",
        # Smolyak bases
        "HomogeneousBasis",
        "basis_matrix_and_coordinates",
        "collocation_coefficients",
        "degrees_of_freedom",
        "interpolate",
        "interpolated_basis",
    }

    assert set(smolyak_basis.__all__) == expected_metadata | expected_public_api
    for name in smolyak_basis.__all__:
        assert hasattr(smolyak_basis, name)


def test_package_metadata_values() -> None:
    """Validate the package metadata constants."""
    assert smolyak_basis.__version__ == "0.1.0"
    assert smolyak_basis.__license__ == "MIT"


def test_metadata_import_stability() -> None:
    """Verify metadata survives module reloads."""
    module = importlib.reload(smolyak_basis)
    assert module.__version__ == "0.1.0"


def test_package_logger_has_null_handler() -> None:
    """The package logger never emits 'no handler' warnings."""
    handlers = logging.getLogger("smolyak_basis").handlers
    assert any(isinstance(h, logging.NullHandler) for h in handlers)
