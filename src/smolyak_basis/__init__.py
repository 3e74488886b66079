"""Public API surface for smolyak_basis.

Defines package metadata and exported interfaces.
"""

import logging
from typing import Final

# Private API imports (accessible but not in __all__)
# Users can access private functions via: smolyak_basis._smolyak_impl._function_name, etc.
from . import (
    _basis_utils,  # noqa: F401
    _smolyak_impl,  # noqa: F401
)

# Public API imports
from .index_set import CappedCartesianIndices, Counts, count_combinations
from .smolyak import (
    HomogeneousBasis,
    basis_matrix_and_coordinates,
    collocation_coefficients,
    degrees_of_freedom,
    interpolate,
    interpolated_basis,
)
from .univariate import Chebyshev, UnivariateFamily

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Package metadata
__version__: Final[str] = "0.1.0"
__license__: Final[str] = "MIT"

# Public interface: only functions/classes that don't start with _
__all__ = [
    "CappedCartesianIndices",
    "Chebyshev",
    "Counts",
    "HomogeneousBasis",
    "UnivariateFamily",
    "__license__",
    "__version__",
    "basis_matrix_and_coordinates",
    "collocation_coefficients",
    "count_combinations",
    "degrees_of_freedom",
    "interpolate",
    "interpolated_basis",
]
