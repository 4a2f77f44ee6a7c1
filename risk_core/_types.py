"""
Common type aliases used throughout the curve risk core.

This module defines type aliases for numpy arrays and other common types
to improve code readability and enable better static type checking.
"""

from typing import TypeAlias

import numpy as np
import numpy.typing as npt

# Array type aliases
FloatArray: TypeAlias = npt.NDArray[np.float64]
"""1D array of 64-bit floats."""

# Scalar type aliases
Rate: TypeAlias = float
"""Interest rate or spread as a decimal (e.g., 0.02 for 2%)."""

Notional: TypeAlias = float
"""Notional amount in currency units."""

Year: TypeAlias = float
"""Time measured in years (e.g., 0.25 for quarterly)."""

Currency: TypeAlias = str
"""Three-letter ISO currency code (e.g., 'USD')."""
