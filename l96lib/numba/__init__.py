"""Numba-compiled Lorenz-96 right-hand sides.

Same evaluator contract as the NumPy backend; the compiled kernels are
also exported for use inside user-written ``@njit`` code.
"""

from .rhs import (
    lorenz96_layer,
    one_layer_rhs,
    two_layer_rhs,
    subgrid_forcing,
    OneLayerEvaluator,
    TwoLayerEvaluator,
)

__all__ = [
    "lorenz96_layer",
    "one_layer_rhs",
    "two_layer_rhs",
    "subgrid_forcing",
    "OneLayerEvaluator",
    "TwoLayerEvaluator",
]
