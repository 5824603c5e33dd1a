"""l96lib: one- and two-layer Lorenz-96 models for multiscale teaching.

Public API mirrors the NumPy backend for convenience. The compiled
kernels live in ``l96lib.numba``; the batched PyTorch versions in
``l96lib.pytorch`` are imported on demand since torch is optional.
"""

from . import numpy as numpy_backend
from . import numba as numba_backend
from .numpy import (
    OneLayerParameters,
    TwoLayerParameters,
    TwoLayerLorenz96,
    lorenz96_layer,
    lorenz96_layer_jacobian,
    DerivativeEvaluator,
    OneLayerEvaluator,
    TwoLayerEvaluator,
    StepContext,
    subgrid_forcing,
    subgrid_observer,
    default_parameters,
    default_initial_condition,
    resolve_stepper,
    register_stepper,
    available_steppers,
    Solution,
    integrate,
    solve,
)

numpy = numpy_backend
numba = numba_backend

__all__ = [
    "OneLayerParameters",
    "TwoLayerParameters",
    "TwoLayerLorenz96",
    "lorenz96_layer",
    "lorenz96_layer_jacobian",
    "DerivativeEvaluator",
    "OneLayerEvaluator",
    "TwoLayerEvaluator",
    "StepContext",
    "subgrid_forcing",
    "subgrid_observer",
    "default_parameters",
    "default_initial_condition",
    "resolve_stepper",
    "register_stepper",
    "available_steppers",
    "Solution",
    "integrate",
    "solve",
    "numpy",
    "numba",
]

__version__ = "0.1.0"
