"""NumPy-backed Lorenz-96 models, diagnostics and integration drivers."""

from .layout import OneLayerParameters, TwoLayerParameters, TwoLayerLorenz96
from .kernel import lorenz96_layer, lorenz96_layer_jacobian
from .models import DerivativeEvaluator, OneLayerEvaluator, TwoLayerEvaluator
from .subgrid import StepContext, subgrid_forcing, subgrid_observer
from .defaults import default_parameters, default_initial_condition
from .steppers import resolve_stepper, register_stepper, available_steppers
from .integrators import Solution, integrate, solve

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
]
