import numpy as np
from dataclasses import dataclass
from typing import Any, Sequence

from .layout import TwoLayerLorenz96
from .models import DerivativeEvaluator


@dataclass(frozen=True)
class StepContext:
    """What an integrator exposes to observers at an accepted step."""

    state: np.ndarray
    time: float
    parameters: Sequence[float]
    evaluator: DerivativeEvaluator

    @property
    def model(self) -> TwoLayerLorenz96:
        model = getattr(self.evaluator, "model", None)
        if model is None:
            raise TypeError(
                f"{self.evaluator!r} is not bound to a two-layer model descriptor."
            )
        return model


def subgrid_forcing(
    u: np.ndarray,
    t: float,
    model: TwoLayerLorenz96,
    p: Sequence[float],
) -> np.ndarray:
    """Forcing of the fast variables on each slow variable, ``hcb * sum_j Y[i, j]``."""
    h, c, b, _ = p
    hcb = h * c / b
    return hcb * model.fast_grid(u).sum(axis=1)


def subgrid_observer(u: np.ndarray, t: float, context: StepContext) -> Any:
    """Observer-signature wrapper around :func:`subgrid_forcing`."""
    return subgrid_forcing(u, t, context.model, context.parameters)


__all__ = [
    "StepContext",
    "subgrid_forcing",
    "subgrid_observer",
]
