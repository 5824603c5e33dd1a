import numpy as np
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from .kernel import lorenz96_layer, lorenz96_layer_jacobian
from .layout import TwoLayerLorenz96


class DerivativeEvaluator(ABC):
    """In-place right-hand side ``du = f(u, p, t)`` of an autonomous ODE.

    ``evaluate`` writes into a caller-owned buffer and never allocates the
    state. ``vector_field`` and ``jacobian`` use the ``f(t, x, *args)``
    argument order expected by SciPy and by Lyapunov-analysis routines.
    """

    #: Bound layout descriptor, ``None`` for single-layer models.
    model: Optional[TwoLayerLorenz96] = None

    @abstractmethod
    def evaluate(self, du: np.ndarray, u: np.ndarray, p: Sequence[float], t: float) -> None:
        ...

    @abstractmethod
    def jacobian(self, t: float, u: np.ndarray, p: Sequence[float]) -> np.ndarray:
        ...

    def __call__(self, du: np.ndarray, u: np.ndarray, p: Sequence[float], t: float) -> None:
        self.evaluate(du, u, p, t)

    def vector_field(self, t: float, u: np.ndarray, p: Sequence[float]) -> np.ndarray:
        du = np.empty_like(u, dtype=float)
        self.evaluate(du, u, p, t)
        return du


class OneLayerEvaluator(DerivativeEvaluator):
    """Single-layer Lorenz-96: ``du[j] = (u[j+1] - u[j-2])*u[j-1] - u[j] + F``.

    The lattice size is taken from the state passed at call time; ``p[0]``
    is the forcing ``F``.
    """

    def evaluate(self, du, u, p, t):
        F = p[0]
        du[:] = lorenz96_layer(u) + F

    def jacobian(self, t, u, p):
        return lorenz96_layer_jacobian(u)

    def __repr__(self) -> str:
        return "OneLayerEvaluator()"


class TwoLayerEvaluator(DerivativeEvaluator):
    """Two-layer Lorenz-96 with ``K`` slow and ``K*J`` fast variables.

    With ``p = (h, c, b, F)`` and ``hcb = h*c/b``::

        dX[i]/dt   = (X[i+1] - X[i-2]) X[i-1] - X[i] + F - hcb * sum_j Y[i, j]
        dY[i,j]/dt = c b (Y[i,j-1] - Y[i,j+2]) Y[i,j+1] - c Y[i,j] + hcb * X[i]

    The fast block is one periodic lattice of length ``K*J``: neighbours of
    the last fast variable of group ``i`` are the first ones of group ``i+1``.
    """

    def __init__(self, model: TwoLayerLorenz96):
        if not isinstance(model, TwoLayerLorenz96):
            raise TypeError("model must be a TwoLayerLorenz96 descriptor.")
        self.model = model

    def evaluate(self, du, u, p, t):
        model = self.model
        h, c, b, F = p
        hcb = h * c / b

        X = u[: model.K]
        Y = u[model.K : model.N]

        du[: model.K] = lorenz96_layer(X) + F - hcb * Y.reshape(model.K, model.J).sum(axis=1)
        du[model.K : model.N] = lorenz96_layer(Y, c, b, reverse=True) + hcb * np.repeat(X, model.J)

    def jacobian(self, t, u, p):
        model = self.model
        h, c, b, _ = p
        hcb = h * c / b
        K, N = model.K, model.N

        jac = np.zeros((N, N), dtype=np.float64)
        jac[:K, :K] = lorenz96_layer_jacobian(u[:K])
        jac[K:, K:] = lorenz96_layer_jacobian(u[K:N], c, b, reverse=True)

        owner = np.repeat(np.arange(K), model.J)
        fast = np.arange(K, N)
        jac[owner, fast] = -hcb
        jac[fast, owner] = hcb
        return jac

    def __repr__(self) -> str:
        return f"TwoLayerEvaluator(K={self.model.K}, J={self.model.J})"


__all__ = [
    "DerivativeEvaluator",
    "OneLayerEvaluator",
    "TwoLayerEvaluator",
]
