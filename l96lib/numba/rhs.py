import numpy as np
from numba import njit

from ..numpy import models as _numpy_models


@njit(cache=True, fastmath=True)
def lorenz96_layer(u: np.ndarray, c: float, b: float, reverse: bool) -> np.ndarray:
    m = u.size
    out = np.empty(m, dtype=np.float64)
    cb = c * b
    s = -1 if reverse else 1
    for j in range(m):
        ip1 = (j + s) % m
        im1 = (j - s) % m
        im2 = (j - 2 * s) % m
        out[j] = cb * (u[ip1] - u[im2]) * u[im1] - c * u[j]
    return out


@njit(cache=True, fastmath=True)
def one_layer_rhs(du: np.ndarray, u: np.ndarray, F: float) -> None:
    m = u.size
    for j in range(m):
        du[j] = (u[(j + 1) % m] - u[(j - 2) % m]) * u[(j - 1) % m] - u[j] + F


@njit(cache=True, fastmath=True)
def subgrid_forcing(u: np.ndarray, K: int, J: int, h: float, c: float, b: float) -> np.ndarray:
    hcb = h * c / b
    out = np.zeros(K, dtype=np.float64)
    for i in range(K):
        s = 0.0
        for j in range(J):
            s += u[K + i * J + j]
        out[i] = hcb * s
    return out


@njit(cache=True, fastmath=True)
def two_layer_rhs(
    du: np.ndarray, u: np.ndarray, K: int, J: int, h: float, c: float, b: float, F: float
) -> None:
    hcb = h * c / b
    cb = c * b
    nj = K * J

    for i in range(K):
        s = 0.0
        for j in range(J):
            s += u[K + i * J + j]
        du[i] = (u[(i + 1) % K] - u[(i - 2) % K]) * u[(i - 1) % K] - u[i] + F - hcb * s

    # single periodic lattice over all K*J fast variables
    for k in range(nj):
        ym1 = u[K + (k - 1) % nj]
        yp1 = u[K + (k + 1) % nj]
        yp2 = u[K + (k + 2) % nj]
        du[K + k] = cb * (ym1 - yp2) * yp1 - c * u[K + k] + hcb * u[k // J]


class OneLayerEvaluator(_numpy_models.OneLayerEvaluator):
    def evaluate(self, du, u, p, t):
        one_layer_rhs(du, u, float(p[0]))

    def __repr__(self) -> str:
        return "numba.OneLayerEvaluator()"


class TwoLayerEvaluator(_numpy_models.TwoLayerEvaluator):
    def evaluate(self, du, u, p, t):
        h, c, b, F = p
        two_layer_rhs(du, u, self.model.K, self.model.J, float(h), float(c), float(b), float(F))

    def __repr__(self) -> str:
        return f"numba.TwoLayerEvaluator(K={self.model.K}, J={self.model.J})"


__all__ = [
    "lorenz96_layer",
    "one_layer_rhs",
    "two_layer_rhs",
    "subgrid_forcing",
    "OneLayerEvaluator",
    "TwoLayerEvaluator",
]
