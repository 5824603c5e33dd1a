import numpy as np
from dataclasses import dataclass, field
from typing import NamedTuple


class OneLayerParameters(NamedTuple):
    F: float


class TwoLayerParameters(NamedTuple):
    h: float
    c: float
    b: float
    F: float


@dataclass(frozen=True)
class TwoLayerLorenz96:
    """Descriptor of the two-layer Lorenz-96 state layout.

    ``K`` slow variables, each coupled to ``J`` fast variables. The flat
    state vector holds the K slow values first, followed by the K*J fast
    values grouped per slow index: ``Y[i, j]`` sits at ``K + i*J + j``.
    """

    K: int
    J: int
    N_J: int = field(init=False)
    N: int = field(init=False)

    def __post_init__(self):
        for name in ("K", "J"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise TypeError(f"{name} must be an integer, got {type(value).__name__}.")
            if value < 1:
                raise ValueError(f"{name} must be at least 1, got {value}.")
        object.__setattr__(self, "K", int(self.K))
        object.__setattr__(self, "J", int(self.J))
        object.__setattr__(self, "N_J", self.K * self.J)
        object.__setattr__(self, "N", self.K + self.K * self.J)

    @property
    def slow_slice(self) -> slice:
        return slice(0, self.K)

    @property
    def fast_slice(self) -> slice:
        return slice(self.K, self.N)

    def slow_indices(self) -> np.ndarray:
        return np.arange(0, self.K)

    def fast_indices(self) -> np.ndarray:
        return np.arange(self.K, self.N)

    def fast_indices_of(self, i: int) -> np.ndarray:
        """Positions in the state vector of the J fast variables of slow index ``i``."""
        i = int(i) % self.K
        start = self.K + i * self.J
        return np.arange(start, start + self.J)

    def slow(self, u: np.ndarray) -> np.ndarray:
        return u[self.slow_slice]

    def fast(self, u: np.ndarray) -> np.ndarray:
        return u[self.fast_slice]

    def fast_grid(self, u: np.ndarray) -> np.ndarray:
        """Fast block as a (K, J) view; row ``i`` is the group of slow index ``i``."""
        return u[self.fast_slice].reshape(self.K, self.J)

    def pack(self, X: np.ndarray, Y: np.ndarray) -> np.ndarray:
        X = np.asarray(X, dtype=float)
        Y = np.asarray(Y, dtype=float)
        if X.shape != (self.K,):
            raise ValueError(f"X must have shape ({self.K},), got {X.shape}.")
        if Y.shape not in {(self.N_J,), (self.K, self.J)}:
            raise ValueError(
                f"Y must have shape ({self.N_J},) or ({self.K}, {self.J}), got {Y.shape}."
            )
        u = np.empty(self.N, dtype=float)
        u[self.slow_slice] = X
        u[self.fast_slice] = Y.reshape(-1)
        return u

    # Angular positions for polar plots of each layer
    def slow_theta(self) -> np.ndarray:
        return 2.0 * np.pi * np.arange(self.K) / self.K

    def fast_theta(self) -> np.ndarray:
        return 2.0 * np.pi * np.arange(self.N_J) / self.N_J


__all__ = [
    "OneLayerParameters",
    "TwoLayerParameters",
    "TwoLayerLorenz96",
]
