import numpy as np
from typing import Union

from .layout import TwoLayerLorenz96, TwoLayerParameters


def default_parameters() -> TwoLayerParameters:
    return TwoLayerParameters(h=1.0, c=10.0, b=10.0, F=12.0)


def default_initial_condition(
    model: TwoLayerLorenz96,
    rng: Union[None, int, np.random.Generator] = None,
    *,
    noise: float = 0.01,
) -> np.ndarray:
    """Wavenumber-3 sine on the slow layer plus Gaussian noise on the fast layer.

    ``rng`` is passed to :func:`numpy.random.default_rng`, so a seed or a
    ``Generator`` makes the fast part reproducible. The slow part does not
    depend on it.
    """
    rng = np.random.default_rng(rng)
    X = 0.5 * np.sin(2.0 * np.pi * 3 * np.arange(model.K) / model.K)
    Y = noise * rng.standard_normal(model.N_J)
    return np.concatenate([X, Y])


__all__ = [
    "default_parameters",
    "default_initial_condition",
]
