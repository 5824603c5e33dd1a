import numpy as np
from typing import Callable, Dict, Sequence, Union

from .models import DerivativeEvaluator

# (f, t, u, dt, p) -> u at t + dt
StateStepper = Callable[[DerivativeEvaluator, float, np.ndarray, float, Sequence[float]], np.ndarray]


def euler_step(
    f: DerivativeEvaluator, t: float, u: np.ndarray, dt: float, p: Sequence[float]
) -> np.ndarray:
    du = np.empty_like(u)
    f(du, u, p, t)
    return u + dt * du


def rk2_step(
    f: DerivativeEvaluator, t: float, u: np.ndarray, dt: float, p: Sequence[float]
) -> np.ndarray:
    k1 = np.empty_like(u)
    k2 = np.empty_like(u)
    f(k1, u, p, t)
    f(k2, u + 0.5 * dt * k1, p, t + 0.5 * dt)
    return u + dt * k2


def rk4_step(
    f: DerivativeEvaluator, t: float, u: np.ndarray, dt: float, p: Sequence[float]
) -> np.ndarray:
    k1 = np.empty_like(u)
    k2 = np.empty_like(u)
    k3 = np.empty_like(u)
    k4 = np.empty_like(u)
    f(k1, u, p, t)
    f(k2, u + 0.5 * dt * k1, p, t + 0.5 * dt)
    f(k3, u + 0.5 * dt * k2, p, t + 0.5 * dt)
    f(k4, u + dt * k3, p, t + dt)
    return u + (dt / 6.0) * (k1 + 2.0 * k2 + 2.0 * k3 + k4)


_STEPPERS: Dict[str, StateStepper] = {
    "euler": euler_step,
    "rk2": rk2_step,
    "rk4": rk4_step,
}


def register_stepper(name: str, stepper: StateStepper, *, overwrite: bool = False) -> None:
    key = name.lower()
    if not callable(stepper):
        raise TypeError("stepper must be callable.")
    if key in _STEPPERS and not overwrite:
        raise ValueError(f"Stepper '{name}' is already registered.")
    _STEPPERS[key] = stepper


def available_steppers() -> Sequence[str]:
    return tuple(sorted(_STEPPERS))


def resolve_stepper(stepper: Union[str, StateStepper, None]) -> StateStepper:
    if stepper is None:
        return rk4_step
    if callable(stepper):
        return stepper
    try:
        return _STEPPERS[stepper.lower()]
    except (KeyError, AttributeError) as exc:
        available = ", ".join(available_steppers())
        raise ValueError(f"Unknown stepper '{stepper}'. Available: {available}.") from exc


__all__ = [
    "StateStepper",
    "euler_step",
    "rk2_step",
    "rk4_step",
    "register_stepper",
    "available_steppers",
    "resolve_stepper",
]
