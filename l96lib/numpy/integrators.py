import logging
import numpy as np
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Tuple, Union

import scipy.integrate

from .models import DerivativeEvaluator
from .steppers import StateStepper, resolve_stepper
from .subgrid import StepContext

logger = logging.getLogger(__name__)

Observer = Callable[[np.ndarray, float, StepContext], Any]


@dataclass
class Solution:
    """Time-first trajectory: ``u`` has shape (nt, n)."""

    t: np.ndarray
    u: np.ndarray
    saved: Optional[np.ndarray] = None


def _validate_integrate_inputs(
    f: DerivativeEvaluator,
    u0: np.ndarray,
    t: np.ndarray,
    save_every: int,
) -> None:
    if not isinstance(f, DerivativeEvaluator):
        raise TypeError("f must be a DerivativeEvaluator.")

    if not isinstance(u0, np.ndarray):
        raise TypeError("u0 must be a numpy.ndarray.")
    if u0.ndim != 1:
        raise ValueError("u0 must be one-dimensional.")
    model = f.model
    if model is not None and u0.size != model.N:
        raise ValueError(f"u0 has {u0.size} entries but the model expects {model.N}.")

    if not isinstance(t, np.ndarray):
        raise TypeError("t must be a numpy.ndarray.")
    if t.ndim != 1:
        raise ValueError("t must be one-dimensional.")
    if t.size < 2:
        raise ValueError("t must contain at least two time points.")
    dt = t[1] - t[0]
    if not dt > 0:
        raise ValueError("t must be increasing.")
    if not np.allclose(np.diff(t), dt, rtol=1e-6, atol=0.0):
        raise ValueError("t must be uniformly spaced; fixed-step integration uses t[1] - t[0].")

    if isinstance(save_every, bool) or not isinstance(save_every, (int, np.integer)):
        raise TypeError("save_every must be an integer.")
    if save_every < 1:
        raise ValueError("save_every must be at least 1.")


def _stack_saved(saved: list) -> Optional[np.ndarray]:
    if not saved:
        return None
    return np.stack([np.asarray(value) for value in saved])


def integrate(
    f: DerivativeEvaluator,
    u0: np.ndarray,
    t: np.ndarray,
    p: Sequence[float],
    *,
    stepper: Union[str, StateStepper, None] = "rk4",
    observer: Optional[Observer] = None,
    save_every: int = 1,
) -> Solution:
    """Fixed-step integration on the uniform grid ``t``.

    Every ``save_every``-th state (starting with ``t[0]``) is recorded, and
    ``observer(u, t, context)`` is called on each recorded state.
    """
    _validate_integrate_inputs(f, u0, t, save_every)
    step = resolve_stepper(stepper)

    dt = t[1] - t[0]
    nt = t.size
    n_saved = ((nt - 1) // save_every) + 1

    t_saved = np.empty(n_saved, dtype=float)
    u_saved = np.empty((n_saved, u0.size), dtype=float)
    observations = []

    logger.debug(
        "Integrating %r with %s: nt=%d, dt=%g, save_every=%d",
        f, getattr(step, "__name__", step), nt, dt, save_every,
    )

    u = u0.astype(float, copy=True)
    j = 0
    for i in range(nt):
        if i > 0:
            u = step(f, t[i - 1], u, dt, p)
        if i % save_every == 0:
            t_saved[j] = t[i]
            u_saved[j] = u
            if observer is not None:
                observations.append(observer(u, t[i], StepContext(u, t[i], p, f)))
            j += 1

    if not np.all(np.isfinite(u)):
        logger.warning("Trajectory became non-finite before t=%g.", t[-1])
    logger.info("Integrated %d steps up to t=%g.", nt - 1, t[-1])

    return Solution(t=t_saved, u=u_saved, saved=_stack_saved(observations))


def solve(
    f: DerivativeEvaluator,
    u0: np.ndarray,
    t_span: Tuple[float, float],
    p: Sequence[float],
    *,
    observer: Optional[Observer] = None,
    method: str = "RK45",
    **solve_ivp_kwargs,
) -> Solution:
    """Integrate with :func:`scipy.integrate.solve_ivp`.

    The observer is evaluated at every time point SciPy returns (the
    accepted steps, or ``t_eval`` when given).
    """
    if not isinstance(f, DerivativeEvaluator):
        raise TypeError("f must be a DerivativeEvaluator.")
    if f.model is not None and np.size(u0) != f.model.N:
        raise ValueError(f"u0 has {np.size(u0)} entries but the model expects {f.model.N}.")

    if method in {"Radau", "BDF", "LSODA"}:
        solve_ivp_kwargs.setdefault("jac", f.jacobian)

    result = scipy.integrate.solve_ivp(
        f.vector_field,
        t_span,
        np.asarray(u0, dtype=float),
        method=method,
        args=(p,),
        **solve_ivp_kwargs,
    )
    if not result.success:
        raise RuntimeError(f"solve_ivp failed: {result.message}")
    logger.info(
        "solve_ivp (%s) finished with %d evaluations, %d saved points.",
        method, result.nfev, result.t.size,
    )

    u = result.y.T
    observations = []
    if observer is not None:
        for ti, ui in zip(result.t, u):
            observations.append(observer(ui, ti, StepContext(ui, ti, p, f)))

    return Solution(t=result.t, u=u, saved=_stack_saved(observations))


__all__ = [
    "Observer",
    "Solution",
    "integrate",
    "solve",
]
