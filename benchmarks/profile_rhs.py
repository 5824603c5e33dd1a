"""Benchmark the two-layer Lorenz-96 right-hand side backends.

For each (K, J) layout the script times a fixed-step RK4 integration with
the NumPy-backed and the Numba-backed evaluators. Each backend receives a
configurable number of warm-up runs (to trigger JIT compilation where
applicable) before the timed repetitions.
"""

from __future__ import annotations

import argparse
import logging
import time
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple, Type

import numpy as np

from l96lib import numba as l96_numba
from l96lib.logging_config import setup_logging
from l96lib.numpy import (
    DerivativeEvaluator,
    TwoLayerEvaluator,
    TwoLayerLorenz96,
    TwoLayerParameters,
    default_initial_condition,
    integrate,
)

logger = logging.getLogger("l96lib.benchmarks.profile_rhs")


@dataclass
class BenchmarkConfig:
    dt: float = 0.001
    steps: int = 200
    repeats: int = 3
    warmup: int = 1
    seed: int = 0
    h: float = 1.0
    c: float = 10.0
    b: float = 10.0
    forcing: float = 12.0
    layouts: Sequence[Tuple[int, int]] = field(
        default_factory=lambda: ((8, 6), (18, 20), (36, 10), (36, 32), (72, 32))
    )


@dataclass
class BackendSpec:
    name: str
    evaluator: Type[DerivativeEvaluator]


@dataclass
class BackendResult:
    name: str
    layout: Tuple[int, int]
    timings: np.ndarray


def _benchmark_backend(
    backend: BackendSpec,
    model: TwoLayerLorenz96,
    p: TwoLayerParameters,
    config: BenchmarkConfig,
) -> np.ndarray:
    f = backend.evaluator(model)
    u0 = default_initial_condition(model, config.seed)
    t = np.linspace(0.0, config.steps * config.dt, config.steps + 1)

    for _ in range(max(config.warmup, 0)):
        integrate(f, u0, t, p, save_every=config.steps)

    timings: List[float] = []
    for _ in range(config.repeats):
        start = time.perf_counter()
        integrate(f, u0, t, p, save_every=config.steps)
        timings.append(time.perf_counter() - start)

    return np.array(timings, dtype=np.float64)


def run_benchmark(config: BenchmarkConfig) -> List[BackendResult]:
    layouts = list(config.layouts)
    if not layouts:
        raise ValueError("No (K, J) layouts provided for benchmarking.")

    backends: List[BackendSpec] = [
        BackendSpec("numba", l96_numba.TwoLayerEvaluator),
        BackendSpec("numpy", TwoLayerEvaluator),
    ]
    p = TwoLayerParameters(h=config.h, c=config.c, b=config.b, F=config.forcing)

    logger.info(
        "Benchmark settings: dt=%g, steps=%d, warmup=%d, repeats=%d, parameters=%s",
        config.dt, config.steps, config.warmup, config.repeats, p,
    )

    all_results: List[BackendResult] = []
    for K, J in layouts:
        model = TwoLayerLorenz96(K=K, J=J)
        logger.info("Layout K=%d, J=%d (N=%d)", K, J, model.N)

        results: List[BackendResult] = []
        for backend in backends:
            timings = _benchmark_backend(backend, model, p, config)
            results.append(BackendResult(backend.name, (K, J), timings))

        for result in results:
            timings = result.timings
            std = timings.std(ddof=1) if timings.size > 1 else 0.0
            logger.info(
                "[%s] mean ± std: %.4f ± %.4f s (%s)",
                result.name, timings.mean(), std,
                ", ".join(f"{val:.4f}" for val in timings),
            )

        baseline = results[0]
        for result in results[1:]:
            ratio = result.timings.mean() / baseline.timings.mean()
            logger.info("Speed ratio %s/%s: %.2fx", result.name, baseline.name, ratio)

        all_results.extend(results)

    return all_results


def _parse_layout(text: str) -> Tuple[int, int]:
    try:
        K, J = (int(part) for part in text.lower().split("x"))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Layout must look like 36x10, got '{text}'.") from exc
    return K, J


def parse_args() -> BenchmarkConfig:
    default_cfg = BenchmarkConfig()
    parser = argparse.ArgumentParser(
        description="Benchmark the two-layer Lorenz-96 RHS backends (Numba vs NumPy)"
    )
    parser.add_argument("--dt", type=float, default=default_cfg.dt, help="Time step")
    parser.add_argument(
        "--steps", type=int, default=default_cfg.steps, help="Number of RK4 steps per run"
    )
    parser.add_argument(
        "--repeats", type=int, default=default_cfg.repeats, help="Number of timed runs"
    )
    parser.add_argument(
        "--warmup",
        type=int,
        default=default_cfg.warmup,
        help="Warm-up runs for JIT compilation",
    )
    parser.add_argument(
        "--seed", type=int, default=default_cfg.seed, help="Seed of the initial condition"
    )
    parser.add_argument(
        "--layouts",
        type=_parse_layout,
        nargs="+",
        default=None,
        help="Layouts to benchmark, written KxJ (e.g. 36x10)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args()
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    layouts = tuple(args.layouts) if args.layouts is not None else tuple(default_cfg.layouts)

    return BenchmarkConfig(
        dt=args.dt,
        steps=args.steps,
        repeats=args.repeats,
        warmup=args.warmup,
        seed=args.seed,
        layouts=layouts,
    )


def main() -> None:
    config = parse_args()
    run_benchmark(config)


if __name__ == "__main__":
    main()
