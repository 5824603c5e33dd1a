import argparse
import logging

import matplotlib.pyplot as plt
import numpy as np

from l96lib.logging_config import setup_logging
from l96lib.numpy import (
    TwoLayerEvaluator,
    TwoLayerLorenz96,
    default_initial_condition,
    default_parameters,
    solve,
    subgrid_observer,
)


def main():
    parser = argparse.ArgumentParser(description="Two-layer Lorenz-96 trajectory with subgrid forcing")
    parser.add_argument("--K", type=int, default=36)
    parser.add_argument("--J", type=int, default=10)
    parser.add_argument("--t-end", type=float, default=20.0)
    parser.add_argument("--dt-save", type=float, default=0.01)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--output", default="benchmarks/lorenz96_two_layer.npz")
    parser.add_argument("--no-plot", action="store_true")
    args = parser.parse_args()

    setup_logging(logging.INFO)

    model = TwoLayerLorenz96(K=args.K, J=args.J)
    p = default_parameters()
    u0 = default_initial_condition(model, args.seed)
    t_eval = np.arange(0.0, args.t_end, args.dt_save)

    sol = solve(
        TwoLayerEvaluator(model), u0, (0.0, args.t_end), p,
        t_eval=t_eval, observer=subgrid_observer, rtol=1e-6, atol=1e-8,
    )

    np.savez(args.output, t=sol.t, u=sol.u, subgrid=sol.saved, K=model.K, J=model.J)

    if args.no_plot:
        return

    # Discard the spin-up before looking at the X -> subgrid relation
    spin_up = sol.t.size // 5
    X = sol.u[spin_up:, model.slow_slice]
    fig, ax = plt.subplots()
    ax.scatter(X.ravel(), sol.saved[spin_up:].ravel(), s=1, alpha=0.3)
    ax.set_xlabel("$X_i$")
    ax.set_ylabel(r"$\frac{hc}{b}\sum_j Y_{i,j}$")
    ax.set_title(f"Subgrid forcing, K={model.K}, J={model.J}")
    plt.show()


if __name__ == "__main__":
    main()
