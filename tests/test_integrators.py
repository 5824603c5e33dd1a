import logging

import numpy as np
import pytest

from l96lib.numpy import (
    TwoLayerLorenz96,
    OneLayerEvaluator,
    TwoLayerEvaluator,
    default_parameters,
    default_initial_condition,
    subgrid_forcing,
    subgrid_observer,
    integrate,
    solve,
    resolve_stepper,
    register_stepper,
    available_steppers,
)
from l96lib.numpy.steppers import euler_step, rk4_step


def test_resolve_stepper_names_and_callables():
    assert resolve_stepper("RK4") is rk4_step
    assert resolve_stepper(None) is rk4_step
    assert resolve_stepper(euler_step) is euler_step
    assert {"euler", "rk2", "rk4"} <= set(available_steppers())
    with pytest.raises(ValueError, match="Available"):
        resolve_stepper("leapfrog")


def test_register_stepper_refuses_silent_overwrite():
    def half_euler(f, t, u, dt, p):
        return euler_step(f, t, u, 0.5 * dt, p)

    register_stepper("half_euler_test", half_euler)
    assert resolve_stepper("half_euler_test") is half_euler
    with pytest.raises(ValueError):
        register_stepper("half_euler_test", half_euler)
    register_stepper("half_euler_test", euler_step, overwrite=True)
    assert resolve_stepper("half_euler_test") is euler_step
    with pytest.raises(TypeError):
        register_stepper("not_callable", 3)


def test_rk4_converges_on_one_layer_model():
    F = 8.0
    u0 = np.full(10, F)
    u0[4] += 0.01
    f = OneLayerEvaluator()

    reference = integrate(f, u0, np.linspace(0.0, 1.0, 6401), (F,), save_every=64)
    errors = []
    for n_steps in (100, 200, 400):
        sol = integrate(f, u0, np.linspace(0.0, 1.0, n_steps + 1), (F,), save_every=n_steps // 100)
        assert sol.u.shape == (101, 10)
        assert np.allclose(sol.t, reference.t)
        errors.append(np.max(np.abs(sol.u[-1] - reference.u[-1])))

    # halving dt divides the error by about 2**4
    ratios = np.array(errors[:-1]) / np.array(errors[1:])
    assert np.all((ratios > 12.0) & (ratios < 20.0))
    assert errors[-1] < 1e-5


def test_integrate_saves_observer_output_at_recorded_steps():
    model = TwoLayerLorenz96(K=4, J=3)
    f = TwoLayerEvaluator(model)
    p = default_parameters()
    u0 = default_initial_condition(model, 5)
    t = np.linspace(0.0, 0.05, 51)

    sol = integrate(f, u0, t, p, observer=subgrid_observer, save_every=10)
    assert sol.t.shape == (6,)
    assert np.allclose(sol.t, t[::10])
    assert sol.saved.shape == (6, model.K)
    for k in range(sol.t.size):
        assert np.allclose(sol.saved[k], subgrid_forcing(sol.u[k], sol.t[k], model, p))
    # initial state is kept as given
    assert np.array_equal(sol.u[0], u0)


def test_integrate_without_observer_has_no_saved_values():
    sol = integrate(OneLayerEvaluator(), np.ones(5), np.linspace(0.0, 0.1, 3), (8.0,))
    assert sol.saved is None


def test_observer_receives_step_context():
    model = TwoLayerLorenz96(K=3, J=2)
    f = TwoLayerEvaluator(model)
    p = default_parameters()
    seen = []

    def observer(u, t, context):
        seen.append((t, context.time, context.model, context.parameters))
        assert context.state is u
        return t

    sol = integrate(f, np.zeros(model.N), np.array([0.0, 0.1, 0.2]), p, observer=observer)
    assert np.allclose(sol.saved, [0.0, 0.1, 0.2])
    assert all(ctx_model is model and params is p for _, _, ctx_model, params in seen)
    assert all(t == ctx_t for t, ctx_t, _, _ in seen)


@pytest.mark.parametrize(
    "u0, t, save_every, exc",
    [
        ([1.0, 2.0, 3.0], np.linspace(0, 1, 3), 1, TypeError),
        (np.ones((2, 3)), np.linspace(0, 1, 3), 1, ValueError),
        (np.ones(3), [0.0, 1.0], 1, TypeError),
        (np.ones(3), np.zeros((2, 2)), 1, ValueError),
        (np.ones(3), np.array([0.0]), 1, ValueError),
        (np.ones(3), np.linspace(0, 1, 3), 0, ValueError),
        (np.ones(3), np.linspace(0, 1, 3), 1.0, TypeError),
        (np.ones(3), np.linspace(0, 1, 3), True, TypeError),
        (np.ones(3), np.array([0.0, 0.01, 0.5]), 1, ValueError),
        (np.ones(3), np.array([0.0, 0.0, 0.0]), 1, ValueError),
        (np.ones(3), np.linspace(1, 0, 3), 1, ValueError),
    ],
)
def test_integrate_input_validation(u0, t, save_every, exc):
    with pytest.raises(exc):
        integrate(OneLayerEvaluator(), u0, t, (8.0,), save_every=save_every)


def test_integrate_rejects_wrong_state_size_for_two_layer():
    model = TwoLayerLorenz96(K=4, J=3)
    with pytest.raises(ValueError, match="expects 16"):
        integrate(TwoLayerEvaluator(model), np.zeros(15), np.linspace(0, 1, 3), default_parameters())


def test_integrate_rejects_plain_callables():
    with pytest.raises(TypeError):
        integrate(lambda du, u, p, t: None, np.zeros(3), np.linspace(0, 1, 3), (8.0,))


def test_integrate_warns_on_divergence(caplog):
    u0 = 1e200 * np.array([1.0, -2.0, 3.0, -4.0, 5.0, -6.0])
    with caplog.at_level(logging.WARNING, logger="l96lib"), np.errstate(over="ignore", invalid="ignore"):
        sol = integrate(OneLayerEvaluator(), u0, np.linspace(0.0, 1.0, 5), (8.0,))
    assert not np.all(np.isfinite(sol.u[-1]))
    assert "non-finite" in caplog.text


def test_solve_matches_fixed_step_integration():
    model = TwoLayerLorenz96(K=4, J=3)
    f = TwoLayerEvaluator(model)
    p = (1.0, 4.0, 4.0, 10.0)
    u0 = default_initial_condition(model, 3, noise=0.1)
    t = np.linspace(0.0, 0.2, 201)

    reference = integrate(f, u0, t, p)
    sol = solve(
        f, u0, (0.0, 0.2), p,
        t_eval=t[::50], rtol=1e-10, atol=1e-12, observer=subgrid_observer,
    )
    assert sol.u.shape == (5, model.N)
    assert np.allclose(sol.u, reference.u[::50], atol=1e-7)
    assert sol.saved.shape == (5, model.K)
    assert np.allclose(sol.saved[-1], subgrid_forcing(sol.u[-1], 0.2, model, p))


def test_solve_with_implicit_method_uses_jacobian():
    f = OneLayerEvaluator()
    u0 = np.full(8, 8.0)
    u0[0] += 0.01
    explicit = solve(f, u0, (0.0, 0.5), (8.0,), t_eval=[0.5], rtol=1e-9, atol=1e-11)
    implicit = solve(f, u0, (0.0, 0.5), (8.0,), method="Radau", t_eval=[0.5], rtol=1e-9, atol=1e-11)
    assert np.allclose(explicit.u, implicit.u, atol=1e-6)
    assert explicit.saved is None


def test_solve_rejects_wrong_state_size():
    model = TwoLayerLorenz96(K=2, J=2)
    with pytest.raises(ValueError):
        solve(TwoLayerEvaluator(model), np.zeros(5), (0.0, 1.0), default_parameters())


def test_integrate_rejects_non_uniform_grid():
    u0 = np.full(5, 8.0)
    with pytest.raises(ValueError, match="uniformly spaced"):
        integrate(OneLayerEvaluator(), u0, np.array([0.0, 0.01, 0.5]), (8.0,))


def test_integrate_accepts_numpy_integer_save_every():
    t = np.linspace(0.0, 0.1, 11)
    sol = integrate(OneLayerEvaluator(), np.ones(5), t, (8.0,), save_every=np.arange(6)[5])
    assert np.allclose(sol.t, [0.0, 0.05, 0.1])
