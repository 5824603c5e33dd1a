import torch
from typing import Sequence

from ..numpy.layout import TwoLayerLorenz96

Tensor = torch.Tensor


def lorenz96_layer(u: Tensor, c: float = 1.0, b: float = 1.0, reverse: bool = False) -> Tensor:
    """Lorenz-96 layer term along the last axis; leading axes are batch axes."""
    if reverse:
        ahead, behind2, advect = u.roll(1, -1), u.roll(-2, -1), u.roll(-1, -1)
    else:
        ahead, behind2, advect = u.roll(-1, -1), u.roll(2, -1), u.roll(1, -1)
    return (c * b) * (ahead - behind2) * advect - c * u


def one_layer_rhs(u: Tensor, F) -> Tensor:
    return lorenz96_layer(u) + F


def subgrid_forcing(u: Tensor, model: TwoLayerLorenz96, p: Sequence[float]) -> Tensor:
    h, c, b, _ = p
    hcb = h * c / b
    Y = u[..., model.K : model.N]
    return hcb * Y.reshape(*Y.shape[:-1], model.K, model.J).sum(dim=-1)


def two_layer_rhs(u: Tensor, model: TwoLayerLorenz96, p: Sequence[float]) -> Tensor:
    """Two-layer tendency; returns a new tensor so it can sit inside autograd graphs."""
    h, c, b, F = p
    hcb = h * c / b

    X = u[..., : model.K]
    Y = u[..., model.K : model.N]

    dX = lorenz96_layer(X) + F - subgrid_forcing(u, model, p)
    dY = lorenz96_layer(Y, c, b, reverse=True) + hcb * X.repeat_interleave(model.J, dim=-1)
    return torch.cat([dX, dY], dim=-1)


__all__ = [
    "lorenz96_layer",
    "one_layer_rhs",
    "subgrid_forcing",
    "two_layer_rhs",
]
