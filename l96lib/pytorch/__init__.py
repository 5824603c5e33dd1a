"""PyTorch Lorenz-96 right-hand sides (batched over leading axes, autograd-friendly)."""

from .models import lorenz96_layer, one_layer_rhs, subgrid_forcing, two_layer_rhs

__all__ = [
    "lorenz96_layer",
    "one_layer_rhs",
    "subgrid_forcing",
    "two_layer_rhs",
]
