import numpy as np


def lorenz96_layer(
    u: np.ndarray,
    c: float = 1.0,
    b: float = 1.0,
    *,
    reverse: bool = False,
) -> np.ndarray:
    """Lorenz-96 advection and damping term on a periodic lattice.

    ``c*b*(u[j+1] - u[j-2])*u[j-1] - c*u[j]`` with indices taken modulo
    ``u.size``. With ``reverse=True`` the stencil is mirrored:
    ``c*b*(u[j-1] - u[j+2])*u[j+1] - c*u[j]``.
    """
    if reverse:
        ahead, behind2, advect = np.roll(u, 1), np.roll(u, -2), np.roll(u, -1)
    else:
        ahead, behind2, advect = np.roll(u, -1), np.roll(u, 2), np.roll(u, 1)
    return (c * b) * (ahead - behind2) * advect - c * u


def lorenz96_layer_jacobian(
    u: np.ndarray,
    c: float = 1.0,
    b: float = 1.0,
    *,
    reverse: bool = False,
) -> np.ndarray:
    """Dense Jacobian of :func:`lorenz96_layer` with respect to ``u``."""
    m = u.size
    jac = np.zeros((m, m), dtype=np.float64)

    idx = np.arange(m)
    s = -1 if reverse else 1
    ip1 = (idx + s) % m
    im1 = (idx - s) % m
    im2 = (idx - 2 * s) % m

    cb = c * b
    # np.add.at accumulates when stencil points coincide (m < 4)
    np.add.at(jac, (idx, ip1), cb * u[im1])
    np.add.at(jac, (idx, im2), -cb * u[im1])
    np.add.at(jac, (idx, im1), cb * (u[ip1] - u[im2]))
    np.add.at(jac, (idx, idx), -c)
    return jac


__all__ = [
    "lorenz96_layer",
    "lorenz96_layer_jacobian",
]
