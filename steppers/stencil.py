import numpy as np

from heatcore import grid


class StencilIndex:
    """Interior offsets and the 2*dim neighbour offsets of each interior point."""

    def __init__(self, dim: int, n: int):
        self.dim = dim
        self.n = n
        self.size = (n + 2) ** dim
        self.interior = grid.interior_offsets(dim, n)
        axis_strides = np.asarray(grid.strides(dim, n + 2))[:, np.newaxis]
        # Row k holds the +/- stride_k neighbours of every interior point
        self.plus = self.interior[np.newaxis, :] + axis_strides
        self.minus = self.interior[np.newaxis, :] - axis_strides

    @property
    def center_weight(self) -> int:
        return 2 * self.dim


def laplacian(u, index: StencilIndex, h: float):
    """Discrete Laplacian at every interior point (in index.interior order)."""
    acc = -index.center_weight * u[index.interior]
    for axis in range(index.dim):
        acc += u[index.plus[axis]] + u[index.minus[axis]]
    return acc / (h * h)


def euler_step(u, u_new, index: StencilIndex, alpha: float, dt: float, h: float):
    """
    One forward-Euler step: read ``u``, write interior points of ``u_new``.

    Boundary entries of ``u_new`` are never written, so they keep whatever the
    caller initialised them to (zero for Dirichlet runs).
    """
    if u is u_new or np.shares_memory(u, u_new):
        raise ValueError("euler_step needs separate read and write buffers")
    u_new[index.interior] = u[index.interior] + dt * alpha * laplacian(u, index, h)
