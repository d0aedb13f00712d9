import numpy as np

from steppers.stencil import StencilIndex, euler_step


class StencilStepperNumPy:
    def __init__(
        self, dim: int, n: int, alpha: float, dt: float, h: float, precision="f64"
    ):
        self.dim = dim
        self.n = n
        self.alpha = alpha
        self.dt = dt
        self.h = h

        self.dtype = np.float32 if precision == "f32" else np.float64
        self.index = StencilIndex(dim, n)

        # Two owned buffers, swapped after every step
        self.u = np.zeros(self.index.size, dtype=self.dtype)
        self.u_new = np.zeros(self.index.size, dtype=self.dtype)

    def load(self, field):
        self.u[:] = field
        self.u_new[:] = 0.0

    @property
    def field(self):
        return self.u

    def step(self):
        euler_step(self.u, self.u_new, self.index, self.alpha, self.dt, self.h)
        self.u, self.u_new = self.u_new, self.u

    def run(self, num_steps: int):
        for _ in range(num_steps):
            self.step()
