import jax
import jax.numpy as jnp
from jax import jit, lax

from steppers.stencil import StencilIndex


class StencilStepperJax:
    def __init__(
        self, dim: int, n: int, alpha: float, dt: float, h: float, precision="f64"
    ):
        if precision == "f64":
            jax.config.update("jax_enable_x64", True)
        else:
            jax.config.update("jax_enable_x64", False)

        self.dim = dim
        self.n = n
        self.alpha = alpha
        self.dt = dt
        self.h = h

        self.dtype = jnp.float64 if precision == "f64" else jnp.float32
        self.index = StencilIndex(dim, n)
        self.interior = jnp.asarray(self.index.interior)
        self.plus = jnp.asarray(self.index.plus)
        self.minus = jnp.asarray(self.index.minus)

        self.u = jnp.zeros(self.index.size, dtype=self.dtype)

    @property
    def params(self):
        return (self.interior, self.plus, self.minus, self.alpha, self.dt, self.h)

    @staticmethod
    @jit
    def step_fn(u, params):
        interior, plus, minus, alpha, dt, h = params
        center = u[interior]
        # plus has one row per axis, so 2 * rows neighbours per point
        laplacian = (
            jnp.sum(u[plus] + u[minus], axis=0) - 2.0 * plus.shape[0] * center
        ) / (h * h)

        # Functional update: the step reads u and returns a new buffer
        return u.at[interior].set(center + alpha * dt * laplacian)

    def load(self, field):
        self.u = jnp.asarray(field, dtype=self.dtype)

    @property
    def field(self):
        return self.u

    def step(self):
        self.u = self.step_fn(self.u, self.params).block_until_ready()

    def run(self, num_steps: int):
        params = self.params

        def scan_body(carry, _):
            return StencilStepperJax.step_fn(carry, params), None

        final_u, _ = lax.scan(scan_body, self.u, None, length=num_steps)
        self.u = final_u.block_until_ready()
