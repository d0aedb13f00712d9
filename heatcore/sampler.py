import logging
import math

import numpy as np

from heatcore.configs import HeatConfig
from heatcore.planner import grid_spacing, plan
from heatcore.presets import build_initial_field
from heatcore.result import HeatResult, freeze
from steppers.stepper_jax import StencilStepperJax
from steppers.stepper_numpy import StencilStepperNumPy

logger = logging.getLogger(__name__)


def make_stepper(config: HeatConfig, dt: float, h: float):
    match config.backend:
        case "numpy":
            stepper_cls = StencilStepperNumPy
        case "jax":
            stepper_cls = StencilStepperJax
        case _:
            raise ValueError(f"Unknown stepper backend: {config.backend}")
    return stepper_cls(
        config.dim, config.n, config.alpha, dt, h, precision=config.precision
    )


def snapshot_stride(num_steps: int, max_snapshots: int) -> int:
    # ceil keeps the recorded count at most max_snapshots + 1
    return max(1, math.ceil(num_steps / (max_snapshots - 1)))


def run(config: HeatConfig) -> HeatResult:
    step_plan = plan(config.n, config.alpha, config.dt, config.t_end, config.dim)
    h = grid_spacing(config.n)
    dtype = np.float32 if config.precision == "f32" else np.float64

    initial = build_initial_field(config.n, config.dim, config.initial, dtype=dtype)
    stepper = make_stepper(config, step_plan.dt, h)
    stepper.load(initial)

    snapshots = [freeze(initial)]
    times = [0.0]

    num_steps = step_plan.num_steps
    stride = snapshot_stride(num_steps, config.max_snapshots)
    logger.debug(
        "Running %dD '%s' on %s backend: %d steps, recording every %d",
        config.dim,
        config.initial.value,
        config.backend,
        num_steps,
        stride,
    )

    for n in range(1, num_steps + 1):
        stepper.step()
        if n % stride == 0 or n == num_steps:
            snapshots.append(freeze(stepper.field, dtype=dtype))
            times.append(n * step_plan.dt)

    logger.info(
        "Finished %dD run: %d steps of dt=%.4g, %d snapshots",
        config.dim,
        num_steps,
        step_plan.dt,
        len(snapshots),
    )
    return HeatResult(
        dim=config.dim,
        n=config.n,
        grid_size=config.grid_size,
        h=h,
        steps=num_steps,
        dt=step_plan.dt,
        snapshots=tuple(snapshots),
        times=tuple(times),
        config=config,
    )


def run_1d(**fields) -> HeatResult:
    return run(HeatConfig(dim=1, **fields))


def run_2d(**fields) -> HeatResult:
    return run(HeatConfig(dim=2, **fields))


def run_3d(**fields) -> HeatResult:
    return run(HeatConfig(dim=3, **fields))
