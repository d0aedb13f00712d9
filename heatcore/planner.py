import logging
import math
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Fraction of the stability bound actually used.
SAFETY_FACTOR = 0.95


@dataclass(frozen=True, slots=True)
class StepPlan:
    dt: float
    num_steps: int
    max_stable_dt: float
    safe_dt: float
    clamped: bool


def grid_spacing(n: int) -> float:
    return 1.0 / (n + 1)


def stability_bound(n: int, alpha: float, dim: int) -> float:
    """Largest stable forward-Euler step: h^2 / (2 * dim * alpha)."""
    h = grid_spacing(n)
    return (h * h) / (2 * dim * alpha)


def plan(n: int, alpha: float, requested_dt: float, t_end: float, dim: int) -> StepPlan:
    max_stable_dt = stability_bound(n, alpha, dim)
    safe_dt = min(requested_dt, SAFETY_FACTOR * max_stable_dt)
    clamped = safe_dt < requested_dt

    num_steps = max(1, math.floor(t_end / safe_dt))
    # Renormalising to land on t_end must not push dt past safe_dt.
    if t_end / num_steps > safe_dt:
        num_steps += 1
    dt = t_end / num_steps

    if clamped:
        logger.info(
            "Requested dt=%.4g exceeds %.2f x stability bound %.4g; using dt=%.4g",
            requested_dt,
            SAFETY_FACTOR,
            max_stable_dt,
            dt,
        )
    logger.debug(
        "Plan for %dD, n=%d, alpha=%g: %d steps of dt=%.6g (bound %.6g)",
        dim,
        n,
        alpha,
        num_steps,
        dt,
        max_stable_dt,
    )
    return StepPlan(
        dt=dt,
        num_steps=num_steps,
        max_stable_dt=max_stable_dt,
        safe_dt=safe_dt,
        clamped=clamped,
    )
