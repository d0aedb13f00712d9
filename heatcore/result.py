from dataclasses import dataclass, field

import numpy as np

from heatcore import grid
from heatcore.configs import HeatConfig


@dataclass(frozen=True, slots=True)
class HeatResult:
    dim: int
    n: int
    grid_size: int  # Points per axis including boundary (N+2)
    h: float
    steps: int  # Steps actually taken
    dt: float  # Step size actually used
    snapshots: tuple = ()
    times: tuple = ()
    config: HeatConfig | None = field(default=None, compare=False)

    def __len__(self):
        return len(self.snapshots)

    def cell_at(self, snapshot_index: int, *coord) -> float:
        return cell_at(self, snapshot_index, *coord)


def freeze(field_values, dtype=None) -> np.ndarray:
    """Copy a field into a new read-only array."""
    snapshot = np.array(field_values, dtype=dtype, copy=True)
    snapshot.setflags(write=False)
    return snapshot


def cell_at(result: HeatResult, snapshot_index: int, *coord) -> float:
    """
    Value of one grid point of a snapshot.

    Out-of-range snapshot indices or coordinates read as 0.0, so callers can
    probe around the edges of the grid without their own checks.
    """
    if len(coord) != result.dim:
        raise ValueError(
            f"Expected {result.dim} coordinates for a {result.dim}D result, "
            f"got {len(coord)}"
        )
    if snapshot_index < 0 or snapshot_index >= len(result.snapshots):
        return 0.0
    if any(c < 0 or c >= result.grid_size for c in coord):
        return 0.0
    offset = grid.encode(coord, result.grid_size)
    return float(result.snapshots[snapshot_index][offset])


def grid_x(result: HeatResult, i: int) -> float:
    return i * result.h


def clamp_snapshot_index(result: HeatResult, index: int) -> int:
    return max(0, min(index, len(result.snapshots) - 1))


def as_grid(result: HeatResult, snapshot_index: int) -> np.ndarray:
    return result.snapshots[snapshot_index].reshape((result.grid_size,) * result.dim)


def center_slice(result: HeatResult, snapshot_index: int, axis: int = 0) -> np.ndarray:
    """Plane through the middle of a 3D snapshot, normal to ``axis``."""
    if result.dim != 3:
        raise ValueError(f"center_slice needs a 3D result, got {result.dim}D")
    volume = as_grid(result, snapshot_index)
    return np.take(volume, result.grid_size // 2, axis=axis)


def sup_norm(snapshot) -> float:
    return float(np.max(np.abs(snapshot)))


def sup_norm_history(result: HeatResult) -> list[float]:
    return [sup_norm(s) for s in result.snapshots]


def scale_max(snapshot) -> float:
    # Colour-scale ceiling: largest finite value, 1.0 for an all-cold field
    values = np.asarray(snapshot)
    finite = values[np.isfinite(values)]
    top = float(finite.max()) if finite.size else 0.0
    return top if top > 0 else 1.0
