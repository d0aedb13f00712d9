import numbers
from dataclasses import dataclass

from heatcore.presets import Preset1D, Preset2D, Preset3D, parse_preset

# Snapshot cap per dimensionality; 3D buffers are (N+2)^3 so fewer are kept.
MAX_SNAPSHOTS = {1: 201, 2: 201, 3: 101}

BACKENDS = ("numpy", "jax")
PRECISIONS = ("f32", "f64")

# Starting values used by the interactive views for each dimensionality.
DEFAULTS = {
    1: {"n": 50, "alpha": 0.2, "dt": 0.001, "t_end": 1.0, "initial": Preset1D.POINT},
    2: {"n": 20, "alpha": 0.2, "dt": 0.001, "t_end": 1.0, "initial": Preset2D.POINT},
    3: {"n": 12, "alpha": 0.15, "dt": 0.0003, "t_end": 0.5, "initial": Preset3D.POINT},
}


@dataclass(slots=True, kw_only=True)
class HeatConfig:
    dim: int = 2
    n: int = 20  # Interior points per axis
    alpha: float = 0.2  # Diffusivity
    dt: float = 0.001  # Requested step, clamped to the stable range
    t_end: float = 1.0
    initial: str = "point"
    max_snapshots: int | None = None
    backend: str = "numpy"
    precision: str = "f64"

    def __post_init__(self):
        if self.dim not in MAX_SNAPSHOTS:
            raise ValueError(f"Unsupported dimensionality: {self.dim}")
        if (
            isinstance(self.n, bool)
            or not isinstance(self.n, numbers.Integral)
            or self.n < 1
        ):
            raise ValueError(f"n must be an integer >= 1, got {self.n!r}")
        if not self.alpha > 0:
            raise ValueError(f"alpha must be positive, got {self.alpha!r}")
        if not self.dt > 0:
            raise ValueError(f"dt must be positive, got {self.dt!r}")
        if not self.t_end > 0:
            raise ValueError(f"t_end must be positive, got {self.t_end!r}")
        if self.backend not in BACKENDS:
            raise ValueError(f"Unknown backend: {self.backend}")
        if self.precision not in PRECISIONS:
            raise ValueError(f"Unknown precision: {self.precision}")
        if self.max_snapshots is None:
            self.max_snapshots = MAX_SNAPSHOTS[self.dim]
        elif self.max_snapshots < 2:
            raise ValueError(
                f"max_snapshots must be at least 2, got {self.max_snapshots}"
            )
        self.initial = parse_preset(self.dim, self.initial)

    @property
    def grid_size(self) -> int:
        return self.n + 2

    @classmethod
    def with_defaults(cls, dim: int, **overrides):
        if dim not in DEFAULTS:
            raise ValueError(f"Unsupported dimensionality: {dim}")
        fields = dict(DEFAULTS[dim])
        fields.update({k: v for k, v in overrides.items() if v is not None})
        return cls(dim=dim, **fields)
