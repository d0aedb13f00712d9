from enum import Enum

import numpy as np

from heatcore import grid


class Preset1D(str, Enum):
    POINT = "point"
    HALF = "half"
    BUMP = "bump"
    TWO_HUMPS = "two-humps"


class Preset2D(str, Enum):
    POINT = "point"
    HALF = "half"
    CORNER = "corner"
    TWO_SPOTS = "two-spots"


class Preset3D(str, Enum):
    POINT = "point"
    CORNER = "corner"
    HALF = "half"
    TWO_SPOTS = "two-spots"


PRESETS = {1: Preset1D, 2: Preset2D, 3: Preset3D}


def parse_preset(dim: int, tag):
    if dim not in PRESETS:
        raise ValueError(f"Unsupported dimensionality: {dim}")
    presets = PRESETS[dim]
    if isinstance(tag, presets):
        return tag
    try:
        return presets(tag)
    except ValueError:
        choices = ", ".join(p.value for p in presets)
        raise ValueError(
            f"Unknown {dim}D initial condition {tag!r} (expected one of: {choices})"
        ) from None


def _gaussian(x, center, sharpness=80.0):
    return np.exp(-sharpness * (x - center) ** 2)


def _field_1d(x, preset: Preset1D):
    match preset:
        case Preset1D.POINT:
            return np.abs(x - 0.5) <= 0.05
        case Preset1D.HALF:
            return x < 0.5
        case Preset1D.BUMP:
            return _gaussian(x, 0.5)
        case Preset1D.TWO_HUMPS:
            return _gaussian(x, 0.3) + _gaussian(x, 0.7)


def _field_2d(x, y, preset: Preset2D):
    match preset:
        case Preset2D.POINT:
            return (np.abs(x - 0.5) <= 0.08) & (np.abs(y - 0.5) <= 0.08)
        case Preset2D.HALF:
            return x < 0.5
        case Preset2D.CORNER:
            return (x < 0.3) & (y < 0.3)
        case Preset2D.TWO_SPOTS:
            left = (x - 0.25) ** 2 + (y - 0.5) ** 2 < 0.04
            right = (x - 0.75) ** 2 + (y - 0.5) ** 2 < 0.04
            return left | right


def _field_3d(x, y, z, preset: Preset3D):
    match preset:
        case Preset3D.POINT:
            return (x - 0.5) ** 2 + (y - 0.5) ** 2 + (z - 0.5) ** 2 < 0.04
        case Preset3D.CORNER:
            return (x < 0.35) & (y < 0.35) & (z < 0.35)
        case Preset3D.HALF:
            return x < 0.5
        case Preset3D.TWO_SPOTS:
            left = (x - 0.25) ** 2 + (y - 0.5) ** 2 + (z - 0.5) ** 2 < 0.03
            right = (x - 0.75) ** 2 + (y - 0.5) ** 2 + (z - 0.5) ** 2 < 0.03
            return left | right


def build_initial_field(n: int, dim: int, preset, dtype=np.float64) -> np.ndarray:
    """
    Build the t=0 field for a preset as a flat (N+2)^dim buffer.

    Boundary entries are 0. The 1D and 3D presets sample interior point i
    at x = i*h with h = 1/(N+1); the 2D presets use cell-centred coordinates
    x = (j - 0.5)/N, y = (i - 0.5)/N with j the last (fastest) axis.
    """
    preset = parse_preset(dim, preset)
    h = 1.0 / (n + 1)
    coords = grid.coordinates(dim, n + 2).astype(np.float64)

    match dim:
        case 1:
            values = _field_1d(coords[0] * h, preset)
        case 2:
            x = (coords[1] - 0.5) / n
            y = (coords[0] - 0.5) / n
            values = _field_2d(x, y, preset)
        case 3:
            values = _field_3d(coords[0] * h, coords[1] * h, coords[2] * h, preset)

    u = np.zeros(coords.shape[1], dtype=dtype)
    interior = grid.interior_offsets(dim, n)
    u[interior] = np.asarray(values, dtype=np.float64)[interior]
    return u
