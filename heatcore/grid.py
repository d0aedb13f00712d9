"""
Flat-buffer indexing for (N+2)^d grids.

Fields are stored as 1-D arrays in row-major order with the last axis
varying fastest. Axis index 0 and N+1 are the Dirichlet boundary layers.
"""

import numpy as np


def strides(dim: int, size: int) -> tuple[int, ...]:
    return tuple(size ** (dim - 1 - axis) for axis in range(dim))


def encode(coord, size: int) -> int:
    offset = 0
    for c in coord:
        offset = offset * size + c
    return offset


def decode(offset: int, dim: int, size: int) -> tuple[int, ...]:
    coord = []
    for _ in range(dim):
        offset, c = divmod(offset, size)
        coord.append(c)
    return tuple(reversed(coord))


def coordinates(dim: int, size: int) -> np.ndarray:
    """Integer coordinate of every flat offset, shape (dim, size**dim)."""
    return np.indices((size,) * dim).reshape(dim, -1)


def boundary_mask(dim: int, n: int) -> np.ndarray:
    coords = coordinates(dim, n + 2)
    return np.any((coords == 0) | (coords == n + 1), axis=0)


def interior_offsets(dim: int, n: int) -> np.ndarray:
    return np.flatnonzero(~boundary_mask(dim, n))
