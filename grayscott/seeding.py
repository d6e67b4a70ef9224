"""
Initial Conditions

Every seed starts from the homogeneous state U=1, V=0, which is a fixed
point of Gray-Scott: without a perturbation nothing ever forms. The
random and rect seeds therefore always paint at least one patch of
U=0.5, V=1.0. Sample seeds take V straight from a grayscale grid.
"""

from dataclasses import dataclass, field as dc_field
from typing import Optional

import numpy as np
from scipy.ndimage import gaussian_filter, zoom

from .errors import InvalidDimensions
from .field import Field, check_dimensions

PATCH_U = 0.5
PATCH_V = 1.0


# --- Seed modes (what RunConfig.seed_mode holds) ---

@dataclass(frozen=True)
class Random:
    """Square patches scattered by numpy's default_rng(rng_seed)."""
    rng_seed: Optional[int] = None
    patches: Optional[int] = None


@dataclass(frozen=True)
class Rect:
    """One centered square patch (deterministic, 4-fold symmetric)."""


@dataclass(frozen=True, eq=False)
class FromSample:
    """V taken from a 2D grid of intensities in [0, 1]."""
    grid: np.ndarray = dc_field(repr=False)


def _paint_patch(f, x0, y0, side):
    """Paint a side x side patch at (x0, y0), wrapping around the edges."""
    rows = np.arange(y0, y0 + side) % f.height
    cols = np.arange(x0, x0 + side) % f.width
    f.u[np.ix_(rows, cols)] = PATCH_U
    f.v[np.ix_(rows, cols)] = PATCH_V


def seed_random(width, height, rng_seed=None, patches=None):
    """Seed random square patches of V.

    Patch side is 1/32 of the shorter edge (at least one cell); the default
    patch count grows with area, one patch per 128x128 cells.
    """
    check_dimensions(width, height)
    f = Field.uniform(width, height)
    rng = np.random.default_rng(rng_seed)
    side = max(1, min(f.width, f.height) // 32)
    if patches is None:
        patches = max(1, (f.width * f.height) // 16384)
    for _ in range(max(1, patches)):
        x0 = int(rng.integers(0, f.width))
        y0 = int(rng.integers(0, f.height))
        _paint_patch(f, x0, y0, side)
    return f


def seed_rect(width, height):
    """Seed a single centered square patch.

    The side shares the parity of the shorter edge, so on square grids the
    patch occupies [start, size - start) on both axes and is symmetric
    under the grid's reflections and quarter turns.
    """
    check_dimensions(width, height)
    f = Field.uniform(width, height)
    size = min(f.width, f.height)
    side = max(1, size // 4)
    side -= (size - side) % 2
    if side < 1:
        side += 2
    _paint_patch(f, (f.width - side) // 2, (f.height - side) // 2, side)
    return f


def _as_grid(grid):
    grid = np.asarray(grid, dtype=np.float64)
    if grid.ndim != 2 or grid.shape[0] == 0 or grid.shape[1] == 0:
        raise InvalidDimensions(
            f"Sample grid must be a non-empty 2D array, got shape {grid.shape}")
    return grid


def seed_from_sample(grid):
    """Seed from intensities: V = intensity, U = 1 - intensity.

    The field takes the grid's dimensions (rows are y, columns are x).
    """
    grid = _as_grid(grid)
    return Field.from_arrays(1.0 - grid, grid)


def resize_sample(grid, width, height, blur=0.0):
    """Resample an intensity grid to width x height (bilinear).

    `blur` is a gaussian sigma in output cells, applied after resampling
    to soften hard image edges. Result is clipped back to [0, 1].
    """
    check_dimensions(width, height)
    grid = _as_grid(grid)
    h, w = grid.shape
    if (h, w) != (height, width):
        grid = zoom(grid, (height / h, width / w), order=1, mode="nearest",
                    grid_mode=True)
        grid = grid[:height, :width]
    if blur > 0:
        grid = gaussian_filter(grid, blur, mode="wrap")
    return np.clip(grid, 0.0, 1.0)


def seed_field(mode, width, height):
    """Build the initial field for a seed mode."""
    if isinstance(mode, Random):
        return seed_random(width, height, mode.rng_seed, mode.patches)
    if isinstance(mode, Rect):
        return seed_rect(width, height)
    if isinstance(mode, FromSample):
        return seed_from_sample(mode.grid)
    raise ValueError(f"Unknown seed mode: {mode!r}")
