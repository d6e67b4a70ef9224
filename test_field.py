#!/usr/bin/env python3
"""
Tests for the toroidal Field and the Laplacian stencils.

Verifies:
1. Coordinate wraparound on get/set
2. Buffer swap without copying
3. Dimension and channel validation
4. Laplacian neighbors wrap at the grid corners
"""

import numpy as np

from grayscott.errors import InvalidDimensions
from grayscott.field import Field
from grayscott.stencil import laplacian, laplacian_grid, laplacian_rows


def test_wraparound_get_set():
    f = Field(8, 6)
    f.set(-1, 0, "v", 0.7)
    assert f.get(7, 0, "v") == 0.7, "x=-1 should wrap to the last column"
    assert f.get(15, 6, "v") == 0.7, "x and y should wrap modulo width/height"
    f.set(3, 6, "u", 0.25)
    assert f.v.shape == (6, 8), "Arrays are (height, width)"
    assert f.u[0, 3] == 0.25, "y=height should wrap to row 0"


def test_uniform_defaults():
    f = Field(4, 3)
    assert np.all(f.u == 1.0) and np.all(f.v == 0.0), "New field starts at U=1, V=0"
    g = Field.uniform(4, 3, u=0.3, v=0.2)
    assert g.get(2, 1, "u") == 0.3 and g.get(2, 1, "v") == 0.2


def test_integer_arrays_are_stored_as_float():
    f = Field(2, 2, u=np.ones((2, 2), dtype=int), v=np.zeros((2, 2), dtype=int))
    assert f.u.dtype == np.float64 and f.v.dtype == np.float64
    f.set(0, 0, "v", 0.7)
    assert f.get(0, 0, "v") == 0.7, "Setting a fraction must not truncate"
    live = np.zeros((2, 2))
    assert Field(2, 2, v=live).v is live, "float64 arrays are kept, not copied"


def test_swap_exchanges_buffers():
    a = Field.uniform(5, 5, u=1.0, v=0.0)
    b = Field.uniform(5, 5, u=0.5, v=0.25)
    a_u, b_u = a.u, b.u
    a.swap_with(b)
    assert a.u is b_u and b.u is a_u, "Swap should exchange array objects, not copy"
    assert a.get(0, 0, "v") == 0.25


def test_swap_shape_mismatch():
    try:
        Field(4, 4).swap_with(Field(4, 5))
    except ValueError:
        pass
    else:
        raise AssertionError("Swapping different shapes should fail")


def test_invalid_dimensions():
    for w, h in [(0, 4), (4, 0), (0, 0)]:
        try:
            Field(w, h)
        except InvalidDimensions:
            continue
        raise AssertionError(f"{w}x{h} field should raise InvalidDimensions")


def test_unknown_channel():
    try:
        Field(2, 2).get(0, 0, "w")
    except ValueError:
        pass
    else:
        raise AssertionError("Unknown channel should raise ValueError")


def test_copy_is_independent():
    f = Field(3, 3)
    g = f.copy()
    g.set(1, 1, "v", 1.0)
    assert f.get(1, 1, "v") == 0.0, "Copy must not share buffers"


def test_laplacian_reads_wrapped_neighbors():
    f = Field(8, 8, v=np.zeros((8, 8)))
    f.set(7, 0, "v", 1.0)
    f.set(1, 0, "v", 2.0)
    f.set(0, 7, "v", 3.0)
    f.set(0, 1, "v", 4.0)
    f.set(5, 5, "v", 100.0)  # not a neighbor of (0, 0)
    lap = laplacian(f, 0, 0, "v", kernel="five_point")
    assert lap == 10.0, f"Five-point sum of wrapped neighbors should be 10: {lap}"

    f.set(0, 0, "v", 0.5)
    lap = laplacian(f, 0, 0, "v", kernel="five_point")
    assert lap == 8.0, f"Center weight -4 should subtract 2.0: {lap}"


def test_nine_point_diagonals_wrap():
    f = Field(8, 8, v=np.zeros((8, 8)))
    for x, y in [(7, 7), (1, 7), (7, 1), (1, 1)]:
        f.set(x, y, "v", 1.0)
    lap = laplacian(f, 0, 0, "v")
    assert abs(lap - 0.2) < 1e-15, f"Four wrapped diagonals at 0.05 each: {lap}"


def test_laplacian_of_uniform_is_zero():
    for kernel in ("nine_point", "five_point"):
        arr = np.full((7, 9), 0.37)
        assert np.allclose(laplacian_grid(arr, kernel), 0.0), kernel


def test_vectorized_matches_per_cell():
    rng = np.random.default_rng(5)
    f = Field.from_arrays(rng.random((6, 7)), rng.random((6, 7)))
    for kernel in ("nine_point", "five_point"):
        grid = laplacian_grid(f.v, kernel)
        for y in range(f.height):
            for x in range(f.width):
                expected = laplacian(f, x, y, "v", kernel)
                assert np.isclose(grid[y, x], expected, rtol=0, atol=1e-14), \
                    f"{kernel} mismatch at ({x}, {y}): {grid[y, x]} vs {expected}"


def test_row_band_matches_full_grid():
    rng = np.random.default_rng(9)
    arr = rng.random((10, 5))
    full = laplacian_grid(arr)
    band = laplacian_rows(arr, 3, 7)
    assert np.array_equal(band, full[3:7]), "Band must equal the same rows of the full grid"
    edge = laplacian_rows(arr, 9, 10)
    assert np.array_equal(edge, full[9:10]), "Last row must wrap to row 0"


def test_single_row_and_column_grids():
    arr = np.array([[0.0, 1.0, 0.0, 0.0]])
    lap = laplacian_grid(arr, "five_point")
    # Vertical neighbors of a 1-row grid are the cell itself
    assert np.allclose(lap, [[1.0, -2.0, 1.0, 0.0]]), lap


if __name__ == "__main__":
    print("\n=== Testing Field and Stencils ===\n")
    for name, fn in sorted(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()
            print(f"  ✓ {name}")
    print("\n✓ All tests passed!\n")
