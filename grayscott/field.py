"""
Concentration Field

Two chemical species (U, V) stored as float64 arrays of shape
(height, width), row-major. Every coordinate access wraps modulo the
grid size, so the grid is a torus and no edge cell is special.
"""

import numpy as np

from .errors import InvalidDimensions

CHANNELS = ("u", "v")


def check_dimensions(width, height):
    """Raise InvalidDimensions unless both sizes are positive integers."""
    if int(width) <= 0 or int(height) <= 0:
        raise InvalidDimensions(
            f"Grid must be at least 1x1, got {width}x{height}")


class Field:
    """U and V concentrations on a toroidal grid."""

    def __init__(self, width, height, u=None, v=None):
        check_dimensions(width, height)
        self.width = int(width)
        self.height = int(height)
        shape = (self.height, self.width)
        if u is None:
            u = np.ones(shape)
        if v is None:
            v = np.zeros(shape)
        self.u = np.asarray(u, dtype=np.float64)
        self.v = np.asarray(v, dtype=np.float64)
        if self.u.shape != shape or self.v.shape != shape:
            raise ValueError(
                f"Channel shapes {self.u.shape}/{self.v.shape} do not match "
                f"{self.width}x{self.height}")

    @classmethod
    def uniform(cls, width, height, u=1.0, v=0.0):
        """Field with every cell at the same (u, v)."""
        check_dimensions(width, height)
        shape = (int(height), int(width))
        return cls(width, height,
                   u=np.full(shape, u, dtype=np.float64),
                   v=np.full(shape, v, dtype=np.float64))

    @classmethod
    def from_arrays(cls, u, v):
        """Build a field from two same-shaped 2D arrays (copied as float64)."""
        u = np.array(u, dtype=np.float64)
        v = np.array(v, dtype=np.float64)
        if u.ndim != 2 or u.shape != v.shape:
            raise InvalidDimensions(
                f"Expected two equal 2D arrays, got {u.shape} and {v.shape}")
        height, width = u.shape
        return cls(width, height, u=u, v=v)

    @property
    def shape(self):
        return (self.height, self.width)

    def channel(self, name):
        """Return the live array for channel 'u' or 'v'."""
        if name == "u":
            return self.u
        if name == "v":
            return self.v
        raise ValueError(f"Unknown channel: {name!r}. Expected one of {CHANNELS}")

    def get(self, x, y, channel):
        return float(self.channel(channel)[y % self.height, x % self.width])

    def set(self, x, y, channel, value):
        self.channel(channel)[y % self.height, x % self.width] = value

    def swap_with(self, other):
        """Exchange buffers with another field of the same shape (no copy)."""
        if other.shape != self.shape:
            raise ValueError(
                f"Cannot swap {self.width}x{self.height} field with "
                f"{other.width}x{other.height} field")
        self.u, other.u = other.u, self.u
        self.v, other.v = other.v, self.v

    def copy(self):
        return Field(self.width, self.height, u=self.u.copy(), v=self.v.copy())

    def is_finite(self):
        return bool(np.isfinite(self.u).all() and np.isfinite(self.v).all())

    @property
    def stats(self):
        """Return current field statistics."""
        return {
            "mass": float(self.v.sum()),
            "mean": float(self.v.mean()),
            "max": float(self.v.max()),
            "alive_pct": float((self.v > 0.01).sum()) / self.v.size * 100,
        }

    def __repr__(self):
        return f"Field({self.width}x{self.height})"
