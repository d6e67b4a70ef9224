"""
Color Ramps and Frame Rendering

Maps the V concentration of a field to RGB. Each ramp is a list of
(position, (r, g, b)) stops that is baked into a (256, 3) uint8 lookup
table, interpolating linearly between neighboring stops. V is clamped to
[0, 1] before lookup: overshoot near pattern fronts is expected and only
matters for display. U is never read.
"""

import numpy as np

LUT_SIZE = 256
DEFAULT_RAMP = "ocean"


def build_lut(stops, n=LUT_SIZE):
    """
    Build a lookup table by linear interpolation between color stops.

    Args:
        stops: List of (position, (r, g, b)) with positions ascending in [0, 1]
        n: Number of entries in the LUT
    """
    positions = np.array([s[0] for s in stops], dtype=np.float64)
    colors = np.array([s[1] for s in stops], dtype=np.float64)
    if len(stops) < 2 or positions[0] != 0.0 or positions[-1] != 1.0:
        raise ValueError("Color ramp needs at least two stops spanning 0.0 to 1.0")
    if np.any(np.diff(positions) < 0):
        raise ValueError("Color stop positions must be ascending")

    t = np.linspace(0.0, 1.0, n)
    lut = np.empty((n, 3), dtype=np.uint8)
    for c in range(3):
        lut[:, c] = np.round(np.interp(t, positions, colors[:, c]))
    return lut


# --- Ramp definitions: background (low V) first, foreground (high V) last ---

RAMPS = {
    # Deep blue water, cyan-white fronts
    "ocean": [
        (0.00, (0, 2, 15)),
        (0.25, (5, 20, 80)),
        (0.50, (10, 80, 160)),
        (0.75, (40, 180, 220)),
        (1.00, (200, 250, 255)),
    ],
    # Black through red to yellow-white
    "fire": [
        (0.00, (0, 0, 0)),
        (0.20, (60, 5, 0)),
        (0.40, (180, 30, 0)),
        (0.60, (240, 100, 10)),
        (0.80, (255, 200, 50)),
        (1.00, (255, 255, 200)),
    ],
    # Dark bg, green halos, pink cores
    "neon_bio": [
        (0.00, (5, 2, 8)),
        (0.15, (70, 35, 10)),
        (0.30, (20, 180, 80)),
        (0.45, (30, 220, 140)),
        (0.55, (140, 40, 180)),
        (0.70, (220, 25, 60)),
        (1.00, (255, 130, 160)),
    ],
    # Dark earth to vibrant green
    "moss": [
        (0.00, (5, 5, 2)),
        (0.20, (20, 30, 10)),
        (0.40, (40, 80, 20)),
        (0.60, (60, 160, 40)),
        (0.80, (100, 220, 80)),
        (1.00, (180, 255, 150)),
    ],
    # Black ink on paper
    "ink": [
        (0.00, (245, 240, 228)),
        (1.00, (20, 20, 30)),
    ],
    "grayscale": [
        (0.00, (0, 0, 0)),
        (1.00, (255, 255, 255)),
    ],
}

RAMP_ORDER = list(RAMPS.keys())


def get_ramp(name):
    """Get a ramp LUT (256, 3) uint8 array by name."""
    try:
        stops = RAMPS[name]
    except KeyError:
        raise ValueError(f"Unknown ramp: {name!r}. Available: {RAMP_ORDER}") from None
    return build_lut(stops)


class ColorFrame:
    """Read-only RGB snapshot of one rendered step."""

    __slots__ = ("width", "height", "index", "pixels")

    def __init__(self, pixels, index=None):
        pixels = np.array(pixels, dtype=np.uint8)
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise ValueError(f"Expected (H, W, 3) pixels, got {pixels.shape}")
        pixels.flags.writeable = False
        self.pixels = pixels
        self.height, self.width = pixels.shape[:2]
        self.index = index

    def __eq__(self, other):
        if not isinstance(other, ColorFrame):
            return NotImplemented
        return (self.index == other.index
                and np.array_equal(self.pixels, other.pixels))

    __hash__ = None

    def __repr__(self):
        return f"ColorFrame({self.width}x{self.height}, index={self.index})"


def normalize(v):
    """Stretch V to [0, 1] by its current min/max (flat fields map to 0)."""
    low = float(v.min())
    high = float(v.max())
    if not high > low:
        return np.zeros_like(v)
    return (v - low) / (high - low)


def apply_ramp(v, lut):
    """
    Apply a ramp LUT to a 2D float array.

    Args:
        v: 2D numpy array, nominally in [0, 1]; clamped before lookup
        lut: (N, 3) uint8 lookup table

    Returns:
        (H, W, 3) uint8 RGB image
    """
    indices = np.rint(np.clip(v, 0.0, 1.0) * (len(lut) - 1)).astype(np.intp)
    return lut[indices]


class Renderer:
    """Stateless V -> RGB mapping with a prebuilt lookup table.

    Args:
        ramp: Ramp name from RAMPS, or an explicit list of stops
        autoscale: Stretch V by its current min/max before clamping
    """

    def __init__(self, ramp=DEFAULT_RAMP, autoscale=False):
        if isinstance(ramp, str):
            self.ramp_name = ramp
            self.lut = get_ramp(ramp)
        else:
            self.ramp_name = "custom"
            self.lut = build_lut(ramp)
        self.autoscale = autoscale

    def render(self, field, index=None):
        v = field.v
        if self.autoscale:
            v = normalize(v)
        return ColorFrame(apply_ramp(v, self.lut), index=index)

    __call__ = render


def render(field, ramp=DEFAULT_RAMP, autoscale=False, index=None):
    """Render one field to a ColorFrame."""
    return Renderer(ramp, autoscale).render(field, index)
