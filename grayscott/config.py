"""
Run Parameters and Configuration

Both are frozen dataclasses, built once per run and passed explicitly to
every call; nothing here is module-level mutable state, so several
simulations can run side by side with different settings.
"""

import math
from dataclasses import dataclass, field, replace

import numpy as np

from .errors import InvalidDimensions, UnstableParameters
from .seeding import FromSample, Random, Rect
from .stencil import DEFAULT_KERNEL, KERNELS

# Explicit Euler on a unit grid diverges past D*dt = 1/4 for either species
STABILITY_LIMIT = 0.25

MODES = ("still", "video")


@dataclass(frozen=True)
class Parameters:
    """Gray-Scott rates and time step.

    Defaults are tuned for the nine-point kernel at dt=1: Du=0.2097 and
    Dv=0.105 give the familiar coral/fingerprint scale with F=0.055,
    k=0.062.
    """
    diffusion_u: float = 0.2097
    diffusion_v: float = 0.105
    feed: float = 0.055
    kill: float = 0.062
    dt: float = 1.0

    def validate(self):
        """Raise UnstableParameters unless the run can stay bounded."""
        for name in ("diffusion_u", "diffusion_v", "feed", "kill", "dt"):
            value = getattr(self, name)
            if not (math.isfinite(value) and value > 0):
                raise UnstableParameters(
                    f"{name} must be finite and strictly positive, got {value!r}")
        for name in ("diffusion_u", "diffusion_v"):
            rate = getattr(self, name)
            if rate * self.dt > STABILITY_LIMIT:
                raise UnstableParameters(
                    f"{name} * dt = {rate * self.dt:.4g} exceeds the "
                    f"stability bound {STABILITY_LIMIT}; lower dt to at most "
                    f"{STABILITY_LIMIT / rate:.4g}")
        return self

    def with_changes(self, **changes):
        """Copy with some fields replaced (None values are ignored)."""
        values = {k: v for k, v in changes.items() if v is not None}
        return replace(self, **values)


@dataclass(frozen=True)
class RunConfig:
    """Shape and cadence of one run.

    Args:
        width, height: Grid size in cells
        iterations: Number of integration steps
        frame_stride: Steps between emitted frames in video mode
        seed_mode: seeding.Random, seeding.Rect or seeding.FromSample
        mode: "video" (frame every stride) or "still" (final frame only)
        kernel: Laplacian kernel name, fixed for the whole run
        workers: Threads sharing each step's rows
    """
    width: int = 512
    height: int = 512
    iterations: int = 300
    frame_stride: int = 1
    seed_mode: object = field(default_factory=Random)
    mode: str = "still"
    kernel: str = DEFAULT_KERNEL
    workers: int = 1

    @property
    def video(self):
        return self.mode == "video"

    @property
    def expected_frames(self):
        if self.video:
            return self.iterations // self.frame_stride
        return 1

    def validate(self):
        """Raise on configurations that cannot start a run."""
        if self.width <= 0 or self.height <= 0:
            raise InvalidDimensions(
                f"Grid must be at least 1x1, got {self.width}x{self.height}")
        if not isinstance(self.seed_mode, (Random, Rect, FromSample)):
            raise ValueError(f"Unknown seed mode: {self.seed_mode!r}. "
                             f"Expected Random, Rect or FromSample")
        if isinstance(self.seed_mode, FromSample):
            shape = np.shape(self.seed_mode.grid)
            if shape != (self.height, self.width):
                raise InvalidDimensions(
                    f"Sample grid shape {shape} does not match the "
                    f"{self.width}x{self.height} run; resize it first")
        if self.frame_stride < 1:
            raise ValueError(f"frame_stride must be >= 1, got {self.frame_stride}")
        if self.iterations < 0:
            raise ValueError(f"iterations must be >= 0, got {self.iterations}")
        if self.mode not in MODES:
            raise ValueError(f"Unknown mode: {self.mode!r}. Expected one of {MODES}")
        if self.kernel not in KERNELS:
            raise ValueError(f"Unknown kernel: {self.kernel!r}. "
                             f"Supported: {list(KERNELS.keys())}")
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")
        return self
