"""
Simulation Driver - seeds a field, steps it, and emits rendered frames

The driver owns the live field pair for the whole run. Each step writes
the successor into the scratch buffer and swaps the two (no per-cell
copy); only read-only ColorFrames leave the driver.

Usage:
    from grayscott import RunConfig, Parameters, run
    for frame in run(RunConfig(256, 256, iterations=2000, frame_stride=20,
                               mode="video"), Parameters()):
        sink.write(frame)

Frames are produced lazily as steps complete. A run is one-shot: once its
frames have been requested, reseed with a fresh Simulation.
"""

import enum
import logging

from .config import Parameters, RunConfig
from .field import Field
from .integrator import Integrator
from .render import DEFAULT_RAMP, Renderer
from .seeding import seed_field

logger = logging.getLogger(__name__)


class State(enum.Enum):
    INITIALIZED = "initialized"
    RUNNING = "running"
    COMPLETED = "completed"


class Simulation:
    """One bounded, synchronous Gray-Scott run.

    Preconditions are checked here, before any step: InvalidDimensions for
    an empty grid or a sample that does not fit, UnstableParameters for
    rates that would diverge.
    """

    def __init__(self, config=None, params=None, ramp=DEFAULT_RAMP,
                 autoscale=False, debug=False, on_step=None):
        """
        Args:
            config: RunConfig (defaults to a 512x512 still run)
            params: Parameters (defaults to the fingerprint rates)
            ramp: Color ramp name or stops list for the Renderer
            autoscale: Stretch V by its range before coloring
            debug: Assert the field stays finite after every step
            on_step: Optional callable(generation) invoked after each step
        """
        self.config = (config or RunConfig()).validate()
        self.params = (params or Parameters()).validate()
        self.renderer = Renderer(ramp, autoscale)
        self.debug = debug
        self.on_step = on_step

        self.state = State.INITIALIZED
        self.generation = 0
        self.frames_emitted = 0
        self._field = None

    def frames(self):
        """Start the run and return its lazy frame iterator."""
        if self.state is not State.INITIALIZED:
            raise RuntimeError(
                f"Simulation already {self.state.value}; a run cannot be "
                f"restarted, create a new Simulation to reseed")
        self.state = State.RUNNING
        return self._run()

    __iter__ = frames

    def _run(self):
        cfg = self.config
        current = seed_field(cfg.seed_mode, cfg.width, cfg.height)
        scratch = Field(current.width, current.height)
        self._field = current
        logger.info("Seeded %dx%d field (%s), %d steps, %s mode",
                    current.width, current.height,
                    type(cfg.seed_mode).__name__, cfg.iterations, cfg.mode)

        with Integrator(cfg.kernel, cfg.workers, self.debug) as integrator:
            for _ in range(cfg.iterations):
                integrator.step(current, scratch, self.params)
                current.swap_with(scratch)
                self.generation += 1
                if self.on_step is not None:
                    self.on_step(self.generation)
                if cfg.video and self.generation % cfg.frame_stride == 0:
                    logger.debug("Emitting frame at generation %d", self.generation)
                    yield self._emit(current)

            if not cfg.video:
                yield self._emit(current)

        self.state = State.COMPLETED
        logger.info("Run completed: %d steps, %d frames",
                    self.generation, self.frames_emitted)

    def _emit(self, field):
        self.frames_emitted += 1
        return self.renderer.render(field, index=self.generation)

    def snapshot(self):
        """Copy of the current field, or None before the run starts."""
        if self._field is None:
            return None
        return self._field.copy()

    @property
    def stats(self):
        """Return current run statistics."""
        stats = {"generation": self.generation, "state": self.state.value,
                 "frames": self.frames_emitted}
        if self._field is not None:
            stats.update(self._field.stats)
        return stats


def run(config, params, **kwargs):
    """Validate a run and return its lazy frame iterator.

    Precondition errors are raised by this call, before any frame is
    requested. Extra keyword arguments go to Simulation.
    """
    return Simulation(config, params, **kwargs).frames()
