"""
Gray-Scott reaction-diffusion on a toroidal grid, rendered to frames.
"""

from .config import Parameters, RunConfig, STABILITY_LIMIT
from .errors import InvalidDimensions, SimulationError, UnstableParameters
from .field import Field
from .integrator import Integrator, step
from .render import ColorFrame, Renderer, render
from .seeding import (FromSample, Random, Rect, seed_from_sample, seed_random,
                      seed_rect)
from .simulation import Simulation, State, run
from .stencil import laplacian

__all__ = [
    "ColorFrame", "Field", "FromSample", "Integrator", "InvalidDimensions",
    "Parameters", "Random", "Rect", "Renderer", "RunConfig", "STABILITY_LIMIT",
    "Simulation", "SimulationError", "State", "UnstableParameters",
    "laplacian", "render", "run", "seed_from_sample", "seed_random",
    "seed_rect", "step",
]
