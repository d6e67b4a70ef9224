"""
Simulation Errors

Precondition failures raised before a run takes its first step. Both are
fatal to the run: the simulation is deterministic, so retrying with the
same inputs fails the same way.
"""


class SimulationError(ValueError):
    """Base class for run precondition failures."""


class InvalidDimensions(SimulationError):
    """Grid width or height is zero, or a sample grid does not fit the run."""


class UnstableParameters(SimulationError):
    """Parameters are non-positive or break the explicit stability bound."""
