"""
Gray-Scott Parameter Presets

Each preset is a (feed, kill) point in Pearson's classification together
with the diffusion rates, seed and ramp that show it off. Diffusion rates
are tuned for the nine-point kernel at dt=1.
"""

from .config import Parameters

PRESETS = {
    "fingerprint": {
        "name": "GS Fingerprint",
        "description": "Parallel stripes that fill the grid",
        "feed": 0.055, "kill": 0.062, "Du": 0.2097, "Dv": 0.105,
        "seed": "random", "palette": "ocean",
    },
    "coral": {
        "name": "GS Coral",
        "description": "Branching coral growth from a single seed",
        "feed": 0.0545, "kill": 0.062, "Du": 0.2097, "Dv": 0.105,
        "seed": "rect", "palette": "moss",
    },
    "mitosis": {
        "name": "GS Mitosis",
        "description": "Spots that grow and divide like cells",
        "feed": 0.0367, "kill": 0.0649, "Du": 0.2097, "Dv": 0.105,
        "seed": "random", "palette": "neon_bio",
    },
    "reef": {
        "name": "GS Spots",
        "description": "Holes and short tendrils",
        "feed": 0.037, "kill": 0.060, "Du": 0.21, "Dv": 0.105,
        "seed": "rect", "palette": "ocean",
    },
    "deep_sea": {
        "name": "GS Dense",
        "description": "Dense holes with thick body, slow undulation",
        "feed": 0.034, "kill": 0.063, "Du": 0.21, "Dv": 0.11,
        "seed": "rect", "palette": "ocean",
    },
    "medusa": {
        "name": "GS Worms",
        "description": "Sprawling long tendrils reaching outward",
        "feed": 0.022, "kill": 0.056, "Du": 0.20, "Dv": 0.13,
        "seed": "random", "palette": "fire",
    },
    "labyrinth": {
        "name": "GS Maze",
        "description": "Maze-like winding patterns",
        "feed": 0.029, "kill": 0.057, "Du": 0.21, "Dv": 0.105,
        "seed": "random", "palette": "ink",
    },
    "tentacles": {
        "name": "GS Solitons",
        "description": "Elongated soliton structures that crawl and branch",
        "feed": 0.026, "kill": 0.059, "Du": 0.21, "Dv": 0.12,
        "seed": "rect", "palette": "neon_bio",
    },
}

PRESET_ORDER = list(PRESETS.keys())

DEFAULT_PRESET = "fingerprint"


def get_preset(name):
    """Get a preset by name. Returns None if not found."""
    return PRESETS.get(name)


def list_presets():
    """Return list of (key, name, description) for presets."""
    return [(k, PRESETS[k]["name"], PRESETS[k]["description"])
            for k in PRESET_ORDER]


def params_for_preset(name, dt=1.0):
    """Build Parameters from a preset. Raises KeyError for unknown names."""
    p = PRESETS[name]
    return Parameters(diffusion_u=p["Du"], diffusion_v=p["Dv"],
                      feed=p["feed"], kill=p["kill"], dt=dt)
