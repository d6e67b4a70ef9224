#!/usr/bin/env python3
"""
Tests for the simulation driver.

Verifies:
1. Precondition errors are raised before any step runs
2. Frame count and cadence in video mode, single frame in still mode
3. Identical seeds give bit-identical frame sequences
4. Frames are produced lazily and a run cannot be restarted
5. An all-zero sample stays at the homogeneous fixed point
"""

import numpy as np

from grayscott.config import Parameters, RunConfig
from grayscott.errors import InvalidDimensions, UnstableParameters
from grayscott.presets import PRESET_ORDER, params_for_preset
from grayscott.seeding import FromSample, Random, Rect
from grayscott.simulation import Simulation, State, run


def _video(iterations, stride, **kwargs):
    kwargs.setdefault("seed_mode", Random(rng_seed=1))
    return RunConfig(width=16, height=16, iterations=iterations,
                     frame_stride=stride, mode="video", **kwargs)


def test_unstable_parameters_rejected_before_stepping():
    steps = []
    params = Parameters(diffusion_u=0.2, dt=2.0)
    try:
        Simulation(_video(10, 1), params, on_step=steps.append)
    except UnstableParameters:
        pass
    else:
        raise AssertionError("Du*dt = 0.4 should raise UnstableParameters")
    try:
        run(_video(10, 1), params)
    except UnstableParameters:
        pass
    else:
        raise AssertionError("run() must raise before the first frame is requested")
    assert steps == [], "No step may execute"


def test_non_positive_parameters_rejected():
    for bad in (dict(feed=0.0), dict(kill=-0.01), dict(dt=0.0),
                dict(diffusion_v=float("nan"))):
        try:
            run(_video(1, 1), Parameters(**bad))
        except UnstableParameters:
            continue
        raise AssertionError(f"{bad} should raise UnstableParameters")


def test_stability_bound_is_inclusive():
    Parameters(diffusion_u=0.25, dt=1.0).validate()
    Parameters(diffusion_u=0.125, dt=2.0).validate()
    Parameters(diffusion_u=0.1, diffusion_v=0.25, dt=1.0).validate()


def test_fast_v_diffusion_rejected_before_stepping():
    steps = []
    cfg = RunConfig(width=16, height=16, iterations=200, kernel="five_point")
    params = Parameters(diffusion_u=0.1, diffusion_v=1.0, dt=1.0)
    try:
        Simulation(cfg, params, on_step=steps.append)
    except UnstableParameters as e:
        assert "diffusion_v" in str(e), str(e)
    else:
        raise AssertionError("Dv*dt = 1.0 should raise UnstableParameters")
    assert steps == [], "No step may execute"


def test_invalid_dimensions():
    for w, h in [(0, 16), (16, 0)]:
        try:
            run(RunConfig(width=w, height=h, iterations=1), Parameters())
        except InvalidDimensions:
            continue
        raise AssertionError(f"{w}x{h} should raise InvalidDimensions")


def test_sample_must_match_run_size():
    try:
        run(RunConfig(width=8, height=8, seed_mode=FromSample(np.zeros((4, 8)))),
            Parameters())
    except InvalidDimensions:
        pass
    else:
        raise AssertionError("Mismatched sample grid should raise InvalidDimensions")


def test_unknown_seed_mode_rejected_eagerly():
    for mode in ("random", None, object()):
        try:
            Simulation(RunConfig(width=8, height=8, iterations=1, seed_mode=mode),
                       Parameters())
        except ValueError:
            continue
        raise AssertionError(f"seed_mode={mode!r} should be rejected before the run")


def test_bad_stride_rejected():
    try:
        run(_video(10, 0), Parameters())
    except ValueError:
        pass
    else:
        raise AssertionError("frame_stride=0 should be rejected")


def test_video_frame_count():
    frames = list(run(_video(1000, 100), Parameters()))
    assert len(frames) == 10, f"Expected 10 frames, got {len(frames)}"
    assert [f.index for f in frames] == list(range(100, 1001, 100))
    assert _video(1000, 100).expected_frames == 10


def test_video_stride_not_dividing_iterations():
    frames = list(run(_video(25, 10), Parameters()))
    assert [f.index for f in frames] == [10, 20]


def test_still_mode_emits_final_frame_only():
    cfg = RunConfig(width=16, height=12, iterations=40, seed_mode=Rect())
    sim = Simulation(cfg, Parameters())
    frames = list(sim.frames())
    assert len(frames) == 1 and frames[0].index == 40
    assert (frames[0].width, frames[0].height) == (16, 12)
    assert sim.state is State.COMPLETED
    assert frames[0] == sim.renderer.render(sim.snapshot(), index=40), \
        "Still frame must show the final field"


def test_zero_iterations_still_renders_seed():
    frames = list(run(RunConfig(width=8, height=8, iterations=0), Parameters()))
    assert len(frames) == 1 and frames[0].index == 0


def test_identical_seeds_give_identical_frames():
    a = list(run(_video(200, 20, seed_mode=Random(rng_seed=42)), Parameters()))
    b = list(run(_video(200, 20, seed_mode=Random(rng_seed=42)), Parameters()))
    assert len(a) == 10
    assert all(x == y for x, y in zip(a, b)), "Frames differ between identical runs"


def test_workers_do_not_change_frames():
    a = list(run(_video(60, 20, workers=1), Parameters()))
    b = list(run(_video(60, 20, workers=3), Parameters()))
    assert a == b, "Threaded run must match the single-threaded run"


def test_frames_are_lazy_and_one_shot():
    sim = Simulation(_video(100, 10), Parameters())
    assert sim.state is State.INITIALIZED and sim.snapshot() is None
    frames = sim.frames()
    assert sim.generation == 0, "No step before the first frame is requested"
    first = next(frames)
    assert first.index == 10 and sim.generation == 10, "Stepping stops at the first frame"
    assert sim.state is State.RUNNING
    try:
        sim.frames()
    except RuntimeError:
        pass
    else:
        raise AssertionError("A started run must not restart")
    rest = list(frames)
    assert len(rest) == 9 and sim.state is State.COMPLETED
    assert sim.stats["frames"] == 10 and sim.stats["generation"] == 100


def test_zero_sample_stays_at_fixed_point():
    cfg = RunConfig(width=12, height=9, iterations=300,
                    seed_mode=FromSample(np.zeros((9, 12))))
    sim = Simulation(cfg, Parameters(), debug=True)
    (frame,) = list(sim.frames())
    field = sim.snapshot()
    assert np.all(field.u == 1.0) and np.all(field.v == 0.0), \
        "Homogeneous field must not change"
    assert np.all(frame.pixels == frame.pixels[0, 0]), "Frame should be one flat color"


def test_snapshot_is_a_copy():
    sim = Simulation(_video(4, 2), Parameters())
    next(sim.frames())
    snap = sim.snapshot()
    snap.v[:] = 5.0
    assert sim.snapshot().v.max() < 5.0, "Snapshot must not expose the live field"


def test_presets_are_stable():
    for key in PRESET_ORDER:
        params_for_preset(key).validate()


if __name__ == "__main__":
    print("\n=== Testing Simulation Driver ===\n")
    for name, fn in sorted(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()
            print(f"  ✓ {name}")
    print("\n✓ All tests passed!\n")
