"""
Gray-Scott Reaction-Diffusion - Entry Point

Usage:
    python -m grayscott [preset] [options]

Examples:
    python -m grayscott
    python -m grayscott mitosis --iterations 5000
    python -m grayscott coral --width 640 --height 360 --video rd.mp4
    python -m grayscott --seed image logo.png --iterations 3000 --stride 10

Options:
    --width N, --height N   Grid size in cells (default 512x512)
    --iterations N          Simulation steps (default 300)
    --feed F, --kill K      Override the preset's feed/kill rates
    --dt T                  Time step (default 1.0)
    --stride N              Steps between video frames (default 1)
    --seed MODE             random | rect | image PATH
    --rng-seed N            Seed for the random patches
    --kernel NAME           nine_point | five_point
    --palette NAME          Color ramp (see --list)
    --autoscale             Stretch V by its range before coloring
    --workers N             Threads per step (default 1)
    --output PATH           Final still image (default rd.png)
    --video PATH            Also write an MP4 (needs ffmpeg)
    --img-dir DIR           Write video frames as PNGs here instead
    --debug                 Assert the field stays finite every step
    --verbose               Log run progress
    --list                  Show presets and palettes

Use --list to see all available presets.
"""

import logging
import sys
import time

from .config import RunConfig
from .errors import SimulationError
from .export import (FfmpegSink, PngSequenceSink, ffmpeg_available,
                     load_sample, save_frame)
from .presets import (DEFAULT_PRESET, PRESET_ORDER, get_preset, list_presets,
                      params_for_preset)
from .render import RAMP_ORDER
from .seeding import FromSample, Random, Rect
from .simulation import Simulation

_INT_OPTS = {"--width": "width", "--height": "height",
             "--iterations": "iterations", "--stride": "stride",
             "--rng-seed": "rng_seed", "--workers": "workers"}
_FLOAT_OPTS = {"--feed": "feed", "--kill": "kill", "--dt": "dt"}
_STR_OPTS = {"--kernel": "kernel", "--palette": "palette",
             "--output": "output", "--video": "video", "--img-dir": "img_dir"}
_FLAGS = {"--autoscale": "autoscale", "--debug": "debug", "--verbose": "verbose"}


class UsageError(Exception):
    pass


def parse_args(args):
    """Parse argv into an options dict. Raises UsageError on bad input."""
    opts = {
        "preset": DEFAULT_PRESET, "width": 512, "height": 512,
        "iterations": 300, "stride": 1, "feed": None, "kill": None,
        "dt": 1.0, "seed": None, "image": None, "rng_seed": None,
        "kernel": "nine_point", "palette": None, "workers": 1,
        "output": "rd.png", "video": None, "img_dir": None,
        "autoscale": False, "debug": False, "verbose": False,
        "list": False, "help": False,
    }
    i = 0
    while i < len(args):
        arg = args[i]
        has_value = i + 1 < len(args)
        if arg in _INT_OPTS and has_value:
            try:
                opts[_INT_OPTS[arg]] = int(args[i + 1])
            except ValueError:
                raise UsageError(f"{arg} expects an integer, got {args[i + 1]!r}") from None
            i += 2
        elif arg in _FLOAT_OPTS and has_value:
            try:
                opts[_FLOAT_OPTS[arg]] = float(args[i + 1])
            except ValueError:
                raise UsageError(f"{arg} expects a number, got {args[i + 1]!r}") from None
            i += 2
        elif arg in _STR_OPTS and has_value:
            opts[_STR_OPTS[arg]] = args[i + 1]
            i += 2
        elif arg == "--seed" and has_value:
            mode = args[i + 1]
            if mode == "image":
                if i + 2 >= len(args):
                    raise UsageError("--seed image needs a PATH")
                opts["image"] = args[i + 2]
                i += 3
            elif mode in ("random", "rect"):
                i += 2
            else:
                raise UsageError(f"Unknown seed mode: {mode!r} (random, rect, image PATH)")
            opts["seed"] = mode
        elif arg in _FLAGS:
            opts[_FLAGS[arg]] = True
            i += 1
        elif arg == "--list":
            opts["list"] = True
            i += 1
        elif arg in ("--help", "-h"):
            opts["help"] = True
            i += 1
        elif arg in PRESET_ORDER:
            opts["preset"] = arg
            i += 1
        else:
            raise UsageError(f"Unknown argument: {arg}")
    return opts


def build_run(opts):
    """Turn parsed options into (RunConfig, Parameters, ramp name)."""
    preset = get_preset(opts["preset"])
    params = params_for_preset(opts["preset"], dt=opts["dt"]).with_changes(
        feed=opts["feed"], kill=opts["kill"])

    seed = opts["seed"] or preset["seed"]
    if seed == "image":
        grid = load_sample(opts["image"], opts["width"], opts["height"])
        seed_mode = FromSample(grid)
    elif seed == "rect":
        seed_mode = Rect()
    else:
        seed_mode = Random(rng_seed=opts["rng_seed"])

    video = opts["video"] is not None or opts["img_dir"] is not None
    config = RunConfig(
        width=opts["width"], height=opts["height"],
        iterations=opts["iterations"], frame_stride=opts["stride"],
        seed_mode=seed_mode, mode="video" if video else "still",
        kernel=opts["kernel"], workers=opts["workers"],
    )
    return config, params, opts["palette"] or preset["palette"]


def _open_sink(opts):
    if opts["video"] and ffmpeg_available():
        return FfmpegSink(opts["video"])
    if opts["video"]:
        print("ffmpeg not found: writing PNG frames instead of video")
    return PngSequenceSink(opts["img_dir"] or "img")


def _print_lists():
    print("\nAvailable presets:")
    for key, name, desc in list_presets():
        print(f"    {key:16s} {name:20s} {desc}")
    print("\nAvailable palettes:")
    print("    " + ", ".join(RAMP_ORDER))
    print()


def main(argv=None):
    try:
        opts = parse_args(sys.argv[1:] if argv is None else argv)
    except UsageError as e:
        print(e)
        print("Use --help for usage")
        return 2

    if opts["help"]:
        print(__doc__)
        return 0
    if opts["list"]:
        _print_lists()
        return 0
    if opts["verbose"]:
        logging.basicConfig(level=logging.INFO,
                            format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    try:
        config, params, palette = build_run(opts)
        sim = Simulation(config, params, ramp=palette,
                         autoscale=opts["autoscale"], debug=opts["debug"])
    except (SimulationError, ValueError, OSError) as e:
        print(f"Cannot start run: {e}")
        return 2

    print(f"Gray-Scott {opts['preset']} @ {config.width}x{config.height}, "
          f"{config.iterations} steps (F={params.feed}, k={params.kill})")

    def progress(gen):
        if gen % 100 == 0 or gen == config.iterations:
            print(f"\r  iteration: {gen}/{config.iterations}", end="", flush=True)

    sim.on_step = progress
    start = time.time()
    last = None
    if config.video:
        with _open_sink(opts) as sink:
            for frame in sim.frames():
                sink.write(frame)
                last = frame
        print(f"\n  wrote {sink.count} frames")
        # Still image always shows the final state
        if last is None or last.index != sim.generation:
            last = sim.renderer.render(sim.snapshot(), index=sim.generation)
    else:
        for last in sim.frames():
            pass
        print()

    save_frame(last, opts["output"])
    elapsed = time.time() - start
    print(f"  saved: {opts['output']}")
    print(f"  generation took {int(elapsed // 60)} min {int(elapsed % 60)} secs")
    return 0


if __name__ == "__main__":
    sys.exit(main())
