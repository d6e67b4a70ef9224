"""
Sample Loading and Frame Sinks

The file-system side of a run: decoding a seed image into an intensity
grid, and writing ColorFrames out as PNGs or as an MP4 piped through
ffmpeg. The simulation core never touches files; it only hands frames
to one of these sinks.
"""

import logging
import os
import shutil
import subprocess

import numpy as np
from PIL import Image

from .seeding import resize_sample

logger = logging.getLogger(__name__)


def load_sample(path, width=None, height=None, invert=True, blur=0.0):
    """Decode an image into a grayscale intensity grid in [0, 1].

    Args:
        path: Image file readable by Pillow
        width, height: Target grid size (defaults to the image size)
        invert: Dark pixels become high intensity, so dark strokes seed
            the V chemical
        blur: Gaussian sigma (cells) applied after resizing

    Returns:
        (height, width) float64 array
    """
    with Image.open(path) as img:
        gray = np.asarray(img.convert("L"), dtype=np.float64) / 255.0
    if invert:
        gray = 1.0 - gray
    h, w = gray.shape
    return resize_sample(gray, w if width is None else width,
                         h if height is None else height, blur=blur)


def save_frame(frame, path):
    """Write one ColorFrame as a PNG."""
    Image.fromarray(frame.pixels).save(path)
    return path


class PngSequenceSink:
    """Writes frames as rd-<n>.png into a directory.

    Stale rd-*.png files from an earlier run are removed first so the
    sequence is never mixed with old frames.
    """

    def __init__(self, directory, prefix="rd"):
        self.directory = directory
        self.prefix = prefix
        self.count = 0
        os.makedirs(directory, exist_ok=True)
        for name in os.listdir(directory):
            if name.startswith(prefix + "-") and name.endswith(".png"):
                os.remove(os.path.join(directory, name))

    def write(self, frame):
        self.count += 1
        path = os.path.join(self.directory, f"{self.prefix}-{self.count}.png")
        return save_frame(frame, path)

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


def ffmpeg_available(ffmpeg="ffmpeg"):
    return shutil.which(ffmpeg) is not None


class FfmpegSink:
    """Pipes raw RGB frames into ffmpeg to encode an H.264 MP4.

    The frame size is taken from the first frame; every later frame must
    match it.
    """

    def __init__(self, path, fps=60, crf=18, ffmpeg="ffmpeg"):
        self.path = path
        self.fps = fps
        self.crf = crf
        self.ffmpeg = ffmpeg
        self.count = 0
        self._proc = None
        self._size = None

    def _start(self, width, height):
        # libx264 + yuv420p needs even dimensions
        cmd = [self.ffmpeg, "-y", "-loglevel", "error",
               "-f", "rawvideo", "-pix_fmt", "rgb24", "-s", f"{width}x{height}",
               "-r", str(self.fps), "-i", "-", "-an",
               "-vf", "pad=ceil(iw/2)*2:ceil(ih/2)*2",
               "-c:v", "libx264", "-crf", str(self.crf),
               "-pix_fmt", "yuv420p", self.path]
        logger.info("Starting ffmpeg: %s", " ".join(cmd))
        self._proc = subprocess.Popen(cmd, stdin=subprocess.PIPE)
        self._size = (width, height)

    def write(self, frame):
        if self._proc is None:
            self._start(frame.width, frame.height)
        elif (frame.width, frame.height) != self._size:
            raise ValueError(f"Frame size {frame.width}x{frame.height} differs "
                             f"from video size {self._size[0]}x{self._size[1]}")
        self._proc.stdin.write(frame.pixels.tobytes())
        self.count += 1

    def close(self):
        """Finish the stream and wait for ffmpeg. Raises if ffmpeg failed."""
        if self._proc is None:
            return
        proc, self._proc = self._proc, None
        proc.stdin.close()
        code = proc.wait()
        if code != 0:
            raise RuntimeError(f"ffmpeg exited with status {code} writing {self.path}")
        logger.info("Wrote %d frames to %s", self.count, self.path)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False
