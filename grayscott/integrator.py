"""
Gray-Scott Integrator

Explicit Euler step of the two-species system:

  dU/dt = Du * laplacian(U) - U*V^2 + F*(1-U)
  dV/dt = Dv * laplacian(V) + U*V^2 - (F+k)*V

Each step reads only the input field and writes only the output field;
the caller swaps the two afterwards. Rows are split into bands that
workers compute independently, and the step returns only once every band
is written. U and V are never clamped here.

References:
  Pearson, "Complex Patterns in a Simple System" (1993)
"""

from concurrent.futures import ThreadPoolExecutor

import numpy as np

from .stencil import DEFAULT_KERNEL, kernel_weights, laplacian_rows


def row_bands(height, workers):
    """Split [0, height) into at most `workers` contiguous (start, stop) bands."""
    edges = np.linspace(0, height, min(workers, height) + 1).astype(int)
    return [(int(a), int(b)) for a, b in zip(edges[:-1], edges[1:]) if b > a]


def _step_band(field_in, field_out, params, kernel, start, stop):
    """Write rows [start, stop) of the next state into field_out."""
    u = field_in.u[start:stop]
    v = field_in.v[start:stop]

    lap_u = laplacian_rows(field_in.u, start, stop, kernel)
    lap_v = laplacian_rows(field_in.v, start, stop, kernel)

    uvv = u * v * v

    # dU = Du*lap_U - uvv + feed*(1-U)
    lap_u *= params.diffusion_u
    lap_u -= uvv
    lap_u += params.feed * (1.0 - u)
    lap_u *= params.dt
    np.add(u, lap_u, out=field_out.u[start:stop])

    # dV = Dv*lap_V + uvv - (feed+kill)*V
    lap_v *= params.diffusion_v
    lap_v += uvv
    lap_v -= (params.feed + params.kill) * v
    lap_v *= params.dt
    np.add(v, lap_v, out=field_out.v[start:stop])


def step(field_in, field_out, params, kernel=DEFAULT_KERNEL):
    """Single-threaded step: write the successor of field_in into field_out."""
    if field_in is field_out or field_in.u is field_out.u:
        raise ValueError("step() needs two distinct buffers")
    _step_band(field_in, field_out, params, kernel, 0, field_in.height)


class Integrator:
    """Advances a field pair one step at a time on a pool of worker threads.

    numpy releases the GIL inside the band arithmetic, so bands computed on
    separate threads overlap. Each cell is computed the same way whatever
    the band layout, so results do not depend on the worker count.
    """

    def __init__(self, kernel=DEFAULT_KERNEL, workers=1, debug=False):
        kernel_weights(kernel)
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        self.kernel = kernel
        self.workers = workers
        self.debug = debug
        self._pool = None
        if workers > 1:
            self._pool = ThreadPoolExecutor(max_workers=workers,
                                            thread_name_prefix="grayscott")

    def step(self, field_in, field_out, params):
        if field_in is field_out or field_in.u is field_out.u:
            raise ValueError("step() needs two distinct buffers")
        if field_in.shape != field_out.shape:
            raise ValueError(f"Shape mismatch: {field_in.shape} vs {field_out.shape}")

        bands = row_bands(field_in.height, self.workers)
        if self._pool is None or len(bands) == 1:
            for start, stop in bands:
                _step_band(field_in, field_out, params, self.kernel, start, stop)
        else:
            futures = [
                self._pool.submit(_step_band, field_in, field_out, params,
                                  self.kernel, start, stop)
                for start, stop in bands
            ]
            # Barrier: every band written before the caller swaps buffers
            for f in futures:
                f.result()

        if self.debug:
            assert field_out.is_finite(), (
                "Non-finite concentrations after step; dt or diffusion rates "
                "are too large for this kernel")

    def close(self):
        if self._pool is not None:
            self._pool.shutdown(wait=True)
            self._pool = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False
