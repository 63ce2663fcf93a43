"""Grid sampling and rendering of the Mandelbrot set."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Optional

import numpy as np

from .banding import BandingPolicy
from .complex_math import ComplexNumber
from .errors import ConfigurationError
from .evaluator import evaluate, iteration_count

if TYPE_CHECKING:
    from .sinks import OutputSink


@dataclass(frozen=True)
class PlaneRegion:
    """Rectangle of the complex plane to sample.

    ``y_min`` is the imaginary part of the first row and ``y_max`` the one
    the rows run towards; they may be given in either order.
    """

    x_min: float
    x_max: float
    y_min: float
    y_max: float


@dataclass(frozen=True)
class GridDimensions:
    """Number of sample columns and rows."""

    width: int
    height: int


@dataclass(frozen=True)
class SamplingMetadata:
    """Metadata describing the sampling grid for a render."""

    x_min: float
    y_min: float
    x_span: float
    y_span: float
    x_step: float
    y_step: float
    x_res: int
    y_res: int


@dataclass(frozen=True)
class RenderSummary:
    """Counts collected while rendering a grid.

    ``band_hits`` has one entry per band followed by the overflow count.
    """

    pixels: int
    bounded: int
    diverged: int
    band_hits: tuple[int, ...]


def validate_render_config(
    dims: GridDimensions,
    region: PlaneRegion,
    max_iterations: int,
    divergence_threshold: float,
    banding: Optional[BandingPolicy] = None,
) -> None:
    """Reject settings that cannot produce a render."""

    if dims.width < 1 or dims.height < 1:
        raise ConfigurationError(
            "dims", "invalid grid dimensions", f"{dims.width}x{dims.height}"
        )
    bounds = (region.x_min, region.x_max, region.y_min, region.y_max)
    if not all(math.isfinite(value) for value in bounds):
        raise ConfigurationError("region", "degenerate region", "bounds must be finite")
    if region.x_min >= region.x_max:
        raise ConfigurationError(
            "region", "degenerate region", f"x_min {region.x_min} is not below x_max {region.x_max}"
        )
    if region.y_min == region.y_max:
        raise ConfigurationError(
            "region", "degenerate region", f"y_min and y_max are both {region.y_min}"
        )
    if max_iterations < 1:
        raise ConfigurationError("max_iterations", "invalid iteration cap", str(max_iterations))
    if not math.isfinite(divergence_threshold) or divergence_threshold <= 0:
        raise ConfigurationError(
            "divergence_threshold", "invalid divergence threshold", str(divergence_threshold)
        )
    if banding is not None:
        banding.validate()


def compute_metadata(dims: GridDimensions, region: PlaneRegion) -> SamplingMetadata:
    x_res = int(dims.width)
    y_res = int(dims.height)

    x_span = np.float64(region.x_max) - np.float64(region.x_min)
    y_span = np.float64(region.y_max) - np.float64(region.y_min)

    return SamplingMetadata(
        x_min=float(region.x_min),
        y_min=float(region.y_min),
        x_span=float(x_span),
        y_span=float(y_span),
        x_step=float(x_span / x_res),
        y_step=float(y_span / y_res),
        x_res=x_res,
        y_res=y_res,
    )


def _sample_axes(metadata: SamplingMetadata) -> tuple[np.ndarray, np.ndarray]:
    # c = min + index * span / res, evaluated in that order for every pixel
    cols = np.arange(metadata.x_res, dtype=np.float64)
    rows = np.arange(metadata.y_res, dtype=np.float64)
    xs = np.float64(metadata.x_min) + (cols * np.float64(metadata.x_span)) / np.float64(metadata.x_res)
    ys = np.float64(metadata.y_min) + (rows * np.float64(metadata.y_span)) / np.float64(metadata.y_res)
    return xs, ys


def pixel_to_complex(metadata: SamplingMetadata, row: int, col: int) -> ComplexNumber:
    x = np.float64(metadata.x_min) + np.float64(col) * np.float64(metadata.x_span) / np.float64(metadata.x_res)
    y = np.float64(metadata.y_min) + np.float64(row) * np.float64(metadata.y_span) / np.float64(metadata.y_res)
    return ComplexNumber(float(x), float(y))


def complex_to_pixel(metadata: SamplingMetadata, c: ComplexNumber) -> Optional[tuple[int, int]]:
    """Return the ``(row, col)`` of the sample nearest to ``c``, or ``None`` off the grid."""

    col = int(round((c.r - metadata.x_min) / metadata.x_step))
    row = int(round((c.i - metadata.y_min) / metadata.y_step))
    if 0 <= col < metadata.x_res and 0 <= row < metadata.y_res:
        return row, col
    return None


def iter_samples(metadata: SamplingMetadata) -> Iterator[tuple[int, int, ComplexNumber]]:
    """Yield ``(row, col, c)`` for every pixel in row-major order."""

    xs, ys = _sample_axes(metadata)
    for row, y in enumerate(ys):
        ci = float(y)
        for col, x in enumerate(xs):
            yield row, col, ComplexNumber(float(x), ci)


def compute_iterations(
    dims: GridDimensions,
    region: PlaneRegion,
    max_iterations: int,
    divergence_threshold: float,
) -> np.ndarray:
    """Evaluate the whole grid into an ``(height, width)`` array; 0 marks bounded points."""

    validate_render_config(dims, region, max_iterations, divergence_threshold)
    metadata = compute_metadata(dims, region)
    iterations = np.zeros((metadata.y_res, metadata.x_res), dtype=np.int32)
    for row, col, c in iter_samples(metadata):
        iterations[row, col] = iteration_count(evaluate(c, max_iterations, divergence_threshold))
    return iterations


def check_sink_units(banding: BandingPolicy, sink: OutputSink) -> None:
    """Reject a banding whose units ``sink`` cannot write."""

    for unit in banding.units():
        if not sink.accepts(unit):
            raise ConfigurationError(
                "banding",
                "unit not accepted by sink",
                f"{unit!r} cannot be written to {type(sink).__name__}",
            )


def render(
    dims: GridDimensions,
    region: PlaneRegion,
    max_iterations: int,
    divergence_threshold: float,
    banding: BandingPolicy,
    sink: OutputSink,
) -> RenderSummary:
    """Evaluate every pixel and emit one output unit per pixel to ``sink``.

    Settings are validated before anything reaches the sink. Units are
    emitted row by row, and ``sink.end_row`` follows the last column of
    each row.
    """

    validate_render_config(dims, region, max_iterations, divergence_threshold, banding)
    check_sink_units(banding, sink)
    metadata = compute_metadata(dims, region)

    band_hits = [0] * (len(banding.bands) + 1)
    bounded = 0
    last_col = metadata.x_res - 1

    sink.begin(dims)
    for row, col, c in iter_samples(metadata):
        result = evaluate(c, max_iterations, divergence_threshold)
        index = banding.index_of(result)
        if index is None:
            bounded += 1
        else:
            band_hits[index] += 1
        sink.emit_unit(row, col, banding.select(result))
        if col == last_col:
            sink.end_row(row)
    sink.end()

    pixels = metadata.x_res * metadata.y_res
    return RenderSummary(
        pixels=pixels,
        bounded=bounded,
        diverged=pixels - bounded,
        band_hits=tuple(band_hits),
    )
