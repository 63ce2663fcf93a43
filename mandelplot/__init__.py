"""Public API for escape-time Mandelbrot rendering."""

from .banding import GRAPHICS_BANDING, TEXT_BANDING, Band, BandingPolicy, OutputUnit
from .complex_math import ORIGIN, ComplexNumber, format_complex, modulus, square_and_add
from .errors import ConfigurationError
from .evaluator import BOUNDED, Bounded, Diverged, IterationResult, evaluate, iteration_count, orbit
from .profiles import GRAPHICS_PROFILE, PROFILES, TEXT_PROFILE, RenderProfile, get_profile
from .renderer import (
    GridDimensions,
    PlaneRegion,
    RenderSummary,
    SamplingMetadata,
    check_sink_units,
    complex_to_pixel,
    compute_iterations,
    compute_metadata,
    iter_samples,
    pixel_to_complex,
    render,
    validate_render_config,
)
from .sinks import CGA_PALETTE, OutputSink, PixelSurfaceSink, TextLineSink

__all__ = [
    "BOUNDED",
    "Band",
    "BandingPolicy",
    "Bounded",
    "CGA_PALETTE",
    "ComplexNumber",
    "ConfigurationError",
    "Diverged",
    "GRAPHICS_BANDING",
    "GRAPHICS_PROFILE",
    "GridDimensions",
    "IterationResult",
    "ORIGIN",
    "OutputSink",
    "OutputUnit",
    "PROFILES",
    "PixelSurfaceSink",
    "PlaneRegion",
    "RenderProfile",
    "RenderSummary",
    "SamplingMetadata",
    "TEXT_BANDING",
    "TEXT_PROFILE",
    "TextLineSink",
    "check_sink_units",
    "complex_to_pixel",
    "compute_iterations",
    "compute_metadata",
    "evaluate",
    "format_complex",
    "get_profile",
    "iter_samples",
    "iteration_count",
    "modulus",
    "orbit",
    "pixel_to_complex",
    "render",
    "square_and_add",
    "validate_render_config",
]
