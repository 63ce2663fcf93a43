"""Named render settings for the text console and the graphics surface."""

from __future__ import annotations

from dataclasses import dataclass

from .banding import GRAPHICS_BANDING, TEXT_BANDING, BandingPolicy
from .errors import ConfigurationError
from .renderer import GridDimensions, PlaneRegion, RenderSummary, render, validate_render_config
from .sinks import OutputSink

DEFAULT_MAX_ITERATIONS = 100
DEFAULT_DIVERGENCE_THRESHOLD = 100.0


@dataclass(frozen=True)
class RenderProfile:
    """Everything a render needs apart from the sink it writes to.

    ``sink_kind`` is ``"text"`` for a line-oriented console sink and
    ``"pixel"`` for a pixel surface.
    """

    name: str
    region: PlaneRegion
    dims: GridDimensions
    banding: BandingPolicy
    sink_kind: str
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    divergence_threshold: float = DEFAULT_DIVERGENCE_THRESHOLD

    def validate(self) -> None:
        validate_render_config(
            self.dims,
            self.region,
            self.max_iterations,
            self.divergence_threshold,
            self.banding,
        )

    def render(self, sink: OutputSink) -> RenderSummary:
        return render(
            self.dims,
            self.region,
            self.max_iterations,
            self.divergence_threshold,
            self.banding,
            sink,
        )


TEXT_PROFILE = RenderProfile(
    name="text",
    region=PlaneRegion(x_min=-2.0, x_max=2.0, y_min=-2.0, y_max=2.0),
    dims=GridDimensions(width=100, height=40),
    banding=TEXT_BANDING,
    sink_kind="text",
)

# Rows run from +1.1 down to -1.1 so the image is not upside down.
GRAPHICS_PROFILE = RenderProfile(
    name="graphics",
    region=PlaneRegion(x_min=-1.6, x_max=0.5, y_min=1.1, y_max=-1.1),
    dims=GridDimensions(width=320, height=200),
    banding=GRAPHICS_BANDING,
    sink_kind="pixel",
)

PROFILES = {profile.name: profile for profile in (TEXT_PROFILE, GRAPHICS_PROFILE)}


def get_profile(name: str) -> RenderProfile:
    try:
        return PROFILES[name.lower()]
    except KeyError:
        raise ConfigurationError(
            "profile", "unknown profile", f"{name!r}; choose from {', '.join(sorted(PROFILES))}"
        ) from None
