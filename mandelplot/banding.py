"""Mapping from escape iterations to output units."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .errors import ConfigurationError
from .evaluator import Diverged, IterationResult

OutputUnit = Union[str, int]


@dataclass(frozen=True)
class Band:
    """Divergences at or below ``upper_bound`` are drawn with ``unit``."""

    upper_bound: int
    unit: OutputUnit


@dataclass(frozen=True)
class BandingPolicy:
    """Ordered bands plus the units used for bounded and overflowing points.

    ``overflow`` is used for divergences beyond the last band's bound; when it
    is not given the last band's unit is reused.
    """

    interior: OutputUnit
    bands: tuple[Band, ...]
    overflow: Optional[OutputUnit] = None

    def validate(self) -> None:
        if not self.bands:
            raise ConfigurationError("banding", "empty banding sequence")
        previous = 0
        for band in self.bands:
            if band.upper_bound < 1:
                raise ConfigurationError(
                    "banding", "invalid band bound", f"{band.upper_bound} is below 1"
                )
            if band.upper_bound <= previous:
                raise ConfigurationError(
                    "banding",
                    "non-ascending banding sequence",
                    f"{band.upper_bound} follows {previous}",
                )
            previous = band.upper_bound

    def units(self) -> tuple[OutputUnit, ...]:
        """Every unit this policy can emit, interior first."""

        units = [self.interior]
        units.extend(band.unit for band in self.bands)
        if self.overflow is not None:
            units.append(self.overflow)
        return tuple(units)

    def index_of(self, result: IterationResult) -> Optional[int]:
        """Return the band index for ``result``.

        ``None`` stands for the interior and ``len(bands)`` for overflow.
        """

        if not isinstance(result, Diverged):
            return None
        for index, band in enumerate(self.bands):
            if band.upper_bound >= result.at_iteration:
                return index
        return len(self.bands)

    def select(self, result: IterationResult) -> OutputUnit:
        index = self.index_of(result)
        if index is None:
            return self.interior
        if index < len(self.bands):
            return self.bands[index].unit
        if self.overflow is not None:
            return self.overflow
        return self.bands[-1].unit


TEXT_BANDING = BandingPolicy(
    interior=" ",
    bands=(
        Band(25, "."),
        Band(50, ":"),
        Band(75, "*"),
        Band(100, "@"),
    ),
)

# Colour index 5 lands on green once a four-colour surface masks it.
GRAPHICS_BANDING = BandingPolicy(interior=0, bands=(Band(100, 5),))
