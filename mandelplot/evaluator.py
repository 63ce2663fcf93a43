"""Escape-time evaluation of a single sampled constant."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Union

from .complex_math import ORIGIN, ComplexNumber, modulus, square_and_add


@dataclass(frozen=True)
class Bounded:
    """The orbit stayed below the divergence threshold for the whole budget."""


@dataclass(frozen=True)
class Diverged:
    """The orbit reached the threshold at ``at_iteration`` (1-based)."""

    at_iteration: int


BOUNDED = Bounded()

IterationResult = Union[Bounded, Diverged]


def evaluate(c: ComplexNumber, max_iterations: int, divergence_threshold: float) -> IterationResult:
    """Iterate ``z = z**2 + c`` from the origin and report when it escapes.

    The first iteration whose modulus is greater than or equal to
    ``divergence_threshold`` yields ``Diverged(n)``; if none does within
    ``max_iterations`` steps the result is ``BOUNDED``.
    """

    z = ORIGIN
    for n in range(1, max_iterations + 1):
        z = square_and_add(z, c)
        if modulus(z) >= divergence_threshold:
            return Diverged(n)
    return BOUNDED


def orbit(c: ComplexNumber, max_iterations: int, divergence_threshold: float) -> Iterator[ComplexNumber]:
    """Yield z_1, z_2, ... up to and including the first escaping term."""

    z = ORIGIN
    for _ in range(max_iterations):
        z = square_and_add(z, c)
        yield z
        if modulus(z) >= divergence_threshold:
            return


def iteration_count(result: IterationResult) -> int:
    """Collapse a result to an integer: 0 when bounded, ``n`` for ``Diverged(n)``."""

    if isinstance(result, Diverged):
        return result.at_iteration
    return 0
