"""Complex arithmetic needed by the quadratic recurrence."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class ComplexNumber:
    """A point of the complex plane held as two doubles."""

    r: float
    i: float


ORIGIN = ComplexNumber(0.0, 0.0)


def square_and_add(z: ComplexNumber, c: ComplexNumber) -> ComplexNumber:
    """Return ``z**2 + c``.

    (r + ei)**2 expands to (r**2 - i**2) + (2ri)i; ``c`` is then added
    component-wise. Overflow saturates to infinity, which the modulus test
    classifies as diverged.
    """

    return ComplexNumber(
        z.r * z.r - z.i * z.i + c.r,
        2.0 * z.r * z.i + c.i,
    )


def modulus(z: ComplexNumber) -> float:
    return math.sqrt(z.r * z.r + z.i * z.i)


def format_complex(z: ComplexNumber) -> str:
    """Format ``z`` as ``(r,ii)`` with six decimals, e.g. ``(0.000000,2.000000i)``."""

    return f"({z.r:f},{z.i:f}i)"
