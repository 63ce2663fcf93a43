import math

import pytest

from mandelplot.complex_math import ORIGIN, ComplexNumber, format_complex, modulus, square_and_add


@pytest.mark.parametrize(
    "z, c",
    [
        (ComplexNumber(0.0, 0.0), ComplexNumber(0.0, 0.0)),
        (ComplexNumber(1.5, -0.25), ComplexNumber(-0.75, 0.1)),
        (ComplexNumber(-3.0, 2.0), ComplexNumber(0.5, 0.5)),
    ],
)
def test_square_and_add_matches_componentwise_formula(z, c):
    result = square_and_add(z, c)
    assert result == ComplexNumber(z.r * z.r - z.i * z.i + c.r, 2 * z.r * z.i + c.i)


def test_square_and_add_agrees_with_builtin_complex():
    z = ComplexNumber(0.3, -1.2)
    c = ComplexNumber(-0.4, 0.6)
    expected = complex(0.3, -1.2) ** 2 + complex(-0.4, 0.6)
    result = square_and_add(z, c)
    assert result.r == pytest.approx(expected.real)
    assert result.i == pytest.approx(expected.imag)


def test_square_of_i_plus_zero_is_minus_one():
    assert square_and_add(ComplexNumber(0.0, 1.0), ORIGIN) == ComplexNumber(-1.0, 0.0)


def test_overflow_saturates_to_infinity():
    result = square_and_add(ComplexNumber(1e300, 0.0), ORIGIN)
    assert math.isinf(result.r)
    assert math.isinf(modulus(result))


def test_modulus_exact_values():
    assert modulus(ComplexNumber(3.0, 4.0)) == 5.0
    assert modulus(ORIGIN) == 0.0
    assert modulus(ComplexNumber(-5.0, 12.0)) == 13.0


def test_complex_number_is_immutable():
    z = ComplexNumber(1.0, 2.0)
    with pytest.raises(AttributeError):
        z.r = 3.0


def test_format_complex():
    assert format_complex(ComplexNumber(0.0, 2.0)) == "(0.000000,2.000000i)"
    assert format_complex(ComplexNumber(-4.0, 2.5)) == "(-4.000000,2.500000i)"
