"""
Tests for the real and complex numeric domains.
"""

import warnings

import numpy as np
import pytest

from symbolic_calculus import build, evaluate
from symbolic_calculus.expression_tree import (
    COMPLEX, REAL, ComplexDomain, DivisionByZeroError, DomainError, ParseError, RealDomain,
    get_domain, parse
)
from symbolic_calculus.expression_tree.core import make_complex


def test_real_rendering_is_positional_and_trimmed():
    assert REAL.render(REAL.coerce(10.5)) == "10.5"
    assert REAL.render(REAL.coerce(10)) == "10"
    assert REAL.render(REAL.coerce(-1)) == "-1"
    assert REAL.render(REAL.coerce(0.1)) == "0.1"
    assert REAL.render(REAL.coerce(1e20)) == "100000000000000000000"


@pytest.mark.parametrize("value, text", [
    (0, "0"),
    (2, "2"),
    (-2.5, "-2.5"),
    (3j, "3i"),
    (-3j, "-3i"),
    (1j, "i"),
    (-1j, "-i"),
    (2 + 3j, "(2 + 3i)"),
    (2 - 3j, "(2 - 3i)"),
    (2 + 1j, "(2 + i)"),
    (2 - 1j, "(2 - i)"),
])
def test_complex_rendering(value, text):
    assert COMPLEX.render(COMPLEX.coerce(value)) == text


def test_extended_precision_types():
    assert REAL.coerce(1).dtype == np.longdouble
    assert COMPLEX.coerce(1).dtype == np.clongdouble
    assert REAL.from_literal("0.1") == np.longdouble("0.1")


def test_get_domain():
    assert get_domain('real') is REAL
    assert get_domain('COMPLEX') is COMPLEX
    assert get_domain(REAL) is REAL
    assert isinstance(REAL, RealDomain)
    assert isinstance(COMPLEX, ComplexDomain)
    with pytest.raises(ValueError):
        get_domain('quaternion')


def test_real_rejects_complex_values():
    assert REAL.coerce(3 + 0j) == 3
    with pytest.raises(TypeError):
        REAL.coerce(1 + 2j)


def test_imaginary_unit_only_in_complex():
    assert COMPLEX.imaginary_unit() == 1j
    with pytest.raises(ParseError):
        REAL.imaginary_unit()


def test_division_by_zero_in_both_domains():
    with pytest.raises(DivisionByZeroError):
        REAL.div(REAL.one, REAL.zero)
    with pytest.raises(DivisionByZeroError):
        COMPLEX.div(COMPLEX.one, COMPLEX.zero)


def test_logarithm():
    assert REAL.log(REAL.one) == 0
    with pytest.raises(DomainError):
        REAL.log(REAL.zero)
    with pytest.raises(DomainError, match="unsupported"):
        COMPLEX.log(COMPLEX.coerce(2))


def test_invalid_real_power_is_nan_not_an_error():
    result = REAL.power(REAL.coerce(-8), REAL.coerce(0.5))
    assert np.isnan(result)


def test_complex_arithmetic_from_text():
    tree = parse("(2 + 3i) * (4 - 5i)", COMPLEX)
    assert COMPLEX.render(tree.evaluate(None, COMPLEX)) == "(23 + 2i)"


def test_complex_functions_evaluate():
    value = parse("exp(i) - cos(1) - i * sin(1)", COMPLEX).evaluate(None, COMPLEX)
    assert abs(complex(value)) < 1e-12


def test_complex_parts_are_kept_when_infinite():
    with warnings.catch_warnings():
        warnings.simplefilter('error')
        value = COMPLEX.coerce(complex(1, float('inf')))
        bound = evaluate(build("z", domain='complex'), {'z': complex(1, float('inf'))})
    assert value.real == 1
    assert np.isinf(value.imag)
    assert bound.real == 1
    assert np.isinf(bound.imag)


def test_complex_coerce_passes_clongdouble_through():
    value = make_complex(2, -3)
    assert COMPLEX.coerce(value) is value
    assert COMPLEX.render(value) == "(2 - 3i)"
