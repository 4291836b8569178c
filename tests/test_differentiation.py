"""
Tests for symbolic differentiation.

Derivatives are never simplified, so the rendered shapes below are exact.
"""

import pytest

from symbolic_calculus.expression_tree import (
    COMPLEX, REAL, BinaryOpNode, DomainError, UnaryOpNode, ValueNode, VariableNode,
    derivatives_agree, parse
)

x = VariableNode('x')
y = VariableNode('y')


def d(node, by='x', domain=REAL):
    return node.diff(by, domain).to_string(domain)


def test_constant_derivative_is_zero():
    assert ValueNode(42).diff('x', REAL) == ValueNode(0)


def test_variable_derivative():
    assert x.diff('x', REAL) == ValueNode(1)
    assert x.diff('y', REAL) == ValueNode(0)


def test_sum_and_difference():
    assert d(BinaryOpNode('+', x, y)) == "(1 + 0)"
    assert d(BinaryOpNode('-', x, y)) == "(1 - 0)"


def test_product_rule():
    assert d(BinaryOpNode('*', x, y)) == "((1 * y) + (x * 0))"


def test_quotient_rule():
    assert d(BinaryOpNode('/', x, y)) == "(((1 * y) - (x * 0)) / (y * y))"


def test_power_rule():
    square = BinaryOpNode('^', x, ValueNode(2))
    assert d(square) == "((x) ^ (2) * ((0 * ln(x)) + ((2 * 1) / x)))"
    assert square.diff('x', REAL).evaluate({'x': 3}, REAL) == 6


def test_function_rules():
    assert d(UnaryOpNode('sin', x)) == "(cos(x) * 1)"
    assert d(UnaryOpNode('cos', x)) == "((sin(x) * -1) * 1)"
    assert d(UnaryOpNode('ln', x)) == "((1 / x) * 1)"
    assert d(UnaryOpNode('exp', x)) == "(exp(x) * 1)"


def test_chain_rule_multiplies_inner_derivative():
    tree = UnaryOpNode('sin', BinaryOpNode('*', ValueNode(2), x))
    assert d(tree) == "(cos((2 * x)) * ((0 * x) + (2 * 1)))"


def test_product_rule_shares_operands():
    product = BinaryOpNode('*', x, UnaryOpNode('sin', y))
    derivative = product.diff('x', REAL)
    assert derivative.left.right is product.right
    assert derivative.right.left is product.left


def test_quotient_rule_reuses_denominator():
    quotient = BinaryOpNode('/', x, UnaryOpNode('cos', x))
    derivative = quotient.diff('x', REAL)
    denominator = quotient.right
    assert derivative.right.left is denominator
    assert derivative.right.right is denominator
    assert derivative.left.left.right is denominator


def test_differentiating_leaves_input_unchanged():
    tree = parse("x * sin(x)")
    before = tree.to_string(REAL)
    tree.diff('x', REAL)
    assert tree.to_string(REAL) == before


def test_absent_variable_gives_zero_valued_tree():
    tree = parse("sin(y) * y")
    assert tree.diff('x', REAL).evaluate({'y': 0.7}, REAL) == 0


def test_complex_product_derivative():
    z = VariableNode('z')
    derivative = BinaryOpNode('*', z, z).diff('z', COMPLEX)
    value = derivative.evaluate({'z': complex(1, 1)}, COMPLEX)
    assert COMPLEX.render(value) == "(2 + 2i)"


def test_complex_power_derivative_needs_logarithm():
    # the power rule always carries ln(base), which complex numbers lack
    z = VariableNode('z')
    derivative = BinaryOpNode('^', z, ValueNode(2)).diff('z', COMPLEX)
    with pytest.raises(DomainError):
        derivative.evaluate({'z': complex(1, 1)}, COMPLEX)


@pytest.mark.parametrize("text, point", [
    ("x * sin(x)", {'x': 0.3}),
    ("x ^ 3 - 2 * x", {'x': 1.7}),
    ("exp(x) / (1 + x)", {'x': 0.5}),
    ("ln(x) * cos(x * y)", {'x': 2.0, 'y': 0.25}),
    ("x ^ y", {'x': 1.5, 'y': 2.5}),
])
def test_derivatives_match_sympy(text, point):
    assert derivatives_agree(parse(text), 'x', point)
