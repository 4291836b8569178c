import sympy as sp
from typing import Any, Mapping, Union

from ..core.domain import NumericDomain, get_domain
from ..core.node import Node
from ..parsing.parser import parse


def to_sympy_expression(expr_string: str, domain: Union[str, NumericDomain] = 'real',
                        case_insensitive: bool = False) -> sp.Expr:
  """Parse expression text with the engine's grammar and convert it to SymPy"""
  return parse(expr_string, domain, case_insensitive).to_sympy()


def latex_representation(expr_string: str, domain: Union[str, NumericDomain] = 'real') -> str:
  """Get LaTeX representation of the expression"""
  return sp.latex(to_sympy_expression(expr_string, domain))


def derivatives_agree(root: Node, by: str, point: Mapping[str, Any],
                      domain: Union[str, NumericDomain] = 'real',
                      tolerance: float = 1e-9) -> bool:
  """
  Cross-check the engine's unsimplified derivative against SymPy.

  Both derivatives are evaluated numerically at point; they agree when the
  relative difference stays within tolerance.
  """
  domain = get_domain(domain)
  ours = complex(root.diff(by, domain).evaluate(point, domain))

  sympy_expr = root.to_sympy()
  substitutions = {sp.Symbol(name): sp.sympify(complex(value)) for name, value in point.items()}
  theirs = complex(sp.N(sp.diff(sympy_expr, sp.Symbol(by)).subs(substitutions)))

  scale = max(1.0, abs(theirs))
  return abs(ours - theirs) <= tolerance * scale
