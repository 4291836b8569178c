import sympy as sp
from typing import Any, List, Mapping, Optional, Union
from .core.domain import NumericDomain, get_domain
from .core.node import Node, ValueNode, VariableNode, BinaryOpNode, UnaryOpNode
from .parsing.parser import Parser

Operand = Union['Expression', Node, str, int, float, complex]


class Expression:
  """Public handle on an expression tree bound to a numeric domain"""

  __slots__ = ('root', 'domain')

  def __init__(self, root: Node, domain: Union[str, NumericDomain] = 'real'):
    if not isinstance(root, Node):
      raise TypeError(f"Expression root must be a Node, got {type(root).__name__}")
    self.root = root
    self.domain = get_domain(domain)

  @classmethod
  def from_string(cls, expr_str: str, domain: Union[str, NumericDomain] = 'real',
                  case_insensitive: bool = False) -> 'Expression':
    parser = Parser(expr_str, domain, case_insensitive)
    return cls(parser.parse(), parser.domain)

  @classmethod
  def from_value(cls, value: Any, domain: Union[str, NumericDomain] = 'real') -> 'Expression':
    domain = get_domain(domain)
    return cls(ValueNode(domain.coerce(value)), domain)

  @classmethod
  def from_variable(cls, name: str, domain: Union[str, NumericDomain] = 'real') -> 'Expression':
    return cls(VariableNode(name), domain)

  def _wrap(self, root: Node) -> 'Expression':
    return Expression(root, self.domain)

  def _as_node(self, other: Operand) -> Node:
    if isinstance(other, Expression):
      if other.domain is not self.domain:
        raise ValueError(
          f"Cannot combine a {self.domain.name} expression with a {other.domain.name} one")
      return other.root
    if isinstance(other, Node):
      return other
    if isinstance(other, str):
      return VariableNode(other)
    return ValueNode(self.domain.coerce(other))

  def _binary(self, operator: str, other: Operand, reflected: bool = False) -> 'Expression':
    other_node = self._as_node(other)
    if reflected:
      return self._wrap(BinaryOpNode(operator, other_node, self.root))
    return self._wrap(BinaryOpNode(operator, self.root, other_node))

  def __add__(self, other: Operand) -> 'Expression':
    return self._binary('+', other)

  def __radd__(self, other: Operand) -> 'Expression':
    return self._binary('+', other, reflected=True)

  def __sub__(self, other: Operand) -> 'Expression':
    return self._binary('-', other)

  def __rsub__(self, other: Operand) -> 'Expression':
    return self._binary('-', other, reflected=True)

  def __mul__(self, other: Operand) -> 'Expression':
    return self._binary('*', other)

  def __rmul__(self, other: Operand) -> 'Expression':
    return self._binary('*', other, reflected=True)

  def __truediv__(self, other: Operand) -> 'Expression':
    return self._binary('/', other)

  def __rtruediv__(self, other: Operand) -> 'Expression':
    return self._binary('/', other, reflected=True)

  def __pow__(self, other: Operand) -> 'Expression':
    return self._binary('^', other)

  def __rpow__(self, other: Operand) -> 'Expression':
    return self._binary('^', other, reflected=True)

  # '^' reads as power, the way the parser treats it
  __xor__ = __pow__
  __rxor__ = __rpow__

  def __neg__(self) -> 'Expression':
    return self._wrap(BinaryOpNode('-', ValueNode(self.domain.zero), self.root))

  def sin(self) -> 'Expression':
    return self._wrap(UnaryOpNode('sin', self.root))

  def cos(self) -> 'Expression':
    return self._wrap(UnaryOpNode('cos', self.root))

  def ln(self) -> 'Expression':
    return self._wrap(UnaryOpNode('ln', self.root))

  def exp(self) -> 'Expression':
    return self._wrap(UnaryOpNode('exp', self.root))

  def diff(self, by: str) -> 'Expression':
    """Unsimplified derivative with respect to the variable named by"""
    return self._wrap(self.root.diff(by, self.domain))

  def with_context(self, context: Mapping[str, Any]) -> 'Expression':
    """Bind the known variables, keep the rest symbolic"""
    return self._wrap(self.root.substitute(context, self.domain))

  def eval(self) -> Any:
    return self.root.evaluate(None, self.domain)

  def eval_with(self, context: Optional[Mapping[str, Any]]) -> Any:
    return self.root.evaluate(context, self.domain)

  def to_string(self) -> str:
    return self.root.to_string(self.domain)

  def to_sympy(self) -> sp.Expr:
    return self.root.to_sympy()

  def to_latex(self) -> str:
    return sp.latex(self.to_sympy())

  def size(self) -> int:
    return self.root.size()

  def depth(self) -> int:
    from .utils.tree_utils import calculate_tree_depth
    return calculate_tree_depth(self.root)

  def variables(self) -> List[str]:
    """Distinct variable names in first-seen order"""
    from .utils.tree_utils import get_variable_names
    return get_variable_names(self.root)

  def __str__(self) -> str:
    return self.to_string()

  def __repr__(self) -> str:
    return f"Expression({self.to_string()!r}, domain={self.domain.name!r})"

  def __hash__(self) -> int:
    return hash((self.domain.name, self.root))

  def __eq__(self, other) -> bool:
    if not isinstance(other, Expression):
      return False
    return self.domain is other.domain and self.root == other.root


def build(text: str, case_insensitive: bool = False,
          domain: Union[str, NumericDomain] = 'real') -> Expression:
  """Parse text into an Expression; raises ParseError on bad input"""
  return Expression.from_string(text, domain, case_insensitive)


def evaluate(tree: Expression, bindings: Optional[Mapping[str, Any]] = None) -> Any:
  """Numeric value of tree; raises EvaluationError subclasses on failure"""
  return tree.eval_with(bindings or {})


def differentiate(tree: Expression, variable: str) -> Expression:
  return tree.diff(variable)


def render(tree: Expression) -> str:
  return tree.to_string()
