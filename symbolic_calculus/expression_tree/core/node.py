import numpy as np
import sympy as sp
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Tuple
from .domain import NumericDomain, format_real
from .errors import UnresolvedVariableError
from .operators import (
  NodeType, OpType, BINARY_OP_MAP, UNARY_OP_MAP,
  evaluate_binary_op, evaluate_unary_op
)

Context = Optional[Mapping[str, Any]]

# Significant digits carried into SymPy floats (matches numpy.longdouble)
SYMPY_DPS = int(np.finfo(np.longdouble).precision) + 2


class Node(ABC):
  """Immutable expression tree node.

  Nodes never change after construction, so a child can be shared by any
  number of parents. Differentiation relies on that: the product, quotient
  and power rules reuse the same operand subtrees in several branches of the
  result instead of copying them.
  """

  __slots__ = ()

  def __setattr__(self, name, value):
    raise AttributeError(f"{type(self).__name__} is immutable")

  def __delattr__(self, name):
    raise AttributeError(f"{type(self).__name__} is immutable")

  @abstractmethod
  def evaluate(self, context: Context, domain: NumericDomain) -> Any:
    pass

  @abstractmethod
  def diff(self, by: str, domain: NumericDomain) -> 'Node':
    pass

  @abstractmethod
  def substitute(self, context: Context, domain: NumericDomain) -> 'Node':
    """Bind the variables found in context, leave the others symbolic"""
    pass

  @abstractmethod
  def to_string(self, domain: NumericDomain) -> str:
    pass

  @abstractmethod
  def to_sympy(self) -> sp.Expr:
    pass

  @abstractmethod
  def children(self) -> Tuple['Node', ...]:
    pass

  @abstractmethod
  def _key(self) -> tuple:
    pass

  def size(self) -> int:
    """Number of nodes, counting shared subtrees once per reference"""
    return 1 + sum(child.size() for child in self.children())

  def __eq__(self, other) -> bool:
    if not isinstance(other, Node):
      return NotImplemented
    return type(self) is type(other) and self._key() == other._key()

  def __ne__(self, other) -> bool:
    result = self.__eq__(other)
    if result is NotImplemented:
      return result
    return not result

  def __hash__(self) -> int:
    return hash(self._key())


class ValueNode(Node):
  __slots__ = ('value',)

  def __init__(self, value: Any):
    object.__setattr__(self, 'value', value)

  def evaluate(self, context: Context, domain: NumericDomain) -> Any:
    return domain.coerce(self.value)

  def diff(self, by: str, domain: NumericDomain) -> 'ValueNode':
    return ValueNode(domain.zero)

  def substitute(self, context: Context, domain: NumericDomain) -> 'ValueNode':
    return self

  def to_string(self, domain: NumericDomain) -> str:
    return domain.render(domain.coerce(self.value))

  def to_sympy(self) -> sp.Expr:
    value = np.clongdouble(self.value)
    real = sp.Float(format_real(value.real), SYMPY_DPS)
    if value.imag == 0:
      return real
    return real + sp.I * sp.Float(format_real(value.imag), SYMPY_DPS)

  def children(self) -> Tuple[Node, ...]:
    return ()

  def _key(self) -> tuple:
    return (NodeType.VALUE, self.value)

  def __repr__(self) -> str:
    return f"ValueNode({self.value!r})"


class VariableNode(Node):
  __slots__ = ('name',)

  def __init__(self, name: str):
    if not isinstance(name, str) or not name:
      raise ValueError(f"Variable name must be a non-empty string, got {name!r}")
    object.__setattr__(self, 'name', name)

  def evaluate(self, context: Context, domain: NumericDomain) -> Any:
    if context is None or self.name not in context:
      raise UnresolvedVariableError(self.name)
    return domain.coerce(context[self.name])

  def diff(self, by: str, domain: NumericDomain) -> ValueNode:
    if by == self.name:
      return ValueNode(domain.one)
    return ValueNode(domain.zero)

  def substitute(self, context: Context, domain: NumericDomain) -> Node:
    if context is None or self.name not in context:
      return self
    return ValueNode(domain.coerce(context[self.name]))

  def to_string(self, domain: NumericDomain) -> str:
    return self.name

  def to_sympy(self) -> sp.Symbol:
    return sp.Symbol(self.name)

  def children(self) -> Tuple[Node, ...]:
    return ()

  def _key(self) -> tuple:
    return (NodeType.VARIABLE, self.name)

  def __repr__(self) -> str:
    return f"VariableNode({self.name!r})"


class BinaryOpNode(Node):
  __slots__ = ('operator', 'left', 'right')

  def __init__(self, operator: str, left: Node, right: Node):
    if operator not in BINARY_OP_MAP:
      raise ValueError(f"Unknown binary operator: {operator!r}")
    if not isinstance(left, Node) or not isinstance(right, Node):
      raise TypeError("Binary operator operands must be Node instances")
    object.__setattr__(self, 'operator', operator)
    object.__setattr__(self, 'left', left)
    object.__setattr__(self, 'right', right)

  @property
  def op_type(self) -> OpType:
    return BINARY_OP_MAP[self.operator]

  def evaluate(self, context: Context, domain: NumericDomain) -> Any:
    left_val = self.left.evaluate(context, domain)
    right_val = self.right.evaluate(context, domain)
    return evaluate_binary_op(left_val, right_val, self.operator, domain)

  def diff(self, by: str, domain: NumericDomain) -> Node:
    left, right = self.left, self.right
    d_left = left.diff(by, domain)
    d_right = right.diff(by, domain)
    op_type = self.op_type

    if op_type == OpType.ADD:
      return BinaryOpNode('+', d_left, d_right)
    elif op_type == OpType.SUB:
      return BinaryOpNode('-', d_left, d_right)
    elif op_type == OpType.MUL:
      # (l * r)' = l' * r + l * r'
      return BinaryOpNode('+', BinaryOpNode('*', d_left, right), BinaryOpNode('*', left, d_right))
    elif op_type == OpType.DIV:
      # (l / r)' = (l' * r - l * r') / (r * r)
      numerator = BinaryOpNode('-', BinaryOpNode('*', d_left, right), BinaryOpNode('*', left, d_right))
      return BinaryOpNode('/', numerator, BinaryOpNode('*', right, right))

    # (l ^ r)' = l ^ r * (r' * ln(l) + (r * l') / l)
    exponent_term = BinaryOpNode('*', d_right, UnaryOpNode('ln', left))
    base_term = BinaryOpNode('/', BinaryOpNode('*', right, d_left), left)
    return BinaryOpNode('*', BinaryOpNode('^', left, right), BinaryOpNode('+', exponent_term, base_term))

  def substitute(self, context: Context, domain: NumericDomain) -> 'BinaryOpNode':
    return BinaryOpNode(self.operator, self.left.substitute(context, domain),
                        self.right.substitute(context, domain))

  def to_string(self, domain: NumericDomain) -> str:
    left_str = self.left.to_string(domain)
    right_str = self.right.to_string(domain)
    if self.op_type == OpType.POW:
      return f"({left_str}) ^ ({right_str})"
    return f"({left_str} {self.operator} {right_str})"

  def to_sympy(self) -> sp.Expr:
    left = self.left.to_sympy()
    right = self.right.to_sympy()
    op_type = self.op_type
    if op_type == OpType.ADD:
      return sp.Add(left, right, evaluate=False)
    elif op_type == OpType.SUB:
      return sp.Add(left, sp.Mul(-1, right, evaluate=False), evaluate=False)
    elif op_type == OpType.MUL:
      return sp.Mul(left, right, evaluate=False)
    elif op_type == OpType.DIV:
      return sp.Mul(left, sp.Pow(right, -1, evaluate=False), evaluate=False)
    return sp.Pow(left, right, evaluate=False)

  def children(self) -> Tuple[Node, ...]:
    return (self.left, self.right)

  def _key(self) -> tuple:
    return (NodeType.BINARY_OP, self.operator, self.left, self.right)

  def __repr__(self) -> str:
    return f"BinaryOpNode({self.operator!r}, {self.left!r}, {self.right!r})"


class UnaryOpNode(Node):
  __slots__ = ('operator', 'operand')

  def __init__(self, operator: str, operand: Node):
    if operator not in UNARY_OP_MAP:
      raise ValueError(f"Unknown function: {operator!r}")
    if not isinstance(operand, Node):
      raise TypeError("Function argument must be a Node instance")
    object.__setattr__(self, 'operator', operator)
    object.__setattr__(self, 'operand', operand)

  @property
  def op_type(self) -> OpType:
    return UNARY_OP_MAP[self.operator]

  def evaluate(self, context: Context, domain: NumericDomain) -> Any:
    operand_val = self.operand.evaluate(context, domain)
    return evaluate_unary_op(operand_val, self.operator, domain)

  def diff(self, by: str, domain: NumericDomain) -> Node:
    arg = self.operand
    d_arg = arg.diff(by, domain)
    op_type = self.op_type

    if op_type == OpType.SIN:
      return BinaryOpNode('*', UnaryOpNode('cos', arg), d_arg)
    elif op_type == OpType.COS:
      negated_sin = BinaryOpNode('*', UnaryOpNode('sin', arg), ValueNode(-domain.one))
      return BinaryOpNode('*', negated_sin, d_arg)
    elif op_type == OpType.LN:
      return BinaryOpNode('*', BinaryOpNode('/', ValueNode(domain.one), arg), d_arg)
    return BinaryOpNode('*', UnaryOpNode('exp', arg), d_arg)

  def substitute(self, context: Context, domain: NumericDomain) -> 'UnaryOpNode':
    return UnaryOpNode(self.operator, self.operand.substitute(context, domain))

  def to_string(self, domain: NumericDomain) -> str:
    return f"{self.operator}({self.operand.to_string(domain)})"

  def to_sympy(self) -> sp.Expr:
    operand_sympy = self.operand.to_sympy()
    op_type = self.op_type
    if op_type == OpType.SIN:
      return sp.sin(operand_sympy)
    elif op_type == OpType.COS:
      return sp.cos(operand_sympy)
    elif op_type == OpType.LN:
      return sp.log(operand_sympy)
    return sp.exp(operand_sympy)

  def children(self) -> Tuple[Node, ...]:
    return (self.operand,)

  def _key(self) -> tuple:
    return (NodeType.UNARY_OP, self.operator, self.operand)

  def __repr__(self) -> str:
    return f"UnaryOpNode({self.operator!r}, {self.operand!r})"
