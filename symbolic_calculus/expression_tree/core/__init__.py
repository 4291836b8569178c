"""Core expression tree components."""

from .domain import NumericDomain, RealDomain, ComplexDomain, REAL, COMPLEX, get_domain, format_real, to_longdouble, make_complex
from .errors import (
  ExpressionError, ParseError, LexicalError, ExpressionSyntaxError,
  EvaluationError, UnresolvedVariableError, DivisionByZeroError, DomainError
)
from .node import Node, ValueNode, VariableNode, BinaryOpNode, UnaryOpNode
from .operators import (
  NodeType, OpType, OpPrecedence, BINARY_OP_MAP, UNARY_OP_MAP, PRECEDENCE,
  evaluate_binary_op, evaluate_unary_op
)

__all__ = [
  'NumericDomain', 'RealDomain', 'ComplexDomain', 'REAL', 'COMPLEX', 'get_domain', 'format_real', 'to_longdouble', 'make_complex',
  'ExpressionError', 'ParseError', 'LexicalError', 'ExpressionSyntaxError',
  'EvaluationError', 'UnresolvedVariableError', 'DivisionByZeroError', 'DomainError',
  'Node', 'ValueNode', 'VariableNode', 'BinaryOpNode', 'UnaryOpNode',
  'NodeType', 'OpType', 'OpPrecedence', 'BINARY_OP_MAP', 'UNARY_OP_MAP', 'PRECEDENCE',
  'evaluate_binary_op', 'evaluate_unary_op'
]
