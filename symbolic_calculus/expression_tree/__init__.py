"""Expression Tree Module

Parsing, evaluation, differentiation and rendering of expression trees over
the real and complex numeric domains.
"""

from .expression import Expression, build, evaluate, differentiate, render
from .core import (
  Node, ValueNode, VariableNode, BinaryOpNode, UnaryOpNode,
  NodeType, OpType, OpPrecedence, BINARY_OP_MAP, UNARY_OP_MAP, PRECEDENCE,
  NumericDomain, RealDomain, ComplexDomain, REAL, COMPLEX, get_domain,
  ExpressionError, ParseError, LexicalError, ExpressionSyntaxError,
  EvaluationError, UnresolvedVariableError, DivisionByZeroError, DomainError
)
from .parsing import Token, TokenKind, Lexer, Parser, tokenize, parse
from .utils import ExpressionValidator, to_sympy_expression, derivatives_agree

__all__ = [
  "Expression", "build", "evaluate", "differentiate", "render",
  "Node", "ValueNode", "VariableNode", "BinaryOpNode", "UnaryOpNode",
  "NodeType", "OpType", "OpPrecedence", "BINARY_OP_MAP", "UNARY_OP_MAP", "PRECEDENCE",
  "NumericDomain", "RealDomain", "ComplexDomain", "REAL", "COMPLEX", "get_domain",
  "ExpressionError", "ParseError", "LexicalError", "ExpressionSyntaxError",
  "EvaluationError", "UnresolvedVariableError", "DivisionByZeroError", "DomainError",
  "Token", "TokenKind", "Lexer", "Parser", "tokenize", "parse",
  "ExpressionValidator", "to_sympy_expression", "derivatives_agree"
]
