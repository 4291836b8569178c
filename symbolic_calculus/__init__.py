# Python

"""Symbolic Calculus Package

Parses infix expressions into immutable expression trees, evaluates them
under a variable binding context, differentiates them symbolically and
renders them back to fully parenthesized text, over real or complex numbers.
"""

from .expression_tree import (
  Expression, build, evaluate, differentiate, render,
  Node, ValueNode, VariableNode, BinaryOpNode, UnaryOpNode,
  NumericDomain, RealDomain, ComplexDomain, REAL, COMPLEX, get_domain,
  ExpressionError, ParseError, LexicalError, ExpressionSyntaxError,
  EvaluationError, UnresolvedVariableError, DivisionByZeroError, DomainError,
  Token, TokenKind, Lexer, Parser, tokenize, parse
)
from .config import EngineConfig

__version__ = "0.1.0"
__all__ = [
  "Expression", "build", "evaluate", "differentiate", "render",
  "Node", "ValueNode", "VariableNode", "BinaryOpNode", "UnaryOpNode",
  "NumericDomain", "RealDomain", "ComplexDomain", "REAL", "COMPLEX", "get_domain",
  "ExpressionError", "ParseError", "LexicalError", "ExpressionSyntaxError",
  "EvaluationError", "UnresolvedVariableError", "DivisionByZeroError", "DomainError",
  "Token", "TokenKind", "Lexer", "Parser", "tokenize", "parse",
  "EngineConfig"
]
