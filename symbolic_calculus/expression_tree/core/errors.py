"""Exception hierarchy for parsing and evaluating expressions.

Parse errors are fatal to the current build. Evaluation errors are fatal to
a single evaluation call only; the tree stays valid and can be evaluated
again with a different context.
"""

from typing import Optional


class ExpressionError(Exception):
  """Base class for every error raised by the expression engine"""


class ParseError(ExpressionError, ValueError):
  """Raised when text cannot be turned into an expression tree"""


class LexicalError(ParseError):
  """Unrecognized character in the input"""

  def __init__(self, character: str, position: int):
    super().__init__(f"Unexpected symbol: '{character}' at position {position}")
    self.character = character
    self.position = position


class ExpressionSyntaxError(ParseError):
  """Unexpected token at a grammar position"""

  def __init__(self, message: str, token_text: Optional[str] = None):
    super().__init__(message)
    self.token_text = token_text


class EvaluationError(ExpressionError):
  """Raised when a tree cannot be reduced to a number"""


class UnresolvedVariableError(EvaluationError):

  def __init__(self, name: str):
    super().__init__(f"Variable {name} cannot be resolved without context")
    self.name = name


class DivisionByZeroError(EvaluationError, ZeroDivisionError):
  pass


class DomainError(EvaluationError, ValueError):
  """Function argument outside the domain of the numeric type"""
