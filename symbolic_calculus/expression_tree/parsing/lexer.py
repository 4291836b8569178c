"""Lexer for infix expressions.

Turns source text into a lazy stream of tokens terminated by an END token.
Implicit multiplication is synthesized here: when two adjacent tokens form
one of IMPLICIT_MULTIPLICATION_PAIRS, a '*' operator token is emitted first
and the current token is held in a one-token pushback buffer until the next
call. This makes ``2x(3+4)`` read as ``2 * x * ( 3 + 4 )``.
"""

import re
from enum import Enum
from types import MappingProxyType
from typing import Iterator, List, NamedTuple, Optional, Tuple, Union

from ..core.domain import NumericDomain, get_domain
from ..core.errors import LexicalError


class TokenKind(Enum):
  NUMBER = 'number'
  IMAGINARY_UNIT = 'imaginary_unit'
  IDENTIFIER = 'identifier'
  OPERATOR = 'operator'
  LEFT_PAREN = 'left_paren'
  RIGHT_PAREN = 'right_paren'
  FUNCTION = 'function'
  END = 'end'


class Token(NamedTuple):
  kind: TokenKind
  text: str


END_TOKEN = Token(TokenKind.END, '')
MULTIPLY_TOKEN = Token(TokenKind.OPERATOR, '*')

# Tried in order at every position; the longest match wins, earlier entries
# win ties. No exponent notation and no sign on numbers.
PATTERNS: Tuple[Tuple[TokenKind, re.Pattern], ...] = (
  (TokenKind.NUMBER, re.compile(r'(0|[1-9][0-9]*)(\.[0-9]+)?')),
  (TokenKind.IDENTIFIER, re.compile(r'[a-zA-Z_]+')),
  (TokenKind.FUNCTION, re.compile(r'(sin|cos|ln|exp)\(', re.IGNORECASE)),
)

SINGLE_CHAR_TOKENS = MappingProxyType({
  '+': TokenKind.OPERATOR,
  '-': TokenKind.OPERATOR,
  '*': TokenKind.OPERATOR,
  '/': TokenKind.OPERATOR,
  '^': TokenKind.OPERATOR,
  '(': TokenKind.LEFT_PAREN,
  ')': TokenKind.RIGHT_PAREN,
})

IMAGINARY_UNIT_NAME = 'i'

IMPLICIT_MULTIPLICATION_PAIRS = frozenset({
  (TokenKind.NUMBER, TokenKind.IDENTIFIER),
  (TokenKind.NUMBER, TokenKind.FUNCTION),
  (TokenKind.NUMBER, TokenKind.LEFT_PAREN),
  (TokenKind.NUMBER, TokenKind.IMAGINARY_UNIT),
  (TokenKind.IDENTIFIER, TokenKind.LEFT_PAREN),
  (TokenKind.IMAGINARY_UNIT, TokenKind.LEFT_PAREN),
  (TokenKind.RIGHT_PAREN, TokenKind.LEFT_PAREN),
  (TokenKind.RIGHT_PAREN, TokenKind.NUMBER),
  (TokenKind.RIGHT_PAREN, TokenKind.IMAGINARY_UNIT),
  (TokenKind.RIGHT_PAREN, TokenKind.IDENTIFIER),
  (TokenKind.RIGHT_PAREN, TokenKind.FUNCTION),
})


class Lexer:
  """Single pass token stream over one input string"""

  def __init__(self, text: str, domain: Union[str, NumericDomain] = 'real',
               case_insensitive: bool = False):
    self.domain = get_domain(domain)
    self.text = text.lower() if case_insensitive else text
    self.pos = 0
    self._pending: Optional[Token] = None
    self._prev_kind = TokenKind.END
    self._finished = False

  def _skip_whitespace(self):
    while self.pos < len(self.text) and self.text[self.pos].isspace():
      self.pos += 1

  def _scan(self) -> Token:
    self._skip_whitespace()
    if self.pos >= len(self.text):
      return END_TOKEN

    best_kind, best_text = None, ''
    for kind, pattern in PATTERNS:
      match = pattern.match(self.text, self.pos)
      if match and len(match.group(0)) > len(best_text):
        best_kind, best_text = kind, match.group(0)

    if best_kind is not None:
      self.pos += len(best_text)
      if (best_kind == TokenKind.IDENTIFIER and best_text == IMAGINARY_UNIT_NAME
          and self.domain.has_imaginary_unit):
        return Token(TokenKind.IMAGINARY_UNIT, best_text)
      return Token(best_kind, best_text)

    char = self.text[self.pos]
    kind = SINGLE_CHAR_TOKENS.get(char)
    if kind is None:
      raise LexicalError(char, self.pos)
    self.pos += 1
    return Token(kind, char)

  def next_token(self) -> Token:
    if self._pending is not None:
      token, self._pending = self._pending, None
      return token

    token = self._scan()
    if token.kind == TokenKind.END:
      return token

    if (self._prev_kind, token.kind) in IMPLICIT_MULTIPLICATION_PAIRS:
      self._pending = token
      self._prev_kind = token.kind
      return MULTIPLY_TOKEN

    self._prev_kind = token.kind
    return token

  def __iter__(self) -> Iterator[Token]:
    while not self._finished:
      token = self.next_token()
      if token.kind == TokenKind.END:
        self._finished = True
      yield token


def tokenize(text: str, domain: Union[str, NumericDomain] = 'real',
             case_insensitive: bool = False) -> List[Token]:
  """Full token list of text, END token included"""
  return list(Lexer(text, domain, case_insensitive))
