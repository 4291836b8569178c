"""Precedence climbing parser building expression trees from tokens."""

from typing import Union

from ..core.domain import NumericDomain, get_domain
from ..core.errors import ExpressionSyntaxError, ParseError
from ..core.node import Node, ValueNode, VariableNode, BinaryOpNode, UnaryOpNode
from ..core.operators import OpPrecedence, PRECEDENCE, UNARY_OP_MAP
from .lexer import Lexer, Token, TokenKind


def _describe(token: Token) -> str:
  return token.text if token.kind != TokenKind.END else 'end of input'


class Parser:
  """Recursive descent parser with precedence climbing.

  Precedence levels ascend ADD_SUB < MULT < DIV < POW. After each operator
  the right operand is a single primary; when the operator following it
  binds strictly tighter, that chain is absorbed into the right operand at
  the next level up before the two sides are combined.
  """

  def __init__(self, text: str, domain: Union[str, NumericDomain] = 'real',
               case_insensitive: bool = False):
    self.domain = get_domain(domain)
    self.lexer = Lexer(text, self.domain, case_insensitive)
    self.cur_token = self.lexer.next_token()

  def parse(self) -> Node:
    expr = self._parse_expression()
    if self.cur_token.kind != TokenKind.END:
      raise ExpressionSyntaxError(
        f"Unexpected token at the end of expression: \"{_describe(self.cur_token)}\"",
        self.cur_token.text)
    return expr

  def _advance(self) -> Token:
    self.cur_token = self.lexer.next_token()
    return self.cur_token

  def _consume(self, expected: TokenKind) -> Token:
    if self.cur_token.kind != expected:
      raise ExpressionSyntaxError(
        f"Unexpected token: \"{_describe(self.cur_token)}\", expected {expected.value}",
        self.cur_token.text)
    return self._advance()

  @staticmethod
  def _precedence(operator: str) -> OpPrecedence:
    try:
      return PRECEDENCE[operator]
    except KeyError:
      raise ExpressionSyntaxError(f"Unknown binary operator: \"{operator}\"", operator) from None

  def _parse_expression(self) -> Node:
    left = self._parse_primary()
    return self._parse_op_right(OpPrecedence.ADD_SUB, left)

  def _parse_op_right(self, expr_precedence: OpPrecedence, left: Node) -> Node:
    while self.cur_token.kind not in (TokenKind.END, TokenKind.RIGHT_PAREN):
      if self.cur_token.kind != TokenKind.OPERATOR:
        raise ExpressionSyntaxError(
          f"Expected binary operator, got: \"{self.cur_token.text}\"", self.cur_token.text)

      operator = self.cur_token.text
      op_precedence = self._precedence(operator)
      if op_precedence < expr_precedence:
        break

      self._advance()
      right = self._parse_primary()

      if self.cur_token.kind == TokenKind.OPERATOR:
        next_precedence = self._precedence(self.cur_token.text)
        if op_precedence < next_precedence:
          right = self._parse_op_right(OpPrecedence(op_precedence + 1), right)

      left = BinaryOpNode(operator, left, right)
    return left

  def _parse_primary(self) -> Node:
    kind = self.cur_token.kind
    if kind == TokenKind.LEFT_PAREN:
      return self._parse_parentheses()
    elif kind == TokenKind.FUNCTION:
      return self._parse_function()
    elif kind == TokenKind.NUMBER:
      return self._parse_number()
    elif kind == TokenKind.IMAGINARY_UNIT:
      return self._parse_imaginary_unit()
    elif kind == TokenKind.IDENTIFIER:
      return self._parse_identifier()
    elif kind == TokenKind.OPERATOR and self.cur_token.text == '-':
      return self._parse_negation()
    raise ExpressionSyntaxError(
      f"Unexpected token: \"{_describe(self.cur_token)}\"", self.cur_token.text)

  def _parse_negation(self) -> Node:
    # -a parses as (0 - a); the operand keeps any '^' chain bound to it
    self._advance()
    operand = self._parse_primary()
    operand = self._parse_op_right(OpPrecedence.POW, operand)
    return BinaryOpNode('-', ValueNode(self.domain.zero), operand)

  def _parse_parentheses(self) -> Node:
    self._consume(TokenKind.LEFT_PAREN)
    expr = self._parse_expression()
    self._consume(TokenKind.RIGHT_PAREN)
    return expr

  def _parse_function(self) -> Node:
    name = self.cur_token.text[:-1].lower()
    if name not in UNARY_OP_MAP:
      raise ExpressionSyntaxError(f"Unknown function: {name}", self.cur_token.text)
    self._consume(TokenKind.FUNCTION)
    argument = self._parse_expression()
    self._consume(TokenKind.RIGHT_PAREN)
    return UnaryOpNode(name, argument)

  def _parse_number(self) -> ValueNode:
    value = self.domain.from_literal(self.cur_token.text)
    self._advance()
    return ValueNode(value)

  def _parse_imaginary_unit(self) -> ValueNode:
    try:
      value = self.domain.imaginary_unit()
    except ParseError as e:
      raise ExpressionSyntaxError(str(e), self.cur_token.text) from None
    self._advance()
    return ValueNode(value)

  def _parse_identifier(self) -> VariableNode:
    name = self.cur_token.text
    self._advance()
    return VariableNode(name)


def parse(text: str, domain: Union[str, NumericDomain] = 'real',
          case_insensitive: bool = False) -> Node:
  return Parser(text, domain, case_insensitive).parse()
