from enum import IntEnum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
  from .domain import NumericDomain


class NodeType(IntEnum):
  VALUE = 0
  VARIABLE = 1
  BINARY_OP = 2
  UNARY_OP = 3


class OpType(IntEnum):
  # Binary ops
  ADD = 0
  SUB = 1
  MUL = 2
  DIV = 3
  POW = 4
  # Unary ops
  SIN = 5
  COS = 6
  LN = 7
  EXP = 8


class OpPrecedence(IntEnum):
  """Binding strength of binary operators, ascending.

  Division binds tighter than multiplication.
  """
  ADD_SUB = 0
  MULT = 1
  DIV = 2
  POW = 3


# Mapping dictionaries
BINARY_OP_MAP = MappingProxyType({
  '+': OpType.ADD, '-': OpType.SUB, '*': OpType.MUL, '/': OpType.DIV, '^': OpType.POW
})
UNARY_OP_MAP = MappingProxyType({
  'sin': OpType.SIN, 'cos': OpType.COS, 'ln': OpType.LN, 'exp': OpType.EXP
})
PRECEDENCE = MappingProxyType({
  '+': OpPrecedence.ADD_SUB,
  '-': OpPrecedence.ADD_SUB,
  '*': OpPrecedence.MULT,
  '/': OpPrecedence.DIV,
  '^': OpPrecedence.POW,
})


def evaluate_binary_op(left_val: Any, right_val: Any, operator: str, domain: 'NumericDomain') -> Any:
  op_type = BINARY_OP_MAP[operator]
  if op_type == OpType.ADD:
    return domain.add(left_val, right_val)
  elif op_type == OpType.SUB:
    return domain.sub(left_val, right_val)
  elif op_type == OpType.MUL:
    return domain.mul(left_val, right_val)
  elif op_type == OpType.DIV:
    return domain.div(left_val, right_val)
  return domain.power(left_val, right_val)


def evaluate_unary_op(operand_val: Any, operator: str, domain: 'NumericDomain') -> Any:
  op_type = UNARY_OP_MAP[operator]
  if op_type == OpType.SIN:
    return domain.sin(operand_val)
  elif op_type == OpType.COS:
    return domain.cos(operand_val)
  elif op_type == OpType.LN:
    return domain.log(operand_val)
  return domain.exp(operand_val)
