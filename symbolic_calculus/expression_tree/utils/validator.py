from typing import Set
from ..core.node import Node, ValueNode, VariableNode, BinaryOpNode, UnaryOpNode
from ..core.operators import BINARY_OP_MAP, UNARY_OP_MAP


class ExpressionValidator:
  """Structural checks: closed node set, known operators, no cycles"""

  @staticmethod
  def is_valid_expression(node: Node) -> bool:
    return ExpressionValidator._is_structurally_valid_recursive(node, set())

  @staticmethod
  def _is_structurally_valid_recursive(node: Node, ancestors: Set[int]) -> bool:
    if id(node) in ancestors:
      return False

    if isinstance(node, ValueNode):
      return True

    elif isinstance(node, VariableNode):
      return isinstance(node.name, str) and bool(node.name)

    elif isinstance(node, BinaryOpNode):
      if node.operator not in BINARY_OP_MAP:
        return False

    elif isinstance(node, UnaryOpNode):
      if node.operator not in UNARY_OP_MAP:
        return False

    else:
      return False

    ancestors.add(id(node))
    try:
      return all(
        isinstance(child, Node)
        and ExpressionValidator._is_structurally_valid_recursive(child, ancestors)
        for child in node.children()
      )
    finally:
      ancestors.discard(id(node))
