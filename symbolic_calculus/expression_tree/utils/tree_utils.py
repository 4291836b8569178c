"""
Tree Utility Functions

Traversal and analysis helpers for expression trees. Trees produced by
differentiation share subtrees, so traversals here visit a shared node once
per reference unless stated otherwise.
"""

from collections import Counter
from typing import Dict, List, cast

from ..core.node import Node, BinaryOpNode, UnaryOpNode, ValueNode, VariableNode


def get_all_nodes(node: Node, traversal_order: str = 'breadth_first') -> List[Node]:
    """
    Get all nodes in the tree using specified traversal order.

    Args:
        node: Root node of the tree
        traversal_order: 'breadth_first' (default) or 'depth_first'

    Returns:
        List of all nodes in the tree
    """
    if traversal_order == 'breadth_first':
        return _breadth_first_traversal(node)
    elif traversal_order == 'depth_first':
        return _depth_first_traversal(node)
    else:
        raise ValueError(f"Invalid traversal_order: {traversal_order}")


def _breadth_first_traversal(node: Node) -> List[Node]:
    """Breadth-first traversal (iterative, non-recursive)"""
    nodes_to_visit = [node]
    all_nodes = []
    index = 0

    while index < len(nodes_to_visit):
        current_node = nodes_to_visit[index]
        index += 1
        all_nodes.append(current_node)
        nodes_to_visit.extend(current_node.children())

    return all_nodes


def _depth_first_traversal(node: Node) -> List[Node]:
    """Depth-first pre-order traversal (recursive)"""
    nodes = [node]
    for child in node.children():
        nodes.extend(_depth_first_traversal(child))
    return nodes


def calculate_tree_depth(node: Node) -> int:
    """
    Calculate the maximum depth of the tree.

    Returns:
        Maximum depth (leaf nodes have depth 1)
    """
    children = node.children()
    if not children:
        return 1
    return 1 + max(calculate_tree_depth(child) for child in children)


def find_nodes_by_type(node: Node, node_type: type) -> List[Node]:
    """Find all nodes of a specific type in the tree."""
    return [n for n in get_all_nodes(node) if isinstance(n, node_type)]


def find_nodes_by_operator(node: Node, operator: str) -> List[Node]:
    """Find all binary or unary operator nodes using the given operator."""
    return [
        n for n in get_all_nodes(node)
        if isinstance(n, (BinaryOpNode, UnaryOpNode)) and n.operator == operator
    ]


def get_variable_usage_counts(node: Node) -> Dict[str, int]:
    """
    Count the usage frequency of each variable in the tree.

    Returns:
        Dictionary mapping variable names to their usage counts
    """
    return dict(Counter(var.name for var in get_variables(node)))


def get_variable_names(node: Node) -> List[str]:
    """Distinct variable names in depth-first, first-seen order."""
    names = {}
    for n in get_all_nodes(node, 'depth_first'):
        if isinstance(n, VariableNode):
            names.setdefault(n.name, None)
    return list(names)


def count_shared_subtrees(node: Node) -> int:
    """
    Count compound nodes reachable through more than one parent.

    Distinct objects are told apart by identity, not structure, so this
    measures how much of the tree is shared rather than copied.
    """
    references = Counter(id(n) for n in get_all_nodes(node) if n.children())
    return sum(1 for count in references.values() if count > 1)


# Convenience functions for common operations
def get_values(node: Node) -> List[ValueNode]:
    """Get all value nodes in the tree."""
    return cast(List[ValueNode], find_nodes_by_type(node, ValueNode))


def get_variables(node: Node) -> List[VariableNode]:
    """Get all variable nodes in the tree."""
    return cast(List[VariableNode], find_nodes_by_type(node, VariableNode))


def get_binary_ops(node: Node) -> List[BinaryOpNode]:
    """Get all binary operation nodes in the tree."""
    return cast(List[BinaryOpNode], find_nodes_by_type(node, BinaryOpNode))


def get_unary_ops(node: Node) -> List[UnaryOpNode]:
    """Get all unary operation nodes in the tree."""
    return cast(List[UnaryOpNode], find_nodes_by_type(node, UnaryOpNode))
