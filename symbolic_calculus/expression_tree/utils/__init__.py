"""Utilities for expression trees."""

from .sympy_utils import to_sympy_expression, latex_representation, derivatives_agree
from .tree_utils import (
    get_all_nodes, calculate_tree_depth,
    find_nodes_by_type, find_nodes_by_operator,
    get_variable_usage_counts, get_variable_names, count_shared_subtrees,
    get_values, get_variables, get_binary_ops, get_unary_ops
)
from .validator import ExpressionValidator

__all__ = [
    'to_sympy_expression', 'latex_representation', 'derivatives_agree',
    'get_all_nodes', 'calculate_tree_depth',
    'find_nodes_by_type', 'find_nodes_by_operator',
    'get_variable_usage_counts', 'get_variable_names', 'count_shared_subtrees',
    'get_values', 'get_variables', 'get_binary_ops', 'get_unary_ops',
    'ExpressionValidator'
]
