#!/usr/bin/env python3
"""
Command line front end: evaluate or differentiate an expression.

    symcalc --eval "2x + sin(y)" x=1 y=0.5
    symcalc --diff "x^2 * y" --by x
    symcalc --diff "x^2 * y" --eval "x^2 * y" --by x x=2 y=3
    symcalc --complex --eval "(2 + 3i) * z" z=4-5i
"""

import argparse
import re
import sys
from typing import Any, Dict, List, Optional

import numpy as np

from .config import EngineConfig
from .expression_tree import Expression, ExpressionError, NumericDomain
from .expression_tree.core.domain import make_complex
from .logging_system import LogLevel, configure_logging, log_debug, log_info, log_warning

EXIT_OK = 0
EXIT_EXPRESSION_ERROR = 1
EXIT_USAGE_ERROR = 2

_NAME_RE = re.compile(r'^[a-zA-Z_]+$')
_REAL_RE = re.compile(r'^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$')
_NUMBER = r'\d+(?:\.\d+)?'
_IMAGINARY_RE = re.compile(rf'^(?P<imag>[+-]?(?:{_NUMBER})?)i$')
_COMPLEX_RE = re.compile(rf'^(?P<real>[+-]?{_NUMBER})(?P<imag>[+-](?:{_NUMBER})?)i$')


def _imaginary_coefficient(text: str) -> np.longdouble:
    if text in ('', '+'):
        return np.longdouble(1)
    if text == '-':
        return np.longdouble(-1)
    return np.longdouble(text)


def parse_complex_literal(text: str) -> np.clongdouble:
    """
    Parse a complex literal such as 4-5i, -2.5+i, 3i, -i or 7.

    Either component may be omitted; an omitted component is zero and a bare
    i has coefficient one.
    """
    text = text.strip()
    if _REAL_RE.match(text):
        return make_complex(np.longdouble(text))
    match = _IMAGINARY_RE.match(text)
    if match:
        return make_complex(0, _imaginary_coefficient(match.group('imag')))
    match = _COMPLEX_RE.match(text)
    if match:
        real = np.longdouble(match.group('real'))
        return make_complex(real, _imaginary_coefficient(match.group('imag')))
    raise ValueError(f"Invalid complex number format: {text}")


def parse_real_literal(text: str) -> np.longdouble:
    text = text.strip()
    if not _REAL_RE.match(text):
        raise ValueError(f"Invalid real number format: {text}")
    return np.longdouble(text)


def parse_bindings(items: List[str], domain: NumericDomain) -> Dict[str, Any]:
    """Turn name=value command tokens into a binding map"""
    bindings = {}
    for item in items:
        name, sep, value = item.partition('=')
        if not sep:
            raise ValueError(f"Unknown argument: {item}")
        name = name.strip()
        if not _NAME_RE.match(name):
            raise ValueError(f"Invalid variable name: {name!r}")
        if domain.has_imaginary_unit:
            bindings[name] = parse_complex_literal(value)
        else:
            bindings[name] = parse_real_literal(value)
    return bindings


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='symcalc',
        description="Evaluate and differentiate infix expressions over real or complex numbers",
        epilog="An expression starting with '-' must be attached with '=', e.g. --eval=-x")
    parser.add_argument("--eval", dest="eval_expr", metavar="EXPR",
                        help="Expression to evaluate (use --eval=EXPR if it starts with '-')")
    parser.add_argument("--diff", dest="diff_expr", metavar="EXPR",
                        help="Expression to differentiate (use --diff=EXPR if it starts with '-')")
    parser.add_argument("--by", metavar="NAME", help="Variable to differentiate by")
    parser.add_argument("--complex", action="store_true", help="Work over complex numbers")
    parser.add_argument("--ignore-case", action="store_true",
                        help="Fold the expression to lower case before parsing")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase log verbosity (repeat for more)")
    parser.add_argument("--log-file", metavar="PATH", help="Also write the log to PATH")
    parser.add_argument("bindings", nargs="*", metavar="NAME=VALUE", help="Variable bindings")
    return parser


def _make_config(args: argparse.Namespace) -> EngineConfig:
    config = EngineConfig.from_env()
    if args.complex:
        config.domain = 'complex'
    if args.ignore_case:
        config.case_insensitive = True
    if args.verbose:
        level = min(LogLevel.MINIMAL.value + args.verbose, LogLevel.VERBOSE.value)
        config.log_level = LogLevel(max(level, config.log_level.value))
    if args.log_file:
        config.log_to_file = True
        config.log_file_path = args.log_file
    return config


def run_task(expression: Expression, to_diff: bool, to_eval: bool,
             diff_by: Optional[str], bindings: Dict[str, Any]) -> List[str]:
    """Produce the output lines for one invocation"""
    lines = []
    domain = expression.domain

    if to_diff:
        derivative = expression.diff(diff_by)
        log_info(f"Differentiated by {diff_by}")
        lines.append(f"Differentiated: {derivative.to_string()}")
        if to_eval:
            _warn_unbound(derivative, bindings)
            value = derivative.eval_with(bindings)
            lines.append(f"Evaluated derivative: {domain.render(value)}")
    elif to_eval:
        _warn_unbound(expression, bindings)
        value = expression.eval_with(bindings)
        lines.append(f"Evaluated: {domain.render(value)}")

    return lines


def _warn_unbound(expression: Expression, bindings: Dict[str, Any]):
    missing = [name for name in expression.variables() if name not in bindings]
    if missing:
        log_warning(f"No value given for: {', '.join(missing)}")


def main(argv: Optional[List[str]] = None) -> int:
    arg_parser = build_arg_parser()
    args = arg_parser.parse_args(argv)

    if args.eval_expr is None and args.diff_expr is None:
        arg_parser.error("one of --eval or --diff is required")
    if args.eval_expr is not None and args.diff_expr is not None and args.eval_expr != args.diff_expr:
        arg_parser.error("--eval and --diff must name the same expression when combined")
    if args.diff_expr is not None and not args.by:
        arg_parser.error("--by is required with --diff")

    try:
        config = _make_config(args)
        domain = config.resolve_domain()
        bindings = parse_bindings(args.bindings, domain)
    except ValueError as e:
        arg_parser.error(str(e))

    configure_logging(config.log_level, config.log_to_file, config.log_file_path)
    log_debug(f"Configuration: {config}")

    expression_text = args.diff_expr if args.diff_expr is not None else args.eval_expr
    try:
        expression = Expression.from_string(expression_text, domain, config.case_insensitive)
        log_info(f"Parsed ({domain.name}): {expression.to_string()}")
        log_info(f"Bindings: {bindings}", LogLevel.DETAILED)
        lines = run_task(expression, args.diff_expr is not None, args.eval_expr is not None,
                         args.by, bindings)
    except ExpressionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_EXPRESSION_ERROR

    for line in lines:
        print(line)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
