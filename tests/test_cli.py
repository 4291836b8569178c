"""
Tests for the symcalc command line front end.
"""

import numpy as np
import pytest

from symbolic_calculus import REAL, build
from symbolic_calculus.cli import (
    EXIT_EXPRESSION_ERROR, EXIT_OK, build_arg_parser, main, parse_bindings, parse_complex_literal,
    parse_real_literal, run_task
)
from symbolic_calculus.logging_system import LogLevel, configure_logging


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in ('SYMCALC_DOMAIN', 'SYMCALC_IGNORE_CASE', 'SYMCALC_LOG_LEVEL', 'SYMCALC_LOG_FILE'):
        monkeypatch.delenv(name, raising=False)
    yield
    configure_logging(LogLevel.SILENT)


def run(argv, capsys):
    code = main(argv)
    out, err = capsys.readouterr()
    return code, out.splitlines(), err


def test_evaluate(capsys):
    code, lines, _ = run(["--eval", "2 + 3 * 4"], capsys)
    assert code == EXIT_OK
    assert lines == ["Evaluated: 14"]


def test_evaluate_with_bindings(capsys):
    code, lines, _ = run(["--eval", "2x + y", "x=1.5", "y=-1"], capsys)
    assert code == EXIT_OK
    assert lines == ["Evaluated: 2"]


def test_differentiate(capsys):
    code, lines, _ = run(["--diff", "x^2 * y", "--by", "x"], capsys)
    assert code == EXIT_OK
    assert lines == [
        "Differentiated: ((((x) ^ (2) * ((0 * ln(x)) + ((2 * 1) / x))) * y) + ((x) ^ (2) * 0))"
    ]


def test_differentiate_and_evaluate(capsys):
    code, lines, _ = run(["--diff", "x^2 * y", "--eval", "x^2 * y", "--by", "x", "x=2", "y=3"], capsys)
    assert code == EXIT_OK
    assert len(lines) == 2
    assert lines[0].startswith("Differentiated: ")
    assert lines[1] == "Evaluated derivative: 12"


def test_complex_evaluation(capsys):
    code, lines, _ = run(["--complex", "--eval", "(2 + 3i) * z", "z=4-5i"], capsys)
    assert code == EXIT_OK
    assert lines == ["Evaluated: (23 + 2i)"]


def test_domain_from_environment(monkeypatch, capsys):
    monkeypatch.setenv('SYMCALC_DOMAIN', 'complex')
    code, lines, _ = run(["--eval", "i * i"], capsys)
    assert code == EXIT_OK
    assert lines == ["Evaluated: -1"]


def test_ignore_case(capsys):
    code, lines, _ = run(["--ignore-case", "--eval", "SIN(X)", "x=0"], capsys)
    assert code == EXIT_OK
    assert lines == ["Evaluated: 0"]


@pytest.mark.parametrize("argv, message", [
    (["--eval", "1 / x", "x=0"], "Error: Division by zero"),
    (["--eval", "x + 1"], "Error: Variable x cannot be resolved without context"),
    (["--eval", "2 $ 3"], "Error: Unexpected symbol: '$' at position 2"),
    (["--eval", "ln(x)", "x=-1"], "Error: Logarithm argument must be positive"),
])
def test_expression_errors(argv, message, capsys):
    code, lines, err = run(argv, capsys)
    assert code == EXIT_EXPRESSION_ERROR
    assert lines == []
    assert message in err


@pytest.mark.parametrize("argv", [
    [],
    ["--diff", "x"],
    ["--eval", "x", "--diff", "y", "--by", "x"],
    ["--eval", "x", "x5"],
    ["--eval", "x", "1x=2"],
    ["--eval", "x", "x=abc"],
    ["--complex", "--eval", "z", "z=4-5j"],
])
def test_usage_errors(argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 2


def test_verbose_logs_to_stderr(capsys):
    code, lines, err = run(["-vv", "--eval", "x + 1", "x=1"], capsys)
    assert code == EXIT_OK
    assert lines == ["Evaluated: 2"]
    assert "Parsed (real): (x + 1)" in err


@pytest.mark.parametrize("text, expected", [
    ("4-5i", complex(4, -5)),
    ("-2.5+i", complex(-2.5, 1)),
    ("3i", complex(0, 3)),
    ("-i", complex(0, -1)),
    ("i", complex(0, 1)),
    ("7", complex(7, 0)),
    ("0.5-i", complex(0.5, -1)),
])
def test_parse_complex_literal(text, expected):
    assert complex(parse_complex_literal(text)) == expected


@pytest.mark.parametrize("text", ["", "4-5j", "i4", "1+2", "two"])
def test_parse_complex_literal_rejects(text):
    with pytest.raises(ValueError, match="Invalid complex number format"):
        parse_complex_literal(text)


def test_parse_real_literal():
    assert parse_real_literal("-2.5") == np.longdouble("-2.5")
    with pytest.raises(ValueError):
        parse_real_literal("2i")


def test_parse_bindings():
    bindings = parse_bindings(["x=2", "rate=0.5"], REAL)
    assert bindings == {'x': 2, 'rate': 0.5}
    with pytest.raises(ValueError, match="Unknown argument"):
        parse_bindings(["x"], REAL)


def test_run_task_lines():
    lines = run_task(build("x * x"), to_diff=True, to_eval=True, diff_by='x', bindings={'x': 3})
    assert lines == ["Differentiated: ((1 * x) + (x * 1))", "Evaluated derivative: 6"]
    assert run_task(build("x * x"), False, True, None, {'x': 3}) == ["Evaluated: 9"]


def test_expression_starting_with_minus_needs_equals_form(capsys):
    code, lines, _ = run(["--eval=-x", "x=2"], capsys)
    assert code == EXIT_OK
    assert lines == ["Evaluated: -2"]
    with pytest.raises(SystemExit) as excinfo:
        main(["--eval", "-x", "x=2"])
    assert excinfo.value.code == 2
    assert "--eval=EXPR" in build_arg_parser().format_help()


def test_complex_literal_parts_are_exact():
    value = parse_complex_literal("-2.5-3i")
    assert isinstance(value, np.clongdouble)
    assert value.real == np.longdouble("-2.5")
    assert value.imag == -3
