import pytest

from armlab.ntlang import EvalError, evaluate, format_value, main, run
from armlab.parse import BinaryOp, IntVal, Operator, UnaryOp, parse


@pytest.mark.parametrize("a,b", [(1, 2), (10, 20), (0, 0), (123, 456)])
def test_addition_matches_input_sum(a, b):
    assert run(f"{a} + {b}") == a + b


@pytest.mark.parametrize("a,b", [(5, 2), (100, 1), (7, 7)])
def test_subtraction_without_wrap(a, b):
    assert run(f"{a} - {b}") == a - b


def test_negation_wraps_to_unsigned():
    assert run("-1") == 0xFFFFFFFF


def test_double_negation_is_identity():
    assert run("--17") == 17


def test_add_then_subtract_round_trip():
    assert run("1000 + 234 - 234") == 1000


def test_result_is_always_32_bit():
    value = run("0 - 1 - 1 - 1")
    assert 0 <= value <= 0xFFFFFFFF
    assert run("0 - 1 - 1 - 1 + 3") == 0


def test_evaluate_rejects_multiplication():
    tree = BinaryOp(Operator.MULT, IntVal(2), IntVal(3))
    with pytest.raises(EvalError) as info:
        evaluate(tree)
    assert str(info.value) == "eval_error: Bad operator"


def test_evaluate_rejects_unary_plus():
    with pytest.raises(EvalError):
        evaluate(UnaryOp(Operator.PLUS, IntVal(1)))


def test_format_value_signed():
    assert format_value(0xFFFFFFFF) == "-1"
    assert format_value(42) == "42"


def test_format_value_round_trips_negation():
    assert format_value(evaluate(parse("-25"))) == "-25"


def test_main_prints_tokens_tree_and_value(capsys):
    status = main(["1 + 2"])
    out = capsys.readouterr().out
    assert status == 0
    lines = out.splitlines()
    assert lines[:4] == [
        'TK_INTLIT("1")',
        'TK_PLUS("+")',
        'TK_INTLIT("2")',
        'TK_EOT("")',
    ]
    assert "EXPR OPER2 PLUS" in lines
    assert lines[-1] == format_value(run("1 + 2"))


def test_main_usage(capsys):
    status = main([])
    out = capsys.readouterr().out
    assert status != 0
    assert out.startswith("Usage: project02 <expression>")


def test_main_reports_parse_error(capsys):
    status = main(["1 +"])
    out = capsys.readouterr().out
    assert status != 0
    assert "parse_error: Bad operand" in out


def test_main_reports_scan_error(capsys):
    status = main(["1 * 2"])
    out = capsys.readouterr().out
    assert status != 0
    assert "scan error: invalid char: *" in out