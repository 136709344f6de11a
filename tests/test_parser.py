import pytest

from snailfish.parser import ParseError, find_comma, number_from_list, parse_lines, parse_number
from snailfish.tree import Pair, Value


def test_parse_number_builds_nested_pairs():
    number = parse_number("[[1,2],[[3,4],5]]")

    assert number.root == Pair(
        Pair(Value(1), Value(2)),
        Pair(Pair(Value(3), Value(4)), Value(5)),
    )


def test_parse_number_accepts_multi_digit_leaves_and_whitespace():
    number = parse_number("  [15,[0,123]]\n")

    assert number.to_list() == [15, [0, 123]]


def test_find_comma_skips_nested_commas():
    assert find_comma("[1,2],3") == 5
    assert find_comma("1,[2,3]") == 1


@pytest.mark.parametrize(
    "text, message",
    [
        ("1,2", "enclosed in brackets"),
        ("[1,2", "enclosed in brackets"),
        ("[]", "missing ','"),
        ("[[1,2]]", "missing ','"),
        ("[[1,2]", "missing ','"),
        ("[1],2]", "unexpected ']'"),
        ("[1,2]]", "invalid integer"),
        ("[1,]", "invalid integer"),
        ("[a,2]", "invalid integer"),
        ("[-1,2]", "invalid integer"),
        ("[+1,2]", "invalid integer"),
        ("[1;2]", "missing ','"),
        ("[[1,2],[3,4]", "unbalanced brackets"),
    ],
)
def test_parse_number_rejects_malformed_text(text, message):
    with pytest.raises(ParseError, match=message):
        parse_number(text)


def test_parse_error_is_a_value_error():
    with pytest.raises(ValueError):
        parse_number("[x,1]")


def test_parse_lines_keeps_order_and_skips_blanks():
    numbers = parse_lines(["[1,2]", "", "  ", "[[3,4],5]"])

    assert [str(n) for n in numbers] == ["[1,2]", "[[3,4],5]"]


def test_parse_lines_reports_line_number():
    with pytest.raises(ParseError, match="line 3"):
        parse_lines(["[1,2]", "[3,4]", "[5,x]"])


def test_number_from_list_round_trips_to_list():
    expr = [[1, 2], [[3, 4], 5]]

    assert number_from_list(expr).to_list() == expr
    assert str(number_from_list((1, (2, 3)))) == "[1,[2,3]]"


@pytest.mark.parametrize("expr", [7, [1], [1, 2, 3], [1, -2], [True, 1], [1, "2"], None])
def test_number_from_list_rejects_invalid_expressions(expr):
    with pytest.raises(ParseError):
        number_from_list(expr)
