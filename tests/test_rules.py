import pytest

from simulator.errors import IoError, ParseError, TransformationError
from simulator.rules import (
    Move,
    Rule,
    distinct_states,
    load_rules,
    load_rules_file,
    parse_rule,
    shadowed_rules,
)


def test_parse_rule_fields_in_fixed_order():
    rule = parse_rule(1, "A 0 1 R B")
    assert rule == Rule("A", "0", "1", Move.R, "B")


def test_parse_rule_accepts_any_whitespace_between_tokens():
    rule = parse_rule(3, "  q0\t_   x  L\tq1  ")
    assert rule.current_state == "q0"
    assert rule.read_symbol == "_"
    assert rule.write_symbol == "x"
    assert rule.move is Move.L
    assert rule.next_state == "q1"


@pytest.mark.parametrize("line", ["A 0 1 R", "A 0 1 R B C", "A"])
def test_parse_rule_requires_five_tokens(line):
    with pytest.raises(ParseError) as excinfo:
        parse_rule(7, line, "prog.turd")
    assert excinfo.value.line_number == 7
    assert excinfo.value.path == "prog.turd"
    assert str(excinfo.value) == "prog.turd:7: A single turd is expected to have 5 tokens"


@pytest.mark.parametrize("token", ["l", "r", "S", "LEFT", "N"])
def test_parse_rule_rejects_unknown_move(token):
    with pytest.raises(TransformationError) as excinfo:
        parse_rule(1, f"A 0 1 {token} B")
    assert excinfo.value.token == token
    assert str(excinfo.value) == f"{token} is not a valid step. Expected 'L' or 'R'"


def test_load_rules_keeps_program_order():
    text = "B 1 0 R A\nA 0 1 R B\nA 0 0 L C\n"
    rules = load_rules(text)
    assert [str(rule) for rule in rules] == ["B 1 0 R A", "A 0 1 R B", "A 0 0 L C"]


def test_load_rules_skips_blank_lines():
    text = "\n   \nA 0 1 R B\n\n\t\nB 1 0 L A\n\n"
    rules = load_rules(text)
    assert len(rules) == 2
    assert rules[1] == Rule("B", "1", "0", Move.L, "A")


def test_load_rules_numbers_lines_after_dropping_blanks():
    text = "A 0 1 R B\n\n\nB 1 0 R\n"
    with pytest.raises(ParseError) as excinfo:
        load_rules(text, "prog.turd")
    assert excinfo.value.line_number == 2
    assert str(excinfo.value).startswith("prog.turd:2:")


def test_load_rules_stops_at_first_bad_line():
    text = "A 0 1 X B\nB 1 0\n"
    with pytest.raises(TransformationError):
        load_rules(text)


def test_load_rules_empty_program():
    assert load_rules("\n\n") == ()


def test_load_rules_file_reports_path(tmp_path):
    path = tmp_path / "bad.turd"
    path.write_text("A 0 1 R B\nA 0\n", encoding="utf-8")
    with pytest.raises(ParseError) as excinfo:
        load_rules_file(path)
    assert str(excinfo.value) == f"{path}:2: A single turd is expected to have 5 tokens"


def test_load_rules_file_missing(tmp_path):
    with pytest.raises(IoError):
        load_rules_file(tmp_path / "missing.turd")


def test_distinct_states_sorted_and_deduplicated():
    rules = load_rules("b 0 1 R a\na 1 0 L c\nc 0 0 R b\na 0 0 R a\n")
    assert distinct_states(rules) == ["a", "b", "c"]


def test_distinct_states_includes_next_only_states():
    rules = load_rules("A 0 1 R HALT\n")
    assert distinct_states(rules) == ["A", "HALT"]


def test_shadowed_rules_reports_later_duplicates():
    rules = load_rules("A 0 1 R B\nB 0 1 L A\nA 0 0 L A\nA 1 1 R A\nA 0 1 L B\n")
    shadowed = shadowed_rules(rules)
    assert [(idx, winner) for idx, _, winner in shadowed] == [(2, 0), (4, 0)]


def test_rule_is_immutable():
    rule = parse_rule(1, "A 0 1 R B")
    with pytest.raises(AttributeError):
        rule.write_symbol = "0"
