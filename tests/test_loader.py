import pytest

from ellone.grammar.errors import MalformedGrammarError
from ellone.grammar.loader import load_rows, parse_rows, parse_table_rows


def test_text_and_csv_sources_agree(expr_path, expr_csv_path):
    text_rows = load_rows(str(expr_path))
    csv_rows = load_rows(str(expr_csv_path))
    # the csv spells one epsilon as an empty cell and one as "ε"
    normalise = lambda rows: [(l, "" if r == "ε" else r) for l, r in rows]
    assert normalise(text_rows) == normalise(csv_rows)
    assert text_rows[0] == ("*Goal", "Expr")


def test_parse_rows_skips_blank_and_comment_lines():
    text = "\n# comment\n// another\n*S -> A b\n\nA ->\n"
    assert parse_rows(text) == [("*S", "A b"), ("A", "")]


def test_parse_rows_without_spaces_around_delimiter():
    assert parse_rows("A->b c") == [("A", "b c")]


def test_parse_rows_splits_on_first_delimiter():
    assert parse_rows("A -> b -> c") == [("A", "b -> c")]


def test_parse_rows_custom_delimiter():
    assert parse_rows("Goal ::= Expr", delim="::=") == [("Goal", "Expr")]


def test_parse_rows_reports_position():
    with pytest.raises(MalformedGrammarError) as ei:
        parse_rows("*S -> a\n  A b c\n")
    msg = str(ei.value)
    assert "2:3" in msg
    assert msg.endswith("  A b c\n  ^")


def test_parse_rows_missing_lhs():
    with pytest.raises(MalformedGrammarError) as ei:
        parse_rows("-> a")
    assert "Missing left-hand side at 1:1" in str(ei.value)


def test_table_rows():
    text = "*S,A b\n,\nA,\nA\n"
    assert parse_table_rows(text) == [("*S", "A b"), ("A", ""), ("A", "")]


def test_table_rows_tab_dialect():
    assert parse_table_rows("*S\ta b\n", dialect="excel-tab") == [("*S", "a b")]


@pytest.mark.parametrize("text", ["A,b,c\n", ",b\n"])
def test_table_rows_malformed(text):
    with pytest.raises(MalformedGrammarError):
        parse_table_rows(text)


def test_load_rows_unknown_format(expr_path):
    with pytest.raises(ValueError):
        load_rows(str(expr_path), fmt="yaml")


def test_load_rows_tsv_by_suffix(tmp_path):
    p = tmp_path / "g.tsv"
    p.write_text("*S\tA\r\nA\ta\r\n", encoding="utf-8")
    assert load_rows(str(p)) == [("*S", "A"), ("A", "a")]
