import dataclasses

import pytest

from ellone.grammar.model import build_grammar
from ellone.grammar.symbols import END_OF_INPUT, EPSILON
from ellone.ll1.analysis import analyze
from ellone.ll1.first_follow import compute_first_follow
from ellone.ll1.table import Conflict, build_parse_table

from conftest import analyze_text


def test_simple_example_table():
    an = analyze_text("*S -> A\nA -> a A\nA -> ε\n")
    assert an.lookup("A", "a") == 0
    assert an.lookup("A", "eof") == 1
    assert an.lookup("*S", "a") == 0
    assert an.lookup("*S", "eof") == 0
    assert an.table.conflicts == ()


def test_first_write_wins():
    an = analyze_text("*S -> A\nA -> x\nA -> x y\n")
    assert an.lookup("A", "x") == 0
    (c,) = an.table.conflicts
    assert (c.nonterminal.text, c.terminal.text, c.kept, c.discarded) == ("A", "x", 0, 1)


def test_epsilon_first_claims_shared_terminal():
    # ε declared first: it forwards FIRST+(A) and the later alternative loses `a`
    an = analyze_text("*S -> A\nA -> ε\nA -> a\n")
    assert an.lookup("A", "a") == 0
    assert an.lookup("A", "eof") == 0
    assert [(c.terminal.text, c.kept, c.discarded) for c in an.table.conflicts] == [("a", 0, 1)]


def test_first_follow_clash_is_reported():
    # `x` is both in FIRST(A) and FOLLOW(A)
    an = analyze_text("*S -> A x\nA -> x\nA -> ε\n")
    assert an.lookup("A", "x") == 0
    assert [(c.terminal.text, c.kept, c.discarded) for c in an.table.conflicts] == [("x", 0, 1)]


def test_expr_table(expr):
    lk = expr.lookup
    for t in ("(", "num", "name"):
        assert lk("*Goal", t) == 0
        assert lk("Expr", t) == 0
        assert lk("Term", t) == 0
    assert lk("Factor", "(") == 0
    assert lk("Factor", "num") == 1
    assert lk("Factor", "name") == 2
    assert lk("Expr'", "+") == 0
    assert lk("Expr'", "-") == 1
    assert lk("Expr'", "eof") == 2
    assert lk("Expr'", ")") == 2
    assert lk("Term'", "*") == 0
    assert lk("Term'", "/") == 1
    for t in ("+", "-", "eof", ")"):
        assert lk("Term'", t) == 2
    assert lk("Expr", "+") is None
    assert lk("Factor", "eof") is None
    assert expr.table.conflicts == ()
    assert expr.table.filled == 22


def test_rows_and_columns_follow_registries(expr):
    tbl = expr.table
    assert tbl.nonterminals == expr.grammar.nonterminals
    assert tbl.terminals == expr.grammar.terminals
    row = tbl.row(expr.grammar.symbol("Factor"))
    assert list(row) == list(expr.grammar.terminals)
    assert row[END_OF_INPUT] is None


def test_rule_number_offsets(expr):
    tbl = expr.table
    g = expr.grammar
    assert tbl.rule_number(g.symbol("*Goal"), 0) == 0
    assert tbl.rule_number(g.symbol("Expr'"), 2) == 4
    assert tbl.rule_number(g.symbol("Factor"), 2) == 11


def test_table_coverage(expr):
    g, fp, tbl = expr.grammar, expr.sets.first_plus, expr.table
    for A in g.nonterminals:
        for p in g.alternatives(A):
            if not p.rhs:
                continue
            for w in fp[p.rhs[0]]:
                if w.is_terminal:
                    assert tbl.lookup(A, w) is not None


def test_idempotent(expr_rows):
    a = analyze(build_grammar(expr_rows))
    b = analyze(build_grammar(expr_rows))
    assert a.sets.first == b.sets.first
    assert a.sets.follow == b.sets.follow
    assert a.sets.first_plus == b.sets.first_plus
    assert a.table.cells == b.table.cells
    assert [s.names() for s in a.sets.first_plus.values()] == \
           [s.names() for s in b.sets.first_plus.values()]


def test_conflicts_do_not_change_cells():
    g = build_grammar([("*S", "A"), ("A", "x"), ("A", "x y"), ("A", "z")])
    tbl = build_parse_table(g, compute_first_follow(g))
    A = g.symbol("A")
    assert tbl.cells[A] == {g.symbol("x"): 0, g.symbol("z"): 2}
    assert tbl.conflicts == (Conflict(A, g.symbol("x"), 0, 1),)
    assert "M[A, x]: keeps rule 1, drops rule 2" in tbl.pretty_conflicts()


def test_pretty_conflicts_empty(expr):
    assert expr.table.pretty_conflicts() == "(no conflicts)"


def test_table_is_read_only():
    an = analyze_text("*S -> A\nA -> a\nA ->\n")
    tbl = an.table
    start = an.grammar.start
    with pytest.raises(TypeError):
        tbl.cells[start][END_OF_INPUT] = 99
    with pytest.raises(TypeError):
        tbl.cells[start] = {}
    with pytest.raises(TypeError):
        tbl.rule_base[start] = 7
    with pytest.raises(dataclasses.FrozenInstanceError):
        tbl.conflicts = ()
    assert an.lookup("*S", "eof") == 0


def test_set_results_are_read_only():
    an = analyze_text("*S -> A\nA -> a\nA ->\n")
    ff = an.sets
    assert ff.follow[EPSILON] is not ff.first[EPSILON]
    assert ff.follow[EPSILON] == ff.first[EPSILON]
    with pytest.raises(TypeError):
        ff.first[EPSILON] = ff.follow[EPSILON]
    with pytest.raises(dataclasses.FrozenInstanceError):
        ff.first_plus = {}
