from __future__ import annotations
from pathlib import Path

import pytest

from ellone.grammar.loader import load_rows, parse_rows
from ellone.ll1.analysis import analyze_rows

GRAMMAR_DIR = Path(__file__).parent / "grammar_test"


@pytest.fixture
def expr_path() -> Path:
    return GRAMMAR_DIR / "expr.g"


@pytest.fixture
def expr_csv_path() -> Path:
    return GRAMMAR_DIR / "expr.csv"


@pytest.fixture
def expr_rows(expr_path):
    return load_rows(str(expr_path))


@pytest.fixture
def expr(expr_rows):
    return analyze_rows(expr_rows)


def analyze_text(text: str, **kw):
    return analyze_rows(parse_rows(text), **kw)


def names(symbol_set) -> set:
    return {s.text for s in symbol_set}
