"""문법 소스 로더: `A -> B C` 텍스트 형식과 스프레드시트식 2열 표 형식."""

from __future__ import annotations
import csv
import io
from pathlib    import Path
from typing     import List, Optional, Tuple
import regex as re

from .errors import MalformedGrammarError

Row = Tuple[str, str]

_COMMENT_RE = re.compile(r"^\s*(?:#|//)")


def load_grammar_text(path: str) -> str:
    """
    Load Grammar Text
    """
    text = Path(path).read_text(encoding="utf-8-sig")
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _snippet_with_caret(line_text: str, col: int) -> str:
    caret = " " * (col - 1) + "^"
    return f"{line_text}\n{caret}"


def parse_rows(text: str, delim: str = "->") -> List[Row]:
    """
    텍스트 문법을 (lhs, rhs) 행 리스트로 변환.

    - 한 줄에 프로덕션 하나: `Expr -> Term Expr'`
    - 빈 줄, `#` / `//` 로 시작하는 줄은 무시
    - 구분자 뒤가 비어 있으면 ε 대안
    """
    line_re = re.compile(r"^\s*(?P<lhs>\S*?)\s*" + re.escape(delim) + r"(?P<rhs>.*)$")
    rows: List[Row] = []
    for lineno, line in enumerate(text.split("\n"), start=1):
        if not line.strip() or _COMMENT_RE.match(line):
            continue
        m = line_re.match(line)
        if not m:
            col = len(line) - len(line.lstrip()) + 1
            raise MalformedGrammarError(
                f"Expected '<lhs> {delim} <rhs>' at {lineno}:{col}\n"
                + _snippet_with_caret(line, col)
            )
        if not m.group("lhs"):
            col = m.start("lhs") + 1
            raise MalformedGrammarError(
                f"Missing left-hand side at {lineno}:{col}\n" + _snippet_with_caret(line, col)
            )
        rows.append((m.group("lhs"), m.group("rhs").strip()))
    return rows


def parse_table_rows(text: str, dialect: str = "excel") -> List[Row]:
    """
    표 형식(스프레드시트 내보내기) 문법: 1열 = LHS, 2열 = RHS.
    빈 행은 무시, RHS 칸이 없거나 비어 있으면 ε 대안.
    """
    rows: List[Row] = []
    reader = csv.reader(io.StringIO(text), dialect=dialect)
    for lineno, cells in enumerate(reader, start=1):
        cells = [c.strip() for c in cells]
        if not any(cells):
            continue
        if any(cells[2:]):
            raise MalformedGrammarError(
                f"row {lineno}: expected two cells (lhs, rhs), got {len(cells)}: {cells!r}"
            )
        lhs = cells[0]
        rhs = cells[1] if len(cells) > 1 else ""
        if not lhs:
            raise MalformedGrammarError(f"row {lineno}: empty left-hand side cell")
        rows.append((lhs, rhs))
    return rows


def load_rows(path: str, fmt: Optional[str] = None, delim: str = "->") -> List[Row]:
    """
    파일 확장자(또는 fmt)로 형식을 골라 행을 읽는다.
    fmt: 'text' | 'csv' | 'tsv' | None(자동)
    """
    if fmt is None:
        suffix = Path(path).suffix.lower()
        fmt = {".csv": "csv", ".tsv": "tsv"}.get(suffix, "text")
    text = load_grammar_text(path)
    if fmt == "csv":
        return parse_table_rows(text, dialect="excel")
    if fmt == "tsv":
        return parse_table_rows(text, dialect="excel-tab")
    if fmt == "text":
        return parse_rows(text, delim=delim)
    raise ValueError(f"Unsupported grammar format: {fmt!r}")
