"""사람이 읽는 출력: 프로덕션 목록, 파싱 테이블 그리드, 집합 목록."""
from __future__ import annotations
from typing import Iterable, List, Mapping, Optional

from ..grammar.model import Grammar
from ..grammar.symbols import Symbol
from .sets import SymbolSet
from .table import ParseTable

EMPTY_CELL = "-"


def render_productions(grammar: Grammar) -> str:
    """
    번호가 붙은 프로덕션 목록. 같은 LHS 의 두 번째 대안부터는 `|` 로 표시.
        0  *Goal -> Expr
        1  Expr  -> Term Expr'
    """
    width = max(len(A.text) for A in grammar.nonterminals)
    num_w = len(str(max(grammar.rule_count - 1, 0)))
    lines: List[str] = []
    for A in grammar.nonterminals:
        for p in grammar.alternatives(A):
            head = A.text if p.index == 0 else ""
            arrow = "->" if p.index == 0 else " |"
            rhs = " ".join(s.text for s in p.rhs) if p.rhs else grammar.options.epsilon
            lines.append(f"{p.number:>{num_w}}  {head:<{width}} {arrow} {rhs}")
    return "\n".join(lines)


def table_grid(table: ParseTable, global_numbers: bool = True) -> List[List[str]]:
    """
    헤더 행(빈 칸 + 단말들) 다음에 비단말별 행.
    셀: 전역 규칙 번호(global_numbers=False 면 LHS 내부 번호) 또는 '-'
    """
    grid: List[List[str]] = [[""] + [t.text for t in table.terminals]]
    for A in table.nonterminals:
        row = [A.text]
        for t, idx in table.row(A).items():
            if idx is None:
                row.append(EMPTY_CELL)
            elif global_numbers:
                row.append(str(table.rule_number(A, idx)))
            else:
                row.append(str(idx))
        grid.append(row)
    return grid


def _align(grid: List[List[str]]) -> str:
    widths = [0] * max(len(r) for r in grid)
    for row in grid:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))
    return "\n".join(
        "  ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)).rstrip()
        for row in grid
    )


def render_table(table: ParseTable, global_numbers: bool = True) -> str:
    return _align(table_grid(table, global_numbers))


def render_sets(
    title: str,
    mapping: Mapping[Symbol, SymbolSet],
    symbols: Optional[Iterable[Symbol]] = None,
    canonical: bool = False,
) -> str:
    """`NAME : {a, b}` 줄 목록. symbols 를 주면 그 순서/범위만 출력."""
    keys = list(symbols) if symbols is not None else list(mapping)
    width = max((len(s.text) for s in keys), default=0)
    lines = [f"[{title}]"]
    for s in keys:
        items = mapping[s].sorted() if canonical else mapping[s]
        lines.append(f"{s.text:>{width}} : {{{', '.join(items.names())}}}")
    return "\n".join(lines)


def render_conflicts(table: ParseTable) -> str:
    return table.pretty_conflicts()
