# table.py
"""LL(1) 예측 파싱 테이블 생성."""
from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from ..grammar.model import Grammar
from ..grammar.symbols import EPSILON, Symbol
from .first_follow import FFResult


@dataclass(frozen=True)
class Conflict:
    """A claim on an already-assigned cell that was discarded."""
    nonterminal: Symbol
    terminal: Symbol
    kept: int
    discarded: int


@dataclass(frozen=True)
class ParseTable:
    """
    ParseTable
    ==========
    (nonterminal, terminal) -> 해당 LHS 안에서의 대안 번호(0부터), 없으면 None.

    필드
    ----
    - nonterminals: 행 순서(LHS 등록 순서)
    - terminals   : 열 순서(eof 먼저, 이후 처음 등장한 순서)
    - cells       : LHS -> {terminal -> rule index}
    - rule_base   : LHS -> 그 LHS 첫 대안의 전역 규칙 번호
    - conflicts   : 버려진 claim 목록 (테이블 내용에는 영향 없음)

    생성 후에는 읽기 전용이다. cells / rule_base 는 MappingProxyType 으로 감싼다.

    사용
    ----
    - lookup(A, t) 로 셀을 조회한다. 셀 값은 **LHS 단위** 번호이므로
      교과서식 전역 규칙 번호가 필요하면 rule_number(A, idx) 를 쓴다.
    """
    nonterminals: Tuple[Symbol, ...]
    terminals: Tuple[Symbol, ...]
    cells: Mapping[Symbol, Mapping[Symbol, int]]
    rule_base: Mapping[Symbol, int]
    conflicts: Tuple[Conflict, ...] = ()

    def lookup(self, nonterminal: Symbol, terminal: Symbol) -> Optional[int]:
        return self.cells.get(nonterminal, {}).get(terminal)

    def row(self, nonterminal: Symbol) -> Dict[Symbol, Optional[int]]:
        """열 순서대로 한 행 전체(빈 셀은 None)."""
        cells = self.cells[nonterminal]
        return {t: cells.get(t) for t in self.terminals}

    def rule_number(self, nonterminal: Symbol, index: int) -> int:
        return self.rule_base[nonterminal] + index

    @property
    def filled(self) -> int:
        return sum(len(r) for r in self.cells.values())

    def pretty_conflicts(self) -> str:
        """
        충돌 목록을 사람이 읽기 좋은 문자열로 변환합니다.
        충돌이 없으면 '(no conflicts)' 반환.
        """
        if not self.conflicts:
            return "(no conflicts)"
        lines: List[str] = []
        for c in self.conflicts:
            kept = self.rule_number(c.nonterminal, c.kept)
            lost = self.rule_number(c.nonterminal, c.discarded)
            lines.append(
                f"M[{c.nonterminal}, {c.terminal}]: keeps rule {kept}, drops rule {lost}"
            )
        return "\n".join(lines)


def build_parse_table(grammar: Grammar, ff: FFResult) -> ParseTable:
    """
    build_parse_table
    =================
    LHS 등록 순서 -> 대안 선언 순서로 돌며, 대안 r = B1 ... Bk 에 대해
      lead := FIRST+(B1)   (k == 0 이면 { ε })
      w ∈ lead 마다
        w == ε : FIRST+(A) 의 모든 단말 t 에 대해 M[A, t] := r   (비어 있을 때만)
        그 외  : M[A, w] := r                                   (비어 있을 때만)

    먼저 선언된 대안이 셀을 차지하면 끝이다(first-write-wins). 뒤의 claim 은
    conflicts 에 기록만 하고 버린다. 단, ε 전달로 생긴 claim 중
    FIRST(A) 에만 있고 FOLLOW(A) 에는 없는 단말은 정상 겹침이므로 기록하지 않는다.
    """
    first_plus = ff.first_plus
    cells: Dict[Symbol, Dict[Symbol, int]] = {A: {} for A in grammar.nonterminals}
    rule_base: Dict[Symbol, int] = {}
    conflicts: List[Conflict] = []
    seen: set = set()

    def claim(A: Symbol, t: Symbol, r: int, forwarded: bool) -> None:
        row = cells[A]
        held = row.get(t)
        if held is None:
            row[t] = r
            return
        if held == r:
            return
        if forwarded and t not in ff.follow[A]:
            return
        key = (A, t, r)
        if key not in seen:
            seen.add(key)
            conflicts.append(Conflict(A, t, held, r))

    for A in grammar.nonterminals:
        alts = grammar.alternatives(A)
        rule_base[A] = alts[0].number
        for p in alts:
            lead = first_plus[p.rhs[0]] if p.rhs else first_plus[EPSILON]
            for w in lead:
                if w.is_epsilon:
                    for t in first_plus[A]:
                        if t.is_epsilon:
                            continue
                        claim(A, t, p.index, forwarded=True)
                    continue
                claim(A, w, p.index, forwarded=False)

    return ParseTable(
        nonterminals=grammar.nonterminals,
        terminals=grammar.terminals,
        cells=MappingProxyType({A: MappingProxyType(row) for A, row in cells.items()}),
        rule_base=MappingProxyType(rule_base),
        conflicts=tuple(conflicts),
    )
