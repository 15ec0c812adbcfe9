from __future__ import annotations
from typing import Dict, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from ..grammar.errors import MissingStartSymbolError
from ..grammar.model import Grammar
from ..grammar.symbols import END_OF_INPUT, EPSILON, Symbol
from .sets import SymbolSet, union

SetMap = Dict[Symbol, SymbolSet]


@dataclass(frozen=True)
class FFResult:
    """
    FFResult
    ========
    FIRST / FOLLOW / FIRST+ 계산 결과 컨테이너.

    - first     : every symbol -> FIRST set
        * terminal t (and END_OF_INPUT): FIRST(t) = { t }
        * EPSILON: FIRST(ε) = { ε }
        * nonterminal A: fixed point, may contain ε
    - follow    : every nonterminal -> FOLLOW set (start symbol always has eof),
                  plus FOLLOW(ε) = FIRST(ε) (a separate copy)
    - first_plus: every symbol in `first` -> FIRST+ set

    Read-only mappings, enumerated in registration order: terminals
    (eof first), EPSILON, then nonterminals in LHS order.
    """
    first: Mapping[Symbol, SymbolSet]
    follow: Mapping[Symbol, SymbolSet]
    first_plus: Mapping[Symbol, SymbolSet]


def compute_first(grammar: Grammar) -> SetMap:
    """
    compute_first
    =============
    A -> B1 B2 ... Bk 마다:
      - k == 0 이면 FIRST(A) 에 ε 추가
      - R := FIRST(B1) - {ε}
      - i := 0; FIRST(Bi) 에 ε 가 있고 i < k-1 인 동안
            R ∪= FIRST(B(i+1)) - {ε}; i += 1
      - i == k-1 이고 FIRST(B(k-1)) 에 ε 가 있으면 R 에 ε 추가
      - FIRST(A) ∪= R
    한 바퀴 동안 아무 집합도 커지지 않으면 종료.
    """
    first: SetMap = {}
    for t in grammar.terminals:
        first[t] = SymbolSet([t])
    first[EPSILON] = SymbolSet([EPSILON])
    # 비단말은 빈 집합({}) 으로 시작. {ε} 와는 다르다
    for A in grammar.nonterminals:
        first[A] = SymbolSet()

    changed = True
    while changed:
        changed = False
        for p in grammar.all_productions():
            body = p.rhs
            k = len(body)
            if k == 0:
                if first[p.lhs].add(EPSILON):
                    changed = True
                continue

            rhs = first[body[0]].without_epsilon()
            i = 0
            while first[body[i]].has_epsilon and i < k - 1:
                rhs.update(first[body[i + 1]].without_epsilon())
                i += 1
            if i == k - 1 and first[body[k - 1]].has_epsilon:
                rhs.add(EPSILON)

            if first[p.lhs].update(rhs):
                changed = True
    return first


def compute_follow(grammar: Grammar, first: SetMap) -> SetMap:
    """
    compute_follow
    ==============
    - FOLLOW(start) := { eof }, 나머지 비단말은 {}
      (start = LHS 등록 순서상 첫 번째 START 심볼. 없으면 MissingStartSymbolError)
    - LHS 등록 순서 -> 대안 선언 순서로 돌면서, 각 대안을 **오른쪽에서 왼쪽으로**:
        trailer := FOLLOW(A)
        Bi 가 비단말: FOLLOW(Bi) ∪= trailer
                      ε ∈ FIRST(Bi) 이면 trailer ∪= FIRST(Bi) - {ε}
                      아니면         trailer := FIRST(Bi)
        Bi 가 단말  : trailer := FIRST(Bi) = { Bi }
    변화가 없을 때까지 반복.
    """
    start = grammar.start
    if start is None:
        raise MissingStartSymbolError(
            f"No start symbol: prefix one left-hand side with {grammar.options.start_marker!r} "
            f"(e.g. {grammar.options.start_marker}Goal)"
        )

    follow: SetMap = {A: SymbolSet() for A in grammar.nonterminals}
    follow[start].add(END_OF_INPUT)

    changed = True
    while changed:
        changed = False
        for A in grammar.nonterminals:
            for p in grammar.alternatives(A):
                trailer = follow[A].copy()
                for X in reversed(p.rhs):
                    if X.is_nonterminal:
                        if follow[X].update(trailer):
                            changed = True
                        if first[X].has_epsilon:
                            trailer = union(trailer, first[X].without_epsilon())
                        else:
                            trailer = first[X].copy()
                    else:
                        trailer = first[X].copy()

    follow[EPSILON] = first[EPSILON].copy()
    return follow


def compute_first_plus(first: SetMap, follow: SetMap) -> SetMap:
    """
    FIRST+(X) = FIRST(X)                 (ε ∉ FIRST(X))
              = sorted(FIRST(X) ∪ FOLLOW(X)) (ε ∈ FIRST(X), ε 유지)
    """
    first_plus: SetMap = {}
    for X, fx in first.items():
        if fx.has_epsilon and X in follow:
            first_plus[X] = union(fx, follow[X]).sorted()
        else:
            first_plus[X] = fx.copy()
    return first_plus


def compute_first_follow(grammar: Grammar) -> FFResult:
    """FIRST -> FOLLOW -> FIRST+ 를 순서대로 계산."""
    first = compute_first(grammar)
    follow = compute_follow(grammar, first)
    first_plus = compute_first_plus(first, follow)
    return FFResult(
        first=MappingProxyType(first),
        follow=MappingProxyType(follow),
        first_plus=MappingProxyType(first_plus),
    )
