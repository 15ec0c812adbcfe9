"""문법 -> FIRST -> FOLLOW -> FIRST+ -> 테이블 파이프라인."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ..grammar.model import BuildOptions, Grammar, build_grammar
from .first_follow import FFResult, compute_first_follow
from .sets import SymbolSet
from .table import ParseTable, build_parse_table


@dataclass(frozen=True)
class Analysis:
    grammar: Grammar
    sets: FFResult
    table: ParseTable

    def first_of(self, name: str) -> SymbolSet:
        return self.sets.first[self.grammar.symbol(name)]

    def follow_of(self, name: str) -> SymbolSet:
        return self.sets.follow[self.grammar.symbol(name)]

    def first_plus_of(self, name: str) -> SymbolSet:
        return self.sets.first_plus[self.grammar.symbol(name)]

    def lookup(self, nonterminal: str, terminal: str) -> Optional[int]:
        """이름으로 테이블 조회. 모르는 이름이면 KeyError."""
        return self.table.lookup(self.grammar.symbol(nonterminal), self.grammar.symbol(terminal))


def analyze(grammar: Grammar) -> Analysis:
    """각 단계가 고정점에 도달한 뒤에만 다음 단계로 넘어간다."""
    sets = compute_first_follow(grammar)
    return Analysis(grammar=grammar, sets=sets, table=build_parse_table(grammar, sets))


def analyze_rows(rows: Iterable[Sequence[str]], options: Optional[BuildOptions] = None) -> Analysis:
    return analyze(build_grammar(rows, options))
