"""(LHS, RHS) 행 목록을 받아 불변 Grammar 모델을 만든다."""
from __future__     import annotations
from dataclasses    import dataclass, field
from typing         import Dict, Iterable, List, Optional, Sequence, Tuple

from .errors  import MalformedGrammarError, UnresolvedReferenceError
from .symbols import (
    DEFAULT_EPSILON_TEXT, DEFAULT_START_MARKER, END_OF_INPUT, EPSILON,
    Symbol, SymbolKind, classify,
)


@dataclass(frozen=True)
class BuildOptions:
    """
    - start_marker   : prefix that marks the start nonterminal (`*Goal`)
    - epsilon        : RHS token standing for the empty string
    - allow_undefined: fold RHS nonterminals that have no production into the
                       terminal columns instead of raising
    """
    start_marker: str = DEFAULT_START_MARKER
    epsilon: str = DEFAULT_EPSILON_TEXT
    allow_undefined: bool = False


@dataclass(frozen=True)
class Production:
    """
    프로덕션 1개.
    - lhs   : 좌변 비단말
    - rhs   : 우변 심볼 튜플(ε 대안은 빈 튜플)
    - index : 같은 LHS 안에서의 대안 번호(0부터). 파싱 테이블 셀에 들어가는 값
    - number: 문법 전체 기준 규칙 번호(출력용)
    - epsilon: 빈 대안을 출력할 때 쓰는 토큰(BuildOptions.epsilon)
    """
    lhs: Symbol
    rhs: Tuple[Symbol, ...]
    index: int
    number: int
    epsilon: str = field(default=DEFAULT_EPSILON_TEXT, compare=False, repr=False)

    def __str__(self) -> str:
        right = " ".join(s.text for s in self.rhs) if self.rhs else self.epsilon
        return f"{self.lhs} -> {right}"


@dataclass(frozen=True)
class Grammar:
    """
    Grammar
    =======
    - nonterminals: LHS registry in insertion order (table row order)
    - terminals   : column registry, END_OF_INPUT first, then first-seen order
    - productions : LHS -> alternatives in declaration order
    - start       : first START-kind LHS in registry order, or None

    Built once by `build_grammar` and never mutated.
    """
    nonterminals: Tuple[Symbol, ...]
    terminals: Tuple[Symbol, ...]
    productions: Dict[Symbol, Tuple[Production, ...]]
    start: Optional[Symbol] = None
    options: BuildOptions = field(default_factory=BuildOptions)

    def alternatives(self, lhs: Symbol) -> Tuple[Production, ...]:
        return self.productions[lhs]

    def all_productions(self) -> List[Production]:
        """Every production, LHS registry order then declaration order."""
        out: List[Production] = []
        for A in self.nonterminals:
            out.extend(self.productions[A])
        return out

    def symbol(self, name: str) -> Symbol:
        """이름으로 심볼 조회. 예약 심볼 이름도 해석한다. 없으면 KeyError."""
        for A in self.nonterminals:
            if A.text == name:
                return A
        for t in self.terminals:
            if t.text == name and t.kind is SymbolKind.TERMINAL:
                return t
        if name == END_OF_INPUT.text:
            return END_OF_INPUT
        if name in (EPSILON.text, self.options.epsilon):
            return EPSILON
        raise KeyError(f"Unknown grammar symbol: {name!r}")

    @property
    def rule_count(self) -> int:
        return sum(len(alts) for alts in self.productions.values())

    def __repr__(self) -> str:
        nts = [s.text for s in self.nonterminals]
        ts = [s.text for s in self.terminals]
        start = self.start.text if self.start else None
        return f"Grammar(nonterminals={nts}, terminals={ts}, start={start}, rules={self.rule_count})"


def _check_row(row, lineno: int) -> Tuple[str, str]:
    try:
        lhs, rhs = row
    except (TypeError, ValueError):
        raise MalformedGrammarError(f"row {lineno}: expected an (lhs, rhs) pair, got {row!r}")
    if rhs is None:
        raise MalformedGrammarError(f"row {lineno}: missing right-hand side for {lhs!r}")
    if not isinstance(lhs, str) or not isinstance(rhs, str):
        raise MalformedGrammarError(f"row {lineno}: lhs/rhs must be text, got {row!r}")
    lhs = lhs.strip()
    if not lhs:
        raise MalformedGrammarError(f"row {lineno}: empty left-hand side")
    if len(lhs.split()) != 1:
        raise MalformedGrammarError(f"row {lineno}: left-hand side {lhs!r} is not a single symbol")
    return lhs, rhs


def build_grammar(rows: Iterable[Sequence[str]], options: Optional[BuildOptions] = None) -> Grammar:
    """
    build_grammar
    =============
    (lhs_text, rhs_text) 행들로 Grammar 를 만든다.

    - RHS 는 공백 기준으로만 분리, 순서/중복 유지
    - epsilon 토큰은 저장하지 않는다(`A -> ε` == 빈 대안)
    - 단말은 처음 등장한 순서대로 열(column)로 등록, END_OF_INPUT 은 항상 0번
    - 예약 이름(`eof`, `ε`)을 RHS 심볼로 쓰면 MalformedGrammarError
    - RHS 에만 나오고 LHS 로 정의되지 않은 비단말:
        allow_undefined=False -> UnresolvedReferenceError
        allow_undefined=True  -> 단말로 취급
    """
    opts = options or BuildOptions()
    checked: List[Tuple[str, List[str]]] = []

    # 1) 행 검사 + LHS 등록
    lhs_names: Dict[str, Symbol] = {}
    for lineno, row in enumerate(rows, start=1):
        lhs, rhs = _check_row(row, lineno)
        kind = classify(lhs, opts.start_marker)
        if kind not in (SymbolKind.NONTERMINAL, SymbolKind.START):
            raise MalformedGrammarError(
                f"row {lineno}: left-hand side {lhs!r} is not a nonterminal "
                f"(must start with an uppercase letter or {opts.start_marker!r})"
            )
        lhs_names.setdefault(lhs, Symbol(lhs, kind))
        checked.append((lhs, rhs.split()))

    if not checked:
        raise MalformedGrammarError("grammar has no productions")

    # 2) RHS 분류 + 단말 등록
    terminals: Dict[Symbol, None] = {END_OF_INPUT: None}
    undefined: Dict[str, str] = {}
    bodies: List[Tuple[Symbol, Tuple[Symbol, ...]]] = []
    for lhs, tokens in checked:
        rhs_syms: List[Symbol] = []
        for tok in tokens:
            if tok == opts.epsilon:
                continue
            if tok in (END_OF_INPUT.text, EPSILON.text):
                raise MalformedGrammarError(
                    f"rule for {lhs!r}: {tok!r} is reserved and cannot be used as a grammar symbol"
                )
            kind = classify(tok, opts.start_marker)
            if kind in (SymbolKind.NONTERMINAL, SymbolKind.START):
                if tok in lhs_names:
                    rhs_syms.append(lhs_names[tok])
                    continue
                undefined.setdefault(tok, lhs)
                if not opts.allow_undefined:
                    continue
            sym = Symbol(tok, SymbolKind.TERMINAL)
            terminals.setdefault(sym, None)
            rhs_syms.append(sym)
        bodies.append((lhs_names[lhs], tuple(rhs_syms)))

    if undefined and not opts.allow_undefined:
        raise UnresolvedReferenceError(tuple(undefined), undefined)

    # 3) 대안 번호 부여: LHS 안에서는 index, 전체에서는 number
    grouped: Dict[Symbol, List[Tuple[Symbol, ...]]] = {}
    for A, body in bodies:
        grouped.setdefault(A, []).append(body)

    productions: Dict[Symbol, Tuple[Production, ...]] = {}
    number = 0
    for A, alts in grouped.items():
        prods = []
        for idx, body in enumerate(alts):
            prods.append(Production(A, body, idx, number, opts.epsilon))
            number += 1
        productions[A] = tuple(prods)

    nonterminals = tuple(grouped)
    start = next((A for A in nonterminals if A.kind is SymbolKind.START), None)

    return Grammar(
        nonterminals=nonterminals,
        terminals=tuple(terminals),
        productions=productions,
        start=start,
        options=opts,
    )
