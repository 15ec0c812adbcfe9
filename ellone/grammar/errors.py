"""문법 입력 오류 계층.

모두 `SyntaxError` 하위 클래스라서, 문법 오류를 `SyntaxError` 로 잡는
CLI 핸들러가 그대로 동작한다.
"""
from __future__ import annotations
from typing     import Optional, Tuple


class GrammarError(SyntaxError):
    """Base class for every problem found in grammar input."""


class MalformedGrammarError(GrammarError):
    """A production row fails basic structural expectations."""


class MissingStartSymbolError(GrammarError):
    """No LHS carries the start marker; FOLLOW cannot be seeded."""


class UnresolvedReferenceError(GrammarError):
    """A nonterminal is used on some RHS but never defined as an LHS."""

    def __init__(self, names: Tuple[str, ...], where: Optional[dict] = None):
        self.names = tuple(names)
        self.where = dict(where or {})
        detail = ", ".join(
            f"{n} (in {self.where[n]})" if n in self.where else n for n in self.names
        )
        super().__init__(f"Undefined nonterminal(s): {detail}")
