"""삽입 순서를 보존하는 심볼 집합."""
from __future__     import annotations
from typing         import Dict, Iterable, Iterator, List

from ..grammar.symbols import EPSILON, Symbol


class SymbolSet:
    """
    SymbolSet
    =========
    A deduplicated collection of symbols with set semantics (`==` ignores
    order) that still iterates in insertion order, so diagnostics come out in
    the order elements were discovered.

    `add` / `update` report whether anything new went in; the fixed-point
    loops use that as their changed flag.
    """
    __slots__ = ("_items",)

    def __init__(self, items: Iterable[Symbol] = ()):
        self._items: Dict[Symbol, None] = dict.fromkeys(items)

    def add(self, sym: Symbol) -> bool:
        if sym in self._items:
            return False
        self._items[sym] = None
        return True

    def update(self, other: Iterable[Symbol]) -> bool:
        changed = False
        for sym in other:
            if sym not in self._items:
                self._items[sym] = None
                changed = True
        return changed

    def without_epsilon(self) -> "SymbolSet":
        return SymbolSet(s for s in self._items if not s.is_epsilon)

    @property
    def has_epsilon(self) -> bool:
        return EPSILON in self._items

    def copy(self) -> "SymbolSet":
        return SymbolSet(self._items)

    def sorted(self) -> "SymbolSet":
        """사전순 정렬본(비교/출력용 정규 순서)."""
        return SymbolSet(sorted(self._items, key=lambda s: (s.text, s.kind.value)))

    def names(self) -> List[str]:
        return [s.text for s in self._items]

    def __contains__(self, sym: object) -> bool:
        return sym in self._items

    def __iter__(self) -> Iterator[Symbol]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SymbolSet):
            return self._items.keys() == other._items.keys()
        if isinstance(other, (set, frozenset)):
            return set(self._items) == other
        return NotImplemented

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return "{" + ", ".join(self.names()) + "}"


def union(a: Iterable[Symbol], b: Iterable[Symbol]) -> SymbolSet:
    """a ∪ b 를 새 집합으로 반환(a 의 순서 뒤에 b 의 새 원소)."""
    out = SymbolSet(a)
    out.update(b)
    return out
