"""문법 심볼과 분류 규칙(단말/비단말/시작기호) 정의."""
from __future__     import annotations
from dataclasses    import dataclass
from enum           import Enum
import regex as re


class SymbolKind(Enum):
    TERMINAL    = "terminal"
    NONTERMINAL = "nonterminal"
    START       = "start"
    EPSILON     = "epsilon"
    END         = "end"


@dataclass(frozen=True)
class Symbol:
    """
    Symbol
    ======
    A grammar token identified by its text plus the kind tag assigned once, at
    grammar construction. Stages after the grammar model only look at `kind`;
    they never re-derive it from the text.

    Two symbols with the same text but different kinds are different symbols,
    which keeps the reserved `EPSILON` / `END_OF_INPUT` apart from a grammar
    terminal that happens to be spelled `eof`.
    """
    text: str
    kind: SymbolKind

    @property
    def is_nonterminal(self) -> bool:
        return self.kind in (SymbolKind.NONTERMINAL, SymbolKind.START)

    @property
    def is_terminal(self) -> bool:
        """Column symbols: grammar terminals and END_OF_INPUT."""
        return self.kind in (SymbolKind.TERMINAL, SymbolKind.END)

    @property
    def is_epsilon(self) -> bool:
        return self.kind is SymbolKind.EPSILON

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"Symbol({self.text!r}, {self.kind.name})"


# 예약 심볼: 문자열 리터럴이 아니라 kind 로 구분된다
EPSILON      = Symbol("ε", SymbolKind.EPSILON)
END_OF_INPUT = Symbol("eof", SymbolKind.END)

DEFAULT_START_MARKER = "*"
DEFAULT_EPSILON_TEXT = "ε"

_UPPER_RE = re.compile(r"\p{Lu}")


def is_nonterminal_name(text: str, start_marker: str = DEFAULT_START_MARKER) -> bool:
    """True if `text` names a nonterminal (plain or start-marked)."""
    return classify(text, start_marker) in (SymbolKind.NONTERMINAL, SymbolKind.START)


def classify(text: str, start_marker: str = DEFAULT_START_MARKER) -> SymbolKind:
    """
    Naming convention
    -----------------
    - first character is an uppercase letter            -> NONTERMINAL
    - start marker followed by an uppercase letter       -> START   (e.g. `*Goal`)
    - anything else (including a bare `*`)               -> TERMINAL
    """
    if not text:
        return SymbolKind.TERMINAL
    if _UPPER_RE.match(text[0]):
        return SymbolKind.NONTERMINAL
    if (start_marker and text.startswith(start_marker)
            and len(text) > len(start_marker)
            and _UPPER_RE.match(text[len(start_marker)])):
        return SymbolKind.START
    return SymbolKind.TERMINAL


def make_symbol(text: str, start_marker: str = DEFAULT_START_MARKER) -> Symbol:
    return Symbol(text, classify(text, start_marker))
