"""ellone — LL(1) predictive parsing table builder.

Grammar rows in, FIRST / FOLLOW / FIRST+ sets and the LL(1) table out.
"""

from .grammar.errors import (
    GrammarError, MalformedGrammarError, MissingStartSymbolError, UnresolvedReferenceError,
)
from .grammar.model import BuildOptions, Grammar, Production, build_grammar
from .grammar.symbols import END_OF_INPUT, EPSILON, Symbol, SymbolKind
from .ll1 import Analysis, ParseTable, SymbolSet, analyze, analyze_rows

__version__ = "0.1.0"
