"""LL(1) analysis for ellone.

This package provides:
- FIRST / FOLLOW / FIRST+ fixed-point solvers
- the LL(1) predictive table builder (first-write-wins, with a conflict report)
- a one-call pipeline (`analyze`) and plain-text renderers
"""

from .sets import SymbolSet, union
from .first_follow import (
    FFResult, compute_first, compute_follow, compute_first_plus, compute_first_follow,
)
from .table import Conflict, ParseTable, build_parse_table
from .analysis import Analysis, analyze, analyze_rows
