from __future__ import annotations
from pathlib import Path
from typing import Optional
from .loader import load_rows
from .model import Grammar, build_grammar
from ..ll1.first_follow import compute_first_follow
from ..ll1.table import build_parse_table
from ..ll1.report import render_productions, render_sets, render_table
from ..lex import Tokenizer, format_tokens

EXPR = Path(__file__).resolve().parents[2] / "tests" / "grammar_test" / "expr.g"

def _print_grammar(g: Grammar) -> None:
    print(f"\n[Grammar]")
    print(f"Start: {g.start}")
    print(render_productions(g))
    print("\n[Terminals]")
    print(", ".join(t.text for t in g.terminals))
    print("\n[Nonterminals]")
    print(", ".join(A.text for A in g.nonterminals))

def _print_first_follow(g: Grammar):
    """FIRST/FOLLOW/FIRST+ 를 계산해 보기 좋게 출력합니다."""
    ff = compute_first_follow(g)
    for title, mapping in (("FIRST", ff.first), ("FOLLOW", ff.follow), ("FIRST+", ff.first_plus)):
        print()
        print(render_sets(title, mapping, g.nonterminals))
    return ff

def _print_ll1_table(g: Grammar, ff) -> None:
    """
    FIRST+ 로 LL(1) 테이블을 만들고 그리드/충돌을 요약 출력합니다.
    """
    tbl = build_parse_table(g, ff)

    print("\n[LL(1) Table]")
    print(render_table(tbl))
    print(f"\nFilled cells: {tbl.filled}")
    print(f"Conflicts: {len(tbl.conflicts)}")
    if tbl.conflicts:
        print(tbl.pretty_conflicts())

def _run_lexer_smoke() -> None:
    """토크나이저로 샘플 문장 몇 개를 나눠 본다."""
    lx = Tokenizer()
    samples = [
        "int32 var3 = var1 * var2",
        "float32 x = .5 + 2.25;",
        "if (a < b) { c = d; }",
    ]
    print("\n[Lexer]")
    for s in samples:
        print(format_tokens(lx.tokenize(s)))


def main(path: Optional[str] = None) -> None:
    try:
        rows = load_rows(str(path or EXPR))
        g = build_grammar(rows)
        print(repr(g))
        _print_grammar(g)
        ff = _print_first_follow(g)
        _print_ll1_table(g, ff)
        _run_lexer_smoke()
    except SyntaxError as e:
        # 친절한 메시지만 출력(Traceback 숨김)
        print(str(e))


if __name__ == "__main__":
    main()
