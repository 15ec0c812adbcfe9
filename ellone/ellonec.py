# ellone/ellonec.py
"""ellonec – ellone CLI

사용 예)
    $ python -m ellone.ellonec check tests/grammar_test/expr.g -D
    $ python -m ellone.ellonec table tests/grammar_test/expr.g
    $ python -m ellone.ellonec table tests/grammar_test/expr.csv --csv -o tests/tmp/table.csv
    $ python -m ellone.ellonec sets  tests/grammar_test/expr.g --only first
    $ python -m ellone.ellonec lex --text "int32 var3 = var1 * var2"

기능
----
- check       : 문법을 읽어 파이프라인(행→Grammar→FIRST/FOLLOW/FIRST+→테이블) 검증 및 요약 출력
- table       : LL(1) 파싱 테이블 출력(텍스트 또는 CSV)
- sets        : FIRST / FOLLOW / FIRST+ 집합 출력
- productions : 전역 번호가 붙은 프로덕션 목록
- lex         : 정규식 토크나이저로 입력 텍스트를 토큰으로 나눠 출력

디버그 모드(-D/--debug)를 켜면 단계별 진행 상황과 충돌 리포트를 stderr 로 출력합니다.
"""

from __future__ import annotations
import argparse
import csv
import pathlib
import sys
from typing import Optional

# ------------------------------
# 헬퍼
# ------------------------------

def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)

# ------------------------------
# 파이프라인 로딩
# ------------------------------

def _load_pipeline(args):
    """
    문법 파일을 읽어 행→Grammar→FIRST/FOLLOW/FIRST+→파싱 테이블까지 생성.
    """
    from .grammar.loader import load_rows
    from .grammar.model import BuildOptions, build_grammar
    from .ll1.first_follow import compute_first_follow
    from .ll1.table import build_parse_table
    from .ll1.analysis import Analysis

    debug = args.debug
    rows = load_rows(args.file, fmt=args.format, delim=args.delim)
    if debug: _eprint("[DEBUG] rows loaded | rows=%d" % len(rows))

    opts = BuildOptions(
        start_marker=args.start_marker,
        epsilon=args.epsilon,
        allow_undefined=args.allow_undefined,
    )
    g = build_grammar(rows, opts)
    if debug: _eprint("[DEBUG] Grammar ready | terms=%d nonterms=%d rules=%d start=%s" %
                      (len(g.terminals), len(g.nonterminals), g.rule_count,
                       g.start.text if g.start else None))

    ff = compute_first_follow(g)
    if debug: _eprint("[DEBUG] FIRST/FOLLOW/FIRST+ computed")

    tbl = build_parse_table(g, ff)
    if debug: _eprint("[DEBUG] LL(1) table built | filled=%d conflicts=%d" %
                      (tbl.filled, len(tbl.conflicts)))

    return Analysis(grammar=g, sets=ff, table=tbl)


def _run_pipeline(args):
    """문법 오류는 SyntaxError, 그 외는 타입명과 함께 보고. 실패 시 None."""
    try:
        return _load_pipeline(args)
    except SyntaxError as e:
        _eprint("[ERROR]", str(e))
    except Exception as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
    return None

# ------------------------------
# 디버그 출력 헬퍼
# ------------------------------

def _print_conflicts(tbl) -> None:
    _eprint("\n[Conflicts Detail]")
    _eprint(tbl.pretty_conflicts())

# ------------------------------
# 커맨드 구현
# ------------------------------

def cmd_check(args) -> int:
    an = _run_pipeline(args)
    if an is None:
        return 2
    g, tbl = an.grammar, an.table

    if args.debug and tbl.conflicts:
        _print_conflicts(tbl)

    print(f"[CHECK OK] start={g.start.text} nonterms={len(g.nonterminals)} "
          f"terms={len(g.terminals)} rules={g.rule_count} filled={tbl.filled} "
          f"conflicts={len(tbl.conflicts)}")
    if args.strict and tbl.conflicts:
        _eprint("[WARN] grammar is not LL(1); first declared alternative kept in each cell")
        if not args.debug:
            _print_conflicts(tbl)
        return 1
    return 0


def cmd_table(args) -> int:
    from .ll1.report import render_table, table_grid

    an = _run_pipeline(args)
    if an is None:
        return 2
    tbl = an.table

    if tbl.conflicts:
        _eprint(f"[WARN] {len(tbl.conflicts)} conflict(s); first declared alternative kept.")
        if args.debug:
            _print_conflicts(tbl)

    global_numbers = not args.local
    if args.csv:
        grid = table_grid(tbl, global_numbers=global_numbers)
        if args.output:
            out_path = pathlib.Path(args.output)
            out_path.parent.mkdir(parents=True, exist_ok=True)
            with out_path.open("w", encoding="utf-8", newline="") as f:
                csv.writer(f).writerows(grid)
            print(f"[EMIT] table -> {out_path}")
        else:
            csv.writer(sys.stdout).writerows(grid)
        return 0

    print(render_table(tbl, global_numbers=global_numbers))
    return 0


def cmd_sets(args) -> int:
    from .ll1.report import render_sets

    an = _run_pipeline(args)
    if an is None:
        return 2
    g, ff = an.grammar, an.sets

    chosen = {
        "first":      ("First",  ff.first,      list(g.nonterminals)),
        "follow":     ("Follow", ff.follow,     list(g.nonterminals)),
        "first_plus": ("First+", ff.first_plus, list(g.nonterminals)),
    }
    names = [args.only] if args.only else ["first", "follow", "first_plus"]
    blocks = []
    for name in names:
        title, mapping, keys = chosen[name]
        blocks.append(render_sets(title, mapping, keys, canonical=args.sorted))
    print("\n\n".join(blocks))
    return 0


def cmd_productions(args) -> int:
    from .ll1.report import render_productions

    an = _run_pipeline(args)
    if an is None:
        return 2
    print(render_productions(an.grammar))
    return 0


def cmd_lex(args) -> int:
    """정규식 토크나이저 결과를 표준출력으로 보여줍니다."""
    try:
        from .lex import Tokenizer, format_tokens
        order = args.order.split(",") if args.order else None
        lx = Tokenizer(order=order)
        if args.text is not None:
            text = args.text
        else:
            with open(args.input, "r", encoding="utf-8") as f:
                text = f.read()
        toks = lx.tokenize(text)
        if args.aligned:
            print(format_tokens(toks))
            return 0
        for i, tok in enumerate(toks):
            print(f"{i:03d}: {tok.type:<12} {tok.text!r}  @{tok.line}:{tok.col}")
        return 0
    except Exception as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2


# ------------------------------
# 엔트리포인트
# ------------------------------

def _add_grammar_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("file", help="문법 파일(.g/.txt: 'A -> B C' 줄, .csv/.tsv: 2열 표)")
    p.add_argument("--format", choices=["text", "csv", "tsv"], default=None, help="입력 형식(기본: 확장자로 판단)")
    p.add_argument("--delim", default="->", help="텍스트 형식의 LHS/RHS 구분자")
    p.add_argument("--epsilon", default="ε", help="ε 를 나타내는 RHS 토큰")
    p.add_argument("--start-marker", default="*", help="시작 기호 접두사 (예: *Goal)")
    p.add_argument("--allow-undefined", action="store_true",
                   help="정의되지 않은 비단말을 오류 대신 단말로 취급")
    p.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")


def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="ellonec", description="ellone LL(1) table builder CLI")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_check = sub.add_parser("check", help="문법을 검사하고 테이블을 생성해 충돌 유무를 확인합니다")
    _add_grammar_args(p_check)
    p_check.add_argument("--strict", action="store_true", help="충돌이 있으면 종료 코드 1")
    p_check.set_defaults(func=cmd_check)

    p_table = sub.add_parser("table", help="LL(1) 파싱 테이블을 출력합니다")
    _add_grammar_args(p_table)
    p_table.add_argument("--csv", action="store_true", help="CSV 로 출력")
    p_table.add_argument("-o", "--output", help="(CSV) 출력 파일 경로, 없으면 stdout")
    p_table.add_argument("--local", action="store_true", help="전역 규칙 번호 대신 LHS 내부 번호로 출력")
    p_table.set_defaults(func=cmd_table)

    p_sets = sub.add_parser("sets", help="FIRST/FOLLOW/FIRST+ 집합을 출력합니다")
    _add_grammar_args(p_sets)
    p_sets.add_argument("--only", choices=["first", "follow", "first_plus"], help="한 종류만 출력")
    p_sets.add_argument("--sorted", action="store_true", help="원소를 사전순으로 출력")
    p_sets.set_defaults(func=cmd_sets)

    p_prods = sub.add_parser("productions", help="번호가 붙은 프로덕션 목록을 출력합니다")
    _add_grammar_args(p_prods)
    p_prods.set_defaults(func=cmd_productions)

    p_lex = sub.add_parser("lex", help="정규식 토크나이저로 입력 텍스트를 토크나이즈합니다")
    src_group = p_lex.add_mutually_exclusive_group(required=True)
    src_group.add_argument("--text", help="직접 입력 텍스트")
    src_group.add_argument("--input", help="입력 텍스트 파일 경로")
    p_lex.add_argument("--order", help="규칙 적용 순서(쉼표 구분, 예: name,int32,operator)")
    p_lex.add_argument("--aligned", action="store_true", help="타입/원문 두 줄 정렬 출력")
    p_lex.set_defaults(func=cmd_lex)

    args = ap.parse_args(argv)
    return int(args.func(args))

if __name__ == "__main__":
    sys.exit(main())
