# ellone/lex/__init__.py
"""ellone 토크나이저 — 정규식 분류 규칙으로 입력 텍스트를 토큰으로 나눈다.

파싱 테이블 생성과는 독립적인 보조 도구다.

매칭 방식
--------
- 규칙은 (이름, 패턴) 쌍의 **순서 있는** 목록
- 규칙을 순서대로 하나씩 적용해 입력 전체에서 매치를 찾는다
- 매치 시작 위치가 아직 다른 토큰에 덮여 있지 않으면 매치 구간 전체를 차지한다
  (먼저 적용된 규칙이 이긴다, 빈 매치는 무시)
- 결과는 시작 위치 순으로 정렬

API
---
- `LexTok(type: str, text: str, line: int, col: int)` — 토큰 단위
- `Tokenizer(rules=DEFAULT_RULES).tokenize(text) -> List[LexTok]`
- `format_tokens(tokens) -> str` — 타입 줄과 원문 줄을 맞춰 정렬
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple
import regex as re

# --------- Public datatypes ---------

@dataclass(frozen=True)
class LexTok:
    type: str   # 규칙 이름
    text: str   # 원문 lexeme
    line: int   # 1-based
    col: int    # 1-based


DEFAULT_RULES: Tuple[Tuple[str, str], ...] = (
    ("comment",  r"//.*$"),
    ("nasm",     r"(?:BYTE)|(?:[A-Z]*WORD)\[[a-zA-Z\-0-9]*\]"),
    ("if",       r"(?:if|IF)\s*\(.*\)\s*\{.*\}(?:(?:else|ELSE)\s*\{.*\})*"),
    ("type",     r"[a-zA-Z_]+[a-zA-Z0-9_]*(?=\s+[a-zA-Z_]+[a-zA-Z0-9_]*\s*=)"),
    ("name",     r"[a-zA-Z_]+[a-zA-Z0-9_]*"),
    ("float32",  r"\d+\.\d+|\.\d+"),
    ("int32",    r"\b\d+"),
    ("operator", r"[-+=*/^;?.,]|<<"),
    ("ternary",  r"==|!=|>=|<=|(?<!<)<(?!<)|>"),
    ("bracket",  r"[(){}\"']"),
)


class Tokenizer:
    """
    Tokenizer
    =========
    `rules` 순서가 곧 우선순위다. `order` 를 주면 그 이름 순서로 규칙을 고른다
    (없는 이름이면 KeyError).
    """
    def __init__(self,
            rules: Sequence[Tuple[str, str]] = DEFAULT_RULES,
            order: Optional[Sequence[str]] = None):
        table: Dict[str, str] = dict(rules)
        names = list(order) if order is not None else [name for name, _ in rules]
        self._rules: List[Tuple[str, "re.Pattern[str]"]] = []
        for name in names:
            if name not in table:
                raise KeyError(f"Unknown token rule: {name!r}")
            self._rules.append((name, re.compile(table[name], re.MULTILINE)))

    @property
    def rule_names(self) -> List[str]:
        return [name for name, _ in self._rules]

    def tokenize(self, text: str) -> List[LexTok]:
        covered = [False] * len(text)
        found: List[Tuple[int, str, str]] = []
        for name, rgx in self._rules:
            for m in rgx.finditer(text):
                i, j = m.span()
                if i == j or covered[i]:
                    continue
                for k in range(i, j):
                    covered[k] = True
                found.append((i, name, m.group(0)))
        found.sort(key=lambda f: f[0])
        return [LexTok(type=name, text=lex, line=_line_of(text, i), col=_col_of(text, i))
                for i, name, lex in found]


def _line_of(text: str, pos: int) -> int:
    return text.count("\n", 0, pos) + 1


def _col_of(text: str, pos: int) -> int:
    return pos - (text.rfind("\n", 0, pos) + 1) + 1


def format_tokens(tokens: Sequence[LexTok]) -> str:
    """
    int32 var3 = var1 * var2 ->
        type  name operator name operator name
        int32 var3 =        var1 *        var2
    """
    kinds: List[str] = []
    texts: List[str] = []
    for t in tokens:
        w = max(len(t.type), len(t.text))
        kinds.append(t.type.ljust(w))
        texts.append(t.text.ljust(w))
    return " ".join(kinds).rstrip() + "\n" + " ".join(texts).rstrip()
