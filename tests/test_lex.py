import pytest

from ellone.lex import DEFAULT_RULES, LexTok, Tokenizer, format_tokens


def kinds(tokens):
    return [(t.type, t.text) for t in tokens]


def test_declaration():
    toks = Tokenizer().tokenize("int32 var3 = var1 * var2")
    assert kinds(toks) == [
        ("type", "int32"), ("name", "var3"), ("operator", "="),
        ("name", "var1"), ("operator", "*"), ("name", "var2"),
    ]


def test_numbers_are_not_split():
    toks = Tokenizer().tokenize("x = 1.5 + 42")
    assert kinds(toks) == [
        ("name", "x"), ("operator", "="), ("float32", "1.5"),
        ("operator", "+"), ("int32", "42"),
    ]


def test_earlier_rule_claims_position():
    # `type` runs before `name`
    toks = Tokenizer().tokenize("float32 y = 2")
    assert toks[0] == LexTok("type", "float32", 1, 1)


def test_comment_and_positions():
    toks = Tokenizer().tokenize("a = b // note\nc < d")
    assert kinds(toks) == [
        ("name", "a"), ("operator", "="), ("name", "b"), ("comment", "// note"),
        ("name", "c"), ("ternary", "<"), ("name", "d"),
    ]
    c = toks[4]
    assert (c.line, c.col) == (2, 1)
    assert (toks[5].line, toks[5].col) == (2, 3)


def test_shift_operator_is_not_a_comparison():
    toks = Tokenizer().tokenize("a << b < c")
    assert kinds(toks) == [
        ("name", "a"), ("operator", "<<"), ("name", "b"), ("ternary", "<"), ("name", "c"),
    ]


def test_custom_order():
    lx = Tokenizer(order=["name", "operator"])
    assert lx.rule_names == ["name", "operator"]
    assert kinds(lx.tokenize("int32 v = w")) == [
        ("name", "int32"), ("name", "v"), ("operator", "="), ("name", "w"),
    ]


def test_unknown_rule_name():
    with pytest.raises(KeyError):
        Tokenizer(order=["name", "nope"])


def test_custom_rules():
    lx = Tokenizer(rules=[("word", r"\p{L}+"), ("num", r"\d+")])
    assert kinds(lx.tokenize("héllo 12")) == [("word", "héllo"), ("num", "12")]


def test_default_rule_names():
    assert [n for n, _ in DEFAULT_RULES][:4] == ["comment", "nasm", "if", "type"]


def test_format_tokens():
    toks = Tokenizer().tokenize("int32 var3 = var1")
    top, bottom = format_tokens(toks).split("\n")
    assert top == "type  name operator name"
    assert bottom == "int32 var3 =        var1"
