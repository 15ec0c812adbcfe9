from ellone.grammar import tests as smoke


def test_smoke_script_prints_every_stage(capsys):
    smoke.main()
    out = capsys.readouterr().out
    for header in ("[Grammar]", "[FIRST]", "[FOLLOW]", "[FIRST+]", "[LL(1) Table]", "[Lexer]"):
        assert header in out
    assert "Filled cells: 22" in out
    assert "Conflicts: 0" in out


def test_smoke_script_reports_grammar_errors(tmp_path, capsys):
    p = tmp_path / "bad.g"
    p.write_text("*S -> A\n", encoding="utf-8")
    smoke.main(str(p))
    assert "Undefined nonterminal(s): A" in capsys.readouterr().out
