"""rulec command line."""

from rulematch.rulec import main


def test_solve_looping(looping_path, capsys):
    assert main(["solve", str(looping_path)]) == 0
    out = capsys.readouterr().out
    assert out == "part 1: 3\npart 2: 12\n"


def test_solve_exact_only(simple_path, capsys):
    assert main(["solve", str(simple_path), "--mode", "exact"]) == 0
    assert capsys.readouterr().out == "part 1: 2\n"


def test_solve_skips_part_two_without_policy_rules(simple_path, capsys):
    assert main(["solve", str(simple_path)]) == 0
    captured = capsys.readouterr()
    assert captured.out == "part 1: 2\n"
    assert "[WARN]" in captured.err


def test_solve_repeat_without_policy_rules_fails(simple_path, capsys):
    assert main(["solve", str(simple_path), "--mode", "repeat"]) == 2
    err = capsys.readouterr().err
    assert "[SYNTAX ERROR]" in err
    assert "undefined rule 42" in err


def test_solve_debug_lists_lines(simple_path, capsys):
    assert main(["solve", str(simple_path), "--mode", "exact", "-D"]) == 0
    err = capsys.readouterr().err
    assert "[DEBUG] + ababbb" in err
    assert "[DEBUG] - bababa" in err


def test_check_ok(looping_path, capsys):
    assert main(["check", str(looping_path), "--root", "0"]) == 0
    assert capsys.readouterr().out == "[CHECK OK] rules=31 messages=15\n"


def test_check_reports_problems(tmp_path, capsys):
    src = tmp_path / "broken.txt"
    src.write_text('0: 1 2\n1: "a"\n\nab\n', encoding="utf-8")
    assert main(["check", str(src)]) == 1
    out = capsys.readouterr().out
    assert "[CHECK FAILED]" in out
    assert "rule 0: undefined rule 2" in out


def test_syntax_error(tmp_path, capsys):
    src = tmp_path / "bad.txt"
    src.write_text('0: "ab"\n\nab\n', encoding="utf-8")
    assert main(["check", str(src)]) == 2
    assert "[SYNTAX ERROR]" in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    assert main(["solve", str(tmp_path / "nope.txt")]) == 2
    assert "[ERROR] FileNotFoundError" in capsys.readouterr().err


def test_left_recursion_error(tmp_path, capsys):
    src = tmp_path / "loop.txt"
    src.write_text('0: 0 1 | 1\n1: "a"\n\naa\n', encoding="utf-8")
    assert main(["solve", str(src), "--mode", "exact"]) == 2
    assert "GrammarCycle" in capsys.readouterr().err


def test_deep_right_recursion_error(tmp_path, capsys):
    src = tmp_path / "deep.txt"
    src.write_text('0: 1 0 | 1\n1: "a"\n\n' + "a" * 5000 + "\n", encoding="utf-8")
    assert main(["solve", str(src), "--mode", "exact"]) == 2
    assert "RecursionDepthExceeded" in capsys.readouterr().err


def test_check_empty_grammar(tmp_path, capsys):
    src = tmp_path / "empty.txt"
    src.write_text("\nabab\n", encoding="utf-8")
    assert main(["check", str(src), "--root", "0"]) == 1
    assert "root rule 0 is not defined" in capsys.readouterr().out


def test_match_text(simple_path, capsys):
    assert main(["match", str(simple_path), "--text", "ababbb"]) == 0
    assert capsys.readouterr().out == "'ababbb': match\n"


def test_match_input_file(simple_path, tmp_path, capsys):
    lines = tmp_path / "lines.txt"
    lines.write_text("aaaabbb\nbababa\nab\n", encoding="utf-8")
    assert main(["match", str(simple_path), "--input", str(lines), "--rule", "3"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["'aaaabbb': no match", "'bababa': prefix 2/6", "'ab': match"]


def test_fmt_to_file(simple_path, tmp_path, capsys):
    out_path = tmp_path / "out" / "rules.txt"
    assert main(["fmt", str(simple_path), "-o", str(out_path)]) == 0
    assert out_path.read_text(encoding="utf-8").splitlines()[1] == "1: 2 3 | 3 2"
    assert "[EMIT] rules=6" in capsys.readouterr().out


def test_fmt_to_stdout(simple_path, capsys):
    assert main(["fmt", str(simple_path)]) == 0
    assert capsys.readouterr().out.startswith('0: 4 1 5\n1: 2 3 | 3 2\n')
