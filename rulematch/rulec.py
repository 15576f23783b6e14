# rulematch/rulec.py
"""rulec – rulematch CLI

사용 예)
    $ rulec check tests/grammar_test/looping.txt --root 0 -D
    $ rulec solve tests/grammar_test/looping.txt
    $ rulec solve tests/grammar_test/simple.txt --mode exact
    $ rulec match tests/grammar_test/simple.txt --rule 0 --text ababbb
    $ rulec fmt   tests/grammar_test/simple.txt -o tests/tmp/rules.txt

기능
----
- check : 입력을 읽어 규칙 파싱 + 끊어진 참조/순환 검사 결과 출력
- solve : 규칙 0 정확 매칭 개수(part 1)와 42/31 반복 휴리스틱 개수(part 2) 출력
- match : 임의 규칙으로 텍스트(또는 파일의 각 줄)를 매칭
- fmt   : 규칙 섹션을 표준 형태로 다시 출력

디버그 모드(-D/--debug)를 켜면 규칙 요약과 줄 단위 판정을 stderr로 출력합니다.
종료 코드: 0 성공, 1 검사 실패, 2 문법/입력 오류
"""

from __future__ import annotations
import argparse
import pathlib
import sys
from typing import List, Optional

from .grammar.errors import GrammarCycle, GrammarError

# ------------------------------
# 헬퍼
# ------------------------------

def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)


def _report_error(e: Exception) -> int:
    if isinstance(e, GrammarError):
        _eprint("[SYNTAX ERROR]")
        _eprint(str(e))
    else:
        _eprint("[ERROR]", type(e).__name__, str(e))
    return 2

# ------------------------------
# 입력 로딩
# ------------------------------

def _load_program(path: str, debug: bool):
    """입력 파일을 읽어 RuleProgram(grammar + messages)을 만든다."""
    from .match.runtime import RuleProgram

    prog = RuleProgram.from_file(path)
    if debug:
        _eprint("[DEBUG] input ready | rules=%d messages=%d" %
                (len(prog.grammar), len(prog.messages)))
    return prog

# ------------------------------
# 커맨드 구현
# ------------------------------

def cmd_check(args) -> int:
    from .grammar.check import check_grammar
    try:
        prog = _load_program(args.file, debug=args.debug)
    except (GrammarError, OSError) as e:
        return _report_error(e)

    report = check_grammar(prog.grammar, root=args.root)
    if args.debug:
        _eprint(f"[DEBUG] checked {report.checked} rule(s)")

    if not report.ok:
        print(f"[CHECK FAILED] rules={len(prog.grammar)} messages={len(prog.messages)}")
        print(report.pretty())
        return 1

    print(f"[CHECK OK] rules={len(prog.grammar)} messages={len(prog.messages)}")
    return 0


def cmd_solve(args) -> int:
    from .match.engine import Matcher
    from .match.repetition import RepetitionPolicy
    from .match.runtime import RuleRunner

    try:
        prog = _load_program(args.file, debug=args.debug)
        runner = RuleRunner(prog)
        policy = RepetitionPolicy(head=args.head, tail=args.tail)

        if args.mode in ("exact", "both"):
            print(f"part 1: {runner.count_exact(args.root)}")

        if args.mode in ("repeat", "both"):
            missing = [i for i in (policy.head, policy.tail) if i not in prog.grammar]
            if missing and args.mode == "both":
                _eprint(f"[WARN] rule(s) {', '.join(map(str, missing))} not defined; skipping part 2.")
            else:
                print(f"part 2: {runner.count_repeated(policy)}")

        if args.debug:
            matcher = Matcher(prog.grammar)
            for line in prog.messages:
                if args.mode == "repeat":
                    o = policy.measure(matcher, line)
                    _eprint(f"[DEBUG] {line} | head={o.head_count} tail={o.tail_count} rest={o.rest}")
                else:
                    exact = matcher.matches_exactly(args.root, line)
                    _eprint(f"[DEBUG] {'+' if exact else '-'} {line}")
    except (GrammarError, GrammarCycle, OSError) as e:
        return _report_error(e)
    return 0


def cmd_match(args) -> int:
    from .grammar.loader import load_input_text
    from .grammar.parser import parse_grammar
    from .match.engine import Matcher
    try:
        grammar = parse_grammar(load_input_text(args.file))
        if args.text is not None:
            lines: List[str] = [args.text]
        else:
            lines = load_input_text(args.input).splitlines()

        matcher = Matcher(grammar)
        hits = 0
        for line in lines:
            ok, end = matcher.match(args.rule, line, 0)
            exact = ok and end == len(line)
            hits += exact
            if exact:
                verdict = "match"
            elif ok:
                verdict = f"prefix {end}/{len(line)}"
            else:
                verdict = "no match"
            print(f"{line!r}: {verdict}")
        if args.debug:
            _eprint(f"[DEBUG] rule={args.rule} matched {hits}/{len(lines)}")
        return 0
    except (GrammarError, GrammarCycle, OSError) as e:
        return _report_error(e)


def cmd_fmt(args) -> int:
    from .grammar.loader import load_input_text
    from .grammar.parser import parse_grammar
    from .grammar.printer import format_grammar
    try:
        grammar = parse_grammar(load_input_text(args.file))
    except (GrammarError, OSError) as e:
        return _report_error(e)

    src = format_grammar(grammar)
    if args.output is None:
        sys.stdout.write(src)
        return 0

    out_path = pathlib.Path(args.output)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(src, encoding="utf-8")
    print(f"[EMIT] rules={len(grammar)} -> {out_path}")
    return 0


# ------------------------------
# 엔트리포인트
# ------------------------------

def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="rulec", description="rulematch message-rule CLI")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_check = sub.add_parser("check", help="규칙을 파싱하고 끊어진 참조/순환을 검사합니다")
    p_check.add_argument("file", help="입력 파일(규칙 + 빈 줄 + 메시지)")
    p_check.add_argument("--root", type=int, default=None, help="이 규칙에서 도달 가능한 규칙만 검사")
    p_check.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_check.set_defaults(func=cmd_check)

    p_solve = sub.add_parser("solve", help="메시지 중 규칙에 맞는 개수를 셉니다")
    p_solve.add_argument("file", help="입력 파일(규칙 + 빈 줄 + 메시지)")
    p_solve.add_argument("--root", type=int, default=0, help="정확 매칭에 쓸 규칙(기본 0)")
    p_solve.add_argument("--head", type=int, default=42, help="반복 휴리스틱의 앞쪽 규칙(기본 42)")
    p_solve.add_argument("--tail", type=int, default=31, help="반복 휴리스틱의 뒤쪽 규칙(기본 31)")
    p_solve.add_argument("--mode", choices=["exact", "repeat", "both"], default="both", help="계산할 답")
    p_solve.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_solve.set_defaults(func=cmd_solve)

    p_match = sub.add_parser("match", help="규칙 하나로 텍스트를 매칭합니다")
    p_match.add_argument("file", help="규칙 파일(빈 줄 이후는 무시)")
    p_match.add_argument("--rule", type=int, default=0, help="매칭할 규칙 id(기본 0)")
    src_group = p_match.add_mutually_exclusive_group(required=True)
    src_group.add_argument("--text", help="직접 입력 텍스트")
    src_group.add_argument("--input", help="한 줄에 메시지 하나인 파일 경로")
    p_match.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_match.set_defaults(func=cmd_match)

    p_fmt = sub.add_parser("fmt", help="규칙 섹션을 표준 형태로 다시 씁니다")
    p_fmt.add_argument("file", help="입력 파일")
    p_fmt.add_argument("-o", "--output", help="출력 파일 경로(미지정시 stdout)")
    p_fmt.set_defaults(func=cmd_fmt)

    args = ap.parse_args(argv)
    return int(args.func(args))

if __name__ == "__main__":
    sys.exit(main())
