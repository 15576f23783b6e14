"""Grammar → 규칙 텍스트 재직렬화. parse_grammar(format_grammar(g)) == g"""

from __future__ import annotations
import json

from .ast import Alternation, Body, Grammar, Sequence, Terminal


def _ids(ids) -> str:
    return " ".join(str(i) for i in ids)


def format_body(body: Body) -> str:
    if isinstance(body, Terminal):
        # 비ASCII 문자는 그대로 둔다. 이스케이프되는 건 '"', '\\', 제어문자뿐이고 literal_eval이 한 글자로 되돌린다
        return json.dumps(body.char, ensure_ascii=False)
    if isinstance(body, Sequence):
        return _ids(body.ids)
    if isinstance(body, Alternation):
        return f"{_ids(body.first)} | {_ids(body.second)}"
    raise AssertionError(f"unknown rule body: {body!r}")


def format_rule(rule_id: int, body: Body) -> str:
    return f"{rule_id}: {format_body(body)}"


def format_grammar(g: Grammar) -> str:
    """파싱 순서대로 한 줄에 규칙 하나. 마지막 줄도 개행으로 끝난다."""
    return "".join(format_rule(i, body) + "\n" for i, body in g.rules.items())
