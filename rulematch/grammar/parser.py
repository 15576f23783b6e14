"""메시지 규칙 파서
- 규칙 한 줄: <id>: <body>
- body     : "c"                 (terminal)
           | id id ...           (sequence)
           | id ... | id ...     (alternation, 대안은 정확히 2개)
- 규칙 섹션은 첫 빈 줄에서 끝나고, 그 뒤 줄들은 검사할 메시지
"""

from __future__ import annotations
import regex as re
import ast as _pyast
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .ast import Alternation, Body, Grammar, Sequence, Span, Terminal
from .errors import MalformedGrammar
from .loader import split_sections

# ---- Lexer 토큰 ----
_TOKEN_SPEC = [
    ("WS",       r"[ \t\f]+"),
    ("NEWLINE",  r"\n"),
    ("INT",      r"[0-9]+"),
    ("COLON",    r":"),
    ("OR",       r"\|"),
    ("STRING",   r'"(?:\\.|[^"\\\n])*"'),
]
MASTER_RE = re.compile("|".join(f"(?P<{n}>{p})" for n, p in _TOKEN_SPEC))

@dataclass
class Tok:
    kind: str
    lexeme: str
    start: int
    end: int
    line: int
    col: int

def _scan(src: str) -> List[Tok]:
    """공백은 버리고 NEWLINE은 규칙 종료 표시로 남긴다."""
    toks: List[Tok] = []
    line = col = 1
    i = 0
    while i < len(src):
        m = MASTER_RE.match(src, i)
        if not m:
            snippet = _snippet_caret_at_pos(src, i)
            raise MalformedGrammar(f"Unexpected char {src[i]!r} at {line}:{col}\n{snippet}")
        kind = m.lastgroup or ""
        lex = m.group(0)
        if kind != "WS":
            toks.append(Tok(kind, lex, i, m.end(), line, col))
        if kind == "NEWLINE":
            line += 1
            col = 1
        else:
            col += len(lex)
        i = m.end()

    toks.append(Tok("EOF", "", len(src), len(src), line, col))
    return toks


# ---------- error handling utils ----------
def _line_bounds(src: str, pos: int) -> Tuple[int, int]:
    """pos가 속한 라인의 [시작, 끝) 범위"""
    start = src.rfind("\n", 0, pos)
    start = 0 if start == -1 else start + 1
    end = src.find("\n", pos)
    if end == -1:
        end = len(src)
    return start, end

def _snippet_caret_at_pos(src: str, pos: int) -> str:
    start, end = _line_bounds(src, pos)
    caret = " " * (pos - start) + "^"
    return f"{src[start:end]}\n{caret}"

# --- 토큰 스트림 ---
class _TS:
    def __init__(self, toks: List[Tok], src: str):
        self.toks = toks
        self.i = 0
        self.src = src

    def la(self) -> Tok:
        return self.toks[self.i]

    def error(self, tok: Tok, msg: str) -> MalformedGrammar:
        snippet = _snippet_caret_at_pos(self.src, tok.start)
        return MalformedGrammar(f"{msg} at {tok.line}:{tok.col}\n{snippet}")

    def eat(self, kind: str) -> Tok:
        t = self.la()
        if t.kind != kind:
            got = "EOF" if t.kind == "EOF" else f"{t.kind} {t.lexeme!r}"
            raise self.error(t, f"Expected {kind}, got {got}")
        self.i += 1
        return t

    def match(self, kind: str) -> Optional[Tok]:
        if self.la().kind == kind:
            return self.eat(kind)
        return None


def _parse_terminal(ts: _TS) -> Terminal:
    tok = ts.eat("STRING")
    try:
        text = _pyast.literal_eval(tok.lexeme)
    except (ValueError, SyntaxError):
        raise ts.error(tok, f"Invalid terminal literal {tok.lexeme}") from None
    if len(text) != 1:
        raise ts.error(tok, f"Terminal must be exactly one character, got {tok.lexeme}")
    return Terminal(text)

def _parse_id_list(ts: _TS, what: str) -> Tuple[int, ...]:
    ids: List[int] = []
    while ts.la().kind == "INT":
        ids.append(int(ts.eat("INT").lexeme))
    if not ids:
        raise ts.error(ts.la(), f"Expected rule id in {what}")
    return tuple(ids)

def _parse_body(ts: _TS) -> Body:
    if ts.la().kind == "STRING":
        return _parse_terminal(ts)
    first = _parse_id_list(ts, "sequence")
    if ts.match("OR") is None:
        return Sequence(first)
    second = _parse_id_list(ts, "second alternative")
    if ts.la().kind == "OR":
        raise ts.error(ts.la(), "Only two alternatives are allowed")
    return Alternation(first, second)


def parse_grammar(src: str) -> Grammar:
    """
    규칙 섹션을 읽어 Grammar를 만든다. 첫 빈 줄 이후는 무시한다.
    형태가 맞지 않는 줄은 MalformedGrammar. 참조 검사는 하지 않는다(lazy).
    """
    rules_text, _ = split_sections(src)
    ts = _TS(_scan(rules_text), rules_text)
    rules: Dict[int, Body] = {}
    spans: Dict[int, Span] = {}

    while ts.la().kind != "EOF":
        if ts.match("NEWLINE"):
            continue
        id_tok = ts.eat("INT")
        rule_id = int(id_tok.lexeme)
        ts.eat("COLON")
        body = _parse_body(ts)
        last = ts.toks[ts.i - 1]
        if ts.la().kind not in ("NEWLINE", "EOF"):
            t = ts.la()
            raise ts.error(t, f"Unexpected {t.kind} {t.lexeme!r} after rule {rule_id}")
        if rule_id in rules:
            raise ts.error(id_tok, f"Duplicate rule {rule_id}")
        rules[rule_id] = body
        spans[rule_id] = Span(id_tok.start, last.end, id_tok.line, id_tok.col)

    return Grammar(rules=rules, spans=spans)


@dataclass
class ParsedInput:
    grammar: Grammar
    messages: List[str] = field(default_factory=list)


def parse_input(src: str) -> ParsedInput:
    """규칙 섹션 + 빈 줄 + 메시지 형태의 전체 입력을 파싱."""
    _, messages = split_sections(src)
    return ParsedInput(grammar=parse_grammar(src), messages=messages)
