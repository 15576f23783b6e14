# rulematch/grammar/errors.py
"""문법 관련 예외 계층.

- 문법 텍스트/참조 문제는 `SyntaxError` 계열(캐럿 스니펫 포함)
- 평가 중 구조적 문제(좌재귀 순환)는 `RuntimeError` 계열
- 매칭 실패(NoMatch)는 예외가 아니라 값 `(False, pos)` 이다
"""

from __future__ import annotations
from typing import Optional, Tuple


class GrammarError(SyntaxError):
    """rulematch 문법 오류의 공통 부모."""


class MalformedGrammar(GrammarError):
    """규칙 한 줄이 terminal / sequence / alternation 어느 형태로도 해석되지 않음."""


class DanglingReference(GrammarError):
    """존재하지 않는 규칙 id를 참조함. 매칭 중 처음 조회될 때(lazy) 발생한다."""

    def __init__(self, rule_id: int, referrer: Optional[int] = None):
        self.rule_id = rule_id
        self.referrer = referrer
        if referrer is None:
            msg = f"undefined rule {rule_id}"
        else:
            msg = f"undefined rule {rule_id} (referenced from rule {referrer})"
        super().__init__(msg)


class GrammarCycle(RuntimeError):
    """같은 커서 위치에서 규칙이 자기 자신으로 다시 들어옴(좌재귀)."""

    def __init__(self, path: Tuple[int, ...], pos: int):
        self.path = path
        self.pos = pos
        chain = " -> ".join(str(i) for i in path)
        super().__init__(f"left-recursive rule cycle at position {pos}: {chain}")


class RecursionDepthExceeded(GrammarCycle):
    """우재귀 규칙이 입력 길이만큼 중첩되어 파이썬 재귀 한도를 넘음."""

    def __init__(self, rule_id: int, pos: int):
        self.path = (rule_id,)
        self.pos = pos
        RuntimeError.__init__(
            self, f"rule {rule_id} recursed too deeply matching from position {pos}"
        )
