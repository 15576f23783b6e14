# rulematch/grammar/ast.py
"""Rule AST
- Terminal   : "a"        (리터럴 문자 1개)
- Sequence   : 4 1 5      (규칙 id 연접)
- Alternation: 2 3 | 3 2  (정확히 두 개의 시퀀스, 앞쪽 우선)
"""

from __future__     import annotations
from dataclasses    import dataclass, field
from typing         import Dict, Iterator, List, Optional, Tuple, Union

from .errors        import DanglingReference

@dataclass(frozen=True)
class Span:
    start: int
    end: int
    line: int
    col: int

@dataclass(frozen=True)
class Terminal:
    char: str   # 길이 1

@dataclass(frozen=True)
class Sequence:
    ids: Tuple[int, ...]

@dataclass(frozen=True)
class Alternation:
    """
    두 대안 중 선택.
    - first : 먼저 시도하는 시퀀스
    - second: first가 실패했을 때만 시도
    """
    first: Tuple[int, ...]
    second: Tuple[int, ...]


Body = Union[Terminal, Sequence, Alternation]


def referenced_ids(body: Body) -> Tuple[int, ...]:
    """body가 참조하는 규칙 id들(등장 순서, 중복 포함)."""
    if isinstance(body, Terminal):
        return ()
    if isinstance(body, Sequence):
        return body.ids
    return body.first + body.second


@dataclass(frozen=True)
class Grammar:
    """
    규칙 id -> Body 매핑. 한 번 만들어지면 읽기 전용으로만 쓴다.
    - rules: 파싱 순서를 보존하는 dict
    - spans: 디버그/리포트용 원문 위치(동등성 비교에서 제외)
    """
    rules: Dict[int, Body]
    spans: Dict[int, Span] = field(default_factory=dict, compare=False, repr=False)

    def require_rule(self, rule_id: int, referrer: Optional[int] = None) -> Body:
        try:
            return self.rules[rule_id]
        except KeyError:
            raise DanglingReference(rule_id, referrer) from None

    def ids(self) -> List[int]:
        return list(self.rules)

    def references(self, rule_id: int) -> Tuple[int, ...]:
        return referenced_ids(self.require_rule(rule_id))

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self.rules

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self) -> Iterator[int]:
        return iter(self.rules)
