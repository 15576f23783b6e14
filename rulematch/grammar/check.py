# rulematch/grammar/check.py
"""CLI `check`용 정적 검증.

매처는 참조를 lazy하게 조회하므로, 여기서는 실행 전에 한 번에
- 끊어진 참조(dangling reference)
- 참조 그래프의 순환(cycle)
을 모아 보고한다. 순환 자체는 오류로 던지지 않는다: 8/11 형태의 자기참조 규칙은
반복 휴리스틱 쪽에서 다루기 때문.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from .ast import Grammar, referenced_ids

_WHITE, _GRAY, _BLACK = 0, 1, 2


@dataclass
class CheckReport:
    """
    - dangling: (참조한 규칙, 없는 규칙) 목록
    - cycles  : 순환 경로 목록. 각 경로는 시작 id로 끝난다(예: (8, 8), (0, 11, 0))
    - checked : 검사한 규칙 수(root 지정 시 도달 가능한 규칙만)
    - missing_root: root로 지정했지만 정의되지 않은 규칙 id
    """
    dangling: List[Tuple[int, int]] = field(default_factory=list)
    cycles: List[Tuple[int, ...]] = field(default_factory=list)
    checked: int = 0
    missing_root: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.missing_root is None and not self.dangling and not self.cycles

    def pretty(self) -> str:
        if self.ok:
            return "(no problems)"
        lines: List[str] = []
        if self.missing_root is not None:
            lines.append(f"root rule {self.missing_root} is not defined")
        for referrer, missing in self.dangling:
            lines.append(f"rule {referrer}: undefined rule {missing}")
        for path in self.cycles:
            lines.append("cycle: " + " -> ".join(str(i) for i in path))
        return "\n".join(lines)


def check_grammar(g: Grammar, root: Optional[int] = None) -> CheckReport:
    report = CheckReport()
    seen_dangling: Set[Tuple[int, int]] = set()
    color: Dict[int, int] = {}
    stack: List[int] = []

    def visit(rule_id: int) -> None:
        color[rule_id] = _GRAY
        stack.append(rule_id)
        for ref in referenced_ids(g.rules[rule_id]):
            if ref not in g.rules:
                if (rule_id, ref) not in seen_dangling:
                    seen_dangling.add((rule_id, ref))
                    report.dangling.append((rule_id, ref))
                continue
            state = color.get(ref, _WHITE)
            if state == _GRAY:
                idx = stack.index(ref)
                report.cycles.append(tuple(stack[idx:]) + (ref,))
            elif state == _WHITE:
                visit(ref)
        stack.pop()
        color[rule_id] = _BLACK

    if root is not None:
        if root not in g.rules:
            report.missing_root = root
            return report
        starts = [root]
    else:
        starts = g.ids()

    for rule_id in starts:
        if color.get(rule_id, _WHITE) == _WHITE:
            visit(rule_id)

    report.checked = len(color)
    return report
