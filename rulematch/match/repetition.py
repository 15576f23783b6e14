# rulematch/match/repetition.py
from __future__ import annotations
from dataclasses import dataclass

from .engine import Matcher

# Counting heuristic for the self-referential variant of the message grammar:
#
#     0: 8 11
#     8: 42 | 42 8
#     11: 42 31 | 42 11 31
#
# which accepts 42{n} 31{m} with n > m >= 1. Instead of expanding the
# recursion, the line is consumed by as many back-to-back 42 matches as
# possible, then as many 31 matches as possible, and the two counts are
# compared. This is only valid for grammars of exactly this shape where no
# chunk matches both head and tail; the shape is assumed, not verified.


@dataclass(frozen=True)
class RepetitionOutcome:
    head_count: int
    tail_count: int
    rest: int       # characters left unconsumed


@dataclass(frozen=True)
class RepetitionPolicy:
    head: int = 42
    tail: int = 31

    def measure(self, matcher: Matcher, line: str) -> RepetitionOutcome:
        heads, pos = matcher.match_repeatedly(self.head, line, 0)
        tails, pos = matcher.match_repeatedly(self.tail, line, pos)
        return RepetitionOutcome(heads, tails, len(line) - pos)

    def accepts(self, matcher: Matcher, line: str) -> bool:
        o = self.measure(matcher, line)
        return o.head_count > 1 and 0 < o.tail_count < o.head_count and o.rest == 0
