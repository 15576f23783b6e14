# rulematch/match/runtime.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional

from ..grammar.ast import Grammar
from ..grammar.loader import load_input_text
from ..grammar.parser import parse_input
from .engine import Matcher
from .repetition import RepetitionPolicy


class Answer(NamedTuple):
    exact: int
    repeated: Optional[int]


@dataclass
class RuleProgram:
    """Parsed grammar plus the messages to check against it."""
    grammar: Grammar
    messages: List[str] = field(default_factory=list)

    @classmethod
    def from_source(cls, src: str) -> "RuleProgram":
        parsed = parse_input(src)
        return cls(parsed.grammar, parsed.messages)

    @classmethod
    def from_file(cls, path: str) -> "RuleProgram":
        return cls.from_source(load_input_text(path))


class RuleRunner:
    """Count the program's messages accepted by the exact matcher or the repetition policy.

    Every message is matched independently; the only shared state is the
    read-only grammar.
    """
    def __init__(self, program: RuleProgram):
        self.program = program

    def count_exact(self, root: int = 0) -> int:
        matcher = Matcher(self.program.grammar)
        return sum(1 for line in self.program.messages if matcher.matches_exactly(root, line))

    def count_repeated(self, policy: Optional[RepetitionPolicy] = None) -> int:
        policy = policy or RepetitionPolicy()
        matcher = Matcher(self.program.grammar)
        return sum(1 for line in self.program.messages if policy.accepts(matcher, line))

    def solve(self, root: int = 0, policy: Optional[RepetitionPolicy] = None) -> Answer:
        return Answer(self.count_exact(root), self.count_repeated(policy))
