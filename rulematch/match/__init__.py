# rulematch/match/__init__.py
"""Matching side of rulematch.

This package provides:
- A greedy recursive-descent matcher over a parsed Grammar
- The repetition-counting heuristic for the self-referential 8/11 rules
- A small runtime that counts accepted messages of an input file
"""

from .engine import Matcher, match_terminal, matches_exactly, match_repeatedly
from .repetition import RepetitionPolicy, RepetitionOutcome
from .runtime import Answer, RuleProgram, RuleRunner
