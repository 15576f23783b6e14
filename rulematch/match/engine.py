# rulematch/match/engine.py
from __future__ import annotations
from typing import List, Optional, Set, Tuple

from ..grammar.ast import Alternation, Body, Grammar, Sequence, Terminal
from ..grammar.errors import GrammarCycle, RecursionDepthExceeded

# Greedy recursive-descent matcher:
# - A cursor is (text, pos); results are (ok, end). A failed match always
#   returns the position it started from, so callers never see partial input
#   consumption. NoMatch is that value, never an exception.
# - Alternation commits to the first alternative that succeeds and never
#   revisits the second one, even if a later sibling fails. This is exact for
#   unambiguous grammars (every rule of the message puzzle) and nothing more.
# - No memoization. Re-entering a rule at the same position means left
#   recursion, which would never terminate, so it raises GrammarCycle.
#   Right recursion nests once per consumed character; past the interpreter's
#   recursion limit it raises RecursionDepthExceeded (a GrammarCycle).
# - The grammar is passed in explicitly and never mutated.


class Matcher:
    def __init__(self, g: Grammar):
        self.g = g
        # rule applications currently being evaluated: (rule_id, pos)
        self._active: Set[Tuple[int, int]] = set()
        self._stack: List[Tuple[int, int]] = []

    # ---- Public entrypoints ----
    def match(self, rule_id: int, text: str, pos: int = 0) -> Tuple[bool, int]:
        """Match rule_id against a prefix of text[pos:]."""
        self._active.clear()
        self._stack.clear()
        try:
            return self._apply_rule(rule_id, text, pos, None)
        except RecursionError:
            raise RecursionDepthExceeded(rule_id, pos) from None

    def matches_exactly(self, rule_id: int, line: str) -> bool:
        """True iff rule_id consumes the whole line."""
        ok, end = self.match(rule_id, line, 0)
        return ok and end == len(line)

    def match_repeatedly(self, rule_id: int, text: str, pos: int = 0) -> Tuple[int, int]:
        """Apply rule_id back to back from pos until it fails.

        Returns (count, end). Stops as well on a match that does not advance,
        so the loop is bounded by the input length.
        """
        count = 0
        cur = pos
        while True:
            ok, end = self.match(rule_id, text, cur)
            if not ok or end == cur:
                break
            cur = end
            count += 1
        return count, cur

    # ---- Rule application ----
    def _apply_rule(self, rule_id: int, text: str, pos: int,
                    referrer: Optional[int]) -> Tuple[bool, int]:
        body = self.g.require_rule(rule_id, referrer)
        key = (rule_id, pos)
        if key in self._active:
            idx = self._stack.index(key)
            path = tuple(r for r, _ in self._stack[idx:]) + (rule_id,)
            raise GrammarCycle(path, pos)

        self._active.add(key)
        self._stack.append(key)
        try:
            return self._eval(rule_id, body, text, pos)
        finally:
            self._stack.pop()
            self._active.discard(key)

    def _eval(self, rule_id: int, body: Body, text: str, pos: int) -> Tuple[bool, int]:
        if isinstance(body, Terminal):
            return match_terminal(body.char, text, pos)

        if isinstance(body, Sequence):
            return self._match_seq(rule_id, body.ids, text, pos)

        if isinstance(body, Alternation):
            ok, end = self._match_seq(rule_id, body.first, text, pos)
            if ok:
                return True, end
            return self._match_seq(rule_id, body.second, text, pos)

        raise AssertionError(f"unknown rule body: {body!r}")

    def _match_seq(self, rule_id: int, ids: Tuple[int, ...], text: str,
                   pos: int) -> Tuple[bool, int]:
        cur = pos
        for sub in ids:
            ok, end = self._apply_rule(sub, text, cur, rule_id)
            if not ok:
                return False, pos
            cur = end
        return True, cur


def match_terminal(char: str, text: str, pos: int) -> Tuple[bool, int]:
    """Consume one expected character. Fails without advancing, also at end of input."""
    if pos < len(text) and text[pos] == char:
        return True, pos + 1
    return False, pos


def matches_exactly(g: Grammar, rule_id: int, line: str) -> bool:
    return Matcher(g).matches_exactly(rule_id, line)


def match_repeatedly(g: Grammar, rule_id: int, text: str, pos: int = 0) -> Tuple[int, int]:
    return Matcher(g).match_repeatedly(rule_id, text, pos)
