"""Repetition-counting heuristic and the sample answers."""

import pytest

from rulematch.grammar.parser import parse_grammar
from rulematch.match.engine import Matcher
from rulematch.match.repetition import RepetitionOutcome, RepetitionPolicy
from rulematch.match.runtime import Answer, RuleProgram, RuleRunner

TOY = '0: 8 11\n8: 42\n11: 42 31\n42: "a"\n31: "b"\n'


class TestPolicy:

    @pytest.mark.parametrize("line, expected", [
        ("aab", True),
        ("aaab", True),
        ("aaabb", True),
        ("ab", False),          # needs at least two heads
        ("aabb", False),        # tails must be fewer than heads
        ("aa", False),          # needs at least one tail
        ("aaba", False),        # leftover input
        ("", False),
    ])
    def test_accepts(self, line, expected):
        m = Matcher(parse_grammar(TOY))
        assert RepetitionPolicy().accepts(m, line) is expected

    def test_measure(self):
        m = Matcher(parse_grammar(TOY))
        assert RepetitionPolicy().measure(m, "aaabbab") == RepetitionOutcome(3, 2, 2)

    def test_custom_rule_ids(self):
        g = parse_grammar('1: "x"\n2: "y"\n')
        policy = RepetitionPolicy(head=1, tail=2)
        assert policy.accepts(Matcher(g), "xxxy")
        assert not policy.accepts(Matcher(g), "xy")


class TestSampleAnswers:

    def test_simple_sample(self, simple_path):
        runner = RuleRunner(RuleProgram.from_file(str(simple_path)))
        assert runner.count_exact() == 2

    def test_looping_sample(self, looping_text):
        runner = RuleRunner(RuleProgram.from_source(looping_text))
        assert runner.count_exact(0) == 3
        assert runner.count_repeated() == 12
        assert runner.solve() == Answer(3, 12)

    def test_recursive_rules_do_not_loop(self, looping_text):
        text = looping_text.replace("\n8: 42\n", "\n8: 42 | 42 8\n")
        text = text.replace("\n11: 42 31\n", "\n11: 42 31 | 42 11 31\n")
        prog = RuleProgram.from_source(text)
        assert prog.grammar.references(8) == (42, 42, 8)
        # greedy alternation keeps only lines with exactly one more 42 than 31
        assert RuleRunner(prog).count_exact() == 6
        assert RuleRunner(prog).count_repeated() == 12
