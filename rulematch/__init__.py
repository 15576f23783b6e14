# rulematch/__init__.py
"""rulematch – numbered message-rule grammars and a greedy matcher for them."""

from .grammar.ast import Alternation, Grammar, Sequence, Terminal
from .grammar.errors import DanglingReference, GrammarCycle, GrammarError, MalformedGrammar, RecursionDepthExceeded
from .grammar.parser import parse_grammar, parse_input
from .grammar.printer import format_grammar
from .match import Matcher, RepetitionPolicy, RuleProgram, RuleRunner

__version__ = "0.1.0"
