from pathlib import Path

import pytest

from rulematch.grammar.loader import load_input_text
from rulematch.grammar.parser import parse_grammar

DATA = Path(__file__).parent / "grammar_test"


@pytest.fixture
def simple_path() -> Path:
    return DATA / "simple.txt"


@pytest.fixture
def looping_path() -> Path:
    return DATA / "looping.txt"


@pytest.fixture
def simple_grammar():
    return parse_grammar(load_input_text(str(DATA / "simple.txt")))


@pytest.fixture
def looping_text() -> str:
    return load_input_text(str(DATA / "looping.txt"))
