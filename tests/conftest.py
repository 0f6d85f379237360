import pytest

from ghost.lexicon import Lexicon
from ghost.state import DialogueAnchor, SessionStore

LEMMAS = {
    "cats": "cat",
    "dogs": "dog",
    "ran": "run",
    "running": "run",
    "loves": "love",
    "was": "be",
    "is": "be",
    "mice": "mouse",
}


@pytest.fixture
def lexicon():
    """A lexicon with a fixed lemma table, so no spaCy model is needed."""
    lex = Lexicon(lemmas=LEMMAS)
    lex.define_concept("animal", ["cat", "dog", "guinea pig", "~pet"])
    lex.define_concept("pet", ["hamster", "goldfish"])
    return lex


@pytest.fixture
def store():
    return SessionStore()


@pytest.fixture
def anchor():
    return DialogueAnchor()
