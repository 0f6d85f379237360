"""Tests for the lexicon and the concept ledger."""

import sqlite3

from ghost import concept_ledger
from ghost.lexicon import Lexicon
from ghost.model_loader import load_nlp_model
from ghost.terms import Concept, Lemma, Phrase, Word


def test_lemma_table_and_fallback(lexicon):
    assert lexicon.lemma_of("Cats") == "cat"
    assert lexicon.lemma_of("zebra") == "zebra"
    assert lexicon.is_canonical("cat")
    assert not lexicon.is_canonical("ran")
    assert lexicon.canonical_text("The cats ran, didn't they?") == "the cat run didn't they"


def test_parse_member_kinds(lexicon):
    assert lexicon.parse_member("~pet") == Concept("pet")
    assert lexicon.parse_member("guinea   pig") == Phrase("guinea pig")
    assert lexicon.parse_member("dog") == Lemma("dog")
    assert lexicon.parse_member("dogs") == Word("dogs")
    assert lexicon.parse_member(Word("x")) == Word("x")


def test_resolve_members_is_cycle_safe(lexicon):
    lexicon.define_concept("a", ["one", "~b"])
    lexicon.define_concept("b", ["two", "~a", "one"])

    assert lexicon.resolve_members("a") == [Lemma("one"), Lemma("two")]
    assert lexicon.members_of("b") == [Lemma("two"), Concept("a"), Lemma("one")]
    assert lexicon.members_of("missing") == []


def test_cardinality(lexicon):
    assert lexicon.cardinality("animal") == 2
    assert lexicon.cardinality(Concept("pet")) == 1
    assert lexicon.cardinality([Word("hi"), Phrase("how are you")]) == 3
    assert lexicon.cardinality("missing") == 0


def test_flatten_terms(lexicon):
    assert lexicon.flatten_terms([Word("hi"), Concept("pet"), Word("hi")]) == [
        Word("hi"),
        Lemma("hamster"),
        Lemma("goldfish"),
    ]


def test_persist_and_load_round_trip(lexicon, tmp_path):
    db_path = str(tmp_path / "concepts.db")
    lexicon.persist(db_path)

    fresh = Lexicon()
    assert fresh.load(db_path) == 2
    assert fresh.members_of("animal") == lexicon.members_of("animal")
    assert fresh.members_of("pet") == [Lemma("hamster"), Lemma("goldfish")]


def test_save_concept_replaces_definition(tmp_path):
    db_path = str(tmp_path / "concepts.db")
    concept_ledger.initialize_database(db_path)
    concept_ledger.save_concept("greeting", [Word("hi"), Phrase("good day")], db_path)
    concept_ledger.save_concept("greeting", [Word("hello")], db_path)

    assert concept_ledger.load_concepts(db_path) == {"greeting": [Word("hello")]}
    assert concept_ledger.delete_concept("greeting", db_path) == 1
    assert concept_ledger.load_concepts(db_path) == {}


def test_unknown_member_kind_is_skipped(tmp_path):
    db_path = str(tmp_path / "concepts.db")
    concept_ledger.initialize_database(db_path)
    with sqlite3.connect(db_path) as conn:
        conn.execute(
            "INSERT INTO concept_members (concept, position, kind, value) VALUES ('x', 0, 'emoji', ':)')"
        )
        conn.execute(
            "INSERT INTO concept_members (concept, position, kind, value) VALUES ('x', 1, 'word', 'hey')"
        )
        conn.commit()

    assert concept_ledger.load_concepts(db_path) == {"x": [Word("hey")]}


def test_missing_model_degrades_to_none():
    assert load_nlp_model("ghost_no_such_model_pkg") is None
    lex = Lexicon(nlp=None)
    assert lex.lemma_of("Running") == "running"
