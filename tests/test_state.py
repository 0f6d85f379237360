"""Tests for the grounding recorder, user variables and dialogue anchor."""

from ghost.state import EMPTY, DialogueAnchor, lemma_var, word_var


def test_grounding_round_trip(store):
    assert store.read_word_grounding("v") == EMPTY
    assert store.read_lemma_grounding("lv") == EMPTY

    assert store.record_grounding("v", "cat", "lv", "cat") is True

    assert store.read_word_grounding("v") == "cat"
    assert store.read_lemma_grounding("lv") == "cat"


def test_later_recording_overwrites(store):
    store.record_grounding(word_var(1), "cats", lemma_var(1), "cat")
    store.record_grounding(word_var(1), "dogs", lemma_var(1), "dog")

    assert store.read_word_grounding(word_var(1)) == "dogs"
    assert store.read_lemma_grounding(lemma_var(1)) == "dog"


def test_groundings_persist_until_cleared(store):
    store.record_grounding("v", "cat", "lv", "cat")
    # An abandoned attempt leaves its writes behind.
    store.record_grounding("w", "stale", "lw", "stale")
    assert store.read_word_grounding("w") == "stale"

    store.clear_groundings()
    assert store.read_word_grounding("v") == EMPTY
    assert store.read_lemma_grounding("lw") == EMPTY


def test_user_variables(store):
    assert store.get_user_variable("name") == EMPTY
    assert not store.user_variable_exists("name")
    assert not store.user_variable_equals("name", "Sam")

    assert store.set_user_variable("name", "Sam") is True

    assert store.get_user_variable("name") == "Sam"
    assert store.user_variable_exists("name")
    assert store.user_variable_equals("name", "Sam")
    assert not store.user_variable_equals("name", "Alex")


def test_user_variables_survive_grounding_clears(store):
    store.set_user_variable("mood", ("happy",))
    store.clear_groundings()
    assert store.get_user_variable("mood") == ("happy",)
    assert store.user_variables() == {"mood": ("happy",)}


def test_snapshot_and_restore(store):
    store.record_grounding("v", "cat", "lv", "cat")
    snap = store.snapshot()

    store.record_grounding("v", "dog", "lv", "dog")
    store.set_user_variable("x", 1)
    store.restore(snap)

    assert store.read_word_grounding("v") == "cat"
    assert not store.user_variable_exists("x")


def test_anchor_reset_writes_default_marker():
    anchor = DialogueAnchor(default_state="Default")
    anchor.set_utterance("hello there")
    anchor.state = "Greeting"

    anchor.reset()

    assert anchor.state == "Default"
    assert anchor.utterance == "hello there"
    anchor.set_utterance(None)
    assert anchor.utterance == ""
