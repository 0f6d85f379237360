"""Tests for evaluating compiled clauses against one session."""

import pytest

from ghost.matcher import FALSE_TV, TRUE_TV
from ghost.pattern import (
    CONCEPT_PREDICATE,
    NEGATION_PREDICATE,
    RECORD_GROUNDINGS,
    Application,
    WordInSentence,
    VariableNode,
    WordNode,
    apply_arguments,
)
from ghost.runtime import GhostRuntime
from ghost.terms import (
    Concept,
    ContextFunction,
    Negation,
    Variable,
    Word,
    compile_term,
)


@pytest.fixture
def runtime(lexicon):
    said = []
    rt = GhostRuntime(lexicon, say=said.append)
    rt.said = said
    return rt


def test_callables_are_named_like_the_clauses(runtime):
    funcs = runtime.callables()
    for name in (CONCEPT_PREDICATE, NEGATION_PREDICATE, RECORD_GROUNDINGS):
        assert callable(funcs[name])


def test_concept_clause_uses_glob_binding(runtime, lexicon):
    fragment = compile_term(Concept("animal"), lexicon)
    (clause,) = fragment.clauses
    glob = fragment.words[0]

    assert runtime.evaluate(clause, {glob.name: (WordNode("dogs"),)}) == TRUE_TV
    assert runtime.evaluate(clause, {glob.name: (WordNode("car"),)}) == FALSE_TV


def test_negation_clause_reads_the_anchor(runtime, lexicon):
    (clause,) = compile_term(Negation((Word("no"),)), lexicon).clauses

    runtime.anchor.set_utterance("no thanks")
    assert runtime.evaluate(clause) == FALSE_TV
    runtime.anchor.set_utterance("yes please")
    assert runtime.evaluate(clause) == TRUE_TV


def test_variable_records_resolved_groundings(runtime, lexicon):
    fragment = compile_term(Variable(1, Concept("animal")), lexicon)
    word_glob, lemma_glob = fragment.words[0], fragment.lemmas[0]
    bindings = {
        word_glob.name: (WordNode("guinea"), WordNode("pigs")),
        lemma_glob.name: (WordNode("guinea"), WordNode("pig")),
    }

    assert runtime.evaluate(fragment.clauses[-1], bindings) == TRUE_TV

    assert runtime.var_words(1) == (WordNode("guinea"), WordNode("pigs"))
    assert runtime.var_lemmas(1) == (WordNode("guinea"), WordNode("pig"))


def test_recorded_words_feed_the_action(runtime, lexicon):
    fragment = compile_term(Variable(2, Word("cats")), lexicon)
    instance = fragment.declarations[0].variable
    runtime.evaluate(fragment.clauses[-1], {instance.name: WordNode("cats")})

    said = runtime.execute_action(WordNode("I"), WordNode("like"), runtime.var_words(2))

    assert said == "I like cats"
    assert runtime.said == ["I like cats"]
    assert runtime.var_lemmas(2) == (WordNode("cat"),)


def test_user_variable_applications(runtime):
    runtime.perform(apply_arguments("ghost-set-user-variable", ("name", "Sam")))

    assert runtime.perform(Application("ghost-get-user-variable", "name")) == "Sam"
    assert runtime.perform(Application("ghost-user-variable-exist?", "name"))
    assert runtime.perform(apply_arguments("ghost-user-variable-equal?", ("name", "Sam")))
    assert not runtime.perform(apply_arguments("ghost-user-variable-equal?", ("name", "Al")))


def test_single_tuple_argument_is_passed_bare(runtime, lexicon):
    (clause,) = compile_term(
        ContextFunction("ghost-user-variable-exist?", (("a", "b"),)), lexicon
    ).clauses
    assert not clause.wrapped

    assert runtime.evaluate(clause) is False
    runtime.store.set_user_variable(("a", "b"), "pair")
    assert runtime.evaluate(clause) is True


def test_pick_action_accepts_a_list_or_arguments(runtime):
    assert runtime.pick_action(["only"]) == "only"
    assert runtime.perform(apply_arguments("ghost-pick-action", ("a", "a"))) == "a"


def test_structural_clauses_and_unknown_names(runtime):
    with pytest.raises(TypeError):
        runtime.evaluate(WordInSentence(VariableNode("$W-x-1")))
    with pytest.raises(KeyError):
        runtime.perform(Application("not-a-schema", ()))
