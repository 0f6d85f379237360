"""Bind the runtime callables to one dialogue session.

The matching engine looks callables up by the names the compiled clauses
carry (`callables()`), or hands a clause plus its current bindings to
`evaluate()`. Action applications go through `perform()`.
"""

# Ghost - runtime.py
# Copyright (C) 2026 The Ghost Contributors

import logging
from typing import Any

from ghost import actions, matcher
from ghost.pattern import (
    CHOICES_PREDICATE,
    CONCEPT_PREDICATE,
    NEGATION_PREDICATE,
    RECORD_GROUNDINGS,
    Application,
    ChoicesCheck,
    ConceptCheck,
    GlobNode,
    NegationCheck,
    RecordGroundings,
    VariableNode,
)
from ghost.state import DialogueAnchor, SessionStore, lemma_var, word_var

logger = logging.getLogger(__name__)


class GhostRuntime:
    def __init__(self, lexicon, store=None, anchor=None, say=actions.log_say, rng=None):
        self.lexicon = lexicon
        self.store = store if store is not None else SessionStore()
        self.anchor = anchor if anchor is not None else DialogueAnchor()
        self.say = say
        self.rng = rng

    # --- Match-time predicates ---

    def concept(self, concept_name, candidates) -> matcher.TruthValue:
        return matcher.is_concept_member_tv(concept_name, candidates, self.lexicon)

    def choices(self, terms, candidates) -> matcher.TruthValue:
        return matcher.is_choice_member_tv(terms, candidates, self.lexicon)

    def negation(self, terms) -> matcher.TruthValue:
        return matcher.negation_holds_tv(terms, self.anchor, self.lexicon)

    def record_groundings(self, word_var_id, words, lemma_var_id, lemmas) -> matcher.TruthValue:
        self.store.record_grounding(word_var_id, words, lemma_var_id, lemmas)
        return matcher.TRUE_TV

    # --- Action-time schemas ---

    def pick_action(self, *alternatives):
        if len(alternatives) == 1 and isinstance(alternatives[0], (list, tuple)):
            alternatives = alternatives[0]
        return actions.select_action(alternatives, self.rng)

    def execute_action(self, *content) -> str | None:
        return actions.execute(content, self.anchor, self.say)

    def var_words(self, index: int):
        return self.store.read_word_grounding(word_var(index))

    def var_lemmas(self, index: int):
        return self.store.read_lemma_grounding(lemma_var(index))

    def callables(self) -> dict[str, Any]:
        return {
            CONCEPT_PREDICATE: self.concept,
            CHOICES_PREDICATE: self.choices,
            NEGATION_PREDICATE: self.negation,
            RECORD_GROUNDINGS: self.record_groundings,
            "ghost-pick-action": self.pick_action,
            "ghost-execute-action": self.execute_action,
            "ghost-get-var-words": self.var_words,
            "ghost-get-var-lemmas": self.var_lemmas,
            "ghost-set-user-variable": self.store.set_user_variable,
            "ghost-get-user-variable": self.store.get_user_variable,
            "ghost-user-variable-exist?": self.store.user_variable_exists,
            "ghost-user-variable-equal?": self.store.user_variable_equals,
        }

    # --- Clause evaluation ---

    @staticmethod
    def _resolve(refs, bindings) -> tuple:
        values: list = []
        for ref in refs:
            if isinstance(ref, (VariableNode, GlobNode)):
                bound = bindings.get(ref.name, ())
                if isinstance(bound, (list, tuple)):
                    values.extend(bound)
                else:
                    values.append(bound)
            else:
                values.append(ref)
        return tuple(values)

    def evaluate(self, clause, bindings: dict | None = None):
        """Evaluate one callable clause against the engine's tentative bindings."""
        bindings = bindings or {}
        if isinstance(clause, ConceptCheck):
            return self.concept(clause.concept, bindings.get(clause.glob.name, ()))
        if isinstance(clause, ChoicesCheck):
            return self.choices(clause.terms, bindings.get(clause.glob.name, ()))
        if isinstance(clause, NegationCheck):
            return self.negation(clause.terms)
        if isinstance(clause, RecordGroundings):
            logger.debug("Recording grounding for %s", clause.word_var)
            return self.record_groundings(
                clause.word_var,
                self._resolve(clause.words, bindings),
                clause.lemma_var,
                self._resolve(clause.lemmas, bindings),
            )
        if isinstance(clause, Application):
            return self.perform(clause)
        raise TypeError(
            f"{type(clause).__name__} is matched structurally by the engine, not called"
        )

    def perform(self, application: Application):
        """Run an application whose name this runtime provides."""
        func = self.callables().get(application.name)
        if func is None:
            raise KeyError(f"No runtime callable named '{application.name}'")
        if application.wrapped:
            return func(*application.argument)
        return func(application.argument)
