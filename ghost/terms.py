"""Compile dialogue-pattern terms into pattern fragments.

A rule's context is written as a list of terms: literal words, lemmas,
phrases, concepts, choice sets, negations, wildcards, bound variables and
named functions. `compile_term` turns each into a `PatternFragment` the
matching engine can ground against a sentence.

The lexicon passed in is any object with the adapter contract:
`lemma_of(word)`, `cardinality(concept_or_terms)` and `flatten_terms(terms)`.
"""

# Ghost - terms.py
# Copyright (C) 2026 The Ghost Contributors

import itertools
import re
from dataclasses import dataclass
from typing import Any

from ghost.pattern import (
    WORD_INSTANCE_NODE,
    WORD_NODE,
    UNBOUNDED,
    Application,
    ChoicesCheck,
    ConceptCheck,
    Declaration,
    GlobNode,
    Interval,
    LemmaLink,
    NegationCheck,
    PatternFragment,
    RecordGroundings,
    ReferenceLink,
    VariableNode,
    WordInSentence,
    WordNode,
    apply_arguments,
)
from ghost.state import lemma_var, word_var


@dataclass(frozen=True)
class Word:
    """Matched literally."""

    text: str


@dataclass(frozen=True)
class Lemma:
    """Matches any surface word that reduces to the lemma of `text`."""

    text: str


@dataclass(frozen=True)
class Phrase:
    text: str

    def tokens(self) -> list[str]:
        return self.text.split()


@dataclass(frozen=True)
class Concept:
    name: str


@dataclass(frozen=True)
class Choices:
    terms: tuple


@dataclass(frozen=True)
class Negation:
    terms: tuple


@dataclass(frozen=True)
class Wildcard:
    lower: int = 0
    upper: int = UNBOUNDED


@dataclass(frozen=True)
class Variable:
    """Rule variable `index`, grounded by whatever `term` matches."""

    index: int
    term: Any


@dataclass(frozen=True)
class ContextFunction:
    name: str
    args: tuple = ()


@dataclass(frozen=True)
class ActionFunction:
    name: str
    args: tuple = ()


Term = (
    Word
    | Lemma
    | Phrase
    | Concept
    | Choices
    | Negation
    | Wildcard
    | Variable
    | ContextFunction
    | ActionFunction
)

# Kinds that may appear as members of a concept, a choice set or a negation.
MEMBER_KINDS = (Word, Lemma, Phrase, Concept)


class VariableNamer:
    """Hands out variable names that never repeat within one compilation."""

    def __init__(self, prefix: str = "$"):
        self.prefix = prefix
        self._counter = itertools.count(1)

    def fresh(self, stem: str, lemma: bool = False) -> str:
        kind = "L" if lemma else "W"
        stem = re.sub(r"\s+", "_", stem.strip()) or "glob"
        return f"{self.prefix}{kind}-{stem}-{next(self._counter)}"


def _glob_pair(namer, stem, interval):
    word_glob = GlobNode(namer.fresh(stem))
    lemma_glob = GlobNode(namer.fresh(stem, lemma=True))
    declarations = (
        Declaration(word_glob, (WORD_NODE,), interval),
        Declaration(lemma_glob, (WORD_NODE,), interval),
    )
    return word_glob, lemma_glob, declarations


def compile_word(text: str, lexicon, namer: VariableNamer) -> PatternFragment:
    instance = VariableNode(namer.fresh(text))
    word = WordNode(text)
    return PatternFragment(
        declarations=(Declaration(instance, (WORD_INSTANCE_NODE,)),),
        clauses=(WordInSentence(instance), ReferenceLink(instance, word)),
        words=(word,),
        lemmas=(WordNode(lexicon.lemma_of(text)),),
    )


def compile_lemma(text: str, lexicon, namer: VariableNamer) -> PatternFragment:
    lemma = WordNode(lexicon.lemma_of(text))
    surface = VariableNode(namer.fresh(text, lemma=True))
    instance = VariableNode(namer.fresh(text))
    return PatternFragment(
        declarations=(
            Declaration(surface, (WORD_NODE,)),
            Declaration(instance, (WORD_INSTANCE_NODE,)),
        ),
        clauses=(
            WordInSentence(instance),
            ReferenceLink(instance, surface),
            LemmaLink(instance, lemma),
        ),
        words=(surface,),
        lemmas=(lemma,),
    )


def compile_phrase(text: str, lexicon, namer: VariableNamer) -> PatternFragment:
    return PatternFragment.concat(
        compile_word(token, lexicon, namer) for token in text.split()
    )


def compile_concept(name: str, lexicon, namer: VariableNamer) -> PatternFragment:
    interval = Interval(1, lexicon.cardinality(Concept(name)))
    word_glob, lemma_glob, declarations = _glob_pair(namer, name, interval)
    return PatternFragment(
        declarations=declarations,
        clauses=(ConceptCheck(name, word_glob),),
        words=(word_glob,),
        lemmas=(lemma_glob,),
    )


def compile_choices(terms, lexicon, namer: VariableNamer) -> PatternFragment:
    terms = tuple(terms)
    interval = Interval(1, lexicon.cardinality(terms))
    word_glob, lemma_glob, declarations = _glob_pair(namer, "choices", interval)
    return PatternFragment(
        declarations=declarations,
        clauses=(ChoicesCheck(tuple(lexicon.flatten_terms(terms)), word_glob),),
        words=(word_glob,),
        lemmas=(lemma_glob,),
    )


def compile_negation(terms) -> PatternFragment:
    return PatternFragment(clauses=(NegationCheck(tuple(terms)),))


def compile_wildcard(lower: int, upper: int, namer: VariableNamer) -> PatternFragment:
    word_glob, lemma_glob, declarations = _glob_pair(
        namer, "wildcard", Interval(lower, upper)
    )
    return PatternFragment(
        declarations=declarations,
        words=(word_glob,),
        lemmas=(lemma_glob,),
    )


def record_fragment(index: int, words, lemmas) -> PatternFragment:
    """The clause recording what rule variable `index` was grounded to."""
    return PatternFragment(
        clauses=(
            RecordGroundings(
                word_var(index), tuple(words), lemma_var(index), tuple(lemmas)
            ),
        ),
    )


def compile_variable(variable: Variable, lexicon, namer) -> PatternFragment:
    inner = compile_term(variable.term, lexicon, namer)
    return inner + record_fragment(variable.index, inner.words, inner.lemmas)


def compile_context_function(term: ContextFunction) -> PatternFragment:
    return PatternFragment(clauses=(apply_arguments(term.name, term.args),))


def compile_action(term: ActionFunction) -> Application:
    """Action functions compile on the action side, straight to an application."""
    if not isinstance(term, ActionFunction):
        raise TypeError(f"Not an action function: {term!r}")
    return apply_arguments(term.name, term.args)


def compile_term(term, lexicon, namer: VariableNamer | None = None) -> PatternFragment:
    """Compile one context term.

    Pass the same `namer` to every term of a rule so generated names stay
    distinct across the whole context.
    """
    if namer is None:
        namer = VariableNamer()

    if isinstance(term, Word):
        return compile_word(term.text, lexicon, namer)
    if isinstance(term, Lemma):
        return compile_lemma(term.text, lexicon, namer)
    if isinstance(term, Phrase):
        return compile_phrase(term.text, lexicon, namer)
    if isinstance(term, Concept):
        return compile_concept(term.name, lexicon, namer)
    if isinstance(term, Choices):
        return compile_choices(term.terms, lexicon, namer)
    if isinstance(term, Negation):
        return compile_negation(term.terms)
    if isinstance(term, Wildcard):
        return compile_wildcard(term.lower, term.upper, namer)
    if isinstance(term, Variable):
        return compile_variable(term, lexicon, namer)
    if isinstance(term, ContextFunction):
        return compile_context_function(term)
    if isinstance(term, ActionFunction):
        raise TypeError(
            f"Action function '{term.name}' belongs in a rule's actions; use compile_action"
        )
    raise TypeError(f"Unknown term kind: {type(term).__name__}")


# --- JSON terms ---

_MEMBER_DECODERS = {
    "word": lambda d: Word(_require(d, "text")),
    "lemma": lambda d: Lemma(_require(d, "text")),
    "phrase": lambda d: Phrase(_require(d, "text")),
    "concept": lambda d: Concept(_require(d, "name")),
}


def _require(data: dict, key: str):
    if key not in data:
        raise ValueError(f"Term '{data.get('kind')}' is missing '{key}'")
    return data[key]


def _decode_args(raw) -> tuple:
    if not isinstance(raw, list):
        raw = [raw]
    return tuple(
        term_from_json(a) if isinstance(a, dict) and "kind" in a else a for a in raw
    )


def term_from_json(data: dict):
    """Build a term from `{"kind": ..., ...}` data as posted to the node."""
    if not isinstance(data, dict):
        raise ValueError(f"A term must be an object, got {type(data).__name__}")
    kind = str(data.get("kind", "")).lower()

    if kind in _MEMBER_DECODERS:
        return _MEMBER_DECODERS[kind](data)
    if kind == "choices":
        return Choices(tuple(term_from_json(t) for t in _require(data, "terms")))
    if kind == "negation":
        return Negation(tuple(term_from_json(t) for t in _require(data, "terms")))
    if kind == "wildcard":
        return Wildcard(int(data.get("lower", 0)), int(data.get("upper", UNBOUNDED)))
    if kind == "variable":
        return Variable(int(_require(data, "index")), term_from_json(_require(data, "term")))
    if kind == "context_function":
        return ContextFunction(_require(data, "name"), _decode_args(data.get("args", [])))
    if kind == "action_function":
        return ActionFunction(_require(data, "name"), _decode_args(data.get("args", [])))
    raise ValueError(f"Unknown term kind: {data.get('kind')!r}")
