"""Runtime predicates the matching engine calls while grounding a rule.

- `is_concept_member` / `is_choice_member` approve or reject what a concept
  or choice glob tentatively bound.
- `negation_holds` inspects the whole current utterance, not the bound span.

All of them are total: anything that cannot be shown to match is a plain False.
"""

# Ghost - matcher.py
# Copyright (C) 2026 The Ghost Contributors

import logging
import re
from dataclasses import dataclass

from ghost.pattern import WordNode
from ghost.terms import Concept, Lemma, Phrase, Word

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TruthValue:
    strength: float
    confidence: float


TRUE_TV = TruthValue(1.0, 1.0)
FALSE_TV = TruthValue(0.0, 1.0)


def crisp(result: bool) -> TruthValue:
    """No partial credit: a match is 1, anything else is 0."""
    return TRUE_TV if result else FALSE_TV


def _text_of(value) -> str:
    if isinstance(value, (WordNode, Word, Lemma, Phrase)):
        return value.text
    return str(value)


def candidate_words(candidates) -> list[str]:
    """Lowercased words of whatever a glob was bound to."""
    if isinstance(candidates, (str, WordNode)):
        candidates = [candidates]
    words: list[str] = []
    for value in candidates:
        words.extend(_text_of(value).lower().split())
    return words


def _member_matches(member, words: list[str], lexicon) -> bool:
    if isinstance(member, Word):
        return len(words) == 1 and words[0] == member.text.lower()
    if isinstance(member, Lemma):
        return len(words) == 1 and lexicon.lemma_of(words[0]) == lexicon.lemma_of(
            member.text
        )
    if isinstance(member, Phrase):
        return words == member.text.lower().split()
    return False


def _any_member(members, candidates, lexicon) -> bool:
    words = candidate_words(candidates)
    if not words:
        return False
    return any(_member_matches(m, words, lexicon) for m in members)


def is_concept_member(concept_name, candidates, lexicon) -> bool:
    """Whether the whole candidate sequence is one member of the concept's closure."""
    members = lexicon.resolve_members(concept_name)
    result = _any_member(members, candidates, lexicon)
    logger.debug("Concept ~%s vs %r -> %s", concept_name, candidates, result)
    return result


def is_choice_member(choices, candidates, lexicon) -> bool:
    members = lexicon.flatten_terms(choices)
    result = _any_member(members, candidates, lexicon)
    logger.debug("Choices vs %r -> %s", candidates, result)
    return result


def _contains(text: str, fragment: str) -> bool:
    tokens = fragment.split()
    if not tokens or not text:
        return False
    pattern = r"\b" + r"\s+".join(re.escape(t) for t in tokens) + r"\b"
    return re.search(pattern, text, re.IGNORECASE) is not None


def _occurs(term, raw: str, canonical: str, lexicon) -> bool:
    if isinstance(term, Concept):
        return any(
            _occurs(m, raw, canonical, lexicon)
            for m in lexicon.resolve_members(term)
        )
    text = _text_of(term)
    return _contains(raw, text) or _contains(canonical, lexicon.canonical_text(text))


def negation_holds(terms, anchor, lexicon) -> bool:
    """True only if none of `terms` appears anywhere in the current utterance.

    Each term counts verbatim in the raw utterance or, in canonical form, in
    its lemma rendering. Concepts count through their members.
    """
    raw = anchor.utterance or ""
    canonical = lexicon.canonical_text(raw)
    for term in terms:
        if _occurs(term, raw, canonical, lexicon):
            logger.debug("Negation blocked by %r in %r", term, raw)
            return False
    return True


def is_concept_member_tv(concept_name, candidates, lexicon) -> TruthValue:
    return crisp(is_concept_member(concept_name, candidates, lexicon))


def is_choice_member_tv(choices, candidates, lexicon) -> TruthValue:
    return crisp(is_choice_member(choices, candidates, lexicon))


def negation_holds_tv(terms, anchor, lexicon) -> TruthValue:
    return crisp(negation_holds(terms, anchor, lexicon))
