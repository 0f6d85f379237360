"""Lemma lookup and concept membership for the term compiler and matcher.

`Lexicon` is the reference lexical/concept adapter. Lemmas come from an
explicit table first, then from the spaCy pipeline when one is loaded,
and otherwise fall back to the lowercased word. Concepts are kept in
memory and can be persisted through the concept ledger.
"""

# Ghost - lexicon.py
# Copyright (C) 2026 The Ghost Contributors

import logging
import re

from ghost import concept_ledger
from ghost.config import CONCEPT_DB_PATH, CONCEPT_SENTINEL
from ghost.model_loader import load_nlp_model
from ghost.terms import MEMBER_KINDS, Concept, Lemma, Phrase, Word

logger = logging.getLogger(__name__)

TOKEN_RE = re.compile(r"[\w']+")


def term_length(term) -> int:
    """Number of words a member term spans."""
    if isinstance(term, Phrase):
        return len(term.tokens())
    return 1


class Lexicon:
    def __init__(self, nlp=None, lemmas: dict[str, str] | None = None):
        self.nlp = nlp
        self._table = {k.lower(): v.lower() for k, v in (lemmas or {}).items()}
        self._cache: dict[str, str] = {}
        self._concepts: dict[str, list] = {}

    @classmethod
    def from_model(cls, lemmas: dict[str, str] | None = None) -> "Lexicon":
        """Build a lexicon backed by the configured spaCy pipeline."""
        return cls(nlp=load_nlp_model(), lemmas=lemmas)

    # --- Lemmas ---

    def lemma_of(self, word: str) -> str:
        key = (word or "").strip().lower()
        if key in self._cache:
            return self._cache[key]

        lemma = self._table.get(key)
        if lemma is None and self.nlp is not None and key:
            doc = self.nlp(key)
            if len(doc) == 1:
                lemma = doc[0].lemma_.lower()
            elif len(doc) > 1:
                lemma = " ".join(t.lemma_.lower() for t in doc)
        if not lemma:
            lemma = key

        self._cache[key] = lemma
        return lemma

    def is_canonical(self, word: str) -> bool:
        return self.lemma_of(word) == (word or "").strip().lower()

    def canonical_text(self, text: str) -> str:
        """The lemma rendering of a whole utterance."""
        return " ".join(self.lemma_of(tok) for tok in TOKEN_RE.findall(text or ""))

    # --- Concepts ---

    def parse_member(self, member):
        """Turn one concept member string into a member term."""
        if isinstance(member, MEMBER_KINDS):
            return member
        text = str(member).strip()
        if text.startswith(CONCEPT_SENTINEL):
            return Concept(text[len(CONCEPT_SENTINEL):])
        if len(text.split()) > 1:
            return Phrase(" ".join(text.split()))
        if self.is_canonical(text):
            return Lemma(text)
        return Word(text)

    def define_concept(self, name: str, members) -> list:
        parsed = [self.parse_member(m) for m in members]
        self._concepts[name] = parsed
        logger.debug("Defined concept ~%s with %d member(s)", name, len(parsed))
        return parsed

    def concepts(self) -> dict[str, list]:
        return {name: list(members) for name, members in self._concepts.items()}

    def members_of(self, concept) -> list:
        name = concept.name if isinstance(concept, Concept) else str(concept)
        return list(self._concepts.get(name, []))

    def resolve_members(self, concept) -> list:
        """All non-concept members reachable from `concept`, in definition order."""
        resolved: list = []
        seen_concepts: set[str] = set()

        def walk(name):
            if name in seen_concepts:
                return
            seen_concepts.add(name)
            for member in self._concepts.get(name, []):
                if isinstance(member, Concept):
                    walk(member.name)
                elif member not in resolved:
                    resolved.append(member)

        walk(concept.name if isinstance(concept, Concept) else str(concept))
        return resolved

    def flatten_terms(self, terms) -> list:
        flat: list = []
        for term in terms:
            members = self.resolve_members(term) if isinstance(term, Concept) else [term]
            for member in members:
                if member not in flat:
                    flat.append(member)
        return flat

    def cardinality(self, concept_or_terms) -> int:
        """Longest member, in words, of a concept or a list of terms."""
        if isinstance(concept_or_terms, (Concept, str)):
            members = self.resolve_members(concept_or_terms)
        else:
            members = self.flatten_terms(concept_or_terms)
        return max((term_length(m) for m in members), default=0)

    # --- Persistence ---

    def persist(self, db_path: str = CONCEPT_DB_PATH) -> None:
        concept_ledger.initialize_database(db_path)
        for name, members in self._concepts.items():
            concept_ledger.save_concept(name, members, db_path)

    def load(self, db_path: str = CONCEPT_DB_PATH) -> int:
        concept_ledger.initialize_database(db_path)
        loaded = concept_ledger.load_concepts(db_path)
        self._concepts.update(loaded)
        logger.info("[Lexicon] Loaded %d concept(s) from %s", len(loaded), db_path)
        return len(loaded)
