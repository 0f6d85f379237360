# Ghost - state.py
# Copyright (C) 2026 The Ghost Contributors
"""Session state shared by the runtime callables.

`SessionStore` keeps the grounding tables (original words and lemmas, keyed
by rule variable) and the user variables. `DialogueAnchor` is the slot the
host owns: the current utterance and the dialogue state marker.

Neither object locks. One store per dialogue session, driven from one thread.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from ghost.config import DEFAULT_STATE

logger = logging.getLogger(__name__)

# Returned for anything that was never recorded or set.
EMPTY: tuple = ()


def word_var(index: int) -> str:
    """Identifier of the original-word grounding of rule variable `index`."""
    return f"ghost-word-var-{index}"


def lemma_var(index: int) -> str:
    """Identifier of the lemma grounding of rule variable `index`."""
    return f"ghost-lemma-var-{index}"


@dataclass
class SessionSnapshot:
    words: dict[str, Any]
    lemmas: dict[str, Any]
    user_variables: dict[str, Any]


class SessionStore:
    def __init__(self):
        self._words: dict[str, Any] = {}
        self._lemmas: dict[str, Any] = {}
        self._user_variables: dict[str, Any] = {}

    # --- Grounding recorder ---

    def record_grounding(self, word_var_id, word_value, lemma_var_id, lemma_value) -> bool:
        """Upsert both groundings. Always satisfied, so the matcher can use it as a clause.

        Writes made during an attempt the matcher later abandons stay in place.
        """
        self._words[word_var_id] = word_value
        self._lemmas[lemma_var_id] = lemma_value
        logger.debug(
            "Recorded grounding %s=%r / %s=%r",
            word_var_id,
            word_value,
            lemma_var_id,
            lemma_value,
        )
        return True

    def read_word_grounding(self, var_id) -> Any:
        return self._words.get(var_id, EMPTY)

    def read_lemma_grounding(self, var_id) -> Any:
        return self._lemmas.get(var_id, EMPTY)

    def clear_groundings(self) -> None:
        self._words.clear()
        self._lemmas.clear()

    # --- User variables ---

    def set_user_variable(self, name: str, value: Any) -> bool:
        self._user_variables[name] = value
        return True

    def get_user_variable(self, name: str) -> Any:
        return self._user_variables.get(name, EMPTY)

    def user_variable_exists(self, name: str) -> bool:
        return name in self._user_variables

    def user_variable_equals(self, name: str, value: Any) -> bool:
        if name not in self._user_variables:
            return False
        return self._user_variables[name] == value

    def user_variables(self) -> dict[str, Any]:
        return dict(self._user_variables)

    # --- Host hooks ---

    def snapshot(self) -> SessionSnapshot:
        """Copy of all three tables, for hosts that scope writes to one attempt."""
        return SessionSnapshot(
            words=dict(self._words),
            lemmas=dict(self._lemmas),
            user_variables=dict(self._user_variables),
        )

    def restore(self, snapshot: SessionSnapshot) -> None:
        self._words = dict(snapshot.words)
        self._lemmas = dict(snapshot.lemmas)
        self._user_variables = dict(snapshot.user_variables)


@dataclass
class DialogueAnchor:
    utterance: str = ""
    state: str = DEFAULT_STATE
    default_state: str = field(default=DEFAULT_STATE, repr=False)

    def set_utterance(self, text: str | None) -> None:
        self.utterance = text or ""

    def reset(self) -> None:
        self.state = self.default_state
