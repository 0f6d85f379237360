# Ghost - actions.py
# Copyright (C) 2026 The Ghost Contributors

import logging
import random
from dataclasses import dataclass

from ghost.config import RANDOM_SEED
from ghost.pattern import WordNode
from ghost.terms import Word

logger = logging.getLogger(__name__)

# Process-wide source for action selection; seeded from the platform unless configured.
_RNG = random.Random(RANDOM_SEED)


@dataclass(frozen=True)
class ActionGroup:
    """An ordered group of action content; groups nest."""

    items: tuple = ()


def select_action(action_set, rng: random.Random | None = None):
    """Pick one alternative uniformly at random. None for an empty set."""
    alternatives = list(action_set)
    if not alternatives:
        return None
    return (rng or _RNG).choice(alternatives)


def collect_words(content) -> list[str]:
    """Depth-first walk collecting every word-level value."""
    if isinstance(content, (WordNode, Word)):
        return [content.text]
    if isinstance(content, ActionGroup):
        content = content.items
    if isinstance(content, (list, tuple)):
        words: list[str] = []
        for item in content:
            words.extend(collect_words(item))
        return words
    # Non-text effects are not rendered yet.
    return []


def log_say(text: str) -> None:
    logger.info("Say: %s", text)


def execute(actions, anchor, say=log_say) -> str | None:
    """Say whatever text the actions carry, then reset the anchor.

    Returns the text said, or None when there was nothing to say.
    """
    text = " ".join(collect_words(actions))
    said = None
    try:
        if text.strip():
            say(text)
            said = text
    finally:
        anchor.reset()
    return said
