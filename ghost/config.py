# Ghost - config.py
# Copyright (C) 2026 The Ghost Contributors
#
# Tunable parameters via environment variables. Restart the node after changing.
#
# Lexicon:
#   GHOST_NLP_MODEL          (str, default en_core_web_sm) – spaCy pipeline for lemmas
#   GHOST_CONCEPT_SENTINEL   (str, default "~")            – prefix of a nested concept member
#   GHOST_CONCEPT_DB         (str, default ghost_concepts.db)
#
# Session:
#   GHOST_DEFAULT_STATE      (str, default "Default")      – anchor marker after an action
#   GHOST_RANDOM_SEED        (int, unset)                  – fixes action selection
#
# Rule base:
#   GHOST_RB_MAXIMUM_ITERATIONS    (int, default 100)
#   GHOST_RB_COMPLEXITY_PENALTY    (float, default 0.1)
#   GHOST_RB_ATTENTION_ALLOCATION  (float, default 0.0)

import os


def _int(key: str, default: int) -> int:
    raw = os.environ.get(key)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _float(key: str, default: float) -> float:
    raw = os.environ.get(key)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _str(key: str, default: str) -> str:
    raw = os.environ.get(key)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def _optional_int(key: str) -> int | None:
    raw = os.environ.get(key)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


# --- Lexicon ---
NLP_MODEL_NAME = _str("GHOST_NLP_MODEL", "en_core_web_sm")

# A concept member written as "~name" refers to another concept.
CONCEPT_SENTINEL = _str("GHOST_CONCEPT_SENTINEL", "~")

CONCEPT_DB_PATH = _str("GHOST_CONCEPT_DB", "ghost_concepts.db")

# --- Session ---
DEFAULT_STATE = _str("GHOST_DEFAULT_STATE", "Default")

# None = seed from the platform entropy source.
RANDOM_SEED = _optional_int("GHOST_RANDOM_SEED")

# --- Rule base ---
RB_MAXIMUM_ITERATIONS = _int("GHOST_RB_MAXIMUM_ITERATIONS", 100)
RB_COMPLEXITY_PENALTY = _float("GHOST_RB_COMPLEXITY_PENALTY", 0.1)
RB_ATTENTION_ALLOCATION = _float("GHOST_RB_ATTENTION_ALLOCATION", 0.0)

# --- Node ---
NODE_PORT = _int("GHOST_PORT", 8009)
