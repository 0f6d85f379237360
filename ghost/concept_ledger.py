# Ghost - concept_ledger.py
# Copyright (C) 2026 The Ghost Contributors

import logging
import sqlite3

from ghost.config import CONCEPT_DB_PATH
from ghost.terms import Concept, Lemma, Phrase, Word

logger = logging.getLogger(__name__)

_KIND_TO_TERM = {
    "word": Word,
    "lemma": Lemma,
    "phrase": Phrase,
    "concept": Concept,
}


def _member_row(member) -> tuple[str, str]:
    if isinstance(member, Concept):
        return "concept", member.name
    if isinstance(member, Lemma):
        return "lemma", member.text
    if isinstance(member, Phrase):
        return "phrase", member.text
    if isinstance(member, Word):
        return "word", member.text
    raise TypeError(f"Cannot store concept member {member!r}")


def initialize_database(db_path: str = CONCEPT_DB_PATH):
    """Creates the 'concept_members' table if it doesn't exist."""
    conn = sqlite3.connect(db_path)
    try:
        cursor = conn.cursor()
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS concept_members (
                concept TEXT NOT NULL,
                position INTEGER NOT NULL,
                kind TEXT NOT NULL,
                value TEXT NOT NULL,
                PRIMARY KEY (concept, position)
            )
        """)
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_concept_members_concept ON concept_members(concept)"
        )
        conn.commit()
    finally:
        conn.close()
    logger.debug("[Concept Ledger] Schema verified at %s", db_path)


def save_concept(name: str, members, db_path: str = CONCEPT_DB_PATH) -> None:
    """Replace the stored definition of `name`."""
    rows = [(name, i, *_member_row(m)) for i, m in enumerate(members)]
    conn = sqlite3.connect(db_path)
    try:
        cursor = conn.cursor()
        cursor.execute("DELETE FROM concept_members WHERE concept = ?", (name,))
        cursor.executemany(
            "INSERT INTO concept_members (concept, position, kind, value) VALUES (?, ?, ?, ?)",
            rows,
        )
        conn.commit()
    finally:
        conn.close()


def delete_concept(name: str, db_path: str = CONCEPT_DB_PATH) -> int:
    conn = sqlite3.connect(db_path)
    try:
        cursor = conn.cursor()
        cursor.execute("DELETE FROM concept_members WHERE concept = ?", (name,))
        conn.commit()
        return cursor.rowcount
    finally:
        conn.close()


def load_concepts(db_path: str = CONCEPT_DB_PATH) -> dict[str, list]:
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    try:
        cursor = conn.cursor()
        cursor.execute(
            "SELECT concept, kind, value FROM concept_members ORDER BY concept, position"
        )
        rows = cursor.fetchall()
    finally:
        conn.close()

    concepts: dict[str, list] = {}
    for row in rows:
        term_cls = _KIND_TO_TERM.get(row["kind"])
        if term_cls is None:
            logger.warning(
                "[Concept Ledger] Skipping member of ~%s with unknown kind '%s'",
                row["concept"],
                row["kind"],
            )
            continue
        concepts.setdefault(row["concept"], []).append(term_cls(row["value"]))
    return concepts
