"""Pattern fragments: the compiled form of a dialogue term.

Every term compiles to a `PatternFragment`, an ordered 4-part record:

1. declarations - typed, interval-bounded variables the term introduces
2. clauses      - constraints the matcher must satisfy for those variables
3. words        - references to the matched original-word value(s)
4. lemmas       - references to the canonical-form value(s)

Fragments concatenate pointwise with `+`, preserving order.
"""

# Ghost - pattern.py
# Copyright (C) 2026 The Ghost Contributors

from dataclasses import dataclass
from typing import Any

WORD_NODE = "WordNode"
WORD_INSTANCE_NODE = "WordInstanceNode"

UNBOUNDED = -1

# Names under which the matcher invokes the runtime callables.
CONCEPT_PREDICATE = "ghost-concept?"
CHOICES_PREDICATE = "ghost-choices?"
NEGATION_PREDICATE = "ghost-negation?"
RECORD_GROUNDINGS = "ghost-record-groundings"


@dataclass(frozen=True)
class WordNode:
    """A literal word value."""

    text: str


@dataclass(frozen=True)
class VariableNode:
    """A variable bound to exactly one node."""

    name: str


@dataclass(frozen=True)
class GlobNode:
    """A variable bound to a contiguous run of nodes."""

    name: str


@dataclass(frozen=True)
class Interval:
    """Cardinality bounds over matched node count; upper == -1 means unbounded."""

    lower: int
    upper: int = UNBOUNDED

    def admits(self, count: int) -> bool:
        if count < self.lower:
            return False
        return self.upper == UNBOUNDED or count <= self.upper


@dataclass(frozen=True)
class Declaration:
    variable: VariableNode | GlobNode
    types: tuple[str, ...]
    interval: Interval | None = None


# --- Clauses ---
# Pure clauses constrain the match; `RecordGroundings` is the one clause
# that mutates session state before reporting itself satisfied.


@dataclass(frozen=True)
class WordInSentence:
    """The word instance occurs in the sentence under consideration."""

    instance: VariableNode


@dataclass(frozen=True)
class ReferenceLink:
    """The word instance refers to the given word (literal or variable)."""

    instance: VariableNode
    word: WordNode | VariableNode


@dataclass(frozen=True)
class LemmaLink:
    """The word instance has the given lemma."""

    instance: VariableNode
    lemma: WordNode


@dataclass(frozen=True)
class ConceptCheck:
    concept: str
    glob: GlobNode
    predicate: str = CONCEPT_PREDICATE


@dataclass(frozen=True)
class ChoicesCheck:
    terms: tuple
    glob: GlobNode
    predicate: str = CHOICES_PREDICATE


@dataclass(frozen=True)
class NegationCheck:
    terms: tuple
    predicate: str = NEGATION_PREDICATE


@dataclass(frozen=True)
class RecordGroundings:
    word_var: str
    words: tuple
    lemma_var: str
    lemmas: tuple
    schema: str = RECORD_GROUNDINGS
    side_effect: bool = True


@dataclass(frozen=True)
class Application:
    """Apply an externally defined predicate or schema by name."""

    name: str
    argument: Any
    # Set when several (or no) arguments were wrapped into one sequence.
    wrapped: bool = False


Clause = (
    WordInSentence
    | ReferenceLink
    | LemmaLink
    | ConceptCheck
    | ChoicesCheck
    | NegationCheck
    | RecordGroundings
    | Application
)


@dataclass(frozen=True)
class PatternFragment:
    declarations: tuple[Declaration, ...] = ()
    clauses: tuple = ()
    words: tuple = ()
    lemmas: tuple = ()

    def __add__(self, other: "PatternFragment") -> "PatternFragment":
        if not isinstance(other, PatternFragment):
            return NotImplemented
        return PatternFragment(
            declarations=self.declarations + other.declarations,
            clauses=self.clauses + other.clauses,
            words=self.words + other.words,
            lemmas=self.lemmas + other.lemmas,
        )

    @classmethod
    def concat(cls, fragments) -> "PatternFragment":
        result = cls()
        for fragment in fragments:
            result = result + fragment
        return result


EMPTY_FRAGMENT = PatternFragment()


def apply_arguments(name: str, args) -> Application:
    """A single argument is applied bare; any other count is wrapped in order."""
    args = tuple(args)
    if len(args) == 1:
        return Application(name, args[0])
    return Application(name, args, wrapped=True)


def atom_to_json(value: Any) -> Any:
    """Render fragment parts as plain JSON-compatible data."""
    if isinstance(value, WordNode):
        return {"type": WORD_NODE, "name": value.text}
    if isinstance(value, VariableNode):
        return {"type": "VariableNode", "name": value.name}
    if isinstance(value, GlobNode):
        return {"type": "GlobNode", "name": value.name}
    if isinstance(value, Interval):
        return [value.lower, value.upper]
    if isinstance(value, Declaration):
        return {
            "variable": atom_to_json(value.variable),
            "types": list(value.types),
            "interval": atom_to_json(value.interval) if value.interval else None,
        }
    if isinstance(value, (list, tuple)):
        return [atom_to_json(v) for v in value]
    if hasattr(value, "__dataclass_fields__"):
        data = {"kind": type(value).__name__}
        for field_name in value.__dataclass_fields__:
            data[field_name] = atom_to_json(getattr(value, field_name))
        return data
    return value


def fragment_to_json(fragment: PatternFragment) -> dict[str, Any]:
    return {
        "declarations": atom_to_json(fragment.declarations),
        "clauses": atom_to_json(fragment.clauses),
        "words": atom_to_json(fragment.words),
        "lemmas": atom_to_json(fragment.lemmas),
    }
