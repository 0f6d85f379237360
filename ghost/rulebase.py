# Ghost - rulebase.py
# Copyright (C) 2026 The Ghost Contributors
"""Rules and the rule base they are registered with.

A rule is a (context, actions, goals) triple. Compiling it concatenates the
context fragments in order under one variable namer and compiles the action
functions. The rule base only records rules and the numeric parameters the
external rule engine reads; it does no inference of its own.
"""

import logging
from dataclasses import dataclass, field

from ghost.config import (
    RB_ATTENTION_ALLOCATION,
    RB_COMPLEXITY_PENALTY,
    RB_MAXIMUM_ITERATIONS,
)
from ghost.pattern import PatternFragment
from ghost.terms import ActionFunction, VariableNamer, compile_action, compile_term

logger = logging.getLogger(__name__)

DEFAULT_PARAMETERS = {
    "maximum-iterations": float(RB_MAXIMUM_ITERATIONS),
    "complexity-penalty": RB_COMPLEXITY_PENALTY,
    "attention-allocation": RB_ATTENTION_ALLOCATION,
}


@dataclass
class Rule:
    name: str
    context: tuple = ()
    # Alternatives; one is picked at action time.
    actions: tuple = ()
    goals: dict[str, float] = field(default_factory=dict)


@dataclass
class CompiledRule:
    name: str
    context: PatternFragment
    actions: tuple
    goals: dict[str, float]


def compile_rule(rule: Rule, lexicon) -> CompiledRule:
    namer = VariableNamer()
    context = PatternFragment.concat(
        compile_term(term, lexicon, namer) for term in rule.context
    )
    compiled_actions = tuple(
        compile_action(a) if isinstance(a, ActionFunction) else a for a in rule.actions
    )
    return CompiledRule(
        name=rule.name,
        context=context,
        actions=compiled_actions,
        goals=dict(rule.goals),
    )


class RuleBase:
    def __init__(self, name: str = "ghost-rb"):
        self.name = name
        self._rules: dict[str, Rule] = {}
        self._parameters: dict[str, float] = dict(DEFAULT_PARAMETERS)

    def add_rule(self, rule: Rule) -> None:
        if rule.name in self._rules:
            logger.warning("[RuleBase] Replacing rule '%s' in %s", rule.name, self.name)
        self._rules[rule.name] = rule

    def get_rule(self, name: str) -> Rule | None:
        return self._rules.get(name)

    def rules(self) -> list[Rule]:
        return list(self._rules.values())

    def compile(self, lexicon) -> list[CompiledRule]:
        return [compile_rule(rule, lexicon) for rule in self._rules.values()]

    def set_parameter(self, name: str, value: float) -> None:
        self._parameters[name] = float(value)

    def get_parameter(self, name: str, default: float | None = None) -> float | None:
        return self._parameters.get(name, default)

    def parameters(self) -> dict[str, float]:
        return dict(self._parameters)
