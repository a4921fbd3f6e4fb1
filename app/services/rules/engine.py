# app/services/rules/engine.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from app.rules.profile import CompanyProfile, normalize_profile
from app.rules.ruleset import DEFAULT_RULES, Rule
from app.utils.logging import logger


@dataclass
class Recommendation:
    mandatory: List[str] = field(default_factory=list)
    optional: List[str] = field(default_factory=list)
    schemes: List[str] = field(default_factory=list)
    # names of the rules that fired; audit only, not part of the wire shape
    fired: List[str] = field(default_factory=list)

    def as_dict(self) -> Dict[str, List[str]]:
        return {
            "mandatory": list(self.mandatory),
            "optional": list(self.optional),
            "schemes": list(self.schemes),
        }


def evaluate_rules(profile: CompanyProfile, rules: Optional[Sequence[Rule]] = None) -> Recommendation:
    """
    Single pass over `rules` in order. Every rule that holds appends its effects;
    entries are never de-duplicated.
    """
    out = Recommendation()
    for rule in DEFAULT_RULES if rules is None else rules:
        if rule.applies(profile):
            for effect in rule.effects:
                effect.apply(out)
            out.fired.append(rule.name)
    logger.debug("Rules fired: %s", out.fired)
    return out


def recommend(payload: Any, rules: Optional[Sequence[Rule]] = None) -> Recommendation:
    return evaluate_rules(normalize_profile(payload), rules)


class RuleEngine:
    """Holds a rule set built once (at startup or in a test) and applies it."""

    def __init__(self, rules: Sequence[Rule] = DEFAULT_RULES):
        self.rules = tuple(rules)

    def evaluate(self, profile: CompanyProfile) -> Recommendation:
        return evaluate_rules(profile, self.rules)

    def recommend(self, payload: Any) -> Recommendation:
        return recommend(payload, self.rules)


_default_engine = RuleEngine()


def get_rule_engine() -> RuleEngine:
    """FastAPI dependency; tests override it with a reduced rule set."""
    return _default_engine
