# app/rules/ruleset.py
from __future__ import annotations
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Tuple, Union

from app.rules.profile import CompanyProfile

if TYPE_CHECKING:
    from app.services.rules.engine import Recommendation

Predicate = Callable[[CompanyProfile], bool]

CONSENT_FLAG = "consents:valid"
MSME_SCHEME_CODES = ("TEAM", "ZED", "GIFT", "SIDBI-4E")


def _text(value: Any) -> str:
    return str(value) if value else ""


# -----------------------------
# Effects
# -----------------------------
@dataclass(frozen=True)
class AddMandatory:
    text: str

    def apply(self, out: "Recommendation") -> None:
        out.mandatory.append(self.text)


@dataclass(frozen=True)
class AddOptional:
    text: str

    def apply(self, out: "Recommendation") -> None:
        out.optional.append(self.text)


@dataclass(frozen=True)
class AddSchemes:
    codes: Tuple[str, ...]

    def apply(self, out: "Recommendation") -> None:
        out.schemes.extend(self.codes)


Effect = Union[AddMandatory, AddOptional, AddSchemes]


@dataclass(frozen=True)
class Rule:
    name: str
    when: Predicate
    effects: Tuple[Effect, ...]

    def applies(self, profile: CompanyProfile) -> bool:
        return bool(self.when(profile))


# -----------------------------
# Predicates
# -----------------------------
def always() -> Predicate:
    return lambda profile: True


def lacks_flag(token: str) -> Predicate:
    return lambda profile: token not in profile.compliance


def size_in(*sizes: str) -> Predicate:
    """Exact, case-sensitive match on the size label ("Micro" != "MICRO")."""
    allowed = frozenset(sizes)
    return lambda profile: _text(profile.size) in allowed


def sector_matches(*keywords: str) -> Predicate:
    pattern = re.compile("|".join(re.escape(k) for k in keywords), re.IGNORECASE)
    return lambda profile: pattern.search(_text(profile.sector)) is not None


def state_is(name: str) -> Predicate:
    target = name.lower()
    return lambda profile: _text(profile.state).lower() == target


# Order matters: it is the order entries appear in the output lists.
DEFAULT_RULES: Tuple[Rule, ...] = (
    Rule(
        "consent-to-operate",
        lacks_flag(CONSENT_FLAG),
        (AddMandatory("Obtain/renew pollution-control Consent to Operate (Air/Water statutes)"),),
    ),
    Rule(
        "hazardous-waste",
        always(),
        (AddMandatory("Hazardous & Other Wastes rules compliance (if applicable)"),),
    ),
    Rule(
        "osh-fire",
        always(),
        (AddMandatory("Occupational Safety & Health and Fire clearance compliance"),),
    ),
    Rule(
        "msme-schemes",
        size_in("Micro", "Small"),
        (AddSchemes(MSME_SCHEME_CODES),),
    ),
    Rule(
        "food-beverage",
        sector_matches("food", "beverage"),
        (AddMandatory("Effluent treatment and food-safety hygiene compliance"),),
    ),
    Rule(
        "chemicals-pharma",
        sector_matches("chem", "pharma"),
        (
            AddMandatory(
                "Hazardous chemicals storage, safety-data-sheet management, "
                "and extended producer responsibility (where applicable)"
            ),
            AddOptional("Apply for circular-economy CAPEX subsidy program"),
        ),
    ),
    Rule(
        "goa-spcb",
        state_is("goa"),
        (
            AddMandatory(
                "State pollution-control board Consent to Operate (Air/Water); "
                "verify sector-specific limits & validity"
            ),
        ),
    ),
)
