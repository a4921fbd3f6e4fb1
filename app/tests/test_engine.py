# tests/test_engine.py
from app.rules.profile import CompanyProfile
from app.rules.ruleset import (
    DEFAULT_RULES, AddMandatory, AddOptional, AddSchemes, Rule,
    always, lacks_flag, sector_matches, size_in, state_is,
)
from app.services.rules.engine import RuleEngine, evaluate_rules


def test_default_rule_order():
    assert [r.name for r in DEFAULT_RULES] == [
        "consent-to-operate", "hazardous-waste", "osh-fire", "msme-schemes",
        "food-beverage", "chemicals-pharma", "goa-spcb",
    ]

def test_reduced_rule_set():
    engine = RuleEngine([Rule("only", always(), (AddOptional("x"),))])
    out = engine.recommend({"sector": "Food"})
    assert out.as_dict() == {"mandatory": [], "optional": ["x"], "schemes": []}
    assert out.fired == ["only"]

def test_empty_rule_set():
    assert evaluate_rules(CompanyProfile(), []).as_dict() == {"mandatory": [], "optional": [], "schemes": []}

def test_duplicates_are_kept():
    rules = [
        Rule("a", always(), (AddMandatory("same"), AddSchemes(("ZED",)))),
        Rule("b", always(), (AddMandatory("same"), AddSchemes(("ZED", "GIFT")))),
    ]
    out = evaluate_rules(CompanyProfile(), rules)
    assert out.mandatory == ["same", "same"]
    assert out.schemes == ["ZED", "ZED", "GIFT"]

def test_effects_apply_in_listed_order():
    rule = Rule("multi", always(), (AddMandatory("m1"), AddOptional("o1"), AddMandatory("m2")))
    out = evaluate_rules(CompanyProfile(), [rule])
    assert out.mandatory == ["m1", "m2"]
    assert out.optional == ["o1"]

def test_as_dict_returns_copies():
    out = evaluate_rules(CompanyProfile(), [Rule("a", always(), (AddMandatory("m"),))])
    d = out.as_dict()
    d["mandatory"].append("extra")
    assert out.mandatory == ["m"]

def test_predicates():
    p = CompanyProfile(sector="Agro FOOD exports", size="Small", state="GOA", compliance=["epr:registered"])
    assert lacks_flag("consents:valid")(p)
    assert not lacks_flag("epr:registered")(p)
    assert size_in("Micro", "Small")(p)
    assert not size_in("MICRO", "SMALL")(p)
    assert sector_matches("food")(p)
    assert not sector_matches("pharma")(p)
    assert state_is("Goa")(p)

def test_predicates_treat_missing_as_empty():
    p = CompanyProfile()
    assert not size_in("Micro")(p)
    assert not sector_matches("food")(p)
    assert not state_is("goa")(p)

def test_sector_keywords_are_literal():
    assert not sector_matches("c.em")(CompanyProfile(sector="chem"))
