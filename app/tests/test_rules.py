# tests/test_rules.py
import pytest

from app.services.rules.engine import recommend

CONSENT = "Obtain/renew pollution-control Consent to Operate (Air/Water statutes)"
HAZ_WASTE = "Hazardous & Other Wastes rules compliance (if applicable)"
OSH_FIRE = "Occupational Safety & Health and Fire clearance compliance"
FOOD = "Effluent treatment and food-safety hygiene compliance"
CHEM = ("Hazardous chemicals storage, safety-data-sheet management, "
        "and extended producer responsibility (where applicable)")
CAPEX = "Apply for circular-economy CAPEX subsidy program"
GOA = ("State pollution-control board Consent to Operate (Air/Water); "
       "verify sector-specific limits & validity")
MSME_SCHEMES = ["TEAM", "ZED", "GIFT", "SIDBI-4E"]


def test_small_textiles_with_valid_consent():
    out = recommend({"sector": "Textiles", "size": "Small", "state": "Karnataka",
                     "compliance": ["consents:valid"]}).as_dict()
    assert out == {"mandatory": [HAZ_WASTE, OSH_FIRE], "optional": [], "schemes": MSME_SCHEMES}

def test_medium_food_processor_in_goa():
    out = recommend({"sector": "Food Processing", "size": "Medium", "state": "Goa",
                     "compliance": []}).as_dict()
    assert out["mandatory"] == [CONSENT, HAZ_WASTE, OSH_FIRE, FOOD, GOA]
    assert out["schemes"] == []
    assert out["optional"] == []

def test_micro_pharma():
    out = recommend({"sector": "Pharmaceuticals", "size": "Micro", "state": "",
                     "compliance": ["consents:valid"]}).as_dict()
    assert out["mandatory"] == [HAZ_WASTE, OSH_FIRE, CHEM]
    assert out["optional"] == [CAPEX]
    assert out["schemes"] == MSME_SCHEMES

def test_empty_input():
    out = recommend({}).as_dict()
    assert out == {"mandatory": [CONSENT, HAZ_WASTE, OSH_FIRE], "optional": [], "schemes": []}

def test_compliance_string_treated_as_missing():
    out = recommend({"compliance": "consents:valid"}).as_dict()
    assert out == recommend({}).as_dict()

def test_beverage_and_chemicals_both_fire():
    out = recommend({"sector": "Beverage chemicals", "compliance": ["consents:valid"]})
    assert out.mandatory == [HAZ_WASTE, OSH_FIRE, FOOD, CHEM]
    assert out.fired == ["hazardous-waste", "osh-fire", "food-beverage", "chemicals-pharma"]

@pytest.mark.parametrize("size", ["Micro", "Small"])
def test_scheme_rule_fires_for_exact_size(size):
    assert recommend({"size": size}).schemes == MSME_SCHEMES

@pytest.mark.parametrize("size", ["MICRO", "small", "Medium", "Large", "", None, " Small"])
def test_scheme_rule_is_case_sensitive(size):
    # current behaviour: upper-case enum values from the catalogue do not match
    assert recommend({"size": size}).schemes == []

@pytest.mark.parametrize("state", ["goa", "GOA", "Goa"])
def test_goa_rule_ignores_case(state):
    assert recommend({"state": state}).mandatory[-1] == GOA

def test_goa_rule_needs_exact_name():
    assert GOA not in recommend({"state": "North Goa"}).mandatory

@pytest.mark.parametrize("payload", [
    None,
    42,
    "not a dict",
    {"sector": 123, "size": ["Micro"], "state": {"x": 1}},
    {"turnoverCr": "abc", "compliance": [1, 2]},
    {"turnoverCr": 10**400},
    {"compliance": None, "udyam": object()},
])
def test_never_raises_and_keeps_baseline(payload):
    out = recommend(payload).as_dict()
    assert out == {"mandatory": [CONSENT, HAZ_WASTE, OSH_FIRE], "optional": [], "schemes": []}

def test_same_input_same_output():
    payload = {"sector": "Chemicals", "size": "Small", "state": "Goa", "compliance": []}
    assert recommend(payload).as_dict() == recommend(payload).as_dict()
