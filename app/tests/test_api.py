# tests/test_api.py
from app.main import app
from app.models import RecommendationLog
from app.rules.ruleset import AddSchemes, Rule, always
from app.services.rules.engine import RuleEngine, get_rule_engine

ZED = {
    "name": "MSME Sustainable (ZED) Certification",
    "short_code": "ZED",
    "type": "CERTIFICATION",
    "authority": "MSME Ministry",
    "description": "Zero defect zero effect certification",
    "sectors": ["Manufacturing", "Food Processing"],
    "company_sizes": ["MICRO", "SMALL", "MEDIUM"],
    "pillar_e": True, "pillar_s": True, "pillar_g": True,
    "priority": 10,
}
CGS = {
    "name": "Credit Guarantee Scheme (CGS)",
    "short_code": "CGS",
    "type": "SCHEME",
    "authority": "SIDBI/CGTMSE",
    "description": "Collateral-free credit guarantee",
    "sectors": ["All Sectors"],
    "company_sizes": ["MICRO", "SMALL"],
    "pillar_s": True,
    "priority": 7,
}


def test_health(client):
    assert client.get("/health").json() == {"ok": True}

def test_recommend_splits_compliance_string(client):
    r = client.post("/v1/recommend", json={
        "sector": "Textiles", "size": "Small", "state": "Karnataka",
        "compliance": " consents:valid , ",
    })
    assert r.status_code == 200
    assert r.json() == {
        "mandatory": [
            "Hazardous & Other Wastes rules compliance (if applicable)",
            "Occupational Safety & Health and Fire clearance compliance",
        ],
        "optional": [],
        "schemes": ["TEAM", "ZED", "GIFT", "SIDBI-4E"],
    }

def test_recommend_empty_body(client):
    r = client.post("/v1/recommend", json={})
    assert r.status_code == 200
    assert len(r.json()["mandatory"]) == 3

def test_recommend_bad_turnover_is_ignored(client, db_session):
    r = client.post("/v1/recommend", json={"turnoverCr": "lots", "udyam": "udyam-ga-01-0001234"})
    assert r.status_code == 200
    row = db_session.query(RecommendationLog).one()
    assert row.turnover_cr is None
    assert row.udyam_valid is True
    assert row.udyam_hash and "0001234" not in row.udyam_hash

def test_recommend_is_logged(client):
    client.post("/v1/recommend", json={"sector": "Pharma", "size": "Micro", "turnoverCr": 3})
    client.post("/v1/recommend", json={"state": "Goa"})
    rows = client.get("/v1/recommendations").json()
    assert [r["state"] for r in rows] == ["Goa", None]
    first = rows[1]
    assert first["turnover_cr"] == 3.0
    assert first["rules_fired"] == ["consent-to-operate", "hazardous-waste", "osh-fire",
                                    "msme-schemes", "chemicals-pharma"]
    assert "udyam_hash" not in first

def test_recommend_with_substituted_engine(client):
    app.dependency_overrides[get_rule_engine] = lambda: RuleEngine([Rule("t", always(), (AddSchemes(("X",)),))])
    r = client.post("/v1/recommend", json={"size": "Large"})
    assert r.json() == {"mandatory": [], "optional": [], "schemes": ["X"]}

def test_scheme_writes_require_admin_key(client):
    assert client.post("/v1/schemes", json=ZED).status_code == 401
    assert client.post("/v1/schemes", json=ZED, headers={"x-admin-key": "nope"}).status_code == 401
    assert client.post("/v1/import/schemes", json=[ZED]).status_code == 401

def test_scheme_upsert_by_name(client, admin_headers):
    r = client.post("/v1/schemes", json=ZED, headers=admin_headers)
    assert r.status_code == 200
    created = r.json()
    assert created["company_sizes"] == ["MICRO", "SMALL", "MEDIUM"]

    r = client.post("/v1/schemes", json={**ZED, "priority": 9}, headers=admin_headers)
    assert r.json()["id"] == created["id"]
    assert r.json()["priority"] == 9

def test_scheme_validation(client, admin_headers):
    r = client.post("/v1/schemes", json={**ZED, "type": "RAFFLE"}, headers=admin_headers)
    assert r.status_code == 422
    r = client.post("/v1/schemes", json={**ZED, "authority": "  "}, headers=admin_headers)
    assert r.status_code == 422

def test_bulk_import_and_filters(client, admin_headers):
    r = client.post("/v1/import/schemes", json=[ZED, CGS, {**CGS, "priority": 8}], headers=admin_headers)
    assert r.json() == {"count": 3, "created": 2, "updated": 1}

    body = client.get("/v1/schemes").json()
    assert [s["short_code"] for s in body["schemes"]] == ["ZED", "CGS"]
    assert body["pagination"] == {"page": 1, "limit": 20, "total": 2, "pages": 1}

    def codes(**params):
        return [s["short_code"] for s in client.get("/v1/schemes", params=params).json()["schemes"]]

    assert codes(search="guarantee") == ["CGS"]
    assert codes(type="certification") == ["ZED"]
    assert codes(pillars="E,S") == ["ZED"]
    assert codes(company_size="MEDIUM") == ["ZED"]
    assert codes(sector="food") == ["ZED"]
    assert codes(codes="TEAM,CGS") == ["CGS"]
    assert codes(limit=1, page=2) == ["CGS"]

def test_inactive_schemes_hidden(client, admin_headers):
    client.post("/v1/import/schemes", json=[ZED, {**CGS, "is_active": False}], headers=admin_headers)
    assert client.get("/v1/schemes").json()["pagination"]["total"] == 1

def test_get_scheme(client, admin_headers):
    sid = client.post("/v1/schemes", json=CGS, headers=admin_headers).json()["id"]
    assert client.get(f"/v1/schemes/{sid}").json()["name"] == CGS["name"]
    assert client.get("/v1/schemes/9999").status_code == 404

def test_recommend_accepts_any_json_types(client):
    r = client.post("/v1/recommend", json={"sector": 123, "size": ["Micro"], "state": {"x": 1}, "compliance": 5})
    assert r.status_code == 200
    assert len(r.json()["mandatory"]) == 3
    assert r.json()["schemes"] == []

def test_recommend_huge_turnover_is_ignored(client, db_session):
    body = '{"size": "Micro", "turnoverCr": 1' + "0" * 400 + "}"
    r = client.post("/v1/recommend", content=body, headers={"content-type": "application/json"})
    assert r.status_code == 200
    assert r.json()["schemes"] == ["TEAM", "ZED", "GIFT", "SIDBI-4E"]
    assert db_session.query(RecommendationLog).one().turnover_cr is None

# ---------- legal documents ----------
EPA = {
    "title": "Environment (Protection) Act, 1986",
    "summary": "Umbrella law for environmental protection",
    "document_type": "REGULATION",
    "severity": "HIGH",
    "tags": "pollution|environment, central",
}
GOA_SPCB = {
    "title": "Goa SPCB consent fee notification",
    "jurisdiction": "State",
    "location_tag": "Goa",
    "sector": "Food Processing",
    "summary": "Revised consent fees for red and orange category units",
    "document_type": "NOTIFICATION",
    "severity": "MEDIUM",
    "tags": ["consent", "fees"],
}

def test_legal_writes_require_admin_key(client):
    assert client.post("/v1/legal", json=EPA).status_code == 401
    assert client.post("/v1/import/legal", json=[EPA], headers={"x-admin-key": "nope"}).status_code == 401

def test_legal_create_defaults(client, admin_headers):
    r = client.post("/v1/legal", json={**EPA, "jurisdiction": "  "}, headers=admin_headers)
    assert r.status_code == 200
    doc = r.json()
    assert doc["jurisdiction"] == "Central"
    assert doc["tags"] == ["pollution", "environment", "central"]
    assert doc["location_tag"] is None
    assert client.get(f"/v1/legal/{doc['id']}").json()["title"] == EPA["title"]
    assert client.get("/v1/legal/9999").status_code == 404

def test_legal_validation(client, admin_headers):
    assert client.post("/v1/legal", json={**EPA, "title": " "}, headers=admin_headers).status_code == 422
    assert client.post("/v1/legal", json={**EPA, "severity": "SEVERE"}, headers=admin_headers).status_code == 422

def test_legal_import_and_filters(client, admin_headers):
    r = client.post("/v1/import/legal", json=[EPA, GOA_SPCB], headers=admin_headers)
    assert r.json() == {"count": 2}

    body = client.get("/v1/legal").json()
    assert [d["title"] for d in body["documents"]] == [GOA_SPCB["title"], EPA["title"]]
    assert body["pagination"] == {"page": 1, "limit": 20, "total": 2, "pages": 1}

    def titles(**params):
        return [d["title"] for d in client.get("/v1/legal", params=params).json()["documents"]]

    assert titles(search="umbrella") == [EPA["title"]]
    assert titles(jurisdiction="state") == [GOA_SPCB["title"]]
    assert titles(location_tag="goa") == [GOA_SPCB["title"]]
    assert titles(sector="food") == [GOA_SPCB["title"]]
    assert titles(document_type="regulation") == [EPA["title"]]
    assert titles(severity="medium") == [GOA_SPCB["title"]]
    assert titles(tag="pollution") == [EPA["title"]]
    assert titles(limit=1, page=2) == [EPA["title"]]

def test_inactive_legal_docs_hidden(client, admin_headers):
    client.post("/v1/import/legal", json=[EPA, {**GOA_SPCB, "is_active": False}], headers=admin_headers)
    assert client.get("/v1/legal").json()["pagination"]["total"] == 1
