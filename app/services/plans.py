# app/services/plans.py
from __future__ import annotations
from typing import Any, Dict, List, Mapping

from sqlalchemy import select, desc
from sqlalchemy.orm import Session

from app.config import settings
from app.hashing import hash_udyam
from app.models import ESGPlan, ESGPlanItem, Scheme
from app.rules.profile import normalize_profile
from app.schemas import ESGPlanIn, ESGPlanItemIn, ESGPlanItemUpdate
from app.services.rules.engine import Recommendation, RuleEngine
from app.utils.logging import logger


def build_plan_items(result: Recommendation, schemes_by_code: Mapping[str, Scheme]) -> List[Dict[str, Any]]:
    """
    Turn a recommendation into checklist rows, in recommendation order:
    mandatory (HIGH), then optional (MEDIUM), then one "apply for" row per scheme code.
    Codes missing from the catalogue still get a row, just without a scheme link.
    """
    items: List[Dict[str, Any]] = []

    for text in result.mandatory:
        items.append({"title": text, "kind": "MANDATORY", "priority": "HIGH"})
    for text in result.optional:
        items.append({"title": text, "kind": "OPTIONAL", "priority": "MEDIUM"})
    for code in result.schemes:
        scheme = schemes_by_code.get(code)
        items.append({
            "title": f"Apply for {scheme.name}" if scheme else f"Apply for {code}",
            "description": scheme.benefits if scheme else None,
            "kind": "SCHEME",
            "priority": "MEDIUM",
            "scheme_id": scheme.id if scheme else None,
            "scheme_code": code,
        })

    for n, item in enumerate(items, start=1):
        item["order"] = n
    return items


def _schemes_by_code(db: Session, codes: List[str]) -> Dict[str, Scheme]:
    if not codes:
        return {}
    rows = db.execute(
        select(Scheme).where(Scheme.short_code.in_(codes), Scheme.is_active.is_(True))
    ).scalars().all()
    return {r.short_code: r for r in rows}


def create_plan(db: Session, data: ESGPlanIn, engine: RuleEngine) -> ESGPlan:
    profile = normalize_profile(data.model_dump(by_alias=True))
    plan = ESGPlan(
        user_id=data.user_id,
        name=data.name,
        description=data.description,
        company_name=data.company_name,
        sector=data.sector,
        size=data.size,
        state=data.state,
        udyam_hash=hash_udyam(data.udyam, settings.UDYAM_PEPPER),
        turnover_cr=profile.turnover_cr,
        status=data.status,
        target_date=data.target_date,
    )
    if data.from_recommendation:
        result = engine.evaluate(profile)
        for values in build_plan_items(result, _schemes_by_code(db, result.schemes)):
            plan.items.append(ESGPlanItem(**values))
        logger.info("Plan %r seeded with %d items (rules: %s)", data.name, len(plan.items), result.fired)

    try:
        db.add(plan)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(plan)
    return plan


def list_plans(db: Session, user_id: str) -> List[ESGPlan]:
    stmt = (select(ESGPlan).where(ESGPlan.user_id == user_id)
            .order_by(desc(ESGPlan.updated_at), desc(ESGPlan.id)))
    return list(db.execute(stmt).scalars().all())


def add_item(db: Session, plan: ESGPlan, data: ESGPlanItemIn) -> ESGPlanItem:
    values = data.model_dump()
    if values["order"] is None:
        values["order"] = max((i.order for i in plan.items), default=0) + 1
    if data.scheme_id is not None:
        scheme = db.get(Scheme, data.scheme_id)
        values["scheme_code"] = scheme.short_code if scheme else None
    item = ESGPlanItem(kind="CUSTOM", **values)
    plan.items.append(item)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(item)
    return item


def update_item(db: Session, item: ESGPlanItem, data: ESGPlanItemUpdate) -> ESGPlanItem:
    for k, v in data.model_dump(exclude_unset=True).items():
        if v is None and k in ("title", "priority", "status"):
            continue  # NOT NULL columns
        setattr(item, k, v)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(item)
    return item
