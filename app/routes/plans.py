from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import ESGPlan, ESGPlanItem, Scheme
from ..schemas import ESGPlanIn, ESGPlanItemIn, ESGPlanItemOut, ESGPlanItemUpdate, ESGPlanOut
from ..services.plans import add_item, create_plan, list_plans, update_item
from ..services.rules.engine import RuleEngine, get_rule_engine

router = APIRouter(prefix="/v1/esg-plans", tags=["esg-plans"])

def _plan_or_404(db: Session, plan_id: int) -> ESGPlan:
    plan = db.get(ESGPlan, plan_id)
    if plan is None:
        raise HTTPException(status_code=404, detail="Plan not found")
    return plan

@router.get("", response_model=list[ESGPlanOut])
def get_plans(user_id: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    return list_plans(db, user_id)

@router.get("/{plan_id}", response_model=ESGPlanOut)
def get_plan(plan_id: int, db: Session = Depends(get_db)):
    return _plan_or_404(db, plan_id)

@router.post("", response_model=ESGPlanOut, status_code=201)
def new_plan(payload: ESGPlanIn,
             db: Session = Depends(get_db),
             engine: RuleEngine = Depends(get_rule_engine)):
    return create_plan(db, payload, engine)

@router.post("/{plan_id}/items", response_model=ESGPlanItemOut, status_code=201)
def new_item(plan_id: int, payload: ESGPlanItemIn, db: Session = Depends(get_db)):
    plan = _plan_or_404(db, plan_id)
    if payload.scheme_id is not None and db.get(Scheme, payload.scheme_id) is None:
        raise HTTPException(status_code=404, detail="Scheme not found")
    return add_item(db, plan, payload)

@router.patch("/{plan_id}/items/{item_id}", response_model=ESGPlanItemOut)
def patch_item(plan_id: int, item_id: int, payload: ESGPlanItemUpdate, db: Session = Depends(get_db)):
    item = db.get(ESGPlanItem, item_id)
    if item is None or item.plan_id != plan_id:
        raise HTTPException(status_code=404, detail="Item not found")
    return update_item(db, item, payload)
