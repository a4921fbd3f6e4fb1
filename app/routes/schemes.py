import math

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..auth.auth import require_admin_key
from ..database import get_db
from ..models import Scheme
from ..schemas import ImportResult, SchemeIn, SchemeListResponse, SchemeOut
from ..services.schemes import MAX_PAGE_SIZE, import_schemes, query_schemes, upsert_scheme
from ..utils.logging import logger

router = APIRouter(prefix="/v1", tags=["schemes"])

@router.get("/schemes", response_model=SchemeListResponse)
def list_schemes(db: Session = Depends(get_db),
                 search: str | None = Query(None),
                 type: str | None = Query(None),
                 jurisdiction: str | None = Query(None),
                 sector: str | None = Query(None),
                 company_size: str | None = Query(None),
                 pillars: str | None = Query(None, description="comma list of E,S,G"),
                 codes: str | None = Query(None, description="comma list of short codes, e.g. TEAM,ZED"),
                 page: int = Query(1, ge=1),
                 limit: int = Query(20, ge=1)):
    limit = min(limit, MAX_PAGE_SIZE)
    rows, total = query_schemes(db, search=search, type=type, jurisdiction=jurisdiction,
                                sector=sector, company_size=company_size, pillars=pillars,
                                codes=codes, page=page, limit=limit)
    return {
        "schemes": rows,
        "pagination": {"page": page, "limit": limit, "total": total,
                       "pages": math.ceil(total / limit)},
    }

@router.get("/schemes/{scheme_id}", response_model=SchemeOut)
def get_scheme(scheme_id: int, db: Session = Depends(get_db)):
    row = db.get(Scheme, scheme_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Scheme not found")
    return row

@router.post("/schemes", response_model=SchemeOut, dependencies=[Depends(require_admin_key)])
def save_scheme(payload: SchemeIn, db: Session = Depends(get_db)):
    try:
        row, created = upsert_scheme(db, payload)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(row)
    logger.info("Scheme %r %s", row.name, "created" if created else "updated")
    return row

@router.post("/import/schemes", response_model=ImportResult, dependencies=[Depends(require_admin_key)])
def bulk_import(payload: list[SchemeIn], db: Session = Depends(get_db)):
    created, updated = import_schemes(db, payload)
    logger.info("Imported %d schemes (%d created, %d updated)", created + updated, created, updated)
    return {"count": created + updated, "created": created, "updated": updated}
