import math

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..auth.auth import require_admin_key
from ..database import get_db
from ..models import LegalDoc
from ..schemas import ImportCount, LegalDocIn, LegalDocListResponse, LegalDocOut
from ..services.legal import create_legal_doc, import_legal_docs, query_legal_docs
from ..services.schemes import MAX_PAGE_SIZE
from ..utils.logging import logger

router = APIRouter(prefix="/v1", tags=["legal"])

@router.get("/legal", response_model=LegalDocListResponse)
def list_legal_docs(db: Session = Depends(get_db),
                    search: str | None = Query(None),
                    jurisdiction: str | None = Query(None),
                    sector: str | None = Query(None),
                    location_tag: str | None = Query(None),
                    document_type: str | None = Query(None),
                    severity: str | None = Query(None),
                    tag: str | None = Query(None),
                    page: int = Query(1, ge=1),
                    limit: int = Query(20, ge=1)):
    limit = min(limit, MAX_PAGE_SIZE)
    rows, total = query_legal_docs(db, search=search, jurisdiction=jurisdiction, sector=sector,
                                   location_tag=location_tag, document_type=document_type,
                                   severity=severity, tag=tag, page=page, limit=limit)
    return {
        "documents": rows,
        "pagination": {"page": page, "limit": limit, "total": total,
                       "pages": math.ceil(total / limit)},
    }

@router.get("/legal/{doc_id}", response_model=LegalDocOut)
def get_legal_doc(doc_id: int, db: Session = Depends(get_db)):
    row = db.get(LegalDoc, doc_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Legal document not found")
    return row

@router.post("/legal", response_model=LegalDocOut, dependencies=[Depends(require_admin_key)])
def add_legal_doc(payload: LegalDocIn, db: Session = Depends(get_db)):
    row = create_legal_doc(db, payload)
    logger.info("Legal document %r created (%s)", row.title, row.jurisdiction)
    return row

@router.post("/import/legal", response_model=ImportCount, dependencies=[Depends(require_admin_key)])
def bulk_import_legal(payload: list[LegalDocIn], db: Session = Depends(get_db)):
    count = import_legal_docs(db, payload)
    logger.info("Imported %d legal documents", count)
    return {"count": count}
