# app/services/legal.py
from __future__ import annotations
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import select, func, or_, desc
from sqlalchemy.orm import Session

from ..models import LegalDoc
from ..schemas import LegalDocIn
from .schemes import MAX_PAGE_SIZE

def _to_row(data: LegalDocIn) -> LegalDoc:
    values = data.model_dump()
    values["tags"] = ",".join(data.tags) or None
    return LegalDoc(**values)

def create_legal_doc(db: Session, data: LegalDocIn) -> LegalDoc:
    row = _to_row(data)
    try:
        db.add(row)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(row)
    return row

def import_legal_docs(db: Session, items: Iterable[LegalDocIn]) -> int:
    """Documents are appended, never merged: the same title may be issued by several authorities."""
    count = 0
    try:
        for item in items:
            db.add(_to_row(item))
            count += 1
        db.commit()
    except Exception:
        db.rollback()
        raise
    return count

def query_legal_docs(
    db: Session,
    search: Optional[str] = None,
    jurisdiction: Optional[str] = None,
    sector: Optional[str] = None,
    location_tag: Optional[str] = None,
    document_type: Optional[str] = None,
    severity: Optional[str] = None,
    tag: Optional[str] = None,
    page: int = 1,
    limit: int = 20,
) -> Tuple[List[LegalDoc], int]:
    page = max(page, 1)
    limit = max(1, min(limit, MAX_PAGE_SIZE))

    conds = [LegalDoc.is_active.is_(True)]
    if search:
        like = f"%{search.strip()}%"
        conds.append(or_(LegalDoc.title.ilike(like), LegalDoc.summary.ilike(like)))
    if jurisdiction: conds.append(func.lower(LegalDoc.jurisdiction) == jurisdiction.lower())
    if sector: conds.append(LegalDoc.sector.ilike(f"%{sector}%"))
    if location_tag: conds.append(func.lower(LegalDoc.location_tag) == location_tag.lower())
    if document_type: conds.append(LegalDoc.document_type == document_type.upper())
    if severity: conds.append(LegalDoc.severity == severity.upper())
    if tag: conds.append(LegalDoc.tags.ilike(f"%{tag}%"))

    total = db.execute(select(func.count()).select_from(LegalDoc).where(*conds)).scalar_one()
    stmt = (select(LegalDoc).where(*conds)
            .order_by(desc(LegalDoc.id))
            .offset((page - 1) * limit).limit(limit))
    return list(db.execute(stmt).scalars().all()), total
