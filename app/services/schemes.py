# app/services/schemes.py
from __future__ import annotations
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import select, func, or_, desc
from sqlalchemy.orm import Session

from ..models import Scheme
from ..schemas import SchemeIn

MAX_PAGE_SIZE = 100

def _split(value: Optional[str]) -> List[str]:
    return [s.strip() for s in (value or "").split(",") if s.strip()]

def upsert_scheme(db: Session, data: SchemeIn) -> Tuple[Scheme, bool]:
    """Create or update by name. Returns (row, created). Caller commits."""
    values = data.model_dump()
    values["sectors"] = ",".join(data.sectors) or None
    values["company_sizes"] = ",".join(data.company_sizes) or None

    row = db.execute(select(Scheme).where(Scheme.name == data.name)).scalar_one_or_none()
    created = row is None
    if created:
        row = Scheme(**values)
        db.add(row)
    else:
        for k, v in values.items():
            setattr(row, k, v)
    return row, created

def import_schemes(db: Session, items: Iterable[SchemeIn]) -> Tuple[int, int]:
    created = updated = 0
    try:
        for item in items:
            _, was_created = upsert_scheme(db, item)
            # flush so a repeated name later in the batch updates instead of duplicating
            db.flush()
            if was_created:
                created += 1
            else:
                updated += 1
        db.commit()
    except Exception:
        db.rollback()
        raise
    return created, updated

def query_schemes(
    db: Session,
    search: Optional[str] = None,
    type: Optional[str] = None,
    jurisdiction: Optional[str] = None,
    sector: Optional[str] = None,
    company_size: Optional[str] = None,
    pillars: Optional[str] = None,
    codes: Optional[str] = None,
    page: int = 1,
    limit: int = 20,
) -> Tuple[List[Scheme], int]:
    page = max(page, 1)
    limit = max(1, min(limit, MAX_PAGE_SIZE))

    conds = [Scheme.is_active.is_(True)]
    if search:
        like = f"%{search.strip()}%"
        conds.append(or_(
            Scheme.name.ilike(like),
            Scheme.short_code.ilike(like),
            Scheme.description.ilike(like),
            Scheme.authority.ilike(like),
        ))
    if type: conds.append(Scheme.type == type.upper())
    if jurisdiction: conds.append(Scheme.jurisdiction == jurisdiction)
    if sector: conds.append(Scheme.sectors.ilike(f"%{sector}%"))
    if company_size: conds.append(Scheme.company_sizes.ilike(f"%{company_size}%"))

    wanted = {p.upper() for p in _split(pillars)}
    if "E" in wanted: conds.append(Scheme.pillar_e.is_(True))
    if "S" in wanted: conds.append(Scheme.pillar_s.is_(True))
    if "G" in wanted: conds.append(Scheme.pillar_g.is_(True))

    code_list = _split(codes)
    if code_list:
        conds.append(Scheme.short_code.in_(code_list))

    total = db.execute(select(func.count()).select_from(Scheme).where(*conds)).scalar_one()
    stmt = (select(Scheme).where(*conds)
            .order_by(desc(Scheme.priority), Scheme.name)
            .offset((page - 1) * limit).limit(limit))
    return list(db.execute(stmt).scalars().all()), total
