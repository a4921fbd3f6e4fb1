# app/services/user_schemes.py
from datetime import datetime, timezone

from sqlalchemy import select, desc
from sqlalchemy.orm import Session

from ..models import UserScheme
from ..schemas import UserSchemeIn

def get_user_scheme(db: Session, user_id: str, scheme_id: int) -> UserScheme | None:
    return db.execute(
        select(UserScheme).where(UserScheme.user_id == user_id, UserScheme.scheme_id == scheme_id)
    ).scalar_one_or_none()

def list_user_schemes(db: Session, user_id: str) -> list[UserScheme]:
    stmt = (select(UserScheme).where(UserScheme.user_id == user_id)
            .order_by(desc(UserScheme.updated_at), desc(UserScheme.id)))
    return list(db.execute(stmt).scalars().all())

def track_scheme(db: Session, data: UserSchemeIn) -> UserScheme:
    """
    Upsert on (user_id, scheme_id). A new row starts as INTERESTED / not favourite.
    Moving to APPLIED or COMPLETED stamps applied_at / completed_at the first time.
    """
    row = get_user_scheme(db, data.user_id, data.scheme_id)
    if row is None:
        row = UserScheme(user_id=data.user_id, scheme_id=data.scheme_id,
                         status="INTERESTED", is_favorite=False)
        db.add(row)

    if data.status is not None:
        row.status = data.status
    if data.is_favorite is not None:
        row.is_favorite = data.is_favorite
    if data.notes is not None:
        row.notes = data.notes or None

    now = datetime.now(timezone.utc)
    if row.status == "APPLIED" and row.applied_at is None:
        row.applied_at = now
    if row.status == "COMPLETED" and row.completed_at is None:
        row.completed_at = now

    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(row)
    return row

def untrack_scheme(db: Session, user_id: str, scheme_id: int) -> bool:
    row = get_user_scheme(db, user_id, scheme_id)
    if row is None:
        return False
    db.delete(row)
    db.commit()
    return True
