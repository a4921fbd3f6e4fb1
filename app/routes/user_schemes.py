from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import Scheme
from ..schemas import UserSchemeIn, UserSchemeOut
from ..services.user_schemes import list_user_schemes, track_scheme, untrack_scheme
from ..utils.logging import logger

router = APIRouter(prefix="/v1", tags=["user-schemes"])

@router.get("/user-schemes", response_model=list[UserSchemeOut])
def get_user_schemes(user_id: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    return list_user_schemes(db, user_id)

@router.post("/user-schemes", response_model=UserSchemeOut)
def save_user_scheme(payload: UserSchemeIn, db: Session = Depends(get_db)):
    if db.get(Scheme, payload.scheme_id) is None:
        raise HTTPException(status_code=404, detail="Scheme not found")
    row = track_scheme(db, payload)
    logger.info("User %s tracks scheme %s: status=%s favorite=%s",
                row.user_id, row.scheme_id, row.status, row.is_favorite)
    return row

@router.delete("/user-schemes")
def delete_user_scheme(user_id: str = Query(..., min_length=1),
                       scheme_id: int = Query(...),
                       db: Session = Depends(get_db)):
    if not untrack_scheme(db, user_id, scheme_id):
        raise HTTPException(status_code=404, detail="Not tracked")
    return {"ok": True}
