# app/services/recommendation_log.py
from sqlalchemy import select, desc
from sqlalchemy.orm import Session

from app.config import settings
from app.hashing import hash_udyam, is_valid_udyam
from app.models import RecommendationLog
from app.rules.profile import CompanyProfile
from app.services.rules.engine import Recommendation

def _short(value, n: int) -> str | None:
    return str(value)[:n] if value else None

def record_recommendation(db: Session, profile: CompanyProfile, result: Recommendation) -> RecommendationLog:
    row = RecommendationLog(
        sector=_short(profile.sector, 256),
        size=_short(profile.size, 32),
        state=_short(profile.state, 64),
        udyam_hash=hash_udyam(profile.udyam, settings.UDYAM_PEPPER),
        udyam_valid=is_valid_udyam(profile.udyam),
        turnover_cr=profile.turnover_cr,
        compliance=list(profile.compliance),
        mandatory=list(result.mandatory),
        optional=list(result.optional),
        schemes=list(result.schemes),
        rules_fired=list(result.fired),
    )
    try:
        db.add(row)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return row

def recent_recommendations(db: Session, limit: int = 50) -> list[RecommendationLog]:
    stmt = select(RecommendationLog).order_by(desc(RecommendationLog.id)).limit(limit)
    return list(db.execute(stmt).scalars().all())
