from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..config import settings
from ..database import get_db
from ..rules.profile import normalize_profile
from ..schemas import RecommendInput, RecommendationOut, RecommendationLogOut
from ..services.recommendation_log import record_recommendation, recent_recommendations
from ..services.rules.engine import RuleEngine, get_rule_engine
from ..utils.logging import logger


router = APIRouter(prefix="/v1", tags=["recommend"])

@router.post("/recommend", response_model=RecommendationOut)
def recommend(payload: RecommendInput,
              db: Session = Depends(get_db),
              engine: RuleEngine = Depends(get_rule_engine)):
    profile = normalize_profile(payload.model_dump(by_alias=True))
    result = engine.evaluate(profile)
    logger.info("Recommendation for sector=%r size=%r state=%r: %d mandatory, %d optional, %d schemes",
                profile.sector, profile.size, profile.state,
                len(result.mandatory), len(result.optional), len(result.schemes))
    if settings.RECORD_RECOMMENDATIONS:
        record_recommendation(db, profile, result)
    return result.as_dict()

@router.get("/recommendations", response_model=list[RecommendationLogOut])
def list_recommendations(db: Session = Depends(get_db),
                         limit: int = Query(50, ge=1, le=200)):
    return recent_recommendations(db, limit)
