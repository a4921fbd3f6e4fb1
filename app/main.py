from contextlib import asynccontextmanager

from fastapi import FastAPI
from .config import settings
from .database import init_db
from .routes.recommend import router as recommend_router
from .routes.schemes import router as schemes_router
from .routes.legal import router as legal_router
from .routes.user_schemes import router as user_schemes_router
from .routes.plans import router as plans_router
from .utils.logging import logger, setup_logging

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    if settings.AUTO_CREATE_TABLES:
        init_db()
    logger.info("ESG advisor starting (env=%s)", settings.ENV)
    yield

app = FastAPI(title="MSME ESG Advisor",
              description="Scheme and legal-document directory, ESG plans and rule-based compliance recommendations",
    version="0.1.0",
    docs_url="/docs",          # Swagger UI
    redoc_url="/redoc",        # ReDoc
    openapi_url="/openapi.json",
    lifespan=lifespan)

app.include_router(recommend_router)
app.include_router(schemes_router)
app.include_router(legal_router)
app.include_router(user_schemes_router)
app.include_router(plans_router)

@app.get("/health")
def health():
    return {"ok": True}
