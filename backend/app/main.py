import logging
from typing import Any, Dict

from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware

from . import telemetry_pipeline  # noqa: F401  registers the audit listener
from .config import Settings, get_settings
from .db.monitoring import get_pool_snapshot
from .db.session import get_engine
from .developer_routes import router as developer_router
from .domain_profile_routes import router as domain_profile_router
from .goal_routes import router as goal_router
from .listing_routes import router as listing_router
from .logging_config import configure_logging
from .marketing_routes import router as marketing_router
from .portfolio_routes import router as portfolio_router
from .profile_routes import router as profile_router
from .public_routes import router as public_router
from .recognition_routes import router as recognition_router


configure_logging()
logger = logging.getLogger(__name__)
app = FastAPI(title="Realty Coach Profile Backend", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

settings_snapshot = get_settings()
logger.info("Database URL configured: %s", bool(settings_snapshot.database_url))
logger.info("Developer endpoints enabled: %s", settings_snapshot.debug_endpoints)

app.include_router(profile_router)
app.include_router(portfolio_router)
app.include_router(recognition_router)
app.include_router(goal_router)
app.include_router(listing_router)
app.include_router(marketing_router)
app.include_router(domain_profile_router)
app.include_router(public_router)
if settings_snapshot.debug_endpoints:
    app.include_router(developer_router)


@app.get("/healthz")
def health(settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    return {"status": "ok", "debug_endpoints": settings.debug_endpoints}


@app.get("/healthz/database")
def database_health() -> Dict[str, Any]:
    try:
        engine = get_engine()
    except RuntimeError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(exc),
        ) from exc
    return {
        "status": "ok",
        "pool": get_pool_snapshot(engine),
        "backend": engine.dialect.name,
    }
