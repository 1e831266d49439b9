import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.logging_config import setup_logging
from app.db.init_db import init_db
from app.services.errors import PickemError
from app.api.routes.me import router as me_router
from app.api.routes.admin_users import router as admin_users_router
from app.api.routes.admin_seasons import router as admin_seasons_router
from app.api.routes.teams import router as teams_router, admin_router as admin_teams_router
from app.api.routes.fixtures import router as fixtures_router, admin_router as admin_fixtures_router
from app.api.routes.picks import router as picks_router

logger = logging.getLogger(__name__)

setup_logging(level=settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Running init_db()")
    init_db()
    yield


app = FastAPI(title="Survivor Pick'em", lifespan=lifespan)
app.include_router(me_router)
app.include_router(admin_users_router)
app.include_router(admin_seasons_router)
app.include_router(teams_router)
app.include_router(admin_teams_router)
app.include_router(fixtures_router)
app.include_router(admin_fixtures_router)
app.include_router(picks_router)


@app.exception_handler(PickemError)
async def pickem_error_handler(request: Request, exc: PickemError):
    if exc.status_code >= 500:
        logger.warning("%s %s -> %s", request.method, request.url.path, exc.code)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail, "code": exc.code})


@app.get("/health")
def health():
    return {"ok": True}
