# folio/app/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from folio.app.api import pages
from folio.app.api.v1.router import api_router
from folio.app.core.config import settings
from folio.app.core.errors import register_exception_handlers
from folio.app.core.logging import configure_logging
from folio.app.db import init_models
from folio.app.db.base import AsyncSessionLocal, engine
from folio.app.services.sessions import purge_expired_sessions

logger = logging.getLogger(__name__)


# Startup: create tables, then drop sessions that expired while we were down
@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    await init_models(engine)
    async with AsyncSessionLocal() as db:
        await purge_expired_sessions(db)
    if not settings.media_configured:
        logger.warning("Cloudinary credentials are not set; uploads will fail")
    logger.info("%s started (%s)", settings.PROJECT_NAME, settings.ENVIRONMENT)
    yield
    await engine.dispose()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)

# Set up CORS. Credentials are allowed because the session lives in a cookie.
if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

register_exception_handlers(app)

app.include_router(api_router, prefix=settings.API_V1_STR)
app.include_router(pages.router)
app.include_router(pages.public_router)


@app.get("/")
def root():
    return {"message": f"Welcome to the {settings.PROJECT_NAME} API"}
