import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dextracker.api import health_router, pokedex_router, routes_router, transfer_router
from dextracker.config import settings
from dextracker.db.database import init_db
from dextracker.models.failure import KnownError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    await init_db()
    yield


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("dextracker"),
    lifespan=lifespan,
)

app.include_router(health_router)
app.include_router(pokedex_router)
app.include_router(routes_router)
app.include_router(transfer_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    """Render classified failures as FailureDetail bodies."""
    logger.warning("%s: %s", exc.kind.value, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_detail().model_dump(mode="json"),
    )
