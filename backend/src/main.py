import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import accounts.infrastructure.models  # noqa: F401
import documents.infrastructure.models  # noqa: F401
from accounts.infrastructure.account_repository import DbAccountRepository
from accounts.interfaces.routes import router as account_router
from assistant.infrastructure.gemini_client import GeminiCompletionClient
from assistant.interfaces.routes import router as assistant_router
from auth.interfaces.routes import router as auth_router
from documents.application.sync_gateway import SyncGateway
from documents.infrastructure.blob_store import RedisBlobStore
from documents.infrastructure.metadata_index import DbMetadataIndex
from documents.interfaces.routes import router as documents_router
from shared.config import settings
from shared.exceptions import (
    AppError,
    AuthenticationError,
    AuthorizationError,
    DualWriteFailureError,
    MaterializationRequiredError,
    NotFoundError,
    PolicyViolationError,
    QuotaExceededError,
)
from shared.infrastructure.connectivity import Connectivity
from shared.infrastructure.database import Base, async_session, engine
from shared.infrastructure.local_cache import create_local_cache
from shared.infrastructure.redis import close_redis_pool, get_redis_pool
from shared.infrastructure.timeout import with_timeout
from shared.interfaces.routes import router as connectivity_router
from shared.logging_config import setup_logging

logger = logging.getLogger(__name__)


async def _create_remote_schema() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL)

    connectivity = Connectivity(online=not settings.START_OFFLINE)
    if connectivity.online:
        try:
            await with_timeout(_create_remote_schema(), settings.READ_TIMEOUT_SECONDS, "schema setup")
        except Exception as exc:
            # keep serving from the local cache; remote calls fall back per request
            logger.warning("Remote store unavailable at startup: %s", exc)

    app.state.gateway = SyncGateway(
        index=DbMetadataIndex(async_session),
        blobs=RedisBlobStore(get_redis_pool()),
        accounts=DbAccountRepository(async_session),
        cache=create_local_cache(settings.LOCAL_CACHE_URL),
        connectivity=connectivity,
        read_timeout=settings.READ_TIMEOUT_SECONDS,
        write_timeout=settings.WRITE_TIMEOUT_SECONDS,
    )
    app.state.completion_client = GeminiCompletionClient(
        api_key=settings.GEMINI_API_KEY,
        model=settings.GEMINI_MODEL,
        base_url=settings.GEMINI_BASE_URL,
    )
    logger.info("Document hub ready (%s)", "online" if connectivity.online else "offline")
    yield
    await engine.dispose()
    await close_redis_pool()


app = FastAPI(
    title="DocSync",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(account_router)
app.include_router(documents_router)
app.include_router(assistant_router)
app.include_router(connectivity_router)


@app.exception_handler(NotFoundError)
async def not_found_handler(request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": exc.message})


@app.exception_handler(MaterializationRequiredError)
async def materialization_handler(request, exc: MaterializationRequiredError):
    return JSONResponse(status_code=409, content={"detail": exc.message})


@app.exception_handler(DualWriteFailureError)
async def dual_write_handler(request, exc: DualWriteFailureError):
    return JSONResponse(status_code=502, content={"detail": exc.message})


@app.exception_handler(QuotaExceededError)
async def quota_handler(request, exc: QuotaExceededError):
    return JSONResponse(status_code=403, content={"detail": exc.message})


@app.exception_handler(PolicyViolationError)
async def policy_handler(request, exc: PolicyViolationError):
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(AuthenticationError)
async def auth_error_handler(request, exc: AuthenticationError):
    return JSONResponse(status_code=401, content={"detail": exc.message})


@app.exception_handler(AuthorizationError)
async def authorization_handler(request, exc: AuthorizationError):
    return JSONResponse(status_code=403, content={"detail": exc.message})


@app.exception_handler(AppError)
async def app_error_handler(request, exc: AppError):
    return JSONResponse(status_code=500, content={"detail": exc.message})


@app.get("/health")
async def health_check():
    return {"status": "ok"}
