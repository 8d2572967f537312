"""PrintQueue API - FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from printqueue import deps
from printqueue.config import settings
from printqueue.api.v1.router import v1_router
from printqueue.api.v1.health import router as health_root_router
from printqueue.auth.identity import MemoryIdentity, SupabaseIdentity
from printqueue.storage.blob_storage import MemoryBlobStorage, SupabaseBlobStorage
from printqueue.store.memory import MemoryStore
from printqueue.store.supabase_store import SupabaseStore

logger = logging.getLogger(__name__)


def configure_logging(level: str = settings.log_level) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_backends(backend: str = settings.store_backend) -> None:
    """Wire store, blob storage and identity for the chosen backend."""
    if backend == "memory":
        deps.configure(MemoryStore(), MemoryBlobStorage(), MemoryIdentity())
    elif backend == "supabase":
        deps.configure(
            SupabaseStore(),
            SupabaseBlobStorage(settings.storage_bucket),
            SupabaseIdentity(),
        )
    else:
        raise ValueError(f"Unknown store backend '{backend}'")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown logic."""
    configure_logging()
    logger.info("Starting PrintQueue API on port %s", settings.api_port)
    logger.info("Store backend: %s", settings.store_backend)
    logger.info("Storage bucket: %s", settings.storage_bucket)
    if settings.store_backend == "supabase" and not settings.supabase_url:
        logger.warning("SUPABASE_URL is not set; backend calls will fail")

    build_backends()

    yield

    logger.info("Shutting down PrintQueue API")
    deps.configure(None, None, None)


app = FastAPI(
    title="PrintQueue",
    description="Print shop job tracking: jobs, presses, colors, users and the press board",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount routers
app.include_router(health_root_router, tags=["health"])  # GET /health at root
app.include_router(v1_router)  # All /api/v1/* endpoints


def run() -> None:
    import uvicorn

    uvicorn.run("printqueue.main:app", host="0.0.0.0", port=settings.api_port)
