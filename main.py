"""FastAPI entry point for the Indy block service."""

import asyncio
import logging
from contextlib import asynccontextmanager

import litellm
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import get_settings
from services.block_store import get_block_store_registry, periodic_cleanup
from services.cms_client import get_cms_client
from services.concurrency import ConcurrencyLimitMiddleware
from services.middleware import RequestIdFilter, RequestIdMiddleware

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s",
)
for _handler in logging.getLogger().handlers:
    _handler.addFilter(RequestIdFilter())

logger = logging.getLogger(__name__)

# ── Global LiteLLM settings ──────────────────────────────────
litellm.request_timeout = settings.llm_request_timeout


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the CMS connection pool and the block-session cleanup task."""
    client = get_cms_client()
    await client.start()

    get_block_store_registry()
    cleanup_task = asyncio.create_task(periodic_cleanup(interval_seconds=300))

    yield

    cleanup_task.cancel()
    try:
        await cleanup_task
    except asyncio.CancelledError:
        pass

    await client.close()


app = FastAPI(
    title="Indy Block Service",
    description="AI block generation and function-calling editor assistant",
    version="0.1.0",
    lifespan=lifespan,
)

# ── Middleware stack (outermost first) ─────────────────────────
# CORS → RequestId → ConcurrencyLimit → route handler
app.add_middleware(ConcurrencyLimitMiddleware)
app.add_middleware(RequestIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Register routers ────────────────────────────────────────
from api.canvas import router as canvas_router  # noqa: E402
from api.health import router as health_router  # noqa: E402
from api.indy import router as indy_router  # noqa: E402
from api.registry import router as registry_router  # noqa: E402

app.include_router(health_router)
app.include_router(registry_router)
app.include_router(indy_router)
app.include_router(canvas_router)


if __name__ == "__main__":
    if settings.debug:
        uvicorn.run(
            "main:app",
            host="0.0.0.0",
            port=settings.service_port,
            reload=True,
        )
    else:
        # Block sessions live in process memory, so a single worker keeps
        # every session reachable.
        uvicorn.run(
            "main:app",
            host="0.0.0.0",
            port=settings.service_port,
            timeout_keep_alive=120,
        )
