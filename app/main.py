import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request

from app.api.routes import health, normalize, offers
from app.core.config import settings
from app.core.logging import get_logger
from app.services.dedupe_store import init_dedupe_store, shutdown_dedupe_store


log = get_logger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info(f"Starting offer normalizer in {settings.ENV.upper()} mode (docs={settings.docs_enabled})")

    # The store lives for the whole process; its janitor is tied to this lifespan
    store = init_dedupe_store()
    log.info(
        f"Dedupe store ready | ttl={settings.DEDUPE_TTL_SECONDS}s "
        f"sweep_interval={settings.DEDUPE_SWEEP_INTERVAL_SECONDS}s janitor={store.janitor_running}"
    )

    yield

    log.info("Shutting down dedupe store...")
    await shutdown_dedupe_store()
    log.info("Application shutdown complete")


app = FastAPI(
    title="Offer Normalizer",
    description="Normalizes provider offer payloads into canonical offers and suppresses duplicates",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.docs_enabled else None,
    redoc_url="/redoc" if settings.docs_enabled else None,
    openapi_url="/openapi.json" if settings.docs_enabled else None,
    debug=settings.debug_enabled,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    latency_ms = int((time.perf_counter() - start) * 1000)
    log.debug(f"{request.method} {request.url.path} -> {response.status_code} ({latency_ms}ms)")
    return response


app.include_router(health.router)
app.include_router(normalize.router)
app.include_router(offers.router)


def run() -> None:
    """Serve the API with uvicorn on the configured host/port."""
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    run()
