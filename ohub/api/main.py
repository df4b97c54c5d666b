import logging
import sys
import time
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from ohub.api.deps import get_content_source, get_rules, get_settings
from ohub.shell.http.health import create_health_router, get_site_health

APP_VERSION = "0.1.0"

logger = logging.getLogger("ohub")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Load rules and validate on startup (fail-fast)
    try:
        get_rules()
        logger.info("Rules loaded from %s", settings.rules_path)
    except (FileNotFoundError, ValueError) as e:
        logger.critical("Rules load failed: %s", e)
        sys.exit(1)

    health = get_site_health()
    health.watch_content_source(lambda: get_content_source().is_configured())
    if not get_content_source().is_configured():
        logger.warning("Contentful is not configured; serving fallback content")
    health.mark_started()

    yield


app = FastAPI(
    title="OHUB",
    version=APP_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


@app.middleware("http")
async def record_metrics(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    start = time.time()
    response = await call_next(request)
    get_site_health().record_request(
        (time.time() - start) * 1000, is_error=response.status_code >= 500
    )
    return response


# --- Routers ---
from ohub.api.routes import (  # noqa: E402
    categories,
    diagnostics,
    guidelines,
    opportunities,
    policy_pages,
    public_ssr,
)

app.include_router(categories.router, prefix="/api/categories", tags=["Categories"])
app.include_router(opportunities.router, prefix="/api/opportunities", tags=["Opportunities"])
app.include_router(guidelines.router, prefix="/api/guidelines", tags=["Guidelines"])
app.include_router(policy_pages.router, prefix="/api/policy-pages", tags=["Policy Pages"])
app.include_router(diagnostics.router, prefix="/api", tags=["Diagnostics"])
app.include_router(create_health_router(version=APP_VERSION))
# SSR owns the `/{slug}` catch-all, so it goes last
app.include_router(public_ssr.router, prefix="", tags=["SSR"])


# CORS (Allow Frontend)
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)
