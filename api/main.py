"""
Honestra API — Main Application

POST /teleology — Guard a text (default) or analyze a whole document
POST /firewall  — Feed moderation decision with optional summaries
GET  /catalog   — Categories, severity tiers and rule counts
GET  /health    — Health check
"""

from __future__ import annotations

import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request

from honestra import __version__
from honestra.catalog import CATALOG_VERSION, catalog
from honestra.config import settings
from honestra.document import analyze_document
from honestra.firewall import run_firewall
from honestra.guard import guard
from honestra.guard_log import append_entry, make_entry
from honestra.llm.factory import get_provider
from honestra.logging import get_logger, setup_logging
from honestra.policy import PolicyConfig
from honestra.rewriter import diff_spans, resolve_mode
from honestra.schemas.teleology import (
    CatalogResponse,
    FirewallRequest,
    HealthResponse,
    TeleologyRequest,
)
from honestra.summarizer import PurposeSummarizer

logger = get_logger("api")


# ============================================================
# STARTUP / SHUTDOWN
# ============================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    # Fail at startup rather than on the first request
    mode = resolve_mode()
    logger.info(
        "Honestra API starting",
        extra={"catalog_version": CATALOG_VERSION, "rewrite_mode": mode.value},
    )
    if not settings.summaries_enabled:
        logger.info("Purpose summaries disabled (no provider key configured)")
    yield
    logger.info("Honestra API shutting down")


app = FastAPI(
    title="Honestra API",
    description="Teleological-language detection, rewriting and aggregation",
    version=f"{__version__} (catalog {CATALOG_VERSION})",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",")],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
    allow_credentials=False,
)


# ============================================================
# GLOBAL ERROR HANDLER
# ============================================================

@app.exception_handler(Exception)
async def global_error_handler(request: Request, exc: Exception):
    """Catch unhandled exceptions — return structured error, don't leak internals."""
    logger.error(
        f"Unhandled exception: {type(exc).__name__}",
        extra={"error": str(exc), "path": request.url.path, "method": request.method},
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error. The analysis could not be completed."},
    )


# Lazy summarizer; None when no provider key is configured
_summarizer = None


def _get_summarizer():
    global _summarizer
    if _summarizer is None and settings.summaries_enabled:
        _summarizer = PurposeSummarizer(provider=get_provider(settings.LLM_PROVIDER))
    return _summarizer


# ============================================================
# ROUTES
# ============================================================

@app.post("/teleology")
async def teleology(request: TeleologyRequest):
    """Guard a single text, or analyze a document when mode == "document"."""
    text = request.content.strip()
    if not text:
        raise HTTPException(400, "Missing 'text' or 'message' field in request body")

    if request.mode == "document":
        analysis = analyze_document(text)
        result = analysis.to_dict()
        result["catalogVersion"] = CATALOG_VERSION
        return result

    payload = guard(text)
    result = {
        "text": text,
        **payload.to_dict(),
        "guardAnalysis": payload.to_dict(),
        "catalogVersion": CATALOG_VERSION,
    }
    for change in result["changes"]:
        change["diffSpans"] = diff_spans(change["original"], change["rewritten"])

    if settings.GUARD_LOG_PATH:
        entry = make_entry(
            model_reply=text,
            result=payload.to_dict(),
            session_id=request.session_id,
            user_message=request.user_message,
        )
        # The guard result is returned even when the log cannot be written
        try:
            await run_in_threadpool(append_entry, settings.GUARD_LOG_PATH, entry)
        except OSError as e:
            logger.warning(
                f"Guard log write failed: {e}",
                extra={"error": str(e), "error_type": type(e).__name__},
            )

    logger.info(
        "Guard complete",
        extra={"severity": payload.severity, "reasons_count": len(payload.categories)},
    )
    return result


@app.post("/firewall")
async def firewall(request: FirewallRequest):
    """Heuristic teleology analysis mapped to allow / annotate / warn / block."""
    text = request.text or ""
    if not text.strip():
        raise HTTPException(400, "Missing 'text' field in request body.")

    result = await run_firewall(
        text,
        summarizer=_get_summarizer(),
        config=PolicyConfig.from_settings(),
    )
    return result.to_dict()


@app.get("/catalog", response_model=CatalogResponse, response_model_by_alias=True)
async def get_catalog():
    """The detection surface: every category with its tier and rule counts."""
    return {
        "catalog_version": catalog.version,
        "rewrite_mode": resolve_mode().value,
        "total_rules": len(catalog.triggers),
        "categories": catalog.describe(),
    }


@app.get("/health", response_model=HealthResponse, response_model_by_alias=True)
async def health():
    return {
        "status": "operational",
        "version": __version__,
        "catalog_version": CATALOG_VERSION,
        "llm_provider": settings.LLM_PROVIDER,
        "summaries_enabled": settings.summaries_enabled,
    }


# --- Version Headers Middleware ---
@app.middleware("http")
async def add_version_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers["X-Honestra-Version"] = __version__
    response.headers["X-Catalog-Version"] = CATALOG_VERSION
    response.headers["X-Content-Type-Options"] = "nosniff"
    return response


# --- Request Logging Middleware ---
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every API request with method, path, status, duration."""
    path = request.url.path
    if path == "/health":
        return await call_next(request)

    start = time.time()
    response = await call_next(request)
    duration_ms = round((time.time() - start) * 1000, 1)

    logger.info(
        f"{request.method} {path} → {response.status_code} ({duration_ms}ms)",
        extra={
            "method": request.method,
            "path": path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        },
    )
    return response


def run():
    """Serve the API with uvicorn on the configured host and port."""
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
