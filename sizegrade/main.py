"""
SizeGrade FastAPI application.

Endpoints:
  GET  /api/v1/categories          — built-in product categories
  GET  /api/v1/categories/{key}    — full category configuration
  POST /api/v1/grading             — graded measurements for target sizes
  POST /api/v1/grading/export      — the same, as CSV
  POST /api/v1/sizing              — best-fit size from body measurements
  POST /api/v1/construction        — construction specs from body measurements
  GET  /health                     — health check
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sizegrade.config import config
from sizegrade.api.routes import categories, construction, grading, sizing
from sizegrade.core.categories import default_registry
from sizegrade.models.schemas import HealthResponse

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(name)-30s  %(levelname)-7s  %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    registry = default_registry()
    logging.getLogger(__name__).info(
        "SizeGrade %s started (%d categories, default '%s')",
        config.version, len(registry), registry.default.key,
    )
    yield


app = FastAPI(
    title=config.app_name,
    version=config.version,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    # rejected inputs may be inf/nan, which JSON cannot carry
    errors = [{k: v for k, v in err.items() if k != "input"} for err in exc.errors()]
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(errors)})


# ── Route registration ─────────────────────────────────────────────────

app.include_router(categories.router, prefix="/api/v1/categories", tags=["categories"])
app.include_router(grading.router, prefix="/api/v1/grading", tags=["grading"])
app.include_router(sizing.router, prefix="/api/v1/sizing", tags=["sizing"])
app.include_router(construction.router, prefix="/api/v1/construction", tags=["construction"])


@app.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(status="ok", version=config.version)
