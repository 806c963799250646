# -*- coding: utf-8 -*-
"""
Coaching platform API

Client onboarding, macro targets, meal/training plans and weekly check-ins, plus the coach
triage and override surface.
"""

from __future__ import annotations

import os

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .adjustments.api import router as adjustments_router
from .app_db import init_app_db
from .auth.api import router as auth_router
from .auth.security import get_current_user_from_request
from .checkins.api import photos_router
from .checkins.api import router as checkins_router
from .coach.api import router as coach_router
from .config import settings
from .macros.api import router as macros_router
from .onboarding.api import router as onboarding_router
from .plans.api import router as plans_router
from .profiles.api import router as payments_router

app = FastAPI(
    title="Coaching platform",
    description="Versioned client plans, coach overrides and check-in triage",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def _startup_init_db() -> None:
    init_app_db(settings.app_db_path)


# Ensure the app DB exists even when lifespan events are not triggered (e.g. some test clients).
init_app_db(settings.app_db_path)


_AUTH_EXEMPT_PREFIXES = (
    "/api/auth/login",
    "/api/auth/register",
    "/api/docs",
    "/api/redoc",
    "/api/openapi.json",
)


@app.middleware("http")
async def _auth_gate(request: Request, call_next):
    path = request.url.path
    if path.startswith("/api") and path != "/api/health" and not any(path.startswith(p) for p in _AUTH_EXEMPT_PREFIXES):
        try:
            user = get_current_user_from_request(request)
            request.state.user = user
        except HTTPException as exc:
            return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
    return await call_next(request)


app.include_router(auth_router)
app.include_router(onboarding_router)
app.include_router(macros_router)
app.include_router(plans_router)
app.include_router(checkins_router)
app.include_router(photos_router)
app.include_router(adjustments_router)
app.include_router(coach_router)
app.include_router(payments_router)


@app.get("/api/health")
def health() -> dict:
    return {"ok": True}


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    host = os.environ.get("COACHHUB_HOST") or os.environ.get("HOST") or "127.0.0.1"
    port_raw = os.environ.get("COACHHUB_PORT") or os.environ.get("PORT") or "8000"
    try:
        port = int(port_raw)
    except ValueError:
        port = 8000

    uvicorn.run("coachhub.api:app", host=host, port=port, reload=False)
