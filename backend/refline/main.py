"""RefLine Grid Generator — FastAPI application entry point."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from refline.config import settings
from refline.api.routes_parse import router as parse_router
from refline.api.routes_generate import router as generate_router
from refline.api.routes_export import router as export_router

VERSION = "0.1.0"

app = FastAPI(
    title=settings.app_name,
    version=VERSION,
    debug=settings.debug,
    description="Generate structural reference-line grid drawings and export them to DXF.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(parse_router, prefix="/api")
app.include_router(generate_router, prefix="/api")
app.include_router(export_router, prefix="/api")


@app.get("/api/health")
async def health():
    return {"status": "ok", "version": VERSION}
