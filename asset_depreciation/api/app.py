"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from asset_depreciation.api.routes import depreciation, reports
from asset_depreciation.config import settings

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Asset Depreciation",
    description="Depreciation schedules, book values, and month-end runs for fixed assets",
    version="0.1.0",
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(depreciation.router)
app.include_router(reports.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
