"""
Entry point for the Vigil anomaly detection API server.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI

from api.routes import router
from api.routes.common import reset_alert_manager
from config import settings
from database import dispose_database, init_database, init_db

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    stream=sys.stdout,
)
log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    if settings.database_url:
        init_database(settings.database_url)
        init_db()
    else:
        log.warning("VIGIL_DATABASE_URL is not set; alert routes will answer 503")
    try:
        yield
    finally:
        reset_alert_manager()
        dispose_database()


app = FastAPI(
    title="Vigil Anomaly Engine",
    description="Statistical and pattern-based anomaly detection with ensemble voting and alert tracking.",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(router, prefix="/api/v1")


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        log_level="info",
        access_log=True,
    )
