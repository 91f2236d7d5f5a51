"""
Health check route to verify service and alert store connectivity.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict

from fastapi import APIRouter

from api.routes.exception import handle_exceptions
from config import settings
from database import connection_test

router = APIRouter(tags=["Health"])


@router.get("/health")
@handle_exceptions
async def health() -> Dict[str, Any]:
    if not settings.database_url:
        return {"status": "ok", "store": "disabled"}
    connected = await asyncio.to_thread(connection_test)
    return {
        "status": "ok",
        "store": "connected" if connected else "unavailable",
    }
