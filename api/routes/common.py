"""
Shared dependencies for API route modules.

Provides the process-wide :class:`AlertManager`, bound to the session factory
created at start-up, so individual routers stay thin.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Optional

from fastapi import HTTPException

from alerts.manager import AlertManager
from database import get_session_factory

_manager: Optional[AlertManager] = None


def get_alert_manager() -> AlertManager:
    global _manager
    if _manager is None:
        try:
            factory = get_session_factory()
        except RuntimeError as exc:
            raise HTTPException(status_code=503, detail="Alert store is not configured") from exc
        _manager = AlertManager(factory)
    return _manager


def reset_alert_manager() -> None:
    global _manager
    _manager = None
