from __future__ import annotations

import asyncio
from typing import List, Optional

from fastapi import APIRouter, Query, status

from api.requests import AcknowledgeRequest, AlertCreateRequest
from api.responses import AlertListResponse, AlertResponse, AnomalyStatResponse
from api.routes.common import get_alert_manager
from api.routes.exception import handle_exceptions
from engine.enums import Severity
from engine.results import ConfirmedAnomaly

router = APIRouter(tags=["Alerts"])


@router.post("/alerts", response_model=AlertResponse, status_code=status.HTTP_201_CREATED)
@handle_exceptions
async def create_alert(payload: AlertCreateRequest) -> AlertResponse:
    anomaly = ConfirmedAnomaly(
        index=payload.index,
        value=payload.value,
        methods=tuple(payload.methods),
        severity=payload.severity,
        expected_range=payload.expected_range,
    )
    view = await asyncio.to_thread(
        get_alert_manager().create_alert, payload.metric_name, anomaly, payload.anomaly_type
    )
    return AlertResponse.from_view(view)


@router.get("/alerts", response_model=AlertListResponse)
@handle_exceptions
async def list_active_alerts(severity: Optional[Severity] = Query(default=None)) -> AlertListResponse:
    views = await asyncio.to_thread(get_alert_manager().get_active_alerts, severity)
    return AlertListResponse(items=[AlertResponse.from_view(v) for v in views])


@router.post("/alerts/{alert_id}/acknowledge", response_model=AlertResponse)
@handle_exceptions
async def acknowledge_alert(alert_id: int, payload: Optional[AcknowledgeRequest] = None) -> AlertResponse:
    notes = payload.notes if payload is not None else None
    view = await asyncio.to_thread(get_alert_manager().acknowledge_alert, alert_id, notes)
    return AlertResponse.from_view(view)


@router.get("/alerts/stats", response_model=List[AnomalyStatResponse])
@handle_exceptions
async def anomaly_stats(hours: float = Query(default=24.0, gt=0, le=24 * 365)) -> List[AnomalyStatResponse]:
    stats = await asyncio.to_thread(get_alert_manager().get_anomaly_stats, hours)
    return [AnomalyStatResponse.from_stat(s) for s in stats]
