"""
Response models for API endpoints.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

import numpy as np
from pydantic import BaseModel, model_serializer

from alerts.manager import AlertView, AnomalyStat
from engine.enums import Severity


def _coerce(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _coerce(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_coerce(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    return obj


class NpModel(BaseModel):

    @model_serializer(mode="wrap")
    def _serialize(self, handler: Any) -> Any:
        return _coerce(handler(self))


class DetectionPayload(NpModel):
    """Engine result flattened to plain JSON types."""

    result: Dict[str, Any]


class AlertResponse(NpModel):

    id: int
    metric_name: str
    anomaly_type: str
    severity: Severity
    value: Optional[float] = None
    expected_range: Optional[Dict[str, Any]] = None
    detected_at: datetime
    acknowledged: bool
    acknowledged_at: Optional[datetime] = None
    notes: Optional[str] = None

    @classmethod
    def from_view(cls, view: AlertView) -> AlertResponse:
        return cls(
            id=view.id,
            metric_name=view.metric_name,
            anomaly_type=view.anomaly_type,
            severity=view.severity,
            value=view.value,
            expected_range=view.expected_range,
            detected_at=view.detected_at,
            acknowledged=view.acknowledged,
            acknowledged_at=view.acknowledged_at,
            notes=view.notes,
        )


class AlertListResponse(BaseModel):

    items: List[AlertResponse]


class AnomalyStatResponse(NpModel):

    metric_name: str
    severity: Severity
    count: int
    first_seen: datetime
    last_seen: datetime

    @classmethod
    def from_stat(cls, stat: AnomalyStat) -> AnomalyStatResponse:
        return cls(
            metric_name=stat.metric_name,
            severity=stat.severity,
            count=stat.count,
            first_seen=stat.first_seen,
            last_seen=stat.last_seen,
        )
