from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from engine.enums import Severity


class DetectRequest(BaseModel):
    values: List[float]
    options: Dict[str, Any] = Field(default_factory=dict)


class EnsembleRequest(BaseModel):
    values: List[float]
    methods: Optional[List[str]] = None
    options: Dict[str, Any] = Field(default_factory=dict)


class MultiDimensionalRequest(BaseModel):
    metrics: Dict[str, List[float]]
    threshold: Optional[float] = None


class AlertCreateRequest(BaseModel):
    metric_name: str = Field(min_length=1, max_length=100)
    anomaly_type: str = Field(min_length=1, max_length=50)
    index: int = Field(default=0, ge=0)
    value: Optional[float] = None
    severity: Severity
    methods: List[str] = Field(default_factory=list)
    expected_range: Optional[Tuple[float, float]] = None


class AcknowledgeRequest(BaseModel):
    notes: Optional[str] = None
