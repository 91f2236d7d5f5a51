"""
Result values produced by the detectors, the multi-dimensional analyzer and the
ensemble vote.  Each point anomaly is a variant tagged by its ``method`` so the
fields a detector reports are checked by construction instead of being optional
keys on a shared record.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from config import (
    METHOD_IQR,
    METHOD_ISOLATION,
    METHOD_MULTI_DIMENSIONAL,
    METHOD_SUDDEN_CHANGE,
    METHOD_TREND_BREAK,
    METHOD_ZSCORE,
)
from engine.enums import Direction, Severity, TrendType


def _plain(obj: Any) -> Any:
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, dict):
        return {k: _plain(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_plain(v) for v in obj]
    return obj


def _fields(obj: Any) -> Dict[str, Any]:
    return {f.name: _plain(getattr(obj, f.name)) for f in dataclasses.fields(obj)}


@dataclass(frozen=True)
class PointAnomaly:
    method: ClassVar[str] = ""

    index: int
    value: float
    severity: Severity

    @property
    def expected_range(self) -> Optional[Tuple[float, float]]:
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {"method": self.method, **_fields(self)}


@dataclass(frozen=True)
class ZScoreAnomaly(PointAnomaly):
    method: ClassVar[str] = METHOD_ZSCORE

    z_score: float
    direction: Direction


@dataclass(frozen=True)
class IqrAnomaly(PointAnomaly):
    method: ClassVar[str] = METHOD_IQR

    deviation: float
    direction: Direction


@dataclass(frozen=True)
class SuddenChangeAnomaly(PointAnomaly):
    method: ClassVar[str] = METHOD_SUDDEN_CHANGE

    deviation: float
    direction: Direction
    window_range: Tuple[float, float]

    @property
    def expected_range(self) -> Optional[Tuple[float, float]]:
        return self.window_range


@dataclass(frozen=True)
class TrendBreakAnomaly(PointAnomaly):
    method: ClassVar[str] = METHOD_TREND_BREAK

    slope_before: float
    slope_after: float
    slope_change: float
    direction: TrendType


@dataclass(frozen=True)
class IsolationAnomaly(PointAnomaly):
    method: ClassVar[str] = METHOD_ISOLATION

    isolation_score: float


@dataclass(frozen=True)
class DetectionResult:
    """Output of one detector over one series.

    ``note`` is set when the detector has no opinion (too few points, no
    variance); that is data, not a failure.  ``parameters`` echoes the
    resolved arguments and ``summary`` holds the method's statistics.
    """

    method: str
    anomalies: List[PointAnomaly] = field(default_factory=list)
    parameters: Dict[str, Any] = field(default_factory=dict)
    summary: Dict[str, float] = field(default_factory=dict)
    note: Optional[str] = None

    @property
    def indices(self) -> List[int]:
        return [a.index for a in self.anomalies]

    def to_dict(self) -> Dict[str, Any]:
        return _fields(self)


@dataclass(frozen=True)
class ConfirmedAnomaly:
    index: int
    value: float
    methods: Tuple[str, ...]
    severity: Severity
    expected_range: Optional[Tuple[float, float]] = None

    @property
    def votes(self) -> int:
        return len(self.methods)

    def to_dict(self) -> Dict[str, Any]:
        return _fields(self)


@dataclass(frozen=True)
class MultiSeriesAnomaly:
    index: int
    metrics_affected: int
    total_metrics: int
    severity: Severity
    details: Dict[str, ZScoreAnomaly]

    # the analyzer compares indices, not values; there is no single value
    value: ClassVar[Optional[float]] = None
    expected_range: ClassVar[Optional[Tuple[float, float]]] = None

    def to_dict(self) -> Dict[str, Any]:
        return _fields(self)


@dataclass(frozen=True)
class MultiDimensionalResult:
    method: ClassVar[str] = METHOD_MULTI_DIMENSIONAL

    anomalies: List[MultiSeriesAnomaly] = field(default_factory=list)
    per_metric_results: Dict[str, DetectionResult] = field(default_factory=dict)
    metrics_analyzed: List[str] = field(default_factory=list)
    length: int = 0
    threshold: float = 0.0
    note: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"method": self.method, **_fields(self)}


@dataclass(frozen=True)
class EnsembleSummary:
    data_points: int
    methods_used: List[str]
    total_anomalies_found: int
    confirmed_anomalies: int
    critical_anomalies: int

    def to_dict(self) -> Dict[str, Any]:
        return _fields(self)


@dataclass(frozen=True)
class EnsembleResult:
    method_results: Dict[str, DetectionResult]
    confirmed_anomalies: List[ConfirmedAnomaly]
    summary: EnsembleSummary

    def to_dict(self) -> Dict[str, Any]:
        return _fields(self)
