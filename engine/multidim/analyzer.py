"""
Runs the z-score detector over each metric independently and reports the
indices at which several metrics are abnormal at once.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Sequence

import numpy as np

from config import NOTE_INSUFFICIENT_DATA, NOTE_TRUNCATED, settings
from engine.enums import Severity
from engine.results import DetectionResult, MultiDimensionalResult, MultiSeriesAnomaly, ZScoreAnomaly
from engine.series import as_series, require_non_negative
from engine.statistical import detect_zscore

log = logging.getLogger(__name__)


def _severity(affected: int, total: int) -> Severity:
    return Severity.critical if affected >= total / 2 else Severity.warning


def detect_multi_dimensional(
    metrics: Mapping[str, Sequence[float]],
    threshold: float | None = None,
) -> MultiDimensionalResult:
    if threshold is None:
        threshold = settings.multidim_threshold
    threshold = require_non_negative("threshold", threshold)

    names = list(metrics)
    arrays = {name: as_series(metrics[name]) for name in names}
    if not arrays:
        return MultiDimensionalResult(threshold=threshold, note=NOTE_INSUFFICIENT_DATA)

    lengths = {name: arr.size for name, arr in arrays.items()}
    length = min(lengths.values())
    note = None
    if len(set(lengths.values())) > 1:
        log.warning("multi-dimensional: series lengths differ %s, truncating to %d", lengths, length)
        note = NOTE_TRUNCATED
        arrays = {name: arr[:length] for name, arr in arrays.items()}

    if length < settings.multidim_min_samples:
        log.debug("multi-dimensional skipped: %d points < %d", length, settings.multidim_min_samples)
        return MultiDimensionalResult(
            metrics_analyzed=names,
            length=length,
            threshold=threshold,
            note=NOTE_INSUFFICIENT_DATA,
        )

    per_metric: Dict[str, DetectionResult] = {
        name: detect_zscore(arrays[name], threshold) for name in names
    }

    counts = np.zeros(length, dtype=int)
    details: Dict[int, Dict[str, ZScoreAnomaly]] = {}
    for name in names:
        for anomaly in per_metric[name].anomalies:
            counts[anomaly.index] += 1
            details.setdefault(anomaly.index, {})[name] = anomaly

    total = len(names)
    anomalies: List[MultiSeriesAnomaly] = [
        MultiSeriesAnomaly(
            index=int(i),
            metrics_affected=int(counts[i]),
            total_metrics=total,
            severity=_severity(int(counts[i]), total),
            details=details[int(i)],
        )
        for i in np.flatnonzero(counts >= settings.multidim_min_metrics_affected)
    ]

    return MultiDimensionalResult(
        anomalies=anomalies,
        per_metric_results=per_metric,
        metrics_analyzed=names,
        length=length,
        threshold=threshold,
        note=note,
    )
