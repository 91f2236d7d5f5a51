"""
Z-score outlier detection: flags points lying more than ``threshold``
population standard deviations away from the series mean.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from typing import List, Sequence

import numpy as np
from scipy.stats import zscore

from config import METHOD_ZSCORE, NOTE_INSUFFICIENT_DATA, NOTE_NO_VARIANCE, settings
from engine.enums import Direction, Severity
from engine.results import DetectionResult, PointAnomaly, ZScoreAnomaly
from engine.series import as_series, require_non_negative

log = logging.getLogger(__name__)


def _direction(z: float) -> Direction:
    return Direction.high if z > 0 else Direction.low


def detect_zscore(series: Sequence[float], threshold: float | None = None) -> DetectionResult:
    if threshold is None:
        threshold = settings.zscore_threshold
    threshold = require_non_negative("threshold", threshold)
    arr = as_series(series)
    params = {"threshold": threshold}

    if arr.size < settings.zscore_min_samples:
        log.debug("zscore skipped: %d points < %d", arr.size, settings.zscore_min_samples)
        return DetectionResult(method=METHOD_ZSCORE, parameters=params, note=NOTE_INSUFFICIENT_DATA)

    mean = float(np.mean(arr))
    std = float(np.std(arr))
    summary = {"mean": mean, "std_dev": std, "count": int(arr.size)}
    if std == 0:
        return DetectionResult(method=METHOD_ZSCORE, parameters=params, summary=summary, note=NOTE_NO_VARIANCE)

    scores = zscore(arr, ddof=0)
    critical_limit = threshold * settings.zscore_critical_factor
    anomalies: List[PointAnomaly] = []
    for i in np.flatnonzero(np.abs(scores) > threshold):
        z = float(scores[i])
        anomalies.append(ZScoreAnomaly(
            index=int(i),
            value=float(arr[i]),
            severity=Severity.from_ratio(abs(z), critical_limit),
            z_score=z,
            direction=_direction(z),
        ))

    return DetectionResult(method=METHOD_ZSCORE, anomalies=anomalies, parameters=params, summary=summary)
