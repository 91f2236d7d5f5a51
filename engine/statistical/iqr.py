"""
Interquartile-range outlier detection using nearest-rank quartiles, so results
are reproducible bit-for-bit across implementations (no interpolation).

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import math
from typing import List, Sequence, Tuple

import numpy as np

from config import METHOD_IQR, NOTE_INSUFFICIENT_DATA, NOTE_ZERO_IQR, settings
from engine.enums import Direction, Severity
from engine.results import DetectionResult, IqrAnomaly, PointAnomaly
from engine.series import as_series, require_non_negative

log = logging.getLogger(__name__)


def _nearest_rank(sorted_arr: np.ndarray, quantile: float) -> float:
    return float(sorted_arr[int(math.floor(sorted_arr.size * quantile))])


def _quartiles(arr: np.ndarray) -> Tuple[float, float]:
    ordered = np.sort(arr)
    return (
        _nearest_rank(ordered, settings.iqr_lower_quantile),
        _nearest_rank(ordered, settings.iqr_upper_quantile),
    )


def detect_iqr(series: Sequence[float], multiplier: float | None = None) -> DetectionResult:
    if multiplier is None:
        multiplier = settings.iqr_multiplier
    multiplier = require_non_negative("multiplier", multiplier)
    arr = as_series(series)
    params = {"multiplier": multiplier}

    if arr.size < settings.iqr_min_samples:
        log.debug("iqr skipped: %d points < %d", arr.size, settings.iqr_min_samples)
        return DetectionResult(method=METHOD_IQR, parameters=params, note=NOTE_INSUFFICIENT_DATA)

    q1, q3 = _quartiles(arr)
    iqr = q3 - q1
    lower = q1 - multiplier * iqr
    upper = q3 + multiplier * iqr
    summary = {"q1": q1, "q3": q3, "iqr": iqr, "lower": lower, "upper": upper}

    anomalies: List[PointAnomaly] = []
    for i in np.flatnonzero((arr < lower) | (arr > upper)):
        value = float(arr[i])
        below = value < lower
        if iqr == 0:
            # zero-width bounds: anything off the quartile value is critical
            deviation = 0.0
            severity = Severity.critical
        else:
            deviation = ((lower - value) if below else (value - upper)) / iqr
            severity = Severity.from_ratio(deviation, settings.iqr_critical_deviation)
        anomalies.append(IqrAnomaly(
            index=int(i),
            value=value,
            severity=severity,
            deviation=deviation,
            direction=Direction.low if below else Direction.high,
        ))

    note = NOTE_ZERO_IQR if iqr == 0 else None
    return DetectionResult(method=METHOD_IQR, anomalies=anomalies, parameters=params, summary=summary, note=note)
