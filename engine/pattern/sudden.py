"""
Sudden change detection against a trailing window.  Only points before index
``i`` are used to judge ``i``, so a result never changes when more data is
appended and the detector is safe to run on a growing stream.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from typing import List, Sequence

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from config import METHOD_SUDDEN_CHANGE, NOTE_INSUFFICIENT_DATA, settings
from engine.enums import Direction, Severity
from engine.results import DetectionResult, PointAnomaly, SuddenChangeAnomaly
from engine.series import as_series, require_non_negative, require_window

log = logging.getLogger(__name__)


def detect_sudden_changes(
    series: Sequence[float],
    window_size: int | None = None,
    threshold: float | None = None,
) -> DetectionResult:
    if window_size is None:
        window_size = settings.sudden_change_window
    if threshold is None:
        threshold = settings.sudden_change_threshold
    window_size = require_window("window_size", window_size)
    threshold = require_non_negative("threshold", threshold)
    arr = as_series(series)
    params = {"window_size": window_size, "threshold": threshold}

    if arr.size < 2 * window_size:
        log.debug("sudden-change skipped: %d points < %d", arr.size, 2 * window_size)
        return DetectionResult(method=METHOD_SUDDEN_CHANGE, parameters=params, note=NOTE_INSUFFICIENT_DATA)

    # row k is the window that precedes index k + window_size
    windows = sliding_window_view(arr, window_size)[: arr.size - window_size]
    means = windows.mean(axis=1)
    stds = windows.std(axis=1)
    current = arr[window_size:]
    distance = np.abs(current - means)
    deviation = np.divide(distance, stds, out=np.zeros_like(distance), where=stds > 0)

    critical_limit = threshold * settings.sudden_change_critical_factor
    anomalies: List[PointAnomaly] = []
    for k in np.flatnonzero(deviation > threshold):
        mean, std, value = float(means[k]), float(stds[k]), float(current[k])
        anomalies.append(SuddenChangeAnomaly(
            index=int(k) + window_size,
            value=value,
            severity=Severity.from_ratio(float(deviation[k]), critical_limit),
            deviation=float(deviation[k]),
            direction=Direction.spike if value > mean else Direction.drop,
            window_range=(mean - std, mean + std),
        ))

    return DetectionResult(method=METHOD_SUDDEN_CHANGE, anomalies=anomalies, parameters=params)
