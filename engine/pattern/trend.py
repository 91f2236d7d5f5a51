"""
Trend break detection: compares the least-squares slope of the window before a
point with the window starting at it.

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

from config import METHOD_TREND_BREAK, NOTE_INSUFFICIENT_DATA, settings
from engine.enums import Severity, TrendType
from engine.results import DetectionResult, PointAnomaly, TrendBreakAnomaly
from engine.series import as_series, require_non_negative, require_window

log = logging.getLogger(__name__)


def _window_slopes(arr: np.ndarray, window_size: int) -> np.ndarray:
    """Slope of every length-``window_size`` window against positions 0..w-1."""
    windows = sliding_window_view(arr, window_size)
    x = np.arange(window_size, dtype=float) - (window_size - 1) / 2.0
    denominator = float(np.sum(x * x))
    if denominator == 0:
        return np.zeros(windows.shape[0])
    centered = windows - windows.mean(axis=1, keepdims=True)
    return centered @ x / denominator


def detect_trend_breaks(
    series: Sequence[float],
    window_size: int | None = None,
    sensitivity: float | None = None,
) -> DetectionResult:
    if window_size is None:
        window_size = settings.trend_break_window
    if sensitivity is None:
        sensitivity = settings.trend_break_sensitivity
    window_size = require_window("window_size", window_size)
    sensitivity = require_non_negative("sensitivity", sensitivity)
    arr = as_series(series)
    params = {"window_size": window_size, "sensitivity": sensitivity}

    n = arr.size
    if n < 3 * window_size:
        log.debug("trend-break skipped: %d points < %d", n, 3 * window_size)
        return DetectionResult(method=METHOD_TREND_BREAK, parameters=params, note=NOTE_INSUFFICIENT_DATA)

    slopes = _window_slopes(arr, window_size)
    # index i in [w, n - w): "before" starts at i - w, "after" starts at i
    before = slopes[: n - 2 * window_size]
    after = slopes[window_size: n - window_size]
    change = np.abs(after - before)

    critical_limit = sensitivity * settings.trend_break_critical_factor
    anomalies: List[PointAnomaly] = []
    for k in np.flatnonzero(change > sensitivity):
        i = int(k) + window_size
        anomalies.append(TrendBreakAnomaly(
            index=i,
            value=float(arr[i]),
            severity=Severity.from_ratio(float(change[k]), critical_limit),
            slope_before=float(before[k]),
            slope_after=float(after[k]),
            slope_change=float(change[k]),
            direction=TrendType.acceleration if after[k] > before[k] else TrendType.deceleration,
        ))

    return DetectionResult(method=METHOD_TREND_BREAK, anomalies=anomalies, parameters=params)
