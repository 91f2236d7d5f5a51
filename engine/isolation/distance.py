"""
Distance-based isolation scoring: a point's score is its mean absolute distance
to every other point, and the top ``contamination`` share of points is flagged.
Quadratic in the series length, intended for batch diagnostics.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import math
from typing import List, Sequence

import numpy as np
from scipy.spatial.distance import pdist, squareform

from config import METHOD_ISOLATION, NOTE_INSUFFICIENT_DATA, settings
from engine.enums import Severity
from engine.results import DetectionResult, IsolationAnomaly, PointAnomaly
from engine.series import as_series, require_fraction

log = logging.getLogger(__name__)


def isolation_scores(arr: np.ndarray) -> np.ndarray:
    distances = squareform(pdist(arr.reshape(-1, 1), metric="cityblock"))
    # the diagonal is zero, so summing rows only counts the other points
    return distances.sum(axis=1) / (arr.size - 1)


def detect_isolation(series: Sequence[float], contamination: float | None = None) -> DetectionResult:
    if contamination is None:
        contamination = settings.isolation_contamination
    contamination = require_fraction("contamination", contamination)
    arr = as_series(series)
    params = {"contamination": contamination}

    if arr.size < settings.isolation_min_samples:
        log.debug("isolation skipped: %d points < %d", arr.size, settings.isolation_min_samples)
        return DetectionResult(method=METHOD_ISOLATION, parameters=params, note=NOTE_INSUFFICIENT_DATA)

    scores = isolation_scores(arr)
    # stable sort keeps ties in index order
    order = np.argsort(-scores, kind="stable")
    count = max(1, int(math.floor(arr.size * contamination)))
    cutoff = float(scores[order[count - 1]])
    critical_limit = cutoff * settings.isolation_critical_factor

    anomalies: List[PointAnomaly] = []
    for i in order[:count]:
        score = float(scores[i])
        anomalies.append(IsolationAnomaly(
            index=int(i),
            value=float(arr[i]),
            severity=Severity.from_ratio(score, critical_limit),
            isolation_score=score,
        ))

    return DetectionResult(
        method=METHOD_ISOLATION,
        anomalies=anomalies,
        parameters=params,
        summary={"threshold": cutoff},
    )
