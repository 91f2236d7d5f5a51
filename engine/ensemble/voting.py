"""
Ensemble coordination: runs a set of independent detectors over one series and
confirms only the points that at least two of them agree on.

Votes are tallied in a dict keyed by series index and walked in the order the
methods were requested, so the confirmed list does not depend on which
detector finished first when they run concurrently.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from config import (
    METHOD_IQR,
    METHOD_ISOLATION,
    METHOD_SUDDEN_CHANGE,
    METHOD_TREND_BREAK,
    METHOD_ZSCORE,
    settings,
)
from engine.enums import Severity
from engine.isolation import detect_isolation
from engine.options import DetectionOptions
from engine.pattern import detect_sudden_changes, detect_trend_breaks
from engine.results import ConfirmedAnomaly, DetectionResult, EnsembleResult, EnsembleSummary
from engine.series import as_series
from engine.statistical import detect_iqr, detect_zscore

log = logging.getLogger(__name__)

Runner = Callable[[Sequence[float], DetectionOptions], DetectionResult]

RUNNERS: Dict[str, Runner] = {
    METHOD_ZSCORE: lambda s, o: detect_zscore(s, o.threshold),
    METHOD_IQR: lambda s, o: detect_iqr(s, o.multiplier),
    METHOD_SUDDEN_CHANGE: lambda s, o: detect_sudden_changes(s, o.window_size, o.threshold),
    METHOD_TREND_BREAK: lambda s, o: detect_trend_breaks(s, o.window_size, o.sensitivity),
    METHOD_ISOLATION: lambda s, o: detect_isolation(s, o.contamination),
}


@dataclass
class _Vote:
    index: int
    value: float
    methods: List[str] = field(default_factory=list)
    severities: List[Severity] = field(default_factory=list)
    expected_range: Optional[Tuple[float, float]] = None


def tally(methods: Sequence[str], results: Mapping[str, DetectionResult]) -> Dict[int, _Vote]:
    votes: Dict[int, _Vote] = {}
    for method in methods:
        for anomaly in results[method].anomalies:
            vote = votes.get(anomaly.index)
            if vote is None:
                vote = votes[anomaly.index] = _Vote(index=anomaly.index, value=anomaly.value)
            if method in vote.methods:
                continue
            vote.methods.append(method)
            vote.severities.append(anomaly.severity)
            if vote.expected_range is None:
                vote.expected_range = anomaly.expected_range
    return votes


def confirm(votes: Mapping[int, _Vote], min_votes: int | None = None) -> List[ConfirmedAnomaly]:
    if min_votes is None:
        min_votes = settings.ensemble_min_votes
    confirmed = [
        ConfirmedAnomaly(
            index=vote.index,
            value=vote.value,
            methods=tuple(vote.methods),
            severity=Severity.highest(vote.severities),
            expected_range=vote.expected_range,
        )
        for _, vote in sorted(votes.items())
        if len(vote.methods) >= min_votes
    ]
    # stable: equal vote counts stay in index order
    confirmed.sort(key=lambda c: c.votes, reverse=True)
    return confirmed


def _prepare(series: Sequence[float], methods: Optional[Sequence[str]], options: Any) -> tuple[np.ndarray, List[str], DetectionOptions]:
    opts = DetectionOptions.parse(options)
    if methods is not None:
        opts = opts.model_copy(update={"methods": list(methods)})
    opts.validate_values()
    resolved = opts.resolved_methods()
    return as_series(series), resolved, opts


def _assemble(arr: np.ndarray, methods: List[str], results: Dict[str, DetectionResult]) -> EnsembleResult:
    votes = tally(methods, results)
    confirmed = confirm(votes)
    summary = EnsembleSummary(
        data_points=int(arr.size),
        methods_used=methods,
        total_anomalies_found=len(votes),
        confirmed_anomalies=len(confirmed),
        critical_anomalies=sum(1 for c in confirmed if c.severity == Severity.critical),
    )
    log.debug(
        "ensemble over %d points: methods=%s found=%d confirmed=%d",
        arr.size, methods, len(votes), len(confirmed),
    )
    return EnsembleResult(
        method_results={m: results[m] for m in methods},
        confirmed_anomalies=confirmed,
        summary=summary,
    )


def detect_all(
    series: Sequence[float],
    methods: Optional[Sequence[str]] = None,
    options: DetectionOptions | Mapping[str, Any] | None = None,
) -> EnsembleResult:
    arr, resolved, opts = _prepare(series, methods, options)
    results = {method: RUNNERS[method](arr, opts) for method in resolved}
    return _assemble(arr, resolved, results)


async def detect_all_async(
    series: Sequence[float],
    methods: Optional[Sequence[str]] = None,
    options: DetectionOptions | Mapping[str, Any] | None = None,
) -> EnsembleResult:
    arr, resolved, opts = _prepare(series, methods, options)
    semaphore = asyncio.Semaphore(max(1, int(settings.ensemble_max_parallel_tasks)))

    async def _run(method: str) -> DetectionResult:
        async with semaphore:
            return await asyncio.to_thread(RUNNERS[method], arr, opts)

    outputs = await asyncio.gather(*[_run(m) for m in resolved])
    return _assemble(arr, resolved, dict(zip(resolved, outputs)))
