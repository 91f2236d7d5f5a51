"""
Test cases for the multi-dimensional analyzer.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from config import NOTE_INSUFFICIENT_DATA, NOTE_TRUNCATED
from engine.enums import Severity
from engine.multidim import detect_multi_dimensional

SPIKE_A = [1.0] * 9 + [20.0]
SPIKE_B = [5.0] * 9 + [-30.0]


def test_coincident_spikes_are_reported():
    result = detect_multi_dimensional({"a": SPIKE_A, "b": SPIKE_B}, threshold=2.0)
    assert len(result.anomalies) == 1
    hit = result.anomalies[0]
    assert hit.index == 9
    assert hit.metrics_affected == 2
    assert hit.total_metrics == 2
    assert hit.severity == Severity.critical
    assert set(hit.details) == {"a", "b"}
    assert result.metrics_analyzed == ["a", "b"]
    assert result.length == 10
    assert result.note is None


def test_minority_of_metrics_is_a_warning():
    flat = [3.0] * 10
    metrics = {"a": SPIKE_A, "b": SPIKE_B, "c": flat, "d": flat, "e": flat}
    result = detect_multi_dimensional(metrics, threshold=2.0)
    assert [a.index for a in result.anomalies] == [9]
    assert result.anomalies[0].severity == Severity.warning


def test_single_metric_spike_is_not_reported():
    metrics = {"a": SPIKE_A, "b": [5.0] * 10}
    result = detect_multi_dimensional(metrics, threshold=2.0)
    assert result.anomalies == []
    assert result.per_metric_results["a"].indices == [9]


def test_mismatched_lengths_are_truncated():
    metrics = {"a": SPIKE_A + [1.0, 1.0], "b": SPIKE_B}
    result = detect_multi_dimensional(metrics, threshold=2.0)
    assert result.length == 10
    assert result.note == NOTE_TRUNCATED
    assert result.per_metric_results["a"].summary["count"] == 10
    assert [a.index for a in result.anomalies] == [9]


def test_short_series_yield_insufficient_data():
    result = detect_multi_dimensional({"a": [1, 2, 3, 4], "b": [4, 3, 2, 1]})
    assert result.anomalies == []
    assert result.note == NOTE_INSUFFICIENT_DATA


def test_empty_metric_map():
    result = detect_multi_dimensional({})
    assert result.anomalies == []
    assert result.note == NOTE_INSUFFICIENT_DATA


def test_result_serializes_nested_details():
    payload = detect_multi_dimensional({"a": SPIKE_A, "b": SPIKE_B}, threshold=2.0).to_dict()
    assert payload["method"] == "multi-dimensional"
    detail = payload["anomalies"][0]["details"]["a"]
    assert detail["method"] == "zscore"
    assert detail["direction"] == "high"
    assert payload["anomalies"][0]["severity"] == "critical"
