"""
Test cases for the distance-based isolation detector.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import numpy as np
import pytest

from config import NOTE_INSUFFICIENT_DATA
from engine.enums import Severity
from engine.exceptions import ConfigurationError
from engine.isolation import detect_isolation, isolation_scores

DATA = [10, 11, 10, 12, 11, 10, 11, 12, 10, 100]


def test_isolation_scores_are_mean_absolute_distance():
    scores = isolation_scores(np.asarray(DATA, dtype=float))
    assert scores[9] == pytest.approx(803 / 9)
    assert scores[3] == pytest.approx(11.0)
    assert scores[0] == pytest.approx(97 / 9)


def test_isolation_marks_top_fraction():
    result = detect_isolation(DATA, contamination=0.2)
    # ties keep index order
    assert result.indices == [9, 3]
    assert result.anomalies[0].severity == Severity.critical
    assert result.anomalies[1].severity == Severity.warning
    assert result.summary["threshold"] == pytest.approx(11.0)


def test_isolation_flags_at_least_one_point():
    result = detect_isolation(DATA, contamination=0.01)
    assert result.indices == [9]
    # the only selected point is the cutoff itself
    assert result.anomalies[0].severity == Severity.warning


def test_isolation_needs_ten_points():
    result = detect_isolation(DATA[:9])
    assert result.anomalies == []
    assert result.note == NOTE_INSUFFICIENT_DATA


@pytest.mark.parametrize("contamination", [0.0, -0.1, 1.5])
def test_isolation_rejects_bad_contamination(contamination):
    with pytest.raises(ConfigurationError):
        detect_isolation(DATA, contamination=contamination)


def test_isolation_is_deterministic():
    first = detect_isolation(DATA, contamination=0.3)
    second = detect_isolation(DATA, contamination=0.3)
    assert first.to_dict() == second.to_dict()
