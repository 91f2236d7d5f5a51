"""
Engine Packages for the Vigil anomaly detection engine

Every detector here is a pure function of its inputs: no I/O, no shared state,
and the caller's series is never modified.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.enums import Direction, Severity, TrendType
from engine.ensemble import detect_all, detect_all_async
from engine.isolation import detect_isolation
from engine.multidim import detect_multi_dimensional
from engine.pattern import detect_sudden_changes, detect_trend_breaks
from engine.statistical import detect_iqr, detect_zscore

__all__ = [
    "Direction",
    "Severity",
    "TrendType",
    "detect_all",
    "detect_all_async",
    "detect_isolation",
    "detect_iqr",
    "detect_multi_dimensional",
    "detect_sudden_changes",
    "detect_trend_breaks",
    "detect_zscore",
]
