"""
Enumerations for Severity, anomaly Directions and trend-break Types

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from config import SEVERITY_WEIGHTS


class Severity(str, Enum):
    warning = "warning"
    critical = "critical"

    @classmethod
    def from_ratio(cls, value: float, limit: float) -> Severity:
        return cls.critical if value > limit else cls.warning

    @classmethod
    def highest(cls, severities: Iterable[Severity]) -> Severity:
        # an empty iterable is a warning, never an error
        return max(severities, key=lambda s: s.weight(), default=cls.warning)

    def weight(self) -> int:
        return SEVERITY_WEIGHTS[self.value]


class Direction(str, Enum):
    high = "high"
    low = "low"
    spike = "spike"
    drop = "drop"


class TrendType(str, Enum):
    acceleration = "acceleration"
    deceleration = "deceleration"
