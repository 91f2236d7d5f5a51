"""
Constants and configuration for the Vigil anomaly engine.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import os
from typing import Dict, List, Optional

from pydantic_settings import BaseSettings


VIGIL_DATABASE_URL = os.getenv("VIGIL_DATABASE_URL", "")
VIGIL_HOST = os.getenv("VIGIL_HOST", "0.0.0.0")
VIGIL_PORT = int(os.getenv("VIGIL_PORT", "4323"))

# detection method identifiers, also used as keys of per-method results
METHOD_ZSCORE = "zscore"
METHOD_IQR = "iqr"
METHOD_SUDDEN_CHANGE = "sudden-change"
METHOD_TREND_BREAK = "trend-break"
METHOD_ISOLATION = "isolation"
METHOD_MULTI_DIMENSIONAL = "multi-dimensional"

ENSEMBLE_METHODS: tuple[str, ...] = (
    METHOD_ZSCORE,
    METHOD_IQR,
    METHOD_SUDDEN_CHANGE,
    METHOD_TREND_BREAK,
    METHOD_ISOLATION,
)

# weight values assigned to severity labels for comparison and ranking
SEVERITY_WEIGHTS: dict[str, int] = {
    "warning": 1,
    "critical": 2,
}

NOTE_INSUFFICIENT_DATA = "Insufficient data"
NOTE_NO_VARIANCE = "No variance in data"
NOTE_ZERO_IQR = "Zero interquartile range; points off the quartile value are critical"
NOTE_TRUNCATED = "Series lengths differ; truncated to the shortest"


class Settings(BaseSettings):
    database_url: Optional[str] = VIGIL_DATABASE_URL or None
    db_pool_size: int = 10
    db_max_overflow: int = 20
    db_pool_timeout: int = 30
    db_pool_recycle: int = 1800

    host: str = VIGIL_HOST
    port: int = VIGIL_PORT

    # z-score detector
    zscore_threshold: float = float(os.getenv("VIGIL_ZSCORE_THRESHOLD", "2.5"))
    zscore_min_samples: int = 3
    zscore_critical_factor: float = 1.5

    # interquartile range detector
    iqr_multiplier: float = float(os.getenv("VIGIL_IQR_MULTIPLIER", "1.5"))
    iqr_min_samples: int = 4
    iqr_critical_deviation: float = 2.0
    iqr_lower_quantile: float = 0.25
    iqr_upper_quantile: float = 0.75

    # sliding-window sudden change detector
    sudden_change_window: int = 5
    sudden_change_threshold: float = 2.0
    sudden_change_critical_factor: float = 1.5

    # windowed slope trend-break detector
    trend_break_window: int = 10
    trend_break_sensitivity: float = 0.5
    trend_break_critical_factor: float = 2.0

    # distance-based isolation scoring
    isolation_contamination: float = 0.1
    isolation_min_samples: int = 10
    isolation_critical_factor: float = 1.5

    # multi-dimensional analysis
    multidim_threshold: float = 2.0
    multidim_min_samples: int = 5
    multidim_min_metrics_affected: int = 2

    # ensemble voting
    ensemble_default_methods: List[str] = [METHOD_ZSCORE, METHOD_IQR, METHOD_SUDDEN_CHANGE]
    ensemble_min_votes: int = 2
    ensemble_max_parallel_tasks: int = 4

    # alerting
    alerts_page_size: int = 50
    alerts_stats_default_hours: int = 24
    alerts_expected_range_fallback: Dict[str, str] = {"note": "See detection details"}

    model_config = {
        "env_prefix": "VIGIL_",
        "extra": "ignore",
    }


settings = Settings()
