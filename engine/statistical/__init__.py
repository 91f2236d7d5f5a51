"""
Statistical outlier detectors for a flat numeric series.

This package re-exports :func:`detect_zscore` and :func:`detect_iqr` so
consumers can import them from ``engine.statistical``.  Both compare every
point against a global summary of the series (mean/standard deviation or
quartiles) and never look at ordering.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.statistical.iqr import detect_iqr
from engine.statistical.zscore import detect_zscore

__all__ = ["detect_iqr", "detect_zscore"]
