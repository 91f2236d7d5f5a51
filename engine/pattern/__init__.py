"""
Pattern detectors that compare each point against its local neighbourhood
rather than the whole series: a trailing-window sudden change detector and a
windowed least-squares trend break detector.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.pattern.sudden import detect_sudden_changes
from engine.pattern.trend import detect_trend_breaks

__all__ = ["detect_sudden_changes", "detect_trend_breaks"]
