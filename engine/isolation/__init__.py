"""
Isolation subpackage for the Vigil engine.

Re-exports :func:`detect_isolation` from :mod:`engine.isolation.distance`.
The scoring is a global average-distance heuristic inspired by isolation
forests; it builds no trees and draws no random samples, so the same input
always yields the same ranking.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.isolation.distance import detect_isolation, isolation_scores

__all__ = ["detect_isolation", "isolation_scores"]
