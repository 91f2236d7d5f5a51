"""
Multi-dimensional analysis across several named metrics sampled in lock-step.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.multidim.analyzer import detect_multi_dimensional

__all__ = ["detect_multi_dimensional"]
