"""
Ensemble subpackage for the Vigil engine.

This module re-exports :func:`detect_all` and :func:`detect_all_async` from
:mod:`engine.ensemble.voting`, giving consumers a clean import path of
``engine.ensemble`` for majority-vote anomaly confirmation.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.ensemble.voting import RUNNERS, detect_all, detect_all_async

__all__ = ["RUNNERS", "detect_all", "detect_all_async"]
