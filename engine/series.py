"""
Input handling shared by every detector: converting a caller-supplied series
into an owned float array and failing fast on malformed parameters.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
import numbers
from typing import Sequence

import numpy as np

from engine.exceptions import ConfigurationError


def as_series(values: Sequence[float]) -> np.ndarray:
    # np.array always copies, so the caller's sequence is never touched
    try:
        arr = np.array(values, dtype=float)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"series must be a sequence of numbers: {exc}") from exc
    if arr.ndim != 1:
        raise ConfigurationError(f"series must be one-dimensional, got shape {arr.shape}")
    if arr.size and not np.isfinite(arr).all():
        raise ConfigurationError("series contains non-finite values")
    return arr


def require_positive(name: str, value: float) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real) or not math.isfinite(value):
        raise ConfigurationError(f"{name} must be a finite number, got {value!r}")
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value!r}")
    return float(value)


def require_non_negative(name: str, value: float) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real) or not math.isfinite(value):
        raise ConfigurationError(f"{name} must be a finite number, got {value!r}")
    if value < 0:
        raise ConfigurationError(f"{name} must not be negative, got {value!r}")
    return float(value)


def require_window(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value!r}")
    return int(value)


def require_fraction(name: str, value: float) -> float:
    value = require_positive(name, value)
    if value > 1.0:
        raise ConfigurationError(f"{name} must be within (0, 1], got {value!r}")
    return value
