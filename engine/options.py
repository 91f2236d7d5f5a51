"""
Caller-supplied detection options.  Unknown keys are ignored and missing keys
fall back to each detector's configured default; both snake_case and camelCase
keys are accepted.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from config import ENSEMBLE_METHODS, settings
from engine.exceptions import ConfigurationError
from engine.series import require_fraction, require_non_negative, require_window


class DetectionOptions(BaseModel):
    model_config = ConfigDict(extra="ignore", alias_generator=to_camel, populate_by_name=True)

    threshold: Optional[float] = None
    multiplier: Optional[float] = None
    window_size: Optional[int] = None
    sensitivity: Optional[float] = None
    contamination: Optional[float] = None
    methods: Optional[List[str]] = None

    @classmethod
    def parse(cls, raw: DetectionOptions | Mapping[str, Any] | None) -> DetectionOptions:
        if raw is None:
            return cls()
        if isinstance(raw, cls):
            return raw
        try:
            return cls.model_validate(dict(raw))
        except ValidationError as exc:
            raise ConfigurationError(f"invalid detection options: {exc}") from exc

    def validate_values(self) -> None:
        if self.threshold is not None:
            require_non_negative("threshold", self.threshold)
        if self.multiplier is not None:
            require_non_negative("multiplier", self.multiplier)
        if self.window_size is not None:
            require_window("window_size", self.window_size)
        if self.sensitivity is not None:
            require_non_negative("sensitivity", self.sensitivity)
        if self.contamination is not None:
            require_fraction("contamination", self.contamination)

    def resolved_methods(self) -> List[str]:
        requested = self.methods if self.methods is not None else settings.ensemble_default_methods
        unknown = [m for m in requested if m not in ENSEMBLE_METHODS]
        if unknown:
            raise ConfigurationError(
                f"Unknown method(s) {unknown}. Available methods: {', '.join(ENSEMBLE_METHODS)}"
            )
        methods = list(dict.fromkeys(requested))
        if not methods:
            raise ConfigurationError("at least one detection method is required")
        return methods
