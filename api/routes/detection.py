"""
Detection routes: single detectors, the voting ensemble and the
multi-dimensional analyzer.  Detection never touches the alert store.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, HTTPException

from api.requests import DetectRequest, EnsembleRequest, MultiDimensionalRequest
from api.responses import DetectionPayload
from api.routes.exception import handle_exceptions
from config import ENSEMBLE_METHODS
from engine.ensemble import RUNNERS, detect_all_async
from engine.multidim import detect_multi_dimensional
from engine.options import DetectionOptions

router = APIRouter(tags=["Detection"])


@router.post("/detect/ensemble", response_model=DetectionPayload)
@handle_exceptions
async def detect_ensemble(req: EnsembleRequest) -> DetectionPayload:
    result = await detect_all_async(req.values, methods=req.methods, options=req.options)
    return DetectionPayload(result=result.to_dict())


@router.post("/detect/multi-dimensional", response_model=DetectionPayload)
@handle_exceptions
async def detect_multi(req: MultiDimensionalRequest) -> DetectionPayload:
    result = await asyncio.to_thread(detect_multi_dimensional, req.metrics, req.threshold)
    return DetectionPayload(result=result.to_dict())


@router.post("/detect/{method}", response_model=DetectionPayload)
@handle_exceptions
async def detect_single(method: str, req: DetectRequest) -> DetectionPayload:
    if method not in ENSEMBLE_METHODS:
        raise HTTPException(status_code=404, detail=f"Unknown detection method: {method}")
    options = DetectionOptions.parse(req.options)
    options.validate_values()
    result = await asyncio.to_thread(RUNNERS[method], req.values, options)
    return DetectionPayload(result=result.to_dict())
