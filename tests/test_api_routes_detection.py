"""
Test cases for detection route handlers.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest
from fastapi import HTTPException

from api.requests import DetectRequest, EnsembleRequest, MultiDimensionalRequest
from api.routes import detection
from api.routes import health as health_route
from config import settings

SERIES = [10.0, 11.0] * 10 + [60.0] + [10.0, 11.0] * 2


@pytest.mark.asyncio
async def test_detect_single_method():
    payload = await detection.detect_single("iqr", DetectRequest(values=SERIES))
    assert payload.result["method"] == "iqr"
    assert [a["index"] for a in payload.result["anomalies"]] == [20]


@pytest.mark.asyncio
async def test_detect_single_passes_options():
    req = DetectRequest(values=[10, 10, 10, 10, 100], options={"threshold": 1.5})
    payload = await detection.detect_single("zscore", req)
    assert payload.result["parameters"]["threshold"] == 1.5
    assert payload.result["anomalies"][0]["severity"] == "warning"


@pytest.mark.asyncio
async def test_detect_single_unknown_method():
    with pytest.raises(HTTPException) as exc:
        await detection.detect_single("fourier", DetectRequest(values=SERIES))
    assert exc.value.status_code == 404


@pytest.mark.asyncio
async def test_detect_single_invalid_option():
    with pytest.raises(HTTPException) as exc:
        await detection.detect_single("zscore", DetectRequest(values=SERIES, options={"threshold": -1}))
    assert exc.value.status_code == 422


@pytest.mark.asyncio
async def test_detect_ensemble():
    payload = await detection.detect_ensemble(EnsembleRequest(values=SERIES))
    assert payload.result["summary"]["confirmed_anomalies"] == 1
    assert payload.result["confirmed_anomalies"][0]["index"] == 20


@pytest.mark.asyncio
async def test_detect_ensemble_unknown_method():
    with pytest.raises(HTTPException) as exc:
        await detection.detect_ensemble(EnsembleRequest(values=SERIES, methods=["zscore", "prophet"]))
    assert exc.value.status_code == 422


@pytest.mark.asyncio
async def test_detect_multi_dimensional():
    req = MultiDimensionalRequest(
        metrics={"a": [1.0] * 9 + [20.0], "b": [5.0] * 9 + [-30.0]},
        threshold=2.0,
    )
    payload = await detection.detect_multi(req)
    assert payload.result["anomalies"][0]["index"] == 9
    assert payload.result["anomalies"][0]["metrics_affected"] == 2


@pytest.mark.asyncio
async def test_health_without_store(monkeypatch):
    monkeypatch.setattr(settings, "database_url", None)
    body = await health_route.health()
    assert body == {"status": "ok", "store": "disabled"}
