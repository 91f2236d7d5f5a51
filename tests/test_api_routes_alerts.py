"""
Test cases for alert route handlers.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest
from fastapi import HTTPException

import database
from api.requests import AcknowledgeRequest, AlertCreateRequest
from api.routes import alerts as alerts_route
from api.routes import common
from engine.enums import Severity
from engine.exceptions import PersistenceError


@pytest.fixture
def wired(monkeypatch, alert_manager):
    monkeypatch.setattr(alerts_route, "get_alert_manager", lambda: alert_manager)
    return alert_manager


def _request(severity=Severity.critical, **extra):
    return AlertCreateRequest(
        metric_name="cpu.usage",
        anomaly_type="ensemble",
        value=97.5,
        severity=severity,
        methods=["zscore", "iqr"],
        **extra,
    )


@pytest.mark.asyncio
async def test_alert_lifecycle(wired):
    created = await alerts_route.create_alert(_request(expected_range=(10.0, 60.0)))
    assert created.severity == Severity.critical
    assert created.expected_range == {"low": 10.0, "high": 60.0}

    listing = await alerts_route.list_active_alerts(severity=None)
    assert [a.id for a in listing.items] == [created.id]

    acked = await alerts_route.acknowledge_alert(created.id, AcknowledgeRequest(notes="on it"))
    assert acked.acknowledged is True
    assert acked.notes == "on it"

    listing = await alerts_route.list_active_alerts(severity=None)
    assert listing.items == []


@pytest.mark.asyncio
async def test_acknowledge_without_body(wired):
    created = await alerts_route.create_alert(_request())
    acked = await alerts_route.acknowledge_alert(created.id, None)
    assert acked.acknowledged is True
    assert acked.notes is None


@pytest.mark.asyncio
async def test_list_filters_by_severity(wired):
    await alerts_route.create_alert(_request(Severity.warning))
    critical = await alerts_route.create_alert(_request(Severity.critical))
    listing = await alerts_route.list_active_alerts(severity=Severity.critical)
    assert [a.id for a in listing.items] == [critical.id]


@pytest.mark.asyncio
async def test_acknowledge_unknown_returns_404(wired):
    with pytest.raises(HTTPException) as exc:
        await alerts_route.acknowledge_alert(12345, None)
    assert exc.value.status_code == 404


@pytest.mark.asyncio
async def test_stats(wired):
    await alerts_route.create_alert(_request(Severity.warning))
    await alerts_route.create_alert(_request(Severity.warning))
    stats = await alerts_route.anomaly_stats(hours=24.0)
    assert len(stats) == 1
    assert stats[0].count == 2
    assert stats[0].severity == Severity.warning


@pytest.mark.asyncio
async def test_store_failure_returns_503(wired, monkeypatch):
    def broken(*args, **kwargs):
        raise PersistenceError("alert store select failed")

    monkeypatch.setattr(wired, "get_active_alerts", broken)
    with pytest.raises(HTTPException) as exc:
        await alerts_route.list_active_alerts(severity=None)
    assert exc.value.status_code == 503


@pytest.mark.asyncio
async def test_unconfigured_store_returns_503():
    database.dispose_database()
    common.reset_alert_manager()
    with pytest.raises(HTTPException) as exc:
        await alerts_route.list_active_alerts(severity=None)
    assert exc.value.status_code == 503
