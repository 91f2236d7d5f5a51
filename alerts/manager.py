"""
Alert lifecycle for confirmed anomalies: raising durable alerts, acknowledging
them exactly once, and aggregate queries over recent alerts.

An alert is either open (``acknowledged`` false) or acknowledged; a second
acknowledgement leaves the stored record untouched.  Store failures surface as
:class:`PersistenceError` and are never retried here; the scheduler that
drives escalation owns retry policy.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterator, List, Optional, Union

from sqlalchemy import desc, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from config import settings
from db_models import AnomalyAlert
from engine.enums import Severity
from engine.exceptions import AlertNotFound, ConfigurationError, PersistenceError
from engine.results import ConfirmedAnomaly, MultiSeriesAnomaly, PointAnomaly
from engine.series import require_positive

log = logging.getLogger(__name__)

Escalation = Union[ConfirmedAnomaly, MultiSeriesAnomaly, PointAnomaly]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    # sqlite hands back naive datetimes; everything is stored in UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _coerce_severity(severity: Union[Severity, str, None]) -> Optional[Severity]:
    if severity is None or isinstance(severity, Severity):
        return severity
    try:
        return Severity(str(severity).strip().lower())
    except ValueError as exc:
        allowed = ", ".join(s.value for s in Severity)
        raise ConfigurationError(f"Unknown severity {severity!r}. Expected one of: {allowed}") from exc


@dataclass
class AlertView:
    id: int
    metric_name: str
    anomaly_type: str
    severity: Severity
    value: Optional[float]
    expected_range: Optional[Dict[str, Any]]
    detected_at: datetime
    acknowledged: bool
    acknowledged_at: Optional[datetime] = None
    notes: Optional[str] = None


@dataclass
class AnomalyStat:
    metric_name: str
    severity: Severity
    count: int
    first_seen: datetime
    last_seen: datetime


def _to_view(row: AnomalyAlert) -> AlertView:
    return AlertView(
        id=row.id,
        metric_name=row.metric_name,
        anomaly_type=row.anomaly_type,
        severity=Severity(row.severity),
        value=row.value,
        expected_range=row.expected_range,
        detected_at=_aware(row.detected_at),
        acknowledged=bool(row.acknowledged),
        acknowledged_at=_aware(row.acknowledged_at),
        notes=row.notes,
    )


def _expected_range(anomaly: Escalation) -> Dict[str, Any]:
    bounds = anomaly.expected_range
    if bounds is None:
        return dict(settings.alerts_expected_range_fallback)
    low, high = bounds
    return {"low": float(low), "high": float(high)}


class AlertManager:
    def __init__(self, session_factory: sessionmaker, page_size: int | None = None) -> None:
        self._session_factory = session_factory
        self._page_size = page_size if page_size is not None else settings.alerts_page_size

    @contextmanager
    def _session(self, action: str) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            log.error("Alert store %s failed: %s", action, exc)
            raise PersistenceError(f"alert store {action} failed: {exc}") from exc
        finally:
            session.close()

    def create_alert(self, metric_name: str, anomaly: Escalation, anomaly_type: str) -> AlertView:
        if not metric_name or not str(metric_name).strip():
            raise ConfigurationError("metric_name must not be empty")
        if not anomaly_type or not str(anomaly_type).strip():
            raise ConfigurationError("anomaly_type must not be empty")

        value = anomaly.value
        row = AnomalyAlert(
            metric_name=metric_name,
            anomaly_type=anomaly_type,
            severity=Severity(anomaly.severity).value,
            value=float(value) if value is not None else None,
            expected_range=_expected_range(anomaly),
            detected_at=_utcnow(),
            acknowledged=False,
        )
        with self._session("insert") as db:
            db.add(row)
            db.flush()
            view = _to_view(row)
        log.info("Alert %d raised: %s %s severity=%s", view.id, metric_name, anomaly_type, view.severity.value)
        return view

    def get_active_alerts(self, severity: Union[Severity, str, None] = None) -> List[AlertView]:
        wanted = _coerce_severity(severity)
        stmt = select(AnomalyAlert).where(AnomalyAlert.acknowledged.is_(False))
        if wanted is not None:
            stmt = stmt.where(AnomalyAlert.severity == wanted.value)
        stmt = stmt.order_by(AnomalyAlert.detected_at.desc(), AnomalyAlert.id.desc()).limit(self._page_size)
        with self._session("select") as db:
            return [_to_view(row) for row in db.scalars(stmt).all()]

    def acknowledge_alert(self, alert_id: int, notes: str | None = None) -> AlertView:
        with self._session("update") as db:
            # the acknowledged guard makes repeat calls a no-op
            result = db.execute(
                update(AnomalyAlert)
                .where(AnomalyAlert.id == alert_id, AnomalyAlert.acknowledged.is_(False))
                .values(acknowledged=True, acknowledged_at=_utcnow(), notes=notes)
            )
            row = db.get(AnomalyAlert, alert_id, populate_existing=True)
            if row is None:
                raise AlertNotFound(f"alert {alert_id} does not exist")
            view = _to_view(row)
        if result.rowcount:
            log.info("Alert %d acknowledged", alert_id)
        else:
            log.debug("Alert %d was already acknowledged", alert_id)
        return view

    def get_anomaly_stats(self, hours: float | None = None) -> List[AnomalyStat]:
        if hours is None:
            hours = settings.alerts_stats_default_hours
        hours = require_positive("hours", hours)
        cutoff = _utcnow() - timedelta(hours=hours)
        count = func.count(AnomalyAlert.id).label("alert_count")
        stmt = (
            select(
                AnomalyAlert.metric_name,
                AnomalyAlert.severity,
                count,
                func.min(AnomalyAlert.detected_at).label("first_seen"),
                func.max(AnomalyAlert.detected_at).label("last_seen"),
            )
            .where(AnomalyAlert.detected_at > cutoff)
            .group_by(AnomalyAlert.metric_name, AnomalyAlert.severity)
            .order_by(desc(count), AnomalyAlert.metric_name, AnomalyAlert.severity)
        )
        with self._session("aggregate") as db:
            rows = db.execute(stmt).all()
        return [
            AnomalyStat(
                metric_name=row.metric_name,
                severity=Severity(row.severity),
                count=int(row.alert_count),
                first_seen=_aware(row.first_seen),
                last_seen=_aware(row.last_seen),
            )
            for row in rows
        ]
