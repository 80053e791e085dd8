"""Structured logging for GameShelf, persisted alongside the catalog."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from uuid import uuid4

from flask import current_app

from .extensions import db
from .models import SystemLog


@dataclass(frozen=True)
class LogRecord:
    """Structured representation of a log message."""

    component: str
    action: str
    level: str
    result: str
    title: str
    user_summary: str
    technical_details: str
    correlation_id: str
    environment: str


def new_correlation_id() -> str:
    """Return an identifier that ties several log records to one operation."""

    return str(uuid4())


class LogManager:
    """Record and query structured log entries."""

    def __init__(self) -> None:
        self.app = None
        self.available_levels = ["info", "warn", "error"]
        self.available_components: list[str] = []

    def init_app(self, app) -> None:
        """Attach the log manager to the Flask app."""
        self.app = app

    def register_component(self, component: str) -> None:
        """Make a component selectable in the log console filters."""
        if component not in self.available_components:
            self.available_components.append(component)
            self.available_components.sort()

    def _config(self, key: str, default):
        return (self.app or current_app).config.get(key, default)

    def record(
        self,
        *,
        component: str,
        action: str,
        level: str = "info",
        result: str = "success",
        title: str,
        user_summary: str,
        technical_details: str,
        correlation_id: Optional[str] = None,
    ) -> LogRecord:
        """Persist a new log record and return its immutable copy.

        The record is committed immediately, so callers that hold pending
        changes in the session must commit or roll them back first.
        """
        if level not in self.available_levels:
            raise ValueError(f"Unsupported level '{level}'")

        self.register_component(component)
        environment = self._config("ENVIRONMENT", "development")
        correlation = correlation_id or new_correlation_id()

        db.session.add(
            SystemLog(
                component=component,
                action=action,
                level=level,
                result=result,
                title=title[:120],
                user_summary=user_summary,
                technical_details=technical_details,
                correlation_id=correlation,
                environment=environment,
            )
        )
        self._trim_logs(self._config("LOG_RETENTION", 500))
        db.session.commit()

        return LogRecord(
            component=component,
            action=action,
            level=level,
            result=result,
            title=title,
            user_summary=user_summary,
            technical_details=technical_details,
            correlation_id=correlation,
            environment=environment,
        )

    def _trim_logs(self, retention: int) -> None:
        """Keep the number of stored logs under the configured retention."""
        db.session.flush()
        total = SystemLog.query.count()
        if total <= retention:
            return
        excess = total - retention
        oldest_ids = [
            entry.id
            for entry in SystemLog.query.order_by(SystemLog.timestamp, SystemLog.id).limit(excess)
        ]
        if oldest_ids:
            SystemLog.query.filter(SystemLog.id.in_(oldest_ids)).delete(synchronize_session=False)

    def fetch_logs(
        self,
        *,
        level: Optional[str] = None,
        component: Optional[str] = None,
        search: Optional[str] = None,
        limit: int = 50,
    ) -> list[dict[str, object]]:
        """Retrieve structured logs, newest first, with optional filtering."""
        query = SystemLog.query.order_by(SystemLog.timestamp.desc(), SystemLog.id.desc())
        if level and level in self.available_levels:
            query = query.filter_by(level=level)
        if component:
            query = query.filter_by(component=component)
        if search:
            like_pattern = f"%{search}%"
            query = query.filter(
                (SystemLog.title.ilike(like_pattern))
                | (SystemLog.user_summary.ilike(like_pattern))
                | (SystemLog.technical_details.ilike(like_pattern))
                | (SystemLog.correlation_id.ilike(like_pattern))
            )
        return [record.serialize() for record in query.limit(limit).all()]

    def latest_timestamp(self) -> Optional[str]:
        """Return ISO formatted timestamp of the most recent log entry."""
        record = SystemLog.query.order_by(SystemLog.timestamp.desc()).first()
        if not record:
            return None
        return record.timestamp.isoformat(timespec="seconds")


log_manager = LogManager()
