from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

from ..core.enums import AuditAction
from .model import AuditEvent, to_json

logger = logging.getLogger(__name__)


class AuditSink(Protocol):
    def emit(self, event: AuditEvent) -> None:
        raise NotImplementedError


class LoggingAuditSink(AuditSink):
    """Default sink: writes the envelope to the ``attendance_tracker.audit`` log."""

    def __init__(self, log: logging.Logger | None = None):
        self._log = log or logging.getLogger("attendance_tracker.audit")

    def emit(self, event: AuditEvent) -> None:
        self._log.info("audit %s", to_json(event.to_dict()))


class AuditEmitter:
    """Builds envelopes and delivers them fire-and-forget.

    A failing sink is logged and never propagates into the primary operation.
    """

    def __init__(self, sink: AuditSink | None = None):
        self._sink = sink or LoggingAuditSink()

    def emit(
        self,
        *,
        actor: Optional[str],
        action: AuditAction,
        table_name: str,
        record_id: Any,
        after: Any,
        before: Any = None,
    ) -> None:
        event = AuditEvent(
            actor=actor,
            action=action,
            table_name=table_name,
            record_id=record_id,
            before_json=to_json(before),
            after_json=to_json(after),
        )
        try:
            self._sink.emit(event)
        except Exception:
            logger.warning("audit delivery failed for %s %s/%s", action.value, table_name, record_id, exc_info=True)
