from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional

from ..core.enums import AuditAction


def to_json(payload: Any) -> Optional[str]:
    if payload is None:
        return None
    return json.dumps(payload, default=str, sort_keys=True)


@dataclass(frozen=True)
class AuditEvent:
    """Envelope handed to the audit-log collaborator after a successful write."""

    actor: Optional[str]
    action: AuditAction
    table_name: str
    record_id: Any
    after_json: Optional[str]
    before_json: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "actor": self.actor,
            "action": self.action.value,
            "tableName": self.table_name,
            "recordID": None if self.record_id is None else str(self.record_id),
            "beforeJson": self.before_json,
            "afterJson": self.after_json,
        }
