"""Helpers to record platform activity for the dashboard feed."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4


def record_activity(
    log: List[Dict[str, Any]],
    *,
    type: str,
    message: str,
    target_type: str,
    target_id: Optional[str] = None,
    actor_user_id: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Append a structured entry to the in-memory activity log."""
    entry = {
        "id": f"act_{uuid4().hex[:10]}",
        "type": type,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "message": message,
        "targetType": target_type,
        "targetId": target_id,
        "actorUserId": actor_user_id,
        "metadata": metadata,
    }
    log.append(entry)
    return entry