"""Append-only audit trail of who did what to which clinic record."""
import logging
from typing import Any, Dict, Optional

from care.models import AuditEvent

logger = logging.getLogger(__name__)


def log_action(*, user, action: str, object_type: Optional[str] = None,
               object_id: Optional[int] = None, detail: Optional[Dict[str, Any]] = None) -> AuditEvent:
    """Record *action*; an anonymous or unsaved actor is stored as no actor."""
    actor = user if getattr(user, 'pk', None) else None
    event = AuditEvent.objects.create(
        user=actor,
        action=action,
        object_type=object_type,
        object_id=object_id,
        detail=detail or {},
    )
    logger.debug('audit %s %s:%s by %s', action, object_type, object_id, getattr(actor, 'pk', None))
    return event
