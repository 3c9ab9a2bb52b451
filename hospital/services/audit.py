import logging
from typing import Optional, Any, Dict

from django.contrib.auth import get_user_model
from django.db import DatabaseError, transaction

from hospital.models import AuditEvent

User = get_user_model()
logger = logging.getLogger(__name__)


def log_action(*, user: Optional[User], action: str, object_type: Optional[str]=None, object_id: Optional[int]=None, detail: Optional[Dict[str, Any]]=None) -> Optional[AuditEvent]:
    """Persist an audit trail entry; a failing audit write never breaks the request."""
    logger.info('audit %s %s#%s by %s', action, object_type, object_id, getattr(user, 'username', None))
    try:
        with transaction.atomic():
            return AuditEvent.objects.create(
                user=user if getattr(user, 'pk', None) else None,
                action=action,
                object_type=object_type, object_id=object_id,
                detail=detail or {},
            )
    except DatabaseError:
        logger.warning('could not persist audit event %s', action, exc_info=True)
        return None
