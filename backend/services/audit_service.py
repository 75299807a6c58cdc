# backend/services/audit_service.py
from typing import Optional

from sqlalchemy.orm import Session

from models.audit_model import AuditLog


def record(db: Session, user_id: Optional[int], action: str, details: Optional[dict] = None, ip: Optional[str] = None) -> AuditLog:
    """Adds an audit row to the current unit of work; committed with the caller's changes."""
    entry = AuditLog(user_id=user_id, action=action, details=details or {}, ip_address=ip)
    db.add(entry)
    return entry
