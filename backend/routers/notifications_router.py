# backend/routers/notifications_router.py
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import false
from sqlalchemy.orm import Session

from database.session import get_db
from models.notification_model import Notification
from schemas.notifications import NotificationOut, NotificationPage
from schemas.sessions import ActionResult
from services.auth_service import SessionContext
from routers.dependencies import get_session_context

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _own(db: Session, user_id: int):
    return db.query(Notification).filter(Notification.user_id == user_id)


@router.get("", response_model=NotificationPage)
def poll_notifications(
    after: Optional[int] = Query(default=None, ge=0),
    is_read: Optional[bool] = Query(default=None),
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    ctx: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
):
    """
    With `after`: rows newer than the cursor, oldest first, so polling clients
    never miss or repeat a row. Without it: newest page first.
    """
    q = _own(db, ctx.user_id)
    if is_read is not None:
        q = q.filter(Notification.is_read == is_read)

    if after is not None:
        rows = q.filter(Notification.id > after).order_by(Notification.id.asc()).limit(limit).all()
        next_cursor = rows[-1].id if rows else after
    else:
        rows = q.order_by(Notification.id.desc()).offset(offset).limit(limit).all()
        next_cursor = max((n.id for n in rows), default=None)

    unread = _own(db, ctx.user_id).filter(Notification.is_read == false()).count()
    return NotificationPage(
        notifications=[NotificationOut.model_validate(n) for n in rows],
        unread_count=unread,
        next_cursor=next_cursor,
    )


@router.put("/read-all", response_model=ActionResult)
def mark_all_read(ctx: SessionContext = Depends(get_session_context), db: Session = Depends(get_db)):
    count = (
        _own(db, ctx.user_id)
        .filter(Notification.is_read == false())
        .update({Notification.is_read: True, Notification.read_at: datetime.utcnow()}, synchronize_session="fetch")
    )
    db.commit()
    return ActionResult(message="All notifications marked as read", count=count)


@router.put("/{notification_id}/read", response_model=NotificationOut)
def mark_read(notification_id: int, ctx: SessionContext = Depends(get_session_context), db: Session = Depends(get_db)):
    n = _own(db, ctx.user_id).filter(Notification.id == notification_id).first()
    if not n:
        raise HTTPException(status_code=404, detail="Notification not found")
    if not n.is_read:
        n.is_read = True
        n.read_at = datetime.utcnow()
        db.commit()
        db.refresh(n)
    return n


@router.delete("/{notification_id}", response_model=ActionResult)
def delete_notification(notification_id: int, ctx: SessionContext = Depends(get_session_context), db: Session = Depends(get_db)):
    n = _own(db, ctx.user_id).filter(Notification.id == notification_id).first()
    if not n:
        raise HTTPException(status_code=404, detail="Notification not found")
    db.delete(n)
    db.commit()
    return ActionResult(message="Notification deleted")
