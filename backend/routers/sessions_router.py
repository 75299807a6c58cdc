# backend/routers/sessions_router.py
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.session import get_db
from models.session_model import UserSession
from schemas.sessions import SessionOut, SessionList, ExtendSessionResponse, ActionResult
from services import auth_service
from services.auth_service import SessionContext
from routers.dependencies import get_session_context

router = APIRouter(prefix="/sessions", tags=["sessions"])


def session_to_out(s: UserSession, current_id: Optional[int] = None) -> SessionOut:
    return SessionOut(
        id=s.id,
        token_preview=auth_service.token_preview(s.token_hash),
        created_at=s.created_at,
        expires_at=s.expires_at,
        is_active=s.is_active,
        ip_address=s.ip_address,
        user_agent=s.user_agent,
        is_current=s.id == current_id,
    )


@router.get("", response_model=SessionList)
def list_sessions(ctx: SessionContext = Depends(get_session_context), db: Session = Depends(get_db)):
    rows = auth_service.list_sessions(db, ctx.user_id)
    return SessionList(data=[session_to_out(s, ctx.session.id) for s in rows], total=len(rows))


@router.post("/extend", response_model=ExtendSessionResponse)
def extend_session(ctx: SessionContext = Depends(get_session_context), db: Session = Depends(get_db)):
    s, token = auth_service.extend_session(db, ctx)
    return ExtendSessionResponse(token=token, expires_at=s.expires_at)


@router.post("/logout-all", response_model=ActionResult)
def logout_all(ctx: SessionContext = Depends(get_session_context), db: Session = Depends(get_db)):
    count = auth_service.logout_all(db, ctx.user_id)
    return ActionResult(message=f"{count} session(s) logged out", count=count)


@router.patch("/{session_id}/logout", response_model=ActionResult)
def revoke_session(
    session_id: int,
    ctx: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
):
    auth_service.revoke_session(db, ctx.user_id, session_id)
    return ActionResult(message="Session logged out")
