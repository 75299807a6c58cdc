# backend/routers/dependencies.py
from typing import Optional

from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.orm import Session

from database.session import get_db
from services.auth_service import SessionContext, verify_session


def get_bearer_token(authorization: Optional[str] = Header(None)) -> str:
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Authentication required")
    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise HTTPException(status_code=401, detail="Authentication required")
    return token


def get_session_context(token: str = Depends(get_bearer_token), db: Session = Depends(get_db)) -> SessionContext:
    return verify_session(db, token)


def require_roles(*roles: str):
    def checker(ctx: SessionContext = Depends(get_session_context)) -> SessionContext:
        if ctx.role not in roles:
            raise HTTPException(status_code=403, detail="Insufficient permissions")
        return ctx
    return checker


def client_ip(request: Request) -> Optional[str]:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None
