# backend/services/auth_service.py
"""
Accounts, passwords and sessions.

A login creates a `UserSession` row and a signed JWT that names it (`sid`).
The row is authoritative: a token is accepted only while its row is active,
unexpired and still holds the token's hash. Logout, revocation and extension
all act on the row, and extension rotates the token.
"""
import hashlib
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from fastapi import HTTPException
from jose import jwt, JWTError
from passlib.context import CryptContext
from sqlalchemy import true
from sqlalchemy.orm import Session

from config import settings
from models.user_model import User
from models.client_model import ClientProfile
from models.supplier_model import SupplierProfile
from models.courier_model import CourierProfile
from models.admin_model import AdminProfile
from models.session_model import UserSession
from schemas.users import RoleSpecificData
from services import audit_service

logger = logging.getLogger(__name__)

# ---------------------------------------------------------
# Password Hashing
# ---------------------------------------------------------
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
MAX_BCRYPT_BYTES = 72  # bcrypt limit


def hash_password(password: str) -> str:
    if len(password.encode("utf-8")) > MAX_BCRYPT_BYTES:
        raise HTTPException(
            status_code=400,
            detail=f"Password too long. Max {MAX_BCRYPT_BYTES} bytes allowed."
        )
    return pwd_context.hash(password)


def verify_password(raw: str, hashed: str) -> bool:
    b = raw.encode("utf-8")
    if len(b) > MAX_BCRYPT_BYTES:
        raw = b[:MAX_BCRYPT_BYTES].decode("utf-8", errors="ignore")
    return pwd_context.verify(raw, hashed)


# ---------------------------------------------------------
# Tokens
# ---------------------------------------------------------
def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def issue_token(user: User, session: UserSession) -> str:
    payload = {
        "sub": str(user.id),
        "role": user.role,
        "sid": session.id,
        "jti": uuid.uuid4().hex,
        "iat": datetime.utcnow(),
        "exp": session.expires_at,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    if "sid" not in payload or "sub" not in payload:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    return payload


def token_preview(token_hash: str) -> str:
    return token_hash[:12] + "..."


@dataclass
class SessionContext:
    """Who is calling: resolved once per request and handed to the handlers."""
    user: User
    session: UserSession
    token: str

    @property
    def user_id(self) -> int:
        return self.user.id

    @property
    def role(self) -> str:
        return self.user.role


# ---------------------------------------------------------
# Accounts
# ---------------------------------------------------------
def _build_profile(role: str, data: RoleSpecificData):
    if role == "client":
        return ClientProfile()
    if role == "supplier":
        return SupplierProfile(
            company_name=data.company_name,
            supplier_type=data.supplier_type,
            delivery_fee=data.delivery_fee or 0,
        )
    if role == "courier":
        return CourierProfile(
            vehicle_type=data.vehicle_type,
            license_number=data.license_number,
            delivery_zones=[],
        )
    return AdminProfile(access_level=data.access_level or "standard")


def create_user(
    db: Session,
    email: str,
    password: str,
    full_name: str,
    phone: Optional[str],
    role: str,
    role_data: Optional[RoleSpecificData] = None,
) -> User:
    """Adds the user and its role satellite to the session. The caller commits."""
    if db.query(User).filter(User.email == email).count() > 0:
        raise HTTPException(status_code=409, detail="Email already registered")

    u = User(
        email=email,
        password_hash=hash_password(password),
        full_name=full_name,
        phone=phone,
        role=role,
        status="active",
    )
    profile = _build_profile(role, role_data or RoleSpecificData())
    setattr(u, f"{role}_profile", profile)
    db.add(u)
    db.flush()
    return u


def register(db: Session, body, ip: Optional[str] = None) -> User:
    if body.role == "admin":
        raise HTTPException(status_code=403, detail="Admin accounts are created by administrators")
    try:
        u = create_user(db, body.email, body.password, body.full_name, body.phone, body.role, body.role_data)
        audit_service.record(db, u.id, "register", {"role": u.role}, ip)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(u)
    logger.info("Registered %s (%s)", u.email, u.role)
    return u


# ---------------------------------------------------------
# Sessions
# ---------------------------------------------------------
def create_session(
    db: Session, user: User, ip: Optional[str] = None, user_agent: Optional[str] = None
) -> Tuple[UserSession, str]:
    s = UserSession(
        user_id=user.id,
        token_hash="",
        expires_at=datetime.utcnow() + settings.JWT_EXPIRES_IN,
        is_active=True,
        ip_address=ip,
        user_agent=(user_agent or "")[:512] or None,
    )
    db.add(s)
    db.flush()  # need the id for the `sid` claim
    token = issue_token(user, s)
    s.token_hash = hash_token(token)
    return s, token


def login(
    db: Session, email: str, password: str, ip: Optional[str] = None, user_agent: Optional[str] = None
) -> Tuple[User, UserSession, str]:
    u = db.query(User).filter(User.email == email).first()
    if not u or not verify_password(password, u.password_hash):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    if u.status != "active":
        raise HTTPException(status_code=403, detail=f"Account is {u.status}. Contact support.")

    try:
        s, token = create_session(db, u, ip, user_agent)
        u.last_login_at = datetime.utcnow()
        audit_service.record(db, u.id, "login", {"session_id": s.id}, ip)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(s)
    logger.info("User logged in: %s (%s)", u.email, u.role)
    return u, s, token


def _session_for_token(db: Session, token: str) -> UserSession:
    payload = decode_token(token)
    s = db.get(UserSession, payload["sid"])
    if not s or s.token_hash != hash_token(token) or str(s.user_id) != str(payload["sub"]):
        raise HTTPException(status_code=401, detail="Session is invalid or expired")
    return s


def verify_session(db: Session, token: str) -> SessionContext:
    s = _session_for_token(db, token)
    if not s.is_valid():
        raise HTTPException(status_code=401, detail="Session is invalid or expired")
    u = db.get(User, s.user_id)
    if not u:
        raise HTTPException(status_code=401, detail="User no longer exists")
    if u.status != "active":
        raise HTTPException(status_code=401, detail=f"Account is {u.status}")
    return SessionContext(user=u, session=s, token=token)


def logout(db: Session, token: str, ip: Optional[str] = None) -> UserSession:
    s = _session_for_token(db, token)
    if not s.is_active:
        raise HTTPException(status_code=404, detail="Session not found or already logged out")
    s.is_active = False
    audit_service.record(db, s.user_id, "logout", {"session_id": s.id}, ip)
    db.commit()
    logger.info("Session %s closed for user %s", s.id, s.user_id)
    return s


def extend_session(db: Session, ctx: SessionContext) -> Tuple[UserSession, str]:
    s = ctx.session
    s.expires_at = datetime.utcnow() + settings.SESSION_EXTENSION
    token = issue_token(ctx.user, s)
    s.token_hash = hash_token(token)
    db.commit()
    db.refresh(s)
    logger.debug("Session %s extended until %s", s.id, s.expires_at)
    return s, token


def list_sessions(db: Session, user_id: int) -> List[UserSession]:
    return (
        db.query(UserSession)
        .filter(UserSession.user_id == user_id)
        .order_by(UserSession.created_at.desc(), UserSession.id.desc())
        .all()
    )


def revoke_session(db: Session, user_id: int, session_id: int) -> UserSession:
    s = db.query(UserSession).filter(UserSession.id == session_id, UserSession.user_id == user_id).first()
    if not s:
        raise HTTPException(status_code=404, detail="Session not found")
    s.is_active = False
    db.commit()
    return s


def logout_all(db: Session, user_id: int) -> int:
    count = (
        db.query(UserSession)
        .filter(UserSession.user_id == user_id, UserSession.is_active == true())
        .update({UserSession.is_active: False}, synchronize_session="fetch")
    )
    db.commit()
    logger.info("All %d sessions logged out for user %s", count, user_id)
    return count


def cleanup_expired_sessions(db: Session, now: Optional[datetime] = None) -> Tuple[int, int]:
    """Deactivates expired rows, deletes those expired longer than the retention window."""
    now = now or datetime.utcnow()
    cutoff = now - timedelta(days=settings.SESSION_RETENTION_DAYS)
    deactivated = (
        db.query(UserSession)
        .filter(UserSession.is_active == true(), UserSession.expires_at <= now)
        .update({UserSession.is_active: False}, synchronize_session="fetch")
    )
    deleted = (
        db.query(UserSession)
        .filter(UserSession.expires_at < cutoff)
        .delete(synchronize_session="fetch")
    )
    db.commit()
    logger.info("Session cleanup: %d deactivated, %d deleted", deactivated, deleted)
    return deactivated, deleted
