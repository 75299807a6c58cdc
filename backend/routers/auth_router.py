# backend/routers/auth_router.py
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from database.session import get_db
from schemas.users import RegisterPayload, RegisterResponse, LoginPayload, LoginResponse, UserOut
from schemas.sessions import VerifySessionPayload, VerifySessionResponse, ActionResult
from services import auth_service
from services.auth_service import SessionContext
from routers.dependencies import get_bearer_token, get_session_context, client_ip
from routers.sessions_router import session_to_out

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
def register_user(body: RegisterPayload, request: Request, db: Session = Depends(get_db)):
    u = auth_service.register(db, body, ip=client_ip(request))
    return RegisterResponse(user_id=u.id)


@router.post("/login", response_model=LoginResponse)
def login(body: LoginPayload, request: Request, db: Session = Depends(get_db)):
    u, s, token = auth_service.login(
        db, body.email, body.password,
        ip=client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )
    return LoginResponse(
        token=token,
        session_id=s.id,
        expires_at=s.expires_at,
        user=UserOut.model_validate(u),
    )


@router.post("/logout", response_model=ActionResult)
def logout(request: Request, token: str = Depends(get_bearer_token), db: Session = Depends(get_db)):
    auth_service.logout(db, token, ip=client_ip(request))
    return ActionResult(message="Logged out")


@router.post("/verify-session", response_model=VerifySessionResponse)
def verify_session(
    body: VerifySessionPayload,
    request: Request,
    db: Session = Depends(get_db),
):
    # the token may come in the body or as a bearer header
    token = body.session_token or get_bearer_token(request.headers.get("authorization"))
    ctx = auth_service.verify_session(db, token)
    return VerifySessionResponse(
        session=session_to_out(ctx.session, current_id=ctx.session.id),
        user=UserOut.model_validate(ctx.user),
    )


@router.get("/me", response_model=UserOut)
def me(ctx: SessionContext = Depends(get_session_context)):
    return UserOut.model_validate(ctx.user)
