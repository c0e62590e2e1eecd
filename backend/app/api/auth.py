from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from app.config import settings
from app.schemas.auth_schema import LoginIn, LoginOut, MessageOut
from app.services.auth_service import AuthService
from app.utils.logs import get_logger

log = get_logger("auth")

router = APIRouter(prefix="/api/auth", tags=["auth"])

UNAUTHORIZED_MESSAGE = "Unauthorized. Please check your token."


def get_auth_service() -> AuthService:
    return AuthService(settings)


def require_admin_token(
    request: Request,
    authorization: Optional[str] = Header(None),
    auth: AuthService = Depends(get_auth_service),
) -> None:
    if not auth.authorize(authorization):
        log.warning(
            "rejected %s %s: %s",
            request.method,
            request.url.path,
            "missing token" if authorization is None else "bad token",
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=UNAUTHORIZED_MESSAGE,
            headers={"WWW-Authenticate": "Bearer"},
        )


@router.post(
    "/login",
    summary="Exchange the admin credentials for the API token",
    response_model=LoginOut,
    responses={401: {"model": MessageOut}},
)
def login(payload: Optional[LoginIn] = None, auth: AuthService = Depends(get_auth_service)):
    payload = payload or LoginIn()
    token = auth.login(payload.username, payload.password)
    if token is None:
        log.info("login failed for user=%r", payload.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    log.info("login successful for user=%r", payload.username)
    return LoginOut(message="Login successful", token=token)
