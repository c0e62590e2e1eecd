from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from app.db import check_connection

router = APIRouter()

WELCOME = "Welcome to the Big Biz API"


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
def welcome():
    return WELCOME


@router.get("/api/health", tags=["health"])
def health():
    db_ok = check_connection()
    return {
        "status": "ok" if db_ok else "degraded",
        "db": db_ok,
    }
