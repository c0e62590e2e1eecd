from typing import Optional

from pydantic import BaseModel


class LoginIn(BaseModel):
    # optional so a missing field is an invalid login (401), not a malformed request
    username: Optional[str] = None
    password: Optional[str] = None


class LoginOut(BaseModel):
    message: str
    token: str


class MessageOut(BaseModel):
    message: str
