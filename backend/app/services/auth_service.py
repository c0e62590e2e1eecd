import secrets
from typing import Optional

from app.config import Settings


def _same(a: Optional[str], b: str) -> bool:
    if a is None:
        return False
    return secrets.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


class AuthService:
    """Single static admin identity and a single static bearer token."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def login(self, username: Optional[str], password: Optional[str]) -> Optional[str]:
        # evaluate both so a wrong username costs the same as a wrong password
        user_ok = _same(username, self.settings.ADMIN_USERNAME)
        pass_ok = _same(password, self.settings.ADMIN_PASSWORD)
        if user_ok and pass_ok:
            return self.settings.ADMIN_TOKEN
        return None

    @staticmethod
    def extract_token(authorization: Optional[str]) -> Optional[str]:
        """Accept `<token>` as sent by the admin UI, or `Bearer <token>`."""
        if authorization is None:
            return None
        value = authorization.strip()
        scheme, _, rest = value.partition(" ")
        if scheme.lower() == "bearer" and rest:
            return rest.strip()
        return value

    def authorize(self, authorization: Optional[str]) -> bool:
        return _same(self.extract_token(authorization), self.settings.ADMIN_TOKEN)
