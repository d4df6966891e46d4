"""Staff login session"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

import structlog
from jose import JWTError, jwt

from hostdesk.client.api import RestaurantApiClient
from hostdesk.schemas.auth import AuthUser

logger = structlog.get_logger()


def token_expired(token: str, now: Optional[datetime] = None) -> bool:
    """
    True when the token's `exp` claim lies in the past.

    The signature is not checked here; the restaurant API does that on every
    request. Tokens without readable claims are treated as unexpired.
    """
    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError:
        return False

    exp = claims.get("exp")
    if exp is None:
        return False
    current = now or datetime.now(timezone.utc)
    return datetime.fromtimestamp(float(exp), tz=timezone.utc) <= current


class StaffSession:
    """
    The logged-in staff member, persisted between runs.

    Created once at startup and handed to whatever needs it. `load()`
    restores a saved session and `logout()` clears it.
    """

    def __init__(self, path: Union[str, Path], client: RestaurantApiClient):
        self.path = Path(path).expanduser()
        self.client = client
        self.user: Optional[AuthUser] = None
        self.token: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None and self.token is not None

    def _activate(self, token: str, user: AuthUser) -> None:
        self.token = token
        self.user = user
        self.client.set_token(token)

    def _forget(self) -> None:
        self.token = None
        self.user = None
        self.client.clear_token()
        self.path.unlink(missing_ok=True)

    def _persist(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps({"token": self.token, "user": self.user.model_dump(mode="json")}, indent=2),
            encoding="utf-8",
        )

    def load(self) -> Optional[AuthUser]:
        """Restore the saved session, if there is a usable one"""
        if not self.path.exists():
            return None

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            token = data["token"]
            user = AuthUser.model_validate(data["user"])
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning("Discarding unreadable staff session", path=str(self.path), error=str(e))
            self._forget()
            return None

        if token_expired(token):
            logger.info("Stored staff session expired", user_id=user.id)
            self._forget()
            return None

        self._activate(token, user)
        logger.info("Staff session restored", user_id=user.id, role=user.role)
        return user

    async def login(self, email: str, password: str) -> AuthUser:
        """Replace any current session with a fresh login"""
        self._forget()
        result = await self.client.login(email, password)
        self._activate(result.jwt, result.user)
        self._persist()
        logger.info("Staff logged in", user_id=result.user.id, role=result.user.role)
        return result.user

    def logout(self) -> None:
        if self.user is not None:
            logger.info("Staff logged out", user_id=self.user.id)
        self._forget()
