"""Session probe: who is signed in, checked once per session."""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from .client import PortalClient
from .query import QueryCache, make_key

logger = logging.getLogger(__name__)

AUTH_USER_KEY = make_key("/api/auth/user")


def is_unauthorized_error(error: Optional[BaseException]) -> bool:
    """Whether ``error`` means "not signed in" (an HTTP 401)."""
    return error is not None and "401" in str(error)


@dataclass(frozen=True)
class AuthState:
    user: Optional[dict[str, Any]]
    is_loading: bool
    is_authenticated: bool
    error: Optional[BaseException] = None

    @property
    def display_name(self) -> str:
        if not self.user:
            return ""
        for field_name in ("firstName", "name", "email", "id"):
            value = self.user.get(field_name)
            if value:
                return str(value)
        return ""


class AuthProbe:
    """Single-shot check of ``/api/auth/user``.

    The probe runs at most once for the lifetime of the context. After it has
    settled (user, 401 or any other error) ``is_loading`` stays False for
    every later consumer.
    """

    def __init__(self, cache: QueryCache, client: PortalClient):
        self._cache = cache
        self._client = client
        self._checked = False

    @property
    def checked(self) -> bool:
        return self._checked

    @property
    def state(self) -> AuthState:
        result = self._cache.peek(AUTH_USER_KEY)
        user = result.data if result.is_success else None
        return AuthState(
            user=user,
            is_loading=not self._checked,
            is_authenticated=user is not None and not is_unauthorized_error(result.error),
            error=result.error,
        )

    async def check(self) -> AuthState:
        """Run the probe if it has not run yet and return the settled state."""
        if not self._checked:
            result = await self._cache.query(
                AUTH_USER_KEY, self._client.get_auth_user, enabled=not self._checked
            )
            self._checked = True
            if result.error is not None and not is_unauthorized_error(result.error):
                logger.warning("Session probe failed: %s", result.error)
        return self.state
