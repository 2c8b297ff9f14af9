"""Authorization boundary shared by every signed-in page."""

import logging
from enum import Enum
from typing import TYPE_CHECKING, Optional

from .auth import is_unauthorized_error

if TYPE_CHECKING:
    from .context import AppContext

logger = logging.getLogger(__name__)


class PageState(str, Enum):
    CHECKING_AUTH = "checking-auth"
    ANONYMOUS = "anonymous"
    REDIRECTING = "redirecting"
    AUTHENTICATED = "authenticated"
    LOADING_DATA = "loading-data"
    READY = "ready"
    DATA_ERROR = "data-error"
    NOT_FOUND = "not-found"


class _Anonymous:
    """Cause recorded when the probe returned no user and no error."""

    def __repr__(self) -> str:
        return "<anonymous>"


ANONYMOUS = _Anonymous()


class AuthorizationBoundary:
    """Sends anonymous or expired sessions to the login page.

    A redirect is scheduled once per cause: rendering the same anonymous
    state, or reporting the same failed query, again and again adds no new
    toast and no new timer.
    """

    def __init__(self, ctx: "AppContext"):
        self._ctx = ctx
        self._last_cause: Optional[object] = None
        self.redirects_scheduled = 0

    async def enter(self) -> PageState:
        """Check the session for a page that requires sign-in."""
        state = await self._ctx.auth.check()
        if state.is_authenticated:
            return PageState.AUTHENTICATED
        self._deny(state.error if state.error is not None else ANONYMOUS)
        return PageState.REDIRECTING

    def report(self, error: Optional[BaseException]) -> bool:
        """Apply the login redirect if ``error`` is an unauthorized failure.

        Returns:
            True if the error was unauthorized (and a redirect is underway)
        """
        if not is_unauthorized_error(error):
            return False
        self._deny(error)
        return True

    def _deny(self, cause: object) -> None:
        navigator = self._ctx.navigator
        if cause is self._last_cause or navigator.pending:
            return
        self._last_cause = cause
        self._ctx.toaster.show(
            self._ctx.t("auth.unauthorized.title"),
            self._ctx.t("auth.unauthorized.description"),
            variant="destructive",
        )
        navigator.schedule_redirect(self._ctx.client.login_url, self._ctx.redirect_delay)
        self.redirects_scheduled += 1
        logger.info("Session not authorized (%s); redirecting to login", cause)
