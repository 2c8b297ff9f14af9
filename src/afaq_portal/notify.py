"""Toast notifications and page navigation."""

import asyncio
import logging
from typing import Callable, Literal, Optional

from .models import Toast

logger = logging.getLogger(__name__)

REDIRECT_DELAY = 0.5


class Toaster:
    """Collects the toasts shown during the session."""

    def __init__(self) -> None:
        self.toasts: list[Toast] = []

    def show(
        self,
        title: str,
        description: str = "",
        variant: Literal["default", "destructive"] = "default",
    ) -> Toast:
        toast = Toast(title=title, description=description, variant=variant)
        self.toasts.append(toast)
        logger.info("Toast [%s] %s: %s", variant, title, description)
        return toast

    def latest(self) -> Optional[Toast]:
        return self.toasts[-1] if self.toasts else None

    def clear(self) -> None:
        self.toasts.clear()


class Navigator:
    """Tracks the current location and performs (delayed) redirects."""

    def __init__(
        self,
        location: str = "/",
        on_navigate: Optional[Callable[[str], None]] = None,
    ):
        self.location = location
        self.history: list[str] = [location]
        self._on_navigate = on_navigate
        self._pending: Optional[asyncio.TimerHandle] = None
        self._pending_url: Optional[str] = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    @property
    def pending_url(self) -> Optional[str]:
        return self._pending_url

    def navigate(self, url: str) -> None:
        """Full-page navigation to ``url``."""
        self._pending = None
        self._pending_url = None
        self.location = url
        self.history.append(url)
        logger.info("Navigating to %s", url)
        if self._on_navigate is not None:
            self._on_navigate(url)

    def schedule_redirect(
        self, url: str, delay: float = REDIRECT_DELAY
    ) -> Optional[asyncio.TimerHandle]:
        """Navigate to ``url`` after ``delay`` seconds.

        Outside a running event loop the navigation happens immediately.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self.navigate(url)
            return None
        self.cancel()
        self._pending_url = url
        self._pending = loop.call_later(delay, self.navigate, url)
        logger.info("Redirect to %s scheduled in %.1fs", url, delay)
        return self._pending

    def cancel(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
        self._pending = None
        self._pending_url = None
