"""Application context shared by every page."""

from typing import Optional

import httpx

from .auth import AuthProbe
from .boundary import AuthorizationBoundary
from .client import PortalClient
from .config import Settings
from .i18n import LanguageContext
from .notify import Navigator, Toaster
from .query import QueryCache


class AppContext:
    """Everything a page needs, built once at startup."""

    def __init__(
        self,
        client: PortalClient,
        language: str = "en",
        redirect_delay: float = 0.5,
    ):
        self.client = client
        self.cache = QueryCache()
        self.i18n = LanguageContext(language)
        self.auth = AuthProbe(self.cache, client)
        self.toaster = Toaster()
        self.navigator = Navigator()
        self.redirect_delay = redirect_delay
        self.boundary = AuthorizationBoundary(self)

    @classmethod
    def create(
        cls,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "AppContext":
        client = PortalClient(
            settings.base_url,
            session_cookie=settings.session_cookie,
            timeout=settings.timeout,
            transport=transport,
        )
        return cls(
            client,
            language=settings.language,
            redirect_delay=settings.redirect_delay,
        )

    def t(self, key: str, **values) -> str:
        return self.i18n.t(key, **values)

    async def aclose(self) -> None:
        self.navigator.cancel()
        await self.client.close()

    async def __aenter__(self) -> "AppContext":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
