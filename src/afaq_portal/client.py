"""Afaq portal HTTP client for the site's /api endpoints."""

import logging
from typing import Any, Optional, Sequence

import httpx

from .errors import PortalAPIError, PortalNetworkError, PortalSchemaError
from .models import (
    BatchUploadResult,
    ChatReply,
    ContactInquiry,
    DashboardData,
    DashboardStats,
    Lesson,
    Level,
    StoredObject,
    UploadStatus,
    UploadTarget,
)
from .parsers import (
    parse_batch_result,
    parse_chat_reply,
    parse_dashboard,
    parse_lesson,
    parse_lessons,
    parse_levels,
    parse_stats,
    parse_stored_object,
    parse_upload_status,
    parse_upload_target,
)

logger = logging.getLogger(__name__)

SESSION_COOKIE_NAME = "connect.sid"
LOGIN_PATH = "/api/login"
LOGOUT_PATH = "/api/logout"

# (field name, (filename, content, content type)) as accepted by httpx
FilePart = tuple[str, tuple[str, bytes, str]]


class PortalClient:
    """HTTP client for the portal API."""

    def __init__(
        self,
        base_url: str,
        session_cookie: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the portal client.

        Args:
            base_url: Base URL of the site (e.g., https://afaq.example.org)
            session_cookie: Value of the server-set session cookie, if any
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.session_cookie = session_cookie
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def login_url(self) -> str:
        return f"{self.base_url}{LOGIN_PATH}"

    @property
    def logout_url(self) -> str:
        return f"{self.base_url}{LOGOUT_PATH}"

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            cookies = {}
            if self.session_cookie:
                cookies[SESSION_COOKIE_NAME] = self.session_cookie
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                follow_redirects=True,
                timeout=self.timeout,
                cookies=cookies,
                transport=self._transport,
                headers={
                    "User-Agent": "AfaqPortal/0.1.0",
                    "Accept": "application/json",
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Make a request to the API and fail on non-2xx answers.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: Request path relative to the base URL
            **kwargs: Additional arguments for httpx

        Returns:
            httpx.Response object

        Raises:
            PortalAPIError: If the server answered with a non-2xx status
            PortalNetworkError: If the request failed in transit
        """
        client = await self._get_client()
        logger.debug("%s %s", method, path)

        try:
            response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise PortalNetworkError(f"Request to {path} failed: {e}") from e

        if not response.is_success:
            detail = response.text.strip() or response.reason_phrase
            raise PortalAPIError(response.status_code, detail, path)
        return response

    async def request_json(
        self, method: str, path: str, allow_empty: bool = False, **kwargs: Any
    ) -> Any:
        response = await self.request(method, path, **kwargs)
        if allow_empty and not response.content.strip():
            return None
        try:
            return response.json()
        except ValueError as e:
            raise PortalSchemaError(f"Response from {path} is not JSON") from e

    # Session

    async def get_auth_user(self) -> dict[str, Any]:
        """Return the signed-in user; a 401 means the visitor is anonymous."""
        data = await self.request_json("GET", "/api/auth/user")
        if not isinstance(data, dict):
            raise PortalSchemaError("Malformed auth user payload")
        return data

    # Curriculum

    async def get_levels(self) -> list[Level]:
        return parse_levels(await self.request_json("GET", "/api/public/levels"))

    async def get_public_stats(self) -> DashboardStats:
        return parse_stats(await self.request_json("GET", "/api/public/stats"))

    async def get_lessons(self, level_id: str) -> list[Lesson]:
        data = await self.request_json(
            "GET", "/api/lessons", params={"levelId": level_id}
        )
        return parse_lessons(data)

    async def get_lesson(self, lesson_id: str) -> Optional[Lesson]:
        """Get one lesson.

        Returns:
            The lesson, or None when the server answers 404 or sends no lesson
        """
        try:
            data = await self.request_json("GET", f"/api/lessons/{lesson_id}", allow_empty=True)
        except PortalAPIError as e:
            if e.status == 404:
                return None
            raise
        if data is None:
            return None
        return parse_lesson(data)

    async def get_dashboard(self) -> DashboardData:
        return parse_dashboard(await self.request_json("GET", "/api/dashboard"))

    # Marketing

    async def submit_contact(self, inquiry: ContactInquiry) -> None:
        await self.request(
            "POST",
            "/api/public/contact",
            json=inquiry.model_dump(mode="json", by_alias=True),
        )

    async def send_chat(
        self,
        message: str,
        language: str,
        history: Sequence[dict[str, Any]],
    ) -> ChatReply:
        data = await self.request_json(
            "POST",
            "/api/chat",
            json={
                "message": message,
                "language": language,
                "conversationHistory": list(history),
            },
        )
        return parse_chat_reply(data)

    # Uploads

    async def get_upload_status(self) -> UploadStatus:
        return parse_upload_status(await self.request_json("GET", "/api/upload-status"))

    async def request_upload_target(self, file_name: str) -> UploadTarget:
        data = await self.request_json(
            "POST", "/api/uploads/public", json={"fileName": file_name}
        )
        return parse_upload_target(data)

    async def put_object(self, url: str, content: bytes, content_type: str) -> None:
        """Upload bytes straight to a signed storage URL.

        The request bypasses the application server and carries no session
        cookie.

        Raises:
            PortalAPIError: If storage rejected the upload
            PortalNetworkError: If the upload failed in transit
        """
        async with httpx.AsyncClient(
            timeout=self.timeout, transport=self._transport
        ) as storage:
            try:
                response = await storage.put(
                    url, content=content, headers={"Content-Type": content_type}
                )
            except httpx.HTTPError as e:
                raise PortalNetworkError(f"Upload to storage failed: {e}") from e
        if not response.is_success:
            detail = response.text.strip() or response.reason_phrase
            raise PortalAPIError(response.status_code, detail, url)

    async def upload_file(self, part: FilePart, folder: str) -> StoredObject:
        data = await self.request_json(
            "POST", "/api/upload", files=[part], data={"folder": folder}
        )
        return parse_stored_object(data)

    async def upload_files(
        self, parts: Sequence[FilePart], folder: str
    ) -> BatchUploadResult:
        data = await self.request_json(
            "POST", "/api/upload-multiple", files=list(parts), data={"folder": folder}
        )
        return parse_batch_result(data)
