from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from afaq_portal.client import PortalClient  # noqa: E402
from afaq_portal.context import AppContext  # noqa: E402

BASE_URL = "https://afaq.test"

LEVELS = [
    {"id": "1", "name": "Explorers", "nameAr": "المستكشفون", "gradesMin": 1, "gradesMax": 3, "color": "#f59e0b"},
    {"id": "2", "name": "Builders", "nameAr": "البناؤون", "gradesMin": 4, "gradesMax": 6, "color": "#10b981"},
]

LESSONS = [
    {
        "id": "12",
        "levelId": "1",
        "weekNumber": 2,
        "title": "Spinning Tops",
        "titleAr": "الخذروف الدوار",
        "objective": "Explore balance and rotation",
        "objectiveAr": "استكشاف التوازن والدوران",
        "buildType": "Gears",
    },
    {
        "id": "11",
        "levelId": "1",
        "weekNumber": 1,
        "title": "Build a Bridge",
        "titleAr": "ابنِ جسراً",
        "objective": "Learn how structures carry weight",
        "objectiveAr": "تعلم كيف تحمل الهياكل الأوزان",
        "buildType": "Structures",
        "teacherNotes": "Group students in pairs",
        "challenge": "Hold ten coins",
        "reflections": None,
    },
]

USER = {"id": "u1", "firstName": "Mona", "email": "mona@school.test"}

Handler = Callable[[httpx.Request], Any]


class FakePortal:
    """Canned answers for the portal API, recording every request."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Handler] = {}
        self.requests: list[httpx.Request] = []
        self.on("GET", "/api/auth/user", status=401, text="Unauthorized")

    def on(
        self,
        method: str,
        path: str,
        json_body: Any = None,
        status: int = 200,
        text: str | None = None,
        handler: Handler | None = None,
    ) -> None:
        if handler is None:

            def handler(request: httpx.Request) -> httpx.Response:
                if text is not None:
                    return httpx.Response(status, text=text)
                # Serialized by hand so that None goes out as a literal null.
                return httpx.Response(
                    status,
                    content=json.dumps(json_body).encode(),
                    headers={"Content-Type": "application/json"},
                )

        self.routes[(method, path)] = handler

    def signed_in(self, user: dict[str, Any] | None = None) -> None:
        self.on("GET", "/api/auth/user", json_body=user or USER)

    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, text="Not found")
        response = handler(request)
        if hasattr(response, "__await__"):
            response = await response
        return response

    def calls(self, path: str, method: str | None = None) -> list[httpx.Request]:
        return [
            request
            for request in self.requests
            if request.url.path == path and (method is None or request.method == method)
        ]

    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]

    def context(self, language: str = "en", redirect_delay: float = 0.01) -> AppContext:
        client = PortalClient(BASE_URL, transport=httpx.MockTransport(self.handle))
        return AppContext(client, language=language, redirect_delay=redirect_delay)


def json_of(request: httpx.Request) -> Any:
    return json.loads(request.content)


@pytest.fixture
def portal() -> FakePortal:
    return FakePortal()
