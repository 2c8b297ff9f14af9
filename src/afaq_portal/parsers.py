"""Validation of API payloads into portal models."""

from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from .errors import PortalSchemaError
from .models import (
    BatchUploadResult,
    ChatReply,
    DashboardData,
    DashboardStats,
    Lesson,
    Level,
    StoredObject,
    UploadStatus,
    UploadTarget,
)

ModelT = TypeVar("ModelT", bound=BaseModel)

_LEVELS = TypeAdapter(list[Level])
_LESSONS = TypeAdapter(list[Lesson])


def _validate(model: type[ModelT], payload: Any, what: str) -> ModelT:
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise PortalSchemaError(f"Malformed {what} payload: {e}") from e


def parse_levels(payload: Any) -> list[Level]:
    """Parse the levels list.

    The endpoint has answered both a bare list and ``{"levels": [...]}``.
    """
    if isinstance(payload, dict) and "levels" in payload:
        payload = payload["levels"]
    try:
        return _LEVELS.validate_python(payload)
    except ValidationError as e:
        raise PortalSchemaError(f"Malformed levels payload: {e}") from e


def parse_lessons(payload: Any) -> list[Lesson]:
    if isinstance(payload, dict) and "lessons" in payload:
        payload = payload["lessons"]
    try:
        lessons = _LESSONS.validate_python(payload)
    except ValidationError as e:
        raise PortalSchemaError(f"Malformed lessons payload: {e}") from e
    return sorted(lessons, key=lambda lesson: lesson.week_number)


def parse_lesson(payload: Any) -> Lesson:
    return _validate(Lesson, payload, "lesson")


def parse_stats(payload: Any) -> DashboardStats:
    return _validate(DashboardStats, payload, "stats")


def parse_dashboard(payload: Any) -> DashboardData:
    return _validate(DashboardData, payload, "dashboard")


def parse_upload_status(payload: Any) -> UploadStatus:
    return _validate(UploadStatus, payload, "upload status")


def parse_upload_target(payload: Any) -> UploadTarget:
    return _validate(UploadTarget, payload, "upload target")


def parse_stored_object(payload: Any) -> StoredObject:
    return _validate(StoredObject, payload, "upload result")


def parse_batch_result(payload: Any) -> BatchUploadResult:
    return _validate(BatchUploadResult, payload, "batch upload result")


def parse_chat_reply(payload: Any) -> ChatReply:
    return _validate(ChatReply, payload, "chat reply")
