"""Data models for the Afaq portal client."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class WireModel(BaseModel):
    """Base for payloads exchanged with the API (camelCase on the wire)."""

    model_config = ConfigDict(
        populate_by_name=True, frozen=True, coerce_numbers_to_str=True
    )


class Level(WireModel):
    """A curriculum level (kit) covering a range of grades."""

    id: str
    name: str
    name_ar: str = Field(alias="nameAr")
    grades_min: int = Field(alias="gradesMin")
    grades_max: int = Field(alias="gradesMax")
    color: Optional[str] = None


class Lesson(WireModel):
    """A weekly lesson belonging to a level."""

    id: str
    level_id: str = Field(alias="levelId")
    week_number: int = Field(alias="weekNumber", ge=1)
    title: str
    title_ar: str = Field(default="", alias="titleAr")
    objective: str = ""
    objective_ar: str = Field(default="", alias="objectiveAr")
    build_type: str = Field(default="", alias="buildType")
    teacher_notes: str = Field(default="", alias="teacherNotes")
    teacher_notes_ar: str = Field(default="", alias="teacherNotesAr")
    challenge: str = ""
    challenge_ar: str = Field(default="", alias="challengeAr")
    reflections: str = ""
    reflections_ar: str = Field(default="", alias="reflectionsAr")
    thumbnail_url: Optional[str] = Field(default=None, alias="thumbnailUrl")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    @field_validator(
        "title_ar", "objective", "objective_ar", "build_type", "teacher_notes",
        "teacher_notes_ar", "challenge", "challenge_ar", "reflections",
        "reflections_ar", mode="before",
    )
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class DashboardStats(WireModel):
    """Aggregate counters shown on the dashboard and the landing page."""

    school_count: int = Field(default=0, alias="schoolCount")
    student_count: int = Field(default=0, alias="studentCount")
    lesson_count: int = Field(default=0, alias="lessonCount")
    teacher_count: int = Field(default=0, alias="teacherCount")


class DashboardData(WireModel):
    stats: DashboardStats
    levels: list[Level] = Field(default_factory=list)


class UploadStatus(WireModel):
    """Configuration flag of the external (S3-compatible) storage."""

    configured: bool = False
    endpoint: str = ""
    bucket: str = ""
    credentials: str = ""


class UploadTarget(WireModel):
    upload_url: str = Field(alias="uploadURL")


class StoredObject(WireModel):
    """One file stored by the external storage upload endpoints."""

    ok: bool
    original_name: str = Field(default="", alias="originalName")
    url: str = ""
    size: int = 0
    type: str = ""
    error: Optional[str] = None


class BatchUploadResult(WireModel):
    ok: bool
    successful: int = 0
    results: list[StoredObject] = Field(default_factory=list)


class ChatReply(WireModel):
    message: str


GRADE_LEVEL_OPTIONS = ("1-3", "4-6", "7-9")


class ContactInquiry(WireModel):
    """Demo request submitted from the marketing contact form."""

    school_name: str = Field(alias="schoolName", min_length=1)
    contact_name: str = Field(alias="contactName", min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    city: Optional[str] = None
    grade_levels: list[Literal["1-3", "4-6", "7-9"]] = Field(
        default_factory=list, alias="gradeLevels"
    )
    message: Optional[str] = None


@dataclass
class UploadedFile:
    """A file uploaded during this session; never persisted."""

    name: str
    url: str
    size: int
    type: str
    uploaded_at: datetime
    method: Literal["platform", "external"]


@dataclass
class ChatMessage:
    """A single turn of the assistant conversation."""

    id: str
    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime = field(default_factory=datetime.now)

    def to_wire(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "role": self.role,
            "content": self.content,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class Toast:
    """A transient notification shown to the user."""

    title: str
    description: str = ""
    variant: Literal["default", "destructive"] = "default"
