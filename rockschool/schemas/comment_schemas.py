# rockschool/schemas/comment_schemas.py
"""Pydantic schemas for comment submissions, commands and results."""
import enum
from typing import Any, Dict, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

INTENT_SUBMIT = "submit"
INTENT_DELETE = "delete-comment"

CONTENT_REQUIRED_MESSAGE = "Please enter a comment before submitting"
NOTE_NOT_FOUND_MESSAGE = "Note not found"


class ScopeKind(str, enum.Enum):
    STUDENT = "student"
    SONG = "song"


def split_mentions(value: Any) -> List[str]:
    """'a, b,,a' -> ['a', 'b']: trimmed, empties dropped, first occurrence wins"""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    mentions: List[str] = []
    for item in value:
        student_id = str(item).strip()
        if student_id and student_id not in mentions:
            mentions.append(student_id)
    return mentions


def _required(value: Optional[str], error_type: str, message: str) -> str:
    if value is None or not value.strip():
        raise PydanticCustomError(error_type, message)
    return value.strip()


# ---------------------------------------------------------------------------
# Form contracts (untrusted input, keyed by the submitted field names)
# ---------------------------------------------------------------------------

class _FormBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = Field(default=None, description="Existing comment id; absent on create")
    teacher_id: Optional[str] = Field(default=None, alias="teacherId", validate_default=True)

    @field_validator("id", mode="before")
    @classmethod
    def blank_id_is_absent(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("teacher_id")
    @classmethod
    def teacher_required(cls, v):
        return _required(v, "teacher_required", "Teacher is required")


class CommentForm(_FormBase):
    """Student-scoped comment; the student comes from the route"""
    content: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("content")
    @classmethod
    def content_required(cls, v):
        return _required(v, "content_required", CONTENT_REQUIRED_MESSAGE)


class SongCommentForm(CommentForm):
    song_id: Optional[str] = Field(default=None, alias="songId", validate_default=True)
    mentions: List[str] = Field(default_factory=list, description="Comma-separated student ids")

    @field_validator("song_id")
    @classmethod
    def song_required(cls, v):
        return _required(v, "song_required", "Song is required")

    @field_validator("mentions", mode="before")
    @classmethod
    def parse_mentions(cls, v):
        return split_mentions(v)


class DeleteCommentForm(_FormBase):
    id: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("id")
    @classmethod
    def id_required(cls, v):
        if v is None:
            raise PydanticCustomError("id_required", NOTE_NOT_FOUND_MESSAGE)
        return v


# ---------------------------------------------------------------------------
# Commands produced by a successful validation
# ---------------------------------------------------------------------------

class CreateComment(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["create"] = "create"
    scope_kind: ScopeKind
    scope_id: str
    author_id: str
    content: str
    mentions: Optional[List[str]] = None  # song scope only


class UpdateComment(CreateComment):
    kind: Literal["update"] = "update"
    id: str


class DeleteComment(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["delete"] = "delete"
    scope_kind: ScopeKind
    scope_id: Optional[str] = None  # when set, the comment must belong to it
    id: str
    requester_id: str


CommentCommand = Union[CreateComment, UpdateComment, DeleteComment]


class ValidationResult(BaseModel):
    intent: str = ""
    command: Optional[CommentCommand] = None
    errors: Dict[str, List[str]] = Field(default_factory=dict)
    form_errors: List[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors and not self.form_errors

    def add_error(self, field: str, message: str) -> None:
        self.errors.setdefault(field, []).append(message)


class SubmitResult(BaseModel):
    status: Literal["success", "error", "idle"]
    id: Optional[str] = None
    errors: Dict[str, List[str]] = Field(default_factory=dict)
    form_errors: List[str] = Field(default_factory=list)
