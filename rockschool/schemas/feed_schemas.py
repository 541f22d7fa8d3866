# rockschool/schemas/feed_schemas.py
"""Read models for comment feeds and the detail pages that embed them."""
from typing import List, Optional
from datetime import date, datetime
from pydantic import BaseModel, Field

from .comment_schemas import ScopeKind


class AuthorView(BaseModel):
    id: str
    name: str
    image_id: Optional[str] = None


class MentionView(BaseModel):
    id: str
    name: str


class CommentView(BaseModel):
    id: str
    scope_kind: ScopeKind
    scope_id: str
    content: str
    created_at: datetime
    updated_at: datetime
    author: AuthorView
    mentions: List[MentionView] = Field(default_factory=list)
    mentions_display: str = ""
    time_ago: str = ""


class StudentSummary(BaseModel):
    id: str
    name: str
    username: str
    instrument: str
    age: int
    image_id: Optional[str] = None


class StudentDetail(StudentSummary):
    comments: List[CommentView] = Field(default_factory=list)


class SongDetail(BaseModel):
    id: str
    title: str
    artist: str
    description: Optional[str] = None
    key: str
    bpm: int
    lyrics: Optional[str] = None
    students: List[StudentSummary] = Field(default_factory=list)
    comments: List[CommentView] = Field(default_factory=list)
    created_at: datetime


class TeacherStudentSummary(StudentSummary):
    latest_comment: Optional[CommentView] = None


class TeacherDetail(BaseModel):
    id: str
    name: str
    bio: Optional[str] = None
    instruments: List[str] = Field(default_factory=list)
    image_id: Optional[str] = None
    joined: date
    students: List[TeacherStudentSummary] = Field(default_factory=list)


class SubmissionResponse(BaseModel):
    status: str
    id: Optional[str] = None
    errors: dict = Field(default_factory=dict)
    form_errors: List[str] = Field(default_factory=list)
    feed: List[CommentView] = Field(default_factory=list)


class TeacherSummary(BaseModel):
    id: str
    name: str
    username: Optional[str] = None
    image_id: Optional[str] = None


class SongSummary(BaseModel):
    id: str
    title: str
    artist: str
    key: str
    bpm: int


class SetlistView(BaseModel):
    theme: str
    season: str
    songs: List[SongSummary] = Field(default_factory=list)


class BandStudentSummary(StudentSummary):
    latest_song_comment: Optional[CommentView] = None


class BandSummary(BaseModel):
    id: str
    name: str
    age_group: Optional[str] = None
    schedule: Optional[str] = None
    students: List[StudentSummary] = Field(default_factory=list)
    teachers: List[TeacherSummary] = Field(default_factory=list)


class BandDetail(BandSummary):
    joined: date
    students: List[BandStudentSummary] = Field(default_factory=list)
    current_setlist: Optional[SetlistView] = None
