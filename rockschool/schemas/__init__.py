from .comment_schemas import (
    CommentCommand,
    CreateComment,
    DeleteComment,
    ScopeKind,
    SubmitResult,
    UpdateComment,
    ValidationResult,
)
from .feed_schemas import BandDetail, BandSummary, CommentView, SubmissionResponse, TeacherSummary

__all__ = [
    "CommentCommand",
    "CreateComment",
    "DeleteComment",
    "ScopeKind",
    "SubmitResult",
    "UpdateComment",
    "ValidationResult",
    "BandDetail",
    "BandSummary",
    "CommentView",
    "SubmissionResponse",
    "TeacherSummary",
]
