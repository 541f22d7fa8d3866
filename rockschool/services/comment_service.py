# rockschool/services/comment_service.py
from typing import Union
import logging

from .comment_store import CommentStore
from ..schemas.comment_schemas import (
    NOTE_NOT_FOUND_MESSAGE,
    CommentCommand,
    CreateComment,
    DeleteComment,
    ScopeKind,
    SubmitResult,
    UpdateComment,
    ValidationResult,
)

logger = logging.getLogger(__name__)


class CommentService:
    """Applies validated comment commands to the store.

    Every operation is one store transaction. PersistenceError propagates to
    the caller untouched; nothing is retried.
    """

    def __init__(self, store: CommentStore):
        self.store = store

    async def create(self, cmd: CreateComment) -> str:
        comment_id = await self.store.upsert_comment(
            scope_kind=cmd.scope_kind,
            content=cmd.content,
            author_id=cmd.author_id,
            scope_id=cmd.scope_id,
            mentions=cmd.mentions if cmd.scope_kind is ScopeKind.SONG else None,
        )
        logger.info("Teacher %s created %s comment %s on %s", cmd.author_id, cmd.scope_kind.value, comment_id, cmd.scope_id)
        return comment_id

    async def update(self, cmd: UpdateComment):
        """Returns the id, or None if the comment vanished after validation"""
        comment_id = await self.store.upsert_comment(
            scope_kind=cmd.scope_kind,
            content=cmd.content,
            author_id=cmd.author_id,
            scope_id=cmd.scope_id,
            mentions=(cmd.mentions or []) if cmd.scope_kind is ScopeKind.SONG else None,
            id=cmd.id,
        )
        if comment_id is None:
            logger.warning("Comment %s disappeared before it could be updated", cmd.id)
        return comment_id

    async def delete(self, cmd: DeleteComment) -> bool:
        deleted = await self.store.delete_comment(
            cmd.id, cmd.scope_kind, author_id=cmd.requester_id, scope_id=cmd.scope_id
        )
        if deleted:
            logger.info("Teacher %s deleted %s comment %s", cmd.requester_id, cmd.scope_kind.value, cmd.id)
        return deleted

    async def submit(self, submission: Union[ValidationResult, CommentCommand]) -> SubmitResult:
        if isinstance(submission, ValidationResult):
            if not submission.ok:
                return SubmitResult(status="error", errors=submission.errors, form_errors=submission.form_errors)
            if submission.command is None:
                return SubmitResult(status="idle")
            cmd = submission.command
        else:
            cmd = submission

        if isinstance(cmd, DeleteComment):
            if not await self.delete(cmd):
                return SubmitResult(status="error", errors={"id": [NOTE_NOT_FOUND_MESSAGE]})
            return SubmitResult(status="success", id=cmd.id)

        if isinstance(cmd, UpdateComment):
            comment_id = await self.update(cmd)
            if comment_id is None:
                return SubmitResult(status="error", errors={"id": [NOTE_NOT_FOUND_MESSAGE]})
            return SubmitResult(status="success", id=comment_id)

        return SubmitResult(status="success", id=await self.create(cmd))
