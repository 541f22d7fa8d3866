# rockschool/services/comment_validator.py
"""Turns an untrusted comment form submission into a typed command."""
from typing import Any, Dict, Mapping, Optional, Type
import logging

from pydantic import BaseModel, ValidationError

from .comment_store import CommentStore
from ..schemas.comment_schemas import (
    INTENT_DELETE,
    INTENT_SUBMIT,
    NOTE_NOT_FOUND_MESSAGE,
    CommentForm,
    CreateComment,
    DeleteComment,
    DeleteCommentForm,
    ScopeKind,
    SongCommentForm,
    UpdateComment,
    ValidationResult,
)

logger = logging.getLogger(__name__)

FORM_FIELD = "__form__"


def collect_field_errors(exc: ValidationError, schema: Type[BaseModel]) -> Dict[str, list]:
    """Group pydantic errors by submitted field name, keeping every message.

    pydantic reports defaulted fields under their attribute name and supplied
    ones under their alias, so both are mapped back to the form name.
    """
    errors: Dict[str, list] = {}
    for error in exc.errors():
        loc = error.get("loc") or (FORM_FIELD,)
        name = str(loc[0])
        field = schema.model_fields.get(name)
        if field is not None and field.alias:
            name = field.alias
        errors.setdefault(name, []).append(error["msg"])
    return errors


class CommentValidator:
    def __init__(self, store: CommentStore):
        self.store = store

    async def validate(
        self,
        form_fields: Mapping[str, Any],
        scope_kind: ScopeKind,
        scope_id: Optional[str] = None,
        requester_id: Optional[str] = None,
    ) -> ValidationResult:
        """Validate a submission for one scope.

        scope_id is the student for student comments (taken from the route),
        and for song comments it is checked against the submitted songId.
        An edited or deleted comment must belong to that same scope.
        requester_id is the signed-in teacher; when None the submitted
        teacherId acts as the requester.

        Expected failures come back as field errors on the result. Store faults
        raise PersistenceError.
        """
        scope_kind = ScopeKind(scope_kind)
        intent = str(form_fields.get("intent") or "")
        result = ValidationResult(intent=intent)

        if intent == INTENT_DELETE:
            schema = DeleteCommentForm
        elif scope_kind is ScopeKind.SONG:
            schema = SongCommentForm
        else:
            schema = CommentForm

        # 1. field validation, all errors at once
        try:
            form = schema.model_validate(dict(form_fields))
        except ValidationError as exc:
            for field, messages in collect_field_errors(exc, schema).items():
                for message in messages:
                    result.add_error(field, message)
            return result

        if scope_kind is ScopeKind.STUDENT and intent != INTENT_DELETE and not scope_id:
            result.form_errors.append("No student ID was found.")
            return result

        # 2. the requester may only act as themselves
        if requester_id and requester_id != form.teacher_id:
            result.add_error("teacherId", "You can only post comments as yourself")
            return result
        requester = requester_id or form.teacher_id

        # the scope the comment must belong to; deletes only know the route
        if scope_kind is ScopeKind.SONG and intent != INTENT_DELETE:
            target_id = form.song_id
        else:
            target_id = scope_id

        # 3. existence checks against the store
        if form.id is not None:
            existing = await self.store.find_comment_by_id_and_author(
                form.id, requester, scope_kind, scope_id=target_id
            )
            if existing is None:
                result.add_error("id", NOTE_NOT_FOUND_MESSAGE)

        if intent == INTENT_DELETE:
            if result.ok:
                result.command = DeleteComment(
                    scope_kind=scope_kind, scope_id=target_id, id=form.id, requester_id=requester
                )
            return result

        if not await self.store.teacher_exists(form.teacher_id):
            result.add_error("teacherId", "Teacher not found")

        mentions = None
        if scope_kind is ScopeKind.SONG:
            if scope_id and scope_id != form.song_id:
                result.add_error("songId", "Comment does not belong to this song")
            elif not await self.store.song_exists(form.song_id):
                result.add_error("songId", "Song not found")
            mentions = list(form.mentions)
            for missing in await self.store.missing_students(mentions):
                result.add_error("mentions", f"Student not found: {missing}")
        else:
            if not await self.store.student_exists(scope_id):
                result.form_errors.append("Student not found")

        # 4. build the command
        if not result.ok or intent != INTENT_SUBMIT:
            if not result.ok:
                logger.debug("Rejected %s comment submission: %s", scope_kind.value, result.errors)
            return result

        fields = dict(
            scope_kind=scope_kind,
            scope_id=target_id,
            author_id=form.teacher_id,
            content=form.content,
            mentions=mentions,
        )
        if form.id is None:
            result.command = CreateComment(**fields)
        else:
            result.command = UpdateComment(id=form.id, **fields)
        return result
