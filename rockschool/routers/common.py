# rockschool/routers/common.py
"""Pieces shared by the comment-carrying routers."""
from typing import Optional

from fastapi import Header, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..services.comment_service import CommentService
from ..services.comment_store import CommentStore
from ..services.comment_validator import CommentValidator
from ..services.feed_service import FeedAssembler
from ..schemas.comment_schemas import ScopeKind
from ..schemas.feed_schemas import SubmissionResponse


async def get_requester_id(x_teacher_id: Optional[str] = Header(None)) -> Optional[str]:
    """Signed-in teacher, as forwarded by the auth layer in front of the API"""
    return x_teacher_id or None


async def handle_comment_submission(
    request: Request,
    db: AsyncSession,
    scope_kind: ScopeKind,
    scope_id: str,
    requester_id: Optional[str],
) -> JSONResponse:
    """validate -> submit -> re-read the scope's feed"""
    form = await request.form()
    fields = {key: value for key, value in form.items() if isinstance(value, str)}

    store = CommentStore(db)
    validation = await CommentValidator(store).validate(
        fields, scope_kind, scope_id=scope_id, requester_id=requester_id
    )
    result = await CommentService(store).submit(validation)

    feed = await FeedAssembler(store).get_feed(scope_id, scope_kind)

    response = SubmissionResponse(
        status=result.status,
        id=result.id,
        errors=result.errors,
        form_errors=result.form_errors,
        feed=feed,
    )
    status_code = 400 if result.status == "error" else 200
    return JSONResponse(status_code=status_code, content=response.model_dump(mode="json"))
