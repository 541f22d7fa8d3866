from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..schemas.comment_schemas import ScopeKind
from ..schemas.feed_schemas import CommentView, StudentDetail, StudentSummary
from ..services.comment_store import CommentStore
from ..services.feed_service import FeedAssembler
from ..services.profile_service import ProfileService
from .common import get_requester_id, handle_comment_submission

router = APIRouter(prefix="/api/v1/students", tags=["Students"])

@router.get("/", response_model=List[StudentSummary])
async def list_students(
    search: Optional[str] = Query(None, description="Part of a student name"),
    db: AsyncSession = Depends(get_db)
):
    """All students by name, optionally filtered"""
    return await ProfileService(db).list_students(search)

@router.get("/{student_id}", response_model=StudentDetail)
async def get_student(
    student_id: str,
    take: Optional[int] = Query(None, ge=1, le=100),
    db: AsyncSession = Depends(get_db)
):
    """Student profile with their comment feed"""
    return await ProfileService(db).get_student(student_id, take=take)

@router.get("/{student_id}/comments", response_model=List[CommentView])
async def get_student_comments(
    student_id: str,
    take: Optional[int] = Query(None, ge=1, le=100),
    db: AsyncSession = Depends(get_db)
):
    """Comments on a student, newest first"""
    return await FeedAssembler(CommentStore(db)).get_feed(student_id, ScopeKind.STUDENT, take=take)

@router.post("/{student_id}/comments")
async def submit_student_comment(
    student_id: str,
    request: Request,
    requester_id: Optional[str] = Depends(get_requester_id),
    db: AsyncSession = Depends(get_db)
):
    """Create, edit or delete a comment on a student (form-encoded)"""
    return await handle_comment_submission(request, db, ScopeKind.STUDENT, student_id, requester_id)
