from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..schemas.feed_schemas import TeacherDetail, TeacherSummary
from ..services.profile_service import ProfileService

router = APIRouter(prefix="/api/v1/teachers", tags=["Teachers"])

@router.get("/", response_model=List[TeacherSummary])
async def list_teachers(
    search: Optional[str] = Query(None, description="Part of a teacher's name or username"),
    db: AsyncSession = Depends(get_db)
):
    return await ProfileService(db).list_teachers(search)

@router.get("/{teacher_id}", response_model=TeacherDetail)
async def get_teacher(
    teacher_id: str,
    db: AsyncSession = Depends(get_db)
):
    """Teacher profile listing each student with their latest comment"""
    return await ProfileService(db).get_teacher(teacher_id)
