from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..schemas.comment_schemas import ScopeKind
from ..schemas.feed_schemas import CommentView, SongDetail
from ..services.comment_store import CommentStore
from ..services.feed_service import FeedAssembler
from ..services.profile_service import ProfileService
from .common import get_requester_id, handle_comment_submission

router = APIRouter(prefix="/api/v1/songs", tags=["Songs"])

@router.get("/{song_id}", response_model=SongDetail)
async def get_song(
    song_id: str,
    take: Optional[int] = Query(None, ge=1, le=100),
    db: AsyncSession = Depends(get_db)
):
    """Song with its performers and review feed"""
    return await ProfileService(db).get_song(song_id, take=take)

@router.get("/{song_id}/comments", response_model=List[CommentView])
async def get_song_comments(
    song_id: str,
    take: Optional[int] = Query(None, ge=1, le=100),
    db: AsyncSession = Depends(get_db)
):
    return await FeedAssembler(CommentStore(db)).get_feed(song_id, ScopeKind.SONG, take=take)

@router.post("/{song_id}/comments")
async def submit_song_comment(
    song_id: str,
    request: Request,
    requester_id: Optional[str] = Depends(get_requester_id),
    db: AsyncSession = Depends(get_db)
):
    """Create, edit or delete a song comment; mentions is a comma-joined list of student ids"""
    return await handle_comment_submission(request, db, ScopeKind.SONG, song_id, requester_id)
