# rockschool/services/band_service.py
"""Bands: the searchable list and the band page with its current setlist."""
from datetime import date
from typing import List, Optional
import logging

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from .base_service import BaseService
from .comment_store import CommentStore
from .feed_service import FeedAssembler
from .profile_service import name_matches, summarize_student, summarize_teacher
from ..core.exceptions import NotFoundError, PersistenceError
from ..models import Band, Season, Setlist, Teacher
from ..schemas.feed_schemas import (
    BandDetail,
    BandStudentSummary,
    BandSummary,
    SetlistView,
    SongSummary,
    StudentSummary,
)

logger = logging.getLogger(__name__)


def _member_options():
    return (
        selectinload(Band.students),
        selectinload(Band.teachers).selectinload(Teacher.user),
    )


class BandService(BaseService[Band]):
    def __init__(self, db: AsyncSession):
        super().__init__(Band, db)
        self.feeds = FeedAssembler(CommentStore(db))

    async def current_season(self, today: Optional[date] = None) -> Optional[Season]:
        """The latest-starting season that has begun and not yet ended"""
        today = today or date.today()
        stmt = (
            select(Season)
            .where(
                Season.start_date <= today,
                or_(Season.end_date.is_(None), Season.end_date >= today),
            )
            .order_by(Season.start_date.desc())
            .limit(1)
        )
        return await self._scalar(stmt, "current_season")

    async def list_bands(self, search: Optional[str] = None) -> List[BandSummary]:
        criteria = [name_matches(Band.name, search)] if search and search.strip() else []
        bands = await self.get_multi(*criteria, options=_member_options(), order_by=Band.name)
        return [
            BandSummary(
                id=band.id,
                name=band.name,
                age_group=band.age_group,
                schedule=band.schedule,
                students=[StudentSummary(**summarize_student(s)) for s in band.students],
                teachers=[summarize_teacher(t) for t in band.teachers],
            )
            for band in bands
        ]

    async def get_band(self, band_id: str, today: Optional[date] = None) -> BandDetail:
        """Band members, each with the newest song comment mentioning them, and this season's setlist"""
        band = await self.get(band_id, *_member_options())
        if not band:
            raise NotFoundError("Band", band_id)

        # Snapshot the members before the feed query repopulates shared instances
        detail = dict(
            id=band.id,
            name=band.name,
            age_group=band.age_group,
            schedule=band.schedule,
            joined=band.created_at.date(),
            teachers=[summarize_teacher(t) for t in band.teachers],
        )
        students = [summarize_student(s) for s in sorted(band.students, key=lambda s: s.name)]

        season = await self.current_season(today)
        setlist = await self._setlist_for(band.id, season) if season else None

        latest = await self.feeds.get_latest_song_comment_by_student([s["id"] for s in students])
        return BandDetail(
            **detail,
            students=[
                BandStudentSummary(**s, latest_song_comment=latest.get(s["id"]))
                for s in students
            ],
            current_setlist=setlist,
        )

    async def _setlist_for(self, band_id: str, season: Season) -> Optional[SetlistView]:
        stmt = (
            select(Setlist)
            .where(Setlist.band_id == band_id, Setlist.season_id == season.id)
            .options(selectinload(Setlist.songs))
            .order_by(Setlist.created_at.desc())
            .limit(1)
        )
        try:
            result = await self.db.execute(stmt)
            setlist = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error loading setlist for band %s: %s", band_id, e)
            raise PersistenceError(str(e), operation="setlist") from e
        if setlist is None:
            return None
        return SetlistView(
            theme=setlist.theme,
            season=season.name,
            songs=[
                SongSummary(id=s.id, title=s.title, artist=s.artist, key=s.key, bpm=s.bpm)
                for s in setlist.songs
            ],
        )
