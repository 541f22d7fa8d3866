# rockschool/services/comment_store.py
"""Persistence boundary for student comments and song comments."""
from typing import Dict, Iterable, List, Optional, Sequence, Union
import logging

from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from .base_service import BaseService
from ..core.exceptions import PersistenceError
from ..models import Comment, SongComment, SongCommentMention, Student, Song, Teacher
from ..models.base import utcnow
from ..schemas.comment_schemas import ScopeKind

logger = logging.getLogger(__name__)

AnyComment = Union[Comment, SongComment]

_MODELS = {
    ScopeKind.STUDENT: Comment,
    ScopeKind.SONG: SongComment,
}


def parse_comment_id(comment_id) -> Optional[int]:
    """Comment ids travel as opaque strings; anything non-numeric cannot exist."""
    try:
        return int(str(comment_id).strip())
    except (TypeError, ValueError):
        return None


class CommentStore:
    """Reads and atomic writes over the comment tables.

    Write methods own their transaction: they commit on success and roll back
    before raising PersistenceError, so a half-applied write is never visible.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.students = BaseService(Student, db)
        self.teachers = BaseService(Teacher, db)
        self.songs = BaseService(Song, db)

    @staticmethod
    def model_for(scope_kind: ScopeKind):
        return _MODELS[ScopeKind(scope_kind)]

    @staticmethod
    def scope_column(scope_kind: ScopeKind):
        if ScopeKind(scope_kind) is ScopeKind.SONG:
            return SongComment.song_id
        return Comment.student_id

    def _feed_options(self, scope_kind: ScopeKind) -> list:
        model = self.model_for(scope_kind)
        options = [selectinload(model.author).selectinload(Teacher.user)]
        if ScopeKind(scope_kind) is ScopeKind.SONG:
            options.append(
                selectinload(SongComment.mention_links).selectinload(SongCommentMention.student)
            )
        return options

    async def _fail(self, operation: str, error: SQLAlchemyError, rollback: bool = False):
        logger.error("Comment store %s failed: %s", operation, error)
        if rollback:
            await self.db.rollback()
        raise PersistenceError(str(error), operation=operation) from error

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    async def find_comment_by_id(self, comment_id, scope_kind: ScopeKind) -> Optional[AnyComment]:
        pk = parse_comment_id(comment_id)
        if pk is None:
            return None
        model = self.model_for(scope_kind)
        try:
            result = await self.db.execute(select(model).where(model.id == pk))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            await self._fail("find_comment_by_id", e)

    async def find_comment_by_id_and_author(
        self, comment_id, author_id: str, scope_kind: ScopeKind, scope_id: Optional[str] = None
    ) -> Optional[AnyComment]:
        """Authorization-filtered lookup: another teacher's comment reads as missing,
        and so does one on a different student or song than scope_id.
        """
        pk = parse_comment_id(comment_id)
        if pk is None or not author_id:
            return None
        model = self.model_for(scope_kind)
        stmt = select(model).where(model.id == pk, model.author_id == author_id)
        if scope_id is not None:
            stmt = stmt.where(self.scope_column(scope_kind) == scope_id)
        try:
            result = await self.db.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            await self._fail("find_comment_by_id_and_author", e)

    async def student_exists(self, student_id: str) -> bool:
        return await self.students.exists(student_id)

    async def teacher_exists(self, teacher_id: str) -> bool:
        return await self.teachers.exists(teacher_id)

    async def song_exists(self, song_id: str) -> bool:
        return await self.songs.exists(song_id)

    async def missing_students(self, student_ids: Sequence[str]) -> List[str]:
        """Ids from student_ids with no Student row, in the order given"""
        if not student_ids:
            return []
        try:
            result = await self.db.execute(select(Student.id).where(Student.id.in_(list(student_ids))))
            found = set(result.scalars().all())
        except SQLAlchemyError as e:
            await self._fail("missing_students", e)
        return [sid for sid in student_ids if sid not in found]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def upsert_comment(
        self,
        scope_kind: ScopeKind,
        content: str,
        author_id: str,
        scope_id: str,
        mentions: Optional[Iterable[str]] = None,
        id: Optional[str] = None,
    ) -> Optional[str]:
        """Create when id is None, otherwise update content (and mentions) in place.

        Returns the row id, or None when the id to update no longer exists
        under scope_id. Author and scope of an existing row never change.
        For song comments a non-None mentions replaces the whole mention set.
        """
        scope_kind = ScopeKind(scope_kind)
        model = self.model_for(scope_kind)
        column = self.scope_column(scope_kind)
        try:
            if id is None:
                row = model(content=content, author_id=author_id)
                setattr(row, column.key, scope_id)
                self.db.add(row)
                await self.db.flush()  # Get ID without committing
            else:
                pk = parse_comment_id(id)
                row = None
                if pk is not None:
                    result = await self.db.execute(
                        select(model).where(model.id == pk, column == scope_id)
                    )
                    row = result.scalar_one_or_none()
                if row is None:
                    return None
                row.content = content
                row.updated_at = utcnow()

            if scope_kind is ScopeKind.SONG and mentions is not None:
                await self._replace_mentions(row.id, mentions)

            await self.db.commit()
            return str(row.id)
        except SQLAlchemyError as e:
            await self._fail("upsert_comment", e, rollback=True)

    async def _replace_mentions(self, song_comment_id: int, student_ids: Iterable[str]) -> None:
        await self.db.execute(
            delete(SongCommentMention).where(SongCommentMention.song_comment_id == song_comment_id)
        )
        self.db.add_all([
            SongCommentMention(song_comment_id=song_comment_id, student_id=student_id, position=position)
            for position, student_id in enumerate(student_ids)
        ])
        await self.db.flush()

    async def delete_comment(
        self,
        comment_id,
        scope_kind: ScopeKind,
        author_id: Optional[str] = None,
        scope_id: Optional[str] = None,
    ) -> bool:
        """Delete by id, optionally only when author_id and scope_id match. True if a row went away."""
        pk = parse_comment_id(comment_id)
        if pk is None:
            return False
        scope_kind = ScopeKind(scope_kind)
        model = self.model_for(scope_kind)
        conditions = [model.id == pk]
        if author_id is not None:
            conditions.append(model.author_id == author_id)
        if scope_id is not None:
            conditions.append(self.scope_column(scope_kind) == scope_id)
        try:
            if scope_kind is ScopeKind.SONG:
                owned = select(SongComment.id).where(*conditions)
                await self.db.execute(
                    delete(SongCommentMention).where(SongCommentMention.song_comment_id.in_(owned))
                )
            result = await self.db.execute(delete(model).where(*conditions))
            await self.db.commit()
            return result.rowcount > 0
        except SQLAlchemyError as e:
            await self._fail("delete_comment", e, rollback=True)

    # ------------------------------------------------------------------
    # Feeds
    # ------------------------------------------------------------------

    async def list_comments_for_scope(
        self, scope_id: str, scope_kind: ScopeKind, take: Optional[int] = None
    ) -> List[AnyComment]:
        """Newest first by updated_at; equal timestamps keep insertion order"""
        model = self.model_for(scope_kind)
        stmt = (
            select(model)
            .where(self.scope_column(scope_kind) == scope_id)
            .options(*self._feed_options(scope_kind))
            .order_by(model.updated_at.desc(), model.id.asc())
            # Rows may already sit in the identity map with stale collections
            .execution_options(populate_existing=True)
        )
        if take is not None:
            stmt = stmt.limit(take)
        try:
            result = await self.db.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            await self._fail("list_comments_for_scope", e)

    async def latest_comments_for_students(self, student_ids: Sequence[str]) -> Dict[str, Comment]:
        """Most recent comment per student, using the same order as the feed"""
        if not student_ids:
            return {}
        ranked = (
            select(
                Comment.id.label("comment_id"),
                func.row_number().over(
                    partition_by=Comment.student_id,
                    order_by=(Comment.updated_at.desc(), Comment.id.asc()),
                ).label("rn"),
            )
            .where(Comment.student_id.in_(list(student_ids)))
            .subquery()
        )
        stmt = (
            select(Comment)
            .join(ranked, ranked.c.comment_id == Comment.id)
            .where(ranked.c.rn == 1)
            .options(*self._feed_options(ScopeKind.STUDENT))
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.db.execute(stmt)
            return {comment.student_id: comment for comment in result.scalars().all()}
        except SQLAlchemyError as e:
            await self._fail("latest_comments_for_students", e)

    async def latest_song_comments_for_students(self, student_ids: Sequence[str]) -> Dict[str, SongComment]:
        """Most recent song comment mentioning each student"""
        if not student_ids:
            return {}
        ranked = (
            select(
                SongCommentMention.student_id.label("student_id"),
                SongCommentMention.song_comment_id.label("comment_id"),
                func.row_number().over(
                    partition_by=SongCommentMention.student_id,
                    order_by=(SongComment.updated_at.desc(), SongComment.id.asc()),
                ).label("rn"),
            )
            .join(SongComment, SongComment.id == SongCommentMention.song_comment_id)
            .where(SongCommentMention.student_id.in_(list(student_ids)))
            .subquery()
        )
        stmt = (
            select(SongComment, ranked.c.student_id)
            .join(ranked, ranked.c.comment_id == SongComment.id)
            .where(ranked.c.rn == 1)
            .options(*self._feed_options(ScopeKind.SONG))
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.db.execute(stmt)
            return {student_id: comment for comment, student_id in result.all()}
        except SQLAlchemyError as e:
            await self._fail("latest_song_comments_for_students", e)
