# rockschool/services/feed_service.py
"""Ordered, read-only comment feeds for a student or a song."""
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from .comment_store import AnyComment, CommentStore
from ..models import SongComment
from ..schemas.comment_schemas import ScopeKind
from ..schemas.feed_schemas import AuthorView, CommentView, MentionView
from ..utils.formatting import format_mentions, time_ago


class FeedAssembler:
    def __init__(self, store: CommentStore):
        self.store = store

    async def get_feed(
        self, scope_id: str, scope_kind: ScopeKind, take: Optional[int] = None
    ) -> List[CommentView]:
        """Comments for one scope, newest first, capped at take when given"""
        scope_kind = ScopeKind(scope_kind)
        rows = await self.store.list_comments_for_scope(scope_id, scope_kind, take=take)
        now = datetime.now(timezone.utc)
        return [self.to_view(row, scope_kind, now) for row in rows]

    async def get_latest_by_student(self, student_ids: Sequence[str]) -> Dict[str, CommentView]:
        rows = await self.store.latest_comments_for_students(student_ids)
        now = datetime.now(timezone.utc)
        return {
            student_id: self.to_view(row, ScopeKind.STUDENT, now)
            for student_id, row in rows.items()
        }

    async def get_latest_song_comment_by_student(self, student_ids: Sequence[str]) -> Dict[str, CommentView]:
        """Newest song comment that mentions each student"""
        rows = await self.store.latest_song_comments_for_students(student_ids)
        now = datetime.now(timezone.utc)
        return {
            student_id: self.to_view(row, ScopeKind.SONG, now)
            for student_id, row in rows.items()
        }

    @staticmethod
    def to_view(row: AnyComment, scope_kind: ScopeKind, now: Optional[datetime] = None) -> CommentView:
        author = row.author
        mentions: List[MentionView] = []
        if isinstance(row, SongComment):
            mentions = [
                MentionView(id=link.student.id, name=link.student.name)
                for link in row.mention_links
            ]
            scope_id = row.song_id
        else:
            scope_id = row.student_id

        return CommentView(
            id=str(row.id),
            scope_kind=scope_kind,
            scope_id=scope_id,
            content=row.content,
            created_at=row.created_at,
            updated_at=row.updated_at,
            author=AuthorView(
                id=author.id,
                name=author.name,
                image_id=author.user.image_id if author.user else None,
            ),
            mentions=mentions,
            mentions_display=format_mentions([m.name for m in mentions]),
            time_ago=time_ago(row.updated_at, now),
        )
