# rockschool/services/profile_service.py
"""Detail views and searchable lists for students, songs and teachers."""
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from .base_service import BaseService
from .comment_store import CommentStore
from .feed_service import FeedAssembler
from ..core.exceptions import NotFoundError
from ..models import Song, Student, Teacher, User
from ..schemas.comment_schemas import ScopeKind
from ..schemas.feed_schemas import (
    SongDetail,
    StudentDetail,
    StudentSummary,
    TeacherDetail,
    TeacherStudentSummary,
    TeacherSummary,
)
from ..utils.formatting import student_age


def summarize_student(student: Student) -> dict:
    return {
        "id": student.id,
        "name": student.name,
        "username": student.username,
        "instrument": student.instrument,
        "age": student_age(student.dob),
        "image_id": student.image_id,
    }


def summarize_teacher(teacher: Teacher) -> TeacherSummary:
    return TeacherSummary(
        id=teacher.id,
        name=teacher.name,
        username=teacher.user.username if teacher.user else None,
        image_id=teacher.user.image_id if teacher.user else None,
    )


def name_matches(column, search: str):
    return column.icontains(search.strip(), autoescape=True)


class ProfileService:
    def __init__(self, db: AsyncSession):
        self.students = BaseService(Student, db)
        self.songs = BaseService(Song, db)
        self.teachers = BaseService(Teacher, db)
        self.feeds = FeedAssembler(CommentStore(db))

    async def get_student(self, student_id: str, take: Optional[int] = None) -> StudentDetail:
        student = await self.students.get(student_id)
        if not student:
            raise NotFoundError("Student", student_id)
        comments = await self.feeds.get_feed(student.id, ScopeKind.STUDENT, take=take)
        return StudentDetail(**summarize_student(student), comments=comments)

    async def get_song(self, song_id: str, take: Optional[int] = None) -> SongDetail:
        song = await self.songs.get(song_id, selectinload(Song.students))
        if not song:
            raise NotFoundError("Song", song_id)
        comments = await self.feeds.get_feed(song.id, ScopeKind.SONG, take=take)
        return SongDetail(
            id=song.id,
            title=song.title,
            artist=song.artist,
            description=song.description,
            key=song.key,
            bpm=song.bpm,
            lyrics=song.lyrics,
            students=[StudentSummary(**summarize_student(s)) for s in song.students],
            comments=comments,
            created_at=song.created_at,
        )

    async def get_teacher(self, teacher_id: str) -> TeacherDetail:
        """Teacher profile with each of their students' most recent comment"""
        teacher = await self.teachers.get(
            teacher_id, selectinload(Teacher.students), selectinload(Teacher.user)
        )
        if not teacher:
            raise NotFoundError("Teacher", teacher_id)
        # Read everything off the teacher first: the feed query repopulates the
        # same instance when it authored the latest comment, expiring its collections
        detail = dict(
            id=teacher.id,
            name=teacher.name,
            bio=teacher.bio,
            instruments=sorted(i.value for i in teacher.instruments),
            image_id=teacher.user.image_id if teacher.user else None,
            joined=teacher.created_at.date(),
        )
        students = [summarize_student(s) for s in sorted(teacher.students, key=lambda s: s.name)]

        latest = await self.feeds.get_latest_by_student([s["id"] for s in students])
        return TeacherDetail(
            **detail,
            students=[
                TeacherStudentSummary(**s, latest_comment=latest.get(s["id"]))
                for s in students
            ],
        )

    async def list_students(self, search: Optional[str] = None) -> List[StudentSummary]:
        """Students whose name contains search (case-insensitive), by name"""
        criteria = [name_matches(Student.name, search)] if search and search.strip() else []
        students = await self.students.get_multi(*criteria, order_by=Student.name)
        return [StudentSummary(**summarize_student(s)) for s in students]

    async def list_teachers(self, search: Optional[str] = None) -> List[TeacherSummary]:
        """Teachers matched on name or their user's username"""
        criteria = []
        if search and search.strip():
            criteria.append(or_(name_matches(Teacher.name, search), name_matches(User.username, search)))
        teachers = await self.teachers.get_multi(
            *criteria, join=Teacher.user, options=(selectinload(Teacher.user),), order_by=Teacher.name
        )
        return [summarize_teacher(t) for t in teachers]
