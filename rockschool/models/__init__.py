"""Import all models here, if needed for Alembic migration."""
from .base import Base
from .types import Instrument, InstrumentSet
from .user import User
from .teacher import Teacher, teacher_students
from .student import Student
from .song import Song, song_students
from .band import Band, Season, Setlist, band_students, band_teachers, setlist_songs
from .comment import Comment, SongComment, SongCommentMention

__all__ = [
    "Base",
    "Instrument",
    "InstrumentSet",
    "User",
    "Teacher",
    "teacher_students",
    "Student",
    "Song",
    "song_students",
    "Band",
    "Season",
    "Setlist",
    "band_students",
    "band_teachers",
    "setlist_songs",
    "Comment",
    "SongComment",
    "SongCommentMention",
]
