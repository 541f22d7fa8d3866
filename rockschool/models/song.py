# rockschool/models/song.py
from sqlalchemy import Column, String, Integer, Text, ForeignKey, Table
from sqlalchemy.orm import relationship
from .base import Base

# Students who perform a song
song_students = Table(
    "song_students",
    Base.metadata,
    Column("song_id", String(36), ForeignKey("songs.id", ondelete="CASCADE"), primary_key=True),
    Column("student_id", String(36), ForeignKey("students.id", ondelete="CASCADE"), primary_key=True),
)

class Song(Base):
    __tablename__ = "songs"

    title = Column(String(200), nullable=False)
    artist = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    key = Column(String(10), nullable=False)
    bpm = Column(Integer, nullable=False)
    lyrics = Column(Text, nullable=True)

    # Relationships
    students = relationship("Student", secondary=song_students, back_populates="songs")
    comments = relationship("SongComment", back_populates="song")
