# rockschool/models/teacher.py
from sqlalchemy import Column, String, Text, ForeignKey, Table
from sqlalchemy.orm import relationship
from .base import Base
from .types import InstrumentSet

teacher_students = Table(
    "teacher_students",
    Base.metadata,
    Column("teacher_id", String(36), ForeignKey("teachers.id", ondelete="CASCADE"), primary_key=True),
    Column("student_id", String(36), ForeignKey("students.id", ondelete="CASCADE"), primary_key=True),
)

class Teacher(Base):
    __tablename__ = "teachers"

    name = Column(String(100), nullable=False)
    bio = Column(Text, nullable=True)
    instruments = Column(InstrumentSet(), nullable=False, default=lambda: frozenset())

    user_id = Column(String(36), ForeignKey("users.id"), unique=True, nullable=True)

    # Relationships
    user = relationship("User")
    students = relationship("Student", secondary=teacher_students, back_populates="teachers")
    comments = relationship("Comment", back_populates="author")
    song_comments = relationship("SongComment", back_populates="author")
    bands = relationship("Band", secondary="band_teachers", back_populates="teachers")
