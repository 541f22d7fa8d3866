# rockschool/models/student.py
from sqlalchemy import Column, String, Date, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base

class Student(Base):
    __tablename__ = "students"

    name = Column(String(100), nullable=False)
    username = Column(String(50), unique=True, index=True, nullable=False)
    dob = Column(Date, nullable=False)
    instrument = Column(String(20), nullable=False)  # one Instrument value
    image_id = Column(String(36), nullable=True)

    user_id = Column(String(36), ForeignKey("users.id"), unique=True, nullable=True)

    # Relationships
    user = relationship("User")
    teachers = relationship("Teacher", secondary="teacher_students", back_populates="students")
    songs = relationship("Song", secondary="song_students", back_populates="students")
    comments = relationship("Comment", back_populates="student")
    bands = relationship("Band", secondary="band_students", back_populates="students")
