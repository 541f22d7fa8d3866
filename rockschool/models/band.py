# rockschool/models/band.py
"""Bands, the seasons they play in and each season's setlist."""
from sqlalchemy import Column, String, Date, ForeignKey, Table, Index
from sqlalchemy.orm import relationship
from .base import Base

band_students = Table(
    "band_students",
    Base.metadata,
    Column("band_id", String(36), ForeignKey("bands.id", ondelete="CASCADE"), primary_key=True),
    Column("student_id", String(36), ForeignKey("students.id", ondelete="CASCADE"), primary_key=True),
)

band_teachers = Table(
    "band_teachers",
    Base.metadata,
    Column("band_id", String(36), ForeignKey("bands.id", ondelete="CASCADE"), primary_key=True),
    Column("teacher_id", String(36), ForeignKey("teachers.id", ondelete="CASCADE"), primary_key=True),
)

setlist_songs = Table(
    "setlist_songs",
    Base.metadata,
    Column("setlist_id", String(36), ForeignKey("setlists.id", ondelete="CASCADE"), primary_key=True),
    Column("song_id", String(36), ForeignKey("songs.id", ondelete="CASCADE"), primary_key=True),
)

class Band(Base):
    __tablename__ = "bands"

    name = Column(String(100), nullable=False, index=True)
    age_group = Column(String(50), nullable=True)
    schedule = Column(String(100), nullable=True)  # e.g. "Tuesdays 5pm"

    # Relationships
    students = relationship("Student", secondary=band_students, back_populates="bands")
    teachers = relationship("Teacher", secondary=band_teachers, back_populates="bands")
    setlists = relationship("Setlist", back_populates="band", cascade="all, delete-orphan")

class Season(Base):
    """A term of rehearsals; open-ended while end_date is null"""
    __tablename__ = "seasons"

    name = Column(String(100), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)

    setlists = relationship("Setlist", back_populates="season")

class Setlist(Base):
    __tablename__ = "setlists"

    theme = Column(String(200), nullable=False)
    band_id = Column(String(36), ForeignKey("bands.id", ondelete="CASCADE"), nullable=False, index=True)
    season_id = Column(String(36), ForeignKey("seasons.id"), nullable=False, index=True)

    # Relationships
    band = relationship("Band", back_populates="setlists")
    season = relationship("Season", back_populates="setlists")
    songs = relationship("Song", secondary=setlist_songs, order_by="Song.title")

    __table_args__ = (
        Index('idx_setlist_band_season', 'band_id', 'season_id'),
    )
