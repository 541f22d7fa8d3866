# rockschool/models/comment.py
"""Teacher comments on students and on songs, plus song comment mentions."""
from sqlalchemy import Column, String, Integer, Text, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base

class Comment(Base):
    """A comment scoped to one student"""
    __tablename__ = "comments"

    # Ascending integer ids give feeds a stable insertion-order tie break
    id = Column(Integer, primary_key=True, autoincrement=True)

    content = Column(Text, nullable=False)
    author_id = Column(String(36), ForeignKey("teachers.id"), nullable=False, index=True)
    student_id = Column(String(36), ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)

    # Relationships
    author = relationship("Teacher", back_populates="comments")
    student = relationship("Student", back_populates="comments")

    __table_args__ = (
        Index('idx_comment_student_updated', 'student_id', 'updated_at'),
    )

class SongComment(Base):
    """A comment scoped to one song, optionally mentioning students"""
    __tablename__ = "song_comments"

    id = Column(Integer, primary_key=True, autoincrement=True)

    content = Column(Text, nullable=False)
    author_id = Column(String(36), ForeignKey("teachers.id"), nullable=False, index=True)
    song_id = Column(String(36), ForeignKey("songs.id", ondelete="CASCADE"), nullable=False, index=True)

    # Relationships
    author = relationship("Teacher", back_populates="song_comments")
    song = relationship("Song", back_populates="comments")
    mention_links = relationship(
        "SongCommentMention",
        back_populates="song_comment",
        order_by="SongCommentMention.position",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index('idx_song_comment_song_updated', 'song_id', 'updated_at'),
    )

class SongCommentMention(Base):
    """Relation row: a student called out in a song comment.

    Has no lifecycle of its own; rows go away with either side.
    """
    __tablename__ = "song_comment_mentions"

    song_comment_id = Column(Integer, ForeignKey("song_comments.id", ondelete="CASCADE"), nullable=False, index=True)
    student_id = Column(String(36), ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)  # order as submitted

    # Relationships
    song_comment = relationship("SongComment", back_populates="mention_links")
    student = relationship("Student")

    __table_args__ = (
        UniqueConstraint('song_comment_id', 'student_id', name='uq_song_comment_mention'),
    )
