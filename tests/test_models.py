from sqlalchemy import func, select, text

from rockschool.models import Instrument, SongComment, SongCommentMention, Teacher


async def test_instruments_are_a_set_in_python_and_a_string_in_the_table(session, school):
    raw = await session.execute(text("SELECT instruments FROM teachers WHERE id = 'teacher-2'"))
    assert raw.scalar_one() == "bass,guitar"

    await session.refresh(school.other_teacher)
    assert school.other_teacher.instruments == frozenset({Instrument.GUITAR, Instrument.BASS})


async def test_instruments_accept_plain_tags(session, school):
    teacher = Teacher(id="teacher-3", name="Kai Keys", instruments=["keys", "vocals", "keys"])
    session.add(teacher)
    await session.commit()
    await session.refresh(teacher)
    assert teacher.instruments == frozenset({Instrument.KEYS, Instrument.VOCALS})


async def test_mention_rows_go_away_with_their_comment(session, school):
    comment = SongComment(content="Tight groove", author_id="teacher-1", song_id="song-1")
    session.add(comment)
    await session.flush()
    session.add(SongCommentMention(song_comment_id=comment.id, student_id="student-1", position=0))
    await session.commit()

    await session.delete(comment)
    await session.commit()

    count = await session.scalar(select(func.count()).select_from(SongCommentMention))
    assert count == 0
