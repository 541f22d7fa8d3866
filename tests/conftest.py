from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from rockschool.core.database import build_engine, build_session_factory, get_db, init_models
from rockschool.main import app
from rockschool.models import Band, Instrument, Season, Setlist, Song, Student, Teacher, User
from rockschool.services import CommentService, CommentStore, CommentValidator, FeedAssembler


@dataclass
class School:
    teacher: Teacher
    other_teacher: Teacher
    students: list
    song: Song


@pytest.fixture()
async def engine():
    engine = build_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture()
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture()
async def school(session) -> School:
    user = User(id="user-1", email="drums@example.com", username="drumteacher", name="Dana", image_id="img-1")
    teacher = Teacher(id="teacher-1", name="Dana Drums", instruments={Instrument.DRUMS}, user=user)
    other = Teacher(id="teacher-2", name="Gil Guitar", instruments={Instrument.GUITAR, Instrument.BASS})
    students = [
        Student(id=f"student-{n}", name=name, username=name.lower(), dob=date(2010, 5, n), instrument="drums")
        for n, name in ((1, "Ana"), (2, "Ben"), (3, "Cleo"))
    ]
    song = Song(id="song-1", title="Come As You Are", artist="Nirvana", key="Em", bpm=120, students=students[:2])
    teacher.students = students
    session.add_all([user, teacher, other, song, *students])
    await session.commit()
    return School(teacher=teacher, other_teacher=other, students=students, song=song)


@pytest.fixture()
def store(session) -> CommentStore:
    return CommentStore(session)


@pytest.fixture()
def validator(store) -> CommentValidator:
    return CommentValidator(store)


@pytest.fixture()
def service(store) -> CommentService:
    return CommentService(store)


@pytest.fixture()
def feeds(store) -> FeedAssembler:
    return FeedAssembler(store)


@pytest.fixture()
async def client(session_factory, school):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture()
async def band(session, school) -> Band:
    today = date.today()
    last_term = Season(id="season-old", name="Spring", start_date=today - timedelta(days=400), end_date=today - timedelta(days=200))
    this_term = Season(id="season-now", name="Fall", start_date=today - timedelta(days=30))
    old_song = Song(id="song-2", title="Seven Nation Army", artist="The White Stripes", key="E", bpm=124)

    band = Band(
        id="band-1",
        name="The Smells",
        age_group="10-12",
        schedule="Tuesdays 5pm",
        students=school.students[:2],
        teachers=[school.teacher],
    )
    band.setlists = [
        Setlist(theme="Blues", season=last_term, songs=[old_song]),
        Setlist(theme="Grunge", season=this_term, songs=[school.song]),
    ]
    session.add_all([last_term, this_term, old_song, band])
    await session.commit()
    return band
