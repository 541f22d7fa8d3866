import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from rockschool.core.exceptions import PersistenceError
from rockschool.models import Comment, SongComment, SongCommentMention
from rockschool.schemas import CreateComment, DeleteComment, ScopeKind, UpdateComment, ValidationResult


def song_comment(**overrides):
    fields = dict(scope_kind=ScopeKind.SONG, scope_id="song-1", author_id="teacher-1", content="Great job!", mentions=[])
    fields.update(overrides)
    return CreateComment(**fields)


async def count(session, model):
    return await session.scalar(select(func.count()).select_from(model))


async def mention_ids(session, comment_id):
    result = await session.execute(
        select(SongCommentMention.student_id)
        .where(SongCommentMention.song_comment_id == int(comment_id))
        .order_by(SongCommentMention.position)
    )
    return list(result.scalars().all())


async def test_create_song_comment_with_mentions(session, service, school):
    comment_id = await service.create(song_comment(mentions=["student-2", "student-1"]))
    assert await count(session, SongComment) == 1
    assert await mention_ids(session, comment_id) == ["student-2", "student-1"]


async def test_update_by_id_is_idempotent(session, service, school):
    comment_id = await service.create(
        CreateComment(scope_kind=ScopeKind.STUDENT, scope_id="student-1", author_id="teacher-1", content="first")
    )
    update = UpdateComment(
        id=comment_id, scope_kind=ScopeKind.STUDENT, scope_id="student-1", author_id="teacher-1", content="a"
    )
    assert await service.update(update) == comment_id
    assert await service.update(update) == comment_id

    rows = (await session.execute(select(Comment))).scalars().all()
    assert len(rows) == 1
    assert rows[0].content == "a"


async def test_update_bumps_updated_at(session, service, store, school):
    comment_id = await service.create(song_comment())
    before = (await store.find_comment_by_id(comment_id, ScopeKind.SONG)).updated_at
    await service.update(UpdateComment(id=comment_id, **song_comment(content="Even better").model_dump(exclude={"kind"})))
    row = await store.find_comment_by_id(comment_id, ScopeKind.SONG)
    assert row.content == "Even better"
    assert row.updated_at >= before


async def test_mention_set_is_replaced_not_merged(session, service, school):
    comment_id = await service.create(song_comment(mentions=["student-1", "student-2"]))
    await service.update(
        UpdateComment(id=comment_id, **song_comment(mentions=["student-3"]).model_dump(exclude={"kind"}))
    )
    assert await mention_ids(session, comment_id) == ["student-3"]

    await service.update(
        UpdateComment(id=comment_id, **song_comment(mentions=[]).model_dump(exclude={"kind"}))
    )
    assert await mention_ids(session, comment_id) == []


async def test_delete_own_comment_removes_mentions(session, service, school):
    comment_id = await service.create(song_comment(mentions=["student-1"]))
    result = await service.submit(DeleteComment(scope_kind=ScopeKind.SONG, id=comment_id, requester_id="teacher-1"))
    assert result.status == "success"
    assert await count(session, SongComment) == 0
    assert await count(session, SongCommentMention) == 0


async def test_delete_of_another_authors_comment_is_refused(session, service, school):
    comment_id = await service.create(song_comment())
    result = await service.submit(DeleteComment(scope_kind=ScopeKind.SONG, id=comment_id, requester_id="teacher-2"))
    assert result.status == "error"
    assert result.errors == {"id": ["Note not found"]}
    assert await count(session, SongComment) == 1


async def test_unauthorized_delete_looks_like_missing_comment(session, validator, service, school):
    comment_id = await service.create(song_comment())

    def delete_form(target):
        return {"intent": "delete-comment", "id": target, "teacherId": "teacher-2"}

    foreign = await validator.validate(delete_form(comment_id), ScopeKind.SONG, requester_id="teacher-2")
    missing = await validator.validate(delete_form("4242"), ScopeKind.SONG, requester_id="teacher-2")

    assert foreign.errors == missing.errors == {"id": ["Note not found"]}
    assert (await service.submit(foreign)).status == "error"
    assert await count(session, SongComment) == 1


async def test_submit_maps_validation_results(service, school):
    errors = ValidationResult(intent="submit", errors={"content": ["Please enter a comment before submitting"]})
    result = await service.submit(errors)
    assert result.status == "error"
    assert result.errors == errors.errors

    assert (await service.submit(ValidationResult(intent="validate"))).status == "idle"


async def test_empty_content_leaves_store_untouched(session, validator, service, school):
    result = await validator.validate(
        {"intent": "submit", "teacherId": "teacher-1", "songId": "song-1", "mentions": "student-1", "content": ""},
        ScopeKind.SONG,
        scope_id="song-1",
    )
    assert (await service.submit(result)).status == "error"
    assert await count(session, SongComment) == 0
    assert await count(session, SongCommentMention) == 0


async def test_update_of_vanished_comment_reports_not_found(service, school):
    result = await service.submit(
        UpdateComment(id="777", **song_comment().model_dump(exclude={"kind"}))
    )
    assert result.status == "error"
    assert result.errors == {"id": ["Note not found"]}


async def test_store_failures_surface_as_persistence_error(session, service, school, monkeypatch):
    async def broken_flush(*args, **kwargs):
        raise OperationalError("INSERT INTO song_comments", {}, Exception("disk I/O error"))

    monkeypatch.setattr(session, "flush", broken_flush)
    with pytest.raises(PersistenceError) as excinfo:
        await service.create(song_comment(mentions=["student-1"]))
    assert excinfo.value.status_code == 500
    assert excinfo.value.operation == "upsert_comment"

    monkeypatch.undo()
    assert await count(session, SongComment) == 0


async def test_update_and_delete_stay_inside_their_scope(session, service, store, school):
    comment_id = await service.create(
        CreateComment(scope_kind=ScopeKind.STUDENT, scope_id="student-1", author_id="teacher-1", content="mine")
    )
    moved = await service.submit(
        UpdateComment(id=comment_id, scope_kind=ScopeKind.STUDENT, scope_id="student-2", author_id="teacher-1", content="x")
    )
    assert moved.status == "error"

    removed = await service.submit(
        DeleteComment(scope_kind=ScopeKind.STUDENT, scope_id="student-2", id=comment_id, requester_id="teacher-1")
    )
    assert removed.status == "error"

    row = await store.find_comment_by_id(comment_id, ScopeKind.STUDENT)
    assert (row.student_id, row.content) == ("student-1", "mine")
