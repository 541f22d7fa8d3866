import pytest

from rockschool.schemas import CreateComment, DeleteComment, ScopeKind, UpdateComment


def song_form(**overrides):
    form = {
        "intent": "submit",
        "teacherId": "teacher-1",
        "songId": "song-1",
        "mentions": "",
        "content": "Great job!",
    }
    form.update(overrides)
    return form


def student_form(**overrides):
    form = {"intent": "submit", "teacherId": "teacher-1", "content": "Practised scales"}
    form.update(overrides)
    return form


async def test_blank_content_is_rejected_for_every_scope(validator, school):
    for content in ("", "   "):
        song = await validator.validate(song_form(content=content), ScopeKind.SONG, scope_id="song-1")
        student = await validator.validate(student_form(content=content), ScopeKind.STUDENT, scope_id="student-1")
        for result in (song, student):
            assert result.command is None
            assert result.errors["content"] == ["Please enter a comment before submitting"]


async def test_all_field_errors_are_reported_together(validator, school):
    result = await validator.validate({"intent": "submit"}, ScopeKind.SONG)
    assert set(result.errors) == {"teacherId", "songId", "content"}
    assert result.command is None


async def test_create_song_comment_command(validator, school):
    result = await validator.validate(
        song_form(mentions="student-2, student-1,student-2"), ScopeKind.SONG, scope_id="song-1"
    )
    assert result.ok
    assert isinstance(result.command, CreateComment)
    assert result.command.kind == "create"
    assert result.command.author_id == "teacher-1"
    assert result.command.scope_id == "song-1"
    assert result.command.mentions == ["student-2", "student-1"]


async def test_empty_mentions_is_an_empty_set(validator, school):
    result = await validator.validate(song_form(mentions=""), ScopeKind.SONG, scope_id="song-1")
    assert result.command.mentions == []


async def test_student_comment_takes_scope_from_route(validator, school):
    result = await validator.validate(student_form(), ScopeKind.STUDENT, scope_id="student-3")
    assert isinstance(result.command, CreateComment)
    assert result.command.scope_id == "student-3"
    assert result.command.mentions is None


async def test_update_command_for_own_comment(validator, service, school):
    created = await service.submit(
        (await validator.validate(student_form(), ScopeKind.STUDENT, scope_id="student-1")).command
    )
    result = await validator.validate(
        student_form(id=created.id, content="Edited"), ScopeKind.STUDENT, scope_id="student-1"
    )
    assert isinstance(result.command, UpdateComment)
    assert result.command.id == created.id
    assert result.command.content == "Edited"


async def test_unknown_id_is_note_not_found(validator, school):
    for bad_id in ("999", "not-a-number"):
        result = await validator.validate(song_form(id=bad_id), ScopeKind.SONG, scope_id="song-1")
        assert result.errors == {"id": ["Note not found"]}


async def test_delete_requires_id(validator, school):
    result = await validator.validate({"intent": "delete-comment", "teacherId": "teacher-1"}, ScopeKind.SONG)
    assert "id" in result.errors
    assert result.command is None


async def test_delete_ignores_content(validator, service, school):
    created = await service.submit(
        (await validator.validate(song_form(), ScopeKind.SONG, scope_id="song-1")).command
    )
    result = await validator.validate(
        {"intent": "delete-comment", "id": created.id, "teacherId": "teacher-1"}, ScopeKind.SONG
    )
    assert isinstance(result.command, DeleteComment)
    assert result.command.requester_id == "teacher-1"


async def test_other_intents_validate_without_a_command(validator, school):
    result = await validator.validate(song_form(intent="validate"), ScopeKind.SONG, scope_id="song-1")
    assert result.ok
    assert result.command is None

    result = await validator.validate(song_form(intent="", content=""), ScopeKind.SONG, scope_id="song-1")
    assert "content" in result.errors


async def test_unknown_mentions_are_rejected(validator, school):
    result = await validator.validate(
        song_form(mentions="student-1,ghost"), ScopeKind.SONG, scope_id="song-1"
    )
    assert result.errors == {"mentions": ["Student not found: ghost"]}


async def test_unknown_teacher_and_scope(validator, school):
    result = await validator.validate(song_form(teacherId="nobody", songId="no-song"), ScopeKind.SONG)
    assert result.errors == {"teacherId": ["Teacher not found"], "songId": ["Song not found"]}

    result = await validator.validate(student_form(), ScopeKind.STUDENT, scope_id="no-student")
    assert result.form_errors == ["Student not found"]


async def test_song_id_must_match_route(validator, school):
    result = await validator.validate(song_form(), ScopeKind.SONG, scope_id="song-2")
    assert result.errors == {"songId": ["Comment does not belong to this song"]}


@pytest.mark.parametrize("scope_kind", [ScopeKind.SONG, ScopeKind.STUDENT])
async def test_requester_cannot_post_as_someone_else(validator, school, scope_kind):
    form = song_form() if scope_kind is ScopeKind.SONG else student_form()
    result = await validator.validate(form, scope_kind, scope_id="song-1" if scope_kind is ScopeKind.SONG else "student-1", requester_id="teacher-2")
    assert result.errors == {"teacherId": ["You can only post comments as yourself"]}


async def test_missing_and_blank_fields_share_form_names(validator, school):
    missing = await validator.validate({"intent": "submit"}, ScopeKind.SONG)
    blank = await validator.validate(
        {"intent": "submit", "teacherId": "", "songId": " ", "content": ""}, ScopeKind.SONG
    )
    assert missing.errors == blank.errors == {
        "teacherId": ["Teacher is required"],
        "songId": ["Song is required"],
        "content": ["Please enter a comment before submitting"],
    }


async def test_comment_from_another_student_is_not_found(validator, service, school):
    created = await service.submit(
        (await validator.validate(student_form(), ScopeKind.STUDENT, scope_id="student-1")).command
    )
    edit = await validator.validate(
        student_form(id=created.id, content="moved?"), ScopeKind.STUDENT, scope_id="student-2"
    )
    assert edit.errors == {"id": ["Note not found"]}
    assert edit.command is None

    delete = await validator.validate(
        {"intent": "delete-comment", "id": created.id, "teacherId": "teacher-1"},
        ScopeKind.STUDENT,
        scope_id="student-2",
    )
    assert delete.errors == {"id": ["Note not found"]}
