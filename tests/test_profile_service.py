from rockschool.services import ProfileService
from rockschool.schemas import CreateComment, ScopeKind


async def test_student_search_is_case_insensitive(session, school):
    profiles = ProfileService(session)
    assert [s.name for s in await profiles.list_students("AN")] == ["Ana"]
    assert [s.name for s in await profiles.list_students("  ")] == ["Ana", "Ben", "Cleo"]
    assert await profiles.list_students("_") == []


async def test_teacher_search_matches_name_or_username(session, school):
    profiles = ProfileService(session)
    assert [t.id for t in await profiles.list_teachers("drumteacher")] == ["teacher-1"]
    assert [t.id for t in await profiles.list_teachers("gil")] == ["teacher-2"]
    teachers = await profiles.list_teachers()
    assert [(t.name, t.username) for t in teachers] == [("Dana Drums", "drumteacher"), ("Gil Guitar", None)]


async def test_teacher_detail_after_authoring_the_latest_comment(session, service, school):
    await service.create(
        CreateComment(scope_kind=ScopeKind.STUDENT, scope_id="student-2", author_id="teacher-1", content="Solid fills")
    )
    # the teacher is already in the identity map from the seed data
    detail = await ProfileService(session).get_teacher("teacher-1")
    assert [s.name for s in detail.students] == ["Ana", "Ben", "Cleo"]
    assert detail.students[1].latest_comment.content == "Solid fills"
    assert detail.students[1].latest_comment.author.name == "Dana Drums"
    assert detail.image_id == "img-1"
