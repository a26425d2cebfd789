import asyncio

import pytest
import pytest_asyncio

from app.db_handlers import ActivityDBHandler, UserDBHandler
from app.errors import DuplicateSubmission, Forbidden, NotFound, UserNotFound
from app.models import ActivityStatus, UserRole
from app.services.challenge_service import ChallengeService
from app.utils.auth import generate_confirmation_token


async def _create_user(database, email, role=UserRole.STANDARD):
    return await UserDBHandler(database).create_user(
        nome=email.split("@")[0],
        email=email,
        senha_hash="$2b$04$placeholderplaceholderplaceholderplaceholderplacehol",
        tipo_usuario=role,
        token_confirmacao=generate_confirmation_token(),
    )


@pytest.fixture
def challenges(database) -> ChallengeService:
    return ChallengeService(database, submission_award=1000, allow_duplicate_submissions=True)


@pytest_asyncio.fixture
async def recruiter(database):
    return await _create_user(database, "rh@example.com", UserRole.RECRUITER)


@pytest_asyncio.fixture
async def student(database):
    return await _create_user(database, "aluno@example.com")


async def _score(database, user_id) -> int:
    return (await UserDBHandler(database).get(user_id)).pontos


async def _activity_count(database, **filters) -> int:
    return await ActivityDBHandler(database).count_by_attributes(**filters)


@pytest.mark.asyncio
async def test_recruiter_posts_and_lists_challenges(challenges, recruiter):
    first = await challenges.post_challenge(recruiter.id, "API REST", "Crie uma API", "Backend")
    second = await challenges.post_challenge(recruiter.id, "Landing", "Crie uma página", "Frontend")

    listed = await challenges.list_challenges()

    assert [c["id"] for c in listed] == [second.id, first.id]
    assert listed[0]["recrutador_nome"] == "rh"
    assert listed[1]["area"] == "Backend"


@pytest.mark.asyncio
async def test_standard_user_cannot_post_challenge(challenges, student):
    with pytest.raises(Forbidden):
        await challenges.post_challenge(student.id, "X", "Y", "Z")

    assert await challenges.list_challenges() == []


@pytest.mark.asyncio
async def test_unknown_recruiter_cannot_post_challenge(challenges):
    with pytest.raises(UserNotFound):
        await challenges.post_challenge(999, "X", "Y", "Z")


@pytest.mark.asyncio
async def test_submission_records_completed_activity_and_awards_points(
    challenges, database, recruiter, student
):
    challenge = await challenges.post_challenge(recruiter.id, "API", "desc", "Backend")

    activity = await challenges.submit(student.id, challenge.id, "https://github.com/a/b")

    assert activity.status == ActivityStatus.COMPLETED
    assert activity.usuario_id == student.id
    assert activity.link == "https://github.com/a/b"
    assert await _score(database, student.id) == 1000


@pytest.mark.asyncio
async def test_submission_to_unknown_challenge_changes_nothing(
    challenges, database, student
):
    with pytest.raises(NotFound):
        await challenges.submit(student.id, 12345, "https://example.com")

    assert await _activity_count(database) == 0
    assert await _score(database, student.id) == 0


@pytest.mark.asyncio
async def test_failed_award_rolls_back_the_activity(
    challenges, database, recruiter
):
    challenge = await challenges.post_challenge(recruiter.id, "API", "desc", "Backend")

    with pytest.raises(UserNotFound):
        await challenges.submit(4242, challenge.id, "https://example.com")

    assert await _activity_count(database) == 0


@pytest.mark.asyncio
async def test_error_during_award_leaves_no_partial_state(
    challenges, database, recruiter, student, monkeypatch
):
    challenge = await challenges.post_challenge(recruiter.id, "API", "desc", "Backend")

    async def broken_adjust(user_id, delta, *, db=None):
        raise RuntimeError("connection lost mid-transaction")

    monkeypatch.setattr(challenges.user_handler, "adjust_score", broken_adjust)

    with pytest.raises(RuntimeError):
        await challenges.submit(student.id, challenge.id, "https://example.com")

    assert await _activity_count(database) == 0
    assert await _score(database, student.id) == 0


@pytest.mark.asyncio
async def test_repeated_submissions_are_each_awarded(
    challenges, database, recruiter, student
):
    challenge = await challenges.post_challenge(recruiter.id, "API", "desc", "Backend")

    await challenges.submit(student.id, challenge.id, "https://example.com/1")
    await challenges.submit(student.id, challenge.id, "https://example.com/2")

    assert await _activity_count(database, usuario_id=student.id) == 2
    assert await _score(database, student.id) == 2000


@pytest.mark.asyncio
async def test_concurrent_submissions_never_lose_points(
    challenges, database, recruiter, student
):
    challenge = await challenges.post_challenge(recruiter.id, "API", "desc", "Backend")

    await asyncio.gather(
        *(
            challenges.submit(student.id, challenge.id, f"https://example.com/{i}")
            for i in range(2)
        )
    )

    assert await _activity_count(database, usuario_id=student.id) == 2
    assert await _score(database, student.id) == 2000


@pytest.mark.asyncio
async def test_duplicates_can_be_disabled(database, recruiter, student):
    strict = ChallengeService(
        database, submission_award=1000, allow_duplicate_submissions=False
    )
    challenge = await strict.post_challenge(recruiter.id, "API", "desc", "Backend")
    await strict.submit(student.id, challenge.id, "https://example.com/1")

    with pytest.raises(DuplicateSubmission):
        await strict.submit(student.id, challenge.id, "https://example.com/2")

    assert await _activity_count(database, usuario_id=student.id) == 1
    assert await _score(database, student.id) == 1000
