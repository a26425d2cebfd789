import pytest
from helpers import RecordingEmailSender, make_data_url

from app.db_handlers import UserDBHandler
from app.errors import Forbidden, NotFound, UserNotFound
from app.models import UserRole
from app.services.community_service import CommunityService
from app.services.contact_service import ContactService
from app.services.idea_service import IdeaService
from app.services.journal_service import JournalService
from app.services.profile_service import ProfileService
from app.utils.auth import generate_confirmation_token


async def _create_user(database, name, role=UserRole.STANDARD):
    return await UserDBHandler(database).create_user(
        nome=name,
        email=f"{name}@example.com",
        senha_hash="$2b$04$hash",
        tipo_usuario=role,
        token_confirmacao=generate_confirmation_token(),
    )


async def _score(database, user_id) -> int:
    return (await UserDBHandler(database).get(user_id)).pontos


@pytest.mark.asyncio
async def test_journal_lists_newest_first_without_points(database):
    ana = await _create_user(database, "ana")
    journal = JournalService(database, post_award=0)

    first = await journal.post(ana.id, "Primeiro dia", titulo="Dia 1")
    second = await journal.post(ana.id, "Segundo dia")

    posts = await journal.list_for_user(ana.id)
    assert [p.id for p in posts] == [second.id, first.id]
    assert posts[1].titulo == "Dia 1"
    assert posts[0].titulo is None
    assert await _score(database, ana.id) == 0
    assert await journal.list_for_user(999) == []


@pytest.mark.asyncio
async def test_journal_award_is_configurable(database):
    ana = await _create_user(database, "ana")

    await JournalService(database, post_award=5).post(ana.id, "texto")

    assert await _score(database, ana.id) == 5


@pytest.mark.asyncio
async def test_ideas_store_processed_image_and_filter_by_user(database, image_store):
    ana = await _create_user(database, "ana")
    bia = await _create_user(database, "bia")
    ideas = IdeaService(database, image_store, conclusion_award=30)

    with_image = await ideas.create_idea(
        ana.id, "Horta", "Sustentabilidade", "Horta na escola", make_data_url()
    )
    await ideas.create_idea(bia.id, "App", "Tecnologia", "App de caronas")

    assert with_image.imagem.startswith("/uploads/ideia_")
    assert len(await ideas.list_ideas()) == 2
    assert [i.titulo for i in await ideas.list_ideas(ana.id)] == ["Horta"]


@pytest.mark.asyncio
async def test_conclusion_awards_idea_owner(database, image_store):
    ana = await _create_user(database, "ana")
    ideas = IdeaService(database, image_store, conclusion_award=30)
    idea = await ideas.create_idea(ana.id, "Horta", "Sust.", "desc")

    conclusion = await ideas.conclude(
        ana.id, idea.id, "https://youtu.be/x", "/uploads/a.jpg", "Pronto"
    )

    assert conclusion.ideia_id == idea.id
    assert await _score(database, ana.id) == 30
    assert [c.id for c in await ideas.list_conclusions(idea.id)] == [conclusion.id]
    assert await ideas.list_conclusions(idea.id + 1) == []


@pytest.mark.asyncio
async def test_only_owner_can_conclude_existing_idea(database, image_store):
    ana = await _create_user(database, "ana")
    bia = await _create_user(database, "bia")
    ideas = IdeaService(database, image_store, conclusion_award=30)
    idea = await ideas.create_idea(ana.id, "Horta", "Sust.", "desc")

    with pytest.raises(Forbidden):
        await ideas.conclude(bia.id, idea.id, "v", "i", "d")
    with pytest.raises(NotFound):
        await ideas.conclude(ana.id, 999, "v", "i", "d")

    assert await ideas.list_conclusions() == []
    assert await _score(database, bia.id) == 0


@pytest.mark.asyncio
async def test_community_post_awards_points_and_joins_author(database, image_store):
    ana = await _create_user(database, "ana")
    community = CommunityService(database, image_store, post_award=10)

    await community.post(ana.id, "Olá", "Primeiro post")
    latest = await community.post(ana.id, "Foto", "Com imagem", make_data_url())

    feed = await community.feed()
    assert [p["id"] for p in feed] == [latest.id, latest.id - 1]
    assert feed[0]["autor_nome"] == "ana"
    assert feed[0]["imagem"].startswith("/uploads/post_")
    assert await _score(database, ana.id) == 20
    assert len(await community.feed(limit=1)) == 1


@pytest.mark.asyncio
async def test_failed_community_post_discards_its_image(database, image_store, monkeypatch):
    ana = await _create_user(database, "ana")
    community = CommunityService(database, image_store, post_award=10)

    async def broken_adjust(user_id, delta, *, db=None):
        raise UserNotFound()

    monkeypatch.setattr(community.user_handler, "adjust_score", broken_adjust)

    with pytest.raises(UserNotFound):
        await community.post(ana.id, "Foto", "texto", make_data_url())

    assert await community.feed() == []
    assert list(image_store.upload_dir.iterdir()) == []


@pytest.mark.asyncio
async def test_recruiter_contact_is_stored_and_mailed(database):
    rita = await _create_user(database, "rita", UserRole.RECRUITER)
    ana = await _create_user(database, "ana")
    sender = RecordingEmailSender()

    contact = await ContactService(database, sender).contact(rita.id, ana.id, "Vamos conversar?")

    assert contact.recrutador_id == rita.id
    assert contact.usuario_id == ana.id
    [message] = sender.outbox
    assert message["to"] == "ana@example.com"
    assert "Vamos conversar?" in message["text"]


@pytest.mark.asyncio
async def test_contact_rules(database):
    rita = await _create_user(database, "rita", UserRole.RECRUITER)
    ana = await _create_user(database, "ana")
    contacts = ContactService(database, RecordingEmailSender(accept=False))

    with pytest.raises(Forbidden):
        await contacts.contact(ana.id, rita.id, "oi")
    with pytest.raises(UserNotFound):
        await contacts.contact(rita.id, 999, "oi")

    # Delivery failure does not undo the stored contact
    assert (await contacts.contact(rita.id, ana.id, "oi")).id is not None


@pytest.mark.asyncio
async def test_profile_aggregates_counts_and_position(database, image_store):
    ana = await _create_user(database, "ana")
    bia = await _create_user(database, "bia")
    await UserDBHandler(database).adjust_score(bia.id, 100)
    await JournalService(database, post_award=0).post(ana.id, "texto")
    await IdeaService(database, image_store, conclusion_award=0).create_idea(
        ana.id, "t", "c", "d"
    )

    profile = await ProfileService(database).get_profile(ana.id)

    assert profile["nome"] == "ana"
    assert profile["posicao_ranking"] == 2
    assert profile["total_ideias"] == 1
    assert profile["total_diario"] == 1
    assert profile["total_atividades"] == 0
    assert profile["atividades_recentes"] == []
    assert "senha" not in profile

    with pytest.raises(UserNotFound):
        await ProfileService(database).get_profile(999)
