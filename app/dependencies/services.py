"""
Service providers.

Services are cheap wrappers around the process-wide resources kept on
``app.state`` (database, email sender, image store) and are built per request.
"""

from fastapi import Depends, Request

from app.db import Database, get_database
from app.services.account_service import AccountService
from app.services.challenge_service import ChallengeService
from app.services.community_service import CommunityService
from app.services.confirmation_service import ConfirmationService
from app.services.contact_service import ContactService
from app.services.email import EmailSender
from app.services.idea_service import IdeaService
from app.services.journal_service import JournalService
from app.services.profile_service import ProfileService
from app.services.ranking_service import RankingService
from app.utils.images import ImageStore


def get_email_sender(request: Request) -> EmailSender:
    return request.app.state.email_sender


def get_image_store(request: Request) -> ImageStore:
    return request.app.state.image_store


def get_confirmation_service(
    database: Database = Depends(get_database),
    email_sender: EmailSender = Depends(get_email_sender),
) -> ConfirmationService:
    return ConfirmationService(database, email_sender)


def get_account_service(
    database: Database = Depends(get_database),
    confirmation: ConfirmationService = Depends(get_confirmation_service),
    image_store: ImageStore = Depends(get_image_store),
) -> AccountService:
    return AccountService(database, confirmation, image_store)


def get_challenge_service(
    database: Database = Depends(get_database),
) -> ChallengeService:
    return ChallengeService(database)


def get_ranking_service(database: Database = Depends(get_database)) -> RankingService:
    return RankingService(database)


def get_journal_service(database: Database = Depends(get_database)) -> JournalService:
    return JournalService(database)


def get_idea_service(
    database: Database = Depends(get_database),
    image_store: ImageStore = Depends(get_image_store),
) -> IdeaService:
    return IdeaService(database, image_store)


def get_community_service(
    database: Database = Depends(get_database),
    image_store: ImageStore = Depends(get_image_store),
) -> CommunityService:
    return CommunityService(database, image_store)


def get_contact_service(
    database: Database = Depends(get_database),
    email_sender: EmailSender = Depends(get_email_sender),
) -> ContactService:
    return ContactService(database, email_sender)


def get_profile_service(database: Database = Depends(get_database)) -> ProfileService:
    return ProfileService(database)
