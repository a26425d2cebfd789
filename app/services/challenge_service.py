"""
Challenge posting and the submission points-award transaction.

A submission inserts an Activity and increments the submitter's score in one
database transaction: if either statement fails, neither is applied.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.config import settings
from app.db_handlers import ActivityDBHandler, ChallengeDBHandler, UserDBHandler
from app.errors import DuplicateSubmission, Forbidden, NotFound, UserNotFound
from app.models import Activity, Challenge
from app.utils.logger import setup_logger

if TYPE_CHECKING:
    from app.db import Database

logger = setup_logger("challenge_service")


class ChallengeService:
    def __init__(
        self,
        database: Database,
        *,
        submission_award: int = settings.points_challenge_submission,
        allow_duplicate_submissions: bool = settings.allow_duplicate_submissions,
    ):
        self.database = database
        self.user_handler = UserDBHandler(database)
        self.challenge_handler = ChallengeDBHandler(database)
        self.activity_handler = ActivityDBHandler(database)
        self.submission_award = submission_award
        self.allow_duplicate_submissions = allow_duplicate_submissions

    async def post_challenge(
        self, recruiter_id: int, titulo: str, descricao: str, area: str
    ) -> Challenge:
        """Create a challenge. Only recruiters may post."""
        async with self.database.transaction() as db:
            recruiter = await self.user_handler.get(recruiter_id, db=db)
            if recruiter is None:
                raise UserNotFound()
            if not recruiter.is_recruiter:
                logger.warning(f"User {recruiter_id} tried to post a challenge")
                raise Forbidden("Apenas recrutadores podem publicar desafios")

            challenge = await self.challenge_handler.create(
                {
                    "recrutador_id": recruiter_id,
                    "titulo": titulo,
                    "descricao": descricao,
                    "area": area,
                },
                db=db,
            )

        logger.info(f"Recruiter {recruiter_id} posted challenge {challenge.id}")
        return challenge

    async def list_challenges(self) -> list[dict[str, Any]]:
        return await self.challenge_handler.list_with_recruiter()

    async def submit(self, user_id: int, challenge_id: int, link: str) -> Activity:
        """
        Record a completed submission and award its points atomically.

        Raises ``NotFound`` for an unknown challenge, ``DuplicateSubmission``
        when repeats are disabled, and ``UserNotFound`` (rolling back the
        activity) when the user does not exist.
        """
        async with self.database.transaction() as db:
            if await self.challenge_handler.get(challenge_id, db=db) is None:
                raise NotFound("Desafio não encontrado")

            if not self.allow_duplicate_submissions and await self.activity_handler.exists_for(
                user_id, challenge_id, db=db
            ):
                raise DuplicateSubmission()

            activity = await self.activity_handler.create_completed(
                user_id, challenge_id, link, db=db
            )
            await self.user_handler.adjust_score(user_id, self.submission_award, db=db)

        logger.info(
            f"User {user_id} submitted challenge {challenge_id} "
            f"(activity {activity.id}, +{self.submission_award} points)"
        )
        return activity
