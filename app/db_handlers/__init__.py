from app.db_handlers.base import BaseDBHandler, check_local_db
from app.db_handlers.challenge import ActivityDBHandler, ChallengeDBHandler
from app.db_handlers.community import ContactDBHandler, CommunityPostDBHandler
from app.db_handlers.idea import ConclusionDBHandler, IdeaDBHandler
from app.db_handlers.journal import JournalDBHandler
from app.db_handlers.user import UserDBHandler

__all__ = [
    "BaseDBHandler",
    "check_local_db",
    "UserDBHandler",
    "ChallengeDBHandler",
    "ActivityDBHandler",
    "JournalDBHandler",
    "IdeaDBHandler",
    "ConclusionDBHandler",
    "CommunityPostDBHandler",
    "ContactDBHandler",
]
