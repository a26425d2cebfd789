"""
Database models for the CyberMaker platform.

Architecture: User → Idea → Conclusion; User → JournalPost, CommunityPost;
Recruiter → Challenge → Activity ← User; Recruiter → Contact → User.
"""

from app.models.challenge import Activity, ActivityStatus, Challenge
from app.models.community import CommunityPost, Contact
from app.models.idea import Conclusion, Idea
from app.models.journal import JournalPost
from app.models.user import User, UserRole

__all__ = [
    # Accounts
    "User",
    "UserRole",
    # Challenges
    "Challenge",
    "Activity",
    "ActivityStatus",
    # User content
    "Idea",
    "Conclusion",
    "JournalPost",
    "CommunityPost",
    # Recruiter outreach
    "Contact",
]
