from athletic_balance.models.user import User
from athletic_balance.models.profile import Profile
from athletic_balance.models.coach import Coach
from athletic_balance.models.coach_session import CoachSession
from athletic_balance.models.user_session import UserSession

__all__ = [
    "User",
    "Profile",
    "Coach",
    "CoachSession",
    "UserSession",
]
