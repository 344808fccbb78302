from .activity import DEFAULT_MAX_TEAM_SIZE, DEFAULT_MIN_TEAM_SIZE, Activity
from .registration import Registration, TeamMember

__all__ = [
    "DEFAULT_MAX_TEAM_SIZE",
    "DEFAULT_MIN_TEAM_SIZE",
    "Activity",
    "Registration",
    "TeamMember",
]
