from talentvote.models.contestant import Contestant
from talentvote.models.round import Round
from talentvote.models.system_setting import SystemSetting
from talentvote.models.user import User
from talentvote.models.vote import Vote

__all__ = [
    "User",
    "Round",
    "Contestant",
    "Vote",
    "SystemSetting",
]
