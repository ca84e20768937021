from .settings import TokenSettings
from .env import settings_from_env

__all__ = ["TokenSettings", "settings_from_env"]
