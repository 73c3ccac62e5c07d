"""FastAPI dependencies shared by the routers."""

from jencoder.core.settings import AppSettings
from jencoder.tokens.claims import Clock, system_clock


def load_settings() -> AppSettings:
    return AppSettings()


def get_clock() -> Clock:
    """Clock used for iat/exp; overridden in tests."""
    return system_clock
