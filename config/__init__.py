"""Config package initialization."""

from .settings import Config, FeedSettings, load_settings

__all__ = [
    'Config',
    'FeedSettings',
    'load_settings'
]
