"""Configuration loading and validation."""

from jobhook.config.loader import ConfigLoader
from jobhook.config.models import NotificationConfig, NotifierConfig

__all__ = ["ConfigLoader", "NotificationConfig", "NotifierConfig"]
