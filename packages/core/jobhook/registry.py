"""Registry of notifier implementations.

Notifier packages register themselves on import:

    >>> @NotifierRegistry.register("mattermost")
    ... class MattermostNotifier(BaseNotifier):
    ...     ...
"""

import logging
from typing import Callable

from jobhook.base import BaseNotifier
from jobhook.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class NotifierRegistry:
    """Maps notifier type names (as used in YAML configs) to classes."""

    _registry: dict[str, type[BaseNotifier]] = {}

    @classmethod
    def register(cls, name: str) -> Callable[[type[BaseNotifier]], type[BaseNotifier]]:
        """Class decorator registering a notifier under ``name``."""

        def decorator(notifier_class: type[BaseNotifier]) -> type[BaseNotifier]:
            if name in cls._registry and cls._registry[name] is not notifier_class:
                logger.warning(f"Notifier '{name}' re-registered by {notifier_class.__name__}")
            cls._registry[name] = notifier_class
            return notifier_class

        return decorator

    @classmethod
    def get(cls, name: str) -> type[BaseNotifier]:
        """Return the notifier class registered under ``name``.

        Raises:
            ConfigurationError: If no notifier is registered with that name
        """
        if name not in cls._registry:
            available = ", ".join(sorted(cls._registry)) or "none"
            raise ConfigurationError(
                f"Unknown notifier type: '{name}'. Available: {available}",
                config_path="notifier.type",
            )
        return cls._registry[name]

    @classmethod
    def is_registered(cls, name: str) -> bool:
        return name in cls._registry

    @classmethod
    def list_all(cls) -> list[str]:
        return list(cls._registry)
