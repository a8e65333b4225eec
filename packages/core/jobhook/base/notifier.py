"""Base class for notifiers.

All notifiers must inherit from BaseNotifier and implement
deliver_notification() and validate_config().
"""

from abc import ABC, abstractmethod
from typing import Any

from jobhook.models import DeliveryOutcome, NotificationRequest


class BaseNotifier(ABC):
    """Abstract base class for all notifiers.

    A notifier turns one job-lifecycle event into a chat message and
    delivers it. It holds only immutable configuration, so a single
    instance may serve concurrent calls.

    Two entry points are offered:
    - deliver_notification() returns a DeliveryOutcome and never raises
      JobHookError; the caller decides how to log or surface failures.
    - notify() is the orchestration host contract: True on success,
      the classified JobHookError otherwise.

    Example Implementation:
        >>> from jobhook.base import BaseNotifier
        >>> from jobhook.registry import NotifierRegistry
        >>>
        >>> @NotifierRegistry.register("mattermost")
        >>> class MattermostNotifier(BaseNotifier):
        ...     def __init__(self, config: dict[str, Any]) -> None:
        ...         self.config = config
        ...         self.validate_config(config)
        ...
        ...     def deliver_notification(self, request):
        ...         # Render, POST, classify the response
        ...         pass
        ...
        ...     def validate_config(self, config: dict[str, Any]) -> None:
        ...         # Validate webhook_url etc.
        ...         pass
    """

    @abstractmethod
    def __init__(self, config: dict[str, Any]) -> None:
        """Initialize notifier with configuration.

        Args:
            config: Notifier configuration (notifier.params in YAML)

        Raises:
            ConfigurationError: If config is invalid
        """
        pass

    @abstractmethod
    def validate_config(self, config: dict[str, Any]) -> None:
        """Validate notifier-specific configuration.

        Raises:
            ConfigurationError: If config is invalid with specific error message
        """
        pass

    @abstractmethod
    def deliver_notification(self, request: NotificationRequest) -> DeliveryOutcome:
        """Render and deliver one notification.

        Args:
            request: Trigger, execution data and free-form config

        Returns:
            DeliveryOutcome; failures are carried in ``outcome.error``
        """
        pass

    def notify(
        self,
        trigger: str,
        execution_data: dict[str, Any],
        config: dict[str, Any],
    ) -> bool:
        """Send a notification for a job-lifecycle event.

        Returns:
            True if the webhook acknowledged the message

        Raises:
            JobHookError: The classified failure of this attempt
        """
        request = NotificationRequest(
            trigger=trigger,
            execution_data=execution_data,
            config=config,
        )
        outcome = self.deliver_notification(request)
        outcome.raise_for_error()
        return outcome.success

    def close(self) -> None:
        """Release resources held by the notifier.

        Default implementation does nothing.
        """
        pass
