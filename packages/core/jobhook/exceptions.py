"""Exception hierarchy for JobHook.

Every error raised by the library derives from JobHookError so callers
(the orchestration host, the CLI) can catch the whole family at once and
surface the message however they see fit.
"""

from typing import Any


class JobHookError(Exception):
    """Base class for all JobHook errors.

    Args:
        message: Human-readable description, embedding the underlying cause
        **context: Structured details about the failure (url, trigger, ...)
    """

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        return self.message


class ConfigurationError(JobHookError):
    """Notifier or YAML configuration is invalid."""

    def __init__(
        self,
        message: str,
        config_path: str | None = None,
        field: str | None = None,
    ) -> None:
        super().__init__(message, config_path=config_path, field=field)
        self.config_path = config_path
        self.field = field


class UnknownTriggerError(JobHookError):
    """Trigger name is not one of the recognised lifecycle events."""

    def __init__(self, message: str, trigger: str | None = None) -> None:
        super().__init__(message, trigger=trigger)
        self.trigger = trigger


class TemplateLoadError(JobHookError):
    """Named message template could not be located or parsed."""

    def __init__(self, message: str, template: str | None = None) -> None:
        super().__init__(message, template=template)
        self.template = template


class TemplateRenderError(JobHookError):
    """Message template failed while being expanded against the model."""

    def __init__(self, message: str, template: str | None = None) -> None:
        super().__init__(message, template=template)
        self.template = template


class InvalidUrlError(JobHookError):
    """Webhook URL is not a usable http(s) URL."""

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message, url=url)
        self.url = url


class WebhookConnectionError(JobHookError):
    """Webhook request could not be sent or its response could not be read."""

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message, url=url)
        self.url = url


class DeliveryRejectedError(JobHookError):
    """Webhook answered, but not with the success token.

    Carries the raw response body and the rendered payload for diagnostics.
    """

    def __init__(
        self,
        message: str,
        response_body: str | None = None,
        payload: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(
            message,
            response_body=response_body,
            payload=payload,
            status_code=status_code,
        )
        self.response_body = response_body
        self.payload = payload
        self.status_code = status_code
