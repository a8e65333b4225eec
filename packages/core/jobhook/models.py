"""Data models shared by the renderer, the webhook client and notifiers."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from jobhook.exceptions import JobHookError

TRIGGER_START = "start"
TRIGGER_SUCCESS = "success"
TRIGGER_FAILURE = "failure"

# Attachment colors understood by Slack-compatible webhooks
COLOR_YELLOW = "warning"
COLOR_GREEN = "good"
COLOR_RED = "danger"

MESSAGE_TEMPLATE = "incoming-message.json.j2"
MESSAGE_FROM_NAME = "rundeck"
SUCCESS_TOKEN = "ok"


@dataclass(frozen=True)
class TriggerStyle:
    """Template and attachment color used for one trigger.

    Attributes:
        template: Name of the bundled template to render
        color: Attachment color code
    """

    template: str
    color: str


TRIGGER_STYLES: Mapping[str, TriggerStyle] = MappingProxyType(
    {
        TRIGGER_START: TriggerStyle(MESSAGE_TEMPLATE, COLOR_YELLOW),
        TRIGGER_SUCCESS: TriggerStyle(MESSAGE_TEMPLATE, COLOR_GREEN),
        TRIGGER_FAILURE: TriggerStyle(MESSAGE_TEMPLATE, COLOR_RED),
    }
)

SUPPORTED_TRIGGERS = frozenset(TRIGGER_STYLES)


@dataclass
class NotificationRequest:
    """One job-lifecycle event handed over by the orchestration host.

    Attributes:
        trigger: Lifecycle event name ("start", "success", "failure")
        execution_data: Execution metadata, passed through to the template
        config: Free-form notification config, passed through to the template
    """

    trigger: str
    execution_data: dict[str, Any] = field(default_factory=dict)
    config: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RenderModel:
    """Template data model derived from a request and notifier settings."""

    trigger: str
    color: str
    execution_data: Mapping[str, Any]
    config: Mapping[str, Any]
    username: str = MESSAGE_FROM_NAME
    icon_url: str | None = None

    def as_context(self) -> dict[str, Any]:
        """Build the template context.

        ``icon_url`` is only present when configured, so templates can test
        for it with ``is defined``.
        """
        context: dict[str, Any] = {
            "trigger": self.trigger,
            "color": self.color,
            "executionData": self.execution_data,
            "config": self.config,
            "username": self.username,
        }
        if self.icon_url:
            context["icon_url"] = self.icon_url
        return context


@dataclass
class DeliveryOutcome:
    """Result of one notification attempt.

    Returned instead of raised so the caller decides how to log or surface
    a failure. ``raise_for_error()`` turns a failed outcome back into the
    classified exception.

    Attributes:
        success: True if the webhook acknowledged the message
        trigger: Trigger that was notified
        response_body: Raw webhook response body (None if never received)
        status_code: HTTP status code (None if never received)
        payload: Rendered payload (None if rendering never happened)
        error: Classified failure, None on success
    """

    success: bool
    trigger: str
    response_body: str | None = None
    status_code: int | None = None
    payload: str | None = None
    error: JobHookError | None = None

    def raise_for_error(self) -> None:
        """Raise the classified error if this outcome is a failure."""
        if self.error is not None:
            raise self.error
