"""JobHook - job-lifecycle notifications for chat-ops webhooks."""

__version__ = "0.1.0"

from jobhook.exceptions import (
    ConfigurationError,
    DeliveryRejectedError,
    InvalidUrlError,
    JobHookError,
    TemplateLoadError,
    TemplateRenderError,
    UnknownTriggerError,
    WebhookConnectionError,
)
from jobhook.models import (
    SUPPORTED_TRIGGERS,
    TRIGGER_STYLES,
    DeliveryOutcome,
    NotificationRequest,
    RenderModel,
    TriggerStyle,
)

__all__ = [
    "__version__",
    "ConfigurationError",
    "DeliveryRejectedError",
    "InvalidUrlError",
    "JobHookError",
    "TemplateLoadError",
    "TemplateRenderError",
    "UnknownTriggerError",
    "WebhookConnectionError",
    "SUPPORTED_TRIGGERS",
    "TRIGGER_STYLES",
    "DeliveryOutcome",
    "NotificationRequest",
    "RenderModel",
    "TriggerStyle",
]
