"""Mattermost notifier package for JobHook.

Renders job-lifecycle events into Slack-compatible incoming webhook
messages and posts them to Mattermost.
"""

__version__ = "0.1.0"

# Import for auto-registration
from jobhook_mattermost.client import WebhookClient, WebhookResponse
from jobhook_mattermost.notifier import MattermostNotifier
from jobhook_mattermost.renderer import MessageRenderer

__all__ = [
    "__version__",
    "MattermostNotifier",
    "MessageRenderer",
    "WebhookClient",
    "WebhookResponse",
]
