"""Mattermost notifier for JobHook.

Sends job-lifecycle notifications to Mattermost channels via incoming
webhooks. Any Slack-compatible incoming webhook works the same way.

Flow per call: validate trigger -> render payload -> POST -> classify.
No retries; every failure is reported to the caller as-is.
"""

import logging
from pathlib import Path
from typing import Any

from jobhook.base import BaseNotifier
from jobhook.exceptions import ConfigurationError, DeliveryRejectedError, JobHookError
from jobhook.models import SUCCESS_TOKEN, DeliveryOutcome, NotificationRequest
from jobhook.registry import NotifierRegistry
from jobhook_mattermost.client import WebhookClient, WebhookResponse
from jobhook_mattermost.renderer import MessageRenderer, resolve_style

logger = logging.getLogger(__name__)


@NotifierRegistry.register("mattermost")
class MattermostNotifier(BaseNotifier):
    """Sends job notifications to Mattermost via incoming webhooks.

    Configuration:
        webhook_url: Mattermost incoming webhook URL (required)
        icon_url: URL of an icon shown as sender avatar (optional)
        timeout: Request timeout in seconds (default: None)
        verify_ssl: Verify SSL certificates (default: True)
        require_success_status: Also reject non-2xx responses whose body
            is "ok" (default: False, only the body decides)
        template_dir: Directory with templates overriding the bundled
            ones (optional)

    Example configuration:
        notifier:
          type: "mattermost"
          params:
            webhook_url: "${MATTERMOST_WEBHOOK}"
            icon_url: "https://example.com/rundeck.png"

    A delivery succeeds only when the webhook answers with the body "ok".
    """

    def __init__(self, config: dict[str, Any]) -> None:
        """Initialize Mattermost notifier.

        Args:
            config: Notifier configuration

        Raises:
            ConfigurationError: If configuration is invalid
        """
        self.config = config
        self.validate_config(config)

        # Required
        self.webhook_url = config["webhook_url"].strip()

        # Optional with defaults
        self.icon_url = config.get("icon_url") or None
        self.timeout = config.get("timeout")
        self.verify_ssl = config.get("verify_ssl", True)
        self.require_success_status = config.get("require_success_status", False)
        self.template_dir = config.get("template_dir")

        self.renderer = MessageRenderer(icon_url=self.icon_url, template_dir=self.template_dir)
        self.client = WebhookClient(timeout=self.timeout, verify_ssl=self.verify_ssl)

    def validate_config(self, config: dict[str, Any]) -> None:
        """Validate notifier configuration.

        The webhook URL is only checked for presence and scheme here;
        a URL that cannot be parsed is reported as InvalidUrlError when
        a notification is sent.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if "webhook_url" not in config:
            raise ConfigurationError(
                "Mattermost notifier requires 'webhook_url' parameter",
                config_path="notifier.params",
            )

        webhook_url = config["webhook_url"]
        if not isinstance(webhook_url, str) or not webhook_url.strip():
            raise ConfigurationError(
                "Mattermost webhook_url cannot be empty",
                config_path="notifier.params.webhook_url",
            )

        icon_url = config.get("icon_url")
        if icon_url is not None and not isinstance(icon_url, str):
            raise ConfigurationError(
                f"icon_url must be a string, got {type(icon_url).__name__}",
                config_path="notifier.params.icon_url",
            )

        timeout = config.get("timeout")
        if timeout is not None and (
            isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0
        ):
            raise ConfigurationError(
                f"timeout must be a positive number, got {timeout}",
                config_path="notifier.params.timeout",
            )

        for flag in ("verify_ssl", "require_success_status"):
            if flag in config and not isinstance(config[flag], bool):
                raise ConfigurationError(
                    f"{flag} must be true or false, got {config[flag]}",
                    config_path=f"notifier.params.{flag}",
                )

        template_dir = config.get("template_dir")
        if template_dir is not None and not Path(template_dir).is_dir():
            raise ConfigurationError(
                f"template_dir does not exist: {template_dir}",
                config_path="notifier.params.template_dir",
            )

    def render(
        self,
        trigger: str,
        execution_data: dict[str, Any],
        config: dict[str, Any],
    ) -> str:
        """Render the payload for an event without sending it."""
        return self.renderer.render(trigger, execution_data, config)

    def deliver_notification(self, request: NotificationRequest) -> DeliveryOutcome:
        """Render and deliver one notification.

        Never raises JobHookError: the classified failure is returned in
        ``outcome.error`` together with whatever was produced before it
        (payload, response body, status code).

        Args:
            request: Trigger, execution data and free-form config

        Returns:
            DeliveryOutcome with success=True if the webhook answered "ok"
        """
        payload: str | None = None
        response: WebhookResponse | None = None

        try:
            # Reject unknown triggers before any template or network work
            resolve_style(request.trigger)

            payload = self.renderer.render(
                request.trigger,
                request.execution_data,
                request.config,
            )
            response = self.client.post(self.webhook_url, payload)
            self._classify(response, payload)

        except JobHookError as e:
            logger.debug(f"Notification for trigger '{request.trigger}' failed: {e}")
            return DeliveryOutcome(
                success=False,
                trigger=request.trigger,
                response_body=response.body if response else None,
                status_code=response.status_code if response else None,
                payload=payload,
                error=e,
            )

        logger.debug(f"Notification for trigger '{request.trigger}' delivered")
        return DeliveryOutcome(
            success=True,
            trigger=request.trigger,
            response_body=response.body,
            status_code=response.status_code,
            payload=payload,
        )

    def _classify(self, response: WebhookResponse, payload: str) -> None:
        """Decide whether the webhook accepted the message.

        Raises:
            DeliveryRejectedError: If the body is not the success token, or
                the status is not 2xx while require_success_status is set
        """
        if response.body != SUCCESS_TOKEN:
            raise DeliveryRejectedError(
                f"Unknown status returned from Mattermost API: [{response.body}].\n{payload}",
                response_body=response.body,
                payload=payload,
                status_code=response.status_code,
            )

        if self.require_success_status and not response.is_success_status:
            raise DeliveryRejectedError(
                f"Mattermost API returned HTTP {response.status_code}: [{response.body}].\n{payload}",
                response_body=response.body,
                payload=payload,
                status_code=response.status_code,
            )
