"""Configuration models using Pydantic for validation.

These models define the schema for notification configuration YAML files.
"""

import re
from typing import Any

from pydantic import BaseModel, Field, field_validator


class NotifierConfig(BaseModel):
    """Configuration for the notifier.

    Attributes:
        type: Notifier type (e.g., "mattermost")
        params: Notifier-specific parameters (webhook_url, icon_url, ...)

    Example:
        ```yaml
        notifier:
          type: "mattermost"
          params:
            webhook_url: "${MATTERMOST_WEBHOOK}"
            icon_url: "https://example.com/rundeck.png"
        ```
    """

    type: str = Field(..., description="Notifier type (must be registered)")
    params: dict[str, Any] = Field(default_factory=dict, description="Notifier-specific parameters")

    @field_validator("type")
    @classmethod
    def validate_type_not_empty(cls, v: str) -> str:
        """Ensure type is not empty."""
        if not v or not v.strip():
            raise ValueError("Notifier type cannot be empty")
        return v.strip()


class NotificationConfig(BaseModel):
    """Complete notification configuration.

    Attributes:
        name: Identifier of this notification setup
        description: Human-readable description
        notifier: Notifier configuration
        config: Free-form config handed to the template on every call
                (e.g. ``channel``); per-call values override these

    Example:
        ```yaml
        name: "ops-channel"
        description: "Job notifications for the ops team"

        notifier:
          type: "mattermost"
          params:
            webhook_url: "${MATTERMOST_WEBHOOK}"

        config:
          channel: "ops-alerts"
        ```
    """

    name: str = Field(default="default", description="Notification setup identifier")
    description: str | None = Field(default=None, description="Human-readable description")
    notifier: NotifierConfig = Field(..., description="Notifier configuration")
    config: dict[str, Any] = Field(
        default_factory=dict,
        description="Free-form config passed through to the message template",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Ensure name is valid."""
        if not v or not v.strip():
            raise ValueError("Notification name cannot be empty")

        if not re.match(r"^[a-zA-Z0-9_-]+$", v.strip()):
            raise ValueError(
                f"Notification name '{v}' contains invalid characters. "
                "Use only alphanumeric, underscore, and dash."
            )

        return v.strip()
