"""Message renderer for Mattermost incoming webhooks.

Expands a bundled Jinja2 template into the webhook payload. The template
is chosen by trigger, and the trigger also decides the attachment color.
"""

import logging
from pathlib import Path
from typing import Any

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    StrictUndefined,
    TemplateError,
    TemplateNotFound,
)

from jobhook.exceptions import TemplateLoadError, TemplateRenderError, UnknownTriggerError
from jobhook.models import TRIGGER_STYLES, RenderModel, TriggerStyle

logger = logging.getLogger(__name__)


def resolve_style(trigger: str) -> TriggerStyle:
    """Look up template and color for a trigger.

    Raises:
        UnknownTriggerError: If trigger is not a recognised lifecycle event
    """
    try:
        return TRIGGER_STYLES[trigger]
    except KeyError:
        raise UnknownTriggerError(
            f"Unknown trigger type: [{trigger}].",
            trigger=trigger,
        ) from None


class MessageRenderer:
    """Renders job notifications into webhook payloads.

    The Jinja2 environment is built once per renderer and uses
    StrictUndefined: a template referencing a field the execution data
    does not carry fails instead of rendering blank. Optional fields are
    guarded in the template with ``is defined``.

    Args:
        icon_url: Sender avatar URL; omitted from the payload when empty
        template_dir: Directory searched before the bundled templates,
                      letting deployments override the message layout

    Example:
        >>> renderer = MessageRenderer(icon_url="https://example.com/rd.png")
        >>> payload = renderer.render(
        ...     "failure",
        ...     {"id": 42, "href": "...", "project": "ops", "user": "admin",
        ...      "job": {"name": "backup", "href": "..."}},
        ...     {},
        ... )
    """

    def __init__(
        self,
        icon_url: str | None = None,
        template_dir: str | Path | None = None,
    ) -> None:
        self.icon_url = icon_url or None
        self.template_dir = Path(template_dir) if template_dir else None

        loaders = []
        if self.template_dir is not None:
            loaders.append(FileSystemLoader(str(self.template_dir)))
        loaders.append(PackageLoader("jobhook_mattermost", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=False,
            cache_size=250,
        )

    def build_model(
        self,
        trigger: str,
        execution_data: dict[str, Any],
        config: dict[str, Any],
    ) -> RenderModel:
        """Build the render model for a trigger.

        Raises:
            UnknownTriggerError: If trigger is not recognised
        """
        style = resolve_style(trigger)
        return RenderModel(
            trigger=trigger,
            color=style.color,
            execution_data=execution_data or {},
            config=config or {},
            icon_url=self.icon_url,
        )

    def render(
        self,
        trigger: str,
        execution_data: dict[str, Any],
        config: dict[str, Any],
    ) -> str:
        """Render the webhook payload for a job-lifecycle event.

        Args:
            trigger: Lifecycle event name ("start", "success", "failure")
            execution_data: Execution metadata supplied by the host
            config: Free-form notification config supplied by the host

        Returns:
            Payload string (JSON document for the bundled template)

        Raises:
            UnknownTriggerError: If trigger is not recognised
            TemplateLoadError: If the template cannot be located or parsed
            TemplateRenderError: If expanding the template fails
        """
        model = self.build_model(trigger, execution_data, config)
        template_name = TRIGGER_STYLES[trigger].template

        try:
            template = self.env.get_template(template_name)
        except TemplateNotFound as e:
            raise TemplateLoadError(
                f"Notification message template not found: [{e}].",
                template=template_name,
            ) from e
        except TemplateError as e:
            raise TemplateLoadError(
                f"Error loading notification message template: [{e}].",
                template=template_name,
            ) from e

        try:
            payload = template.render(**model.as_context())
        except (TemplateError, TypeError, ValueError) as e:
            raise TemplateRenderError(
                f"Error merging notification message template: [{e}].",
                template=template_name,
            ) from e

        logger.debug(f"Rendered {template_name} for trigger '{trigger}' ({len(payload)} chars)")
        return payload
