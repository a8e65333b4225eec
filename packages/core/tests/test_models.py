"""Tests for core models, exceptions and the notifier registry."""

from dataclasses import FrozenInstanceError

import pytest

from jobhook.exceptions import (
    ConfigurationError,
    DeliveryRejectedError,
    JobHookError,
    UnknownTriggerError,
)
from jobhook.models import (
    SUPPORTED_TRIGGERS,
    TRIGGER_STYLES,
    DeliveryOutcome,
    RenderModel,
    TriggerStyle,
)
from jobhook.registry import NotifierRegistry


def test_trigger_styles() -> None:
    """Test trigger to color mapping."""
    assert SUPPORTED_TRIGGERS == {"start", "success", "failure"}
    assert TRIGGER_STYLES["start"].color == "warning"
    assert TRIGGER_STYLES["success"].color == "good"
    assert TRIGGER_STYLES["failure"].color == "danger"
    assert len({style.template for style in TRIGGER_STYLES.values()}) == 1


def test_trigger_styles_immutable() -> None:
    """Test the style table cannot be modified."""
    with pytest.raises(TypeError):
        TRIGGER_STYLES["aborted"] = TriggerStyle("x.j2", "grey")  # type: ignore[index]

    with pytest.raises(FrozenInstanceError):
        TRIGGER_STYLES["start"].color = "good"  # type: ignore[misc]


def test_render_model_context_with_icon() -> None:
    """Test template context keys."""
    model = RenderModel(
        trigger="start",
        color="warning",
        execution_data={"id": 1},
        config={"channel": "ops"},
        icon_url="https://example.com/icon.png",
    )

    assert model.as_context() == {
        "trigger": "start",
        "color": "warning",
        "executionData": {"id": 1},
        "config": {"channel": "ops"},
        "username": "rundeck",
        "icon_url": "https://example.com/icon.png",
    }


@pytest.mark.parametrize("icon_url", [None, ""])
def test_render_model_context_without_icon(icon_url: str | None) -> None:
    """Test icon_url left out of context when not configured."""
    model = RenderModel(trigger="success", color="good", execution_data={}, config={}, icon_url=icon_url)

    assert "icon_url" not in model.as_context()


def test_delivery_outcome_raise_for_error() -> None:
    """Test failed outcome re-raises its error."""
    error = DeliveryRejectedError("rejected", response_body="nope", payload="{}", status_code=200)
    outcome = DeliveryOutcome(success=False, trigger="start", error=error)

    with pytest.raises(DeliveryRejectedError) as exc_info:
        outcome.raise_for_error()

    assert exc_info.value is error


def test_exception_context() -> None:
    """Test errors keep message and structured context."""
    error = UnknownTriggerError("Unknown trigger type: [x].", trigger="x")

    assert isinstance(error, JobHookError)
    assert str(error) == "Unknown trigger type: [x]."
    assert error.context == {"trigger": "x"}


def test_registry_unknown_notifier() -> None:
    """Test unknown notifier type raises ConfigurationError."""
    with pytest.raises(ConfigurationError, match="Unknown notifier type: 'carrier-pigeon'"):
        NotifierRegistry.get("carrier-pigeon")

    assert not NotifierRegistry.is_registered("carrier-pigeon")
