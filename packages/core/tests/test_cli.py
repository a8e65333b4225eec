"""Tests for the jobhook CLI."""

import json
from urllib.parse import parse_qs

import pytest
from click.testing import CliRunner

from jobhook.cli.main import cli, parse_options

WEBHOOK_URL = "https://mattermost.example.com/hooks/xxx"

EXECUTION_DATA = {
    "id": 42,
    "href": "http://rundeck.example.com/project/ops/execution/show/42",
    "user": "admin",
    "project": "ops",
    "job": {
        "name": "backup",
        "href": "http://rundeck.example.com/project/ops/job/show/abc-123",
    },
}


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "ops.yaml"
    path.write_text(
        f"""
name: ops
notifier:
  type: mattermost
  params:
    webhook_url: "{WEBHOOK_URL}"
config:
  channel: ops-alerts
""",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def data_file(tmp_path):
    path = tmp_path / "execution.json"
    path.write_text(json.dumps(EXECUTION_DATA), encoding="utf-8")
    return path


def test_list_triggers() -> None:
    """Test triggers listed with colors."""
    result = CliRunner().invoke(cli, ["list-triggers"])

    assert result.exit_code == 0
    assert "start" in result.output
    assert "danger" in result.output


def test_list_notifiers() -> None:
    """Test mattermost notifier listed."""
    result = CliRunner().invoke(cli, ["list-notifiers"])

    assert result.exit_code == 0
    assert "mattermost" in result.output


def test_validate(config_file) -> None:
    """Test configuration summary."""
    result = CliRunner().invoke(cli, ["validate", str(config_file)])

    assert result.exit_code == 0
    assert "Notifier: mattermost" in result.output
    assert "Configuration is valid" in result.output


def test_validate_unknown_notifier(tmp_path) -> None:
    """Test unknown notifier type fails validation."""
    path = tmp_path / "bad.yaml"
    path.write_text("notifier:\n  type: pager\n", encoding="utf-8")

    result = CliRunner().invoke(cli, ["validate", str(path)])

    assert result.exit_code == 1
    assert "Unknown notifier type" in result.output


def test_render(config_file, data_file, requests_mock) -> None:
    """Test render prints payload without sending it."""
    result = CliRunner().invoke(
        cli,
        ["render", str(config_file), "-t", "failure", "-d", str(data_file), "-o", "channel=oncall"],
    )

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["channel"] == "oncall"
    assert payload["attachments"][0]["color"] == "danger"
    assert requests_mock.call_count == 0


def test_notify_ok(config_file, data_file, requests_mock) -> None:
    """Test notify sends the payload and reports success."""
    requests_mock.post(WEBHOOK_URL, text="ok")

    result = CliRunner().invoke(cli, ["notify", str(config_file), "-t", "start", "-d", str(data_file)])

    assert result.exit_code == 0
    assert "Notification sent" in result.output
    payload = json.loads(parse_qs(requests_mock.last_request.text)["payload"][0])
    assert payload["channel"] == "ops-alerts"
    assert payload["attachments"][0]["color"] == "warning"


def test_notify_rejected(config_file, data_file, requests_mock) -> None:
    """Test rejected delivery exits with error."""
    requests_mock.post(WEBHOOK_URL, text="invalid_payload")

    result = CliRunner().invoke(cli, ["notify", str(config_file), "-t", "success", "-d", str(data_file)])

    assert result.exit_code == 1
    assert "invalid_payload" in result.output


def test_notify_unknown_trigger(config_file, data_file, requests_mock) -> None:
    """Test trigger choice enforced by the CLI."""
    result = CliRunner().invoke(cli, ["notify", str(config_file), "-t", "aborted", "-d", str(data_file)])

    assert result.exit_code == 2
    assert requests_mock.call_count == 0


def test_notify_bad_option(config_file, data_file) -> None:
    """Test malformed --option rejected."""
    result = CliRunner().invoke(
        cli,
        ["notify", str(config_file), "-t", "start", "-d", str(data_file), "-o", "channel"],
    )

    assert result.exit_code == 2
    assert "key=value" in result.output


def test_parse_options() -> None:
    """Test key=value parsing keeps '=' in values."""
    assert parse_options(("channel=ops", "query=a=b", "empty=")) == {
        "channel": "ops",
        "query": "a=b",
        "empty": "",
    }
