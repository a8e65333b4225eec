"""Shared fixtures for Mattermost notifier tests."""

import pytest

WEBHOOK_URL = "https://mattermost.example.com/hooks/xxx"


@pytest.fixture
def execution_data() -> dict:
    """Execution data as handed over by Rundeck for a job run."""
    return {
        "id": 42,
        "href": "http://rundeck.example.com/project/ops/execution/show/42",
        "status": "running",
        "user": "admin",
        "project": "ops",
        "argstring": "-env prod",
        "job": {
            "id": "abc-123",
            "name": "backup",
            "group": "nightly",
            "project": "ops",
            "href": "http://rundeck.example.com/project/ops/job/show/abc-123",
        },
    }


@pytest.fixture
def webhook_url() -> str:
    return WEBHOOK_URL
