"""Pytest configuration and fixtures."""

import os
import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

os.environ.setdefault("LOG_LEVEL", "DEBUG")

from config import Settings  # noqa: E402
from fakes import FakeAgent, FakeClock, RecordingWebhookClient  # noqa: E402


@pytest.fixture
def settings() -> Settings:
    return Settings(openai_api_key="test-key", classifier_api_key="test-key", worker_count=1)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def webhook_client() -> RecordingWebhookClient:
    return RecordingWebhookClient()


@pytest.fixture
def fake_agent() -> FakeAgent:
    return FakeAgent(text="Here are some happy movies")


def make_request_body(text="I'm feeling happy", task_id="t1", context_id="c1", request_id="req-1",
                      url="https://telex.example/webhook", token="secret-token"):
    """JSON-RPC envelope as the orchestration platform sends it."""
    params = {
        "message": {
            "kind": "message",
            "role": "user",
            "parts": [{"kind": "text", "text": text}] if text is not None else [],
            "messageId": "m1",
        },
    }
    if task_id is not None:
        params["taskId"] = task_id
    if context_id is not None:
        params["contextId"] = context_id
    if url is not None or token is not None:
        push = {}
        if url is not None:
            push["url"] = url
        if token is not None:
            push["token"] = token
        params["configuration"] = {"pushNotificationConfig": push}
    return {"jsonrpc": "2.0", "id": request_id, "method": "message/send", "params": params}


@pytest.fixture
def request_body():
    return make_request_body
