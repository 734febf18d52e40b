import pytest
from fastapi.testclient import TestClient

from agents.registry import AgentRegistry
from api import create_app
from config import Settings
from fakes import FakeAgent, RecordingWebhookClient


def make_app(mode="webhook", agent=None, webhook_client=None):
    registry = AgentRegistry()
    registry.register("movieAgent", agent or FakeAgent(text="Here are your movies"))
    settings = Settings(a2a_mode=mode, worker_count=2)
    return create_app(settings=settings, registry=registry, webhook_client=webhook_client or RecordingWebhookClient())


class TestWebhookRoute:
    def test_acknowledges_then_delivers(self, request_body):
        webhook = RecordingWebhookClient()
        agent = FakeAgent(text="Here are your movies")
        app = make_app(agent=agent, webhook_client=webhook)

        with TestClient(app) as client:
            response = client.post("/a2a/agent/movieAgent", json=request_body())
            assert response.status_code == 202
            assert response.json() == {
                "status": "success", "status_code": 202, "message": "request received", "task_id": "t1",
            }

        # shutdown drains the queue
        assert agent.calls == ["I'm feeling happy"]
        assert len(webhook.deliveries) == 1
        assert webhook.deliveries[0][1].result.status.state == "completed"

    def test_missing_push_config(self, request_body):
        webhook = RecordingWebhookClient()
        app = make_app(webhook_client=webhook)

        with TestClient(app) as client:
            response = client.post("/a2a/agent/movieAgent", json=request_body(url=None, token=None))

        assert response.status_code == 500
        assert response.json()["data"]["details"] == "Missing pushNotificationConfig in request"
        assert webhook.deliveries == []

    def test_sync_mode_answers_inline(self, request_body):
        app = make_app(mode="sync")

        with TestClient(app) as client:
            response = client.post("/a2a/agent/movieAgent", json=request_body(url=None, token=None))

        assert response.status_code == 200
        assert response.json()["result"]["status"]["state"] == "completed"


class TestSyncRoute:
    def test_sync_route_ignores_mode(self, request_body):
        with TestClient(make_app(mode="webhook")) as client:
            response = client.post("/a2a/agent/movieAgent/sync", json=request_body())

        assert response.status_code == 200
        assert response.json()["result"]["artifacts"][0]["name"] == "movieAgentResponse"

    def test_unknown_agent(self, request_body):
        with TestClient(make_app()) as client:
            response = client.post("/a2a/agent/nope/sync", json=request_body())

        assert response.status_code == 404
        assert response.json()["error"]["code"] == -32602

    @pytest.mark.parametrize("content", [b"{oops", b"[]"])
    def test_bad_bodies(self, content):
        with TestClient(make_app()) as client:
            response = client.post("/a2a/agent/movieAgent/sync", content=content,
                                   headers={"Content-Type": "application/json"})

        assert response.status_code in (400, 500)
        assert "error" in response.json()


class TestInfoRoutes:
    def test_health(self):
        with TestClient(make_app()) as client:
            body = client.get("/health").json()

        assert body == {
            "status": "ok",
            "mode": "webhook",
            "agents": ["movieAgent"],
            "queue": {"running": True, "pending": 0, "workers": 2},
        }

    def test_agents(self):
        with TestClient(make_app()) as client:
            body = client.get("/agents").json()

        assert body == {"agents": [
            {"id": "movieAgent", "name": "movieAgent", "description": "Test agent", "tools": []},
        ]}
