import json

import pytest

from a2a_handler import SyncA2AHandler
from agents.registry import AgentRegistry
from fakes import FakeAgent


def make_handler(agent=None):
    registry = AgentRegistry()
    registry.register("movieAgent", agent or FakeAgent(text="Try Spirited Away"))
    return SyncA2AHandler(registry)


class TestSyncA2AHandler:
    async def test_success(self, request_body):
        agent = FakeAgent(text="Try Spirited Away", tool_results=[{"mood": "relaxed"}])
        status, body = await make_handler(agent).handle("movieAgent", request_body(url=None, token=None))

        assert status == 200
        assert body["jsonrpc"] == "2.0"
        assert body["id"] == "req-1"
        result = body["result"]
        assert result["id"] == "t1"
        assert result["contextId"] == "c1"
        assert result["status"]["state"] == "completed"
        assert result["status"]["message"]["parts"][0]["text"] == "Try Spirited Away"
        assert [a["name"] for a in result["artifacts"]] == ["movieAgentResponse", "ToolResults"]

        history = result["history"]
        assert [entry["role"] for entry in history] == ["user", "agent"]
        assert history[0]["parts"][0]["text"] == "I'm feeling happy"
        assert history[1]["parts"][0]["text"] == "Try Spirited Away"
        assert all(entry["taskId"] == "t1" for entry in history)
        assert agent.calls == ["I'm feeling happy"]

    async def test_generates_missing_ids(self, request_body):
        status, body = await make_handler().handle("movieAgent", request_body(task_id=None, context_id=None))

        assert status == 200
        assert body["result"]["id"]
        assert body["result"]["contextId"]
        assert body["result"]["history"][0]["taskId"] == body["result"]["id"]

    async def test_accepts_raw_bytes(self, request_body):
        status, body = await make_handler().handle("movieAgent", json.dumps(request_body()).encode())
        assert status == 200

    @pytest.mark.parametrize("mutate", [
        lambda body: body.update(jsonrpc="1.0"),
        lambda body: body.pop("jsonrpc"),
    ])
    async def test_invalid_envelope(self, request_body, mutate):
        body = request_body()
        mutate(body)

        status, reply = await make_handler().handle("movieAgent", body)

        assert status == 400
        assert reply["error"]["code"] == -32600
        assert reply["id"] == "req-1"

    async def test_missing_id(self, request_body):
        body = request_body()
        del body["id"]

        status, reply = await make_handler().handle("movieAgent", body)

        assert status == 400
        assert reply["error"]["code"] == -32600
        assert reply["id"] is None

    async def test_unknown_agent(self, request_body):
        status, reply = await make_handler().handle("nope", request_body())

        assert status == 404
        assert reply["error"] == {"code": -32602, "message": "Agent 'nope' not found"}
        assert reply["id"] == "req-1"

    async def test_missing_parts(self, request_body):
        status, reply = await make_handler().handle("movieAgent", request_body(text=None))

        assert status == 400
        assert reply["error"]["code"] == -32602
        assert reply["error"]["message"] == "Invalid params: message with parts required"

    async def test_missing_params(self):
        body = {"jsonrpc": "2.0", "id": "req-1", "method": "message/send"}

        status, reply = await make_handler().handle("movieAgent", body)

        assert status == 400
        assert reply["error"]["code"] == -32602

    async def test_agent_failure(self, request_body):
        status, reply = await make_handler(FakeAgent(error=RuntimeError("boom"))).handle("movieAgent", request_body())

        assert status == 500
        assert reply["error"] == {"code": -32603, "message": "Internal error", "data": {"details": "boom"}}
        assert reply["id"] is None

    async def test_unparseable_body(self):
        status, reply = await make_handler().handle("movieAgent", b"{oops")

        assert status == 500
        assert reply["error"]["code"] == -32603
