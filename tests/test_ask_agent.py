from types import SimpleNamespace

import ask_agent


def test_build_request_without_webhook():
    payload = ask_agent.build_request("I'm feeling sad", task_id="t1")

    assert payload["jsonrpc"] == "2.0"
    assert payload["method"] == "message/send"
    assert payload["params"]["taskId"] == "t1"
    assert payload["params"]["message"]["parts"] == [{"kind": "text", "text": "I'm feeling sad"}]
    assert "configuration" not in payload["params"]


def test_build_request_with_webhook():
    payload = ask_agent.build_request("hi", webhook_url="https://hook.example", webhook_token="tok")

    assert payload["params"]["configuration"] == {
        "pushNotificationConfig": {"url": "https://hook.example", "token": "tok"},
    }


def test_main_uses_sync_route(monkeypatch, capsys):
    calls = []

    def fake_post(url, json, timeout):
        calls.append(url)
        body = {"jsonrpc": "2.0", "id": json["id"], "result": {
            "id": "t1", "status": {"state": "completed"},
            "artifacts": [{"name": "movieAgentResponse", "parts": [{"kind": "text", "text": "Watch Amélie"}]}],
        }}
        return SimpleNamespace(status_code=200, json=lambda: body, text="")

    monkeypatch.setattr(ask_agent.requests, "post", fake_post)

    exit_code = ask_agent.main(["I'm happy", "--url", "http://agent.local/"])

    assert exit_code == 0
    assert calls == ["http://agent.local/a2a/agent/movieAgent/sync"]
    assert "Watch Amélie" in capsys.readouterr().out
