"""Command-line client for a running movie agent server."""
from typing import Any, Dict, Optional
from uuid import uuid4
import argparse
import json
import os
import sys
import time

import requests
from dotenv import load_dotenv

load_dotenv()


def build_request(prompt: str, task_id: Optional[str] = None, context_id: Optional[str] = None,
                  webhook_url: Optional[str] = None, webhook_token: Optional[str] = None) -> Dict[str, Any]:
    """Build a JSON-RPC 2.0 message/send envelope for the prompt."""
    params: Dict[str, Any] = {
        "message": {
            "kind": "message",
            "role": "user",
            "parts": [{"kind": "text", "text": prompt}],
            "messageId": str(uuid4()),
        },
    }
    if task_id:
        params["taskId"] = task_id
    if context_id:
        params["contextId"] = context_id
    if webhook_url:
        params["configuration"] = {
            "pushNotificationConfig": {"url": webhook_url, "token": webhook_token},
        }
    return {"jsonrpc": "2.0", "id": str(uuid4()), "method": "message/send", "params": params}


def send_request(base_url: str, agent_id: str, payload: Dict[str, Any], sync: bool = True,
                 timeout: Optional[float] = None) -> requests.Response:
    url = f"{base_url.rstrip('/')}/a2a/agent/{agent_id}"
    if sync:
        url += "/sync"
    return requests.post(url, json=payload, timeout=timeout)


def print_task_result(body: Dict[str, Any]) -> None:
    if "error" in body:
        error = body["error"]
        print(f"❌ Error {error.get('code')}: {error.get('message')}")
        return

    result = body.get("result", {})
    print(f"Task: {result.get('id')} ({result.get('status', {}).get('state')})")
    for artifact in result.get("artifacts", []):
        print(f"\n=== {artifact.get('name')} ===")
        for part in artifact.get("parts", []):
            print(part.get("text", ""))


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Ask the movie agent for recommendations")
    parser.add_argument("prompt", help="What you feel like watching, e.g. 'I'm feeling happy'")
    parser.add_argument("--url", default=os.getenv("AGENT_URL", "http://localhost:8000"))
    parser.add_argument("--agent", default="movieAgent")
    parser.add_argument("--task-id")
    parser.add_argument("--context-id")
    parser.add_argument("--webhook", help="Callback URL; sends the request to the webhook route")
    parser.add_argument("--token", help="Bearer token the server uses when calling the webhook")
    parser.add_argument("--timeout", type=float, default=None)
    args = parser.parse_args(argv)

    if args.webhook and not args.token:
        parser.error("--token is required with --webhook")

    payload = build_request(args.prompt, args.task_id, args.context_id, args.webhook, args.token)
    use_sync = not args.webhook

    print("Agent is thinking...", end="", flush=True)
    start_time = time.time()
    try:
        response = send_request(args.url, args.agent, payload, sync=use_sync, timeout=args.timeout)
    except requests.exceptions.RequestException as e:
        print("\r" + " " * 30 + "\r", end="", flush=True)
        print(f"❌ Could not reach the agent server at {args.url}: {e}")
        return 1
    elapsed_time = time.time() - start_time
    print("\r" + " " * 30 + "\r", end="", flush=True)

    try:
        body = response.json()
    except ValueError:
        print(f"❌ Unexpected response ({response.status_code}): {response.text[:200]}")
        return 1

    print(f"HTTP {response.status_code} in {elapsed_time:.2f}s")
    if use_sync:
        print_task_result(body)
    else:
        print(json.dumps(body, indent=2))
    return 0 if response.status_code < 400 else 1


if __name__ == "__main__":
    sys.exit(main())
