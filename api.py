from contextlib import asynccontextmanager
from typing import Any, Dict, Optional
import logging

import uvicorn
from fastapi import BackgroundTasks, FastAPI, Request
from fastapi.responses import JSONResponse

from a2a_handler import SyncA2AHandler
from agents.registry import AgentRegistry, build_default_registry
from config import Settings, configure_logging
from task_queue import TaskQueue
from webhook_client import WebhookClient
from webhook_handler import WebhookDispatchHandler

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None,
               registry: Optional[AgentRegistry] = None,
               webhook_client: Optional[WebhookClient] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    registry = registry if registry is not None else build_default_registry(settings)
    webhook_client = webhook_client or WebhookClient(timeout=settings.http_timeout)
    webhook_handler = WebhookDispatchHandler(registry, webhook_client)
    sync_handler = SyncA2AHandler(registry)
    task_queue = TaskQueue(webhook_handler.run, worker_count=settings.worker_count)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await task_queue.start()
        try:
            yield
        finally:
            await task_queue.stop()

    app = FastAPI(title="Movie Recommendation Agent API", lifespan=lifespan)
    app.state.settings = settings
    app.state.registry = registry
    app.state.task_queue = task_queue

    async def dispatch_webhook(agent_id: str, request: Request, background_tasks: BackgroundTasks) -> JSONResponse:
        status_code, payload, job = webhook_handler.accept(agent_id, await request.body())
        if job is not None:
            # queued only after the acknowledgement has been sent
            background_tasks.add_task(task_queue.put, job)
        return JSONResponse(status_code=status_code, content=payload)

    async def dispatch_sync(agent_id: str, request: Request) -> JSONResponse:
        status_code, payload = await sync_handler.handle(agent_id, await request.body())
        return JSONResponse(status_code=status_code, content=payload)

    @app.post("/a2a/agent/{agent_id}")
    async def a2a_agent(agent_id: str, request: Request, background_tasks: BackgroundTasks) -> JSONResponse:
        """A2A JSON-RPC entry point; webhook or synchronous depending on A2A_MODE."""
        if settings.a2a_mode == "sync":
            return await dispatch_sync(agent_id, request)
        return await dispatch_webhook(agent_id, request, background_tasks)

    @app.post("/a2a/agent/{agent_id}/sync")
    async def a2a_agent_sync(agent_id: str, request: Request) -> JSONResponse:
        return await dispatch_sync(agent_id, request)

    @app.get("/agents")
    async def list_agents() -> Dict[str, Any]:
        return {"agents": registry.list_agents()}

    @app.get("/health")
    async def health() -> Dict[str, Any]:
        return {
            "status": "ok",
            "mode": settings.a2a_mode,
            "agents": [agent["id"] for agent in registry.list_agents()],
            "queue": {
                "running": task_queue.running,
                "pending": task_queue.pending,
                "workers": task_queue.worker_count,
            },
        }

    return app


app = create_app()

if __name__ == "__main__":
    settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.port)
