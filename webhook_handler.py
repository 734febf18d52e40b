"""
Webhook dispatch for A2A task requests.

The handler validates a request, acknowledges it with 202 right away and
leaves the agent run to a background job. The job's outcome, a completed or
failed task result, is POSTed to the caller's push-notification URL.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union
import json
import logging

from agents.registry import AgentRegistry
from exceptions import AgentNotFoundError, ConfigurationError, MovieAgentError, ProtocolError, WebhookDeliveryError
from model import Acknowledgement, HandlerErrorResponse, PushNotificationConfig, TaskRequest, TaskResult, new_id
from task_builder import build_completed_task, build_failed_task
from webhook_client import WebhookClient

logger = logging.getLogger(__name__)


@dataclass
class DispatchJob:
    agent_id: str
    request_id: Any
    prompt: str
    task_id: str
    context_id: str
    push_config: PushNotificationConfig


class WebhookDispatchHandler:
    def __init__(self, registry: AgentRegistry, webhook_client: WebhookClient):
        self.registry = registry
        self.webhook_client = webhook_client

    def accept(self, agent_id: str, body: Union[bytes, str, Dict[str, Any]]) -> Tuple[int, Dict[str, Any], Optional[DispatchJob]]:
        """
        Validate a request and build the immediate response.

        Returns:
            (status code, response body, job to run in the background or None)
        """
        try:
            job = self._validate(agent_id, body)
        except (MovieAgentError, ValueError) as e:
            # there is no callback address we could trust, so the caller gets the error now
            logger.error(f"Critical handler error for agent {agent_id}: {e}")
            return 500, HandlerErrorResponse(data={"details": str(e)}).to_wire(), None

        logger.info(f"Sending 202 Accepted for task {job.task_id}")
        return 202, Acknowledgement(task_id=job.task_id).to_wire(), job

    def _validate(self, agent_id: str, body: Union[bytes, str, Dict[str, Any]]) -> DispatchJob:
        if isinstance(body, (bytes, str)):
            body = json.loads(body)
        if not isinstance(body, dict):
            raise ProtocolError("Request body must be a JSON object")

        request = TaskRequest.model_validate(body)
        logger.info(f"Received request {request.id!r} for agent: {agent_id}")

        push_config = request.push_config
        if push_config is None or not push_config.url or not push_config.token:
            raise ConfigurationError("Missing pushNotificationConfig in request")

        prompt = request.prompt
        if not prompt:
            raise ProtocolError("Could not find main prompt in message.parts[0].text")

        params = request.params
        return DispatchJob(
            agent_id=agent_id,
            request_id=request.id,
            prompt=prompt,
            task_id=params.task_id or new_id(),
            context_id=params.context_id or new_id(),
            push_config=push_config,
        )

    async def run(self, job: DispatchJob) -> None:
        """Run the agent for an accepted job and deliver exactly one result to the webhook."""
        payload = await self._execute(job)
        try:
            await self.webhook_client.deliver(job.push_config, payload)
        except (WebhookDeliveryError, ConfigurationError) as e:
            logger.error(f"Could not deliver {payload.result.status.state} result for task {job.task_id}: {e}")

    async def _execute(self, job: DispatchJob) -> TaskResult:
        try:
            logger.info(f"Starting agent {job.agent_id} for task {job.task_id}")
            agent = self.registry.get(job.agent_id)
            if agent is None:
                raise AgentNotFoundError(job.agent_id)

            agent_result = await agent.generate(job.prompt)
            logger.info(f"Agent {job.agent_id} finished task {job.task_id}. Replying to webhook...")
            return build_completed_task(job.request_id, job.task_id, job.context_id, job.agent_id, agent_result)
        except Exception as e:
            logger.error(f"Error during async agent run for task {job.task_id}: {e}")
            return build_failed_task(job.request_id, job.task_id, job.context_id,
                                     str(e) or "An unknown error occurred.")
