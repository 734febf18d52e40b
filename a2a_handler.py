from typing import Any, Dict, Tuple, Union
import json
import logging

from pydantic import ValidationError

from agents.registry import AgentRegistry
from exceptions import INTERNAL_ERROR, INVALID_PARAMS, INVALID_REQUEST, AgentNotFoundError, ProtocolError
from model import JSONRPC_VERSION, ErrorResponse, JsonRpcError, TaskRequest, TaskResult, new_id
from task_builder import build_completed_task, build_history

logger = logging.getLogger(__name__)


class SyncA2AHandler:
    """Runs the agent inline and answers with the full task result."""

    def __init__(self, registry: AgentRegistry):
        self.registry = registry

    async def handle(self, agent_id: str, body: Union[bytes, str, Dict[str, Any]]) -> Tuple[int, Dict[str, Any]]:
        request_id = None
        try:
            if isinstance(body, (bytes, str)):
                body = json.loads(body)
            if isinstance(body, dict):
                request_id = body.get("id")
            result = await self._handle(agent_id, body)
            logger.info(f"Sending response for request {request_id!r}")
            return 200, result.to_wire()
        except ProtocolError as e:
            logger.warning(f"Rejected request {request_id!r} for agent {agent_id}: {e.message}")
            error = JsonRpcError(code=e.code, message=e.message, data=e.data)
            reply_id = request_id if request_id not in (None, "") else None
            return e.status_code, ErrorResponse(id=reply_id, error=error).to_wire()
        except Exception as e:
            logger.exception(f"Error handling request for agent {agent_id}")
            error = JsonRpcError(code=INTERNAL_ERROR, message="Internal error", data={"details": str(e)})
            return 500, ErrorResponse(id=None, error=error).to_wire()

    async def _handle(self, agent_id: str, body: Any) -> TaskResult:
        if (not isinstance(body, dict) or body.get("jsonrpc") != JSONRPC_VERSION
                or body.get("id") in (None, "")):
            raise ProtocolError('Invalid Request: jsonrpc must be "2.0" and id is required', INVALID_REQUEST, 400)

        logger.info(f"Received request {body['id']!r} for agent: {agent_id}")
        agent = self.registry.get(agent_id)
        if agent is None:
            raise AgentNotFoundError(agent_id)

        invalid_params = ProtocolError("Invalid params: message with parts required", INVALID_PARAMS, 400)
        try:
            request = TaskRequest.model_validate(body)
        except ValidationError:
            raise invalid_params from None
        prompt = request.prompt
        if not prompt:
            raise invalid_params

        params = request.params
        task_id = params.task_id or new_id()
        context_id = params.context_id or new_id()

        logger.info(f"Executing agent {agent_id}...")
        agent_result = await agent.generate(prompt)
        logger.info(f"Agent response: {(agent_result.text or '')[:100]}...")

        history = build_history(params.message, agent_result.text or "", task_id)
        return build_completed_task(request.id, task_id, context_id, agent_id, agent_result, history=history)
