"""Builders for the A2A task results sent back to callers."""
from typing import Any, List, Optional
import json

from model import (
    TASK_COMPLETED, TASK_FAILED, AgentResult, Artifact, Message, Part, Task, TaskResult, TaskStatus, new_id,
)

TOOL_RESULTS_ARTIFACT = "ToolResults"


def text_part(text: str) -> Part:
    return Part(kind="text", text=text)


def agent_message(text: str, task_id: Optional[str] = None) -> Message:
    return Message(kind="message", role="agent", parts=[text_part(text)], message_id=new_id(), task_id=task_id)


def serialize_tool_result(result: Any) -> str:
    """Tool outputs pass through when already text, otherwise they are JSON encoded."""
    if isinstance(result, str):
        return result
    return json.dumps(result, default=str)


def build_artifacts(agent_id: str, agent_result: AgentResult) -> List[Artifact]:
    artifacts = [Artifact(name=f"{agent_id}Response", parts=[text_part(agent_result.text or "")])]
    if agent_result.tool_results:
        artifacts.append(Artifact(
            name=TOOL_RESULTS_ARTIFACT,
            parts=[text_part(serialize_tool_result(result)) for result in agent_result.tool_results],
        ))
    return artifacts


def build_history(user_message: Message, agent_text: str, task_id: str) -> List[Message]:
    """User turn followed by the agent's reply, both tagged with the task id."""
    user_entry = Message(
        kind="message",
        role=user_message.role,
        parts=user_message.parts,
        message_id=user_message.message_id or new_id(),
        task_id=task_id,
    )
    return [user_entry, agent_message(agent_text, task_id=task_id)]


def build_completed_task(request_id: Any, task_id: str, context_id: str, agent_id: str,
                         agent_result: AgentResult, history: Optional[List[Message]] = None) -> TaskResult:
    text = agent_result.text or ""
    return TaskResult(
        id=request_id,
        result=Task(
            id=task_id,
            context_id=context_id,
            status=TaskStatus(state=TASK_COMPLETED, message=agent_message(text)),
            artifacts=build_artifacts(agent_id, agent_result),
            history=history or [],
        ),
    )


def build_failed_task(request_id: Any, task_id: str, context_id: str, error_message: str) -> TaskResult:
    return TaskResult(
        id=request_id,
        result=Task(
            id=task_id,
            context_id=context_id,
            status=TaskStatus(
                state=TASK_FAILED,
                message=agent_message(f"I'm sorry, an error occurred: {error_message}"),
            ),
            artifacts=[],
            history=[],
        ),
    )
