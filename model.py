from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from python_a2a import TaskState

JSONRPC_VERSION = "2.0"

TASK_COMPLETED = TaskState.COMPLETED.value
TASK_FAILED = TaskState.FAILED.value


def new_id() -> str:
    return str(uuid4())


def utc_timestamp(epoch_seconds: Optional[float] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2024-01-01T10:00:00.000Z"""
    if epoch_seconds is None:
        moment = datetime.now(timezone.utc)
    else:
        moment = datetime.fromtimestamp(epoch_seconds, timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


# ---------------------------------------------------------------------------
# Inbound JSON-RPC request
# ---------------------------------------------------------------------------

class Part(WireModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    kind: str = "text"
    text: Optional[str] = None


class Message(WireModel):
    kind: str = "message"
    role: str = "user"
    parts: List[Part] = Field(default_factory=list)
    message_id: Optional[str] = Field(default=None, alias="messageId")
    task_id: Optional[str] = Field(default=None, alias="taskId")


class PushNotificationConfig(WireModel):
    url: Optional[str] = None
    token: Optional[str] = None


class TaskConfiguration(WireModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    push_notification_config: Optional[PushNotificationConfig] = Field(
        default=None, alias="pushNotificationConfig"
    )


class TaskParams(WireModel):
    message: Optional[Message] = None
    context_id: Optional[str] = Field(default=None, alias="contextId")
    task_id: Optional[str] = Field(default=None, alias="taskId")
    configuration: Optional[TaskConfiguration] = None


class TaskRequest(WireModel):
    jsonrpc: Optional[str] = None
    id: Any = None
    method: Optional[str] = None
    params: Optional[TaskParams] = None

    @property
    def prompt(self) -> Optional[str]:
        """Text of the first message part, the prompt handed to the agent."""
        params = self.params
        if params is None or params.message is None or not params.message.parts:
            return None
        return params.message.parts[0].text

    @property
    def push_config(self) -> Optional[PushNotificationConfig]:
        if self.params is None or self.params.configuration is None:
            return None
        return self.params.configuration.push_notification_config


# ---------------------------------------------------------------------------
# Task result
# ---------------------------------------------------------------------------

class Artifact(WireModel):
    artifact_id: str = Field(default_factory=new_id, alias="artifactId")
    name: str
    parts: List[Part] = Field(default_factory=list)


class TaskStatus(WireModel):
    state: str
    timestamp: str = Field(default_factory=utc_timestamp)
    message: Message


class Task(WireModel):
    id: str
    context_id: str = Field(alias="contextId")
    status: TaskStatus
    artifacts: List[Artifact] = Field(default_factory=list)
    history: List[Message] = Field(default_factory=list)
    kind: str = "task"


class TaskResult(WireModel):
    jsonrpc: str = JSONRPC_VERSION
    id: Any = None
    result: Task

    def to_wire(self) -> Dict[str, Any]:
        payload = super().to_wire()
        # the request id is echoed even when the caller sent null
        payload["id"] = self.id
        return payload


# ---------------------------------------------------------------------------
# Error and acknowledgement envelopes
# ---------------------------------------------------------------------------

class JsonRpcError(WireModel):
    code: int
    message: str
    data: Optional[Dict[str, Any]] = None


class ErrorResponse(WireModel):
    jsonrpc: str = JSONRPC_VERSION
    id: Any = None
    error: JsonRpcError

    def to_wire(self) -> Dict[str, Any]:
        payload = super().to_wire()
        payload["id"] = self.id
        return payload


class Acknowledgement(WireModel):
    status: str = "success"
    status_code: int = 202
    message: str = "request received"
    task_id: str


class HandlerErrorResponse(WireModel):
    status: str = "error"
    status_code: int = 500
    message: str = "Internal Server Error"
    data: Dict[str, Any] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Agent invocation result
# ---------------------------------------------------------------------------

class AgentResult(BaseModel):
    text: str = ""
    tool_results: List[Any] = Field(default_factory=list)
