from typing import Any, Dict, Optional

# JSON-RPC 2.0 error codes used by the A2A routes
INVALID_REQUEST = -32600
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class MovieAgentError(Exception):
    """Base class for all errors raised by the movie agent service."""


class ConfigurationError(MovieAgentError):
    """A required setting (callback address, API key) is missing or invalid."""


class ProtocolError(MovieAgentError):
    """The inbound JSON-RPC envelope or its params are malformed."""

    def __init__(self, message: str, code: int = INVALID_REQUEST, status_code: int = 400,
                 data: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.data = data


class AgentNotFoundError(ProtocolError):
    def __init__(self, agent_id: str):
        super().__init__(f"Agent '{agent_id}' not found", code=INVALID_PARAMS, status_code=404)
        self.agent_id = agent_id


class UpstreamError(MovieAgentError):
    """An upstream collaborator (catalog, classifier, model) failed."""


class CatalogError(UpstreamError):
    pass


class UpstreamSchemaError(UpstreamError):
    """An upstream payload did not match the expected schema."""

    def __init__(self, source: str, details: str):
        super().__init__(f"Unexpected response from {source}: {details}")
        self.source = source
        self.details = details


class WebhookDeliveryError(MovieAgentError):
    """The outbound callback POST failed."""

    def __init__(self, url: str, reason: str, status_code: Optional[int] = None):
        super().__init__(f"Webhook delivery to {url} failed: {reason}")
        self.url = url
        self.reason = reason
        self.status_code = status_code
