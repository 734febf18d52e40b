from typing import Any, Dict, List

from model import AgentResult


class BaseAgent:
    def __init__(self, name: str, description: str = ""):
        self.name = name
        self.description = description

    @property
    def tool_names(self) -> List[str]:
        return []

    def describe(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "tools": self.tool_names,
        }

    async def generate(self, prompt: str) -> AgentResult:
        """
        Override this method in your agent implementation
        """
        raise NotImplementedError("Subclasses must implement generate method")
