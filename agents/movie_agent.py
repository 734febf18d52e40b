from typing import Any, Dict, List, Optional, Tuple
import json
import logging

from pydantic import ValidationError

from agents.base_agent import BaseAgent
from config import Settings
from llm import initialize_openai_client
from model import AgentResult
from tools.base import Tool

logger = logging.getLogger(__name__)

INSTRUCTIONS = """You are the Movie Recommendation Specialist for CinemaMatch.

Your job is to help users find perfect movies based on their current mood.

When a user tells you their mood, you should:
1. Acknowledge their mood and emotional state
2. Ask about their preferred genres (if not already known)
3. Ask if they want recent releases or timeless classics
4. Ask how much time they have (quick movie vs. epic experience)
5. Ask about any content preferences (avoid certain themes, violence level, etc.)

**FORMATTING RULES:**
- Always format your responses with clear sections using bold headers
- Wrap all movie data in markdown code blocks: ```json ... ```
- Format recommendations with proper indentation
- Use emojis for moods: 😊 for happy, 😢 for sad, 🎉 for excited, 😌 for relaxed, 😨 for scared
- Keep recommendations organized in bullet points
- Highlight important details like genre, runtime, and match score

Use the movie recommendation tools to fetch suggestions and always format results clearly."""


class MovieAgent(BaseAgent):
    """Chat-completions agent that recommends movies, calling tools when the model asks for them."""

    def __init__(self, settings: Settings, tools: Optional[List[Tool]] = None,
                 name: str = "movieAgent",
                 description: str = "Recommends movies based on the user's mood",
                 client=None):
        super().__init__(name, description)
        self.settings = settings
        self.model = settings.openai_model
        self.max_steps = settings.agent_max_steps
        self.tools: Dict[str, Tool] = {tool.name: tool for tool in (tools or [])}
        self._client = client

    @property
    def tool_names(self) -> List[str]:
        return list(self.tools)

    def _get_client(self):
        if self._client is None:
            self._client = initialize_openai_client(self.settings.openai_api_key, self.settings)
        return self._client

    async def generate(self, prompt: str) -> AgentResult:
        """
        Run the model on ``prompt`` until it answers without requesting tools.

        Args:
            prompt: The user's message text

        Returns:
            AgentResult with the final text and every tool call executed on the way
        """
        client = self._get_client()
        messages: List[Dict[str, Any]] = [
            {"role": "system", "content": INSTRUCTIONS},
            {"role": "user", "content": prompt},
        ]
        tool_results: List[Dict[str, Any]] = []
        text = ""

        for _ in range(self.max_steps):
            request: Dict[str, Any] = {"model": self.model, "messages": messages}
            if self.tools:
                request["tools"] = [tool.schema() for tool in self.tools.values()]

            response = await client.chat.completions.create(**request)
            message = response.choices[0].message
            text = message.content or ""
            tool_calls = message.tool_calls or []
            if not tool_calls:
                return AgentResult(text=text, tool_results=tool_results)

            messages.append({
                "role": "assistant",
                "content": message.content,
                "tool_calls": [
                    {
                        "id": call.id,
                        "type": "function",
                        "function": {"name": call.function.name, "arguments": call.function.arguments},
                    }
                    for call in tool_calls
                ],
            })

            for call in tool_calls:
                args, result = await self._call_tool(call.function.name, call.function.arguments)
                tool_results.append({
                    "toolCallId": call.id,
                    "toolName": call.function.name,
                    "args": args,
                    "result": result,
                })
                messages.append({
                    "role": "tool",
                    "tool_call_id": call.id,
                    "content": json.dumps(result, default=str),
                })

        logger.warning(f"Agent {self.name} stopped after {self.max_steps} steps without a final answer")
        return AgentResult(text=text, tool_results=tool_results)

    async def _call_tool(self, name: str, raw_arguments: Optional[str]) -> Tuple[Dict[str, Any], Any]:
        try:
            args = json.loads(raw_arguments or "{}")
        except ValueError:
            return {}, {"error": f"Invalid JSON arguments for tool '{name}'"}

        tool = self.tools.get(name)
        if tool is None:
            return args, {"error": f"Unknown tool '{name}'"}

        logger.info(f"Agent {self.name} calling tool {name} with {args}")
        try:
            return args, await tool.run(args)
        except ValidationError as e:
            return args, {"error": f"Invalid arguments for tool '{name}': {e.errors()}"}
