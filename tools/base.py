from typing import Any, Dict, Type

from pydantic import BaseModel


class Tool:
    """A capability the agent may call.

    Subclasses set ``name``, ``description`` and ``input_model`` and implement
    ``execute``. The input model doubles as the JSON schema advertised to the
    language model.
    """

    name: str = ""
    description: str = ""
    input_model: Type[BaseModel] = BaseModel

    def schema(self) -> Dict[str, Any]:
        """OpenAI function-calling schema for this tool."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.input_model.model_json_schema(by_alias=True),
            },
        }

    async def run(self, arguments: Dict[str, Any]) -> Any:
        """Validate raw arguments and execute, returning a JSON-serializable result."""
        params = self.input_model.model_validate(arguments or {})
        result = await self.execute(params)
        if isinstance(result, BaseModel):
            return result.model_dump(by_alias=True, exclude_none=True, mode="json")
        return result

    async def execute(self, params: BaseModel) -> Any:
        raise NotImplementedError("Subclasses must implement execute method")
