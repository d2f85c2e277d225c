"""Tool registry — decorator-based tool registration and lookup."""
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Awaitable, Dict, List, Optional, Type

from pydantic import BaseModel

logger = logging.getLogger(__name__)


@dataclass
class ToolResult:
    success: bool = True
    payload: Dict[str, Any] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)
    error: str = ""
    error_type: str = ""

    @classmethod
    def failure(cls, message: str, error_type: str) -> "ToolResult":
        return cls(success=False, error=message, error_type=error_type)

    def to_dict(self) -> Dict[str, Any]:
        if not self.success:
            return {
                "success": False,
                "error": self.error,
                "errorType": self.error_type,
                "metadata": self.metadata,
            }
        return {"success": True, **self.payload, "metadata": self.metadata}

    def to_content(self) -> Dict[str, Any]:
        """Render as a tool-call content envelope."""
        text = json.dumps(self.to_dict(), indent=2, ensure_ascii=False)
        content = {"content": [{"type": "text", "text": text}]}
        if not self.success:
            content["isError"] = True
        return content


@dataclass
class ToolDef:
    name: str
    description: str
    args_model: Type[BaseModel]
    handler: Callable[..., Awaitable[ToolResult]]

    @property
    def input_schema(self) -> Dict[str, Any]:
        return self.args_model.model_json_schema(by_alias=True)


_tools: Dict[str, ToolDef] = {}


def register_tool(
    name: str,
    args_model: Type[BaseModel],
    description: str = "",
):
    """Decorator to register a tool function."""
    def decorator(func):
        tool = ToolDef(
            name=name,
            description=description or func.__doc__ or "",
            args_model=args_model,
            handler=func,
        )
        _tools[name] = tool
        logger.info(f"Registered tool: {name}")
        return func
    return decorator


def get_tool(name: str) -> Optional[ToolDef]:
    return _tools.get(name)


def tool_schemas() -> List[Dict[str, Any]]:
    """Declarative tool catalog for tools/list, in registration order."""
    return [
        {"name": tool.name, "description": tool.description, "inputSchema": tool.input_schema}
        for tool in _tools.values()
    ]
