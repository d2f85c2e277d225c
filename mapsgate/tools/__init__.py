"""Tool system — registry, argument models, dispatcher."""
from .registry import register_tool, get_tool, tool_schemas, ToolResult, ToolDef
from .executor import ToolDispatcher

# Auto-import builtin tools to trigger @register_tool decorators
from .builtin import *  # noqa
