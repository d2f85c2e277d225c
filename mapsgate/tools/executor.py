"""Tool dispatcher — admission, lookup, validation and error shaping for tool calls.

Every call ends in a ToolResult; failures are never raised to the transport.
"""
import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ValidationError

from ..errors import GatewayError, InvalidArgument, RateLimitExceeded, UnknownTool
from ..provider import RouteProviderAdapter
from ..ratelimit import RateLimiter
from .registry import ToolDef, ToolResult, get_tool, tool_schemas

logger = logging.getLogger(__name__)

UNKNOWN_IDENTITY = "unknown"


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _describe_validation_error(e: ValidationError) -> str:
    parts = []
    for err in e.errors():
        msg = err.get("msg", "invalid value")
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts)


def validate_args(tool: ToolDef, args: Optional[Dict[str, Any]]) -> BaseModel:
    """Parse raw tool arguments into the tool's args model or raise InvalidArgument."""
    if args is None:
        args = {}
    if not isinstance(args, dict):
        raise InvalidArgument("Tool arguments must be an object")
    try:
        return tool.args_model.model_validate(args)
    except ValidationError as e:
        raise InvalidArgument(_describe_validation_error(e)) from e


class ToolDispatcher:
    def __init__(self, limiter: RateLimiter, adapter: RouteProviderAdapter):
        self.limiter = limiter
        self.adapter = adapter

    def list_tools(self, identity: str = UNKNOWN_IDENTITY) -> List[Dict[str, Any]]:
        """Tool catalog; listing is charged to the caller like a call."""
        if not self.limiter.admit(identity):
            raise RateLimitExceeded()
        logger.info(f"Tools list requested from {identity}")
        return tool_schemas()

    async def invoke(
        self,
        tool_name: str,
        args: Optional[Dict[str, Any]],
        identity: str = UNKNOWN_IDENTITY,
    ) -> ToolResult:
        """Execute a registered tool by name on behalf of identity."""
        echoed = args if isinstance(args, dict) else {}

        # Admission is charged before the tool is even looked up
        if not self.limiter.admit(identity):
            return self._shape(tool_name, echoed, self._failed(tool_name, identity, RateLimitExceeded()))

        tool = get_tool(tool_name)
        if not tool:
            logger.warning(f"Unknown tool: {tool_name} from {identity}")
            return self._shape(tool_name, echoed, self._failed(tool_name, identity, UnknownTool(tool_name)))

        logger.info(f"Executing tool: {tool_name} from {identity}")
        t0 = time.monotonic()
        try:
            parsed = validate_args(tool, args)
            result = await tool.handler(parsed, adapter=self.adapter)
        except GatewayError as e:
            result = self._failed(tool_name, identity, e)
        except Exception as e:
            logger.error(f"Tool {tool_name} failed: {e}", exc_info=True)
            result = ToolResult.failure(f"Tool execution failed: {e}", "internal_error")

        elapsed = time.monotonic() - t0
        outcome = "ok" if result.success else result.error_type
        logger.info(f"Tool {tool_name}: {elapsed:.1f}s -> {outcome}")
        return self._shape(tool_name, echoed, result)

    @staticmethod
    def _failed(tool_name: str, identity: str, error: GatewayError) -> ToolResult:
        logger.warning(f"Tool {tool_name} for {identity} failed [{error.kind}]: {error.message}")
        return ToolResult.failure(error.message, error.kind)

    @staticmethod
    def _shape(tool_name: str, args: Dict[str, Any], result: ToolResult) -> ToolResult:
        result.metadata = {
            "timestamp": utc_timestamp(),
            "tool": tool_name,
            **result.metadata,
            "params": args,
        }
        return result
