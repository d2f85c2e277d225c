"""Every failure a tool call can end in."""
from enum import Enum


class GatewayError(Exception):
    """Base for errors shaped into a failed ToolResult by the dispatcher."""
    kind = "gateway_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RateLimitExceeded(GatewayError):
    kind = "rate_limit_exceeded"

    def __init__(self, message: str = "Rate limit exceeded. Please try again later."):
        super().__init__(message)


class InvalidArgument(GatewayError):
    kind = "invalid_argument"


class UnknownTool(GatewayError):
    kind = "unknown_tool"

    def __init__(self, tool_name: str):
        super().__init__(f"Unknown tool: {tool_name}")
        self.tool_name = tool_name


class InvalidInput(GatewayError):
    kind = "invalid_input"


class ProviderErrorKind(str, Enum):
    NO_RESULTS = "no_results"
    LOCATION_NOT_FOUND = "location_not_found"
    QUOTA_EXCEEDED = "quota_exceeded"
    REQUEST_DENIED = "request_denied"
    UNKNOWN = "unknown"


class ProviderError(GatewayError):
    """Upstream directions failure, already mapped away from provider status codes."""

    def __init__(self, kind: ProviderErrorKind, message: str):
        super().__init__(message)
        self.provider_kind = kind

    @property
    def kind(self) -> str:  # type: ignore[override]
        return self.provider_kind.value
