"""HTTP transport — JSON-RPC tool calls on /sse and /mcp, plus health and stats."""
import asyncio
import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from .config import settings
from .errors import RateLimitExceeded
from .provider import GoogleDirectionsClient, RouteProviderAdapter
from .ratelimit import RateLimiter
from .tools import ToolDispatcher
from .tools.executor import UNKNOWN_IDENTITY, utc_timestamp

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2025-03-26"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
RATE_LIMITED = -32000


def client_identity(request: Request) -> str:
    """Best-effort caller identity: forwarded-for, then peer address."""
    forwarded = request.headers.get("x-forwarded-for", "")
    first = forwarded.split(",")[0].strip()
    if first:
        return first
    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN_IDENTITY


def _rpc_result(req_id: Any, result: dict) -> JSONResponse:
    return JSONResponse({"jsonrpc": "2.0", "id": req_id, "result": result})


def _rpc_error(req_id: Any, code: int, message: str) -> JSONResponse:
    return JSONResponse({"jsonrpc": "2.0", "id": req_id, "error": {"code": code, "message": message}})


def build_dispatcher(limiter: RateLimiter) -> ToolDispatcher:
    client = GoogleDirectionsClient(
        api_key=settings.google_maps_api_key,
        timeout=settings.google_maps_timeout,
        language=settings.google_maps_language,
        region=settings.google_maps_region,
    )
    return ToolDispatcher(limiter, RouteProviderAdapter(client))


def create_app(dispatcher: Optional[ToolDispatcher] = None, sweep_interval: Optional[float] = None) -> FastAPI:
    if dispatcher is None:
        limiter = RateLimiter(settings.rate_limit, settings.rate_limit_window_s)
        dispatcher = build_dispatcher(limiter)
        sweep_interval = sweep_interval or settings.sweep_interval_s
    limiter = dispatcher.limiter

    app = FastAPI(title=settings.service_name, version=settings.version)
    app.state.dispatcher = dispatcher
    app.state.sweeper = None
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.on_event("startup")
    async def start_sweeper():
        app.state.sweeper = asyncio.create_task(limiter.run_sweeper(sweep_interval))

    @app.on_event("shutdown")
    async def stop_sweeper():
        task = app.state.sweeper
        if task:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        logger.info("Rate limit sweeper stopped")

    def _usage() -> dict:
        stats = limiter.stats()
        return {
            "activeConnections": stats["active_identities"],
            "totalRequests": stats["total_requests"],
        }

    @app.get("/")
    @app.get("/health")
    async def health():
        return {
            "status": "healthy",
            "service": settings.service_name,
            "timestamp": utc_timestamp(),
            "version": settings.version,
            "access": "public",
            "endpoint": "/sse",
            **_usage(),
        }

    @app.get("/stats")
    async def stats():
        usage = _usage()
        return {
            "activeIPs": usage["activeConnections"],
            "totalRequests": usage["totalRequests"],
            "rateLimitWindow": f"{limiter.limit} requests per {limiter.window_seconds:g}s",
            "timestamp": utc_timestamp(),
            "service": settings.service_name,
            "version": settings.version,
        }

    async def rpc(request: Request):
        identity = client_identity(request)
        try:
            payload = await request.json()
        except ValueError:
            return _rpc_error(None, PARSE_ERROR, "Parse error")
        if not isinstance(payload, dict) or payload.get("jsonrpc") != "2.0" \
                or not isinstance(payload.get("method"), str):
            return _rpc_error(None, INVALID_REQUEST, "Invalid Request")

        method = payload["method"]
        req_id = payload.get("id")
        params = payload.get("params") or {}
        if not isinstance(params, dict):
            return _rpc_error(req_id, INVALID_PARAMS, "params must be an object")

        # Notifications carry no id and get no reply
        if req_id is None:
            logger.info(f"Notification {method} from {identity}")
            return Response(status_code=202)

        if method == "initialize":
            return _rpc_result(req_id, {
                "protocolVersion": params.get("protocolVersion", PROTOCOL_VERSION),
                "capabilities": {"tools": {}},
                "serverInfo": {"name": settings.service_name, "version": settings.version},
            })
        if method == "ping":
            return _rpc_result(req_id, {})
        if method == "tools/list":
            try:
                return _rpc_result(req_id, {"tools": dispatcher.list_tools(identity)})
            except RateLimitExceeded as e:
                return _rpc_error(req_id, RATE_LIMITED, e.message)
        if method == "tools/call":
            name = params.get("name")
            if not isinstance(name, str) or not name:
                return _rpc_error(req_id, INVALID_PARAMS, "tools/call requires a tool name")
            result = await dispatcher.invoke(name, params.get("arguments"), identity)
            return _rpc_result(req_id, result.to_content())
        return _rpc_error(req_id, METHOD_NOT_FOUND, f"Method not found: {method}")

    app.add_api_route("/sse", rpc, methods=["POST"])
    app.add_api_route("/mcp", rpc, methods=["POST"])
    return app
