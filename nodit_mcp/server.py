"""FastAPI application wiring Nodit MCP tools to HTTP routes."""

from __future__ import annotations

import json
import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from nodit_mcp import mcp
from nodit_mcp.catalog import ApiRegistry, load_registry
from nodit_mcp.config import default_config
from nodit_mcp.metrics import default_metrics
from nodit_mcp.nodit_api import default_client
from nodit_mcp.tools import (
    get_nodit_api_spec,
    get_nodit_aptos_indexer_api_spec,
    list_nodit_api_categories,
    list_nodit_aptos_indexer_api_query_root,
    list_nodit_data_apis,
    list_nodit_node_apis,
    list_webhook_data_apis,
)

logger = logging.getLogger(__name__)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "message": record.getMessage(),
            "name": record.name,
        }
        for key in ("tool", "request_id", "error", "operation_id"):
            if hasattr(record, key):
                payload[key] = getattr(record, key)
        return json.dumps(payload, default=str)


def configure_logging() -> None:
    level = getattr(logging, default_config.log_level.upper(), logging.INFO)
    if default_config.log_format.lower() == "json":
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        logging.basicConfig(level=level, handlers=[handler])
    else:
        logging.basicConfig(level=level)


configure_logging()
HEALTH_STATUS = {"status": "ok"}
APP_VERSION = "1.0.0"
MCP_SERVER_NAME = "nodit-blockchain-context"
MCP_SERVER_VERSION = APP_VERSION


def get_registry(app: FastAPI) -> ApiRegistry:
    """Return the application's registry, building it on first use."""
    registry = getattr(app.state, "registry", None)
    if registry is None:
        registry = load_registry(default_config)
        app.state.registry = registry
    return registry


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    get_registry(app)
    yield
    # Shutdown
    await default_client.aclose()


app = FastAPI(
    title="Nodit MCP Server",
    description="Nodit Blockchain Context tool surface for LLM agents.",
    version=APP_VERSION,
    lifespan=lifespan,
)


@app.middleware("http")
async def add_request_context(request: Request, call_next):
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id
    start = time.time()
    default_metrics.incr_request()
    response = await call_next(request)
    duration_ms = (time.time() - start) * 1000
    default_metrics.record_duration(request_id, duration_ms)
    response.headers["X-Request-ID"] = request_id
    return response


def _is_error(result: Any) -> bool:
    return isinstance(result, dict) and bool(result.get("error"))


def _log_tool_result(tool_name: str, result: Any, request_id: Optional[str] = None) -> None:
    if _is_error(result):
        logger.warning(
            "tool=%s outcome=error error=%s request_id=%s",
            tool_name,
            result.get("error"),
            request_id,
            extra={"tool": tool_name, "request_id": request_id, "error": result.get("error")},
        )
        default_metrics.record_tool(tool_name, success=False)
    else:
        logger.info(
            "tool=%s outcome=success request_id=%s",
            tool_name,
            request_id,
            extra={"tool": tool_name, "request_id": request_id},
        )
        default_metrics.record_tool(tool_name, success=True)


def _tool_response(tool_name: str, result: Any, request: Request) -> Response:
    request_id = getattr(request.state, "request_id", None)
    _log_tool_result(tool_name, result, request_id)
    if isinstance(result, str):
        return PlainTextResponse(content=result)
    return JSONResponse(content=result)


@app.get("/health")
async def health() -> JSONResponse:
    """Lightweight health endpoint for monitoring."""
    return JSONResponse(content=HEALTH_STATUS)


@app.get("/metrics")
async def metrics() -> JSONResponse:
    """Return in-process metrics snapshot."""
    return JSONResponse(content=default_metrics.snapshot())


@app.get("/tools/api_categories")
async def api_categories(request: Request) -> Response:
    """Proxy for list_nodit_api_categories tool."""
    result = list_nodit_api_categories(registry=get_registry(request.app))
    return _tool_response("list_nodit_api_categories", result, request)


@app.get("/tools/node_apis")
async def node_apis(request: Request) -> Response:
    """Proxy for list_nodit_node_apis tool."""
    result = list_nodit_node_apis(registry=get_registry(request.app))
    return _tool_response("list_nodit_node_apis", result, request)


@app.get("/tools/data_apis")
async def data_apis(request: Request) -> Response:
    """Proxy for list_nodit_data_apis tool."""
    result = list_nodit_data_apis(registry=get_registry(request.app))
    return _tool_response("list_nodit_data_apis", result, request)


@app.get("/tools/webhook_apis")
async def webhook_apis(request: Request) -> Response:
    """Proxy for list_webhook_data_apis tool."""
    result = list_webhook_data_apis(registry=get_registry(request.app))
    return _tool_response("list_webhook_data_apis", result, request)


@app.get("/tools/api_spec/{operation_id}")
async def api_spec(operation_id: str, request: Request) -> Response:
    """Proxy for get_nodit_api_spec tool."""
    result = get_nodit_api_spec(operation_id, registry=get_registry(request.app))
    return _tool_response("get_nodit_api_spec", result, request)


@app.get("/tools/aptos_indexer/query_roots")
async def aptos_indexer_query_roots(request: Request) -> Response:
    """Proxy for list_nodit_aptos_indexer_api_query_root tool."""
    result = list_nodit_aptos_indexer_api_query_root(registry=get_registry(request.app))
    return _tool_response("list_nodit_aptos_indexer_api_query_root", result, request)


@app.get("/tools/aptos_indexer/spec/{query_root}")
async def aptos_indexer_spec(query_root: str, request: Request) -> Response:
    """Proxy for get_nodit_aptos_indexer_api_spec tool."""
    result = get_nodit_aptos_indexer_api_spec(query_root, registry=get_registry(request.app))
    return _tool_response("get_nodit_aptos_indexer_api_spec", result, request)


@app.post("/mcp")
async def mcp_gateway(request: Request) -> Response:
    """
    Minimal JSON-RPC gateway for MCP-style integrations.

    Supported methods:
      - initialize
      - list_tools / tools/list
      - call_tool / tools/call
      - notifications/initialized
    """
    request_id = getattr(request.state, "request_id", None)
    start_time = time.time()

    def _respond(
        payload: Dict[str, Any],
        status_code: int = 200,
        *,
        outcome: str,
        method_label: Optional[str] = None,
        tool_label: Optional[str] = None,
        error_code: Optional[int] = None,
    ) -> JSONResponse:
        duration_ms = (time.time() - start_time) * 1000
        logger.debug(
            "mcp outcome=%s method=%s tool=%s id=%s status=%s duration_ms=%.2f error_code=%s",
            outcome,
            method_label,
            tool_label,
            payload.get("id"),
            status_code,
            duration_ms,
            error_code,
            extra={"request_id": request_id, "tool": tool_label, "error": error_code},
        )
        return JSONResponse(status_code=status_code, content=payload)

    try:
        body = await request.json()
    except ValueError:
        payload = _jsonrpc_error_payload(None, -32700, "Parse error")
        return _respond(payload, status_code=400, outcome="error", error_code=-32700)

    if not isinstance(body, dict):
        payload = _jsonrpc_error_payload(None, -32600, "Invalid request")
        return _respond(payload, status_code=400, outcome="error", error_code=-32600)

    method = body.get("method")
    rpc_id = body.get("id")
    raw_params = body.get("params")
    if raw_params is None:
        params = {}
    elif isinstance(raw_params, dict):
        params = raw_params
    else:
        payload = _jsonrpc_error_payload(rpc_id, -32602, "Invalid params")
        return _respond(payload, outcome="error", method_label=method, error_code=-32602)

    if not method:
        payload = _jsonrpc_error_payload(rpc_id, -32600, "Invalid request")
        return _respond(payload, outcome="error", error_code=-32600)

    if method == "initialize":
        protocol_version = params.get("protocolVersion")
        if not isinstance(protocol_version, str) or not protocol_version:
            payload = _jsonrpc_error_payload(rpc_id, -32602, "Invalid params")
            return _respond(payload, outcome="error", method_label=method, error_code=-32602)

        result = {
            "protocolVersion": protocol_version,
            "serverInfo": {"name": MCP_SERVER_NAME, "version": MCP_SERVER_VERSION},
            "capabilities": {"tools": {"listChanged": False}},
        }
        return _respond(
            _jsonrpc_success_payload(rpc_id, result),
            outcome="success",
            method_label=method,
        )

    if method in ("list_tools", "tools/list"):
        result = {"tools": mcp.list_tools()}
        return _respond(
            _jsonrpc_success_payload(rpc_id, result),
            outcome="success",
            method_label=method,
        )

    if method in ("call_tool", "tools/call"):
        tool_name = params.get("tool") or params.get("name")
        tool_params = params.get("params")
        if tool_params is None:
            tool_params = params.get("arguments") or {}
        if not isinstance(tool_name, str) or not tool_name.strip():
            payload = _jsonrpc_error_payload(rpc_id, -32602, "Invalid params")
            return _respond(payload, outcome="error", method_label=method, error_code=-32602)
        if not isinstance(tool_params, dict):
            payload = _jsonrpc_error_payload(rpc_id, -32602, "Invalid params")
            return _respond(
                payload, outcome="error", method_label=method, tool_label=tool_name, error_code=-32602
            )
        result = await mcp.call_tool(tool_name, tool_params, registry=get_registry(request.app))
        _log_tool_result(tool_name, result, request_id)
        return _respond(
            _jsonrpc_success_payload(rpc_id, _wrap_tool_result(result)),
            outcome="success",
            method_label=method,
            tool_label=tool_name,
        )

    if method in ("notifications/initialized", "initialized"):
        # Notifications should not return a JSON-RPC response body.
        logger.debug(
            "mcp initialized notification received request_id=%s",
            request_id,
            extra={"request_id": request_id},
        )
        return Response(status_code=204)

    payload = _jsonrpc_error_payload(rpc_id, -32601, "Method not found")
    return _respond(payload, outcome="error", method_label=method, error_code=-32601)


# Run with: uvicorn nodit_mcp.server:app --reload


def _jsonrpc_success_payload(rpc_id: Any, result: Any) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": rpc_id, "result": result}


def _jsonrpc_error_payload(rpc_id: Any, code: int, message: str) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": rpc_id, "error": {"code": code, "message": message}}


def _wrap_tool_result(result: Any) -> Dict[str, Any]:
    """
    Shape tool outputs into MCP-friendly content array.
    """
    # Tool-level errors are returned in-band with isError flag.
    if isinstance(result, dict) and "error" in result:
        message = result.get("error") or "Error"
        return {
            "content": [{"type": "text", "text": str(message)}],
            "isError": True,
            "structuredContent": result,
        }

    # Plain string results (listings, specs, raw API responses) are returned as text.
    if isinstance(result, str):
        return {"content": [{"type": "text", "text": result}]}

    try:
        text_repr = json.dumps(result, ensure_ascii=True)
    except (TypeError, ValueError):
        text_repr = str(result)
    return {
        "content": [{"type": "text", "text": text_repr}],
        "structuredContent": result,
    }
