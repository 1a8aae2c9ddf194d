# =============================================================================
# tools/mcp_server.py  —  FastMCP Transport Adapter
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the three metrics tools over MCP (stdio).  Each tool is a
#   CatalogTool: its name, description and input schema are taken verbatim
#   from core/catalog.py, and its run() hands the raw argument dict to
#   core.dispatcher.ToolDispatcher.  Validation, defaults, Prometheus access
#   and formatting all live in core/.
#
# HOW IT WORKS (the flow):
#   1. An MCP client (an agent, Claude Desktop, ...) sends tools/call
#   2. FastMCP routes the call to the matching CatalogTool
#   3. CatalogTool.run() calls dispatcher.handle(...) with the arguments
#      exactly as the client sent them
#   4. The text content goes back to the client; failures are text too,
#      prefixed "Error executing <tool>:"
#
# SCHEMAS:
#   FastMCP does not validate arguments for a CatalogTool.  A call with no
#   "query", or with "metric_type": null, reaches the dispatcher, which
#   fills defaults or answers with its own error text.  Enums are
#   advertised, not enforced.
#
# RUNNING THIS SERVER:
#     a) python -m tools.mcp_server
#     b) genai-metrics-server        (console script)
#     c) spawned over stdio by agent/metrics_agent.py
# =============================================================================

import asyncio
import logging
import sys
from typing import Any

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.tools import Tool, ToolResult

from core.catalog import TOOL_CATALOG, list_tools
from core.config import load_config
from core.dispatcher import ToolDispatcher
from core.models import ToolDefinition, ToolInvocationRequest
from core.prometheus import PrometheusClient

# .env must be loaded before the configuration is read.
load_dotenv()

SERVER_NAME = "genai-metrics-server"
SERVER_VERSION = "1.0.0"

# =============================================================================
# Logging Setup
# =============================================================================
# STDOUT is the MCP transport; every log line goes to STDERR.
#
#   CYAN    incoming tool calls with their arguments
#   YELLOW  intermediate status
#   GREEN   responses
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, text: str) -> str:
    """Log the first line and size of a response in GREEN, then return it."""
    first_line = text.splitlines()[0] if text else ""
    logging.info(f"{_GREEN}  ← {tool_name} response ({len(text)} chars): {first_line}{_RESET}")
    return text


# =============================================================================
# Server state
# =============================================================================
# Configuration is read once here.  The dispatcher keeps no per-call state,
# so one instance serves every request.
config = load_config()
dispatcher = ToolDispatcher(PrometheusClient.from_config(config))

mcp = FastMCP(SERVER_NAME, version=SERVER_VERSION)


def _call_tool(tool_name: str, arguments: dict[str, Any]) -> str:
    """Forward one tools/call to the dispatcher and return the envelope text."""
    _log_request(tool_name, **arguments)
    envelope = dispatcher.handle(ToolInvocationRequest(tool_name, dict(arguments)))
    text = envelope["content"][0]["text"]
    if text.startswith("Error executing"):
        _log_status("tool reported an error")
    return _log_response(tool_name, text)


# =============================================================================
# The tools
# =============================================================================
#   get_model_performance   WHEN TO CALL: "how fast / how busy / how much
#                           memory or GPU".  timeRange 5m|15m|1h|24h,
#                           metric_type all|latency|throughput|memory|gpu.
#                           Returns a markdown overview, one line per metric.
#
#   analyze_model_health    WHEN TO CALL: "is the model OK?".  includeTraces
#                           is accepted and ignored.  Returns a fixed status.
#
#   get_prometheus_query    WHEN TO CALL: drilling into exact values.
#                           query is required PromQL; timeRange is ignored.
#                           Returns a Metric | Value | Labels table.
# =============================================================================
class CatalogTool(Tool):
    """An MCP tool whose contract is a core.catalog ToolDefinition.

    FastMCP advertises ``parameters`` (the catalog's JSON schema) in
    tools/list and passes tools/call arguments to run() unvalidated.
    """

    @classmethod
    def from_definition(cls, definition: ToolDefinition) -> "CatalogTool":
        return cls(
            name=definition.name,
            description=definition.description,
            parameters=definition.input_schema(),
        )

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        """Dispatch one call and wrap the envelope text as MCP text content.

        Args:
            arguments: The client's argument object, possibly empty or
                holding nulls and undeclared keys.

        Returns:
            A ToolResult with exactly one text content item.  Tool failures
            are returned as "Error executing ..." text, never as is_error.
        """
        # The Prometheus client blocks; keep it off the event loop.
        text = await asyncio.to_thread(_call_tool, self.name, arguments or {})
        return ToolResult(content=text)


for _definition in TOOL_CATALOG.values():
    mcp.add_tool(CatalogTool.from_definition(_definition))


# =============================================================================
# Server entry point
# =============================================================================
def main() -> None:
    tool_names = ", ".join(tool["name"] for tool in list_tools())
    logging.info(
        f"GenAI Metrics MCP Server {SERVER_VERSION} running on stdio "
        f"(prometheus={config.prometheus_url})"
    )
    _log_status(f"tools: {tool_names}")
    mcp.run()


if __name__ == "__main__":
    main()
