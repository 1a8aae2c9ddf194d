# =============================================================================
# agent/metrics_agent.py  —  Google ADK Agent wired to the Metrics MCP Server
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Builds the ADK agent that talks to users about model performance.  The
#   agent holds no metrics logic; it reaches every number through the MCP
#   tools in tools/mcp_server.py.
#
#   ┌───────────────────────┐   stdio (MCP)   ┌────────────────────────┐
#   │  ADK Agent            │ ──────────────▶ │  tools/mcp_server.py   │
#   │  LiteLlm model        │                 │  → core/dispatcher.py  │
#   └───────────────────────┘                 │  → Prometheus HTTP API │
#                                             └────────────────────────┘
#
# MCP CONNECTION:
#   ADK starts the server as a subprocess with the current interpreter
#   (python -m tools.mcp_server) from the project root, and discovers the
#   three tools over stdin/stdout.  The backend URLs are passed through the
#   subprocess environment.
#
# MODEL:
#   Any LiteLLM model string, from METRICS_AGENT_MODEL
#   (default "openrouter/openai/gpt-4o", which reads OPENROUTER_API_KEY).
# =============================================================================

import os
import sys

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset
from mcp import StdioServerParameters

from agent.prompt import get_metrics_analyst_prompt
from core.config import MetricsConfig


PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def server_parameters(config: MetricsConfig) -> StdioServerParameters:
    """How ADK launches the metrics MCP server."""
    env = dict(os.environ)
    env.update({
        "PROMETHEUS_URL": config.prometheus_url,
        "GRAFANA_URL": config.grafana_url,
        "MODEL_RUNNER_URL": config.model_runner_url,
        "JAEGER_URL": config.jaeger_url,
        "PROMETHEUS_TIMEOUT": str(config.query_timeout),
    })
    return StdioServerParameters(
        command=sys.executable,
        args=["-m", "tools.mcp_server"],
        cwd=PROJECT_ROOT,
        env=env,
    )


def create_agent(config: MetricsConfig) -> Agent:
    """Create the metrics analyst agent for ``config``'s deployment."""
    mcp_tools = MCPToolset(connection_params=server_parameters(config))

    return Agent(
        name="genai_metrics_analyst",
        model=LiteLlm(model=config.agent_model),
        instruction=get_metrics_analyst_prompt(config),
        tools=[mcp_tools],
    )
