# =============================================================================
# core/config.py  —  Process-wide Connection Settings
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads the backend URLs (Prometheus, Grafana, model runner, Jaeger) and
#   the query timeout from the environment ONCE, into an immutable
#   MetricsConfig.  The server and the agent build one at start-up and pass
#   it down explicitly; nothing in core/ reads os.environ on its own.
#
#   Loading a .env file is the entry point's job (python-dotenv), so this
#   module stays importable and testable with a plain dict.
# =============================================================================

from dataclasses import dataclass
import os
from typing import Mapping, Optional

from core.errors import ConfigError


DEFAULT_PROMETHEUS_URL = "http://prometheus:9090"
DEFAULT_GRAFANA_URL = "http://grafana:3001"
DEFAULT_MODEL_RUNNER_URL = "http://model-runner:12434"
DEFAULT_JAEGER_URL = "http://jaeger:16686"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_AGENT_MODEL = "openrouter/openai/gpt-4o"


@dataclass(frozen=True)
class MetricsConfig:
    """Backend locations for one server process."""

    prometheus_url: str = DEFAULT_PROMETHEUS_URL
    grafana_url: str = DEFAULT_GRAFANA_URL
    model_runner_url: str = DEFAULT_MODEL_RUNNER_URL
    jaeger_url: str = DEFAULT_JAEGER_URL
    query_timeout: float = DEFAULT_TIMEOUT_SECONDS
    agent_model: str = DEFAULT_AGENT_MODEL
    # grafana/model_runner/jaeger are advertised to the agent only; no tool
    # calls them yet.


def _url(environ: Mapping[str, str], name: str, default: str) -> str:
    value = environ.get(name, "").strip()
    return (value or default).rstrip("/")


def load_config(environ: Optional[Mapping[str, str]] = None) -> MetricsConfig:
    """Build a MetricsConfig from environment variables.

    Unset or blank variables fall back to the docker-compose service names
    the server ships with.

    Raises:
        ConfigError: if PROMETHEUS_TIMEOUT is not a positive number.
    """
    if environ is None:
        environ = os.environ

    raw_timeout = environ.get("PROMETHEUS_TIMEOUT", "").strip()
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigError(f"PROMETHEUS_TIMEOUT must be a number, got {raw_timeout!r}")
        if timeout <= 0:
            raise ConfigError(f"PROMETHEUS_TIMEOUT must be positive, got {raw_timeout!r}")
    else:
        timeout = DEFAULT_TIMEOUT_SECONDS

    return MetricsConfig(
        prometheus_url=_url(environ, "PROMETHEUS_URL", DEFAULT_PROMETHEUS_URL),
        grafana_url=_url(environ, "GRAFANA_URL", DEFAULT_GRAFANA_URL),
        model_runner_url=_url(environ, "MODEL_RUNNER_URL", DEFAULT_MODEL_RUNNER_URL),
        jaeger_url=_url(environ, "JAEGER_URL", DEFAULT_JAEGER_URL),
        query_timeout=timeout,
        agent_model=environ.get("METRICS_AGENT_MODEL", "").strip() or DEFAULT_AGENT_MODEL,
    )
