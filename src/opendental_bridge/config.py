"""Configuration for the OpenDental bridge.

Loads settings from environment variables (via a .env file or the system
environment). Every setting has a default so the package can be imported
without any variables set, e.g. when running the test suite.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file if it exists (it won't exist in CI or Docker)
_env_path = Path(__file__).resolve().parent.parent.parent / ".env"
load_dotenv(_env_path)


def _seconds(name: str, default: float) -> float:
    value = os.getenv(name, "")
    return float(value) if value else default


# --- Backend connection ---
# The FastAPI service in front of OpenDental. All tool calls go here.
OPENDENTAL_API_URL: str = os.getenv("OPENDENTAL_API_URL", "http://localhost:8000")

# Timeout for backend calls that don't specify their own
DEFAULT_TIMEOUT_SECONDS: float = _seconds("OPENDENTAL_DEFAULT_TIMEOUT", 5 * 60)

# Per-tool timeouts. The backend drives the OpenDental UI to collect the
# data, so report generation can take many minutes.
TOOL_TIMEOUTS: dict[str, float] = {
    "get-patients": _seconds("OPENDENTAL_TIMEOUT_GET_PATIENTS", 30 * 60),
    "get-patient-chart": _seconds("OPENDENTAL_TIMEOUT_GET_PATIENT_CHART", 30 * 60),
    "get-reports": _seconds("OPENDENTAL_TIMEOUT_GET_REPORTS", 30 * 60),
}

# --- Bridge server ---
# Public address of this server, advertised to tool runtimes
MCP_URL: str = os.getenv("MCP_URL", "http://localhost:3000")
PORT: int = int(os.getenv("PORT", "3000"))
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# Where the Streamlit frontend reaches the bridge server
BRIDGE_URL: str = os.getenv("BRIDGE_URL", MCP_URL)

# --- LLM ---
# Only needed for free-text chat requests that aren't a known follow-up
ANTHROPIC_API_KEY: str = os.getenv("ANTHROPIC_API_KEY", "")
ANTHROPIC_MODEL: str = os.getenv("ANTHROPIC_MODEL", "claude-3-5-sonnet-latest")
