"""Smoke tests — verify the package is wired up correctly.

They ensure that:
1. All modules can be imported without errors
2. The FastAPI app starts up properly
3. Configuration loads with default values

This is the first thing CI runs, so if these fail, nothing else will work.
"""

from unittest.mock import patch

from fastapi.testclient import TestClient


def test_imports() -> None:
    """Verify all modules can be imported without crashing."""
    import opendental_bridge  # noqa: F401
    import opendental_bridge.agent  # noqa: F401
    import opendental_bridge.app  # noqa: F401
    import opendental_bridge.config  # noqa: F401
    import opendental_bridge.followup  # noqa: F401
    import opendental_bridge.models  # noqa: F401
    import opendental_bridge.opendental_client  # noqa: F401
    import opendental_bridge.tools.registry  # noqa: F401
    import opendental_bridge.widgets.patient_chart  # noqa: F401
    import opendental_bridge.widgets.patient_list  # noqa: F401
    import opendental_bridge.widgets.patient_report  # noqa: F401


def test_config_defaults() -> None:
    """Config should load with sensible defaults even without a .env file."""
    from opendental_bridge.config import TOOL_TIMEOUTS

    assert set(TOOL_TIMEOUTS) == {"get-patients", "get-patient-chart", "get-reports"}
    assert all(t > 0 for t in TOOL_TIMEOUTS.values())


def test_health_endpoint() -> None:
    """The /health endpoint should return 200 OK."""
    from opendental_bridge.app import app

    client = TestClient(app)
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_chat_endpoint_placeholder() -> None:
    """Without an API key, free text gets a placeholder answer and no widget."""
    from opendental_bridge.app import app

    client = TestClient(app)
    with patch("opendental_bridge.agent.ANTHROPIC_API_KEY", ""):
        response = client.post("/chat", json={"message": "Hello"})
    assert response.status_code == 200
    data = response.json()
    assert "Hello" in data["response"]
    assert data["result"] is None
