from __future__ import annotations

import pytest

from tests.helpers.vendors import CREDENTIAL_VARS


@pytest.fixture(autouse=True)
def _hermetic_env(monkeypatch, tmp_path):
    """No vendor credentials and no telemetry files unless a test opts in."""
    for name in CREDENTIAL_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SALES_INTEL_DISABLE_TELEMETRY", "1")
    monkeypatch.setenv("SALES_INTEL_TELEMETRY_DIR", str(tmp_path / "telemetry"))


@pytest.fixture
def all_credentials(monkeypatch):
    for name, value in CREDENTIAL_VARS.items():
        monkeypatch.setenv(name, value)
    return dict(CREDENTIAL_VARS)
