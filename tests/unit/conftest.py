"""
Fixtures applied to every unit test
"""

import pytest


@pytest.fixture(autouse=True)
def clean_vcd_environment(monkeypatch):
    """Keep VCD_* variables from the developer's shell out of unit tests"""
    for name in ("VCD_API_TIMEOUT", "VCD_TASK_TIMEOUT", "VCD_POLL_INTERVAL", "VCD_SKIP_CERT_CHECK"):
        monkeypatch.delenv(name, raising=False)
