"""
Shared test fixtures and configuration for vcloud-rest tests
"""

import pytest
from unittest.mock import Mock
from vcloud_rest import InvokerSettings, RequestInvoker
from vcloud_rest.models import RequestSpec
from tests.mocks.vcloud import FakeVCloud


@pytest.fixture
def fake_vcloud():
    """Fake vCloud Director endpoint with a modern version listing"""
    fake = FakeVCloud()
    fake.versions([("27.0", True), ("33.0", False), ("34.0", False)])
    return fake


@pytest.fixture
def mock_sleep():
    """Stand-in for time.sleep so polling tests run instantly"""
    return Mock()


@pytest.fixture
def invoker(fake_vcloud, mock_sleep):
    """RequestInvoker wired to the fake endpoint"""
    return RequestInvoker(
        settings=InvokerSettings(task_timeout=30, poll_interval=5),
        transport=fake_vcloud.transport,
        sleep=mock_sleep,
    )


@pytest.fixture
def vapp_spec(fake_vcloud):
    """GET of a single vApp"""
    return RequestSpec(fake_vcloud.url("/api/vApp/vapp-42"))


@pytest.fixture
def power_on_spec(fake_vcloud):
    """POST of the vApp power-on action"""
    return RequestSpec(fake_vcloud.url("/api/vApp/vapp-42/power/action/powerOn"), method="POST")

