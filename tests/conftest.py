"""
Shared pytest configuration and fixtures for ddcompute tests.

This module provides common fixtures used across all test modules including:
- Client configurations
- Client factories wired to a recording mock transport
"""

from typing import Optional

import pytest

from ddcompute import ComputeClient, ComputeConfig
from ddcompute.domains.account import Account
from fixtures.mock_responses import TEST_BASE_ADDRESS, TEST_ORGANIZATION_ID
from fixtures.transport import MockTransport


# ========== Configuration Fixtures ==========


@pytest.fixture
def compute_config() -> ComputeConfig:
    """Provide a compute client configuration for testing."""
    return ComputeConfig(
        region="au1",
        username="user1",
        password="password",
        base_address=TEST_BASE_ADDRESS,
    )


@pytest.fixture(autouse=True)
def clear_extended_logging_env(monkeypatch):
    """Make sure the environment never enables extended logging implicitly."""
    monkeypatch.delenv("DD_COMPUTE_EXTENDED_LOGGING", raising=False)


# ========== Client Fixtures ==========


@pytest.fixture
def make_client(compute_config):
    """Factory creating a client backed by a recording mock transport.

    Args (of the returned factory):
        handler: Request handler for the mock transport
        organization_id: If set, pre-populate the account cache with this organization Id

    Returns:
        Tuple of (client, transport)
    """
    clients = []

    def factory(handler, organization_id: Optional[str] = TEST_ORGANIZATION_ID):
        transport = MockTransport(handler)
        client = ComputeClient(compute_config, transport=transport)
        if organization_id is not None:
            client._state.set_account(Account(organization_id=organization_id))
        clients.append(client)
        return client, transport

    yield factory

    for client in clients:
        client.close()


# ========== Pytest Configuration ==========


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")
