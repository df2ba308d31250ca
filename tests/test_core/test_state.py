"""
Tests for ddcompute client state management.

This module tests the lock-guarded client configuration, the cached account
identity and concurrent use of a single client.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from ddcompute.core.exceptions import APIError, NetworkError
from ddcompute.core.retry import RetryPolicy
from ddcompute.core.state import ClientState
from ddcompute.domains.account import Account
from fixtures.mock_responses import (
    ACCOUNT_XML,
    NETWORK_DOMAINS_JSON,
    ORGANIZATION_ID,
    STATUS_XML_ERROR,
)
from fixtures.transport import fail_with, respond_with


def account_requests(transport):
    return [r for r in transport.requests_made if r.url.path.endswith("/oec/0.9/myaccount")]


class TestClientState:
    """Test ClientState class."""

    def test_client_state_creation(self):
        """Test creating ClientState with defaults."""
        state = ClientState()

        assert state.retry_policy == RetryPolicy()
        assert state.extended_logging is False
        assert state.account is None

    def test_configure_retry(self):
        state = ClientState()

        state.configure_retry(2, 0.5)

        assert state.snapshot() == (RetryPolicy(max_retry_count=2, retry_delay=0.5), False)

    def test_set_extended_logging(self):
        state = ClientState()

        state.set_extended_logging(True)

        assert state.is_extended_logging_enabled() is True
        assert state.snapshot()[1] is True

    def test_reset_clears_account_only(self):
        """Test that reset() clears cached data but keeps configuration."""
        state = ClientState(extended_logging=True)
        state.configure_retry(1, 0)
        state.set_account(Account(organization_id="org-1"))

        state.reset()

        assert state.get_account() is None
        assert state.is_extended_logging_enabled() is True
        assert state.retry_policy.max_retry_count == 1


class TestAccountCache:
    """Test the cached account identity."""

    def test_account_fetched_once(self, make_client):
        """Test that the account is fetched on first use and then served from cache."""
        client, transport = make_client(respond_with(200, ACCOUNT_XML), organization_id=None)

        first = client.get_account()
        second = client.get_account()

        assert first is second
        assert first.organization_id == ORGANIZATION_ID
        assert len(account_requests(transport)) == 1

    def test_reset_forces_refetch(self, make_client):
        client, transport = make_client(respond_with(200, ACCOUNT_XML), organization_id=None)

        client.get_account()
        client.reset()
        client.get_account()

        assert len(account_requests(transport)) == 2

    def test_organization_id_resolved_before_scoped_request(self, make_client):
        def handler(request):
            if request.url.path.endswith("/myaccount"):
                return 200, ACCOUNT_XML
            return 200, NETWORK_DOMAINS_JSON

        client, transport = make_client(handler, organization_id=None)

        client.list_network_domains()

        assert len(transport.requests_made) == 2
        assert transport.requests_made[1].url.path == (
            f"/caas/2.2/{ORGANIZATION_ID}/network/networkDomain"
        )

    def test_failed_fetch_is_not_cached(self, make_client):
        responses = [(400, STATUS_XML_ERROR), (200, ACCOUNT_XML)]

        def handler(request):
            return responses.pop(0)

        client, transport = make_client(handler, organization_id=None)

        with pytest.raises(APIError):
            client.get_account()

        assert client.get_account().organization_id == ORGANIZATION_ID
        assert len(account_requests(transport)) == 2

    def test_network_failure_is_not_cached(self, make_client):
        client, _ = make_client(fail_with(), organization_id=None)

        with pytest.raises(NetworkError):
            client.get_account()

        assert client._state.get_account() is None


class TestConcurrency:
    """Test concurrent use of a single client."""

    def test_concurrent_account_reads(self, make_client):
        client, transport = make_client(respond_with(200, ACCOUNT_XML), organization_id=None)

        with ThreadPoolExecutor(max_workers=8) as executor:
            organization_ids = list(
                executor.map(lambda _: client.get_organization_id(), range(32))
            )

        assert set(organization_ids) == {ORGANIZATION_ID}
        # Concurrent cache misses may each fetch, but never more than once per caller.
        assert 1 <= len(account_requests(transport)) <= 32

    def test_configuration_changes_during_requests(self, make_client):
        client, transport = make_client(respond_with(200, NETWORK_DOMAINS_JSON))

        def toggle(index):
            if index % 2:
                client.enable_extended_logging()
            else:
                client.disable_extended_logging()
            client.configure_retry(index % 3, 0)
            return client.get_retry_policy()

        def list_domains(_):
            return [domain.name for domain in client.list_network_domains().domains]

        with ThreadPoolExecutor(max_workers=8) as executor:
            policy_futures = [executor.submit(toggle, index) for index in range(20)]
            result_futures = [executor.submit(list_domains, index) for index in range(20)]
            policies = [future.result() for future in policy_futures]
            results = [future.result() for future in result_futures]

        assert all(isinstance(policy, RetryPolicy) for policy in policies)
        assert all(names == ["Domain 1", "Domain 2"] for names in results)
        assert len(transport.requests_made) == 20
