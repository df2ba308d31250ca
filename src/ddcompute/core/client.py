"""
ddcompute - API Client Engine

This module provides the request execution engine shared by every resource
operation: request construction for both API generations, bounded retry of
transport failures, extended request/response logging and the cached account
identity that organization-scoped operations depend on.
"""

import json
import logging
import os
import ssl
from typing import TYPE_CHECKING, Any, Optional

import certifi
import httpx

from ..shared.constants import ENV_EXTENDED_LOGGING
from .exceptions import AuthenticationError, ResponseReadError
from .models import ApiVersion, ComputeConfig
from .request_builder import RequestBuilder
from .retry import RetryPolicy, send_with_retry
from .state import ClientState

if TYPE_CHECKING:
    from ..domains.account import Account

logger = logging.getLogger("ddcompute")

_METHODS_WITHOUT_BODY = ("GET", "HEAD")


class RequestResponseLogger:
    """Logs API requests and responses with sensitive header redaction."""

    def __init__(self, logger: logging.Logger):
        """Initialize request/response logger.

        Args:
            logger: Logger instance to use for logging
        """
        self.logger = logger

    def log_request(
        self,
        method: str,
        url: str,
        headers: Optional[dict] = None,
        body: Optional[bytes] = None,
    ):
        """Log API request details.

        The body is included for methods other than GET and HEAD.

        Args:
            method: HTTP method
            url: Request URL
            headers: Request headers
            body: Serialized request payload
        """
        safe_headers = {}
        if headers:
            for key, value in headers.items():
                if key.lower() == "authorization":
                    safe_headers[key] = "[REDACTED]"
                else:
                    safe_headers[key] = value

        log_data: dict[str, Any] = {
            "request": {
                "method": method,
                "url": url,
                "headers": safe_headers,
            }
        }
        if method.upper() not in _METHODS_WITHOUT_BODY:
            log_data["request"]["body"] = body.decode("utf-8", errors="replace") if body else ""

        self.logger.info(f"API Request: {json.dumps(log_data)}")

    def log_response(self, url: str, status_code: int, body: Optional[bytes] = None):
        """Log API response status and body.

        Args:
            url: Request URL
            status_code: HTTP status code
            body: Response body
        """
        log_data = {
            "response": {
                "url": url,
                "status_code": status_code,
                "success": 200 <= status_code < 300,
                "body": body.decode("utf-8", errors="replace") if body else "",
            }
        }

        level = logging.INFO if log_data["response"]["success"] else logging.WARNING
        self.logger.log(level, f"API Response: {json.dumps(log_data)}")


request_logger = RequestResponseLogger(logger)


class BaseComputeClient:
    """Request execution engine for the compute API.

    Thread-safe: a single instance may be shared by concurrent callers. The
    retry policy, extended-logging flag and cached account are guarded by one
    lock that is never held across network I/O.
    """

    def _create_ssl_context(self, verify_ssl: bool) -> ssl.SSLContext:
        """
        Create SSL context with security hardening.

        Args:
            verify_ssl: Whether to verify SSL certificates

        Returns:
            Configured SSL context
        """
        if not verify_ssl:
            logger.warning(
                "SSL CERTIFICATE VERIFICATION IS DISABLED!\n"
                "Connection is vulnerable to Man-in-the-Middle (MITM) attacks."
            )
            context = ssl.create_default_context()
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
            return context

        context = ssl.create_default_context(cafile=certifi.where())
        context.check_hostname = True
        context.verify_mode = ssl.CERT_REQUIRED

        # Enforce TLS 1.2+
        context.minimum_version = ssl.TLSVersion.TLSv1_2

        logger.debug("SSL verification enabled with TLS 1.2+ enforcement")
        return context

    def __init__(self, config: ComputeConfig, transport: Optional[httpx.BaseTransport] = None):
        """Initialize compute API client.

        Args:
            config: Client configuration
            transport: Optional httpx transport (e.g. ``httpx.MockTransport`` in tests)
        """
        self.config = config
        self.base_address = config.base_address

        self._state = ClientState(extended_logging=ENV_EXTENDED_LOGGING in os.environ)
        self._request_builder = RequestBuilder(config.base_address, config.username, config.password)

        self._http = httpx.Client(
            verify=self._create_ssl_context(config.verify_ssl),
            timeout=httpx.Timeout(config.timeout),
            transport=transport,
        )

        logger.debug(
            f"Initialized compute API client for {self.base_address} "
            f"(SSL verification: {'enabled' if config.verify_ssl else 'DISABLED'})"
        )

    def close(self):
        """Close the underlying HTTP client."""
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    # ========== Configuration ==========

    def reset(self):
        """Clear all cached data (currently the account details)."""
        self._state.reset()

    def enable_extended_logging(self):
        """Enable logging of HTTP requests and responses."""
        self._state.set_extended_logging(True)

    def disable_extended_logging(self):
        """Disable logging of HTTP requests and responses."""
        self._state.set_extended_logging(False)

    def is_extended_logging_enabled(self) -> bool:
        """Check whether HTTP requests and responses are being logged.

        Returns:
            True if extended logging is enabled
        """
        return self._state.is_extended_logging_enabled()

    def configure_retry(self, max_retry_count: int, retry_delay: float):
        """Configure retry of transport-level failures.

        Args:
            max_retry_count: Retries after the first attempt; 0 (the default) disables retry
            retry_delay: Seconds to wait between attempts; negative values become 5 seconds
        """
        self._state.configure_retry(max_retry_count, retry_delay)

    def get_retry_policy(self) -> RetryPolicy:
        """Get the current retry policy.

        Returns:
            Retry count and delay applied to transport failures
        """
        retry_policy, _ = self._state.snapshot()
        return retry_policy

    # ========== Identity ==========

    def get_account(self) -> "Account":
        """Get the account associated with the client's credentials.

        The account is fetched on first use and cached until ``reset()``.
        Concurrent cache misses each perform their own fetch.

        Raises:
            AuthenticationError: If the credentials are rejected
            ComputeError: If the account could not be retrieved
        """
        account = self._state.get_account()
        if account is not None:
            return account

        account = self._fetch_account()
        self._state.set_account(account)

        return account

    def get_organization_id(self) -> str:
        """Get the Id of the organization associated with the client's credentials.

        Returns:
            Organization Id (from the cached account)

        Raises:
            AuthenticationError: If the credentials are rejected
            ComputeError: If the account could not be retrieved
        """
        return self.get_account().organization_id

    def _fetch_account(self) -> "Account":
        raise NotImplementedError

    # ========== Requests ==========

    def new_request_v1(self, relative_uri: str, method: str, body: Any = None) -> httpx.Request:
        """Create a request for the legacy (v1, XML) API."""
        return self._request_builder.build(ApiVersion.V1, relative_uri, method, body)

    def new_request_v22(self, relative_uri: str, method: str, body: Any = None) -> httpx.Request:
        """Create a request for the current (v2.2, JSON) API."""
        return self._request_builder.build(ApiVersion.V22, relative_uri, method, body)

    def execute_request(self, request: httpx.Request) -> tuple[bytes, int]:
        """Perform a request and return the entire response body with its status code.

        HTTP error statuses are returned, not raised; only transport failures
        are retried.

        Args:
            request: Request to perform

        Returns:
            Tuple of (response body, HTTP status code)

        Raises:
            NetworkError: If the request could not be sent (after any retries)
            ResponseReadError: If the response body could not be read
        """
        retry_policy, extended_logging = self._state.snapshot()
        method = request.method
        url = str(request.url)

        if extended_logging:
            request_logger.log_request(method, url, dict(request.headers), request.content)

        response = send_with_retry(
            lambda: self._http.send(request, stream=True),
            method,
            url,
            retry_policy,
            extended_logging,
        )

        try:
            response_body = response.read()
        except (httpx.HTTPError, httpx.StreamError) as e:
            raise ResponseReadError(url, e) from e
        finally:
            response.close()

        status_code = response.status_code

        if extended_logging:
            request_logger.log_response(url, status_code, response_body)

        return response_body, status_code

    def _invoke(
        self,
        api_version: ApiVersion,
        relative_uri: str,
        method: str,
        body: Any = None,
    ) -> tuple[bytes, int]:
        """Build and execute a request, rejecting invalid credentials.

        Raises:
            AuthenticationError: If the API responded with HTTP 401
        """
        if api_version is ApiVersion.V1:
            request = self.new_request_v1(relative_uri, method, body)
        else:
            request = self.new_request_v22(relative_uri, method, body)

        response_body, status_code = self.execute_request(request)

        if status_code == 401:
            raise AuthenticationError()

        return response_body, status_code
