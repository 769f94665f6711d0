# storefront_search/clients/graphql_client.py

"""Minimal GraphQL-over-HTTP client shared by both storefront endpoints."""

import logging
import time
from typing import Any

from curl_cffi import requests as curl_requests

from storefront_search.config.settings import Settings


class GraphQLError(Exception):
    """Base class for failures talking to a GraphQL endpoint."""


class ConfigurationError(GraphQLError):
    """Raised when an endpoint URL has not been configured."""


class GraphQLTransportError(GraphQLError):
    """Raised when the HTTP exchange itself fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GraphQLResponseError(GraphQLError):
    """Raised when the endpoint answers with errors and no data."""

    def __init__(
        self,
        message: str,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message)
        self.errors = errors or []


class GraphQLClient:
    """POST GraphQL documents with retries and an optional bearer token."""

    def __init__(self) -> None:
        self.logger = logging.getLogger("storefront_search.graphql")
        self.settings = Settings()
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )
        self._request_timeout: int = self.settings.REQUEST_TIMEOUT

    def _build_headers(self, token: str | None) -> dict[str, str]:
        """Default JSON headers plus the bearer token when one is given."""
        headers = dict(self.settings.DEFAULT_HEADERS)
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _parse_body(
        self, resp: curl_requests.Response,
    ) -> dict[str, Any]:
        """Decode a 200 response and reject error-only payloads."""
        try:
            body = resp.json()
        except ValueError as exc:
            self.logger.error(
                "Non-JSON GraphQL response: %.200s", resp.text,
            )
            raise GraphQLResponseError(
                "Invalid JSON in GraphQL response"
            ) from exc

        if not isinstance(body, dict):
            raise GraphQLResponseError(
                "Unexpected GraphQL response shape"
            )

        errors: list[dict[str, Any]] = body.get("errors") or []
        if errors:
            messages = "; ".join(
                str(e.get("message", e)) for e in errors
            )
            if body.get("data") is None:
                self.logger.error("GraphQL error: %s", messages)
                raise GraphQLResponseError(messages, errors)
            self.logger.warning(
                "GraphQL partial errors: %s", messages,
            )
        return body

    def post(
        self,
        url: str,
        query: str,
        variables: dict[str, Any] | None = None,
        token: str | None = None,
    ) -> dict[str, Any]:
        """Send a query/variables pair and return the decoded body.

        Transport exceptions and HTTP 429/5xx are retried up to
        ``MAX_RETRIES`` times with a linear backoff.  Any other non-200
        status fails straight away.

        Raises:
            ConfigurationError: *url* is empty.
            GraphQLTransportError: the request never got a 200.
            GraphQLResponseError: the 200 body is unusable.
        """
        if not url:
            raise ConfigurationError("URL not configured")

        headers = self._build_headers(token)
        payload: dict[str, Any] = {
            "query": query,
            "variables": variables or {},
        }

        last_error: GraphQLTransportError | None = None
        for attempt in range(self.settings.MAX_RETRIES):
            try:
                resp = self.session.post(
                    url,
                    headers=headers,
                    json=payload,
                    timeout=self._request_timeout,
                )
            except Exception as exc:
                self.logger.warning(
                    "Request error on attempt %d: %s",
                    attempt + 1,
                    exc,
                    exc_info=True,
                )
                last_error = GraphQLTransportError(str(exc))
                last_error.__cause__ = exc
                time.sleep(self.settings.REQUEST_DELAY * (attempt + 1))
                continue

            if resp.status_code == 200:
                return self._parse_body(resp)

            self.logger.warning(
                "HTTP %d from %s on attempt %d",
                resp.status_code,
                url,
                attempt + 1,
            )
            last_error = GraphQLTransportError(
                f"HTTP {resp.status_code}", resp.status_code,
            )
            if resp.status_code not in self.settings.RETRYABLE_STATUS_CODES:
                break
            time.sleep(self.settings.REQUEST_DELAY * (attempt + 1))

        if last_error is None:
            last_error = GraphQLTransportError("No attempts made")
        self.logger.error(
            "GraphQL request to %s failed: %s", url, last_error,
        )
        raise last_error
