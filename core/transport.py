# =============================================================================
# core/transport.py  —  GraphQL Transport Client (httpx)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Sends one (document, variables, result_path) request to the content
#   service and returns the typed result object, or raises RequestFailed.
#
# CONTRACT:
#   - Authentication is transparent: ClientCredentialsAuth fetches and
#     refreshes a bearer token from the token endpoint on demand.
#   - Only the subtree at `result_path` is resolved and decoded.
#   - A null on the path is absence and returns None.
#   - Network errors, timeouts, non-2xx responses (content or token
#     endpoint), unparsable bodies, GraphQL errors on the path, and decode
#     errors all raise RequestFailed.  Callers cannot tell them apart.
#   - One attempt per call; the timeout is the only limit applied here.
#
# Nothing here logs above DEBUG.  The dispatcher owns the single error
# event per failed call.
# =============================================================================

import logging
import time
from typing import Any, Callable, Generator, Mapping, Optional, TypeVar

import httpx

from core.config import Settings
from core.errors import RequestFailed

logger = logging.getLogger(__name__)

T = TypeVar("T")

TOKEN_EXPIRY_SKEW_SECONDS = 30.0


class ClientCredentialsAuth(httpx.Auth):
    """OAuth2 client-credentials bearer auth (client_secret_post).

    The token is fetched lazily on the first request and again once it is
    within TOKEN_EXPIRY_SKEW_SECONDS of `expires_in`.
    """

    requires_response_body = True

    def __init__(
        self,
        token_url: str,
        client_id: str,
        client_secret: str,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.token_url = token_url
        self.client_id = client_id
        self._client_secret = client_secret
        self._clock = clock
        self._access_token: Optional[str] = None
        self._expires_at = 0.0

    @property
    def token_valid(self) -> bool:
        return self._access_token is not None and self._clock() < self._expires_at

    def _token_request(self) -> httpx.Request:
        return httpx.Request(
            "POST",
            self.token_url,
            data={
                "grant_type": "client_credentials",
                "client_id": self.client_id,
                "client_secret": self._client_secret,
            },
        )

    def _store_token(self, response: httpx.Response) -> None:
        response.raise_for_status()
        payload = response.json()
        token = payload.get("access_token") if isinstance(payload, dict) else None
        if not token:
            raise RequestFailed("Token endpoint returned no access_token")
        expires_in = payload.get("expires_in") or 0
        try:
            lifetime = float(expires_in)
        except (TypeError, ValueError):
            lifetime = 0.0
        self._access_token = token
        self._expires_at = self._clock() + max(lifetime - TOKEN_EXPIRY_SKEW_SECONDS, 0.0)
        logger.debug("Acquired access token from %s (expires in %ss)", self.token_url, expires_in)

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        if not self.token_valid:
            token_response = yield self._token_request()
            self._store_token(token_response)
        request.headers["Authorization"] = f"Bearer {self._access_token}"
        yield request


class GraphQLClient:
    """Blocking GraphQL-over-HTTP client for the content service."""

    def __init__(
        self,
        endpoint: str,
        auth: Optional[httpx.Auth] = None,
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.endpoint = endpoint
        self._client = client or httpx.Client(timeout=timeout)
        self._auth = auth

    @classmethod
    def from_settings(cls, settings: Settings, client: Optional[httpx.Client] = None) -> "GraphQLClient":
        auth = None
        if settings.auth_enabled:
            auth = ClientCredentialsAuth(settings.token_url, settings.client_id, settings.client_secret)
        return cls(settings.content_url, auth=auth, timeout=settings.request_timeout, client=client)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "GraphQLClient":
        return self

    def __exit__(self, exc_type, exc, traceback) -> None:
        self.close()

    def execute(
        self,
        document: str,
        variables: Mapping[str, Any],
        result_path: str,
        decode: Optional[Callable[[Any], T]] = None,
    ) -> Optional[T]:
        """Run one query and return the decoded subtree at `result_path`.

        Returns None when the service reports no data at that path.

        Raises:
            RequestFailed: on any transport, protocol or decoding problem.
        """
        body = self._post(document, variables)
        path = result_path.split(".")

        errors = body.get("errors") or []
        data = body.get("data")
        value = _resolve(data, path)

        if errors:
            if value is None or _errors_touch(errors, path):
                raise RequestFailed(f"GraphQL errors for {result_path}: {_error_messages(errors)}")
            logger.debug("Ignoring GraphQL errors outside %s: %s", result_path, _error_messages(errors))

        if value is None:
            return None
        if decode is None:
            return value
        try:
            return decode(value)
        except (TypeError, ValueError, KeyError, AttributeError) as exc:
            raise RequestFailed(f"Could not decode {result_path}: {exc}") from exc

    def _post(self, document: str, variables: Mapping[str, Any]) -> dict:
        payload = {"query": document, "variables": dict(variables)}
        extra = {"auth": self._auth} if self._auth is not None else {}
        try:
            response = self._client.post(self.endpoint, json=payload, **extra)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPError as exc:
            raise RequestFailed(f"{type(exc).__name__}: {exc}") from exc
        except ValueError as exc:
            raise RequestFailed(f"Response body is not JSON: {exc}") from exc

        if not isinstance(body, dict):
            raise RequestFailed(f"Response body must be a JSON object, got {type(body).__name__}")
        logger.debug("POST %s → %s", self.endpoint, response.status_code)
        return body


def _resolve(data: Any, path: list[str]) -> Any:
    current = data
    for segment in path:
        if not isinstance(current, dict):
            return None
        current = current.get(segment)
    return current


def _errors_touch(errors: list, path: list[str]) -> bool:
    for error in errors:
        error_path = error.get("path") if isinstance(error, dict) else None
        if not error_path:
            continue
        prefix = [str(segment) for segment in error_path[: len(path)]]
        if prefix == path[: len(prefix)]:
            return True
    return False


def _error_messages(errors: list) -> str:
    return "; ".join(
        str(error.get("message", error)) if isinstance(error, dict) else str(error)
        for error in errors
    )
