"""
API client: request building, execution and outcome classification.

Every command goes through the same pipeline:

    spec = client.build("GET", "/workspaces/{workspace_id}/productions/{production_id}",
                        path_params={"production_id": pid})
    result = client.execute(spec)     # Success | ClientFailure | ServerFailure | TransportFailure
    data = result.json()              # raises the matching HyError on failure

`client.call(...)` does all three in one step.
"""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple, Union
from urllib.parse import quote

import httpx

from . import __version__
from .config import DEFAULT_TIMEOUT
from .errors import (
    ApiClientError,
    ApiServerError,
    MalformedResponseError,
    TransportError,
)

logger = logging.getLogger(__name__)

SUCCESS_STATUSES = {200, 201, 202, 204}

Params = Union[Dict[str, Any], Iterable[Tuple[str, Any]], None]


@dataclass(frozen=True)
class RequestSpec:
    """One fully built HTTP request. Immutable once constructed."""
    method: str
    url: str
    headers: Tuple[Tuple[str, str], ...] = ()
    params: Tuple[Tuple[str, str], ...] = ()
    body: Any = None

    def content(self) -> Optional[bytes]:
        if self.body is None:
            return None
        return json.dumps(self.body).encode("utf-8")


# =============================================================================
# RESULTS
# =============================================================================

@dataclass(frozen=True)
class ApiResult(ABC):
    """Outcome of exactly one request."""
    ok = False

    @abstractmethod
    def raise_for_error(self) -> None:
        """Raise the HyError matching this outcome; no-op on success."""

    def json(self) -> Any:
        """Decoded body of a Success; raises the matching error otherwise."""
        self.raise_for_error()
        return None


@dataclass(frozen=True)
class Success(ApiResult):
    status_code: int = 200
    body: bytes = b""
    ok = True

    def raise_for_error(self) -> None:
        return None

    def json(self) -> Any:
        if not self.body.strip():
            return None
        try:
            return json.loads(self.body)
        except ValueError as e:
            raise MalformedResponseError(
                f"malformed response from API (status {self.status_code}): {e}"
            ) from e


@dataclass(frozen=True)
class ClientFailure(ApiResult):
    status_code: int = 400
    body: bytes = b""

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace").strip()

    def raise_for_error(self) -> None:
        raise ApiClientError(self.status_code, self.text)


@dataclass(frozen=True)
class ServerFailure(ApiResult):
    status_code: int = 500
    body: bytes = b""

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace").strip()

    def raise_for_error(self) -> None:
        raise ApiServerError(self.status_code, self.text)


@dataclass(frozen=True)
class TransportFailure(ApiResult):
    cause: Exception = field(default_factory=lambda: Exception("unknown transport error"))

    def raise_for_error(self) -> None:
        raise TransportError(self.cause)


def classify(status_code: int, body: bytes) -> ApiResult:
    """Map a status code to a result, before any attempt to decode the body."""
    if status_code in SUCCESS_STATUSES:
        return Success(status_code, body)
    if 400 <= status_code <= 499:
        return ClientFailure(status_code, body)
    # 5xx, plus anything the API never sends (1xx, 3xx, other 2xx)
    return ServerFailure(status_code, body)


# =============================================================================
# CLIENT
# =============================================================================

class ApiClient:
    """
    Workspace-scoped client for the Hypewell Studio REST API.

    Sends the API key as a bare Authorization header value. One network
    attempt per call, no retries.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        workspace_id: str = "",
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.workspace_id = workspace_id
        self.timeout = timeout
        self._http = httpx.Client(timeout=timeout, transport=transport)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def build(
        self,
        method: str,
        path: str,
        path_params: Optional[Dict[str, Any]] = None,
        params: Params = None,
        body: Any = None,
    ) -> RequestSpec:
        """
        Build a request for `path` relative to the API base URL.

        Args:
            method: HTTP method
            path: Path template, e.g. "/workspaces/{workspace_id}/assets/{asset_id}"
            path_params: Values substituted (percent-encoded) into the template;
                workspace_id is always available
            params: Query parameters; None and "" values are dropped
            body: JSON-serializable request body

        Returns:
            RequestSpec ready for execute()
        """
        values = {"workspace_id": self.workspace_id}
        values.update(path_params or {})
        encoded = {k: quote(str(v), safe="") for k, v in values.items()}
        url = self.base_url + path.format(**encoded)

        if isinstance(params, dict):
            params = params.items()
        query = tuple(
            (key, str(value).lower() if isinstance(value, bool) else str(value))
            for key, value in (params or ())
            if value is not None and value != ""
        )

        headers = [
            ("Authorization", self.api_key),
            ("Accept", "application/json"),
            ("User-Agent", f"hy/{__version__}"),
        ]
        if body is not None:
            headers.append(("Content-Type", "application/json"))

        return RequestSpec(
            method=method.upper(),
            url=url,
            headers=tuple(headers),
            params=query,
            body=body,
        )

    def execute(self, spec: RequestSpec) -> ApiResult:
        """Perform the request, read the whole body and classify the outcome."""
        logger.debug(f"{spec.method} {spec.url} params={dict(spec.params)}")
        try:
            response = self._http.request(
                spec.method,
                spec.url,
                params=list(spec.params),
                headers=list(spec.headers),
                content=spec.content(),
            )
        except httpx.TransportError as e:
            logger.debug(f"{spec.method} {spec.url} failed: {e!r}")
            return TransportFailure(e)

        logger.debug(f"{spec.method} {spec.url} -> {response.status_code}")
        return classify(response.status_code, response.content)

    def call(
        self,
        method: str,
        path: str,
        path_params: Optional[Dict[str, Any]] = None,
        params: Params = None,
        body: Any = None,
    ) -> Any:
        """Build, execute and decode; raises a HyError for any failure."""
        spec = self.build(method, path, path_params=path_params, params=params, body=body)
        return self.execute(spec).json()

    def upload_file(self, url: str, path: Path, content_type: str) -> ApiResult:
        """
        PUT raw file bytes to a pre-signed upload URL.

        The URL carries its own authorization, so no API key is sent. The
        file is streamed with an explicit Content-Length.
        """
        try:
            size = path.stat().st_size
            headers = {"Content-Type": content_type, "Content-Length": str(size)}
            logger.debug(f"PUT {url.split('?')[0]} ({size} bytes, {content_type})")
            with open(path, "rb") as f:
                response = self._http.put(url, content=f, headers=headers)
        except (httpx.TransportError, OSError) as e:
            return TransportFailure(e)
        logger.debug(f"PUT upload -> {response.status_code}")
        return classify(response.status_code, response.content)
