"""Shared single-attempt HTTP client wrapper with typed failures."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional

import requests
from requests import Response, Session
from requests.exceptions import JSONDecodeError, RequestException, Timeout

logger = logging.getLogger(__name__)


class HTTPClientError(RuntimeError):
    """Raised when the HTTP client cannot satisfy a request."""

    def __init__(self, message: str, *, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url


class TransportError(HTTPClientError):
    """Connection refused/reset or timed out before a response arrived."""

    def __init__(self, message: str, *, url: Optional[str] = None, timeout: bool = False) -> None:
        super().__init__(message, url=url)
        self.timeout = timeout


class HTTPStatusError(HTTPClientError):
    """The server answered with a non-2xx status."""

    def __init__(self, message: str, *, status_code: int, url: Optional[str] = None) -> None:
        super().__init__(message, url=url)
        self.status_code = status_code


class DecodeError(HTTPClientError):
    """The response body is not JSON or does not have the expected shape."""


@dataclass(frozen=True)
class HTTPClientConfig:
    """Configuration for the shared HTTP client."""

    base_url: str
    connect_timeout: float = 30.0
    read_timeout: float = 30.0

    @property
    def timeout(self) -> tuple[float, float]:
        return (self.connect_timeout, self.read_timeout)


class HTTPClient:
    """Small HTTP client issuing exactly one GET per call."""

    def __init__(
        self,
        config: HTTPClientConfig,
        session: Optional[Session] = None,
    ) -> None:
        self._config = config
        self._session = session or requests.Session()

    @property
    def base_url(self) -> str:
        return self._config.base_url.rstrip("/")

    def get_json(self, path: str) -> Dict[str, Any]:
        url = self._build_url(path)
        logger.debug("GET %s", url)
        try:
            response = self._session.get(url, timeout=self._config.timeout)
        except Timeout as exc:
            raise TransportError(f"Request to {url} timed out: {exc}", url=url, timeout=True) from exc
        except RequestException as exc:
            raise TransportError(f"Request to {url} failed: {exc}", url=url) from exc

        return self._handle_response(response, url)

    def close(self) -> None:
        self._session.close()

    def _build_url(self, path: str) -> str:
        suffix = path.lstrip("/")
        return f"{self.base_url}/{suffix}"

    @staticmethod
    def _handle_response(response: Response, url: str) -> Dict[str, Any]:
        status = response.status_code
        if status >= 500:
            raise HTTPStatusError(f"Server error {status}", status_code=status, url=url)
        if not 200 <= status < 300:
            raise HTTPStatusError(
                f"HTTP error {status}: {response.text[:200]}", status_code=status, url=url
            )

        try:
            payload = response.json(parse_float=Decimal)
        except (JSONDecodeError, ValueError) as exc:
            raise DecodeError(f"Invalid JSON response from {url}", url=url) from exc
        except RecursionError as exc:
            raise DecodeError(f"JSON response from {url} is nested too deeply", url=url) from exc

        if not isinstance(payload, dict):
            raise DecodeError(
                f"Expected a JSON object from {url}, got {type(payload).__name__}", url=url
            )
        return payload
