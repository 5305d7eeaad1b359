import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from .core.config import Configuration
from .core.errors import (
    GatepayClientError,
    GatepayHTTPError,
    GatepayModelValidationError,
    GatepayParseError,
)
from .core.observability import log_event

T = TypeVar("T", bound=BaseModel)

USER_AGENT = "gatepay-sdk-python"

# Methods that may be replayed after the server could have seen the request.
IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "OPTIONS", "PUT", "DELETE"})


@dataclass(frozen=True)
class RetryConfig:
    max_retries: int = 2  # total extra attempts
    backoff_base_seconds: float = 0.3  # 0.3, 0.6, 1.2...
    retry_statuses: frozenset[int] = frozenset({502, 503, 504})
    retry_on_429: bool = False


class GatepayClient:
    """
    Low-level request executor for the Gatepay JSON API.
    - Bound to one immutable Configuration for its whole life
    - Handles bearer auth, base path, timeouts and socket-level retries
    - Returns raw JSON payloads or optional Pydantic-validated models
    - No business logic; the API classes own the endpoints
    """

    def __init__(
        self,
        *,
        configuration: Configuration,
        timeout_seconds: float = 10.0,
        retry: Optional[RetryConfig] = None,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        self.configuration = configuration
        self.timeout_seconds = timeout_seconds
        self.retry = retry if retry is not None else RetryConfig()
        self.log = logger or logging.getLogger("gatepay_sdk.client")

        # A shared pool is injected by the Gatepay facade and closed there.
        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(timeout=timeout_seconds)

    @property
    def base_path(self) -> str:
        return self.configuration.base_path

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "GatepayClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def url_for(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.configuration.base_path}/{path.lstrip('/')}"

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.configuration.access_token}",
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        }

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
        operation: Optional[str] = None,
    ) -> Any:
        """
        Core request method.
        - Retries network failures that happened before a request was sent
        - Retries timeouts and 502/503/504 (optionally 429) on idempotent methods
        - Raises GatepayHTTPError on non-2xx HTTP responses
        - Raises GatepayClientError on network/timeout errors after retries
        - Raises GatepayParseError if response isn't valid JSON
        - Returns parsed JSON (object or array) on success
        """
        method = method.upper()
        url = self.url_for(path)
        replayable = method in IDEMPOTENT_METHODS
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        start = time.perf_counter()
        attempt = 0

        while True:
            try:
                resp = await self.http.request(
                    method, url, params=params, json=json, headers=self._headers()
                )
            except (httpx.ConnectError, httpx.ConnectTimeout) as exc:
                if attempt < self.retry.max_retries:
                    await self._backoff(attempt, method, path)
                    attempt += 1
                    continue
                self._log_call(operation, method, path, start, attempt, exc=exc)
                raise GatepayClientError(
                    f"Network/timeout error calling {method} {url}: {exc}"
                ) from exc
            except httpx.ReadTimeout as exc:
                if replayable and attempt < self.retry.max_retries:
                    await self._backoff(attempt, method, path)
                    attempt += 1
                    continue
                self._log_call(operation, method, path, start, attempt, exc=exc)
                raise GatepayClientError(
                    f"Network/timeout error calling {method} {url}: {exc}"
                ) from exc
            except httpx.HTTPError as exc:
                # Other httpx exceptions - do not blindly retry
                self._log_call(operation, method, path, start, attempt, exc=exc)
                raise GatepayClientError(
                    f"HTTPX error calling {method} {url}: {exc}"
                ) from exc

            if replayable and (
                resp.status_code in self.retry.retry_statuses
                or (self.retry.retry_on_429 and resp.status_code == 429)
            ):
                if attempt < self.retry.max_retries:
                    await self._backoff(attempt, method, path)
                    attempt += 1
                    continue

            self._log_call(
                operation, method, path, start, attempt, status=resp.status_code
            )

            if resp.status_code < 200 or resp.status_code >= 300:
                raise self._to_http_error(resp, method=method)

            return self._safe_json(resp)

    async def _backoff(self, attempt: int, method: str, path: str) -> None:
        delay = self.retry.backoff_base_seconds * (2**attempt)
        self.log.debug(
            "op.retry",
            extra={"method": method, "endpoint": path, "attempt": attempt + 1},
        )
        await asyncio.sleep(delay)

    def _log_call(
        self,
        operation: Optional[str],
        method: str,
        path: str,
        start: float,
        attempt: int,
        *,
        status: Optional[int] = None,
        exc: Optional[BaseException] = None,
    ) -> None:
        # structured-ish log without secrets
        fields: Dict[str, Any] = {
            "operation": operation,
            "method": method,
            "endpoint": path,
            "status": status if exc is None else "exception",
            "duration_ms": int((time.perf_counter() - start) * 1000),
            "attempt": attempt,
        }
        if exc is not None:
            fields["error_type"] = type(exc).__name__
        log_event("op_call", **fields)

    def _safe_json(self, resp: httpx.Response) -> Any:
        # Handle empty responses (204 No Content, etc.)
        if not resp.content:
            return {}

        try:
            data = resp.json()
        except ValueError as exc:
            snippet = (resp.text or "")[:500]
            raise GatepayParseError(
                f"Expected JSON from {resp.request.method} "
                f"{resp.request.url}, got non-JSON body snippet: "
                f"{snippet!r}"
            ) from exc

        if not isinstance(data, (dict, list)):
            raise GatepayParseError(
                f"Expected JSON object or array from "
                f"{resp.request.method} {resp.request.url}, "
                f"got {type(data).__name__}"
            )
        return data

    def _to_http_error(self, resp: httpx.Response, *, method: str) -> GatepayHTTPError:
        url = str(resp.request.url)
        # Try JSON first; fall back to text snippet.
        response_json: Optional[Dict[str, Any]] = None
        response_text: Optional[str] = None
        message = resp.reason_phrase or "request failed"

        try:
            parsed = resp.json()
            if isinstance(parsed, dict):
                response_json = parsed
                message = parsed.get("message") or parsed.get("error") or message
        except ValueError:
            response_text = (resp.text or "")[:500]

        return GatepayHTTPError(
            status_code=resp.status_code,
            method=method,
            url=url,
            message=str(message),
            response_json=response_json,
            response_text=response_text,
        )

    async def get(
        self,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        operation: Optional[str] = None,
    ) -> Any:
        return await self.request("GET", path, params=params, operation=operation)

    async def post(
        self, path: str, *, json: Any, operation: Optional[str] = None
    ) -> Any:
        return await self.request("POST", path, json=json, operation=operation)

    async def request_model(
        self, model: Type[T], method: str, path: str, **kwargs: Any
    ) -> T:
        payload = await self.request(method, path, **kwargs)
        return validate_model(model, payload)


def validate_model(model: Type[T], payload: Any) -> T:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise GatepayModelValidationError(
            f"Response did not match model {model.__name__}: {exc}"
        ) from exc


__all__ = [
    "GatepayClient",
    "RetryConfig",
    "IDEMPOTENT_METHODS",
    "USER_AGENT",
    "validate_model",
    "GatepayClientError",
    "GatepayHTTPError",
    "GatepayParseError",
    "GatepayModelValidationError",
]
