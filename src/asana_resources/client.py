import asyncio
import logging
import os
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx
from dotenv import load_dotenv

DEFAULT_BASE_URL = "https://app.asana.com/api/1.0"


class AsanaClientError(Exception):
    """Base error for client failures."""


class AsanaHTTPError(AsanaClientError):
    def __init__(
        self,
        *,
        status_code: int,
        method: str,
        url: str,
        message: str,
        response_json: Optional[Dict[str, Any]] = None,
        response_text: Optional[str] = None,
    ):
        super().__init__(f"{status_code} {method} {url}: {message}")
        self.status_code = status_code
        self.method = method
        self.url = url
        self.message = message
        self.response_json = response_json
        self.response_text = response_text


class AsanaParseError(AsanaClientError):
    pass


class AsanaModelValidationError(AsanaClientError):
    pass


@dataclass(frozen=True)
class RetryConfig:
    max_retries: int = 2  # total extra attempts
    backoff_base_seconds: float = 0.3  # 0.3, 0.6, 1.2...
    retry_statuses: frozenset[int] = frozenset({500, 502, 503, 504})
    retry_on_429: bool = True
    max_retry_after_seconds: float = 60.0


def _option_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(str(v) for v in value)
    return str(value)


def split_options(
    options: Optional[Dict[str, Any]],
) -> tuple[Dict[str, str], Dict[str, str]]:
    """
    Translate request I/O options into (query params, headers).
    `headers` is passed through; every other key becomes `opt_<key>`,
    e.g. {"fields": ["name", "color"]} -> {"opt_fields": "name,color"}.
    """
    query: Dict[str, str] = {}
    headers: Dict[str, str] = {}
    for key, value in (options or {}).items():
        if value is None:
            continue
        if key == "headers":
            headers.update({str(k): str(v) for k, v in value.items()})
            continue
        query[f"opt_{key}"] = _option_value(value)
    return query, headers


class AsanaClient:
    """
    Shared HTTP client for the Asana REST API.
    - Handles auth, base URL, timeouts, retries
    - Wraps request bodies in the {"data": ...} envelope
    - Returns the raw response envelope; resources own the parsing
    """

    def __init__(
        self,
        *,
        access_token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 10.0,
        retry: Optional[RetryConfig] = None,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        base_url = (base_url or "").rstrip("/")
        access_token = access_token or ""

        if not base_url:
            raise ValueError("base_url must be provided.")
        if not access_token:
            raise ValueError("access_token must be provided.")

        self.base_url = base_url
        self.timeout_seconds = timeout_seconds
        self.retry = retry if retry is not None else RetryConfig()
        self.log = logger or logging.getLogger("asana_resources.client")

        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {access_token}",
                "Accept": "application/json",
            },
            timeout=timeout_seconds,
        )

    @classmethod
    def from_env(cls, **kwargs) -> "AsanaClient":
        load_dotenv()
        base_url = os.getenv("ASANA_BASE_URL", "").strip() or DEFAULT_BASE_URL
        access_token = os.getenv("ASANA_ACCESS_TOKEN", "").strip()
        return cls(access_token=access_token, base_url=base_url, **kwargs)

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "AsanaClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        body: Optional[Dict[str, Any]] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Core request method.
        - Retries on transient failures (network/timeouts + 5xx; 429 honoring Retry-After)
        - Raises AsanaHTTPError on non-2xx HTTP responses
        - Raises AsanaClientError on network/timeout errors after retries
        - Raises AsanaParseError if response isn't a JSON object
        - Returns the parsed envelope on success ({} for empty bodies)
        """
        method = method.upper()
        start = time.perf_counter()

        opt_params, headers = split_options(options)
        query = {**(params or {}), **opt_params} or None
        json_body = {"data": body} if body is not None else None

        attempt = 0

        while True:
            try:
                resp = await self.http.request(
                    method, path, params=query, json=json_body, headers=headers or None
                )
                duration_ms = int((time.perf_counter() - start) * 1000)

                self.log.debug(
                    "asana.request",
                    extra={
                        "method": method,
                        "path": path,
                        "status": resp.status_code,
                        "duration_ms": duration_ms,
                        "attempt": attempt,
                    },
                )

                delay = self._retry_delay(resp, attempt)
                if delay is not None:
                    await asyncio.sleep(delay)
                    attempt += 1
                    continue

                if resp.status_code < 200 or resp.status_code >= 300:
                    raise self._to_http_error(resp, method=method)

                return self._safe_json(resp)

            except (httpx.ConnectError, httpx.ReadTimeout, httpx.ConnectTimeout) as exc:
                if attempt < self.retry.max_retries:
                    await asyncio.sleep(self.retry.backoff_base_seconds * (2**attempt))
                    attempt += 1
                    continue
                raise AsanaClientError(
                    f"Network/timeout error calling {method} {path}: {exc}"
                ) from exc

            except httpx.HTTPError as exc:
                # Other httpx exceptions (rare) - do not blindly retry
                raise AsanaClientError(
                    f"HTTPX error calling {method} {path}: {exc}"
                ) from exc

    def _retry_delay(self, resp: httpx.Response, attempt: int) -> Optional[float]:
        if attempt >= self.retry.max_retries:
            return None
        if resp.status_code == 429 and self.retry.retry_on_429:
            retry_after = resp.headers.get("Retry-After")
            try:
                seconds = float(retry_after) if retry_after else None
            except ValueError:
                seconds = None
            if seconds is None:
                seconds = self.retry.backoff_base_seconds * (2**attempt)
            return min(max(seconds, 0.0), self.retry.max_retry_after_seconds)
        if resp.status_code in self.retry.retry_statuses:
            return self.retry.backoff_base_seconds * (2**attempt)
        return None

    def _safe_json(self, resp: httpx.Response) -> Dict[str, Any]:
        # 204 No Content, etc.
        if not resp.content:
            return {}

        try:
            data = resp.json()
        except Exception as exc:
            snippet = (resp.text or "")[:500]
            raise AsanaParseError(
                f"Expected JSON from {resp.request.method} "
                f"{resp.request.url}, got non-JSON body snippet: "
                f"{snippet!r}"
            ) from exc

        if not isinstance(data, dict):
            raise AsanaParseError(
                f"Expected top-level JSON object from "
                f"{resp.request.method} {resp.request.url}, "
                f"got {type(data).__name__}"
            )
        return data

    def _to_http_error(self, resp: httpx.Response, *, method: str) -> AsanaHTTPError:
        url = str(resp.request.url)
        response_json: Optional[Dict[str, Any]] = None
        response_text: Optional[str] = None
        message = resp.reason_phrase or "request failed"

        try:
            parsed = resp.json()
            if isinstance(parsed, dict):
                response_json = parsed
                errors = parsed.get("errors")
                if isinstance(errors, list) and errors and isinstance(errors[0], dict):
                    message = errors[0].get("message") or message
        except Exception:
            response_text = (resp.text or "")[:500]

        return AsanaHTTPError(
            status_code=resp.status_code,
            method=method,
            url=url,
            message=message,
            response_json=response_json,
            response_text=response_text,
        )

    async def get(
        self,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        return await self.request("GET", path, params=params, options=options)

    async def post(
        self,
        path: str,
        *,
        body: Optional[Dict[str, Any]] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        return await self.request("POST", path, body=body or {}, options=options)

    async def put(
        self,
        path: str,
        *,
        body: Optional[Dict[str, Any]] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        return await self.request("PUT", path, body=body or {}, options=options)

    async def delete(
        self, path: str, *, options: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        return await self.request("DELETE", path, options=options)
