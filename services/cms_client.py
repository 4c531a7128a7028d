"""HTTP client for the CMS persistence API.

Wraps ``httpx.AsyncClient`` with:
- base URL + API prefix construction
- retry with exponential backoff (network / 5xx errors)
- circuit breaker after N consecutive failures
- request timing logs
- connection-pool lifecycle tied to FastAPI lifespan

Non-2xx responses surface the body's ``error`` field as
:class:`CMSClientError.detail`.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

import httpx

from config.settings import get_settings
from errors.exceptions import CircuitOpenError, CMSClientError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Module-level singleton
# ---------------------------------------------------------------------------
_client: CMSClient | None = None

# Retry / circuit breaker defaults
MAX_RETRIES = 3
RETRY_BASE_DELAY = 0.5  # seconds, doubles each attempt
CIRCUIT_OPEN_THRESHOLD = 5  # consecutive failures before circuit opens
CIRCUIT_RESET_TIMEOUT = 60  # seconds before attempting to close circuit


def _error_detail(response: httpx.Response) -> str:
    """The body's ``error`` field, or a generic status message."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"Save failed with status {response.status_code}"


class CMSClient:
    """Async HTTP client for the CMS API with retry and circuit breaker."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self._base_url = base_url or (
            f"{settings.cms_base_url.rstrip('/')}{settings.cms_api_prefix}"
        )
        self._timeout = timeout if timeout is not None else settings.cms_timeout
        self._transport = transport
        self._http: httpx.AsyncClient | None = None

        # Circuit breaker state
        self._consecutive_failures = 0
        self._circuit_opened_at: float | None = None

    # -- lifecycle -----------------------------------------------------------

    async def start(self) -> None:
        """Create the underlying ``httpx.AsyncClient`` connection pool."""
        if self._http is not None:
            return
        self._http = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(self._timeout),
            headers={"Content-Type": "application/json"},
            transport=self._transport,
            limits=httpx.Limits(
                max_connections=20,
                max_keepalive_connections=10,
                keepalive_expiry=30,
            ),
        )
        logger.info("CMSClient started — base_url=%s", self._base_url)

    async def close(self) -> None:
        """Gracefully close the connection pool."""
        if self._http is not None:
            await self._http.aclose()
            self._http = None
            logger.info("CMSClient closed")

    # -- public API ----------------------------------------------------------

    async def put(self, path: str, json_body: dict[str, Any] | None = None) -> Any:
        return await self._request_with_retry("PUT", path, json_body=json_body)

    async def put_entry_blocks(
        self, site_slug: str, entry_slug: str, blocks: list[dict[str, Any]]
    ) -> Any:
        """Persist the full block list of an entry.

        *blocks* are ``{id, blockType, blockData, position}`` dicts.
        """
        logger.info("Saving %d blocks to %s/%s", len(blocks), site_slug, entry_slug)
        return await self.put(f"/entries/{site_slug}/{entry_slug}", {"blocks": blocks})

    # -- circuit breaker -----------------------------------------------------

    @property
    def circuit_open(self) -> bool:
        """True when the backend is deemed unavailable."""
        if self._consecutive_failures < CIRCUIT_OPEN_THRESHOLD:
            return False
        if self._circuit_opened_at is not None:
            elapsed = time.monotonic() - self._circuit_opened_at
            if elapsed >= CIRCUIT_RESET_TIMEOUT:
                logger.info("Circuit breaker half-open — attempting trial request")
                return False
        return True

    def _record_success(self) -> None:
        if self._consecutive_failures > 0:
            logger.info(
                "CMS backend recovered after %d consecutive failures",
                self._consecutive_failures,
            )
        self._consecutive_failures = 0
        self._circuit_opened_at = None

    def _record_failure(self) -> None:
        self._consecutive_failures += 1
        if self._consecutive_failures >= CIRCUIT_OPEN_THRESHOLD and self._circuit_opened_at is None:
            self._circuit_opened_at = time.monotonic()
            logger.warning(
                "Circuit breaker OPEN — %d consecutive failures, will retry after %ds",
                self._consecutive_failures,
                CIRCUIT_RESET_TIMEOUT,
            )

    # -- retry logic ---------------------------------------------------------

    async def _request_with_retry(
        self,
        method: str,
        path: str,
        json_body: dict[str, Any] | None = None,
    ) -> Any:
        """Execute an HTTP request with exponential-backoff retry.

        Retries on network errors (``httpx.TransportError``) and 5xx.
        Does NOT retry on client errors (4xx).
        Raises :class:`CircuitOpenError` when circuit is open.
        """
        if self.circuit_open:
            raise CircuitOpenError()

        client = self._ensure_started()
        last_exc: Exception | None = None

        for attempt in range(1, MAX_RETRIES + 1):
            t0 = time.monotonic()
            try:
                response = await client.request(method, path, json=json_body)

                elapsed_ms = (time.monotonic() - t0) * 1000
                logger.info(
                    "%s %s → %d (%.0fms)",
                    method, path, response.status_code, elapsed_ms,
                )

                # 4xx: non-retryable client error
                if 400 <= response.status_code < 500:
                    self._record_success()  # server is alive
                    raise CMSClientError(
                        status_code=response.status_code,
                        detail=_error_detail(response),
                        url=str(response.url),
                    )

                # 5xx: retryable server error
                if response.status_code >= 500:
                    self._record_failure()
                    last_exc = CMSClientError(
                        status_code=response.status_code,
                        detail=_error_detail(response),
                        url=str(response.url),
                    )
                    if attempt < MAX_RETRIES:
                        delay = RETRY_BASE_DELAY * (2 ** (attempt - 1))
                        logger.warning(
                            "%s %s → 5xx, retry %d/%d in %.1fs",
                            method, path, attempt, MAX_RETRIES, delay,
                        )
                        await asyncio.sleep(delay)
                        continue
                    raise last_exc

                self._record_success()
                if not response.content:
                    return {}
                try:
                    return response.json()
                except ValueError:
                    # Any 2xx is a success, whatever the body
                    logger.debug("%s %s → non-JSON 2xx body ignored", method, path)
                    return {}

            except httpx.TransportError as exc:
                elapsed_ms = (time.monotonic() - t0) * 1000
                self._record_failure()
                last_exc = exc
                logger.warning(
                    "%s %s → network error (%.0fms): %s [attempt %d/%d]",
                    method, path, elapsed_ms, exc, attempt, MAX_RETRIES,
                )
                if attempt < MAX_RETRIES:
                    delay = RETRY_BASE_DELAY * (2 ** (attempt - 1))
                    await asyncio.sleep(delay)
                    continue

        raise last_exc  # type: ignore[misc]

    # -- internals -----------------------------------------------------------

    def _ensure_started(self) -> httpx.AsyncClient:
        if self._http is None:
            raise RuntimeError("CMSClient not started — call await client.start() first")
        return self._http


# ---------------------------------------------------------------------------
# Singleton accessor
# ---------------------------------------------------------------------------

def get_cms_client() -> CMSClient:
    """Return the module-level CMSClient singleton (create if needed)."""
    global _client
    if _client is None:
        _client = CMSClient()
    return _client
