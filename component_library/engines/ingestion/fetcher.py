"""Async raw-file fetcher with 404 short-circuit and linear retry backoff."""

from __future__ import annotations

import asyncio

import httpx
import structlog

from component_library.core.config import DEFAULT_MAX_RETRIES

log = structlog.get_logger("component_library.ingestion")

RETRY_BASE_DELAY = 1.0  # seconds; delay before attempt i+1 is base * i


def retry_delay(attempt: int) -> float:
    """Seconds to wait after failed attempt number *attempt* (1-based)."""
    return RETRY_BASE_DELAY * attempt


class RawFileFetcher:
    """Thin async wrapper that GETs raw file contents."""

    def __init__(
        self,
        token: str | None = None,
        *,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        headers: dict[str, str] = {"Accept": "text/plain, */*"}
        if token:
            headers["Authorization"] = f"token {token}"
        self._client = client or httpx.AsyncClient(
            headers=headers,
            timeout=timeout,
            follow_redirects=True,
        )

    # ── lifecycle ──────────────────────────────────────────────────────────

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> RawFileFetcher:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    # ── public ─────────────────────────────────────────────────────────────

    async def fetch(self, url: str, max_retries: int = DEFAULT_MAX_RETRIES) -> str | None:
        """Return the body of *url* as text, or None.

        A 404 is an expected absence: it is never retried. Any other
        failure (non-2xx status, timeout, transport error) is retried until
        *max_retries* attempts have been made, sleeping ``1s * attempt``
        between attempts. Exhausted retries also yield None.
        """
        if max_retries < 1:
            raise ValueError("max_retries must be >= 1")

        log.debug("fetch.start", url=url)
        for attempt in range(1, max_retries + 1):
            try:
                resp = await self._client.get(url)
                if resp.status_code == 404:
                    log.warning("fetch.not_found", url=url)
                    return None
                resp.raise_for_status()
                content = resp.text
                log.info("fetch.ok", url=url, attempt=attempt, size=len(content))
                return content
            except httpx.HTTPStatusError as exc:
                reason = f"HTTP error! status: {exc.response.status_code}"
            except httpx.HTTPError as exc:
                reason = f"{type(exc).__name__}: {exc}"

            log.warning(
                "fetch.attempt_failed",
                url=url,
                attempt=attempt,
                max_retries=max_retries,
                reason=reason,
            )
            if attempt < max_retries:
                await asyncio.sleep(retry_delay(attempt))

        log.error("fetch.gave_up", url=url, attempts=max_retries)
        return None
