"""Shared async HTTP helper with retry and rate limit handling."""

import asyncio
import logging
from typing import Any

import httpx

from snowhound.errors import RateLimited, UpstreamUnavailable

logger = logging.getLogger(__name__)

RETRYABLE_STATUS = (502, 503, 504)


async def request_json(
    method: str,
    url: str,
    *,
    provider: str,
    timeout: float,
    params: dict | None = None,
    json: dict | None = None,
    headers: dict[str, str] | None = None,
    max_retries: int = 0,
    retry_base_delay: float = 1.0,
) -> Any:
    """Issue one bounded request and decode its JSON body.

    Retries 502/503/504 and transport errors with exponential backoff.
    429 raises RateLimited; any other failure raises UpstreamUnavailable.
    """
    last_error: Exception | None = None
    async with httpx.AsyncClient(timeout=timeout) as client:
        for attempt in range(max_retries + 1):
            try:
                resp = await client.request(
                    method, url, params=params, json=json, headers=headers
                )
            except httpx.RequestError as e:
                last_error = e
                if attempt < max_retries:
                    delay = retry_base_delay * (2**attempt)
                    logger.warning(
                        "%s request error, retrying in %.1fs: %s", provider, delay, e
                    )
                    await asyncio.sleep(delay)
                    continue
                raise UpstreamUnavailable(
                    f"{provider} request failed: {e}", provider=provider
                ) from e

            if resp.status_code in RETRYABLE_STATUS and attempt < max_retries:
                delay = retry_base_delay * (2**attempt)
                logger.warning(
                    "%s %s returned %d, retrying in %.1fs (attempt %d/%d)",
                    provider, url, resp.status_code, delay, attempt + 1, max_retries,
                )
                await asyncio.sleep(delay)
                continue

            if resp.status_code == 429:
                raise RateLimited(
                    f"{provider} rate limit exceeded",
                    retry_after=parse_retry_after(resp),
                )
            if resp.status_code >= 400:
                raise UpstreamUnavailable(
                    f"{provider} returned HTTP {resp.status_code}",
                    provider=provider,
                    status_code=resp.status_code,
                )
            try:
                return resp.json()
            except ValueError as e:
                raise UpstreamUnavailable(
                    f"{provider} returned invalid JSON", provider=provider
                ) from e

    assert last_error is not None
    raise UpstreamUnavailable(f"{provider} request failed: {last_error}", provider=provider)


def parse_retry_after(resp: httpx.Response) -> float | None:
    """Read a retry hint from the Retry-After header or a JSON retryAfter field."""
    header = resp.headers.get("retry-after")
    if header:
        try:
            return float(header)
        except ValueError:
            pass
    try:
        body = resp.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("retryAfter") is not None:
        try:
            return float(body["retryAfter"])
        except (TypeError, ValueError):
            return None
    return None


def expect_object(data: Any, provider: str) -> dict:
    """Reject a decoded body that is not a JSON object."""
    if not isinstance(data, dict):
        raise UpstreamUnavailable(
            f"{provider} returned an unexpected {type(data).__name__} payload",
            provider=provider,
        )
    return data
