"""Single-shot HTTP probes against the collector.

``probe_http`` checks a liveness endpoint with a plain GET. ``probe_cors``
replays the CORS preflight a browser sends before an OTLP export POST.
Neither probe retries: one failure is the diagnostic signal. Transport
errors are folded into the returned result instead of being raised.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Final

import httpx

from otel_doctor.models.checks import CorsProbeResult, HttpProbeResult
from otel_doctor.models.config import DEFAULT_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

PREFLIGHT_REQUEST_METHOD: Final[str] = "POST"
PREFLIGHT_REQUEST_HEADERS: Final[str] = "content-type"
WILDCARD_ORIGIN: Final[str] = "*"

_SUCCESS_MIN: Final[int] = 200
_SUCCESS_MAX: Final[int] = 300


def build_timeout(seconds: float = DEFAULT_TIMEOUT_SECONDS) -> httpx.Timeout:
    """Uniform connect/read/write/pool timeout for probe clients."""
    return httpx.Timeout(connect=seconds, read=seconds, write=seconds, pool=seconds)


def is_success_status(status: int) -> bool:
    return _SUCCESS_MIN <= status < _SUCCESS_MAX


def origin_allowed(allow_origin: str | None, origin: str) -> bool:
    """Whether an ``Access-Control-Allow-Origin`` value grants *origin*."""
    if not allow_origin:
        return False
    return allow_origin in (WILDCARD_ORIGIN, origin)


def deadline_message(timeout: float) -> str:
    return f"Request did not complete within {timeout:g}s"


def describe_transport_error(exc: Exception) -> str:
    """Human-readable, never-empty message for a transport failure."""
    message = str(exc).strip()
    return message or type(exc).__name__


async def probe_http(
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> HttpProbeResult:
    """Issue a single GET against *url*.

    Args:
        url: Endpoint to request.
        client: Shared client. A short-lived one is opened when omitted.
        timeout: Overall deadline in seconds for the request, including the
            body. Also sets the per-phase timeout of a short-lived client.

    Returns:
        HttpProbeResult with ``ok`` true for a 2xx status. Status and body
        are captured for any response; only ``error`` is set on transport
        failure.
    """
    if client is None:
        async with httpx.AsyncClient(timeout=build_timeout(timeout)) as own_client:
            return await probe_http(url, client=own_client, timeout=timeout)

    try:
        response = await asyncio.wait_for(client.get(url), timeout=timeout)
    except TimeoutError:
        logger.warning("GET %s timed out after %.1fs", url, timeout)
        return HttpProbeResult(ok=False, error=deadline_message(timeout))
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.warning("GET %s failed: %s", url, exc)
        return HttpProbeResult(ok=False, error=describe_transport_error(exc))

    ok = is_success_status(response.status_code)
    logger.debug("GET %s -> HTTP %d", url, response.status_code)
    return HttpProbeResult(ok=ok, status=response.status_code, body=response.text)


async def probe_cors(
    url: str,
    origin: str,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> CorsProbeResult:
    """Send a browser-style CORS preflight to *url* on behalf of *origin*.

    Passes only when the status is 2xx and ``Access-Control-Allow-Origin``
    is ``*`` or exactly *origin*.

    Args:
        url: OTLP endpoint the browser would POST to.
        origin: Origin header value the browser would send.
        client: Shared client. A short-lived one is opened when omitted.
        timeout: Overall deadline in seconds for the request, including the
            body. Also sets the per-phase timeout of a short-lived client.
    """
    if client is None:
        async with httpx.AsyncClient(timeout=build_timeout(timeout)) as own_client:
            return await probe_cors(url, origin, client=own_client, timeout=timeout)

    headers = {
        "Origin": origin,
        "Access-Control-Request-Method": PREFLIGHT_REQUEST_METHOD,
        "Access-Control-Request-Headers": PREFLIGHT_REQUEST_HEADERS,
    }
    try:
        # Non-streaming request: the body is read in full before returning,
        # which releases the pooled connection whatever the outcome.
        response = await asyncio.wait_for(
            client.options(url, headers=headers),
            timeout=timeout,
        )
    except TimeoutError:
        logger.warning("OPTIONS %s timed out after %.1fs", url, timeout)
        return CorsProbeResult(ok=False, error=deadline_message(timeout))
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.warning("OPTIONS %s failed: %s", url, exc)
        return CorsProbeResult(ok=False, error=describe_transport_error(exc))

    allow_origin = response.headers.get("access-control-allow-origin")
    ok = is_success_status(response.status_code) and origin_allowed(allow_origin, origin)
    logger.debug(
        "OPTIONS %s -> HTTP %d, allow-origin=%s",
        url,
        response.status_code,
        allow_origin,
    )
    return CorsProbeResult(ok=ok, status=response.status_code, allow_origin=allow_origin)
