"""Public IP and coarse location lookup via Cloudflare's trace endpoint."""

from __future__ import annotations

import asyncio
import logging

import requests

from .errors import RetrievalError
from .models.snapshot import UNKNOWN, LocationInfo

logger = logging.getLogger(__name__)

TRACE_URL = "https://www.cloudflare.com/cdn-cgi/trace"
GEO_TIMEOUT_S = 5


def parse_trace(body: str) -> LocationInfo:
    """Parse ``key=value`` lines from the trace response."""
    fields: dict[str, str] = {}
    for line in body.splitlines():
        key, sep, value = line.partition("=")
        if sep:
            fields[key.strip()] = value.strip()
    return LocationInfo(
        ip=fields.get("ip") or UNKNOWN,
        location=fields.get("loc") or UNKNOWN,
        country=fields.get("colo", ""),
    )


def fetch_trace() -> str:
    try:
        response = requests.get(TRACE_URL, timeout=GEO_TIMEOUT_S)
        response.raise_for_status()
        return response.text
    except Exception as e:
        raise RetrievalError(f"location lookup failed: {e}") from e


def get_location_info() -> LocationInfo:
    try:
        return parse_trace(fetch_trace())
    except RetrievalError as e:
        logger.warning("%s", e)
        return LocationInfo()


async def resolve_location(timeout: float = GEO_TIMEOUT_S) -> LocationInfo:
    # requests' timeout is per socket read; this bounds the whole lookup
    try:
        return await asyncio.wait_for(asyncio.to_thread(get_location_info), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning("location lookup timed out after %.0fs", timeout)
        return LocationInfo()
