"""Latest block height from the Facet block explorer."""

from __future__ import annotations

from typing import Any

import requests

from fctcast.data.constants import EXPLORER_BLOCKS_URL
from fctcast.errors import SourceUnavailable

HEADERS = {"Accept": "application/json"}
USER_AGENT = "fctcast/0.1"


def parse_block_height(payload: Any) -> int:
    """Extract the newest block height from a ``main-page/blocks`` payload."""

    try:
        raw = payload[0]["height"]
    except (IndexError, KeyError, TypeError) as exc:
        raise SourceUnavailable(f"Unexpected explorer response format: {payload!r}") from exc
    if isinstance(raw, bool):
        raise SourceUnavailable(f"Invalid block height: {raw!r}")
    try:
        height = int(raw)
    except (TypeError, ValueError) as exc:
        raise SourceUnavailable(f"Invalid block height: {raw!r}") from exc
    if height <= 0 or (isinstance(raw, float) and raw != height):
        raise SourceUnavailable(f"Invalid block height: {raw!r}")
    return height


def fetch_latest_block_height(url: str = EXPLORER_BLOCKS_URL, timeout: float = 10.0) -> int:
    """Fetch the chain head height via the explorer API."""

    headers = dict(HEADERS, **{"User-Agent": USER_AGENT})
    try:
        response = requests.get(url, headers=headers, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except (requests.RequestException, ValueError) as exc:
        raise SourceUnavailable(f"Block explorer request failed: {exc}") from exc
    return parse_block_height(data)


__all__ = ["parse_block_height", "fetch_latest_block_height"]
