"""
Helpers for unpacking Asana response envelopes.

Every successful response looks like {"data": ...}; list endpoints add a
"next_page" object ({"offset", "path", "uri"}) or null on the last page.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .client import AsanaParseError

# Query parameter used to echo the continuation token back to the server.
CONTINUATION_PARAM = "offset"


@dataclass(frozen=True)
class Page:
    items: List[Dict[str, Any]]
    next_page: Optional[Dict[str, Any]] = None

    @property
    def next_page_token(self) -> Optional[str]:
        """The opaque continuation value, or None on the final page."""
        if not self.next_page:
            return None
        return self.next_page.get(CONTINUATION_PARAM)


def parse_single(envelope: Dict[str, Any]) -> Dict[str, Any]:
    """
    Extract the single object from a response envelope.
    Raises AsanaParseError if the data block is missing, empty or not an object.
    """
    data = (envelope or {}).get("data")
    if not isinstance(data, dict):
        raise AsanaParseError(
            f"Expected a data object in response, got {type(data).__name__}"
        )
    if not data:
        raise AsanaParseError("Expected a non-empty data object in response.")
    return data


def parse_page(envelope: Dict[str, Any]) -> Page:
    """
    Extract the item list and continuation from a list response envelope.
    Non-object items are dropped.
    """
    data = (envelope or {}).get("data")
    if not isinstance(data, list):
        raise AsanaParseError(
            f"Expected a data list in response, got {type(data).__name__}"
        )
    next_page = envelope.get("next_page")
    if next_page is not None and not isinstance(next_page, dict):
        raise AsanaParseError("Expected next_page to be an object or null.")
    return Page(items=[e for e in data if isinstance(e, dict)], next_page=next_page)


__all__ = ["CONTINUATION_PARAM", "Page", "parse_single", "parse_page"]
