"""
Lazy, paginated sequences of resources.

A Collection holds one page of decoded items plus the server's continuation
token. Advancing never mutates a Collection: ``next_page`` returns a new one.
``async for`` walks the pages in order, fetching each only when the previous
one is drained.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import (
    Any,
    AsyncIterator,
    Dict,
    Generic,
    List,
    Literal,
    Optional,
    Tuple,
    Type,
    TypeVar,
)

from .client import AsanaClient
from .parser import CONTINUATION_PARAM, Page, parse_page
from .resource import Resource

R = TypeVar("R", bound=Resource)

log = logging.getLogger("asana_resources.collection")


@dataclass(frozen=True)
class ItemType(Generic[R]):
    """How the items of a collection are decoded."""

    kind: Literal["generic", "declared"]
    resource_class: Type[R]

    @classmethod
    def generic(cls) -> "ItemType[Resource]":
        return cls(kind="generic", resource_class=Resource)

    @classmethod
    def of(cls, resource_class: Type[R]) -> "ItemType[R]":
        return cls(kind="declared", resource_class=resource_class)

    def decode(self, raw: Dict[str, Any], client: AsanaClient) -> R:
        return self.resource_class(raw, client=client)


class Collection(Generic[R]):
    def __init__(
        self,
        page: Page,
        *,
        client: AsanaClient,
        item_type: ItemType[R],
        path: str,
        params: Optional[Dict[str, Any]] = None,
        options: Optional[Dict[str, Any]] = None,
    ):
        self._client = client
        self.item_type = item_type
        self.path = path
        self.params = dict(params or {})
        self.options = dict(options or {})
        self.elements: Tuple[R, ...] = tuple(
            item_type.decode(raw, client) for raw in page.items
        )
        self.next_page_token: Optional[str] = page.next_page_token

    @classmethod
    async def fetch(
        cls,
        client: AsanaClient,
        path: str,
        *,
        item_type: ItemType[R],
        params: Optional[Dict[str, Any]] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> "Collection[R]":
        """Issue the first GET for ``path`` and wrap the returned page."""
        payload = await client.get(path, params=params, options=options)
        return cls(
            parse_page(payload),
            client=client,
            item_type=item_type,
            path=path,
            params=params,
            options=options,
        )

    @property
    def has_next_page(self) -> bool:
        return self.next_page_token is not None

    async def next_page(self) -> Optional["Collection[R]"]:
        """
        Fetch the page after this one, or return None on the final page.
        Errors from the request propagate; this collection is left untouched.
        """
        if self.next_page_token is None:
            return None
        params = {**self.params, CONTINUATION_PARAM: self.next_page_token}
        log.debug(
            "collection.next_page",
            extra={"path": self.path, "offset": self.next_page_token},
        )
        return await type(self).fetch(
            self._client,
            self.path,
            item_type=self.item_type,
            params=params,
            options=self.options,
        )

    async def pages(self) -> AsyncIterator["Collection[R]"]:
        """Yield this collection and every following page, in order."""
        page: Optional[Collection[R]] = self
        while page is not None:
            yield page
            page = await page.next_page()

    async def __aiter__(self) -> AsyncIterator[R]:
        async for page in self.pages():
            for item in page.elements:
                yield item

    async def take(self, n: int) -> List[R]:
        """First ``n`` items across pages; fetches only the pages it reads."""
        items: List[R] = []
        if n <= 0:
            return items
        async for item in self:
            items.append(item)
            if len(items) >= n:
                break
        return items

    async def to_list(self) -> List[R]:
        return [item async for item in self]

    def __len__(self) -> int:
        return len(self.elements)

    def __repr__(self) -> str:
        return (
            f"<Collection of {self.item_type.resource_class.__name__} "
            f"({len(self.elements)} items, more={self.has_next_page})>"
        )


__all__ = ["Collection", "ItemType"]
