from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from ..client import AsanaClient
from ..collection import Collection, ItemType
from ..params import compact, exclusive, require
from ..parser import parse_single
from ..resource import Resource
from .custom_field_setting import CustomFieldSetting
from .refs import User, Workspace


class Portfolio(Resource):
    """
    A high-level overview of the status of multiple initiatives: a dashboard of
    projects (or other items) with their progress and latest status updates.

    Portfolios hold at most 250 items and, like projects, at most 20 custom
    fields.
    """

    plural_name = "portfolios"
    schema = {
        **Resource.schema,
        "name": str,
        "owner": User,
        "created_at": datetime,
        "created_by": User,
        "custom_field_settings": [CustomFieldSetting],
        "color": str,
        "workspace": Workspace,
        "members": [User],
    }

    @classmethod
    async def create(
        cls,
        client: AsanaClient,
        *,
        workspace: Optional[str] = None,
        name: Optional[str] = None,
        color: Optional[str] = None,
        options: Optional[Dict[str, Any]] = None,
        **data: Any,
    ) -> Portfolio:
        """
        Create a new portfolio in the given workspace with the supplied name.

        Portfolios created through the API do not get the initial state
        (e.g. a "Priority" custom field) that the web UI adds.
        """
        require(workspace=workspace, name=name)
        body = compact(data, workspace=workspace, name=name, color=color)
        payload = await client.post("/portfolios", body=body, options=options)
        return cls(parse_single(payload), client=client)

    @classmethod
    async def find_all(
        cls,
        client: AsanaClient,
        *,
        workspace: Optional[str] = None,
        owner: Optional[str] = None,
        per_page: int = 20,
        options: Optional[Dict[str, Any]] = None,
    ) -> Collection[Portfolio]:
        """
        List portfolios in compact form owned by ``owner`` in ``workspace``.
        The API only lists portfolios owned by the calling user.
        """
        require(workspace=workspace, owner=owner)
        params = compact(workspace=workspace, owner=owner, limit=per_page)
        return await Collection.fetch(
            client,
            "/portfolios",
            item_type=ItemType.of(cls),
            params=params,
            options=options,
        )

    async def update(
        self, *, options: Optional[Dict[str, Any]] = None, **data: Any
    ) -> Portfolio:
        """
        Update the fields given in ``data``; unspecified fields are left as they
        are on the server. This snapshot is replaced by the updated record.
        """
        payload = await self.client.put(self._path(), body=data, options=options)
        return self.refresh_with(parse_single(payload))

    async def delete(self) -> bool:
        await self.client.delete(self._path())
        return True

    async def get_items(
        self, *, options: Optional[Dict[str, Any]] = None
    ) -> Collection[Resource]:
        """Items in the portfolio, in compact form. Items can be of any kind."""
        return await Collection.fetch(
            self.client,
            self._path("/items"),
            item_type=ItemType.generic(),
            options=options,
        )

    async def add_item(
        self,
        *,
        item: Optional[str] = None,
        insert_before: Optional[str] = None,
        insert_after: Optional[str] = None,
        options: Optional[Dict[str, Any]] = None,
        **data: Any,
    ) -> bool:
        """
        Add an item to the portfolio, optionally before or after an item already
        in it. ``insert_before`` and ``insert_after`` cannot both be given.
        """
        require(item=item)
        exclusive(insert_before=insert_before, insert_after=insert_after)
        body = compact(
            data, item=item, insert_before=insert_before, insert_after=insert_after
        )
        await self.client.post(self._path("/addItem"), body=body, options=options)
        return True

    async def remove_item(
        self,
        *,
        item: Optional[str] = None,
        options: Optional[Dict[str, Any]] = None,
        **data: Any,
    ) -> bool:
        require(item=item)
        body = compact(data, item=item)
        await self.client.post(self._path("/removeItem"), body=body, options=options)
        return True

    async def add_members(
        self,
        *,
        members: Optional[List[str]] = None,
        options: Optional[Dict[str, Any]] = None,
        **data: Any,
    ) -> Portfolio:
        """Add the given users as members; refreshes this snapshot."""
        require(members=members)
        body = compact(data, members=members)
        payload = await self.client.post(
            self._path("/addMembers"), body=body, options=options
        )
        return self.refresh_with(parse_single(payload))

    async def remove_members(
        self,
        *,
        members: Optional[List[str]] = None,
        options: Optional[Dict[str, Any]] = None,
        **data: Any,
    ) -> Portfolio:
        """Remove the given users from the members; refreshes this snapshot."""
        require(members=members)
        body = compact(data, members=members)
        payload = await self.client.post(
            self._path("/removeMembers"), body=body, options=options
        )
        return self.refresh_with(parse_single(payload))

    async def get_custom_field_settings(
        self, *, options: Optional[Dict[str, Any]] = None
    ) -> Collection[CustomFieldSetting]:
        return await Collection.fetch(
            self.client,
            self._path("/custom_field_settings"),
            item_type=ItemType.of(CustomFieldSetting),
            options=options,
        )

    async def add_custom_field_setting(
        self,
        *,
        custom_field: Optional[str] = None,
        is_important: Optional[bool] = None,
        insert_before: Optional[str] = None,
        insert_after: Optional[str] = None,
        options: Optional[Dict[str, Any]] = None,
        **data: Any,
    ) -> bool:
        """
        Attach a custom field to the portfolio.

        custom_field: the custom field to add.
        is_important: whether the field is shown in the portfolio's list view.
        insert_before / insert_after: a custom field setting on this portfolio
          to place the new one next to. Mutually exclusive.
        """
        require(custom_field=custom_field)
        exclusive(insert_before=insert_before, insert_after=insert_after)
        body = compact(
            data,
            custom_field=custom_field,
            is_important=is_important,
            insert_before=insert_before,
            insert_after=insert_after,
        )
        await self.client.post(
            self._path("/addCustomFieldSetting"), body=body, options=options
        )
        return True

    async def remove_custom_field_setting(
        self,
        *,
        custom_field: Optional[str] = None,
        options: Optional[Dict[str, Any]] = None,
        **data: Any,
    ) -> bool:
        require(custom_field=custom_field)
        body = compact(data, custom_field=custom_field)
        await self.client.post(
            self._path("/removeCustomFieldSetting"), body=body, options=options
        )
        return True
