from __future__ import annotations

from typing import Any, Dict, Optional

from ..client import AsanaClient
from ..collection import Collection, ItemType
from ..params import compact, require
from ..resource import Resource
from .refs import Project, User


class ProjectMembership(Resource):
    """
    A user's membership in a project, along with the access it grants
    (full write access or comment-only).
    """

    plural_name = "project_memberships"
    schema = {
        **Resource.schema,
        "user": User,
        "project": Project,
        "write_access": str,
    }

    @classmethod
    async def find_by_project(
        cls,
        client: AsanaClient,
        *,
        project: Optional[str] = None,
        user: Optional[str] = None,
        per_page: int = 20,
        options: Optional[Dict[str, Any]] = None,
    ) -> Collection[ProjectMembership]:
        """
        Returns the compact project membership records for the project.

        project: the project for which to fetch memberships.
        user: if present, the user to filter the memberships to.
        per_page: the number of records to fetch per page.
        """
        require(project=project)
        params = compact(user=user, limit=per_page)
        return await Collection.fetch(
            client,
            f"/projects/{project}/project_memberships",
            item_type=ItemType.of(cls),
            params=params,
            options=options,
        )

    @classmethod
    async def get_many(cls, client: AsanaClient, **kwargs: Any):
        return await cls.find_by_project(client, **kwargs)

    @classmethod
    async def get_single(
        cls,
        client: AsanaClient,
        id: str,
        *,
        options: Optional[Dict[str, Any]] = None,
    ) -> ProjectMembership:
        return await cls.find_by_id(client, id, options=options)
