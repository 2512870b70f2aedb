import json

import pytest
import respx
from asana_resources.client import AsanaClient, AsanaHTTPError, RetryConfig
from asana_resources.params import MissingParameterError
from asana_resources.resource import ABSENT, Resource
from asana_resources.resources import CustomFieldSetting, Portfolio, User
from httpx import Response

BASE = "https://mock-asana.com/api/1.0"


@pytest.fixture
def client():
    return AsanaClient(
        access_token="mock-token", base_url=BASE, retry=RetryConfig(max_retries=0)
    )


@pytest.fixture
def portfolio(client):
    return Portfolio(
        {
            "gid": "12",
            "resource_type": "portfolio",
            "name": "Q1 Plan",
            "color": "light-green",
            "members": [{"gid": "7", "name": "Ada"}],
        },
        client=client,
    )


def sent_body(route, index=0):
    return json.loads(route.calls[index].request.content)["data"]


@pytest.mark.asyncio
@respx.mock
async def test_create_omits_unset_optional_params(client):
    route = respx.post(f"{BASE}/portfolios").mock(
        return_value=Response(
            201,
            json={
                "data": {
                    "gid": "12",
                    "resource_type": "portfolio",
                    "name": "Q1 Plan",
                    "workspace": {"gid": "1", "resource_type": "workspace"},
                }
            },
        )
    )

    async with client:
        created = await Portfolio.create(client, workspace="1", name="Q1 Plan")

    assert sent_body(route) == {"workspace": "1", "name": "Q1 Plan"}
    assert isinstance(created, Portfolio)
    assert created.gid == "12"
    assert created.workspace.gid == "1"


@pytest.mark.asyncio
@respx.mock
async def test_create_passes_extra_data_and_options(client):
    route = respx.post(f"{BASE}/portfolios").mock(
        return_value=Response(201, json={"data": {"gid": "12"}})
    )

    async with client:
        await Portfolio.create(
            client,
            workspace="1",
            name="Q1 Plan",
            color="dark-red",
            public=True,
            members=[],
            options={"fields": ["name", "color"]},
        )

    assert sent_body(route) == {
        "workspace": "1",
        "name": "Q1 Plan",
        "color": "dark-red",
        "public": True,
    }
    assert route.calls[0].request.url.params["opt_fields"] == "name,color"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "kwargs, missing",
    [
        ({"name": "Q1 Plan"}, "workspace"),
        ({"workspace": "1"}, "name"),
        ({"workspace": "1", "name": None, "color": "red"}, "name"),
    ],
)
@respx.mock(assert_all_called=False)
async def test_create_requires_workspace_and_name(client, kwargs, missing):
    route = respx.post(f"{BASE}/portfolios").mock(
        return_value=Response(201, json={"data": {"gid": "12"}})
    )

    async with client:
        with pytest.raises(MissingParameterError) as exc:
            await Portfolio.create(client, **kwargs)

    assert exc.value.name == missing
    assert not route.called


@pytest.mark.asyncio
@respx.mock
async def test_find_by_id(client):
    route = respx.get(f"{BASE}/portfolios/12").mock(
        return_value=Response(
            200,
            json={
                "data": {
                    "gid": "12",
                    "name": "Q1 Plan",
                    "owner": {"gid": "7", "resource_type": "user", "name": "Ada"},
                }
            },
        )
    )

    async with client:
        portfolio = await Portfolio.find_by_id(
            client, "12", options={"expand": ["owner"]}
        )

    assert portfolio.name == "Q1 Plan"
    assert isinstance(portfolio.owner, User)
    assert route.calls[0].request.url.params["opt_expand"] == "owner"


@pytest.mark.asyncio
@respx.mock
async def test_find_all_iterates_two_pages(client):
    def responder(request):
        if request.url.params.get("offset") is None:
            return Response(
                200,
                json={
                    "data": [
                        {"gid": "1", "name": "A"},
                        {"gid": "2", "name": "B"},
                    ],
                    "next_page": {"offset": "page-2", "path": "/portfolios"},
                },
            )
        return Response(
            200, json={"data": [{"gid": "3", "name": "C"}], "next_page": None}
        )

    route = respx.get(f"{BASE}/portfolios").mock(side_effect=responder)

    async with client:
        portfolios = await Portfolio.find_all(
            client, workspace="1", owner="me", per_page=2
        )
        names = [p.name async for p in portfolios]

    assert names == ["A", "B", "C"]
    assert route.call_count == 2
    first = route.calls[0].request.url.params
    assert dict(first) == {"workspace": "1", "owner": "me", "limit": "2"}
    assert route.calls[1].request.url.params["offset"] == "page-2"


@pytest.mark.asyncio
@respx.mock(assert_all_called=False)
async def test_find_all_requires_owner(client):
    route = respx.get(f"{BASE}/portfolios").mock(
        return_value=Response(200, json={"data": []})
    )

    async with client:
        with pytest.raises(MissingParameterError, match="owner"):
            await Portfolio.find_all(client, workspace="1")

    assert not route.called


@pytest.mark.asyncio
@respx.mock
async def test_update_refreshes_snapshot(client, portfolio):
    route = respx.put(f"{BASE}/portfolios/12").mock(
        return_value=Response(200, json={"data": {"gid": "12", "name": "Q2 Plan"}})
    )

    async with client:
        result = await portfolio.update(name="Q2 Plan")

    assert result is portfolio
    assert sent_body(route) == {"name": "Q2 Plan"}
    assert portfolio.name == "Q2 Plan"
    assert portfolio.color is ABSENT


@pytest.mark.asyncio
@respx.mock
async def test_delete_returns_true(client, portfolio):
    route = respx.delete(f"{BASE}/portfolios/12").mock(
        return_value=Response(200, json={"data": {}})
    )

    async with client:
        assert await portfolio.delete() is True

    assert route.called
    # the stale snapshot is still readable
    assert portfolio.name == "Q1 Plan"


@pytest.mark.asyncio
@respx.mock
async def test_delete_propagates_errors(client, portfolio):
    respx.delete(f"{BASE}/portfolios/12").mock(
        return_value=Response(403, json={"errors": [{"message": "Forbidden"}]})
    )

    async with client:
        with pytest.raises(AsanaHTTPError) as exc:
            await portfolio.delete()

    assert exc.value.status_code == 403


@pytest.mark.asyncio
@respx.mock
async def test_get_items_is_generic(client, portfolio):
    respx.get(f"{BASE}/portfolios/12/items").mock(
        return_value=Response(
            200,
            json={"data": [{"gid": "100", "resource_type": "project"}]},
        )
    )

    async with client:
        items = await (await portfolio.get_items()).to_list()

    assert type(items[0]) is Resource
    assert items[0].resource_type == "project"


@pytest.mark.asyncio
@respx.mock
async def test_add_and_remove_item(client, portfolio):
    add = respx.post(f"{BASE}/portfolios/12/addItem").mock(
        return_value=Response(200, json={"data": {}})
    )
    remove = respx.post(f"{BASE}/portfolios/12/removeItem").mock(
        return_value=Response(200, json={"data": {}})
    )

    async with client:
        assert await portfolio.add_item(item="100", insert_after="99") is True
        assert await portfolio.remove_item(item="100") is True

    assert sent_body(add) == {"item": "100", "insert_after": "99"}
    assert sent_body(remove) == {"item": "100"}


@pytest.mark.asyncio
@respx.mock(assert_all_called=False)
async def test_add_item_validates_locally(client, portfolio):
    route = respx.post(f"{BASE}/portfolios/12/addItem").mock(
        return_value=Response(200, json={"data": {}})
    )

    async with client:
        with pytest.raises(MissingParameterError, match="item"):
            await portfolio.add_item(insert_before="99")
        with pytest.raises(ValueError, match="cannot both"):
            await portfolio.add_item(item="100", insert_before="98", insert_after="99")

    assert not route.called


@pytest.mark.asyncio
@respx.mock
async def test_add_and_remove_members_refresh(client, portfolio):
    add = respx.post(f"{BASE}/portfolios/12/addMembers").mock(
        return_value=Response(
            200,
            json={
                "data": {
                    "gid": "12",
                    "name": "Q1 Plan",
                    "members": [{"gid": "7"}, {"gid": "8"}],
                }
            },
        )
    )
    remove = respx.post(f"{BASE}/portfolios/12/removeMembers").mock(
        return_value=Response(
            200,
            json={"data": {"gid": "12", "name": "Q1 Plan", "members": [{"gid": "8"}]}},
        )
    )

    async with client:
        await portfolio.add_members(members=["8"])
        assert [m.gid for m in portfolio.members] == ["7", "8"]
        await portfolio.remove_members(members=["7"])

    assert [m.gid for m in portfolio.members] == ["8"]
    assert sent_body(add) == {"members": ["8"]}
    assert sent_body(remove) == {"members": ["7"]}


@pytest.mark.asyncio
@respx.mock(assert_all_called=False)
async def test_members_must_not_be_empty(client, portfolio):
    route = respx.post(f"{BASE}/portfolios/12/addMembers").mock(
        return_value=Response(200, json={"data": {"gid": "12"}})
    )

    async with client:
        with pytest.raises(MissingParameterError, match="members"):
            await portfolio.add_members(members=[])

    assert not route.called


@pytest.mark.asyncio
@respx.mock
async def test_custom_field_settings(client, portfolio):
    respx.get(f"{BASE}/portfolios/12/custom_field_settings").mock(
        return_value=Response(
            200,
            json={
                "data": [
                    {
                        "gid": "90",
                        "resource_type": "custom_field_setting",
                        "is_important": False,
                        "parent": {"gid": "12", "resource_type": "portfolio"},
                        "custom_field": {"gid": "91", "name": "Priority"},
                    }
                ],
                "next_page": None,
            },
        )
    )
    add = respx.post(f"{BASE}/portfolios/12/addCustomFieldSetting").mock(
        return_value=Response(200, json={"data": {}})
    )
    remove = respx.post(f"{BASE}/portfolios/12/removeCustomFieldSetting").mock(
        return_value=Response(200, json={"data": {}})
    )

    async with client:
        settings = await (await portfolio.get_custom_field_settings()).to_list()
        added = await portfolio.add_custom_field_setting(
            custom_field="91", is_important=False
        )
        removed = await portfolio.remove_custom_field_setting(custom_field="91")

    assert isinstance(settings[0], CustomFieldSetting)
    assert settings[0].custom_field.name == "Priority"
    assert settings[0].parent.resource_type == "portfolio"
    assert added is True and removed is True
    assert sent_body(add) == {"custom_field": "91", "is_important": False}
    assert sent_body(remove) == {"custom_field": "91"}
