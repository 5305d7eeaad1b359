import pytest
import respx
from gatepay_sdk import DEFAULT_BASE_PATH, Gatepay
from gatepay_sdk.apis import AccountApi, LinksApi, NetworksApi
from httpx import Response


def test_defaults_to_production_base_path():
    gatepay = Gatepay(api_token="t1")
    assert gatepay.get_configuration().base_path == DEFAULT_BASE_PATH == (
        "https://api.gatepay.cloud"
    )
    assert isinstance(gatepay.account, AccountApi)
    assert isinstance(gatepay.links, LinksApi)
    assert isinstance(gatepay.networks, NetworksApi)


def test_update_api_token_rebinds_every_sub_client():
    gatepay = Gatepay(api_token="t1", base_path="https://a.example.com")
    before = gatepay.get_configuration()
    old_links = gatepay.links

    gatepay.update_api_token("t2")

    after = gatepay.get_configuration()
    assert after is not before
    assert before.access_token == "t1"
    assert after.access_token == "t2"
    assert after.base_path == "https://a.example.com"
    assert gatepay.links is not old_links
    for api in (gatepay.account, gatepay.links, gatepay.networks):
        assert api.configuration is after


def test_update_base_path_keeps_token():
    gatepay = Gatepay(api_token="t1")
    gatepay.update_base_path("https://staging.example.com/")

    cfg = gatepay.get_configuration()
    assert cfg.base_path == "https://staging.example.com"
    assert cfg.access_token == "t1"


def test_update_with_empty_value_leaves_configuration_untouched():
    gatepay = Gatepay(api_token="t1")
    before = gatepay.get_configuration()
    links = gatepay.links

    with pytest.raises(ValueError):
        gatepay.update_api_token("")

    assert gatepay.get_configuration() is before
    assert gatepay.links is links


@pytest.mark.asyncio
@respx.mock
async def test_captured_handle_keeps_old_token():
    route = respx.get("https://api.gatepay.cloud/networks").mock(
        return_value=Response(200, json={"networks": []})
    )

    async with Gatepay(api_token="t1") as gatepay:
        captured = gatepay.networks
        gatepay.update_api_token("t2")

        await gatepay.networks.get_networks()
        await captured.get_networks()

    assert route.calls[0].request.headers["Authorization"] == "Bearer t2"
    assert route.calls[1].request.headers["Authorization"] == "Bearer t1"


@pytest.mark.asyncio
@respx.mock
async def test_update_base_path_routes_new_calls():
    old = respx.get("https://api.gatepay.cloud/links/u1").mock(
        return_value=Response(200, json={"uuid": "u1"})
    )
    new = respx.get("https://staging.example.com/links/u1").mock(
        return_value=Response(200, json={"uuid": "u1"})
    )

    async with Gatepay(api_token="t1") as gatepay:
        captured = gatepay.links
        gatepay.update_base_path("https://staging.example.com")

        await gatepay.links.get_links_by_uuid_or_alias("u1")
        await captured.get_links_by_uuid_or_alias("u1")

    assert new.call_count == 1
    assert old.call_count == 1
