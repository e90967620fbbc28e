import httpx
import pytest

from app.clients.pokeapi import PokeApiClient
from app.core.errors import MalformedPayloadError, NotFoundError, PokemonNotFoundError, UpstreamError

from .conftest import BASE


def _client(handler) -> PokeApiClient:
    return PokeApiClient(BASE, transport=httpx.MockTransport(handler))


def test_addresses():
    c = PokeApiClient(BASE + "/")
    assert c.pokemon_url("mew") == f"{BASE}/pokemon/mew"
    assert c.name_index_url(1000) == f"{BASE}/pokemon?limit=1000"


@pytest.mark.asyncio
async def test_get_json_returns_object(client):
    body = await client.get_json(f"{BASE}/pokemon/bulbasaur")
    assert body["name"] == "bulbasaur"


@pytest.mark.asyncio
async def test_404_is_typed_not_found(client):
    with pytest.raises(PokemonNotFoundError) as exc:
        await client.get_json(f"{BASE}/pokemon/missingno", resource="missingno")
    assert exc.value.name == "missingno"
    assert exc.value.status_code == 404
    assert not isinstance(exc.value, UpstreamError)


@pytest.mark.asyncio
async def test_other_status_is_upstream_error_with_status():
    c = _client(lambda request: httpx.Response(503, text="maintenance"))
    with pytest.raises(UpstreamError) as exc:
        await c.get_json(f"{BASE}/pokemon/pikachu")
    assert exc.value.upstream_status == 503
    assert exc.value.status_code == 502


@pytest.mark.asyncio
async def test_transport_failure_is_upstream_error_without_status():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamError) as exc:
        await _client(handler).get_json(f"{BASE}/pokemon/pikachu")
    assert exc.value.upstream_status is None


@pytest.mark.asyncio
async def test_non_json_body_is_malformed():
    c = _client(lambda request: httpx.Response(200, text="<html>oops</html>"))
    with pytest.raises(MalformedPayloadError):
        await c.get_json(f"{BASE}/pokemon/pikachu")


@pytest.mark.asyncio
async def test_non_object_body_is_malformed():
    c = _client(lambda request: httpx.Response(200, json=["pikachu"]))
    with pytest.raises(MalformedPayloadError) as exc:
        await c.get_json(f"{BASE}/pokemon/pikachu")
    assert isinstance(exc.value, UpstreamError)


@pytest.mark.asyncio
async def test_404_without_resource_is_neutral_not_found(client):
    url = f"{BASE}/move/nothing/"
    with pytest.raises(NotFoundError) as exc:
        await client.get_json(url)
    assert not isinstance(exc.value, PokemonNotFoundError)
    assert exc.value.name == url
    assert str(exc.value) == f'Resource "{url}" not found'
