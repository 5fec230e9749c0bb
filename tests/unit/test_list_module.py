"""Unit tests for ListModule."""

import pytest

from onerp_admin.application.interfaces import ApiClient
from onerp_admin.application.state import ListModule, QueryCache
from onerp_admin.application.use_cases import ListActions
from onerp_admin.domain.exceptions import ApiRequestError
from onerp_admin.infrastructure.notifications import LoggingNotifier


class FakeCityApiClient(ApiClient):
    def __init__(self):
        self.cities = [{"id": 1, "name": "Bogotá"}, {"id": 2, "name": "Medellín"}]
        self.list_calls = 0
        self.fail_list = False

    async def request(self, path, *, method="GET", body=None, headers=None, params=None):
        if method == "GET" and path == "/onerp/cities":
            self.list_calls += 1
            if self.fail_list:
                raise ApiRequestError("Error 500", status_code=500)
            return list(self.cities)
        if method == "PATCH":
            city_id = int(path.rsplit("/", 1)[-1])
            for city in self.cities:
                if city["id"] == city_id:
                    city.update(body)
                    return city
        raise AssertionError(f"unexpected {method} {path}")


@pytest.fixture
def client() -> FakeCityApiClient:
    return FakeCityApiClient()


@pytest.fixture
def module(client: FakeCityApiClient) -> ListModule:
    return ListModule(
        "cities",
        ListActions(client, "/onerp/cities"),
        QueryCache(),
        LoggingNotifier(),
        stale_time=300,
    )


@pytest.mark.asyncio
async def test_load_returns_full_list(module: ListModule):
    cities = await module.load()

    assert [c["name"] for c in cities] == ["Bogotá", "Medellín"]
    assert module.data == cities
    assert module.query_key == ("cities",)


@pytest.mark.asyncio
async def test_load_reuses_fresh_list(module: ListModule, client: FakeCityApiClient):
    await module.load()
    await module.load()

    assert client.list_calls == 1


@pytest.mark.asyncio
async def test_update_invalidates_and_refetches(module: ListModule, client: FakeCityApiClient):
    await module.load()

    await module.update_mutation.mutate("2", {"name": "Medellín D.E."})
    cities = await module.load()

    assert client.list_calls == 2
    assert cities[1]["name"] == "Medellín D.E."


@pytest.mark.asyncio
async def test_load_error_is_exposed_and_raised(module: ListModule, client: FakeCityApiClient):
    client.fail_list = True

    with pytest.raises(ApiRequestError):
        await module.load()

    assert isinstance(module.error, ApiRequestError)
    assert module.data is None
