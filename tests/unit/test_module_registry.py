"""Unit tests for the module registry and the per-area entity wiring."""

import pytest

from onerp_admin.application.interfaces import ApiClient
from onerp_admin.application.modules import ModuleRegistry, build_registry
from onerp_admin.application.modules.inventory import AdjustmentActions, LotActions, ProductActions
from onerp_admin.application.modules.maintenance import WorkOrderActions, asset_to_option
from onerp_admin.application.modules.masters import ThirdPartyActions, build_third_party_payload
from onerp_admin.application.state import ListModule, PaginatedModule, QueryCache
from onerp_admin.application.use_cases import ListActions, SearchAction, SearchPolicy
from onerp_admin.domain.entities import AutocompleteFieldMapping, EntityModule, ModuleKind
from onerp_admin.domain.exceptions import ConfigurationError
from onerp_admin.infrastructure.notifications import LoggingNotifier


class FakeApiClient(ApiClient):
    def __init__(self, response=None):
        self.calls: list[dict] = []
        self.response = response

    async def request(self, path, *, method="GET", body=None, headers=None, params=None):
        self.calls.append({"path": path, "method": method, "body": body, "params": params})
        return self.response


@pytest.fixture
def client() -> FakeApiClient:
    return FakeApiClient()


@pytest.fixture
def registry(client: FakeApiClient) -> ModuleRegistry:
    return build_registry(client)


# ── Registry ──


def test_registry_contains_every_area(registry: ModuleRegistry):
    for key in (
        "banks",
        "third-parties",
        "cities",
        "lots",
        "sales-orders",
        "purchase-orders",
        "work-orders",
        "users",
    ):
        assert key in registry

    assert len({module.base_path for module in registry}) == len(registry)


def test_module_kinds(registry: ModuleRegistry):
    assert registry.get("cities").kind == ModuleKind.LIST
    assert registry.get("states").base_path == "/onerp/state-deparments"
    assert registry.get("banks").kind == ModuleKind.SEARCH_ONLY
    assert registry.get("lots").kind == ModuleKind.PAGINATED


def test_unknown_key_raises(registry: ModuleRegistry):
    with pytest.raises(ConfigurationError):
        registry.get("nope")


def test_search_only_module_has_no_actions(registry: ModuleRegistry):
    with pytest.raises(ConfigurationError):
        registry.actions("countries")


def test_actions_are_built_once_with_entity_class(registry: ModuleRegistry):
    actions = registry.actions("third-parties")

    assert isinstance(actions, ThirdPartyActions)
    assert registry.actions("third-parties") is actions
    assert isinstance(registry.actions("cities"), ListActions)


def test_build_module_matches_kind(registry: ModuleRegistry):
    cache, notifier = QueryCache(), LoggingNotifier()

    lots = registry.build_module("lots", cache, notifier, page_size=25)
    cities = registry.build_module("cities", cache, notifier)

    assert isinstance(lots, PaginatedModule)
    assert lots.pagination.limit == 25
    assert isinstance(cities, ListModule)


def test_register_rejects_duplicates_and_bad_wiring(client: FakeApiClient):
    registry = ModuleRegistry(client)
    registry.register(EntityModule(key="carriers", base_path="/onerp/carriers"))

    with pytest.raises(ConfigurationError):
        registry.register(EntityModule(key="carriers", base_path="/onerp/other"))
    with pytest.raises(ConfigurationError):
        registry.register(
            EntityModule(key="countries", base_path="/onerp/countries", kind=ModuleKind.SEARCH_ONLY)
        )
    with pytest.raises(ConfigurationError):
        registry.register(
            EntityModule(key="cities", base_path="/onerp/cities", kind=ModuleKind.LIST),
            LotActions,
        )


def test_module_without_mapping_has_no_search(registry: ModuleRegistry):
    with pytest.raises(ConfigurationError):
        registry.search("carriers")


@pytest.mark.asyncio
async def test_module_search_uses_registry_limit(client: FakeApiClient):
    client.response = {"data": [{"currency_id": "COP", "name": "Peso", "iso_code": "COP"}]}
    registry = build_registry(client, search_limit=7)

    search = registry.search("currencies")
    options = await search("pes")

    assert isinstance(search, SearchAction)
    assert client.calls[0]["path"] == "/onerp/currencies/pagination"
    assert client.calls[0]["body"] == {"limit": 7, "search": "pes"}
    assert options[0].code == "COP"
    assert options[0].meta == {"iso_code": "COP"}


@pytest.mark.asyncio
async def test_named_search_takes_priority(registry: ModuleRegistry, client: FakeApiClient):
    client.response = {"data": []}

    await registry.search("pending-sales-orders")("SO-1")

    assert client.calls[0]["path"] == "/onerp/sales/orders/search"
    assert client.calls[0]["params"]["status"] == "confirmed,partial_shipped"
    assert client.calls[0]["params"]["limit"] == 10


@pytest.mark.asyncio
async def test_vendor_search_uses_third_parties(registry: ModuleRegistry, client: FakeApiClient):
    client.response = {"data": []}

    await registry.search("vendors", policy=SearchPolicy())("acme")

    assert client.calls[0]["path"] == "/onerp/third-parties/pagination"


# ── Entity commands ──


@pytest.mark.asyncio
async def test_available_lots_request(client: FakeApiClient):
    actions = LotActions(client, "/onerp/inventory/lots")

    await actions.get_available("P1", "W1", "FEFO", quantity_needed=4)

    assert client.calls[0] == {
        "path": "/onerp/inventory/lots/available",
        "method": "POST",
        "body": {
            "product_id": "P1",
            "warehouse_id": "W1",
            "strategy": "FEFO",
            "quantity_needed": 4,
        },
        "params": None,
    }


@pytest.mark.asyncio
async def test_product_stock_uses_stock_level_resource(client: FakeApiClient):
    actions = ProductActions(client, "/onerp/inventory/products")

    await actions.get_stock("P1")
    await actions.get_kardex("P1")

    assert [c["path"] for c in client.calls] == [
        "/onerp/inventory/stock-levels/by-product/P1",
        "/onerp/inventory/kardex/by-product/P1",
    ]


@pytest.mark.asyncio
async def test_adjustment_lines_and_workflow(client: FakeApiClient):
    actions = AdjustmentActions(client, "/onerp/inventory/adjustments")

    await actions.add_line("A1", {"product_id": "P1", "adjusted_quantity": -2})
    await actions.update_line("L9", {"adjusted_quantity": -3})
    await actions.remove_line("L9")
    await actions.reject("A1")
    await actions.cancel("A1", "duplicate")

    assert [(c["method"], c["path"], c["body"]) for c in client.calls] == [
        ("POST", "/onerp/inventory/adjustments/A1/lines", {"product_id": "P1", "adjusted_quantity": -2}),
        ("PATCH", "/onerp/inventory/adjustments/lines/L9", {"adjusted_quantity": -3}),
        ("DELETE", "/onerp/inventory/adjustments/lines/L9", None),
        ("POST", "/onerp/inventory/adjustments/A1/reject", {}),
        ("POST", "/onerp/inventory/adjustments/A1/cancel", {"reason": "duplicate"}),
    ]


@pytest.mark.asyncio
async def test_work_order_transitions_use_patch(client: FakeApiClient):
    actions = WorkOrderActions(client, "/onerp/maintenance/work-orders")

    await actions.start("WO1", {"started_by": "u1"})
    await actions.complete_task("WO1", "T2", {"completed_by": "u1"})
    await actions.add_labor("WO1", {"technician_id": "t1", "hours_worked": 2})

    assert [(c["method"], c["path"]) for c in client.calls] == [
        ("PATCH", "/onerp/maintenance/work-orders/WO1/start"),
        ("PATCH", "/onerp/maintenance/work-orders/WO1/tasks/T2/complete"),
        ("POST", "/onerp/maintenance/work-orders/WO1/labor"),
    ]


@pytest.mark.asyncio
async def test_third_party_create_sends_grouped_payload(client: FakeApiClient):
    actions = ThirdPartyActions(client, "/onerp/third-parties")

    await actions.create(
        {
            "company_id": "C1",
            "tax_id": "900123",
            "legal_name": "Acme SAS",
            "address_city_id": "11001",
            "contact_full_name": "Ana Pérez",
            "bank_name": "Banco Uno",
            "payment_term_id": "PT30",
        }
    )

    body = client.calls[0]["body"]
    assert client.calls[0]["path"] == "/onerp/third-parties"
    assert body["third_party"]["legal_name"] == "Acme SAS"
    assert body["third_party"]["type"] == "customer"
    assert body["third_party"]["status"] == "active"
    assert body["third_party_address"]["city"] == "11001"
    assert body["third_party_address"]["is_default_billing"] is True
    assert body["third_party_contact"]["full_name"] == "Ana Pérez"
    assert body["third_party_bank_account"]["account_type"] == "checking"
    assert body["payment_term_id"] == "PT30"


def test_third_party_payload_omits_unset_optional_fields():
    body = build_third_party_payload({"legal_name": "Acme"})

    assert "payment_term_id" not in body
    assert "website" not in body["third_party"]
    assert "street_line1" not in body["third_party_address"]


def test_asset_option_label():
    option = asset_to_option(
        {"asset_id": "A1", "asset_code": "PMP-01", "asset_name": "Pump", "manufacturer": "Grundfos"}
    )

    assert option.value == "PMP-01 - Pump"
    assert option.meta["description"] == "Grundfos"


def test_entity_module_identify():
    module = EntityModule(
        key="branches",
        base_path="/onerp/branches",
        id_field="branch_id",
        search_mapping=AutocompleteFieldMapping(code="branch_id", value="name"),
    )

    assert module.identify({"branch_id": 12}) == "12"
    with pytest.raises(KeyError):
        module.identify({"name": "North"})
