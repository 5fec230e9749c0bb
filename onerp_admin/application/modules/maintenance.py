"""Maintenance modules: assets, plans, failure codes, work orders and downtime."""

from typing import Literal

from onerp_admin.application.interfaces import ApiClient
from onerp_admin.application.modules.registry import ModuleEntry, option_from
from onerp_admin.application.use_cases import (
    EntityRecord,
    PaginatedActions,
    QuerySearchAction,
    SearchPolicy,
)
from onerp_admin.domain.entities import AutocompleteOption, EntityModule

MAINTENANCE_PATH = "/onerp/maintenance"
PRODUCT_SEARCH_PATH = "/onerp/inventory/products/search"

CodeType = Literal["failure", "cause", "action"]


ASSETS = EntityModule(
    key="assets",
    base_path=f"{MAINTENANCE_PATH}/assets",
    id_field="asset_id",
    label="Assets",
)

PLANS = EntityModule(
    key="maintenance-plans",
    base_path=f"{MAINTENANCE_PATH}/plans",
    id_field="plan_id",
    label="Maintenance plans",
)

FAILURE_CODES = EntityModule(
    key="failure-codes",
    base_path=f"{MAINTENANCE_PATH}/failure-codes",
    id_field="failure_code_id",
    label="Failure codes",
)

WORK_ORDERS = EntityModule(
    key="work-orders",
    base_path=f"{MAINTENANCE_PATH}/work-orders",
    id_field="work_order_id",
    label="Work orders",
)

DOWNTIME = EntityModule(
    key="downtime",
    base_path=f"{MAINTENANCE_PATH}/downtime",
    id_field="downtime_id",
    label="Downtime",
)


class AssetActions(PaginatedActions):
    async def record_meter_reading(self, asset_id: str, reading: EntityRecord) -> EntityRecord:
        """``reading``: ``{"reading_value", "reading_date"?, "notes"?}``."""
        return await self.run_command(asset_id, "meter-reading", reading)

    async def get_meter_readings(self, asset_id: str) -> list[EntityRecord]:
        return await self.fetch(f"{asset_id}/meter-readings")

    async def update_status(
        self, asset_id: str, status: str, notes: str | None = None
    ) -> EntityRecord:
        payload = {"status": status}
        if notes is not None:
            payload["notes"] = notes
        return await self.run_command(asset_id, "status", payload, method="PATCH")


class MaintenancePlanActions(PaginatedActions):
    async def find_active(self) -> list[EntityRecord]:
        return await self.fetch("active")

    async def find_due(self, days: int = 7) -> list[EntityRecord]:
        """Plans with a service due within ``days`` days."""
        return await self.fetch("due", {"days": days})

    async def find_by_asset(self, asset_id: str) -> list[EntityRecord]:
        return await self.fetch(f"by-asset/{asset_id}")

    async def activate(self, plan_id: str) -> EntityRecord:
        return await self.run_command(plan_id, "activate")

    async def deactivate(self, plan_id: str) -> EntityRecord:
        return await self.run_command(plan_id, "deactivate")


class FailureCodeActions(PaginatedActions):
    """Failure, cause and action codes share one resource, told apart by type."""

    async def find_by_type(self, code_type: CodeType) -> list[EntityRecord]:
        return await self.fetch(f"type/{code_type}")

    async def get_causes(self, failure_code_id: str) -> list[EntityRecord]:
        return await self.fetch(f"{failure_code_id}/causes")

    async def link_cause(self, failure_code_id: str, cause_code_id: str) -> None:
        await self._call("POST", f"{failure_code_id}/causes/{cause_code_id}")

    async def unlink_cause(self, failure_code_id: str, cause_code_id: str) -> None:
        await self._call("DELETE", f"{failure_code_id}/causes/{cause_code_id}")


class WorkOrderActions(PaginatedActions):
    """Work order lifecycle. State transitions are PATCH requests on the order.

    approve -> start -> (hold) -> complete -> close, or cancel at any open stage.
    """

    async def _transition(self, work_order_id: str, command: str, data: EntityRecord) -> EntityRecord:
        return await self.run_command(work_order_id, command, data, method="PATCH")

    async def approve(self, work_order_id: str, data: EntityRecord) -> EntityRecord:
        return await self._transition(work_order_id, "approve", data)

    async def start(self, work_order_id: str, data: EntityRecord) -> EntityRecord:
        return await self._transition(work_order_id, "start", data)

    async def hold(self, work_order_id: str, data: EntityRecord) -> EntityRecord:
        return await self._transition(work_order_id, "hold", data)

    async def complete(self, work_order_id: str, data: EntityRecord) -> EntityRecord:
        return await self._transition(work_order_id, "complete", data)

    async def close(self, work_order_id: str, data: EntityRecord) -> EntityRecord:
        return await self._transition(work_order_id, "close", data)

    async def cancel(self, work_order_id: str, data: EntityRecord) -> EntityRecord:
        return await self._transition(work_order_id, "cancel", data)

    async def complete_task(
        self, work_order_id: str, task_id: str, data: EntityRecord
    ) -> EntityRecord:
        return await self._transition(work_order_id, f"tasks/{task_id}/complete", data)

    async def issue_part(
        self, work_order_id: str, part_id: str, data: EntityRecord
    ) -> EntityRecord:
        return await self._transition(work_order_id, f"parts/{part_id}/issue", data)

    async def record_downtime(self, work_order_id: str, data: EntityRecord) -> EntityRecord:
        return await self._transition(work_order_id, "downtime", data)

    async def add_labor(self, work_order_id: str, data: EntityRecord) -> EntityRecord:
        return await self.run_command(work_order_id, "labor", data)


class DowntimeActions(PaginatedActions):
    async def resolve(
        self,
        downtime_id: str,
        end_datetime: str,
        resolution_notes: str | None = None,
        cause_code_id: str | None = None,
    ) -> EntityRecord:
        payload = {"end_datetime": end_datetime}
        if resolution_notes is not None:
            payload["resolution_notes"] = resolution_notes
        if cause_code_id is not None:
            payload["cause_code_id"] = cause_code_id
        return await self.run_command(downtime_id, "resolve", payload)

    async def find_by_asset(self, asset_id: str) -> list[EntityRecord]:
        return await self.fetch(f"by-asset/{asset_id}")

    async def find_active(self) -> list[EntityRecord]:
        return await self.fetch("active")


# ── Lookups ──

def asset_to_option(asset: EntityRecord) -> AutocompleteOption:
    """Label is ``"<asset_code> - <asset_name>"``."""
    manufacturer = asset.get("manufacturer")
    model = asset.get("model")
    return option_from(
        asset.get("asset_id"),
        f"{asset.get('asset_code', '')} - {asset.get('asset_name', '')}",
        description=" ".join(part for part in (manufacturer, model) if part),
        manufacturer=manufacturer,
        model=model,
        status=asset.get("status"),
    )


def product_to_option(product: EntityRecord) -> AutocompleteOption:
    return option_from(
        product.get("product_id"),
        product.get("name"),
        sku=product.get("sku"),
        uom=product.get("uom"),
    )


def build_asset_search(
    client: ApiClient, policy: SearchPolicy | None = None
) -> QuerySearchAction:
    return QuerySearchAction(
        client, f"{ASSETS.base_path}/search", asset_to_option, policy=policy
    )


def build_plan_product_search(
    client: ApiClient, policy: SearchPolicy | None = None
) -> QuerySearchAction:
    """Spare parts for plan tasks."""
    return QuerySearchAction(client, PRODUCT_SEARCH_PATH, product_to_option, policy=policy)


MODULES: list[ModuleEntry] = [
    (ASSETS, AssetActions),
    (PLANS, MaintenancePlanActions),
    (FAILURE_CODES, FailureCodeActions),
    (WORK_ORDERS, WorkOrderActions),
    (DOWNTIME, DowntimeActions),
]

SEARCHES = {
    "assets": build_asset_search,
    "plan-products": build_plan_product_search,
}
