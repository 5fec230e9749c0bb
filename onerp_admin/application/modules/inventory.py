"""Inventory modules: products, warehouses, lots, stock, kardex, adjustments and counts."""

from typing import Any, Literal

from onerp_admin.application.modules.registry import ModuleEntry
from onerp_admin.application.use_cases import EntityRecord, PaginatedActions
from onerp_admin.domain.entities import AutocompleteFieldMapping, EntityModule

INVENTORY_PATH = "/onerp/inventory"

LotStrategy = Literal["FIFO", "FEFO"]


PRODUCTS = EntityModule(
    key="products",
    base_path=f"{INVENTORY_PATH}/products",
    id_field="product_id",
    search_mapping=AutocompleteFieldMapping(
        code="product_id",
        value="name",
        search_fields=("sku", "name", "barcode"),
        meta_fields=("sku", "product_type", "base_price", "average_cost"),
    ),
    label="Products",
)

PRODUCT_CATEGORIES = EntityModule(
    key="product-categories",
    base_path=f"{INVENTORY_PATH}/product-categories",
    id_field="category_id",
    search_mapping=AutocompleteFieldMapping(
        code="category_id",
        value="name",
        search_fields=("code", "name"),
        meta_fields=("code", "level", "path"),
    ),
    label="Product categories",
)

WAREHOUSES = EntityModule(
    key="warehouses",
    base_path=f"{INVENTORY_PATH}/warehouses",
    id_field="warehouse_id",
    search_mapping=AutocompleteFieldMapping(
        code="warehouse_id",
        value="name",
        search_fields=("code", "name"),
        meta_fields=("code", "city", "is_default"),
    ),
    label="Warehouses",
)

WAREHOUSE_LOCATIONS = EntityModule(
    key="warehouse-locations",
    base_path=f"{INVENTORY_PATH}/warehouse-locations",
    id_field="location_id",
    search_mapping=AutocompleteFieldMapping(
        code="location_id",
        value="name",
        search_fields=("code", "name", "full_path"),
        meta_fields=("code", "warehouse_id", "location_type"),
    ),
    label="Warehouse locations",
)

LOTS = EntityModule(
    key="lots",
    base_path=f"{INVENTORY_PATH}/lots",
    id_field="lot_id",
    search_mapping=AutocompleteFieldMapping(
        code="lot_id",
        value="lot_number",
        search_fields=("lot_number", "internal_lot", "supplier_lot"),
        meta_fields=("lot_number", "product_id", "current_quantity", "expiration_date", "status"),
    ),
    label="Lots",
)

STOCK_LEVELS = EntityModule(
    key="stock-levels",
    base_path=f"{INVENTORY_PATH}/stock-levels",
    id_field="stock_level_id",
    label="Stock levels",
)

KARDEX = EntityModule(
    key="kardex",
    base_path=f"{INVENTORY_PATH}/kardex",
    id_field="kardex_id",
    label="Kardex",
)

MOVEMENT_REASONS = EntityModule(
    key="movement-reasons",
    base_path=f"{INVENTORY_PATH}/movement-reasons",
    id_field="reason_id",
    label="Movement reasons",
)

ADJUSTMENTS = EntityModule(
    key="adjustments",
    base_path=f"{INVENTORY_PATH}/adjustments",
    id_field="adjustment_id",
    label="Inventory adjustments",
)

INVENTORY_COUNTS = EntityModule(
    key="inventory-counts",
    base_path=f"{INVENTORY_PATH}/inventory-counts",
    id_field="count_id",
    label="Inventory counts",
)


class ProductActions(PaginatedActions):
    async def get_stock(self, product_id: str) -> list[EntityRecord]:
        """Stock levels of one product across warehouses."""
        return await self._client.request(
            f"{STOCK_LEVELS.base_path}/by-product/{product_id}", method="GET"
        )

    async def get_kardex(self, product_id: str) -> list[EntityRecord]:
        """Movement history (kardex entries) of one product."""
        return await self._client.request(
            f"{KARDEX.base_path}/by-product/{product_id}", method="GET"
        )


class WarehouseActions(PaginatedActions):
    async def get_locations(self, warehouse_id: str) -> list[EntityRecord]:
        return await self.fetch(f"{warehouse_id}/locations")

    async def get_stock(self, warehouse_id: str) -> list[EntityRecord]:
        return await self.fetch(f"{warehouse_id}/stock")

    async def set_default(self, warehouse_id: str) -> EntityRecord:
        """Make this warehouse the company default; the previous default is cleared server-side."""
        return await self.run_command(warehouse_id, "set-default")


class LotActions(PaginatedActions):
    async def get_available(
        self,
        product_id: str,
        warehouse_id: str,
        strategy: LotStrategy = "FIFO",
        quantity_needed: float | None = None,
    ) -> list[EntityRecord]:
        """Lots with stock for a product in a warehouse, ordered by the picking strategy.

        FIFO orders by receipt date, FEFO by expiration date.
        """
        body: dict[str, Any] = {
            "product_id": product_id,
            "warehouse_id": warehouse_id,
            "strategy": strategy,
        }
        if quantity_needed is not None:
            body["quantity_needed"] = quantity_needed
        return await self.post("available", body)


class _DocumentLinesMixin:
    """Line endpoints shared by documents with editable lines.

    Lines are created under their document (``{base}/{id}/lines``) but
    addressed by their own id afterwards (``{base}/lines/{line_id}``).
    """

    async def get_lines(self, document_id: str) -> list[EntityRecord]:
        return await self.fetch(f"{document_id}/lines")

    async def add_line(self, document_id: str, line: EntityRecord) -> EntityRecord:
        return await self.run_command(document_id, "lines", line)

    async def update_line(self, line_id: str, data: EntityRecord) -> EntityRecord:
        return await self._call("PATCH", f"lines/{line_id}", body=data)

    async def remove_line(self, line_id: str) -> None:
        await self._call("DELETE", f"lines/{line_id}")


class AdjustmentActions(_DocumentLinesMixin, PaginatedActions):
    """Adjustment workflow: draft -> submitted -> approved/rejected -> posted, or cancelled."""

    async def get_with_lines(self, adjustment_id: str) -> EntityRecord:
        return await self.fetch(f"{adjustment_id}/with-lines")

    async def submit(self, adjustment_id: str) -> EntityRecord:
        return await self.run_command(adjustment_id, "submit")

    async def approve(self, adjustment_id: str) -> EntityRecord:
        return await self.run_command(adjustment_id, "approve")

    async def reject(self, adjustment_id: str, reason: str | None = None) -> EntityRecord:
        payload = {"reason": reason} if reason is not None else {}
        return await self.run_command(adjustment_id, "reject", payload)

    async def post_adjustment(self, adjustment_id: str) -> EntityRecord:
        """Apply the adjustment to stock."""
        return await self.run_command(adjustment_id, "post")

    async def cancel(self, adjustment_id: str, reason: str) -> EntityRecord:
        return await self.run_command(adjustment_id, "cancel", {"reason": reason})


class InventoryCountActions(_DocumentLinesMixin, PaginatedActions):
    async def start(self, count_id: str) -> EntityRecord:
        return await self.run_command(count_id, "start")

    async def complete(self, count_id: str) -> EntityRecord:
        return await self.run_command(count_id, "complete")

    async def approve(self, count_id: str) -> EntityRecord:
        return await self.run_command(count_id, "approve")

    async def cancel(self, count_id: str) -> EntityRecord:
        return await self.run_command(count_id, "cancel")


MODULES: list[ModuleEntry] = [
    (PRODUCTS, ProductActions),
    (PRODUCT_CATEGORIES, None),
    (WAREHOUSES, WarehouseActions),
    (WAREHOUSE_LOCATIONS, None),
    (LOTS, LotActions),
    (STOCK_LEVELS, None),
    (KARDEX, None),
    (MOVEMENT_REASONS, None),
    (ADJUSTMENTS, AdjustmentActions),
    (INVENTORY_COUNTS, InventoryCountActions),
]
