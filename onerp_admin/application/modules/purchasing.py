"""Purchasing modules: requisitions, purchase orders, receipts, vendor invoices and evaluations."""

from typing import Any

from onerp_admin.application.interfaces import ApiClient
from onerp_admin.application.modules.registry import ModuleEntry, option_from
from onerp_admin.application.use_cases import (
    EntityRecord,
    PaginatedActions,
    QuerySearchAction,
    SearchPolicy,
)
from onerp_admin.domain.entities import AutocompleteOption, EntityModule

PURCHASING_PATH = "/onerp/purchasing"

# Order lookups live under /orders while the CRUD resource is /purchase-orders.
PURCHASE_ORDER_SEARCH_PATH = f"{PURCHASING_PATH}/orders/search"
ORDER_SEARCH_LIMIT = 10
PENDING_ORDER_STATUSES = "sent,partial_received"


PURCHASE_ORDERS = EntityModule(
    key="purchase-orders",
    base_path=f"{PURCHASING_PATH}/purchase-orders",
    id_field="purchase_order_id",
    label="Purchase orders",
)

REQUISITIONS = EntityModule(
    key="purchase-requisitions",
    base_path=f"{PURCHASING_PATH}/purchase-requisitions",
    id_field="requisition_id",
    label="Purchase requisitions",
)

RECEIPTS = EntityModule(
    key="purchase-receipts",
    base_path=f"{PURCHASING_PATH}/purchase-receipts",
    id_field="receipt_id",
    label="Purchase receipts",
)

VENDOR_INVOICES = EntityModule(
    key="vendor-invoices",
    base_path=f"{PURCHASING_PATH}/vendor-invoices",
    id_field="vendor_invoice_id",
    label="Vendor invoices",
)

VENDOR_EVALUATIONS = EntityModule(
    key="vendor-evaluations",
    base_path=f"{PURCHASING_PATH}/vendor-evaluations",
    id_field="evaluation_id",
    label="Vendor evaluations",
)


class PurchaseOrderActions(PaginatedActions):
    async def approve(self, order_id: str) -> EntityRecord:
        return await self.run_command(order_id, "approve")

    async def reject(self, order_id: str, reason: str) -> EntityRecord:
        return await self.run_command(order_id, "reject", {"rejection_reason": reason})

    async def cancel(self, order_id: str, reason: str) -> EntityRecord:
        return await self.run_command(order_id, "cancel", {"cancellation_reason": reason})

    async def send(self, order_id: str) -> EntityRecord:
        """Send the order to the vendor."""
        return await self.run_command(order_id, "send")


class RequisitionActions(PaginatedActions):
    async def submit(self, requisition_id: str) -> EntityRecord:
        return await self.run_command(requisition_id, "submit")

    async def approve(self, requisition_id: str) -> EntityRecord:
        return await self.run_command(requisition_id, "approve")

    async def reject(self, requisition_id: str, reason: str) -> EntityRecord:
        return await self.run_command(requisition_id, "reject", {"reason": reason})

    async def convert_to_purchase_order(
        self, requisition_id: str, line_ids: list[str] | None = None
    ) -> EntityRecord:
        """Create a purchase order from all lines, or only ``line_ids`` when given."""
        payload = {"line_ids": line_ids} if line_ids is not None else {}
        return await self.run_command(requisition_id, "convert-to-po", payload)

    async def cancel(self, requisition_id: str) -> EntityRecord:
        return await self.run_command(requisition_id, "cancel")


class ReceiptActions(PaginatedActions):
    async def start_inspection(self, receipt_id: str) -> EntityRecord:
        return await self.run_command(receipt_id, "start-inspection")

    async def complete_inspection(
        self, receipt_id: str, line_results: list[dict[str, Any]]
    ) -> EntityRecord:
        """``line_results`` items: ``{"line_id", "status": "passed"|"failed", "notes"?}``."""
        return await self.run_command(
            receipt_id, "complete-inspection", {"line_results": line_results}
        )

    async def confirm(self, receipt_id: str) -> EntityRecord:
        return await self.run_command(receipt_id, "confirm")

    async def cancel(self, receipt_id: str) -> EntityRecord:
        return await self.run_command(receipt_id, "cancel")

    async def create_from_purchase_order(
        self, purchase_order_id: str, line_ids: list[str] | None = None
    ) -> EntityRecord:
        payload = {"line_ids": line_ids} if line_ids is not None else {}
        return await self.post(f"from-purchase-order/{purchase_order_id}", payload)


class VendorInvoiceActions(PaginatedActions):
    """Vendor invoices go through three-way matching against orders and receipts."""

    async def submit_for_match(self, invoice_id: str) -> EntityRecord:
        return await self.run_command(invoice_id, "submit-match")

    async def match_purchase_order(self, invoice_id: str, purchase_order_id: str) -> EntityRecord:
        return await self.run_command(
            invoice_id, "match-po", {"purchase_order_id": purchase_order_id}
        )

    async def approve_variance(
        self, invoice_id: str, line_id: str, notes: str | None = None
    ) -> EntityRecord:
        payload: dict[str, Any] = {"line_id": line_id}
        if notes is not None:
            payload["notes"] = notes
        return await self.run_command(invoice_id, "approve-variance", payload)

    async def post_invoice(self, invoice_id: str) -> EntityRecord:
        return await self.run_command(invoice_id, "post")

    async def hold_payment(
        self, invoice_id: str, reason: str, notes: str | None = None
    ) -> EntityRecord:
        payload: dict[str, Any] = {"hold_reason": reason}
        if notes is not None:
            payload["hold_notes"] = notes
        return await self.run_command(invoice_id, "hold", payload)

    async def release_hold(self, invoice_id: str) -> EntityRecord:
        return await self.run_command(invoice_id, "release-hold")

    async def cancel(self, invoice_id: str, reason: str) -> EntityRecord:
        return await self.run_command(invoice_id, "cancel", {"cancellation_reason": reason})

    async def find_by_vendor(
        self, vendor_id: str, *, limit: int = 10, cursor: str | None = None
    ) -> list[EntityRecord]:
        params: dict[str, Any] = {"limit": limit}
        if cursor:
            params["cursor"] = cursor
        return await self.fetch(f"by-vendor/{vendor_id}", params)

    async def find_by_purchase_order(self, purchase_order_id: str) -> list[EntityRecord]:
        return await self.fetch(f"by-po/{purchase_order_id}")


class VendorEvaluationActions(PaginatedActions):
    async def submit(self, evaluation_id: str) -> EntityRecord:
        return await self.run_command(evaluation_id, "submit")

    async def approve(self, evaluation_id: str) -> EntityRecord:
        return await self.run_command(evaluation_id, "approve")

    async def reject(self, evaluation_id: str, reason: str) -> EntityRecord:
        return await self.run_command(evaluation_id, "reject", {"reason": reason})

    async def calculate_scores(self, evaluation_id: str) -> EntityRecord:
        """Returns ``{"message", "overall_score", "classification"}``."""
        return await self.run_command(evaluation_id, "calculate-scores")

    async def get_vendor_history(self, vendor_id: str) -> EntityRecord:
        return await self.fetch(f"vendor/{vendor_id}/history")


# ── Order lookups ──

def purchase_order_to_option(order: EntityRecord) -> AutocompleteOption:
    vendor = order.get("vendor") or {}
    return option_from(
        order.get("order_id"),
        order.get("order_number"),
        vendor_name=vendor.get("comercial_name") or vendor.get("legal_name"),
        order_date=order.get("order_date"),
        total_amount=order.get("total_amount"),
        status=order.get("status"),
    )


def build_purchase_order_search(
    client: ApiClient, policy: SearchPolicy | None = None
) -> QuerySearchAction:
    return QuerySearchAction(
        client,
        PURCHASE_ORDER_SEARCH_PATH,
        purchase_order_to_option,
        limit=ORDER_SEARCH_LIMIT,
        policy=policy,
    )


def build_pending_purchase_order_search(
    client: ApiClient, policy: SearchPolicy | None = None
) -> QuerySearchAction:
    """Orders still waiting for goods to be received."""
    return QuerySearchAction(
        client,
        PURCHASE_ORDER_SEARCH_PATH,
        purchase_order_to_option,
        limit=ORDER_SEARCH_LIMIT,
        extra_params={"status": PENDING_ORDER_STATUSES},
        policy=policy,
    )


MODULES: list[ModuleEntry] = [
    (PURCHASE_ORDERS, PurchaseOrderActions),
    (REQUISITIONS, RequisitionActions),
    (RECEIPTS, ReceiptActions),
    (VENDOR_INVOICES, VendorInvoiceActions),
    (VENDOR_EVALUATIONS, VendorEvaluationActions),
]

SEARCHES = {
    "purchase-orders": build_purchase_order_search,
    "pending-purchase-orders": build_pending_purchase_order_search,
}
