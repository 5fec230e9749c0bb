"""Sales modules: orders, quotations, price lists, invoices, shipments, returns and credit notes."""

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

SALES_PATH = "/onerp/sales"

ORDER_SEARCH_LIMIT = 10
PENDING_ORDER_STATUSES = "confirmed,partial_shipped"


SALES_ORDERS = EntityModule(
    key="sales-orders",
    base_path=f"{SALES_PATH}/orders",
    id_field="sales_order_id",
    label="Sales orders",
)

QUOTATIONS = EntityModule(
    key="quotations",
    base_path=f"{SALES_PATH}/quotations",
    id_field="quotation_id",
    label="Quotations",
)

PRICE_LISTS = EntityModule(
    key="price-lists",
    base_path=f"{SALES_PATH}/price-lists",
    id_field="price_list_id",
    label="Price lists",
)

INVOICES = EntityModule(
    key="invoices",
    base_path=f"{SALES_PATH}/invoices",
    id_field="invoice_id",
    label="Customer invoices",
)

SHIPMENTS = EntityModule(
    key="shipments",
    base_path=f"{SALES_PATH}/shipments",
    id_field="shipment_id",
    label="Shipments",
)

CREDIT_NOTES = EntityModule(
    key="credit-notes",
    base_path=f"{SALES_PATH}/credit-notes",
    id_field="credit_note_id",
    label="Customer credit notes",
)

RETURNS = EntityModule(
    key="returns",
    base_path=f"{SALES_PATH}/returns",
    id_field="return_id",
    label="Sales returns",
)


def _reason(reason: str | None, field: str = "reason") -> dict[str, Any]:
    return {field: reason} if reason is not None else {}


class SalesOrderActions(PaginatedActions):
    async def approve(self, order_id: str) -> EntityRecord:
        return await self.run_command(order_id, "approve")

    async def reject(self, order_id: str, reason: str) -> EntityRecord:
        return await self.run_command(order_id, "reject", {"rejection_reason": reason})

    async def confirm(self, order_id: str) -> EntityRecord:
        return await self.run_command(order_id, "confirm")

    async def cancel(self, order_id: str, reason: str) -> EntityRecord:
        return await self.run_command(order_id, "cancel", {"cancellation_reason": reason})


class QuotationActions(PaginatedActions):
    async def send(self, quotation_id: str) -> EntityRecord:
        return await self.run_command(quotation_id, "send")

    async def accept(self, quotation_id: str) -> EntityRecord:
        return await self.run_command(quotation_id, "accept")

    async def reject(self, quotation_id: str) -> EntityRecord:
        return await self.run_command(quotation_id, "reject")

    async def convert_to_order(self, quotation_id: str) -> EntityRecord:
        """Returns ``{"message", "sales_order_id"}`` of the order created from the quotation."""
        return await self.run_command(quotation_id, "convert-to-order")


class PriceListActions(PaginatedActions):
    async def activate(self, price_list_id: str) -> EntityRecord:
        return await self.run_command(price_list_id, "activate")

    async def deactivate(self, price_list_id: str) -> EntityRecord:
        return await self.run_command(price_list_id, "deactivate")

    async def duplicate(self, price_list_id: str) -> EntityRecord:
        return await self.run_command(price_list_id, "duplicate")

    async def set_default(self, price_list_id: str) -> EntityRecord:
        return await self.run_command(price_list_id, "set-default")


class InvoiceActions(PaginatedActions):
    """Customer invoices, including electronic invoicing submission (DIAN)."""

    async def create_from_shipment(
        self, shipment_id: str, data: EntityRecord | None = None
    ) -> EntityRecord:
        return await self.post("from-shipment", {"shipment_id": shipment_id, **(data or {})})

    async def create_from_order(
        self, order_id: str, data: EntityRecord | None = None
    ) -> EntityRecord:
        return await self.post("from-order", {"sales_order_id": order_id, **(data or {})})

    async def post_invoice(self, invoice_id: str) -> EntityRecord:
        return await self.run_command(invoice_id, "post")

    async def void(self, invoice_id: str, reason: str | None = None) -> EntityRecord:
        return await self.run_command(invoice_id, "void", _reason(reason))

    async def cancel(self, invoice_id: str, reason: str | None = None) -> EntityRecord:
        return await self.run_command(invoice_id, "cancel", _reason(reason))

    async def send_to_dian(self, invoice_id: str) -> EntityRecord:
        return await self.run_command(invoice_id, "send-to-dian")

    async def get_dian_status(self, invoice_id: str) -> EntityRecord:
        return await self.fetch(f"{invoice_id}/dian-status")

    async def find_by_customer(self, customer_id: str) -> list[EntityRecord]:
        return await self.fetch(f"by-customer/{customer_id}")

    async def find_by_order(self, order_id: str) -> list[EntityRecord]:
        return await self.fetch(f"by-order/{order_id}")


class ShipmentActions(PaginatedActions):
    async def mark_ready(self, shipment_id: str) -> EntityRecord:
        return await self.run_command(shipment_id, "ready")

    async def mark_shipped(
        self,
        shipment_id: str,
        tracking_number: str | None = None,
        carrier_id: str | None = None,
    ) -> EntityRecord:
        payload = {
            key: value
            for key, value in (("tracking_number", tracking_number), ("carrier_id", carrier_id))
            if value is not None
        }
        return await self.run_command(shipment_id, "ship", payload or None)

    async def mark_delivered(self, shipment_id: str) -> EntityRecord:
        return await self.run_command(shipment_id, "deliver")

    async def cancel(self, shipment_id: str) -> EntityRecord:
        return await self.run_command(shipment_id, "cancel")


class CreditNoteActions(PaginatedActions):
    async def create_from_return(
        self, return_id: str, data: EntityRecord | None = None
    ) -> EntityRecord:
        return await self.post("from-return", {"return_id": return_id, **(data or {})})

    async def approve(self, credit_note_id: str) -> EntityRecord:
        return await self.run_command(credit_note_id, "approve")

    async def reject(self, credit_note_id: str, reason: str | None = None) -> EntityRecord:
        return await self.run_command(credit_note_id, "reject", _reason(reason))

    async def post_credit_note(self, credit_note_id: str) -> EntityRecord:
        return await self.run_command(credit_note_id, "post")

    async def void(self, credit_note_id: str, reason: str | None = None) -> EntityRecord:
        return await self.run_command(credit_note_id, "void", _reason(reason))

    async def apply_to_invoice(
        self, credit_note_id: str, invoice_id: str, amount: float
    ) -> EntityRecord:
        return await self.run_command(
            credit_note_id, "apply", {"invoice_id": invoice_id, "amount": amount}
        )

    async def get_applications(self, credit_note_id: str) -> list[EntityRecord]:
        return await self.fetch(f"{credit_note_id}/applications")

    async def find_by_customer(self, customer_id: str) -> list[EntityRecord]:
        return await self.fetch(f"by-customer/{customer_id}")

    async def find_by_invoice(self, invoice_id: str) -> list[EntityRecord]:
        return await self.fetch(f"by-invoice/{invoice_id}")


class ReturnActions(PaginatedActions):
    async def submit(self, return_id: str) -> EntityRecord:
        return await self.run_command(return_id, "submit")

    async def approve(self, return_id: str) -> EntityRecord:
        return await self.run_command(return_id, "approve")

    async def reject(self, return_id: str, reason: str | None = None) -> EntityRecord:
        return await self.run_command(return_id, "reject", _reason(reason))

    async def receive(self, return_id: str) -> EntityRecord:
        return await self.run_command(return_id, "receive")

    async def process(self, return_id: str) -> EntityRecord:
        return await self.run_command(return_id, "process")

    async def cancel(self, return_id: str) -> EntityRecord:
        return await self.run_command(return_id, "cancel")


# ── Order lookups ──

def sales_order_to_option(order: EntityRecord) -> AutocompleteOption:
    """Order number as label; the customer shows its commercial name when it has one."""
    customer = order.get("customer") or {}
    customer_name = customer.get("comercial_name") or customer.get("legal_name")
    return option_from(
        order.get("order_id"),
        order.get("order_number"),
        customer_name=customer_name,
        order_date=order.get("order_date"),
        total_amount=order.get("total_amount"),
        status=order.get("status"),
    )


def build_sales_order_search(
    client: ApiClient, policy: SearchPolicy | None = None
) -> QuerySearchAction:
    return QuerySearchAction(
        client,
        f"{SALES_ORDERS.base_path}/search",
        sales_order_to_option,
        limit=ORDER_SEARCH_LIMIT,
        policy=policy,
    )


def build_pending_sales_order_search(
    client: ApiClient, policy: SearchPolicy | None = None
) -> QuerySearchAction:
    """Orders that can still be shipped."""
    return QuerySearchAction(
        client,
        f"{SALES_ORDERS.base_path}/search",
        sales_order_to_option,
        limit=ORDER_SEARCH_LIMIT,
        extra_params={"status": PENDING_ORDER_STATUSES},
        policy=policy,
    )


MODULES: list[ModuleEntry] = [
    (SALES_ORDERS, SalesOrderActions),
    (QUOTATIONS, QuotationActions),
    (PRICE_LISTS, PriceListActions),
    (INVOICES, InvoiceActions),
    (SHIPMENTS, ShipmentActions),
    (CREDIT_NOTES, CreditNoteActions),
    (RETURNS, ReturnActions),
]

SEARCHES = {
    "sales-orders": build_sales_order_search,
    "pending-sales-orders": build_pending_sales_order_search,
}
