"""Generated documents: invoice and shipment PDFs, e-mail delivery and signed downloads."""

from typing import Literal

from onerp_admin.application.interfaces import ApiClient
from onerp_admin.application.schemas import GeneratedPdf, SendEmailRequest, SignedUrl

DOCUMENTS_PATH = "/onerp/documents"

DocumentKind = Literal["invoices", "shipments"]


class DocumentService:
    def __init__(self, client: ApiClient):
        self._client = client

    async def generate_pdf(self, kind: DocumentKind, document_id: str) -> GeneratedPdf:
        """Render (or re-render) the PDF of an invoice or shipment."""
        payload = await self._client.request(
            f"{DOCUMENTS_PATH}/{kind}/{document_id}/pdf", method="POST"
        )
        return GeneratedPdf.model_validate(payload)

    async def send_email(
        self, kind: DocumentKind, document_id: str, request: SendEmailRequest
    ) -> str:
        """E-mail the document. Returns the server confirmation message."""
        payload = await self._client.request(
            f"{DOCUMENTS_PATH}/{kind}/{document_id}/email",
            method="POST",
            body=request.model_dump(by_alias=True, exclude_none=True),
        )
        return (payload or {}).get("message", "")

    async def get_download_url(self, path: str) -> SignedUrl:
        payload = await self._client.request(
            f"{DOCUMENTS_PATH}/download", method="GET", params={"path": path}
        )
        return SignedUrl.model_validate(payload)

    async def generate_invoice_pdf(self, invoice_id: str) -> GeneratedPdf:
        return await self.generate_pdf("invoices", invoice_id)

    async def send_invoice_email(self, invoice_id: str, request: SendEmailRequest) -> str:
        return await self.send_email("invoices", invoice_id, request)

    async def generate_shipment_pdf(self, shipment_id: str) -> GeneratedPdf:
        return await self.generate_pdf("shipments", shipment_id)

    async def send_shipment_email(self, shipment_id: str, request: SendEmailRequest) -> str:
        return await self.send_email("shipments", shipment_id, request)
