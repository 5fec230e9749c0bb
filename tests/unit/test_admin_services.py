"""Unit tests for the system administration and document services."""

import pytest
from pydantic import ValidationError

from onerp_admin.application.interfaces import ApiClient
from onerp_admin.application.modules import (
    AuditLogService,
    DocumentService,
    FeatureFlagService,
    PreferenceService,
)
from onerp_admin.application.modules.admin import UserActions
from onerp_admin.application.schemas import AuditLogFilters, SendEmailRequest


class FakeApiClient(ApiClient):
    def __init__(self, response=None):
        self.calls: list[dict] = []
        self.response = response

    async def request(self, path, *, method="GET", body=None, headers=None, params=None):
        self.calls.append({"path": path, "method": method, "body": body, "params": params})
        return self.response


# ── Feature flags ──


@pytest.mark.asyncio
async def test_feature_flag_check():
    client = FakeApiClient({"code": "multi_currency", "enabled": True, "source": "company"})
    service = FeatureFlagService(client)

    status = await service.is_enabled("multi_currency")

    assert client.calls[0]["path"] == "/onerp/system/feature-flags/check"
    assert client.calls[0]["body"] == {"code": "multi_currency"}
    assert status.enabled is True
    assert status.source == "company"


@pytest.mark.asyncio
async def test_set_company_flag_uses_gateway_field_names():
    client = FakeApiClient()
    service = FeatureFlagService(client)

    await service.set_company_flag("lots", False, company_id="C1")

    assert client.calls[0]["method"] == "PATCH"
    assert client.calls[0]["body"] == {"code": "lots", "enabled": False, "company_Id": "C1"}


@pytest.mark.asyncio
async def test_company_flags_query():
    client = FakeApiClient({"lots": True})
    service = FeatureFlagService(client)

    await service.get_company_flags()
    await service.get_company_flags("C1")

    assert client.calls[0]["params"] is None
    assert client.calls[1]["params"] == {"company_Id": "C1"}


# ── Audit ──


@pytest.mark.asyncio
async def test_audit_filters_are_renamed_for_the_gateway():
    client = FakeApiClient({"data": [], "total": 0, "limit": 50, "offset": 0})
    service = AuditLogService(client)

    page = await service.get_logs(
        AuditLogFilters(
            company_id="C1",
            action="DELETE",
            date_from="2024-01-01",
            date_to="2024-01-31",
            limit=50,
        )
    )

    assert client.calls[0]["path"] == "/onerp/system/audit/logs"
    assert client.calls[0]["body"] == {
        "company_id": "C1",
        "action": "DELETE",
        "start_date": "2024-01-01",
        "end_date": "2024-01-31",
        "limit": 50,
    }
    assert page.total == 0


def test_audit_filters_reject_unknown_action():
    with pytest.raises(ValidationError):
        AuditLogFilters(action="EXPORT")


@pytest.mark.asyncio
async def test_entity_history():
    client = FakeApiClient([])
    service = AuditLogService(client)

    await service.get_entity_history("product", "P1")

    assert client.calls[0]["body"] == {"entity_type": "product", "entity_id": "P1"}


# ── Preferences ──


@pytest.mark.asyncio
async def test_preference_resolution():
    client = FakeApiClient({"code": "decimals", "value": 2, "effective_scope": "company"})
    service = PreferenceService(client)

    resolved = await service.resolve("decimals", company_id="C1")

    assert client.calls[0]["path"] == "/onerp/system/preferences/resolve"
    assert client.calls[0]["body"] == {"code": "decimals", "company_id": "C1"}
    assert resolved.effective_scope == "company"


@pytest.mark.asyncio
async def test_preference_definitions_filters():
    client = FakeApiClient([])
    service = PreferenceService(client)

    await service.get_definitions()
    await service.get_definitions(module="sales", search="price")

    assert client.calls[0]["params"] is None
    assert client.calls[1]["params"] == {"module": "sales", "search": "price"}


@pytest.mark.asyncio
async def test_resolve_all_builds_models():
    client = FakeApiClient({"decimals": {"code": "decimals", "value": 2}})
    service = PreferenceService(client)

    resolved = await service.resolve_all(user_id="U1")

    assert resolved["decimals"].value == 2
    assert client.calls[0]["body"] == {"user_id": "U1"}


# ── Users ──


@pytest.mark.asyncio
async def test_user_status_update():
    client = FakeApiClient({})
    actions = UserActions(client, "/onerp/user")

    await actions.update_status("U1", "blocked")

    assert client.calls[0] == {
        "path": "/onerp/user/U1",
        "method": "PATCH",
        "body": {"status": "blocked"},
        "params": None,
    }


# ── Documents ──


@pytest.mark.asyncio
async def test_invoice_pdf_generation():
    client = FakeApiClient({"path": "inv/1.pdf", "url": "https://files/inv/1.pdf", "filename": "1.pdf"})
    service = DocumentService(client)

    pdf = await service.generate_invoice_pdf("INV1")

    assert client.calls[0]["path"] == "/onerp/documents/invoices/INV1/pdf"
    assert pdf.filename == "1.pdf"


@pytest.mark.asyncio
async def test_shipment_email_body():
    client = FakeApiClient({"message": "sent"})
    service = DocumentService(client)

    message = await service.send_shipment_email(
        "S1", SendEmailRequest(recipients=["ops@example.com"], attach_pdf=True)
    )

    assert message == "sent"
    assert client.calls[0]["path"] == "/onerp/documents/shipments/S1/email"
    assert client.calls[0]["body"] == {"recipients": ["ops@example.com"], "attachPdf": True}


def test_email_requires_a_recipient():
    with pytest.raises(ValidationError):
        SendEmailRequest(recipients=[])


@pytest.mark.asyncio
async def test_download_url():
    client = FakeApiClient({"url": "https://signed"})
    service = DocumentService(client)

    signed = await service.get_download_url("inv/1 final.pdf")

    assert client.calls[0]["params"] == {"path": "inv/1 final.pdf"}
    assert signed.url == "https://signed"
