"""Master data modules: banks, currencies, branches, geography, fiscal and payment catalogs."""

from typing import Any

from onerp_admin.application.interfaces import ApiClient
from onerp_admin.application.modules.registry import ModuleEntry
from onerp_admin.application.use_cases import (
    EntityRecord,
    PaginatedActions,
    SearchAction,
    SearchPolicy,
)
from onerp_admin.domain.entities import (
    AutocompleteFieldMapping,
    EntityModule,
    ModuleKind,
)

# ── Payments ──

BANKS = EntityModule(
    key="banks",
    base_path="/onerp/banks",
    kind=ModuleKind.SEARCH_ONLY,
    search_mapping=AutocompleteFieldMapping(
        code="id",
        value="bank_name",
        search_fields=("bank_name", "bank_code"),
    ),
    label="Banks",
)

BANK_ACCOUNTS = EntityModule(
    key="bank-accounts",
    base_path="/onerp/bank-accounts",
    id_field="bank_account_id",
    label="Bank accounts",
)

PAYMENT_METHODS = EntityModule(
    key="payment-methods",
    base_path="/onerp/payment-methods",
    id_field="payment_method_id",
    label="Payment methods",
)

PAYMENT_TERMS = EntityModule(
    key="payment-terms",
    base_path="/onerp/payment-terms",
    id_field="payment_term_id",
    search_mapping=AutocompleteFieldMapping(
        code="payment_term_id",
        value="name",
        search_fields=("code", "name"),
        meta_fields=("code", "days", "is_default"),
    ),
    label="Payment terms",
)

# ── Fiscal ──

CURRENCIES = EntityModule(
    key="currencies",
    base_path="/onerp/currencies",
    id_field="currency_id",
    search_mapping=AutocompleteFieldMapping(
        code="currency_id",
        value="name",
        search_fields=("name", "iso_code"),
    ),
    label="Currencies",
)

TAX_CODES = EntityModule(
    key="tax-codes",
    base_path="/onerp/tax-codes",
    kind=ModuleKind.SEARCH_ONLY,
    id_field="tax_code_id",
    search_mapping=AutocompleteFieldMapping(
        code="tax_code_id",
        value="name",
        search_fields=("code", "name", "tax_type"),
        meta_fields=("code", "tax_type", "tax_rate"),
    ),
    label="Tax codes",
)

TAX_RESPONSIBILITIES = EntityModule(
    key="tax-responsibilities",
    base_path="/onerp/tax-responsibilities",
    search_mapping=AutocompleteFieldMapping(
        code="id",
        value="name",
        search_fields=("code", "name"),
        meta_fields=("code", "responsibility_type"),
    ),
    label="Tax responsibilities",
)

ECONOMIC_ACTIVITIES = EntityModule(
    key="economic-activities",
    base_path="/onerp/economic-activities",
    search_mapping=AutocompleteFieldMapping(
        code="id",
        value="name",
        search_fields=("code", "name", "section"),
        meta_fields=("code", "section"),
    ),
    label="Economic activities",
)

# ── Documents & numbering ──

DOCUMENT_TYPES = EntityModule(
    key="document-types",
    base_path="/onerp/document-types",
    id_field="document_type_id",
    label="Document types",
)

DOCUMENT_SEQUENCES = EntityModule(
    key="document-sequences",
    base_path="/onerp/document-sequences",
    id_field="sequence_id",
    label="Document sequences",
)

# ── Organization & logistics ──

BRANCHES = EntityModule(
    key="branches",
    base_path="/onerp/branches",
    id_field="branch_id",
    search_mapping=AutocompleteFieldMapping(
        code="branch_id",
        value="name",
        search_fields=("code", "name"),
        meta_fields=("code", "type"),
    ),
    label="Branches",
)

CARRIERS = EntityModule(
    key="carriers",
    base_path="/onerp/carriers",
    id_field="carrier_id",
    label="Carriers",
)

SHIPPING_METHODS = EntityModule(
    key="shipping-methods",
    base_path="/onerp/shipping-methods",
    id_field="shipping_method_id",
    label="Shipping methods",
)

INCOTERMS = EntityModule(
    key="incoterms",
    base_path="/onerp/incoterms",
    id_field="incoterm_id",
    label="Incoterms",
)

UNITS_OF_MEASURE = EntityModule(
    key="uom",
    base_path="/onerp/uom",
    kind=ModuleKind.SEARCH_ONLY,
    id_field="uom_id",
    search_mapping=AutocompleteFieldMapping(
        code="uom_id",
        value="name",
        search_fields=("code", "name"),
        meta_fields=("code", "category", "conversion_factor"),
    ),
    label="Units of measure",
)

# ── Geography ──

COUNTRIES = EntityModule(
    key="countries",
    base_path="/onerp/countries",
    kind=ModuleKind.SEARCH_ONLY,
    search_mapping=AutocompleteFieldMapping(
        code="id",
        value="name",
        search_fields=("name", "iso_code"),
    ),
    label="Countries",
)

STATES = EntityModule(
    key="states",
    base_path="/onerp/state-deparments",
    kind=ModuleKind.LIST,
    search_mapping=AutocompleteFieldMapping(
        code="id",
        value="name",
        search_fields=("name", "code"),
    ),
    label="States / departments",
)

CITIES = EntityModule(
    key="cities",
    base_path="/onerp/cities",
    kind=ModuleKind.LIST,
    search_mapping=AutocompleteFieldMapping(
        code="id",
        value="name",
        search_fields=("name", "code", "dane_code"),
        meta_fields=("code", "dane_code", "is_capital"),
    ),
    label="Cities",
)

REGIONS_ZONES = EntityModule(
    key="regions-zones",
    base_path="/onerp/regions-zones",
    id_field="region_zone_id",
    label="Regions and zones",
)

# ── Third parties ──

THIRD_PARTY_MAPPING = AutocompleteFieldMapping(
    code="third_party_id",
    value="legal_name",
    search_fields=("legal_name", "comercial_name", "tax_id"),
    meta_fields=("tax_id", "comercial_name", "type", "email", "phone"),
)

THIRD_PARTIES = EntityModule(
    key="third-parties",
    base_path="/onerp/third-parties",
    id_field="third_party_id",
    search_mapping=THIRD_PARTY_MAPPING,
    label="Third parties",
)


def _compact(values: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


def build_third_party_payload(data: EntityRecord) -> dict[str, Any]:
    """Group the flat third-party form into the nested creation payload.

    Address, contact and bank account fields arrive prefixed
    (``address_*``, ``contact_*``, ``bank_*``) and become the primary address,
    contact and account of the new third party.
    """
    return _compact({
        "third_party": _compact({
            "company_id": data.get("company_id", ""),
            "type": data.get("type") or "customer",
            "tax_id": data.get("tax_id", ""),
            "verification_dv": data.get("verification_dv"),
            "legal_name": data.get("legal_name", ""),
            "comercial_name": data.get("comercial_name"),
            "email": data.get("email"),
            "phone": data.get("phone"),
            "mobili": data.get("mobili"),
            "website": data.get("website"),
            "status": data.get("status") or "active",
            "tax_regime": data.get("tax_regime", ""),
            "credit_limit": data.get("credit_limit"),
            "balance": data.get("balance", 0),
        }),
        "third_party_address": _compact({
            "label": data.get("address_label", "billing"),
            "country": data.get("address_country_id"),
            "state": data.get("address_state_id"),
            "city": data.get("address_city_id"),
            "postal_code": data.get("address_postal_code"),
            "street_line1": data.get("address_street_line1"),
            "street_line2": data.get("address_street_line2"),
            "is_default_billing": True,
            "is_default_shipping": True,
        }),
        "third_party_contact": _compact({
            "full_name": data.get("contact_full_name", ""),
            "role": data.get("contact_role"),
            "email": data.get("contact_email"),
            "phone": data.get("contact_phone"),
            "mobile": data.get("contact_mobile"),
            "is_primary": True,
        }),
        "third_party_bank_account": _compact({
            "bank_name": data.get("bank_name", ""),
            "account_type": data.get("bank_account_type", "checking"),
            "account_number": data.get("bank_account_number", ""),
            "currency": data.get("bank_currency"),
            "is_primary": True,
        }),
        "payment_term_id": data.get("payment_term_id"),
    })


class ThirdPartyActions(PaginatedActions):
    """Third parties are created together with their address, contact and account."""

    async def create(self, data: EntityRecord) -> EntityRecord:
        return await super().create(build_third_party_payload(data))


MODULES: list[ModuleEntry] = [
    (BANKS, None),
    (BANK_ACCOUNTS, None),
    (PAYMENT_METHODS, None),
    (PAYMENT_TERMS, None),
    (CURRENCIES, None),
    (TAX_CODES, None),
    (TAX_RESPONSIBILITIES, None),
    (ECONOMIC_ACTIVITIES, None),
    (DOCUMENT_TYPES, None),
    (DOCUMENT_SEQUENCES, None),
    (BRANCHES, None),
    (CARRIERS, None),
    (SHIPPING_METHODS, None),
    (INCOTERMS, None),
    (UNITS_OF_MEASURE, None),
    (COUNTRIES, None),
    (STATES, None),
    (CITIES, None),
    (REGIONS_ZONES, None),
    (THIRD_PARTIES, ThirdPartyActions),
]


def build_vendor_search(
    client: ApiClient, policy: SearchPolicy | None = None
) -> SearchAction:
    """Vendors are third parties; the lookup shares their endpoint and projection."""
    return SearchAction(client, THIRD_PARTIES.base_path, THIRD_PARTY_MAPPING, policy=policy)


SEARCHES = {
    "vendors": build_vendor_search,
}
