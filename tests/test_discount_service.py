"""Test discount creation orchestration."""
import pytest

from verticals.combo_builder.commerce import DiscountCreation, DiscountDraft
from verticals.combo_builder.discount_service import (
    create_discount,
    create_local_discount,
    create_offer_discount,
)
from verticals.combo_builder.discounts import DiscountCatalog
from verticals.combo_builder.errors import ErrorKind
from verticals.combo_builder.store import ConfigStore


class FakeAdapter:
    def __init__(self, outcome=None, exc=None):
        self.outcome = outcome or DiscountCreation(ok=True, discount={"id": "gid://1", "code": "VIP"})
        self.exc = exc
        self.calls = []

    async def create_code_discount(self, draft):
        self.calls.append(draft)
        if self.exc:
            raise self.exc
        return self.outcome


@pytest.mark.asyncio
async def test_success_adds_catalog_record():
    catalog = DiscountCatalog.with_samples()
    result = await create_discount(DiscountDraft(title="VIP", value="15"), FakeAdapter(), catalog)
    assert result.ok
    assert result.status_code == 200
    body = result.to_dict()
    assert body["success"] is True
    assert body["message"] == "Discount code created in Shopify"
    assert body["discount"]["id"] == 4
    assert body["discount"]["value"] == 15
    assert body["discount"]["usage"] == "0 / Unlimited"
    assert catalog.get(4).status == "active"


@pytest.mark.asyncio
@pytest.mark.parametrize("draft", [
    DiscountDraft(title="", value="10"),
    DiscountDraft(title="VIP", value=None),
    DiscountDraft(title="   ", value="10"),
])
async def test_missing_fields(draft):
    catalog = DiscountCatalog.with_samples()
    adapter = FakeAdapter()
    result = await create_discount(draft, adapter, catalog)
    assert result.kind == ErrorKind.MISSING_REQUIRED_FIELD
    assert result.status_code == 400
    assert result.error == "Title and value are required"
    assert adapter.calls == []
    assert len(catalog.list_all()) == 3


@pytest.mark.asyncio
async def test_non_numeric_value():
    result = await create_discount(DiscountDraft(title="VIP", value="ten"), FakeAdapter(), DiscountCatalog())
    assert result.kind == ErrorKind.INVALID_FIELD
    assert result.status_code == 400


@pytest.mark.asyncio
@pytest.mark.parametrize("discount_type", ["bogo", "fixed", "volume", ""])
async def test_platform_rejects_unsupported_type(discount_type):
    catalog = DiscountCatalog.with_samples()
    adapter = FakeAdapter()
    draft = DiscountDraft(title="Bundle", value="5", type=discount_type)
    result = await create_discount(draft, adapter, catalog)
    assert result.kind == ErrorKind.INVALID_FIELD
    assert result.status_code == 400
    assert "percentage, amount" in result.error
    assert adapter.calls == []
    assert len(catalog.list_all()) == 3


@pytest.mark.asyncio
async def test_amount_type_is_accepted():
    adapter = FakeAdapter()
    result = await create_discount(DiscountDraft(title="Five off", value="5", type="amount"), adapter, DiscountCatalog())
    assert result.ok
    assert result.payload["discount"]["type"] == "amount"
    assert adapter.calls[0].type == "amount"


@pytest.mark.asyncio
async def test_external_error_leaves_catalog_unchanged():
    catalog = DiscountCatalog.with_samples()
    adapter = FakeAdapter(DiscountCreation(ok=False, error="Code must be unique"))
    result = await create_discount(DiscountDraft(title="VIP", value="15"), adapter, catalog)
    assert result.kind == ErrorKind.EXTERNAL_SERVICE_ERROR
    assert result.status_code == 400
    assert result.to_dict() == {"success": False, "error": "Code must be unique", "kind": "external_service_error"}
    assert len(catalog.list_all()) == 3


@pytest.mark.asyncio
async def test_unexpected_exception_is_internal_failure():
    catalog = DiscountCatalog.with_samples()
    adapter = FakeAdapter(exc=RuntimeError("boom"))
    result = await create_discount(DiscountDraft(title="VIP", value="15"), adapter, catalog)
    assert result.kind == ErrorKind.INTERNAL_FAILURE
    assert result.status_code == 500
    assert result.error == "boom"
    assert len(catalog.list_all()) == 3


@pytest.mark.asyncio
async def test_offer_flow_completes_transition():
    catalog = DiscountCatalog.with_samples()
    store = ConfigStore()
    result = await create_offer_discount({"title": "Combo 10", "value": "10"}, FakeAdapter(), catalog, store)
    assert result.ok
    assert store.get("has_discount_offer") is True
    assert store.get("selected_discount_id") == 4
    assert result.payload["config"]["selected_discount_id"] == 4


@pytest.mark.asyncio
async def test_offer_flow_failure_leaves_config():
    store = ConfigStore()
    before = store.config
    adapter = FakeAdapter(DiscountCreation(ok=False, error="nope"))
    result = await create_offer_discount(DiscountDraft(title="A", value=1), adapter, DiscountCatalog(), store)
    assert not result.ok
    assert store.config == before


def test_local_discount():
    catalog = DiscountCatalog.with_samples()
    result = create_local_discount({"title": "Local", "value": "2.5", "type": "fixed"}, catalog)
    assert result.ok
    assert result.payload["discount"]["value"] == 2.5
    assert not create_local_discount({"title": "Local"}, catalog).ok


def test_local_discount_rejects_unknown_type():
    catalog = DiscountCatalog()
    result = create_local_discount({"title": "Local", "value": "3", "type": "mystery"}, catalog)
    assert result.kind == ErrorKind.INVALID_FIELD
    assert catalog.list_all() == []
