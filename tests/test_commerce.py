"""Test the commerce platform discount adapter."""
import json
from datetime import datetime, timezone

import httpx
import pytest

from core.integrations import AdapterRequest
from patterns.domain_config import CommerceConfig
from verticals.combo_builder.commerce import (
    DEFAULT_ERROR,
    DiscountDraft,
    ShopifyDiscountAdapter,
    build_discount_input,
    parse_creation_response,
)

CONFIG = CommerceConfig(shop_domain="test-shop.myshopify.com", access_token="shpat_test", timeout_seconds=2.0)

SUCCESS_BODY = {
    "data": {
        "discountCodeBasicCreate": {
            "codeDiscountNode": {
                "id": "gid://shopify/DiscountCodeNode/101",
                "codeDiscount": {
                    "title": "Summer",
                    "codes": {"edges": [{"node": {"code": "SUMMER20"}}]},
                },
            },
            "userErrors": [],
        }
    }
}


def _adapter(handler):
    return ShopifyDiscountAdapter(CONFIG, transport=httpx.MockTransport(handler))


def test_percentage_is_fraction():
    payload = build_discount_input(DiscountDraft(title="Summer", value="20", type="percentage"))
    assert payload["customerGets"]["value"] == {"percentage": pytest.approx(0.20)}


def test_amount_payload():
    payload = build_discount_input(DiscountDraft(title="Five off", value="5", type="amount"))
    assert payload["customerGets"]["value"] == {
        "discountAmount": {"amount": 5.0, "appliesOnEachItem": False}
    }


def test_payload_defaults():
    now = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
    payload = build_discount_input(DiscountDraft(title="Spring sale", value=10), now=now)
    assert payload["code"] == "SPRINGSALE"
    assert payload["startsAt"] == now.isoformat()
    assert payload["endsAt"] is None
    assert payload["customerSelection"] == {"all": True}
    assert payload["customerGets"]["items"] == {"all": True}
    assert payload["appliesOncePerCustomer"] is False
    assert payload["usageLimit"] is None


def test_explicit_code_upper_cased():
    draft = DiscountDraft(title="x", value=1, code="vip10", once_per_customer=True)
    payload = build_discount_input(draft)
    assert payload["code"] == "VIP10"
    assert payload["appliesOncePerCustomer"] is True


def test_draft_from_form():
    draft = DiscountDraft.from_form({"title": "A", "value": "3", "oncePerCustomer": "on", "endsAt": ""})
    assert draft.once_per_customer is True
    assert draft.ends_at is None


def test_parse_top_level_errors():
    outcome = parse_creation_response({"errors": [{"message": "Throttled"}, {"message": "other"}]})
    assert not outcome.ok
    assert outcome.error == "Throttled"
    assert parse_creation_response({"errors": [{}]}).error == DEFAULT_ERROR


def test_parse_user_errors():
    body = {"data": {"discountCodeBasicCreate": {"codeDiscountNode": None, "userErrors": [
        {"code": "TAKEN", "message": "Code must be unique", "field": ["basicCodeDiscount", "code"]},
    ]}}}
    outcome = parse_creation_response(body)
    assert outcome.error == "Code must be unique"


def test_parse_success():
    outcome = parse_creation_response(SUCCESS_BODY)
    assert outcome.ok
    assert outcome.discount == {
        "id": "gid://shopify/DiscountCodeNode/101",
        "title": "Summer",
        "code": "SUMMER20",
    }


@pytest.mark.asyncio
async def test_create_posts_graphql_mutation():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["headers"] = request.headers
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json=SUCCESS_BODY)

    outcome = await _adapter(handler).create_code_discount(
        DiscountDraft(title="Summer", value="20", type="percentage", code="summer20")
    )
    assert outcome.ok
    assert captured["url"] == "https://test-shop.myshopify.com/admin/api/2024-10/graphql.json"
    assert captured["headers"]["X-Shopify-Access-Token"] == "shpat_test"
    assert "discountCodeBasicCreate" in captured["body"]["query"]
    variables = captured["body"]["variables"]["input"]
    assert variables["customerGets"]["value"]["percentage"] == pytest.approx(0.2)
    assert variables["code"] == "SUMMER20"


@pytest.mark.asyncio
async def test_create_surfaces_user_error():
    def handler(request):
        return httpx.Response(200, json={"data": {"discountCodeBasicCreate": {
            "codeDiscountNode": None,
            "userErrors": [{"code": "INVALID", "message": "Starts at is invalid", "field": None}],
        }}})

    outcome = await _adapter(handler).create_code_discount(DiscountDraft(title="A", value=1))
    assert not outcome.ok
    assert outcome.error == "Starts at is invalid"


@pytest.mark.asyncio
async def test_create_timeout_is_failure():
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    adapter = _adapter(handler)
    outcome = await adapter.create_code_discount(DiscountDraft(title="A", value=1))
    assert not outcome.ok
    assert "timed out" in outcome.error
    assert adapter.get_health().failed_requests == 1


@pytest.mark.asyncio
async def test_http_error_status_is_failure():
    def handler(request):
        return httpx.Response(401, text="Invalid API key or access token")

    adapter = _adapter(handler)
    outcome = await adapter.create_code_discount(DiscountDraft(title="A", value=1))
    assert not outcome.ok
    assert outcome.error.startswith("HTTP 401")
    assert adapter.get_health().auth_failures == 1


@pytest.mark.asyncio
async def test_adapter_health_tracks_success():
    adapter = _adapter(lambda request: httpx.Response(200, json={"ok": True}))
    resp = await adapter.request(AdapterRequest(method="GET", path="shop.json"))
    assert resp.ok
    assert resp.data == {"ok": True}
    health = adapter.get_health().to_dict()
    assert health["successful"] == 1
    assert health["error_rate"] == 0.0
