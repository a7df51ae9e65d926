"""
Commerce platform adapter: discount-code creation over the GraphQL Admin API.

Posts the ``discountCodeBasicCreate`` mutation once, with a bounded timeout,
and reduces the reply to a ``DiscountCreation`` envelope. Top-level GraphQL
errors and mutation ``userErrors`` surface their first message verbatim.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
import logging
import re

import httpx

from core.integrations.adapter_base import (
    AdapterBase,
    AdapterRequest,
    AuthCredentials,
    AuthType,
)
from patterns.domain_config import CommerceConfig

logger = logging.getLogger(__name__)

DEFAULT_ERROR = "Failed to create discount"

DISCOUNT_CODE_BASIC_CREATE = """
mutation CreateCodeDiscount($input: DiscountCodeBasicInput!) {
  discountCodeBasicCreate(basicCodeDiscount: $input) {
    codeDiscountNode {
      id
      codeDiscount {
        ... on DiscountCodeBasic {
          title
          codes(first: 1) {
            edges {
              node {
                code
              }
            }
          }
        }
      }
    }
    userErrors {
      code
      message
      field
    }
  }
}
"""


# ---------------------------------------------------------------------------
# Draft / outcome
# ---------------------------------------------------------------------------

@dataclass
class DiscountDraft:
    """A discount as entered by the merchant, before platform creation."""
    title: str = ""
    value: Any = None
    type: str = "percentage"
    code: str = ""
    starts_at: str | None = None
    ends_at: str | None = None
    once_per_customer: bool = False

    @property
    def is_percentage(self) -> bool:
        return self.type == "percentage"

    @property
    def effective_code(self) -> str:
        """Upper-cased code; derived from the title when left blank."""
        code = self.code or re.sub(r"\s+", "", self.title or "")
        return code.upper()

    @classmethod
    def from_form(cls, data: dict[str, Any]) -> "DiscountDraft":
        """Build from form-style input where checkboxes arrive as ``"on"``."""
        once = data.get("once_per_customer", data.get("oncePerCustomer", False))
        return cls(
            title=data.get("title") or "",
            value=data.get("value"),
            type=data.get("type") or "percentage",
            code=data.get("code") or "",
            starts_at=data.get("starts_at") or data.get("startsAt") or None,
            ends_at=data.get("ends_at") or data.get("endsAt") or None,
            once_per_customer=once is True or once == "on",
        )


@dataclass
class DiscountCreation:
    """Outcome of one creation call."""
    ok: bool
    discount: dict[str, Any] = field(default_factory=dict)
    error: str | None = None


# ---------------------------------------------------------------------------
# Payload
# ---------------------------------------------------------------------------

def build_discount_input(draft: DiscountDraft, now: datetime | None = None) -> dict[str, Any]:
    """Variables ``input`` object for ``discountCodeBasicCreate``.

    ``draft.value`` must already be numeric-parseable.
    """
    amount = float(draft.value)
    if draft.is_percentage:
        value: dict[str, Any] = {"percentage": amount / 100}
    else:
        value = {"discountAmount": {"amount": amount, "appliesOnEachItem": False}}

    starts_at = draft.starts_at or (now or datetime.now(timezone.utc)).isoformat()
    return {
        "title": draft.title,
        "code": draft.effective_code,
        "startsAt": starts_at,
        "endsAt": draft.ends_at or None,
        "customerSelection": {"all": True},
        "customerGets": {
            "value": value,
            "items": {"all": True},
        },
        "appliesOncePerCustomer": bool(draft.once_per_customer),
        "usageLimit": None,
    }


def parse_creation_response(body: Any) -> DiscountCreation:
    """Reduce a GraphQL reply to success or the first error message."""
    if not isinstance(body, dict):
        return DiscountCreation(ok=False, error=DEFAULT_ERROR)

    errors = body.get("errors")
    if errors:
        first = errors[0] if isinstance(errors, list) else errors
        message = first.get("message") if isinstance(first, dict) else None
        return DiscountCreation(ok=False, error=message or DEFAULT_ERROR)

    payload = (body.get("data") or {}).get("discountCodeBasicCreate") or {}
    user_errors = payload.get("userErrors") or []
    if user_errors:
        return DiscountCreation(ok=False, error=user_errors[0].get("message") or DEFAULT_ERROR)

    node = payload.get("codeDiscountNode") or {}
    code_discount = node.get("codeDiscount") or {}
    edges = (code_discount.get("codes") or {}).get("edges") or []
    code = edges[0]["node"]["code"] if edges else None
    return DiscountCreation(
        ok=True,
        discount={"id": node.get("id"), "title": code_discount.get("title"), "code": code},
    )


# ---------------------------------------------------------------------------
# Adapter
# ---------------------------------------------------------------------------

class ShopifyDiscountAdapter(AdapterBase):
    """
    Discount creation through the Shopify Admin GraphQL API.

    Usage::

        adapter = ShopifyDiscountAdapter(settings.commerce)
        outcome = await adapter.create_code_discount(DiscountDraft(title="VIP", value=15))
    """

    name = "shopify"

    def __init__(
        self,
        config: CommerceConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        credentials = AuthCredentials(
            adapter_name=self.name,
            auth_type=AuthType.API_KEY,
            api_key=config.access_token,
            api_key_header="X-Shopify-Access-Token",
            api_key_prefix="",
        )
        super().__init__(
            credentials=credentials,
            base_url=f"https://{config.shop_domain}/admin/api/{config.api_version}",
            timeout=config.timeout_seconds,
            transport=transport,
        )
        self.config = config

    async def create_code_discount(self, draft: DiscountDraft) -> DiscountCreation:
        variables = {"input": build_discount_input(draft)}
        req = AdapterRequest(
            method="POST",
            path="graphql.json",
            body={"query": DISCOUNT_CODE_BASIC_CREATE, "variables": variables},
            headers={"Content-Type": "application/json"},
        )
        resp = await self.request(req)

        # GraphQL errors may arrive with a 4xx status and a JSON body
        if isinstance(resp.data, dict):
            outcome = parse_creation_response(resp.data)
            if outcome.ok and not resp.ok:
                outcome = DiscountCreation(ok=False, error=resp.error or DEFAULT_ERROR)
        else:
            outcome = DiscountCreation(ok=False, error=resp.error or DEFAULT_ERROR)

        if outcome.ok:
            logger.info("Discount code %s created on %s", variables["input"]["code"], self.config.shop_domain)
        else:
            logger.warning("Discount creation failed: %s", outcome.error)
        return outcome
