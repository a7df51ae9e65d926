"""Discount creation orchestration.

Validates a draft, calls the commerce platform, and only on success records
the discount in the catalog (and, for the editor flow, completes the offer
transition). Every failure path returns an ``OperationResult`` and leaves the
catalog and the configuration untouched.
"""

import asyncio
import logging
from dataclasses import asdict
from typing import Any

from patterns.rules_engine import (
    check_choice_field,
    check_numeric_field,
    check_required_fields,
    evaluate_rules,
)
from verticals.combo_builder.commerce import DiscountDraft, ShopifyDiscountAdapter
from verticals.combo_builder.discounts import DiscountCatalog, DiscountStatus, DiscountType, format_usage
from verticals.combo_builder.errors import ErrorKind, OperationResult
from verticals.combo_builder.offer import complete_offer
from verticals.combo_builder.store import ConfigStore

logger = logging.getLogger(__name__)

REQUIRED_MESSAGE = "Title and value are required"
CREATED_MESSAGE = "Discount code created in Shopify"
INTERNAL_MESSAGE = "Internal server error"

# Types the platform call can express: a percentage or a fixed amount off.
PLATFORM_TYPES = (DiscountType.PERCENTAGE.value, DiscountType.AMOUNT.value)
CATALOG_TYPES = tuple(t.value for t in DiscountType)


def _as_draft(draft: DiscountDraft | dict[str, Any]) -> DiscountDraft:
    return draft if isinstance(draft, DiscountDraft) else DiscountDraft.from_form(draft)


def _number(value: Any) -> int | float:
    number = float(value)
    return int(number) if number.is_integer() else number


def validate_draft(draft: DiscountDraft, types: tuple[str, ...] = PLATFORM_TYPES) -> OperationResult | None:
    """Return a failure result, or None when the draft may be submitted."""
    data = asdict(draft)
    required = check_required_fields(data, ("title", "value"), message=REQUIRED_MESSAGE)
    if not required.passed:
        return OperationResult.failure(ErrorKind.MISSING_REQUIRED_FIELD, required.message)

    checks = evaluate_rules(
        check_numeric_field(data, "value", minimum=0),
        check_choice_field(data, "type", types),
    )
    if not checks.all_passed:
        return OperationResult.failure(ErrorKind.INVALID_FIELD, checks.first_failure.message)
    return None


def _record_fields(draft: DiscountDraft) -> dict[str, Any]:
    return {
        "title": draft.title,
        "type": draft.type,
        "value": _number(draft.value),
        "status": DiscountStatus.ACTIVE.value,
        "usage": format_usage(0),
    }


async def create_discount(
    draft: DiscountDraft | dict[str, Any],
    adapter: ShopifyDiscountAdapter,
    catalog: DiscountCatalog,
) -> OperationResult:
    """Create a discount code on the platform, then add it to the catalog."""
    draft = _as_draft(draft)
    invalid = validate_draft(draft)
    if invalid is not None:
        return invalid

    try:
        outcome = await adapter.create_code_discount(draft)
    except Exception as exc:
        logger.error("Discount creation raised", exc_info=True)
        return OperationResult.failure(ErrorKind.INTERNAL_FAILURE, str(exc) or INTERNAL_MESSAGE)

    if not outcome.ok:
        return OperationResult.failure(ErrorKind.EXTERNAL_SERVICE_ERROR, outcome.error)

    record = catalog.add(_record_fields(draft))
    return OperationResult.success(
        message=CREATED_MESSAGE,
        discount=record.to_dict(),
        platform_discount=outcome.discount,
    )


async def create_offer_discount(
    draft: DiscountDraft | dict[str, Any],
    adapter: ShopifyDiscountAdapter,
    catalog: DiscountCatalog,
    store: ConfigStore,
) -> OperationResult:
    """Editor flow: create the discount and select it as the combo's offer."""
    result = await create_discount(draft, adapter, catalog)
    if not result.ok:
        return result

    discount_id = result.payload["discount"]["id"]
    config = await asyncio.to_thread(store.update_with, lambda current: complete_offer(current, discount_id))
    result.payload["config"] = config.to_dict()
    return result


def create_local_discount(
    draft: DiscountDraft | dict[str, Any],
    catalog: DiscountCatalog,
) -> OperationResult:
    """Add a catalog record without touching the platform."""
    draft = _as_draft(draft)
    invalid = validate_draft(draft, CATALOG_TYPES)
    if invalid is not None:
        return invalid
    record = catalog.add(_record_fields(draft))
    return OperationResult.success(discount=record.to_dict())
