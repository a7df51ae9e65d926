"""Discount-offer linkage state machine.

The "Do you have a discount offer?" toggle is part of the Configuration, held
in two keys: ``has_discount_offer`` and ``selected_discount_id``. Each
transition here is a pure function of the current configuration that
returns a change-set; ``ConfigStore.update_with`` applies it atomically.

Invariant: ``selected_discount_id`` is non-null only when
``has_discount_offer`` is true.
"""

from enum import Enum
from typing import Any, Mapping, Sequence


class OfferState(str, Enum):
    NO_OFFER = "no_offer"
    HAS_OFFER = "has_offer"


def offer_state(config: Mapping[str, Any]) -> OfferState:
    return OfferState.HAS_OFFER if config.get("has_discount_offer") else OfferState.NO_OFFER


def _first_id(active_discounts: Sequence[Any]) -> int | None:
    if not active_discounts:
        return None
    first = active_discounts[0]
    return first["id"] if isinstance(first, Mapping) else first.id


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------

def enable_offer(config: Mapping[str, Any], active_discounts: Sequence[Any]) -> dict[str, Any]:
    """NO_OFFER -> HAS_OFFER.

    Keeps a previously chosen discount; otherwise auto-selects the first active
    one. With no active discounts the offer stays enabled without a selection
    until ``complete_offer`` supplies an id.
    """
    selected = config.get("selected_discount_id")
    if selected is None:
        selected = _first_id(active_discounts)
    return {"has_discount_offer": True, "selected_discount_id": selected}


def disable_offer(config: Mapping[str, Any]) -> dict[str, Any]:
    """HAS_OFFER -> NO_OFFER. Clears the selection unconditionally."""
    return {"has_discount_offer": False, "selected_discount_id": None}


def complete_offer(config: Mapping[str, Any], discount_id: int) -> dict[str, Any]:
    """Finish the transition with a discount created on the commerce platform."""
    return {"has_discount_offer": True, "selected_discount_id": discount_id}


def select_discount(config: Mapping[str, Any], discount_id: int | None) -> dict[str, Any]:
    """Change the selected discount while an offer is enabled.

    Raises ValueError in NO_OFFER, where a selection would break the invariant.
    """
    if offer_state(config) != OfferState.HAS_OFFER:
        raise ValueError("Cannot select a discount while no discount offer is enabled")
    return {"selected_discount_id": discount_id}


def set_offer(config: Mapping[str, Any], enabled: bool, active_discounts: Sequence[Any]) -> dict[str, Any]:
    """Dispatch the Yes/No toggle to the matching transition."""
    if enabled:
        return enable_offer(config, active_discounts)
    return disable_offer(config)
