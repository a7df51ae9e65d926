"""Test the discount-offer state machine."""
import itertools

import pytest

from verticals.combo_builder.discounts import DiscountCatalog
from verticals.combo_builder.offer import (
    OfferState,
    complete_offer,
    disable_offer,
    enable_offer,
    offer_state,
    select_discount,
    set_offer,
)
from verticals.combo_builder.store import ConfigStore


def _active():
    return DiscountCatalog.with_samples().list_active()


def test_initial_state_no_offer():
    store = ConfigStore()
    assert offer_state(store.config) == OfferState.NO_OFFER
    assert store.get("selected_discount_id") is None


def test_enable_auto_selects_first_active():
    store = ConfigStore()
    store.update_with(lambda c: enable_offer(c, _active()))
    assert offer_state(store.config) == OfferState.HAS_OFFER
    assert store.get("selected_discount_id") == 1


def test_enable_keeps_existing_selection():
    store = ConfigStore({"has_discount_offer": True, "selected_discount_id": 2})
    store.update_with(lambda c: enable_offer(c, _active()))
    assert store.get("selected_discount_id") == 2


def test_enable_without_active_discounts():
    store = ConfigStore()
    store.update_with(lambda c: enable_offer(c, []))
    assert store.get("has_discount_offer") is True
    assert store.get("selected_discount_id") is None


def test_enable_accepts_dicts():
    assert enable_offer({}, [{"id": 9}])["selected_discount_id"] == 9


def test_disable_clears_selection():
    store = ConfigStore({"has_discount_offer": True, "selected_discount_id": 2})
    store.update_with(disable_offer)
    assert store.get("has_discount_offer") is False
    assert store.get("selected_discount_id") is None


def test_complete_offer():
    store = ConfigStore()
    store.update_with(lambda c: complete_offer(c, 4))
    assert offer_state(store.config) == OfferState.HAS_OFFER
    assert store.get("selected_discount_id") == 4


def test_select_requires_offer():
    store = ConfigStore()
    with pytest.raises(ValueError):
        store.update_with(lambda c: select_discount(c, 2))
    assert store.get("selected_discount_id") is None


def test_set_offer_dispatch():
    assert set_offer({}, True, _active())["selected_discount_id"] == 1
    assert set_offer({"selected_discount_id": 1}, False, _active()) == {
        "has_discount_offer": False,
        "selected_discount_id": None,
    }


def test_invariant_holds_over_transition_sequences():
    active = _active()
    transitions = [
        lambda c: enable_offer(c, active),
        disable_offer,
        lambda c: complete_offer(c, 3),
        lambda c: {"has_discount_offer": False},
        lambda c: {"selected_discount_id": 2},
    ]
    for sequence in itertools.product(transitions, repeat=3):
        store = ConfigStore()
        for transition in sequence:
            store.update_with(transition)
            config = store.config
            if config["selected_discount_id"] is not None:
                assert config["has_discount_offer"] is True
