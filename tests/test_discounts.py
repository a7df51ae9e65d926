"""Test the in-memory discount catalog."""
from datetime import date

from verticals.combo_builder.discounts import (
    DiscountCatalog,
    DiscountRecord,
    format_created,
    format_usage,
    parse_used,
)


def test_samples_seeded():
    catalog = DiscountCatalog.with_samples()
    assert [r.id for r in catalog.list_all()] == [1, 2, 3]
    assert [r.id for r in catalog.list_active()] == [1, 2]


def test_samples_not_shared_between_catalogs():
    first = DiscountCatalog.with_samples()
    second = DiscountCatalog.with_samples()
    first.update(1, {"title": "Changed"})
    assert second.get(1).title == "Summer Sale 2024"


def test_add_assigns_max_plus_one():
    catalog = DiscountCatalog.with_samples()
    catalog.delete(2)
    record = catalog.add({"title": "VIP", "type": "percentage", "value": 15})
    assert record.id == 4
    assert record.status == "active"
    assert record.usage == "0 / Unlimited"


def test_add_to_empty_catalog():
    assert DiscountCatalog().add({"title": "First", "type": "fixed", "value": 5}).id == 1


def test_update_returns_new_state():
    catalog = DiscountCatalog.with_samples()
    record = catalog.update(3, {"status": "active", "id": 99})
    assert record.id == 3
    assert record.is_active
    assert catalog.update(42, {"status": "active"}) is None


def test_delete():
    catalog = DiscountCatalog.with_samples()
    assert catalog.delete(1) is True
    assert catalog.delete(1) is False
    assert catalog.get(1) is None


def test_duplicate():
    catalog = DiscountCatalog.with_samples()
    copy = catalog.duplicate(2)
    assert copy.id == 4
    assert copy.title == "Buy 2 Get 1 Free (Copy)"
    assert copy.value == "1 free"
    assert catalog.duplicate(77) is None


def test_stats():
    stats = DiscountCatalog.with_samples().stats()
    assert stats.to_dict() == {"active": 2, "total": 3, "total_usage": 165}


def test_references_only_active():
    refs = DiscountCatalog.with_samples().references()
    assert [r.id for r in refs] == [1, 2]
    assert refs[0].to_dict()["title"] == "Summer Sale 2024"


def test_record_labels():
    data = DiscountRecord(5, "Bulk", "volume", 10, "expired").to_dict()
    assert data["type_label"] == "Volume Discount"
    assert data["status_label"] == "Expired"


def test_formatting_helpers():
    assert format_created(date(2026, 10, 9)) == "Oct 9, 2026"
    assert format_usage(0) == "0 / Unlimited"
    assert format_usage(3, 50) == "3 / 50"
    assert parse_used("45 / 100") == 45
    assert parse_used("") == 0
