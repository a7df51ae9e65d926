"""Discount catalog: in-memory repository of discount records.

Owns its collection explicitly; callers receive the catalog through a FastAPI
dependency instead of touching module-level state. Every mutation returns the
post-mutation record (or a success flag). Replace the backing store for
production.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Any, Iterable

logger = logging.getLogger(__name__)

UNLIMITED = "Unlimited"


class DiscountType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"
    BOGO = "bogo"
    VOLUME = "volume"
    AMOUNT = "amount"


class DiscountStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SCHEDULED = "scheduled"
    EXPIRED = "expired"


TYPE_LABELS: dict[str, str] = {
    DiscountType.PERCENTAGE.value: "% Discount",
    DiscountType.FIXED.value: "Fixed",
    DiscountType.BOGO.value: "Buy One Get One",
    DiscountType.VOLUME.value: "Volume Discount",
    DiscountType.AMOUNT.value: "Amount Off",
}

STATUS_LABELS: dict[str, str] = {
    DiscountStatus.ACTIVE.value: "Active",
    DiscountStatus.INACTIVE.value: "Inactive",
    DiscountStatus.SCHEDULED.value: "Scheduled",
    DiscountStatus.EXPIRED.value: "Expired",
}


def format_created(day: date) -> str:
    """Display date in the catalog's ``Dec 10, 2024`` format."""
    return f"{day:%b} {day.day}, {day.year}"


def format_usage(used: int, limit: int | str | None = None) -> str:
    return f"{used} / {limit or UNLIMITED}"


def parse_used(usage: str) -> int:
    """The ``used`` half of a ``"<used> / <limit>"`` usage string."""
    head = (usage or "").split("/")[0].strip()
    try:
        return int(head)
    except ValueError:
        return 0


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

@dataclass
class DiscountRecord:
    id: int
    title: str
    type: str
    value: Any
    status: str = DiscountStatus.ACTIVE.value
    created: str = field(default_factory=lambda: format_created(date.today()))
    usage: str = format_usage(0)

    @property
    def is_active(self) -> bool:
        return self.status == DiscountStatus.ACTIVE.value

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "type": self.type,
            "value": self.value,
            "status": self.status,
            "created": self.created,
            "usage": self.usage,
            "type_label": TYPE_LABELS.get(self.type, self.type),
            "status_label": STATUS_LABELS.get(self.status, STATUS_LABELS[DiscountStatus.INACTIVE.value]),
        }

    def reference(self) -> "DiscountReference":
        return DiscountReference(id=self.id, title=self.title, type=self.type, value=self.value)


@dataclass(frozen=True)
class DiscountReference:
    """Lightweight pointer from a Configuration into the catalog."""

    id: int
    title: str
    type: str
    value: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "type": self.type, "value": self.value}


@dataclass
class CatalogStats:
    active: int = 0
    total: int = 0
    total_usage: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"active": self.active, "total": self.total, "total_usage": self.total_usage}


SAMPLE_DISCOUNTS: tuple[DiscountRecord, ...] = (
    DiscountRecord(1, "Summer Sale 2024", "percentage", 20, "active", "Dec 10, 2024", "45 / 100"),
    DiscountRecord(2, "Buy 2 Get 1 Free", "bogo", "1 free", "active", "Dec 8, 2024", "120 / Unlimited"),
    DiscountRecord(3, "New Year Promo", "fixed", 500, "scheduled", "Dec 5, 2024", "0 / 200"),
)


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

class DiscountCatalog:
    """In-memory discount repository.

    Usage::

        catalog = DiscountCatalog.with_samples()
        record = catalog.add({"title": "VIP", "type": "percentage", "value": 15})
        catalog.update(record.id, {"status": "inactive"})
    """

    def __init__(self, records: Iterable[DiscountRecord] = ()):
        self._lock = threading.RLock()
        self._records: list[DiscountRecord] = [replace(r) for r in records]

    @classmethod
    def with_samples(cls) -> "DiscountCatalog":
        return cls(SAMPLE_DISCOUNTS)

    # -- Read --

    def list_all(self) -> list[DiscountRecord]:
        return list(self._records)

    def list_active(self) -> list[DiscountRecord]:
        return [r for r in self._records if r.is_active]

    def references(self) -> list[DiscountReference]:
        return [r.reference() for r in self.list_active()]

    def get(self, discount_id: int) -> DiscountRecord | None:
        return next((r for r in self._records if r.id == discount_id), None)

    def next_id(self) -> int:
        # Not collision-safe across processes; ids come from max + 1.
        return max((r.id for r in self._records), default=0) + 1

    def stats(self) -> CatalogStats:
        records = self.list_all()
        return CatalogStats(
            active=sum(1 for r in records if r.is_active),
            total=len(records),
            total_usage=sum(parse_used(r.usage) for r in records),
        )

    # -- Write --

    def add(self, data: dict[str, Any] | DiscountRecord) -> DiscountRecord:
        """Insert a record, assigning ``max(existing ids) + 1`` when it has no id."""
        with self._lock:
            if isinstance(data, DiscountRecord):
                record = replace(data)
            else:
                fields = dict(data)
                fields["id"] = fields.get("id") or self.next_id()
                record = DiscountRecord(**fields)
            self._records = [*self._records, record]
        logger.info("Discount %s added: %s", record.id, record.title)
        return record

    def update(self, discount_id: int, updates: dict[str, Any]) -> DiscountRecord | None:
        """Merge ``updates`` into a record. Returns None if not found."""
        with self._lock:
            current = self.get(discount_id)
            if current is None:
                return None
            allowed = {k: v for k, v in updates.items() if k != "id" and hasattr(current, k)}
            updated = replace(current, **allowed)
            self._records = [updated if r.id == discount_id else r for r in self._records]
        return updated

    def delete(self, discount_id: int) -> bool:
        with self._lock:
            remaining = [r for r in self._records if r.id != discount_id]
            deleted = len(remaining) != len(self._records)
            self._records = remaining
        return deleted

    def duplicate(self, discount_id: int) -> DiscountRecord | None:
        """Copy a record under a new id with ``(Copy)`` appended to the title."""
        with self._lock:
            source = self.get(discount_id)
            if source is None:
                return None
            return self.add(replace(source, id=self.next_id(), title=f"{source.title} (Copy)"))
