"""SQLAlchemy models for the combo builder.

A Template is a named, saved snapshot of the editor Configuration. The
to_dict() method provides the serialisation used by the repository and the
router.
"""

from typing import Any

from sqlalchemy import JSON, Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from core.models.base import Base, RecordMixin


class Template(RecordMixin, Base):
    """A saved combo builder design."""

    __tablename__ = "templates"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    config: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "config": self.config,
            "active": self.active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
