"""Template repository: async database access for saved designs.

Extends BaseRepository with the template-specific operations: newest-first
listing, active toggling and the active count shown on the templates page.
"""

from typing import Any, Mapping

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_session
from patterns.repository import BaseRepository
from verticals.combo_builder.models.db_models import Template


class TemplateRepository(BaseRepository[Template]):
    """Repository for saved combo builder templates."""

    model = Template

    async def create_template(self, title: str, config: Mapping[str, Any]) -> dict:
        """Save a new template; it starts out active."""
        return await self.create({"title": title, "config": dict(config), "active": True})

    async def list_recent(self, limit: int | None = None) -> list[dict]:
        """All templates, newest first."""
        stmt = select(Template).order_by(Template.created_at.desc(), Template.id.desc())
        if limit:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return [row.to_dict() for row in result.scalars().all()]

    async def set_active(self, template_id: int, active: bool) -> dict | None:
        return await self.update(template_id, {"active": bool(active)})

    async def count_active(self) -> int:
        return await self.count({"active": True})


# ---------------------------------------------------------------------------
# FastAPI dependency factories
# ---------------------------------------------------------------------------

def get_template_repository(
    session: AsyncSession = Depends(get_session),
) -> TemplateRepository:
    """FastAPI dependency for TemplateRepository."""
    return TemplateRepository(session)
