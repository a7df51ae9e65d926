"""Test the template repository against an SQLite database."""
import pytest
import pytest_asyncio

from core.database import build_engine, build_session_factory, init_db
from verticals.combo_builder.repository import TemplateRepository


@pytest_asyncio.fixture
async def repo(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'templates.db'}")
    await init_db(engine)
    factory = build_session_factory(engine)
    async with factory() as session:
        yield TemplateRepository(session)
    await engine.dispose()


@pytest.mark.asyncio
async def test_create_template(repo):
    template = await repo.create_template("Holiday", {"max_selections": 4})
    assert template["id"] == 1
    assert template["active"] is True
    assert template["config"] == {"max_selections": 4}
    assert template["created_at"] is not None


@pytest.mark.asyncio
async def test_list_recent_newest_first(repo):
    for title in ("First", "Second", "Third"):
        await repo.create_template(title, {})
    titles = [t["title"] for t in await repo.list_recent()]
    assert titles == ["Third", "Second", "First"]


@pytest.mark.asyncio
async def test_set_active_and_count(repo):
    a = await repo.create_template("A", {})
    await repo.create_template("B", {})
    assert await repo.count_active() == 2
    updated = await repo.set_active(a["id"], False)
    assert updated["active"] is False
    assert await repo.count_active() == 1
    assert await repo.set_active(999, True) is None


@pytest.mark.asyncio
async def test_get_and_delete(repo):
    template = await repo.create_template("Gone soon", {"layout": "layout2"})
    assert (await repo.get(template["id"]))["config"]["layout"] == "layout2"
    assert await repo.delete(template["id"]) is True
    assert await repo.delete(template["id"]) is False
    assert await repo.get(template["id"]) is None


@pytest.mark.asyncio
async def test_paginated_list(repo):
    for i in range(5):
        await repo.create_template(f"T{i}", {})
    items, total = await repo.list(page=2, limit=2)
    assert total == 5
    assert [t["title"] for t in items] == ["T2", "T3"]
