"""Integration tests for the seed and schema-check scripts."""

import pytest
from scripts.database.check_db_tables import fetch_table_names, missing_tables
from scripts.seed.tasks import DEFAULT_TASKS, seed_tasks
from services.points_service.models import Task
from sqlalchemy import select


@pytest.mark.asyncio
@pytest.mark.integration
async def test_seed_tasks_creates_default_catalogue(db_session):
    created = await seed_tasks(db_session)

    assert len(created) == len(DEFAULT_TASKS)
    result = await db_session.execute(select(Task.name, Task.points))
    rows = dict(result.all())
    assert rows["follow_twitter"] == 10


@pytest.mark.asyncio
@pytest.mark.integration
async def test_seed_tasks_is_idempotent(db_session):
    await seed_tasks(db_session)
    created_again = await seed_tasks(db_session)

    assert created_again == []
    result = await db_session.execute(select(Task.name))
    names = result.scalars().all()
    assert len(names) == len(set(names)) == len(DEFAULT_TASKS)


@pytest.mark.asyncio
@pytest.mark.integration
async def test_seed_tasks_skips_existing_names(db_session):
    db_session.add(Task(name="follow_twitter", points=99))
    await db_session.commit()

    created = await seed_tasks(db_session)

    assert "follow_twitter" not in {task.name for task in created}
    points = await db_session.scalar(
        select(Task.points).where(Task.name == "follow_twitter")
    )
    assert points == 99


@pytest.mark.asyncio
@pytest.mark.integration
async def test_schema_tables_present(test_engine):
    async with test_engine.connect() as conn:
        tables = await fetch_table_names(conn)

    assert missing_tables(tables) == []
