#!/usr/bin/env python3
"""
Seed the task catalogue.

Tasks are reference data administered out of band; this script inserts the
default catalogue for development and fresh deployments.

Idempotent: tasks whose name already exists are skipped.
"""

import asyncio
import os
import sys
from typing import Iterable, Optional

# Add project root to path
project_root = os.path.dirname(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
)
sys.path.insert(0, project_root)

from libs.common.logging import configure_logging, get_logger
from libs.db.session import get_async_db
from services.points_service.models import Task
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)

DEFAULT_TASKS = [
    {
        "name": "follow_twitter",
        "points": 10,
        "description": "Follow the project account on X (Twitter).",
    },
    {
        "name": "join_telegram",
        "points": 10,
        "description": "Join the community Telegram group.",
    },
    {
        "name": "join_discord",
        "points": 10,
        "description": "Join the Discord server.",
    },
    {
        "name": "retweet_announcement",
        "points": 20,
        "description": "Retweet the pinned launch announcement.",
    },
]


async def seed_tasks(
    session: AsyncSession, tasks: Optional[Iterable[dict]] = None
) -> list[Task]:
    """Insert missing tasks and return the rows created."""
    tasks = DEFAULT_TASKS if tasks is None else tasks

    result = await session.execute(select(Task.name))
    existing = set(result.scalars().all())

    created = []
    for task_data in tasks:
        if task_data["name"] in existing:
            logger.info("Task '%s' already exists, skipping", task_data["name"])
            continue

        task = Task(**task_data)
        session.add(task)
        created.append(task)
        existing.add(task_data["name"])
        logger.info(
            "Creating task '%s' (%d points)", task_data["name"], task_data["points"]
        )

    await session.commit()
    return created


async def main() -> None:
    configure_logging()
    async for session in get_async_db():
        created = await seed_tasks(session)
    logger.info("Seeded %d task(s)", len(created))


if __name__ == "__main__":
    asyncio.run(main())
