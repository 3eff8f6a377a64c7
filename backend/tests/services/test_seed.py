"""Demo Data — seeding fills an empty database once and every activity has a host."""

from sqlalchemy import func, select

from reactivities.db.seed import SEED_ACTIVITIES, seed_data
from reactivities.infrastructure.activity_repository import SqlActivityRepository
from reactivities.models.activity import Activity


async def test_seed_populates_empty_database(test_db):
    assert await seed_data(test_db) is True
    count = await test_db.scalar(select(func.count()).select_from(Activity))
    assert count == len(SEED_ACTIVITIES)


async def test_seed_is_idempotent(test_db):
    await seed_data(test_db)
    assert await seed_data(test_db) is False


async def test_seeded_activities_have_a_host(test_db):
    await seed_data(test_db)
    repository = SqlActivityRepository(test_db)
    ids = (await test_db.execute(select(Activity.id))).scalars().all()
    for activity_id in ids:
        assert await repository.find_resource(activity_id) is not None
