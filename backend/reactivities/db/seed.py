"""Demo Data — seeds users and activities into an empty database.

Invariants:
    - Idempotent: does nothing when any activity already exists
    - Every seeded activity has exactly one host attendee
"""

import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from reactivities.models.activity import Activity
from reactivities.models.activity_attendee import ActivityAttendee
from reactivities.models.user import User

logger = logging.getLogger(__name__)

SEED_USERS = (
    ("bob", "Bob"),
    ("tom", "Tom"),
    ("jane", "Jane"),
)

# (title, days from now, category, city, venue, lat, lng, host, attendees)
SEED_ACTIVITIES = (
    ("Past Activity 1", -60, "drinks", "London", "The Lamb and Flag",
     51.5115, -0.1264, "bob", ("tom",)),
    ("Past Activity 2", -30, "culture", "Paris", "The Louvre",
     48.8611, 2.3358, "jane", ("bob",)),
    ("Future Activity 1", 30, "culture", "London", "Natural History Museum",
     51.4967, -0.1764, "bob", ("jane",)),
    ("Future Activity 2", 60, "music", "London", "The O2",
     51.5030, 0.0032, "tom", ("bob", "jane")),
    ("Future Activity 3", 90, "drinks", "London", "Sky Garden",
     51.5112, -0.0835, "jane", ()),
    ("Future Activity 4", 120, "travel", "Paris", "Eiffel Tower",
     48.8584, 2.2945, "tom", ("jane",)),
    ("Future Activity 5", 150, "film", "London", "BFI IMAX",
     51.5052, -0.1137, "bob", ()),
    ("Future Activity 6", 180, "food", "Paris", "Le Marais",
     48.8590, 2.3620, "jane", ("tom",)),
)


async def seed_data(db: AsyncSession, now: datetime | None = None) -> bool:
    """Insert demo rows. Returns False when data already exists."""
    existing = await db.execute(select(Activity.id).limit(1))
    if existing.scalar_one_or_none() is not None:
        return False

    now = now or datetime.now(timezone.utc)
    users = {uid: User(id=uid, display_name=name) for uid, name in SEED_USERS}
    db.add_all(users.values())

    for title, days, category, city, venue, lat, lng, host, guests in SEED_ACTIVITIES:
        attendees = [ActivityAttendee(user=users[host], is_host=True)]
        attendees += [ActivityAttendee(user=users[g], is_host=False) for g in guests]
        db.add(Activity(
            title=title,
            date=now + timedelta(days=days),
            description=f"Activity {abs(days)} days {'ago' if days < 0 else 'in future'}",
            category=category,
            city=city,
            venue=venue,
            latitude=lat,
            longitude=lng,
            is_cancelled=False,
            attendees=attendees,
        ))

    await db.commit()
    logger.info(f"Seeded {len(SEED_USERS)} users and {len(SEED_ACTIVITIES)} activities")
    return True
