"""User ORM — the persisted side of an authenticated principal.

Invariants:
    - id equals the identity provider's subject (Principal.id)
    - Rows are created lazily the first time a principal creates or joins an activity

Design Decisions:
    - No credentials stored here: identity is an external collaborator
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from reactivities.core.domain_types import DISPLAY_NAME_MAX_LENGTH, USER_ID_MAX_LENGTH
from reactivities.db.base import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(USER_ID_MAX_LENGTH), primary_key=True)
    display_name: Mapped[str] = mapped_column(
        String(DISPLAY_NAME_MAX_LENGTH), nullable=False, default="",
    )
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
