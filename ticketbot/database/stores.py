"""Data access for guild settings and ticket categories."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from config.settings import settings

from ..errors import GuildSettingsUnavailable
from .manager import DatabaseManager
from .models import Category, GuildSettings

logger = logging.getLogger(__name__)


class SettingsStore:
    """Per-guild command prefix, locale and colours."""

    def __init__(self, db: DatabaseManager) -> None:
        self.db = db

    async def get(self, guild_id: int) -> GuildSettings | None:
        try:
            async with self.db.session() as session:
                result = await session.execute(select(GuildSettings).where(GuildSettings.id == guild_id))
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise GuildSettingsUnavailable(guild_id, e) from e

    async def create(self, guild_id: int) -> GuildSettings:
        row = GuildSettings(
            id=guild_id,
            command_prefix=settings.bot_prefix,
            locale=settings.default_locale,
            error_colour=settings.error_colour,
            success_colour=settings.success_colour,
        )
        try:
            async with self.db.session() as session:
                session.add(row)
        except IntegrityError:
            # Created concurrently by another message from the same guild
            existing = await self.get(guild_id)
            if existing is None:
                raise GuildSettingsUnavailable(guild_id)
            return existing
        except SQLAlchemyError as e:
            raise GuildSettingsUnavailable(guild_id, e) from e

        logger.info(f"Created settings for guild {guild_id}")
        return row

    async def get_or_create(self, guild_id: int) -> GuildSettings:
        return await self.get(guild_id) or await self.create(guild_id)


class CategoryStore:
    """Ticket categories, read for the staff roles they declare."""

    def __init__(self, db: DatabaseManager) -> None:
        self.db = db

    async def list_categories(self, guild_id: int) -> list[Category]:
        async with self.db.session() as session:
            result = await session.execute(select(Category).where(Category.guild_id == guild_id))
            return list(result.scalars())

    async def staff_role_ids(self, guild_id: int) -> set[int]:
        """Union of the roles of every category in the guild."""
        role_ids: set[int] = set()
        for category in await self.list_categories(guild_id):
            role_ids.update(int(role_id) for role_id in category.roles or ())
        return role_ids

    async def add_category(self, category_id: int, guild_id: int, name: str, roles: list[int]) -> Category:
        category = Category(id=category_id, guild_id=guild_id, name=name, roles=[str(r) for r in roles])
        async with self.db.session() as session:
            session.add(category)
        logger.info(f"Added category {name} ({category_id}) to guild {guild_id}")
        return category
