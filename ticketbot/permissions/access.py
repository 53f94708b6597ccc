import logging

import hikari

from ..commands.descriptor import Command
from .utils import calculate_member_permissions
from ..database.stores import CategoryStore

logger = logging.getLogger(__name__)


class AccessController:
    """Permission and staff-role gates evaluated before a command runs."""

    def __init__(self, categories: CategoryStore) -> None:
        self.categories = categories

    def missing_permissions(self, command: Command, member: hikari.Member, guild: hikari.Guild) -> list[str]:
        """Return the declared permission tokens the member does not hold."""
        if not command.permissions:
            return []

        # Server owner always has all permissions
        if member.id == guild.owner_id:
            return []

        held = calculate_member_permissions(member, guild)
        if held & command.required_permissions == command.required_permissions:
            return []

        missing = [token for token in command.permissions if not held & getattr(hikari.Permissions, token)]
        logger.debug(f"{member.username} is missing {missing} for {command.name}")
        return missing

    async def is_staff(self, guild_id: int, member: hikari.Member) -> bool:
        """True if the member holds a role registered on any of the guild's categories."""
        staff_roles = await self.categories.staff_role_ids(guild_id)
        return bool(staff_roles.intersection(int(role_id) for role_id in member.role_ids))
