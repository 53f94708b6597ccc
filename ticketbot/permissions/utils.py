"""Permission helpers."""

import hikari


def calculate_member_permissions(member: hikari.Member, guild: hikari.Guild) -> hikari.Permissions:
    """
    Calculate the guild-level permissions of a member from their roles.

    Args:
        member: The guild member to calculate permissions for
        guild: The guild the member belongs to

    Returns:
        The calculated permissions, every flag set for administrators
    """
    # Start with @everyone permissions
    everyone_role = guild.get_role(guild.id)  # @everyone role has same ID as guild
    permissions = everyone_role.permissions if everyone_role else hikari.Permissions.NONE

    # Add permissions from all member roles
    for role_id in member.role_ids:
        role = guild.get_role(role_id)
        if role:
            permissions |= role.permissions

    if permissions & hikari.Permissions.ADMINISTRATOR:
        return ~hikari.Permissions.NONE  # All permissions set

    return permissions
