"""Pytest configuration and shared fixtures."""

import logging
import os
from unittest.mock import AsyncMock, MagicMock

os.environ.setdefault("DISCORD_TOKEN", "test-token")

import hikari  # noqa: E402
import pytest  # noqa: E402

from ticketbot.database.models import GuildSettings  # noqa: E402
from ticketbot.i18n import I18n  # noqa: E402

# Disable logging during tests
logging.disable(logging.CRITICAL)

GUILD_ID = 123456789
OWNER_ID = 987654321
USER_ID = 111111111
STAFF_ROLE_ID = 222222222
OTHER_ROLE_ID = 333333333


def make_role(role_id: int, permissions: hikari.Permissions) -> MagicMock:
    role = MagicMock(spec=hikari.Role)
    role.id = role_id
    role.permissions = permissions
    return role


@pytest.fixture
def guild_settings():
    """Settings row for the test guild."""
    return GuildSettings(
        id=GUILD_ID,
        command_prefix="!",
        locale="en-GB",
        error_colour="#E74C3C",
        success_colour="#2ECC71",
    )


@pytest.fixture
def mock_settings_store(guild_settings):
    store = AsyncMock()
    store.get = AsyncMock(return_value=guild_settings)
    store.create = AsyncMock(return_value=guild_settings)
    return store


@pytest.fixture
def mock_category_store():
    store = AsyncMock()
    store.staff_role_ids = AsyncMock(return_value={STAFF_ROLE_ID})
    store.list_categories = AsyncMock(return_value=[])
    return store


@pytest.fixture
def i18n():
    return I18n()


@pytest.fixture
def mock_rest():
    rest = MagicMock()
    rest.create_message = AsyncMock()
    rest.fetch_member = AsyncMock()
    rest.fetch_guild = AsyncMock()
    return rest


@pytest.fixture
def guild_roles():
    """Roles of the test guild keyed by id; ``@everyone`` shares the guild id."""
    return {
        GUILD_ID: make_role(GUILD_ID, hikari.Permissions.SEND_MESSAGES),
        STAFF_ROLE_ID: make_role(STAFF_ROLE_ID, hikari.Permissions.MANAGE_MESSAGES),
        OTHER_ROLE_ID: make_role(OTHER_ROLE_ID, hikari.Permissions.NONE),
    }


@pytest.fixture
def mock_guild(guild_roles):
    """Mock Discord guild."""
    guild = MagicMock(spec=hikari.Guild)
    guild.id = GUILD_ID
    guild.name = "Test Guild"
    guild.owner_id = OWNER_ID
    guild.get_role = MagicMock(side_effect=guild_roles.get)
    return guild


@pytest.fixture
def mock_user():
    """Mock Discord user."""
    user = MagicMock(spec=hikari.User)
    user.id = USER_ID
    user.username = "testuser"
    user.is_bot = False
    user.mention = f"<@{USER_ID}>"
    return user


@pytest.fixture
def mock_member(mock_user):
    """Mock Discord member."""
    member = MagicMock(spec=hikari.Member)
    member.id = mock_user.id
    member.username = mock_user.username
    member.is_bot = mock_user.is_bot
    member.user = mock_user
    member.role_ids = [OTHER_ROLE_ID]
    return member


@pytest.fixture
def mock_message_event(mock_user, mock_member, mock_guild):
    """Mock message create event."""
    event = MagicMock(spec=hikari.GuildMessageCreateEvent)
    event.author = mock_user
    event.member = mock_member
    event.guild_id = GUILD_ID
    event.channel_id = 444444444
    event.message_id = 555555555
    event.content = "!test command"
    event.get_guild = MagicMock(return_value=mock_guild)
    return event
