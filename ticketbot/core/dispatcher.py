"""Message command dispatch."""

from __future__ import annotations

import asyncio
import enum
import functools
import logging
import re
from dataclasses import dataclass
from typing import Any

import hikari

from config.settings import settings

from ..commands.descriptor import Command
from ..commands.parsers import ArgumentParserFactory
from ..commands.registry import CommandRegistry
from ..commands.usage import (
    build_execution_error_embed,
    build_missing_permissions_embed,
    build_staff_only_embed,
    build_usage_embed,
)
from ..database.models import GuildSettings
from ..database.stores import SettingsStore
from ..i18n import I18n, Translator
from ..permissions.access import AccessController

logger = logging.getLogger(__name__)


class DispatchResult(enum.Enum):
    IGNORED = "ignored"
    USAGE_ERROR = "usage_error"
    PERMISSION_DENIED = "permission_denied"
    STAFF_ONLY_DENIED = "staff_only_denied"
    EXECUTED = "executed"
    EXECUTION_ERROR = "execution_error"


@functools.lru_cache(maxsize=256)
def _prefix_pattern(prefix: str) -> re.Pattern[str]:
    return re.compile(rf"{re.escape(prefix)}(\S+)", re.IGNORECASE)


def match_prefix(prefix: str, content: str) -> tuple[str, str] | None:
    """Split ``content`` into ``(command token, argument text)``.

    Returns ``None`` unless the message starts with ``prefix`` immediately
    followed by a token.
    """
    match = _prefix_pattern(prefix).match(content)
    if match is None:
        return None
    return match.group(1), content[match.end():].strip()


@dataclass(slots=True)
class InvocationContext:
    """State of one command invocation, handed to the command handler."""

    event: hikari.GuildMessageCreateEvent
    rest: hikari.api.RESTClient
    settings: GuildSettings
    translate: Translator
    command: Command
    invoked_as: str
    raw_args: str
    args: Any = None

    @property
    def author(self) -> hikari.User:
        return self.event.author

    @property
    def member(self) -> hikari.Member | None:
        return self.event.member

    @property
    def guild_id(self) -> hikari.Snowflake:
        return self.event.guild_id

    @property
    def channel_id(self) -> hikari.Snowflake:
        return self.event.channel_id

    @property
    def prefix(self) -> str:
        return self.settings.command_prefix

    async def respond(
        self,
        content: hikari.UndefinedOr[Any] = hikari.UNDEFINED,
        *,
        embed: hikari.UndefinedOr[hikari.Embed] = hikari.UNDEFINED,
    ) -> None:
        await self.rest.create_message(self.channel_id, content, embed=embed)


class CommandDispatcher:
    """Routes guild messages to registered commands.

    Each message goes through prefix matching, command lookup, argument
    parsing, the permission and staff gates and finally the handler. A
    failing handler is logged and answered with a generic error; it never
    escapes :meth:`handle_message`.
    """

    def __init__(
        self,
        registry: CommandRegistry,
        settings_store: SettingsStore,
        access: AccessController,
        i18n: I18n,
        rest: hikari.api.RESTClient,
        timeout: float | None = None,
    ) -> None:
        self.registry = registry
        self.settings_store = settings_store
        self.access = access
        self.i18n = i18n
        self.rest = rest
        self.timeout = timeout if timeout is not None else settings.command_timeout

    async def handle_message(self, event: hikari.GuildMessageCreateEvent) -> DispatchResult:
        # Ignore bot messages
        if event.author.is_bot or not event.content:
            return DispatchResult.IGNORED

        # Storage failures propagate to the caller
        guild_settings = await self.settings_store.get(event.guild_id)
        if guild_settings is None:
            guild_settings = await self.settings_store.create(event.guild_id)

        matched = match_prefix(guild_settings.command_prefix, event.content)
        if matched is None:
            return DispatchResult.IGNORED
        invoked_as, raw_args = matched

        command = self.registry.lookup(invoked_as)
        if command is None:
            return DispatchResult.IGNORED

        ctx = InvocationContext(
            event=event,
            rest=self.rest,
            settings=guild_settings,
            translate=self.i18n.resolve(guild_settings.locale),
            command=command,
            invoked_as=invoked_as,
            raw_args=raw_args,
        )

        parsed = ArgumentParserFactory.parse_arguments(command, raw_args)
        if not parsed.ok:
            embed = build_usage_embed(
                command, invoked_as, guild_settings.command_prefix, ctx.translate, guild_settings.error_colour
            )
            await self._send(ctx, embed)
            return DispatchResult.USAGE_ERROR
        ctx.args = parsed.args

        try:
            denied = await self._check_access(ctx)
        except Exception:
            logger.exception(f'An error occurred whilst checking access to the "{command.name}" command')
            await self._send(ctx, build_execution_error_embed(ctx.translate))
            return DispatchResult.EXECUTION_ERROR
        if denied is not None:
            return denied

        return await self._execute(ctx)

    async def _check_access(self, ctx: InvocationContext) -> DispatchResult | None:
        command = ctx.command
        colour = ctx.settings.error_colour

        if command.permissions:
            member = await self._resolve_member(ctx.event)
            guild = ctx.event.get_guild() or await self.rest.fetch_guild(ctx.guild_id)
            missing = self.access.missing_permissions(command, member, guild)
            if missing:
                await self._send(ctx, build_missing_permissions_embed(missing, ctx.translate, colour))
                return DispatchResult.PERMISSION_DENIED

        if command.staff_only:
            member = await self._resolve_member(ctx.event)
            if not await self.access.is_staff(ctx.guild_id, member):
                logger.debug(f"{ctx.author.username} is not staff, refusing {command.name}")
                await self._send(ctx, build_staff_only_embed(ctx.translate, colour))
                return DispatchResult.STAFF_ONLY_DENIED

        return None

    async def _execute(self, ctx: InvocationContext) -> DispatchResult:
        command = ctx.command
        logger.info(f'Executing "{command.name}" command (invoked by {ctx.author.username})')
        try:
            await asyncio.wait_for(command.execute(ctx, ctx.args), timeout=self.timeout or None)
        except Exception:
            logger.exception(f'An error occurred whilst executing the "{command.name}" command')
            await self._send(ctx, build_execution_error_embed(ctx.translate))
            return DispatchResult.EXECUTION_ERROR
        return DispatchResult.EXECUTED

    async def _resolve_member(self, event: hikari.GuildMessageCreateEvent) -> hikari.Member:
        if event.member is not None:
            return event.member
        return await self.rest.fetch_member(event.guild_id, event.author.id)

    async def _send(self, ctx: InvocationContext, embed: hikari.Embed) -> None:
        try:
            await ctx.respond(embed=embed)
        except hikari.HikariError as e:
            logger.warning(f"Could not respond in channel {ctx.channel_id}: {e}")
