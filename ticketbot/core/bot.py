import logging

import hikari

from config.settings import settings

from ..commands.builtin import BUILTIN_COMMANDS
from ..commands.registry import CommandRegistry
from ..database import CategoryStore, SettingsStore, db_manager
from ..i18n import I18n
from ..permissions import AccessController
from .dispatcher import CommandDispatcher, DispatchResult
from .plugin_loader import PluginLoader

logger = logging.getLogger(__name__)


class TicketBot:
    def __init__(self) -> None:
        intents = (
            hikari.Intents.GUILDS
            | hikari.Intents.GUILD_MESSAGES
            | hikari.Intents.GUILD_MEMBERS
            | hikari.Intents.MESSAGE_CONTENT
        )
        self.hikari_bot = hikari.GatewayBot(token=settings.discord_token, intents=intents)

        # Initialize systems
        self.db = db_manager
        self.i18n = I18n()
        self.settings_store = SettingsStore(self.db)
        self.categories = CategoryStore(self.db)
        self.registry = CommandRegistry(plugins=lambda: self.plugin_loader.get_plugins())
        self.plugin_loader = PluginLoader(self.registry)
        self.dispatcher = CommandDispatcher(
            registry=self.registry,
            settings_store=self.settings_store,
            access=AccessController(self.categories),
            i18n=self.i18n,
            rest=self.hikari_bot.rest,
        )

        # Bot state
        self.is_ready = False

        for directory in settings.plugin_directories:
            self.plugin_loader.add_plugin_directory(directory)

        self._setup_event_listeners()

    def _setup_event_listeners(self) -> None:
        @self.hikari_bot.listen(hikari.StartedEvent)
        async def on_started(event: hikari.StartedEvent) -> None:
            logger.info("Bot has started, initializing systems...")
            await self._initialize_systems()

        @self.hikari_bot.listen(hikari.StoppingEvent)
        async def on_stopping(event: hikari.StoppingEvent) -> None:
            logger.info("Bot is stopping...")
            await self.db.close()

        @self.hikari_bot.listen(hikari.GuildMessageCreateEvent)
        async def on_message_create(event: hikari.GuildMessageCreateEvent) -> None:
            # hikari runs every listener call in its own task
            await self.handle_message(event)

    async def handle_message(self, event: hikari.GuildMessageCreateEvent) -> DispatchResult:
        if not self.is_ready:
            return DispatchResult.IGNORED

        result = await self.dispatcher.handle_message(event)
        if result is not DispatchResult.IGNORED:
            logger.debug(f"Message {event.message_id} from {event.author.username}: {result.value}")
        return result

    async def _initialize_systems(self) -> None:
        await self.db.create_tables()
        logger.info("Database initialized")

        self.is_ready = True
        logger.info("All systems initialized successfully")

    def load_commands(self) -> None:
        """Register built-in commands, then the enabled plugins' commands."""
        self.registry.load(BUILTIN_COMMANDS)

        discovered = self.plugin_loader.discover_plugins()
        plugins_to_load = [p for p in settings.enabled_plugins if p in discovered]
        if plugins_to_load:
            logger.info(f"Loading plugins: {plugins_to_load}")
            self.plugin_loader.load_all_plugins(plugins_to_load)

        logger.info(f"{len(self.registry)} commands registered")

    def run(self) -> None:
        try:
            # Registration conflicts abort startup before connecting
            self.load_commands()

            logger.info("Starting bot...")
            self.hikari_bot.run()
        except KeyboardInterrupt:
            logger.info("Bot stopped by user")
        except Exception as e:
            logger.error(f"Bot crashed: {e}")
            raise
