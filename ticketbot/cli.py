import asyncio
import logging
from typing import Optional

import typer

from config.settings import settings
from ticketbot.commands.builtin import BUILTIN_COMMANDS
from ticketbot.commands.registry import CommandRegistry
from ticketbot.commands.usage import format_usage
from ticketbot.core import TicketBot

app = typer.Typer(
    name="ticketbot",
    help="Ticket bot command dispatcher",
    add_completion=False,
)


def setup_logging(level: str = "INFO") -> None:
    """Setup logging configuration."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


@app.command()
def run(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Set log level"),
) -> None:
    """Run the bot."""
    setup_logging(log_level or settings.log_level)

    bot = TicketBot()
    bot.run()


@app.command()
def commands(
    prefix: Optional[str] = typer.Option(None, "--prefix", help="Prefix to show in usage lines"),
) -> None:
    """List the built-in commands and their usage."""
    registry = CommandRegistry()
    registry.load(BUILTIN_COMMANDS)

    shown_prefix = prefix or settings.bot_prefix
    for command in sorted(registry, key=lambda c: c.name):
        usage, _ = format_usage(command, command.name, shown_prefix)
        typer.echo(f"{usage}  -  {command.description}")


@app.command()
def db(
    action: str = typer.Argument(help="Action: create, reset"),
) -> None:
    """Database management commands."""
    async def run_db_command():
        from ticketbot.database import db_manager

        if action == "create":
            await db_manager.create_tables()
            typer.echo("✅ Database tables created")
        elif action == "reset":
            confirm = typer.confirm("⚠️  This will delete all data. Continue?")
            if confirm:
                await db_manager.drop_tables()
                await db_manager.create_tables()
                typer.echo("✅ Database reset completed")
        else:
            typer.echo(f"Unknown action: {action}")
            raise typer.Exit(code=1)

    asyncio.run(run_db_command())


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
