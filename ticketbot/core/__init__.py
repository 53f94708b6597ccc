from .bot import TicketBot
from .dispatcher import CommandDispatcher, DispatchResult, InvocationContext
from .plugin_loader import PluginLoader

__all__ = ["TicketBot", "CommandDispatcher", "DispatchResult", "InvocationContext", "PluginLoader"]
