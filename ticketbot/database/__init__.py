from .manager import DatabaseManager, db_manager
from .models import Base, Category, GuildSettings
from .stores import CategoryStore, SettingsStore

__all__ = [
    "DatabaseManager",
    "db_manager",
    "Base",
    "GuildSettings",
    "Category",
    "SettingsStore",
    "CategoryStore",
]
