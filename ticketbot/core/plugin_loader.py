import dataclasses
import importlib.util
import logging
import sys
from pathlib import Path
from typing import Any

from ..commands.descriptor import Command
from ..commands.registry import CommandRegistry
from ..errors import RegistrationError

logger = logging.getLogger(__name__)


class PluginMetadata:
    def __init__(
        self,
        name: str,
        version: str = "1.0.0",
        author: str = "Unknown",
        description: str = "",
        commands: list[str] | None = None,
    ) -> None:
        self.name = name
        self.version = version
        self.author = author
        self.description = description
        self.commands = commands or []


class PluginLoader:
    """Loads plugin packages that contribute external commands.

    A plugin is a directory with an ``__init__.py`` defining ``COMMANDS``, a
    list of factories taking the registry and returning a :class:`Command`,
    and optionally a ``PLUGIN_METADATA`` dict.
    """

    def __init__(self, registry: CommandRegistry) -> None:
        self.registry = registry
        self.plugins: dict[str, PluginMetadata] = {}
        self.plugin_directories: list[Path] = []

    def add_plugin_directory(self, directory: str) -> None:
        path = Path(directory)
        if path.exists() and path.is_dir():
            self.plugin_directories.append(path)
            logger.info(f"Added plugin directory: {path}")
        else:
            logger.warning(f"Plugin directory does not exist: {path}")

    def discover_plugins(self) -> list[str]:
        discovered = []

        for directory in self.plugin_directories:
            for plugin_path in sorted(directory.iterdir()):
                if plugin_path.is_dir() and not plugin_path.name.startswith("_"):
                    if (plugin_path / "__init__.py").exists():
                        discovered.append(plugin_path.name)

        logger.info(f"Discovered plugins: {discovered}")
        return discovered

    def _load_plugin_module(self, plugin_name: str) -> Any:
        for directory in self.plugin_directories:
            plugin_path = directory / plugin_name
            if plugin_path.exists():
                spec = importlib.util.spec_from_file_location(
                    f"plugins.{plugin_name}",
                    plugin_path / "__init__.py",
                    submodule_search_locations=[str(plugin_path)],
                )
                if spec and spec.loader:
                    module = importlib.util.module_from_spec(spec)
                    sys.modules[f"plugins.{plugin_name}"] = module
                    spec.loader.exec_module(module)
                    return module

        raise ImportError(f"Plugin {plugin_name} not found")

    def _extract_metadata(self, module: Any, plugin_name: str) -> PluginMetadata:
        meta_dict = getattr(module, "PLUGIN_METADATA", {})
        return PluginMetadata(
            name=meta_dict.get("name", plugin_name),
            version=meta_dict.get("version", "1.0.0"),
            author=meta_dict.get("author", "Unknown"),
            description=meta_dict.get("description", ""),
        )

    def _build_commands(self, module: Any, metadata: PluginMetadata) -> list[Command]:
        factories = getattr(module, "COMMANDS", None)
        if factories is None:
            raise ValueError(f"Plugin module {module.__name__} does not define COMMANDS")

        commands = []
        for factory in factories:
            command = factory(self.registry)
            if not isinstance(command, Command):
                raise TypeError(f"{factory!r} did not produce a Command")
            # Plugin commands are always external
            commands.append(dataclasses.replace(command, internal=False, plugin_name=metadata.name))
        return commands

    def load_plugin(self, plugin_name: str) -> bool:
        """Load one plugin and register its commands.

        Returns False if the plugin could not be imported or built. A
        registration conflict is raised to the caller.
        """
        if plugin_name in self.plugins:
            logger.info(f"Plugin {plugin_name} is already loaded")
            return True

        try:
            module = self._load_plugin_module(plugin_name)
            metadata = self._extract_metadata(module, plugin_name)
            commands = self._build_commands(module, metadata)
        except Exception as e:
            logger.error(f"Failed to load plugin {plugin_name}: {e}")
            return False

        # Recorded before registering so overrides can be attributed to it
        metadata.commands = [command.name for command in commands]
        self.plugins[plugin_name] = metadata

        try:
            self.registry.register_all(commands)
        except RegistrationError as e:
            logger.error(f"Plugin {plugin_name} could not register its commands: {e}")
            del self.plugins[plugin_name]
            raise

        logger.info(f"Successfully loaded plugin: {plugin_name} v{metadata.version}")
        return True

    def load_all_plugins(self, enabled_plugins: list[str]) -> None:
        for plugin_name in enabled_plugins:
            self.load_plugin(plugin_name)

    def get_plugins(self) -> list[PluginMetadata]:
        return list(self.plugins.values())

    def get_loaded_plugins(self) -> list[str]:
        return list(self.plugins.keys())

    def get_plugin_info(self, plugin_name: str) -> PluginMetadata | None:
        return self.plugins.get(plugin_name)
