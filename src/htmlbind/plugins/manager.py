"""Plugin discovery and loading.

Discovery: entry_points (pip-installed) in the ``htmlbind.plugins`` group.
Capabilities: extra leaf binders for types the built-ins do not cover.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

import pluggy

from htmlbind.plugins.hookspecs import PROJECT_NAME, HtmlBindHookSpec

if TYPE_CHECKING:
    from htmlbind.binding.resolver import BinderResolver

ENTRY_POINT_GROUP = "htmlbind.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and leaf binder registration."""

    def __init__(self, *, blocked: Iterable[str] = ()) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(HtmlBindHookSpec)
        for name in blocked:
            self._pm.set_blocked(name)
        self._loaded: bool = False

    def discover_and_load(self) -> list[str]:
        """Load plugins from the ``htmlbind.plugins`` entry-point group.

        Returns a list of loaded plugin names.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def apply_leaf_binders(self, resolver: BinderResolver) -> list[type]:
        """Register every plugin-provided leaf binder on *resolver*.

        Bad registrations are logged and skipped. Returns the target types
        that were registered.
        """
        from htmlbind.binding.leaves import LeafBinder

        registered: list[type] = []
        for plugin in self._pm.get_plugins():
            plugin_name = self._pm.get_name(plugin) or plugin.__class__.__name__
            hook = getattr(plugin, "register_leaf_binders", None)
            if hook is None:
                continue
            try:
                binder_map = hook()
            except Exception:
                logger.warning(
                    "Failed to collect leaf binders from plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            if binder_map is None:
                continue
            if not isinstance(binder_map, dict):
                logger.warning("Plugin %s returned non-dict leaf binder registrations", plugin_name)
                continue

            for target, binder in binder_map.items():
                if not isinstance(target, type) or not isinstance(binder, LeafBinder):
                    logger.warning(
                        "Skipping leaf binder registration %r from plugin %s",
                        target,
                        plugin_name,
                    )
                    continue
                try:
                    resolver.register_leaf(target, binder)
                except ValueError:
                    logger.warning(
                        "Skipping leaf binder for %r from plugin %s",
                        target,
                        plugin_name,
                        exc_info=True,
                    )
                    continue
                registered.append(target)
        return registered

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly. Hook dispatch
        against class objects leaves ``self`` unbound and fails at runtime.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)
