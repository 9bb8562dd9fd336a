"""Dynamic operation discovery and loading via entry points."""

from __future__ import annotations

import importlib.metadata
import logging
from typing import TYPE_CHECKING

from textpipe_core.errors import TextpipeError
from textpipe_core.operations.base import Operation
from textpipe_core.operations.registry import OperationRegistry, builtin_registry

if TYPE_CHECKING:
    from textpipe_core.config.models import TextpipeConfig

logger = logging.getLogger(__name__)


class PluginNotFoundError(TextpipeError):
    """Raised when a requested plugin cannot be found."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No operation plugin found with name '{name}'")


class OperationPluginLoader:
    """Discovers and loads third-party operations via entry points.

    A plugin entry point may resolve to an ``Operation`` subclass or to an
    already-built instance.
    """

    GROUP = "textpipe.operations"

    def __init__(self, config: TextpipeConfig) -> None:
        self._config = config

    def discover(self) -> list[str]:
        """Scan entry_points for registered operation plugins."""
        eps = importlib.metadata.entry_points(group=self.GROUP)
        return [ep.name for ep in eps]

    def load(self, name: str) -> Operation:
        eps = importlib.metadata.entry_points(group=self.GROUP)
        for ep in eps:
            if ep.name == name:
                return self._instantiate(name, ep.load())
        raise PluginNotFoundError(name)

    def load_all(self) -> list[Operation]:
        """Load plugins per config: the named ones, or every discovered one."""
        settings = self._config.operations
        if not settings.plugins_enabled:
            return []
        names = settings.plugins or self.discover()
        return [self.load(name) for name in names]

    @staticmethod
    def _instantiate(name: str, target: object) -> Operation:
        if isinstance(target, type) and issubclass(target, Operation):
            return target()
        if isinstance(target, Operation):
            return target
        raise TypeError(f"Plugin '{name}' does not provide an Operation (got {target!r})")


def default_registry(config: TextpipeConfig | None = None) -> OperationRegistry:
    """Built-in operations plus installed plugins, minus disabled kinds."""
    from textpipe_core.config.models import TextpipeConfig

    config = config or TextpipeConfig()
    registry = builtin_registry()

    for op in OperationPluginLoader(config).load_all():
        if op.kind in registry:
            logger.warning("Plugin operation %r shadows an existing kind; skipping", op.kind)
            continue
        registry.register(op)

    for kind in config.operations.disabled:
        if kind in registry:
            registry.unregister(kind)
        else:
            logger.warning("Cannot disable unknown operation kind %r", kind)

    return registry
