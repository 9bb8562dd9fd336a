from textpipe_core.plugins.loader import OperationPluginLoader, PluginNotFoundError, default_registry

__all__ = ["OperationPluginLoader", "PluginNotFoundError", "default_registry"]
