from .loader import DEFAULT_CONFIG_TEMPLATE, load_config
from .models import (
    OperationsSettings,
    PreviewSettings,
    TextpipeConfig,
)

__all__ = [
    "DEFAULT_CONFIG_TEMPLATE",
    "OperationsSettings",
    "PreviewSettings",
    "TextpipeConfig",
    "load_config",
]
