"""Layered YAML config loading."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import TextpipeConfig


def config_layers(cli_path: str | None = None) -> list[Path]:
    """Config files in increasing precedence: user-global, project-local, --config."""
    layers = [Path.home() / ".textpipe" / "config.yaml", Path("./textpipe.yaml")]
    if cli_path:
        explicit = Path(cli_path)
        if not explicit.is_file():
            raise ValueError(f"Config file not found: {explicit}")
        layers.append(explicit)
    return [p for p in layers if p.is_file()]


def load_config(cli_path: str | None = None) -> TextpipeConfig:
    """Merge every config layer over the defaults.

    Later layers win key by key; nested sections merge rather than replace,
    so a project file that only sets ``preview.debounce_ms`` keeps the
    user's ``preview.scheduler``. Lists are replaced whole.
    """
    merged: dict[str, Any] = {}
    source: Path | None = None
    for path in config_layers(cli_path):
        raw = _read_layer(path)
        if raw:
            merged = merge_layers(merged, raw)
            source = path

    try:
        return TextpipeConfig(**merged)
    except ValidationError as e:
        raise ValueError(f"Invalid config in {source}: {e}") from e


def merge_layers(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return ``base`` with ``override`` merged in, recursing into mappings."""
    result = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = merge_layers(result[key], value)
        else:
            result[key] = value
    return result


def _read_layer(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ValueError(f"Cannot read {path}: {e}") from e
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"Invalid config in {path}: top level must be a mapping")
    return raw


# Default YAML template for `textpipe config init`
DEFAULT_CONFIG_TEMPLATE = """\
# textpipe.yaml
# Settings here merge over ~/.textpipe/config.yaml; --config merges over both.

# Live preview
preview:
  debounce_ms: 150             # quiet period before recomputing
  scheduler: "thread"          # thread | asyncio | manual

# Operations
operations:
  plugins_enabled: true        # load operations from installed plugins
  # plugins: []                # only these plugin names (empty = all)
  # disabled: []               # kinds to hide, e.g. ["sort-lines"]

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
