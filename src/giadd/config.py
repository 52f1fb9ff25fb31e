"""Configuration for giadd. Stored at ~/.giadd/config.json."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from giadd.tui.keybindings import SelectorKeybindings, SelectorKeybindingsConfig

logger = logging.getLogger(__name__)


@dataclass
class Config:
    keybindings: SelectorKeybindingsConfig = field(default_factory=dict)
    max_visible: int | None = None

    def selector_keybindings(self) -> SelectorKeybindings:
        return SelectorKeybindings(self.keybindings)


def _keybindings_from_dict(data: object) -> SelectorKeybindingsConfig:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("keybindings must be a JSON object")
    for action, keys in data.items():
        key_list = keys if isinstance(keys, list) else [keys]
        if not all(isinstance(key, str) for key in key_list):
            raise ValueError(
                f"keybindings.{action} must be a key name or a list of key names, "
                f"got {keys!r}"
            )
    return dict(data)


def config_from_dict(data: dict) -> Config:
    """Deserialize a Config from a JSON-compatible dict."""
    if not isinstance(data, dict):
        raise ValueError("config must be a JSON object")
    max_visible = data.get("maxVisible")
    if max_visible is not None and (
        isinstance(max_visible, bool)
        or not isinstance(max_visible, int)
        or max_visible < 1
    ):
        raise ValueError(f"maxVisible must be a positive integer, got {max_visible!r}")
    return Config(
        keybindings=_keybindings_from_dict(data.get("keybindings")),
        max_visible=max_visible,
    )


def _get_config_dir() -> Path:
    return Path(os.environ.get("GIADD_CONFIG_DIR", Path.home() / ".giadd"))


def _get_config_path() -> Path:
    return _get_config_dir() / "config.json"


def load_config() -> Config:
    config_path = _get_config_path()
    if not config_path.exists():
        return Config()
    try:
        data = json.loads(config_path.read_text())
        return config_from_dict(data)
    except (OSError, ValueError) as e:
        logger.warning("Error reading config %s: %s", config_path, e)
        return Config()
