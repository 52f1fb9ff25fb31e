"""Selector keybindings manager."""

from __future__ import annotations

from typing import Literal

from giadd.tui.keys import Command, KeyDecoder, KeyId, key_sequences

SelectorAction = Literal[
    "moveUp",
    "moveDown",
    "toggleSelect",
    "confirm",
    "cancel",
    "forceQuit",
]

SelectorKeybindingsConfig = dict[SelectorAction, KeyId | list[KeyId]]

DEFAULT_SELECTOR_KEYBINDINGS: dict[SelectorAction, KeyId | list[KeyId]] = {
    "moveUp": ["k", "up"],
    "moveDown": ["j", "down"],
    "toggleSelect": "space",
    "confirm": "enter",
    "cancel": ["q", "escape"],
    "forceQuit": "ctrl+c",
}


class SelectorKeybindings:
    """Manages keybindings for the line selector."""

    def __init__(
        self, config: SelectorKeybindingsConfig | None = None
    ) -> None:
        self._action_to_keys: dict[SelectorAction, list[KeyId]] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: SelectorKeybindingsConfig) -> None:
        self._action_to_keys.clear()

        # Start with defaults
        for action, keys in DEFAULT_SELECTOR_KEYBINDINGS.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

        # Override with user config
        for action, keys in config.items():
            if action not in DEFAULT_SELECTOR_KEYBINDINGS:
                raise ValueError(f"Unknown selector action: {action!r}")
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

    def get_keys(self, action: SelectorAction) -> list[KeyId]:
        """Get keys bound to an action."""
        return self._action_to_keys.get(action, [])

    def sequences(self) -> dict[bytes, Command]:
        """Resolve every binding to its byte sequences.

        Raises ``ValueError`` when two actions claim the same sequence.
        """
        table: dict[bytes, Command] = {}
        for action, keys in self._action_to_keys.items():
            command = Command(action)
            for key in keys:
                for seq in key_sequences(key):
                    owner = table.get(seq)
                    if owner is not None and owner is not command:
                        raise ValueError(
                            f"Key {key!r} is bound to both "
                            f"{owner.value!r} and {command.value!r}"
                        )
                    table[seq] = command
        return table

    def decoder(self) -> KeyDecoder:
        return KeyDecoder(self.sequences())
