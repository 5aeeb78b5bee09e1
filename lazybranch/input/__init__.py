"""Input-layer public API: raw key decoding and key-to-intent translation."""

from .key_registry import KeyComboBinding, KeyComboRegistry
from .keymap import DEFAULT_KEYS, KeyBindings, KeyTranslator, is_text_key
from .reader import ESC_SEQUENCE_TIMEOUT_MS, read_key

__all__ = [
    "DEFAULT_KEYS",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyBindings",
    "KeyComboBinding",
    "KeyComboRegistry",
    "KeyTranslator",
    "is_text_key",
    "read_key",
]
