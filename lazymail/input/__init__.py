"""Keyboard input: raw token decoding and key dispatch tables."""

from .key_registry import KeyComboBinding, KeyComboRegistry
from .reader import read_key

__all__ = ["KeyComboBinding", "KeyComboRegistry", "read_key"]
