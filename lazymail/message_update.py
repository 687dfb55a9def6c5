"""Status-line updates returned by pager and controller operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class UpdateKind(Enum):
    NO_CHANGE = "no_change"
    CLEAR = "clear"
    INFO = "info"
    WARNING = "warning"


@dataclass(frozen=True)
class MessageUpdate:
    """What to do with the message line after an input step."""

    kind: UpdateKind
    text: str = ""

    @classmethod
    def no_change(cls) -> MessageUpdate:
        return cls(UpdateKind.NO_CHANGE)

    @classmethod
    def clear(cls) -> MessageUpdate:
        return cls(UpdateKind.CLEAR)

    @classmethod
    def info(cls, text: str) -> MessageUpdate:
        return cls(UpdateKind.INFO, text)

    @classmethod
    def warning(cls, text: str) -> MessageUpdate:
        return cls(UpdateKind.WARNING, text)

    @property
    def is_warning(self) -> bool:
        return self.kind is UpdateKind.WARNING
